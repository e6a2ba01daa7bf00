"""nmbridge command implementations."""

from __future__ import annotations

from .connection import (
    cmd_connection_add_ethernet,
    cmd_connection_add_gsm,
    cmd_connection_list,
    cmd_connection_profile,
)
from .device import cmd_device, cmd_device_status
from .general import cmd_connectivity, cmd_hostname, cmd_interfaces, cmd_networking
from .monitor import cmd_monitor
from .wifi import (
    cmd_wifi_connect,
    cmd_wifi_hotspot,
    cmd_wifi_list,
    cmd_wifi_password,
    cmd_wifi_radio,
)

__all__ = [
    "cmd_connection_add_ethernet",
    "cmd_connection_add_gsm",
    "cmd_connection_list",
    "cmd_connection_profile",
    "cmd_connectivity",
    "cmd_device",
    "cmd_device_status",
    "cmd_hostname",
    "cmd_interfaces",
    "cmd_monitor",
    "cmd_networking",
    "cmd_wifi_connect",
    "cmd_wifi_hotspot",
    "cmd_wifi_list",
    "cmd_wifi_password",
    "cmd_wifi_radio",
]
