"""Type definitions for CLI command arguments."""

from __future__ import annotations

from dataclasses import dataclass

from .config import Settings


@dataclass
class OutputArgs:
    """Arguments shared by every command that prints nmcli data."""

    settings: Settings
    json: bool


@dataclass
class HostnameArgs(OutputArgs):
    """Arguments for hostname command."""

    name: str | None


@dataclass
class ConnectivityArgs(OutputArgs):
    """Arguments for connectivity command."""

    check: bool


@dataclass
class ProfileArgs(OutputArgs):
    """Arguments for connection up/down/delete/dns commands."""

    action: str
    profile: str
    dns: str | None = None


@dataclass
class ConnectionListArgs(OutputArgs):
    """Arguments for connection list command."""

    active: bool


@dataclass
class EthernetAddArgs(OutputArgs):
    """Arguments for connection add-ethernet command."""

    name: str
    ipv4: str
    gateway: str
    ifname: str


@dataclass
class GsmAddArgs(OutputArgs):
    """Arguments for connection add-gsm command."""

    name: str
    ifname: str
    apn: str | None
    username: str | None
    password: str | None
    pin: str | None


@dataclass
class DeviceArgs(OutputArgs):
    """Arguments for device show/connect/disconnect commands."""

    action: str
    device: str | None


@dataclass
class WifiListArgs(OutputArgs):
    """Arguments for wifi list command."""

    rescan: bool


@dataclass
class WifiConnectArgs(OutputArgs):
    """Arguments for wifi connect command."""

    ssid: str
    password: str
    hidden: bool


@dataclass
class WifiHotspotArgs(OutputArgs):
    """Arguments for wifi hotspot command."""

    ifname: str
    ssid: str
    password: str


@dataclass
class MonitorArgs:
    """Arguments for monitor command."""

    settings: Settings
