"""nmbridge constants."""

from __future__ import annotations

import signal

DEFAULT_NMCLI_BINARY = "nmcli"

# Bytes requested per read from the subprocess pipes
READ_CHUNK_SIZE = 65536

# nmcli numeric device states we translate; anything else is reported as unmanaged
DEVICE_STATES = {
    10: "unmanaged",
    30: "disconnected",
    100: "connected",
}
DEFAULT_DEVICE_STATE = "unmanaged"

# First column title of `nmcli device status`
DEVICE_STATUS_HEADER = "DEVICE"

MULTILINE_MODE = ["-m", "multiline"]
MONITOR_STOP_SIGNAL = signal.SIGHUP

# Environment variables read by config.load_settings
ENV_NMCLI = "NMBRIDGE_NMCLI"
ENV_TIMEOUT = "NMBRIDGE_TIMEOUT"
ENV_MOCK = "NMBRIDGE_MOCK"
ENV_MOCK_DELAY = "NMBRIDGE_MOCK_DELAY"

DEFAULT_MOCK_DELAY_S = 1.0
DEFAULT_ETHERNET_IFNAME = "enp0s3"
DEFAULT_ETHERNET_PREFIX = 24
DEFAULT_GSM_IFNAME = "*"

# Canned scan results served by the mock client
MOCK_WIFI_NETWORKS = [
    {"SSID": "Insecure Network", "SECURITY": "--", "SIGNAL": "42"},
    {"SSID": "Better Network", "SECURITY": "WEP", "SIGNAL": "69"},
    {"SSID": "Best-WiFi", "SECURITY": "WPA2", "SIGNAL": "84"},
]
