"""
nmbridge - NetworkManager operations as typed, awaitable Python calls.

Design goals:
- One nmcli process per call, one outcome per process.
- Multiline nmcli dumps come back as ordered lists of flat records.
- Nothing is retried, cached or validated; nmcli is the authority.
"""

from __future__ import annotations

from .cli import main
from .client import MockNmCli, NmCli, make_client
from .config import Settings, load_settings
from .exceptions import LaunchError, NmBridgeError, ParseError, ToolError, UserError
from .parser import parse_records
from .runner import drain, drained, run_line, run_output, run_records, start_monitor

__all__ = [
    "LaunchError",
    "MockNmCli",
    "NmBridgeError",
    "NmCli",
    "ParseError",
    "Settings",
    "ToolError",
    "UserError",
    "drain",
    "drained",
    "load_settings",
    "main",
    "make_client",
    "parse_records",
    "run_line",
    "run_output",
    "run_records",
    "start_monitor",
]
