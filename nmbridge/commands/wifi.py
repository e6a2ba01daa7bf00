"""Wi-Fi radio, scan, connect and hotspot commands."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from ..client import make_client
from ..runner import drained
from ..utils import check_exit_code, emit

if TYPE_CHECKING:
    from ..cli_types import OutputArgs, WifiConnectArgs, WifiHotspotArgs, WifiListArgs


def cmd_wifi_list(args: WifiListArgs) -> None:
    client = make_client(args.settings)
    emit(asyncio.run(drained(client.wifi_list(rescan=args.rescan))), json_output=args.json)


def cmd_wifi_radio(args: OutputArgs, *, state: str | None) -> None:
    """Turn the Wi-Fi radio on/off, or print its state when state is None."""
    client = make_client(args.settings)
    if state == "on":
        coro = client.wifi_enable()
    elif state == "off":
        coro = client.wifi_disable()
    else:
        coro = client.wifi_status()
    result = asyncio.run(drained(coro))
    emit(result, json_output=args.json)
    check_exit_code(result)


def cmd_wifi_connect(args: WifiConnectArgs) -> None:
    client = make_client(args.settings)
    result = asyncio.run(
        drained(client.wifi_connect(args.ssid, args.password, hidden=args.hidden))
    )
    emit(result, json_output=args.json)
    check_exit_code(result)


def cmd_wifi_hotspot(args: WifiHotspotArgs) -> None:
    client = make_client(args.settings)
    result = asyncio.run(drained(client.wifi_hotspot(args.ifname, args.ssid, args.password)))
    emit(result, json_output=args.json)


def cmd_wifi_password(args: OutputArgs, ifname: str) -> None:
    client = make_client(args.settings)
    emit(asyncio.run(drained(client.wifi_credentials(ifname))), json_output=args.json)
