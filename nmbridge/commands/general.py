"""General, networking and host interface commands."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from ..client import make_client
from ..interfaces import list_ipv4_interfaces
from ..runner import drained
from ..utils import check_exit_code, emit

if TYPE_CHECKING:
    from ..cli_types import ConnectivityArgs, HostnameArgs, OutputArgs


def cmd_hostname(args: HostnameArgs) -> None:
    """Print the hostname, or set it when a name is given."""
    client = make_client(args.settings)
    if args.name:
        result = asyncio.run(drained(client.set_hostname(args.name)))
    else:
        result = asyncio.run(drained(client.get_hostname()))
    emit(result, json_output=args.json)
    check_exit_code(result)


def cmd_networking(args: OutputArgs, *, enable: bool) -> None:
    """Switch NetworkManager networking on or off."""
    client = make_client(args.settings)
    if enable:
        result = asyncio.run(drained(client.enable_networking()))
    else:
        result = asyncio.run(drained(client.disable_networking()))
    emit(result, json_output=args.json)
    check_exit_code(result)


def cmd_connectivity(args: ConnectivityArgs) -> None:
    client = make_client(args.settings)
    result = asyncio.run(drained(client.connectivity(recheck=args.check)))
    emit(result, json_output=args.json)
    check_exit_code(result)


def cmd_interfaces(args: OutputArgs) -> None:
    """Print non-loopback IPv4 addresses of the host."""
    emit(list_ipv4_interfaces(), json_output=args.json)
