"""Connection profile commands."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..client import make_client
from ..exceptions import UserError
from ..runner import drained
from ..utils import check_exit_code, emit

if TYPE_CHECKING:
    from ..cli_types import ConnectionListArgs, EthernetAddArgs, GsmAddArgs, ProfileArgs

logger = logging.getLogger("nmbridge")


def cmd_connection_list(args: ConnectionListArgs) -> None:
    client = make_client(args.settings)
    result = asyncio.run(drained(client.connection_profiles(active=args.active)))
    emit(result, json_output=args.json)


def cmd_connection_profile(args: ProfileArgs) -> None:
    """Bring a profile up or down, delete it, or change its IPv4 DNS."""
    client = make_client(args.settings)
    logger.debug("connection %s %s", args.action, args.profile)
    if args.action == "up":
        coro = client.connection_up(args.profile)
    elif args.action == "down":
        coro = client.connection_down(args.profile)
    elif args.action == "delete":
        coro = client.connection_delete(args.profile)
    elif args.action == "dns":
        if not args.dns:
            raise UserError("DNS server list required")
        coro = client.change_dns(args.profile, args.dns)
    else:
        raise UserError(f"Unknown connection action: {args.action}")
    result = asyncio.run(drained(coro))
    emit(result, json_output=args.json)
    check_exit_code(result)


def cmd_connection_add_ethernet(args: EthernetAddArgs) -> None:
    client = make_client(args.settings)
    result = asyncio.run(
        drained(
            client.add_ethernet_connection(
                args.name, args.ipv4, args.gateway, ifname=args.ifname
            )
        )
    )
    emit(result, json_output=args.json)
    check_exit_code(result)


def cmd_connection_add_gsm(args: GsmAddArgs) -> None:
    client = make_client(args.settings)
    coro = client.add_gsm_connection(
        args.name,
        args.ifname,
        apn=args.apn,
        username=args.username,
        password=args.password,
        pin=args.pin,
    )
    result = asyncio.run(drained(coro))
    emit(result, json_output=args.json)
    check_exit_code(result)
