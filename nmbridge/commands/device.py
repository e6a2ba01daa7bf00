"""Device commands."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from ..client import make_client
from ..exceptions import UserError
from ..runner import drained
from ..utils import check_exit_code, emit

if TYPE_CHECKING:
    from ..cli_types import DeviceArgs, OutputArgs


def cmd_device_status(args: OutputArgs) -> None:
    client = make_client(args.settings)
    emit(asyncio.run(drained(client.device_status())), json_output=args.json)


def cmd_device(args: DeviceArgs) -> None:
    """Show IP details for one or all devices, or (dis)connect a device."""
    client = make_client(args.settings)
    if args.action == "show":
        if args.device:
            coro = client.device_ip_detail(args.device)
        else:
            coro = client.all_device_ip_details()
    elif not args.device:
        raise UserError(f"device {args.action} requires a device name")
    elif args.action == "connect":
        coro = client.device_connect(args.device)
    elif args.action == "disconnect":
        coro = client.device_disconnect(args.device)
    else:
        raise UserError(f"Unknown device action: {args.action}")
    result = asyncio.run(drained(coro))
    emit(result, json_output=args.json)
    check_exit_code(result)
