"""Live NetworkManager event stream."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING

from ..client import NmCli, make_client
from ..runner import drained

if TYPE_CHECKING:
    from ..cli_types import MonitorArgs
    from ..runner import Sink

logger = logging.getLogger("nmbridge")


async def follow_monitor(client: NmCli, sink: Sink) -> int:
    """Stream monitor events into sink until nmcli exits or we are cancelled."""
    handle = await client.monitor(sink)
    try:
        return await handle.wait()
    finally:
        handle.stop()


def cmd_monitor(args: MonitorArgs) -> None:
    """Copy `nmcli monitor` output to stdout until interrupted."""
    client = make_client(args.settings)
    rc = asyncio.run(drained(follow_monitor(client, sys.stdout.buffer)))
    logger.debug("monitor exited (rc=%s)", rc)
