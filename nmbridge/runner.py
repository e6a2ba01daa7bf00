"""nmbridge nmcli process execution.

Every call spawns its own nmcli process. Output is consumed as it arrives
and the outcome of an invocation is stored in a SettleOnce cell, so
whichever stdout/stderr/exit event comes first wins and the rest are
ignored.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol, TypeVar

from .constants import DEFAULT_NMCLI_BINARY, MONITOR_STOP_SIGNAL, READ_CHUNK_SIZE
from .exceptions import InvocationTimeout, LaunchError, ToolError
from .parser import FlatRecord, parse_records

logger = logging.getLogger("nmbridge")

# Strong references to watcher tasks; the event loop only keeps weak ones.
_background_tasks: set[asyncio.Task] = set()

T = TypeVar("T")


class Sink(Protocol):
    """Binary writable accepted by start_monitor."""

    def write(self, data: bytes) -> Any: ...


class SettleOnce:
    """Single-assignment result cell; only the first settle attempt counts."""

    def __init__(self) -> None:
        self._future: asyncio.Future = asyncio.get_running_loop().create_future()

    @property
    def settled(self) -> bool:
        return self._future.done()

    def resolve(self, value: Any) -> bool:
        if self._future.done():
            return False
        self._future.set_result(value)
        return True

    def reject(self, error: BaseException) -> bool:
        if self._future.done():
            return False
        self._future.set_exception(error)
        return True

    async def wait(self) -> Any:
        return await self._future


def _decode(data: bytes) -> str:
    return data.decode("utf-8", "replace")


async def _spawn(
    args: Sequence[str],
    binary: str,
    *,
    stderr: int = asyncio.subprocess.PIPE,
) -> asyncio.subprocess.Process:
    """Start `binary args...` with stdout piped and stdin closed."""
    cmd = [binary, *(str(a) for a in args)]
    logger.debug("nmcli command: %s", shlex.join(cmd))
    try:
        return await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=stderr,
        )
    except FileNotFoundError as e:
        raise LaunchError(
            f"{binary} binary not found on PATH. Install NetworkManager (nmcli)."
        ) from e
    except OSError as e:
        raise LaunchError(f"Unable to start {binary}: {e}") from e


async def _pump(stream: asyncio.StreamReader, on_chunk: Callable[[bytes], Any]) -> None:
    """Feed every chunk read from stream to on_chunk until EOF."""
    while True:
        chunk = await stream.read(READ_CHUNK_SIZE)
        if not chunk:
            return
        on_chunk(chunk)


def _keep(task: asyncio.Task) -> asyncio.Task:
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return task


def _watch(
    proc: asyncio.subprocess.Process,
    cell: SettleOnce,
    *,
    on_stdout: Callable[[bytes], Any],
    on_stderr: Callable[[bytes], Any],
    on_close: Callable[[int], Any],
) -> asyncio.Task:
    """Dispatch stdout, stderr and close events of proc in the background.

    Close is only reported once both pipes reached EOF, so data always
    precedes it. A failure of the watcher itself settles the cell.
    """

    async def watch() -> None:
        await asyncio.gather(_pump(proc.stdout, on_stdout), _pump(proc.stderr, on_stderr))
        on_close(await proc.wait())

    def done(task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            cell.reject(task.exception())

    task = _keep(asyncio.create_task(watch()))
    task.add_done_callback(done)
    return task


def _kill(proc: asyncio.subprocess.Process) -> None:
    try:
        proc.kill()
    except ProcessLookupError:
        pass


async def _settled(
    cell: SettleOnce,
    proc: asyncio.subprocess.Process,
    timeout_s: float | None,
    binary: str,
) -> Any:
    if timeout_s is None:
        return await cell.wait()
    try:
        return await asyncio.wait_for(cell.wait(), timeout_s)
    except asyncio.TimeoutError:
        logger.debug("nmcli timeout after %.2fs, killing pid %s", timeout_s, proc.pid)
        _kill(proc)
        raise InvocationTimeout(f"{binary} did not finish within {timeout_s:g}s")


async def drain() -> None:
    """Wait until every nmcli process started on this loop has been reaped.

    run_line returns before its process exits; await this before the event
    loop is closed so pipes and child processes are released on their loop.
    Watcher failures were already delivered to their callers and are only
    logged here.
    """
    loop = asyncio.get_running_loop()
    pending = [
        t for t in _background_tasks if t.get_loop() is loop and t is not asyncio.current_task()
    ]
    if not pending:
        return
    logger.debug("waiting for %d nmcli process(es) to exit", len(pending))
    for result in await asyncio.gather(*pending, return_exceptions=True):
        if isinstance(result, BaseException):
            logger.debug("nmcli watcher ended with %r", result)


async def drained(aw: Awaitable[T]) -> T:
    """Await aw, then drain() whether it succeeded or not."""
    try:
        return await aw
    finally:
        await drain()


async def run_line(
    args: Sequence[str],
    *,
    binary: str = DEFAULT_NMCLI_BINARY,
    timeout_s: float | None = None,
) -> str | int:
    """Run nmcli and return its first line of output.

    Returns the first stdout chunk (trimmed), or the exit code when the
    process closes without printing anything. Nonzero codes are returned,
    not raised.

    Raises:
        LaunchError: nmcli could not be started.
        ToolError: nmcli wrote to stderr before anything else happened.
        InvocationTimeout: timeout_s elapsed first.
    """
    proc = await _spawn(args, binary)
    cell = SettleOnce()
    start_time = time.monotonic()

    def on_stdout(chunk: bytes) -> None:
        cell.resolve(_decode(chunk).strip())

    def on_stderr(chunk: bytes) -> None:
        text = _decode(chunk).strip()
        cell.reject(ToolError(text or f"{binary} wrote to stderr", stderr=text))

    def on_close(code: int) -> None:
        logger.debug("nmcli completed in %.2fs (rc=%d)", time.monotonic() - start_time, code)
        cell.resolve(code)

    _watch(proc, cell, on_stdout=on_stdout, on_stderr=on_stderr, on_close=on_close)
    return await _settled(cell, proc, timeout_s, binary)


async def run_output(
    args: Sequence[str],
    *,
    binary: str = DEFAULT_NMCLI_BINARY,
    timeout_s: float | None = None,
) -> str:
    """Run nmcli and return everything it printed on stdout.

    Raises:
        LaunchError: nmcli could not be started.
        ToolError: the first stderr chunk, or a nonzero exit code.
        InvocationTimeout: timeout_s elapsed first.
    """
    proc = await _spawn(args, binary)
    cell = SettleOnce()
    body: list[bytes] = []
    start_time = time.monotonic()

    def on_stderr(chunk: bytes) -> None:
        text = _decode(chunk)
        cell.reject(ToolError(text.strip() or f"{binary} wrote to stderr", stderr=text))

    def on_close(code: int) -> None:
        logger.debug("nmcli completed in %.2fs (rc=%d)", time.monotonic() - start_time, code)
        if code != 0:
            cell.reject(ToolError(f"{binary} exited with code {code}", exit_code=code))
            return
        cell.resolve(_decode(b"".join(body)))

    _watch(proc, cell, on_stdout=body.append, on_stderr=on_stderr, on_close=on_close)
    return await _settled(cell, proc, timeout_s, binary)


async def run_records(
    args: Sequence[str],
    *,
    binary: str = DEFAULT_NMCLI_BINARY,
    timeout_s: float | None = None,
) -> list[FlatRecord]:
    """Run nmcli in a multiline mode and parse its output into records.

    Raises whatever run_output raises, plus ParseError for malformed output.
    """
    text = await run_output(args, binary=binary, timeout_s=timeout_s)
    return parse_records(text)


class MonitorHandle:
    """Handle to a running `nmcli monitor` process."""

    def __init__(self, proc: asyncio.subprocess.Process, forwarder: asyncio.Task):
        self._proc = proc
        self._forwarder = forwarder

    @property
    def pid(self) -> int:
        return self._proc.pid

    def stop(self) -> None:
        """Hang up the monitor process."""
        try:
            self._proc.send_signal(MONITOR_STOP_SIGNAL)
        except ProcessLookupError:
            logger.debug("monitor pid %s already exited", self._proc.pid)

    __call__ = stop

    async def wait(self) -> int:
        """Wait for the monitor to exit and its output to be forwarded."""
        await self._forwarder
        return await self._proc.wait()


async def start_monitor(sink: Sink, *, binary: str = DEFAULT_NMCLI_BINARY) -> MonitorHandle:
    """Start `nmcli monitor` and copy its raw stdout into sink.

    The sink is flushed after each chunk when it has a flush() method and is
    never closed by this function.
    """
    proc = await _spawn(["monitor"], binary, stderr=asyncio.subprocess.DEVNULL)
    flush = getattr(sink, "flush", None)

    def forward(chunk: bytes) -> None:
        sink.write(chunk)
        if flush is not None:
            flush()

    forwarder = _keep(asyncio.create_task(_pump(proc.stdout, forward)))
    logger.debug("monitor started (pid %s)", proc.pid)
    return MonitorHandle(proc, forwarder)
