"""Shared pytest fixtures for nmbridge tests."""

from __future__ import annotations

import asyncio
import signal
from collections.abc import Callable

import pytest


async def _settle(rounds: int = 10) -> None:
    """Let every ready task run a few steps."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class FakeProcess:
    """Stand-in for asyncio.subprocess.Process that replays a script.

    Each script item is ("stdout" | "stderr", bytes); the loop is given a few
    rounds between items so readers see them in order. Afterwards both pipes
    hit EOF and the process exits with returncode, unless hang is set, in
    which case it only exits when signalled or killed.
    """

    def __init__(self, script: list[tuple[str, bytes]], returncode: int = 0, hang: bool = False):
        self.stdout = asyncio.StreamReader()
        self.stderr = asyncio.StreamReader()
        self.pid = 4242
        self.returncode: int | None = None
        self.signals: list[int] = []
        self.killed = False
        self._exit = asyncio.get_running_loop().create_future()
        self._driver = asyncio.create_task(self._play(script, returncode, hang))

    async def _play(self, script, returncode, hang):
        await _settle()
        for stream, data in script:
            getattr(self, stream).feed_data(data)
            await _settle()
        if not hang:
            self._finish(returncode)

    def _finish(self, code: int) -> None:
        if self._exit.done():
            return
        self.stdout.feed_eof()
        self.stderr.feed_eof()
        self.returncode = code
        self._exit.set_result(code)

    async def wait(self) -> int:
        return await self._exit

    def send_signal(self, sig: int) -> None:
        if self._exit.done():
            raise ProcessLookupError()
        self.signals.append(sig)
        self._finish(-sig)

    def kill(self) -> None:
        self.killed = True
        self.send_signal(signal.SIGKILL)


@pytest.fixture
def settle_loop():
    """Coroutine function that yields to the event loop a number of times."""
    return _settle


@pytest.fixture
def fake_nmcli(mocker) -> Callable[..., list[FakeProcess]]:
    """Replace process creation in nmbridge.runner with FakeProcess.

    Call the fixture with the script for the next process; it returns the
    list that will hold the created FakeProcess objects. The patched
    create_subprocess_exec mock is available as `.spawn` on that list.
    """

    class Spawned(list):
        spawn = None

    def install(script=(), returncode: int = 0, hang: bool = False) -> Spawned:
        spawned = Spawned()

        def create(*cmd, **kwargs):
            proc = FakeProcess(list(script), returncode=returncode, hang=hang)
            spawned.append(proc)
            return proc

        spawned.spawn = mocker.patch(
            "nmbridge.runner.asyncio.create_subprocess_exec", side_effect=create
        )
        return spawned

    return install


@pytest.fixture
def device_show_output() -> str:
    """Two devices as printed by `nmcli device show`."""
    return (
        "GENERAL.DEVICE:                         eth0\n"
        "GENERAL.TYPE:                           ethernet\n"
        "GENERAL.HWADDR:                         52:54:00:12:34:56\n"
        "GENERAL.STATE:                          100 (connected)\n"
        "GENERAL.CONNECTION:                     Wired connection 1\n"
        "IP4.ADDRESS[1]:                         10.0.0.5/24\n"
        "IP4.GATEWAY:                            10.0.0.1\n"
        "IP6.ADDRESS[1]:                         fe80::5054:ff:fe12:3456/64\n"
        "IP6.GATEWAY:                            --\n"
        "GENERAL.DEVICE:                         lo\n"
        "GENERAL.TYPE:                           loopback\n"
        "GENERAL.HWADDR:                         00:00:00:00:00:00\n"
        "GENERAL.STATE:                          10 (unmanaged)\n"
        "GENERAL.CONNECTION:                     --\n"
        "IP4.ADDRESS[1]:                         127.0.0.1/8\n"
        "IP4.GATEWAY:                            --\n"
        "IP6.ADDRESS[1]:                         ::1/128\n"
        "IP6.GATEWAY:                            --\n"
    )


@pytest.fixture
def device_status_output() -> str:
    """Tabular output of `nmcli device status`."""
    return (
        "DEVICE  TYPE      STATE         CONNECTION         \n"
        "eth0    ethernet  connected     Wired connection 1 \n"
        "wlan0   wifi      disconnected  --                 \n"
        "lo      loopback  unmanaged     --                 \n"
    )


@pytest.fixture
def wifi_list_output() -> str:
    """Two networks from `nmcli -m multiline device wifi list`."""
    return (
        "IN-USE:                                 *\n"
        "BSSID:                                  AA:BB:CC:DD:EE:01\n"
        "SSID:                                   HomeNet\n"
        "SIGNAL:                                 80\n"
        "SECURITY:                               WPA2\n"
        "IN-USE:                                 \n"
        "BSSID:                                  AA:BB:CC:DD:EE:02\n"
        "SSID:                                   Cafe\n"
        "SIGNAL:                                 35\n"
        "SECURITY:                               --\n"
    )
