"""nmbridge high-level nmcli operations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from .config import Settings
from .constants import (
    DEFAULT_ETHERNET_IFNAME,
    DEFAULT_ETHERNET_PREFIX,
    DEFAULT_GSM_IFNAME,
    MOCK_WIFI_NETWORKS,
    MULTILINE_MODE,
)
from .exceptions import UserError
from .parser import FlatRecord
from .runner import MonitorHandle, Sink, run_line, run_output, run_records, start_monitor
from .views import (
    DeviceIPDetail,
    DeviceStatus,
    WifiNetwork,
    device_ip_detail,
    device_ip_details,
    device_status_view,
    wifi_list_view,
)

logger = logging.getLogger("nmbridge")


class NmCli:
    """Typed access to nmcli subcommands.

    Methods that expect a single answer return the first output line, or
    the exit code when nmcli printed nothing.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()

    async def _line(self, args: Sequence[str]) -> str | int:
        return await run_line(
            args, binary=self.settings.binary, timeout_s=self.settings.timeout_s
        )

    async def _records(self, args: Sequence[str]) -> list[FlatRecord]:
        return await run_records(
            args, binary=self.settings.binary, timeout_s=self.settings.timeout_s
        )

    # general

    async def get_hostname(self) -> str | int:
        return await self._line(["general", "hostname"])

    async def set_hostname(self, name: str) -> str | int:
        return await self._line(["general", "hostname", str(name)])

    # networking

    async def enable_networking(self) -> str | int:
        return await self._line(["networking", "on"])

    async def disable_networking(self) -> str | int:
        return await self._line(["networking", "off"])

    async def connectivity(self, recheck: bool = False) -> str | int:
        """Return the connectivity state; recheck asks NetworkManager to probe again."""
        args = ["networking", "connectivity"]
        if recheck:
            args.append("check")
        return await self._line(args)

    # connection profiles

    async def connection_up(self, profile: str) -> str | int:
        return await self._line(["connection", "up", str(profile)])

    async def connection_down(self, profile: str) -> str | int:
        return await self._line(["connection", "down", str(profile)])

    async def connection_delete(self, profile: str) -> str | int:
        return await self._line(["connection", "delete", str(profile)])

    async def connection_profiles(self, active: bool = False) -> list[FlatRecord]:
        """List connection profiles, active ones first."""
        args = [*MULTILINE_MODE, "connection", "show"]
        if active:
            args.append("--active")
        args += ["--order", "active:name"]
        return await self._records(args)

    async def change_dns(self, profile: str, dns: str) -> str | int:
        return await self._line(["connection", "modify", str(profile), "ipv4.dns", str(dns)])

    async def add_ethernet_connection(
        self,
        name: str,
        ipv4: str,
        gateway: str,
        ifname: str = DEFAULT_ETHERNET_IFNAME,
    ) -> str | int:
        """Create a manually addressed ethernet profile (/24 network)."""
        return await self._line(
            [
                "connection",
                "add",
                "type",
                "ethernet",
                "con-name",
                str(name),
                "ifname",
                str(ifname),
                "ipv4.method",
                "manual",
                "ipv4.addresses",
                f"{ipv4}/{DEFAULT_ETHERNET_PREFIX}",
                "gw4",
                str(gateway),
            ]
        )

    async def add_gsm_connection(
        self,
        name: str,
        ifname: str = DEFAULT_GSM_IFNAME,
        *,
        apn: str | None = None,
        username: str | None = None,
        password: str | None = None,
        pin: str | None = None,
    ) -> str | int:
        """Create a GSM profile; empty optional settings are left out."""
        args = ["connection", "add", "type", "gsm", "con-name", str(name), "ifname", str(ifname)]
        optional = (("apn", apn), ("username", username), ("password", password), ("pin", pin))
        for key, value in optional:
            if value:
                args += [key, str(value)]
        return await self._line(args)

    # devices

    async def device_connect(self, device: str) -> str | int:
        return await self._line(["device", "connect", str(device)])

    async def device_disconnect(self, device: str) -> str | int:
        return await self._line(["device", "disconnect", str(device)])

    async def device_status(self) -> list[DeviceStatus]:
        text = await run_output(
            ["device", "status"],
            binary=self.settings.binary,
            timeout_s=self.settings.timeout_s,
        )
        return device_status_view(text.splitlines())

    async def device_ip_detail(self, device: str) -> DeviceIPDetail | None:
        """Return addressing details for one device, or None if nmcli printed nothing."""
        records = await self._records(["device", "show", str(device)])
        return device_ip_detail(records[0]) if records else None

    async def all_device_ip_details(self) -> list[DeviceIPDetail]:
        return device_ip_details(await self._records(["device", "show"]))

    # wifi

    async def wifi_enable(self) -> str | int:
        return await self._line(["radio", "wifi", "on"])

    async def wifi_disable(self) -> str | int:
        return await self._line(["radio", "wifi", "off"])

    async def wifi_status(self) -> str | int:
        return await self._line(["radio", "wifi"])

    async def wifi_hotspot(self, ifname: str, ssid: str, password: str) -> list[FlatRecord]:
        return await self._records(
            [
                "device",
                "wifi",
                "hotspot",
                "ifname",
                str(ifname),
                "ssid",
                str(ssid),
                "password",
                str(password),
            ]
        )

    async def wifi_credentials(self, ifname: str) -> FlatRecord | None:
        """Return the SSID/security/password record of the interface's active network."""
        if not ifname:
            raise UserError("ifname required")
        records = await self._records(["device", "wifi", "show-password", "ifname", str(ifname)])
        return records[0] if records else None

    async def wifi_list(self, rescan: bool = False) -> list[WifiNetwork]:
        records = await self._records(
            [*MULTILINE_MODE, "device", "wifi", "list", "--rescan", "yes" if rescan else "no"]
        )
        return wifi_list_view(records)

    async def wifi_connect(self, ssid: str, password: str, hidden: bool = False) -> str | int:
        args = ["device", "wifi", "connect", str(ssid), "password", str(password)]
        if hidden:
            args += ["hidden", "yes"]
        return await self._line(args)

    # events

    async def monitor(self, sink: Sink) -> MonitorHandle:
        return await start_monitor(sink, binary=self.settings.binary)


class MockNmCli(NmCli):
    """NmCli that serves canned Wi-Fi scan results for development machines."""

    async def wifi_list(self, rescan: bool = False) -> list[WifiNetwork]:
        logger.debug("mock wifi list (rescan=%s)", rescan)
        if self.settings.mock_delay_s:
            await asyncio.sleep(self.settings.mock_delay_s)
        return wifi_list_view(MOCK_WIFI_NETWORKS)


def make_client(settings: Settings) -> NmCli:
    """Pick the nmcli client implementation for these settings."""
    if settings.mock:
        return MockNmCli(settings)
    return NmCli(settings)
