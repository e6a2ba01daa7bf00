"""Host IPv4 interface enumeration."""

from __future__ import annotations

import ipaddress
import socket
from dataclasses import asdict, dataclass

import psutil


@dataclass
class IPv4Interface:
    """A non-loopback IPv4 address bound to a host interface."""

    name: str
    address: str
    netmask: str | None
    mac: str | None

    def to_dict(self) -> dict[str, str | None]:
        return asdict(self)


def list_ipv4_interfaces() -> list[IPv4Interface]:
    """Return every non-loopback IPv4 address of the host with its interface MAC."""
    items: list[IPv4Interface] = []
    for name, addrs in psutil.net_if_addrs().items():
        mac = next((a.address for a in addrs if a.family == psutil.AF_LINK), None)
        for addr in addrs:
            if addr.family != socket.AF_INET:
                continue
            if ipaddress.ip_address(addr.address).is_loopback:
                continue
            items.append(
                IPv4Interface(name=name, address=addr.address, netmask=addr.netmask, mac=mac)
            )
    return items
