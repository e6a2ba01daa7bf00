"""Caller-facing shapes built from parsed nmcli output."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, field

from .constants import DEFAULT_DEVICE_STATE, DEVICE_STATES, DEVICE_STATUS_HEADER

_COLUMN_GAP_RE = re.compile(r"\s{2,}")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_PREFIX_LEN_RE = re.compile(r"/\d+$")


@dataclass
class DeviceStatus:
    """One row of `nmcli device status`."""

    device: str
    type: str
    state: str
    connection: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass
class DeviceIPDetail:
    """Addressing summary of one device from `nmcli device show`."""

    device: str | None
    type: str | None
    state: str
    connection: str | None
    mac: str | None
    ip_v4: str | None = None
    net_v4: str | None = None
    gateway_v4: str | None = None
    ip_v6: str | None = None
    net_v6: str | None = None
    gateway_v6: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return asdict(self)


@dataclass
class WifiNetwork:
    """A scan result from `nmcli device wifi list`, raw fields kept as-is."""

    fields: dict[str, str] = field(default_factory=dict)
    in_use: bool = False

    @property
    def ssid(self) -> str:
        return self.fields.get("SSID", "")

    def to_dict(self) -> dict[str, object]:
        return {**self.fields, "in_use": self.in_use}


def device_status_view(lines: Iterable[str]) -> list[DeviceStatus]:
    """Turn the tabular `device status` lines into rows, header excluded.

    Columns are separated by runs of two or more spaces; everything past the
    state column is the connection name, rejoined with single spaces.
    """
    rows: list[DeviceStatus] = []
    for line in lines:
        if not line.strip() or line.startswith(DEVICE_STATUS_HEADER):
            continue
        tokens = _COLUMN_GAP_RE.sub(" ", line).strip().split(" ")
        tokens += [""] * (3 - len(tokens))
        rows.append(
            DeviceStatus(
                device=tokens[0],
                type=tokens[1],
                state=tokens[2],
                connection=" ".join(tokens[3:]),
            )
        )
    return rows


def translate_state(raw: str | None) -> str:
    """Map an nmcli GENERAL.STATE value such as "100 (connected)" to a label."""
    match = _LEADING_INT_RE.match(raw or "")
    code = int(match.group(1)) if match else 0
    return DEVICE_STATES.get(code, DEFAULT_DEVICE_STATE)


def strip_prefix_length(address: str | None) -> str | None:
    """Drop a trailing "/NN" prefix length: "10.0.0.5/24" -> "10.0.0.5"."""
    if address is None:
        return None
    return _PREFIX_LEN_RE.sub("", address)


def device_ip_detail(record: Mapping[str, str]) -> DeviceIPDetail:
    """Build a DeviceIPDetail from one `device show` record.

    Missing fields come out as None; nothing is validated.
    """
    net_v4 = record.get("IP4.ADDRESS[1]")
    net_v6 = record.get("IP6.ADDRESS[1]")
    return DeviceIPDetail(
        device=record.get("GENERAL.DEVICE"),
        type=record.get("GENERAL.TYPE"),
        state=translate_state(record.get("GENERAL.STATE")),
        connection=record.get("GENERAL.CONNECTION"),
        mac=record.get("GENERAL.HWADDR"),
        ip_v4=strip_prefix_length(net_v4),
        net_v4=net_v4,
        gateway_v4=record.get("IP4.GATEWAY"),
        ip_v6=strip_prefix_length(net_v6),
        net_v6=net_v6,
        gateway_v6=record.get("IP6.GATEWAY"),
    )


def device_ip_details(records: Iterable[Mapping[str, str]]) -> list[DeviceIPDetail]:
    return [device_ip_detail(r) for r in records]


def wifi_list_view(records: Iterable[Mapping[str, str]]) -> list[WifiNetwork]:
    return [WifiNetwork(fields=dict(r), in_use=r.get("IN-USE") == "*") for r in records]
