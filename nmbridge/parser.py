"""Parsing of nmcli multiline (`-m multiline`) output.

nmcli prints one flat block of ``KEY: value`` lines per object and puts no
delimiter between blocks. The first key of a block is always printed first,
so its next occurrence marks where the second block starts; every block is
assumed to have that same length and key order.
"""

from __future__ import annotations

from .exceptions import ParseError

FlatRecord = dict[str, str]


def parse_line(line: str) -> tuple[str, str]:
    """Split one line into (key, value) at the first colon.

    Leading spaces of the value are dropped. A blank line gives ("", "").
    Raises ValueError if a non-blank line has no colon.
    """
    if not line.strip():
        return "", ""
    key, sep, value = line.partition(":")
    if not sep:
        raise ValueError(f"no ':' separator in line {line!r}")
    return key, value.lstrip(" ")


def parse_lines(text: str) -> list[tuple[str, str]]:
    """Parse every line of text into a (key, value) pair, one pair per line."""
    pairs: list[tuple[str, str]] = []
    for line_no, line in enumerate(text.split("\n"), start=1):
        try:
            pairs.append(parse_line(line))
        except ValueError as e:
            raise ParseError(
                f"Malformed nmcli output at line {line_no}: {e}",
                line_no=line_no,
                line=line,
            ) from e
    return pairs


def record_period(pairs: list[tuple[str, str]]) -> int:
    """Return how many lines make up one record.

    This is the distance from the first line to the next line carrying the
    same key, or the whole sequence when the first key never repeats.
    """
    if not pairs:
        return 1
    first_key = pairs[0][0]
    period = 1
    while period < len(pairs) and pairs[period][0] != first_key:
        period += 1
    return period


def parse_records(text: str) -> list[FlatRecord]:
    """Convert a multiline nmcli dump into an ordered list of flat records.

    Example:
        >>> parse_records("DEVICE: eth0\\nTYPE: ethernet\\nDEVICE: wlan0\\nTYPE: wifi\\n")
        [{'DEVICE': 'eth0', 'TYPE': 'ethernet'}, {'DEVICE': 'wlan0', 'TYPE': 'wifi'}]
    """
    pairs = parse_lines(text)
    period = record_period(pairs)

    records: list[FlatRecord] = []
    for start in range(0, len(pairs), period):
        record: FlatRecord = {}
        for key, value in pairs[start : start + period]:
            if key:
                record[key] = value
        if record:
            records.append(record)
    return records
