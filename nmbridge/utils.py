"""nmbridge utility functions."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable, Mapping
from typing import Any

from .exceptions import CommandFailureError


def to_jsonable(value: Any) -> Any:
    """Convert views (anything with to_dict) and containers to JSON-ready data."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def format_record(record: Mapping[str, Any]) -> str:
    """Format a mapping as aligned `key: value` lines; None prints as '-'."""
    if not record:
        return ""
    width = max(len(str(k)) for k in record)
    return "\n".join(
        f"{str(k) + ':':<{width + 1}} {'-' if v is None else v}" for k, v in record.items()
    )


def format_records(records: Iterable[Mapping[str, Any]]) -> str:
    """Format several records separated by blank lines."""
    return "\n\n".join(format_record(r) for r in records)


def emit(result: Any, *, json_output: bool) -> None:
    """Print a command result as JSON or as human-readable text."""
    data = to_jsonable(result)
    if json_output:
        print(json.dumps(data, indent=2, sort_keys=True))
    elif data is None:
        print("(no data)")
    elif isinstance(data, Mapping):
        print(format_record(data))
    elif isinstance(data, list) and all(isinstance(d, Mapping) for d in data):
        if data:
            print(format_records(data))
    else:
        print(data)


def check_exit_code(result: Any) -> None:
    """Fail the command when nmcli exited nonzero without printing anything.

    Single answer calls return the exit code in that case; it becomes the
    exit status of the CLI (1 for codes that are not positive).
    """
    if isinstance(result, bool) or not isinstance(result, int) or result == 0:
        return
    print(f"ERROR: nmcli exited with code {result}", file=sys.stderr)
    raise CommandFailureError(rc=result if result > 0 else 1)
