"""nmbridge runtime settings."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

from .constants import (
    DEFAULT_MOCK_DELAY_S,
    DEFAULT_NMCLI_BINARY,
    ENV_MOCK,
    ENV_MOCK_DELAY,
    ENV_NMCLI,
    ENV_TIMEOUT,
)
from .exceptions import UserError

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Settings chosen once at startup."""

    binary: str = DEFAULT_NMCLI_BINARY
    timeout_s: float | None = None
    mock: bool = False
    mock_delay_s: float = DEFAULT_MOCK_DELAY_S

    def with_overrides(self, **changes) -> Settings:
        """Return a copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _parse_seconds(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise UserError(f"{name} must be a number of seconds, got {raw!r}")
    if value < 0:
        raise UserError(f"{name} must not be negative, got {raw!r}")
    return value


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Returns:
        Settings with unset variables left at their defaults
    """
    if env is None:
        env = os.environ

    timeout_raw = env.get(ENV_TIMEOUT, "").strip()
    delay_raw = env.get(ENV_MOCK_DELAY, "").strip()
    return Settings(
        binary=env.get(ENV_NMCLI, "").strip() or DEFAULT_NMCLI_BINARY,
        timeout_s=_parse_seconds(ENV_TIMEOUT, timeout_raw) if timeout_raw else None,
        mock=env.get(ENV_MOCK, "").strip().lower() in _TRUTHY,
        mock_delay_s=(
            _parse_seconds(ENV_MOCK_DELAY, delay_raw) if delay_raw else DEFAULT_MOCK_DELAY_S
        ),
    )
