"""Scan configuration and JSON config-file loading."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional


class ConfigError(ValueError):
    """Raised when a scan configuration is malformed."""


@dataclass(frozen=True)
class ScanConfig:
    """How a source is split into buffers and how line verdicts are reported."""

    reject_nul: bool = True
    buffer_size: Optional[int] = None
    cumulative: bool = True
    stop_on_failure: bool = False

    def __post_init__(self) -> None:
        if self.buffer_size is None:
            return
        if isinstance(self.buffer_size, bool) or not isinstance(self.buffer_size, int):
            raise ConfigError(f"buffer_size must be an integer or null, got {self.buffer_size!r}")
        if self.buffer_size < 2:
            raise ConfigError(f"buffer_size must be at least 2, got {self.buffer_size}")

    def with_overrides(self, **values: Any) -> "ScanConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in values.items() if value is not None}
        unknown = set(changes) - _KEYS
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(sorted(unknown))}")
        return replace(self, **changes)


_KEYS = {item.name for item in fields(ScanConfig)}
_BOOL_KEYS = {"reject_nul", "cumulative", "stop_on_failure"}


def load_config(path: Path) -> ScanConfig:
    with path.open("r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ConfigError(f"{path}: invalid JSON ({exc})") from exc
    if not isinstance(payload, Mapping):
        raise ConfigError(f"{path}: config must be a JSON object")
    return parse_config(payload)


def parse_config(payload: Mapping[str, Any]) -> ScanConfig:
    unknown = set(payload) - _KEYS
    if unknown:
        raise ConfigError(f"unknown config keys: {', '.join(sorted(unknown))}")

    values: Dict[str, Any] = {}
    for key, value in payload.items():
        if key in _BOOL_KEYS:
            if not isinstance(value, bool):
                raise ConfigError(f"{key} must be a boolean")
        elif value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise ConfigError(f"{key} must be an integer or null")
        values[key] = value
    return ScanConfig(**values)
