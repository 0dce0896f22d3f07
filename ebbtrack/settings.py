"""Reading, listing and changing configuration values by dotted key."""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from ebbtrack.model import WEEKDAYS, Config

_PER_YEAR_KEYS = ("vacation_days_per_year", "sick_days_per_year")
_PER_YEAR_PREFIXES = tuple(f"{key}." for key in _PER_YEAR_KEYS)
_INTEGER = re.compile(r"[+-]?\d+")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _value_to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _render_table(
    headers: Sequence[str],
    rows: Iterable[Sequence[str]],
    right_aligned: frozenset[int] = frozenset(),
) -> str:
    body = [list(row) for row in rows]
    grid = [list(headers), *body]
    widths = [max(map(len, column)) for column in zip(*grid)]

    def rule(left: str, middle: str, right: str) -> str:
        return left + middle.join("─" * (width + 2) for width in widths) + right

    def cells(row: Sequence[str]) -> str:
        return (
            "│"
            + "│".join(
                f" {cell:>{width}} " if index in right_aligned else f" {cell:<{width}} "
                for index, (cell, width) in enumerate(zip(row, widths))
            )
            + "│"
        )

    return "\n".join(
        [
            rule("┌", "┬", "┐"),
            cells(headers),
            rule("├", "┼", "┤"),
            *(cells(row) for row in body),
            rule("└", "┴", "┘"),
        ]
    )


@dataclass(frozen=True)
class ConfigChange:
    """A configuration value before and after it was set."""

    key: str
    old_value: Any
    new_value: Any

    def to_text(self) -> str:
        return (
            f"Key: {self.key}\n"
            f"Old value: {_value_to_string(self.old_value)}\n"
            f"New value: {_value_to_string(self.new_value)}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "old_value": self.old_value,
            "new_value": self.new_value,
        }


def _year_order(key: str) -> int:
    try:
        return int(key)
    except ValueError:
        return 0


def _flatten(prefix: str, value: Any, out: list[tuple[str, str]]) -> None:
    if prefix in _PER_YEAR_KEYS:
        if isinstance(value, dict):
            ordered = sorted(sorted(value.items()), key=lambda item: _year_order(item[0]))
            for year, days in ordered:
                _flatten(f"{prefix}.{year}", days, out)
        return

    if prefix == "working_hours":
        if isinstance(value, dict):
            for day in WEEKDAYS:
                if day in value:
                    _flatten(f"{prefix}.{day}", value[day], out)
        return

    if isinstance(value, dict):
        for key, item in sorted(value.items()):
            _flatten(f"{prefix}.{key}" if prefix else key, item, out)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, out)
    else:
        out.append((prefix, _value_to_string(value)))


def flatten_config(config: Config) -> list[tuple[str, str]]:
    """List every configuration value as a (dotted key, text) pair."""
    rows: list[tuple[str, str]] = []
    _flatten("", config.to_dict(), rows)
    return rows


def config_table(config: Config) -> str:
    """Render the whole configuration as a two-column table."""
    return _render_table(("Key", "Value"), flatten_config(config))


def get_config_value(config: Config, key: str) -> Any:
    """Return the value stored under a dotted key."""
    current: Any = config.to_dict()
    for part in key.split("."):
        if not isinstance(current, dict) or part not in current:
            raise LookupError(f"Key '{key}' not found")
        current = current[part]
    return current


def _parse_int(key: str, text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"Invalid integer for {key}: invalid digit found in string")
    number = int(text)
    if number > _I32_MAX:
        raise ValueError(f"Invalid integer for {key}: number too large to fit in target type")
    if number < _I32_MIN:
        raise ValueError(f"Invalid integer for {key}: number too small to fit in target type")
    return number


def set_config_value(config: Config, key: str, value: str) -> tuple[Config, ConfigChange]:
    """Set a dotted key to ``value``; return the updated config and the change.

    The given config is left untouched.
    """
    data: Any = config.to_dict()
    *path, last = key.split(".")

    parent = data
    for part in path:
        if not isinstance(parent, dict):
            raise ValueError("Expected object while traversing key path")
        if part not in parent:
            raise LookupError(f"Key part '{part}' not found")
        parent = parent[part]
    if not isinstance(parent, dict):
        raise ValueError("Expected object at key path parent")

    old_value = parent.get(last)
    parent[last] = _parse_int(key, value) if key.startswith(_PER_YEAR_PREFIXES) else value

    try:
        updated = Config.from_dict(data)
    except (AttributeError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid value for {key}: {exc}") from exc

    return updated, ConfigChange(key=key, old_value=old_value, new_value=value)