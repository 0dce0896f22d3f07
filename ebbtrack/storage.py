"""Reading and writing the TOML files kept in the configuration directory."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable, Mapping
from datetime import date
from pathlib import Path
from typing import Any, TypeVar

import tomli_w

from ebbtrack.model import Config, DayOffEntry, Frame, State

_T = TypeVar("_T")

CONFIG_FILE = "config.toml"
FRAMES_FILE = "frames.toml"
STATE_FILE = "state.toml"
HOLIDAYS_FILE = "holidays.toml"
SICK_DAYS_FILE = "sick_days.toml"
VACATIONS_FILE = "vacations.toml"


def default_config_dir() -> Path:
    """Directory holding the data files.

    ``EBB_CONFIG_DIR`` wins; otherwise ``$XDG_CONFIG_HOME/ebb`` or ``~/.config/ebb``.
    Variables and ``~`` in the paths are expanded.
    """
    override = os.environ.get("EBB_CONFIG_DIR")
    if override:
        return Path(os.path.expandvars(override)).expanduser()
    base = os.environ.get("XDG_CONFIG_HOME") or "~/.config"
    return Path(os.path.expandvars(base)).expanduser() / "ebb"


class Store:
    """The data files of one configuration directory."""

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory)

    def _path(self, name: str) -> Path:
        return self.directory / name

    def _read(self, name: str) -> dict[str, Any]:
        path = self._path(name)
        if not path.exists():
            return {}
        try:
            return tomllib.loads(path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Could not parse {path}: {exc}") from exc

    def _load(self, name: str, build: Callable[[dict[str, Any]], _T]) -> _T:
        data = self._read(name)
        try:
            return build(data)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ValueError(f"Invalid data in {self._path(name)}: {exc}") from exc

    def _write(self, name: str, data: Mapping[str, Any]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(name)
        temporary = path.with_name(f"{path.name}.tmp")
        temporary.write_text(tomli_w.dumps(dict(data)), encoding="utf-8")
        temporary.replace(path)

    def load_config(self) -> Config:
        return self._load(CONFIG_FILE, Config.from_dict)

    def save_config(self, config: Config) -> None:
        self._write(CONFIG_FILE, config.to_dict())

    def load_frames(self) -> list[Frame]:
        return self._load(
            FRAMES_FILE, lambda data: [Frame.from_dict(item) for item in data.get("frames", [])]
        )

    def save_frames(self, frames: list[Frame]) -> None:
        self._write(FRAMES_FILE, {"frames": [frame.to_dict() for frame in frames]})

    def load_state(self) -> State:
        return self._load(STATE_FILE, State.from_dict)

    def save_state(self, state: State) -> None:
        self._write(STATE_FILE, state.to_dict())

    def _load_day_offs(self, name: str) -> dict[date, DayOffEntry]:
        return self._load(
            name,
            lambda data: dict(
                sorted(
                    (date.fromisoformat(str(key)), DayOffEntry.from_dict(value))
                    for key, value in data.items()
                )
            ),
        )

    def _save_day_offs(self, name: str, entries: Mapping[date, DayOffEntry]) -> None:
        self._write(
            name, {day.isoformat(): entry.to_dict() for day, entry in sorted(entries.items())}
        )

    def load_holidays(self) -> dict[date, DayOffEntry]:
        return self._load_day_offs(HOLIDAYS_FILE)

    def save_holidays(self, entries: Mapping[date, DayOffEntry]) -> None:
        self._save_day_offs(HOLIDAYS_FILE, entries)

    def load_sick_days(self) -> dict[date, DayOffEntry]:
        return self._load_day_offs(SICK_DAYS_FILE)

    def save_sick_days(self, entries: Mapping[date, DayOffEntry]) -> None:
        self._save_day_offs(SICK_DAYS_FILE, entries)

    def load_vacations(self) -> dict[date, DayOffEntry]:
        return self._load_day_offs(VACATIONS_FILE)

    def save_vacations(self, entries: Mapping[date, DayOffEntry]) -> None:
        self._save_day_offs(VACATIONS_FILE, entries)