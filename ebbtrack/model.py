"""Core data types: working hours, configuration, frames and days off."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import StrEnum
from typing import Any

_NANOS_PER_SECOND = 1_000_000_000

_UNITS_NS: dict[str, int] = {}
for _names, _nanos in (
    (("nanos", "nsec", "ns"), 1),
    (("usec", "us"), 1_000),
    (("millis", "msec", "ms"), 1_000_000),
    (("seconds", "second", "secs", "sec", "s"), _NANOS_PER_SECOND),
    (("minutes", "minute", "mins", "min", "m"), 60 * _NANOS_PER_SECOND),
    (("hours", "hour", "hrs", "hr", "h"), 3_600 * _NANOS_PER_SECOND),
    (("days", "day", "d"), 86_400 * _NANOS_PER_SECOND),
    (("weeks", "week", "wks", "wk", "w"), 604_800 * _NANOS_PER_SECOND),
    (("months", "month", "M"), 2_630_016 * _NANOS_PER_SECOND),
    (("years", "year", "yrs", "yr", "y"), 31_557_600 * _NANOS_PER_SECOND),
):
    for _name in _names:
        _UNITS_NS[_name] = _nanos

_DURATION_PART = re.compile(r"\s*(\d+)\s*([A-Za-z]+)\s*")

_SECONDS_PER_YEAR = 31_557_600
_SECONDS_PER_MONTH = 2_630_016

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def parse_duration(text: str) -> timedelta:
    """Parse a human-readable duration such as ``"8h"`` or ``"1h 30m"``."""
    stripped = text.strip()
    if not stripped:
        raise ValueError("empty duration")
    total_ns = 0
    pos = 0
    while pos < len(stripped):
        match = _DURATION_PART.match(stripped, pos)
        if match is None:
            raise ValueError(f"invalid duration: {text!r}")
        number, unit = match.groups()
        try:
            unit_ns = _UNITS_NS[unit]
        except KeyError:
            raise ValueError(f"unknown time unit {unit!r} in {text!r}") from None
        total_ns += int(number) * unit_ns
        pos = match.end()
    return timedelta(microseconds=total_ns // 1_000)


def format_duration_value(seconds: timedelta | int | float) -> str:
    """Render a non-negative duration in the same notation ``parse_duration`` reads."""
    if isinstance(seconds, timedelta):
        total_us = seconds // timedelta(microseconds=1)
    else:
        total_us = round(seconds * 1_000_000)
    if total_us < 0:
        raise ValueError("duration must not be negative")
    if total_us == 0:
        return "0s"

    secs, micros = divmod(total_us, 1_000_000)
    years, rest = divmod(secs, _SECONDS_PER_YEAR)
    months, rest = divmod(rest, _SECONDS_PER_MONTH)
    days, rest = divmod(rest, 86_400)
    hours, rest = divmod(rest, 3_600)
    minutes, secs_left = divmod(rest, 60)
    millis, micros_left = divmod(micros, 1_000)

    parts: list[str] = []
    for amount, singular in ((years, "year"), (months, "month"), (days, "day")):
        if amount:
            parts.append(f"{amount}{singular}{'' if amount == 1 else 's'}")
    for amount, suffix in (
        (hours, "h"),
        (minutes, "m"),
        (secs_left, "s"),
        (millis, "ms"),
        (micros_left, "us"),
    ):
        if amount:
            parts.append(f"{amount}{suffix}")
    return " ".join(parts)


class DayPortion(StrEnum):
    """How much of a day a day off covers."""

    FULL = "full"
    HALF = "half"

    @property
    def rank(self) -> int:
        return 2 if self is DayPortion.FULL else 1


class Period(StrEnum):
    """A calendar period ending now."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def _default_hours() -> timedelta:
    return timedelta(hours=8)


@dataclass
class WorkingHours:
    """Expected working time for each day of the week."""

    monday: timedelta = field(default_factory=_default_hours)
    tuesday: timedelta = field(default_factory=_default_hours)
    wednesday: timedelta = field(default_factory=_default_hours)
    thursday: timedelta = field(default_factory=_default_hours)
    friday: timedelta = field(default_factory=_default_hours)
    saturday: timedelta = field(default_factory=timedelta)
    sunday: timedelta = field(default_factory=timedelta)

    def total_weekly_duration(self) -> timedelta:
        return sum((getattr(self, day) for day in WEEKDAYS), timedelta())

    def for_day(self, day: date) -> timedelta:
        """Return the working time expected on the weekday of ``day``."""
        return getattr(self, WEEKDAYS[day.weekday()])

    def to_dict(self) -> dict[str, str]:
        return {day: format_duration_value(getattr(self, day)) for day in WEEKDAYS}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WorkingHours:
        unknown = set(data) - set(WEEKDAYS)
        if unknown:
            raise ValueError(f"unknown weekday(s): {', '.join(sorted(unknown))}")
        return cls(**{day: parse_duration(str(value)) for day, value in data.items()})


def _int_map(data: dict[Any, Any], name: str) -> dict[int, int]:
    try:
        return {int(year): int(days) for year, days in data.items()}
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid entry in {name}: {exc}") from exc


@dataclass
class Config:
    """User configuration."""

    working_hours: WorkingHours = field(default_factory=WorkingHours)
    vacation_days_per_year: dict[int, int] = field(default_factory=dict)
    sick_days_per_year: dict[int, int] = field(default_factory=dict)

    def allowed_vacation_days(self, year: int) -> int:
        return self.vacation_days_per_year.get(year, 0)

    def allowed_sick_days(self, year: int) -> int:
        return self.sick_days_per_year.get(year, 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sick_days_per_year": {
                str(year): days for year, days in sorted(self.sick_days_per_year.items())
            },
            "vacation_days_per_year": {
                str(year): days
                for year, days in sorted(self.vacation_days_per_year.items())
            },
            "working_hours": self.working_hours.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        return cls(
            working_hours=WorkingHours.from_dict(data.get("working_hours", {})),
            vacation_days_per_year=_int_map(
                data.get("vacation_days_per_year", {}), "vacation_days_per_year"
            ),
            sick_days_per_year=_int_map(
                data.get("sick_days_per_year", {}), "sick_days_per_year"
            ),
        )


@dataclass
class DayOffEntry:
    """A stored day off, keyed by its date elsewhere."""

    description: str
    portion: DayPortion = DayPortion.FULL

    def to_dict(self) -> dict[str, str]:
        return {"description": self.description, "portion": self.portion.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DayOffEntry:
        return cls(
            description=str(data["description"]),
            portion=DayPortion(data.get("portion", DayPortion.FULL.value)),
        )


@dataclass
class DayOff:
    """A day off together with its date."""

    date: date
    description: str
    portion: DayPortion = DayPortion.FULL

    def to_dict(self) -> dict[str, str]:
        return {
            "date": self.date.isoformat(),
            "description": self.description,
            "portion": self.portion.value,
        }


@dataclass
class Frame:
    """A finished span of tracked time."""

    start_time: int
    end_time: int
    project: str
    tags: list[str] = field(default_factory=list)
    updated_at: int = 0

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_time": self.start_time,
            "end_time": self.end_time,
            "project": self.project,
            "tags": list(self.tags),
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Frame:
        end_time = int(data["end_time"])
        return cls(
            start_time=int(data["start_time"]),
            end_time=end_time,
            project=str(data["project"]),
            tags=[str(tag) for tag in data.get("tags", [])],
            updated_at=int(data.get("updated_at", end_time)),
        )


@dataclass
class CurrentFrame:
    """The frame that is being tracked right now."""

    start_time: int
    project: str
    tags: list[str] = field(default_factory=list)

    def to_frame(self, now: int) -> Frame:
        return Frame(
            start_time=self.start_time,
            end_time=now,
            project=self.project,
            tags=list(self.tags),
            updated_at=now,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_time": self.start_time,
            "project": self.project,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CurrentFrame:
        return cls(
            start_time=int(data["start_time"]),
            project=str(data["project"]),
            tags=[str(tag) for tag in data.get("tags", [])],
        )


@dataclass
class State:
    """Tracking state: the running frame, if any."""

    current_frame: CurrentFrame | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.current_frame is None:
            return {}
        return {"current_frame": self.current_frame.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> State:
        current = data.get("current_frame")
        return cls(CurrentFrame.from_dict(current) if current else None)


@dataclass
class Timespan:
    """A range of Unix timestamps, both ends included."""

    start: int
    end: int

    def to_dict(self) -> dict[str, int]:
        return {"from": self.start, "to": self.end}