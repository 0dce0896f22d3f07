"""Holidays, sick days and vacations: adding, editing, removing and listing."""

from __future__ import annotations

from collections.abc import Iterable, MutableMapping, Mapping
from datetime import date
from enum import StrEnum
from typing import Literal

from ebbtrack.model import DayOff, DayOffEntry, DayPortion
from ebbtrack.settings import _render_table

Action = Literal["add", "edit", "remove"]


class DayOffKind(StrEnum):
    """The kinds of days off that are kept in separate files."""

    HOLIDAY = "holiday"
    SICK_DAY = "sick_day"
    VACATION = "vacation"

    @property
    def label(self) -> str:
        """Singular name used in messages, e.g. ``"sick day"``."""
        return _LABELS[self]

    @property
    def plural(self) -> str:
        """Plural name used in messages, e.g. ``"sick days"``."""
        return f"{_LABELS[self]}s"


_LABELS: dict[DayOffKind, str] = {
    DayOffKind.HOLIDAY: "holiday",
    DayOffKind.SICK_DAY: "sick day",
    DayOffKind.VACATION: "vacation",
}

_MISSING_ON_EDIT: dict[DayOffKind, str] = {
    DayOffKind.HOLIDAY: "No holiday exists on {day}",
    DayOffKind.SICK_DAY: "No sick day found on {day}",
    DayOffKind.VACATION: "No vacation found on {day}",
}


def _store(
    entries: MutableMapping[date, DayOffEntry],
    day: date,
    description: str,
    portion: DayPortion | None,
) -> DayOff:
    entry = DayOffEntry(description=description, portion=portion or DayPortion.FULL)
    entries[day] = entry
    return DayOff(date=day, description=entry.description, portion=entry.portion)


def add_day_off(
    entries: MutableMapping[date, DayOffEntry],
    kind: DayOffKind,
    day: date,
    description: str,
    portion: DayPortion | None = None,
) -> DayOff:
    """Add a day off; a missing portion means a full day.

    Raises ``ValueError`` if a day off of this kind already exists on ``day``.
    """
    if day in entries:
        raise ValueError(f"A {kind.label} already exists on {day.isoformat()}")
    return _store(entries, day, description, portion)


def edit_day_off(
    entries: MutableMapping[date, DayOffEntry],
    kind: DayOffKind,
    day: date,
    description: str,
    portion: DayPortion | None = None,
) -> DayOff:
    """Replace an existing day off; a missing portion means a full day.

    Raises ``LookupError`` if there is no day off of this kind on ``day``.
    """
    if day not in entries:
        raise LookupError(_MISSING_ON_EDIT[kind].format(day=day.isoformat()))
    return _store(entries, day, description, portion)


def remove_day_off(
    entries: MutableMapping[date, DayOffEntry], kind: DayOffKind, day: date
) -> DayOff:
    """Remove and return the day off on ``day``.

    Raises ``LookupError`` if there is none.
    """
    try:
        entry = entries.pop(day)
    except KeyError:
        raise LookupError(f"No {kind.label} found on {day.isoformat()}.") from None
    return DayOff(date=day, description=entry.description, portion=entry.portion)


def list_day_offs(
    entries: Mapping[date, DayOffEntry], year: int | None = None
) -> list[DayOff]:
    """Return the days off in date order, optionally only those of ``year``."""
    return [
        DayOff(date=day, description=entry.description, portion=entry.portion)
        for day, entry in sorted(entries.items())
        if year is None or day.year == year
    ]


def render_day_off_table(day_offs: Iterable[DayOff]) -> str:
    """Render days off as a table with date, description and portion columns."""
    rows = (
        (day_off.date.isoformat(), day_off.description, day_off.portion.value)
        for day_off in day_offs
    )
    return _render_table(("date", "description", "portion"), rows)


def change_message(kind: DayOffKind, action: Action, day_off: DayOff) -> str:
    """Describe a change made to a day off."""
    description = day_off.description
    when = day_off.date.isoformat()
    match action:
        case "add":
            return f"{kind.label.capitalize()} '{description}' added on {when}."
        case "edit":
            return f"Updated {kind.label} '{description}' on {when}."
        case "remove":
            return f"Removed {kind.label} '{description}' on {when}."
    raise ValueError(f"unknown action: {action!r}")


def empty_list_message(kind: DayOffKind, year: int | None = None) -> str:
    """The message shown when no days off of a kind are found."""
    if year is None:
        return f"No {kind.plural} found."
    return f"No {kind.plural} found for {year}."