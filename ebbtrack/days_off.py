"""Summary of vacation and sick days taken against the yearly allowance."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any

from ebbtrack.model import Config, DayOffEntry, DayPortion


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


def _normalize_zero(value: float) -> float:
    return 0.0 if value == 0 else value


@dataclass(frozen=True)
class DaysOffSummary:
    """Days off allowed, taken and remaining in one year."""

    year: int
    vacation_days_taken: float
    vacation_days_allowed: int
    vacation_days_remaining: float
    sick_days_taken: float
    sick_days_allowed: int
    sick_days_remaining: float

    def to_text(self) -> str:
        rows = [
            (
                "Vacation",
                str(self.vacation_days_allowed),
                f"{self.vacation_days_taken:.1f}",
                f"{self.vacation_days_remaining:.1f}",
            ),
            (
                "Sick",
                str(self.sick_days_allowed),
                f"{self.sick_days_taken:.1f}",
                f"{self.sick_days_remaining:.1f}",
            ),
        ]
        table = _render_table(
            ("Category", "Allowed", "Taken", "Remaining"),
            rows,
            right_aligned=frozenset({1, 2, 3}),
        )
        return f"Year: {self.year}\n\n{table}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "sick_days_taken": self.sick_days_taken,
            "sick_days_allowed": self.sick_days_allowed,
            "sick_days_remaining": self.sick_days_remaining,
            "vacation_days_taken": self.vacation_days_taken,
            "vacation_days_allowed": self.vacation_days_allowed,
            "vacation_days_remaining": self.vacation_days_remaining,
            "year": self.year,
        }


def count_days(portions: Iterable[DayPortion]) -> float:
    """Count days, a half day counting as 0.5."""
    return sum((1.0 if portion is DayPortion.FULL else 0.5 for portion in portions), 0.0)


def _taken_in_year(entries: Mapping[date, DayOffEntry], year: int) -> float:
    return count_days(entry.portion for day, entry in entries.items() if day.year == year)


def summarize_days_off(
    config: Config,
    sick_days: Mapping[date, DayOffEntry],
    vacations: Mapping[date, DayOffEntry],
    year: int,
) -> DaysOffSummary:
    """Compare the days off taken in ``year`` with the configured allowance."""
    sick_taken = _taken_in_year(sick_days, year)
    sick_allowed = config.allowed_sick_days(year)
    vacation_taken = _taken_in_year(vacations, year)
    vacation_allowed = config.allowed_vacation_days(year)

    return DaysOffSummary(
        year=year,
        vacation_days_taken=_normalize_zero(vacation_taken),
        vacation_days_allowed=vacation_allowed,
        vacation_days_remaining=_normalize_zero(vacation_allowed - vacation_taken),
        sick_days_taken=_normalize_zero(sick_taken),
        sick_days_allowed=sick_allowed,
        sick_days_remaining=_normalize_zero(sick_allowed - sick_taken),
    )