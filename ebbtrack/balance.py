"""Working time balance: expected versus actually tracked time."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any

from ebbtrack.model import (
    Config,
    DayOffEntry,
    DayPortion,
    Frame,
    Period,
    State,
    Timespan,
)

DayOffs = Mapping[date, DayOffEntry]


def format_duration(seconds: int) -> str:
    """Format a signed number of seconds as hours, minutes and seconds."""
    sign = "-" if seconds < 0 else ""
    minutes, secs = divmod(abs(int(seconds)), 60)
    hours, minutes = divmod(minutes, 60)
    return f"{sign}{hours}h {minutes:02d}m {secs:02d}s"


def format_timerange(start: int, end: int) -> str:
    """Format two timestamps as a local time range."""
    fmt = "%Y-%m-%d %H:%M"
    return (
        f"{datetime.fromtimestamp(start).strftime(fmt)} - "
        f"{datetime.fromtimestamp(end).strftime(fmt)}"
    )


@dataclass
class BalanceResult:
    """Expected, tracked and remaining working seconds over a timespan."""

    expected_working_seconds: int
    actual_working_seconds: int
    remaining_working_seconds: int
    timespan: Timespan

    def to_text(self) -> str:
        timerange = format_timerange(self.timespan.start, self.timespan.end)
        expected = format_duration(self.expected_working_seconds)
        actual = format_duration(self.actual_working_seconds)
        remaining = format_duration(self.remaining_working_seconds)
        width = max(len(expected), len(actual), len(remaining))
        return (
            f"\n{timerange}\n\n"
            f"Expected:  {expected:>{width}}\n"
            f"Actual:    {actual:>{width}}\n"
            f"Remaining: {remaining:>{width}}\n"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "expected_working_seconds": self.expected_working_seconds,
            "actual_working_seconds": self.actual_working_seconds,
            "remaining_working_seconds": self.remaining_working_seconds,
            "timespan": self.timespan.to_dict(),
        }


def _timestamp(moment: datetime) -> int:
    return math.floor(moment.timestamp())


def _local_date(timestamp: int) -> date:
    return datetime.fromtimestamp(timestamp).date()


def _period_start(today: date, period: Period) -> date:
    match period:
        case Period.DAY:
            return today
        case Period.WEEK:
            return today - timedelta(days=today.weekday())
        case Period.MONTH:
            return today.replace(day=1)
        case Period.YEAR:
            return today.replace(month=1, day=1)
    raise ValueError(f"unknown period: {period!r}")


def resolve_timespan(
    now: int,
    frames: list[Frame],
    period: Period | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
) -> Timespan:
    """Work out the timespan a command covers.

    A period runs from local midnight at its start until ``now``. Without a
    period the span starts at ``start``, else at the first frame, else at 0,
    and ends at ``end`` or ``now``.
    """
    if period is None:
        if start is not None:
            from_ts = _timestamp(start)
        elif frames:
            from_ts = frames[0].start_time
        else:
            from_ts = 0
        to_ts = _timestamp(end) if end is not None else now
        return Timespan(from_ts, to_ts)

    first_day = _period_start(_local_date(now), period)
    return Timespan(_timestamp(datetime.combine(first_day, time())), now)


def _merge_day_offs(
    sources: Iterable[DayOffs], start_date: date, end_date: date
) -> dict[date, DayPortion]:
    combined: dict[date, DayPortion] = {}
    for source in sources:
        for day, entry in source.items():
            if not start_date <= day <= end_date:
                continue
            existing = combined.get(day)
            if existing is None or entry.portion.rank > existing.rank:
                combined[day] = entry.portion
    return dict(sorted(combined.items()))


def expected_duration(
    config: Config,
    timespan: Timespan,
    holidays: DayOffs,
    sick_days: DayOffs,
    vacations: DayOffs,
) -> int:
    """Return the seconds of work expected over the timespan's local dates."""
    start_date = _local_date(timespan.start)
    end_date = _local_date(timespan.end)
    hours = config.working_hours

    days = (end_date - start_date).days + 1
    full_weeks, remaining_days = divmod(days, 7) if days > 0 else (0, 0)

    total = hours.total_weekly_duration() * full_weeks
    total += sum(
        (hours.for_day(end_date - timedelta(days=offset)) for offset in range(remaining_days)),
        timedelta(),
    )

    day_offs = _merge_day_offs((vacations, holidays, sick_days), start_date, end_date)
    for day, portion in day_offs.items():
        daily = hours.for_day(day)
        cut = daily if portion is DayPortion.FULL else daily / 2
        total = max(total - cut, timedelta())

    return total // timedelta(seconds=1)


def total_duration(frames: Iterable[Frame]) -> int:
    """Sum of the frames' durations in seconds."""
    return sum(frame.end_time - frame.start_time for frame in frames)


def compute_balance(
    config: Config,
    frames: list[Frame],
    state: State,
    holidays: DayOffs,
    sick_days: DayOffs,
    vacations: DayOffs,
    now: int,
    period: Period | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
) -> BalanceResult:
    """Compare tracked time, including a running frame, with expected time."""
    if start is not None and end is not None and start >= end:
        raise ValueError("'to' must be after 'from'")

    all_frames = list(frames)
    if state.current_frame is not None:
        all_frames.append(state.current_frame.to_frame(now))

    timespan = resolve_timespan(now, all_frames, period, start, end)

    if timespan.start > timespan.end:
        selected: list[Frame] = []
    else:
        selected = [
            frame
            for frame in all_frames
            if frame.start_time >= timespan.start and frame.end_time <= timespan.end
        ]

    expected = expected_duration(config, timespan, holidays, sick_days, vacations)
    actual = total_duration(selected)
    return BalanceResult(
        expected_working_seconds=expected,
        actual_working_seconds=actual,
        remaining_working_seconds=expected - actual,
        timespan=timespan,
    )