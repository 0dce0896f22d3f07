"""Tracked time per project and tag over a timespan."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ebbtrack.balance import format_duration, format_timerange, resolve_timespan
from ebbtrack.frames import (
    filter_by_end_time,
    filter_by_project,
    filter_by_start_time,
    filter_by_tag,
)
from ebbtrack.model import Frame, Period, State, Timespan
from ebbtrack.settings import _render_table


@dataclass
class ProjectDuration:
    """Seconds tracked on a project, in total and per tag."""

    duration: int = 0
    tags: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"duration": self.duration, "tags": dict(self.tags)}


@dataclass
class Report:
    """Tracked time per project over a timespan."""

    projects: dict[str, ProjectDuration]
    total_duration: int
    timespan: Timespan

    def to_text(self) -> str:
        timerange = format_timerange(self.timespan.start, self.timespan.end)
        total = format_duration(self.total_duration)
        if not self.projects:
            return f"{timerange}\n\nTotal: {total}"

        rows: list[tuple[str, str]] = []
        for name in sorted(self.projects):
            info = self.projects[name]
            rows.append((name, format_duration(info.duration)))
            rows.extend(
                (f"  +{tag}", format_duration(seconds))
                for tag, seconds in sorted(info.tags.items())
            )

        table = _render_table(("Project", "Duration"), rows, right_aligned=frozenset({1}))
        return f"{timerange}\n\n{table}\n\nTotal: {total}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "projects": {name: info.to_dict() for name, info in self.projects.items()},
            "total_duration": self.total_duration,
            "timespan": self.timespan.to_dict(),
        }


def total_duration_by_project(
    frames: Iterable[Frame],
) -> tuple[dict[str, ProjectDuration], int]:
    """Sum frame durations per project and per tag; also return the overall total."""
    projects: dict[str, ProjectDuration] = {}
    total = 0
    for frame in frames:
        duration = frame.end_time - frame.start_time
        total += duration
        entry = projects.setdefault(frame.project, ProjectDuration())
        entry.duration += duration
        for tag in frame.tags:
            entry.tags[tag] = entry.tags.get(tag, 0) + duration
    return projects, total


def build_report(
    frames: Iterable[Frame],
    state: State,
    now: int,
    period: Period | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    project: str | None = None,
    tag: str | None = None,
) -> Report:
    """Report tracked time, including a running frame, within the resolved timespan."""
    if start is not None and end is not None and start >= end:
        raise ValueError("'to' must be after 'from'")

    all_frames = list(frames)
    if state.current_frame is not None:
        all_frames.append(state.current_frame.to_frame(now))

    timespan = resolve_timespan(now, all_frames, period, start, end)

    if timespan.start > timespan.end:
        selected: list[Frame] = []
    else:
        selected = filter_by_end_time(
            filter_by_start_time(all_frames, timespan.start), timespan.end
        )
        if project is not None:
            selected = filter_by_project(selected, project)
        if tag is not None:
            selected = filter_by_tag(selected, tag)

    projects, total = total_duration_by_project(selected)
    return Report(projects=projects, total_duration=total, timespan=timespan)