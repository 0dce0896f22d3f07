"""Queries and bulk edits over lists of tracked frames."""

from __future__ import annotations

from collections.abc import Iterable

from ebbtrack.model import Frame


def all_projects(frames: Iterable[Frame]) -> list[str]:
    """Return every project name once, sorted."""
    return sorted({frame.project for frame in frames})


def all_tags(frames: Iterable[Frame]) -> list[str]:
    """Return every tag once, sorted."""
    return sorted({tag for frame in frames for tag in frame.tags})


def rename_project(frames: Iterable[Frame], old_name: str, new_name: str) -> int:
    """Rename a project in place; return how many frames changed."""
    changed = 0
    for frame in frames:
        if frame.project == old_name:
            frame.project = new_name
            changed += 1
    return changed


def rename_tag(frames: Iterable[Frame], old_name: str, new_name: str) -> int:
    """Rename a tag in place, keeping each frame's tags unique; return frames changed."""
    changed = 0
    for frame in frames:
        if old_name in frame.tags:
            renamed = (new_name if tag == old_name else tag for tag in frame.tags)
            frame.tags = list(dict.fromkeys(renamed))
            changed += 1
    return changed


def remove_tag(frames: Iterable[Frame], tag: str) -> int:
    """Remove a tag from every frame in place; return how many frames changed."""
    changed = 0
    for frame in frames:
        if tag in frame.tags:
            frame.tags = [existing for existing in frame.tags if existing != tag]
            changed += 1
    return changed


def filter_by_start_time(frames: Iterable[Frame], start: int) -> list[Frame]:
    """Frames that start at or after ``start``."""
    return [frame for frame in frames if frame.start_time >= start]


def filter_by_end_time(frames: Iterable[Frame], end: int) -> list[Frame]:
    """Frames that end at or before ``end``."""
    return [frame for frame in frames if frame.end_time <= end]


def filter_by_project(frames: Iterable[Frame], project: str) -> list[Frame]:
    """Frames of one project."""
    return [frame for frame in frames if frame.project == project]


def filter_by_tag(frames: Iterable[Frame], tag: str) -> list[Frame]:
    """Frames carrying a tag."""
    return [frame for frame in frames if tag in frame.tags]