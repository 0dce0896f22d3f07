from datetime import datetime, timezone

import pytest

from ebbtrack.balance import format_duration, format_timerange
from ebbtrack.model import CurrentFrame, Frame, Period, State
from ebbtrack.report import ProjectDuration, Report, build_report, total_duration_by_project


def _frames():
    return [
        Frame(100, 200, "alpha", ["x"], 200),
        Frame(300, 700, "beta", ["x", "y"], 700),
        Frame(800, 850, "alpha", [], 850),
    ]


def test_total_duration_by_project_invariants():
    frames = _frames()
    projects, total = total_duration_by_project(frames)
    assert set(projects) == {"alpha", "beta"}
    assert total == sum(info.duration for info in projects.values())
    assert total == sum(frame.duration for frame in frames)
    assert projects["beta"].tags["y"] == projects["beta"].duration
    assert projects["alpha"].tags == {"x": frames[0].duration}


def test_total_duration_by_project_empty():
    assert total_duration_by_project([]) == ({}, 0)


def test_build_report_defaults_to_first_frame_and_now():
    frames = _frames()
    report = build_report(frames, State(), now=1000)
    assert report.timespan.start == frames[0].start_time
    assert report.timespan.end == 1000
    assert report.total_duration == sum(frame.duration for frame in frames)


def test_build_report_excludes_frames_ending_after_timespan():
    frames = [*_frames(), Frame(900, 1100, "late", [], 1100)]
    report = build_report(frames, State(), now=1000)
    assert "late" not in report.projects
    assert set(report.projects) == {"alpha", "beta"}


def test_build_report_includes_running_frame():
    state = State(CurrentFrame(start_time=900, project="live", tags=["z"]))
    report = build_report(_frames(), state, now=1000)
    expected = state.current_frame.to_frame(1000).duration
    assert report.projects["live"].duration == expected
    assert report.projects["live"].tags == {"z": expected}


def test_build_report_filters_by_project_and_tag():
    by_project = build_report(_frames(), State(), now=1000, project="alpha")
    assert set(by_project.projects) == {"alpha"}

    by_tag = build_report(_frames(), State(), now=1000, tag="y")
    assert set(by_tag.projects) == {"beta"}
    assert by_tag.total_duration == by_tag.projects["beta"].duration


def test_build_report_empty_when_timespan_inverted():
    frames = [Frame(5000, 6000, "future", [], 6000)]
    report = build_report(frames, State(), now=1000)
    assert report.timespan.start > report.timespan.end
    assert report.projects == {}
    assert report.total_duration == 0


def test_build_report_rejects_from_after_to():
    start = datetime(2025, 1, 2, tzinfo=timezone.utc)
    end = datetime(2025, 1, 1, tzinfo=timezone.utc)
    with pytest.raises(ValueError, match="'to' must be after 'from'"):
        build_report(_frames(), State(), now=1000, start=start, end=end)


def test_build_report_with_period_ends_now():
    now = 1_748_723_006
    report = build_report([], State(), now=now, period=Period.DAY)
    assert report.timespan.end == now
    assert report.timespan.start <= now
    assert now - report.timespan.start < 25 * 3600


def test_to_text_without_projects():
    report = build_report([], State(), now=1000, start=None)
    expected = (
        f"{format_timerange(report.timespan.start, report.timespan.end)}"
        f"\n\nTotal: {format_duration(0)}"
    )
    assert report.to_text() == expected


def test_to_text_lists_projects_sorted_with_tags():
    report = build_report(_frames(), State(), now=1000)
    text = report.to_text()
    assert text.startswith(format_timerange(report.timespan.start, report.timespan.end))
    assert text.endswith(f"Total: {format_duration(report.total_duration)}")
    assert text.index("alpha") < text.index("beta") < text.index("  +y")
    assert text.index("  +x") < text.index("  +y")
    assert "│ Project" in text


def test_to_dict_shape():
    report = Report(
        projects={"alpha": ProjectDuration(duration=10, tags={"x": 10})},
        total_duration=10,
        timespan=build_report([], State(), now=50).timespan,
    )
    data = report.to_dict()
    assert data["projects"] == {"alpha": {"duration": 10, "tags": {"x": 10}}}
    assert data["total_duration"] == 10
    assert data["timespan"] == {"from": 0, "to": 50}