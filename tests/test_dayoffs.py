from datetime import date

import pytest

from ebbtrack.dayoffs import (
    DayOffKind,
    add_day_off,
    change_message,
    edit_day_off,
    empty_list_message,
    list_day_offs,
    remove_day_off,
    render_day_off_table,
)
from ebbtrack.model import DayOff, DayOffEntry, DayPortion


def _entries(*items):
    return {day: DayOffEntry(description, portion) for day, description, portion in items}


def test_list_holidays_displays_all():
    entries = _entries(
        (date(2025, 5, 28), "Mountain Day", DayPortion.FULL),
        (date(2025, 5, 29), "Ocean Day", DayPortion.HALF),
    )
    expected = (
        "┌────────────┬──────────────┬─────────┐\n"
        "│ date       │ description  │ portion │\n"
        "├────────────┼──────────────┼─────────┤\n"
        "│ 2025-05-28 │ Mountain Day │ full    │\n"
        "│ 2025-05-29 │ Ocean Day    │ half    │\n"
        "└────────────┴──────────────┴─────────┘"
    )
    assert render_day_off_table(list_day_offs(entries)) == expected


def test_list_holidays_filters_by_year():
    entries = _entries(
        (date(2024, 8, 12), "Mountain Day", DayPortion.FULL),
        (date(2025, 2, 5), "Ocean Day", DayPortion.HALF),
    )
    expected = (
        "┌────────────┬──────────────┬─────────┐\n"
        "│ date       │ description  │ portion │\n"
        "├────────────┼──────────────┼─────────┤\n"
        "│ 2024-08-12 │ Mountain Day │ full    │\n"
        "└────────────┴──────────────┴─────────┘"
    )
    assert render_day_off_table(list_day_offs(entries, 2024)) == expected


def test_list_sick_days_displays_all():
    entries = _entries(
        (date(2025, 5, 29), "fever", DayPortion.HALF),
        (date(2025, 5, 28), "headache", DayPortion.FULL),
    )
    expected = (
        "┌────────────┬─────────────┬─────────┐\n"
        "│ date       │ description │ portion │\n"
        "├────────────┼─────────────┼─────────┤\n"
        "│ 2025-05-28 │ headache    │ full    │\n"
        "│ 2025-05-29 │ fever       │ half    │\n"
        "└────────────┴─────────────┴─────────┘"
    )
    assert render_day_off_table(list_day_offs(entries)) == expected


def test_list_sick_days_filters_by_year():
    entries = _entries(
        (date(2024, 8, 12), "headache", DayPortion.FULL),
        (date(2025, 2, 5), "fever", DayPortion.HALF),
    )
    expected = (
        "┌────────────┬─────────────┬─────────┐\n"
        "│ date       │ description │ portion │\n"
        "├────────────┼─────────────┼─────────┤\n"
        "│ 2024-08-12 │ headache    │ full    │\n"
        "└────────────┴─────────────┴─────────┘"
    )
    assert render_day_off_table(list_day_offs(entries, 2024)) == expected


def test_list_vacations_filters_by_year():
    entries = _entries(
        (date(2024, 8, 12), "Mountain Day", DayPortion.FULL),
        (date(2025, 2, 5), "Ocean Day", DayPortion.HALF),
    )
    listed = list_day_offs(entries, 2025)
    assert listed == [DayOff(date(2025, 2, 5), "Ocean Day", DayPortion.HALF)]


def test_add_defaults_to_full_day():
    entries = {}
    added = add_day_off(entries, DayOffKind.HOLIDAY, date(2025, 5, 28), "Mountain Day")
    assert entries[date(2025, 5, 28)] == DayOffEntry("Mountain Day", DayPortion.FULL)
    assert added == DayOff(date(2025, 5, 28), "Mountain Day", DayPortion.FULL)


@pytest.mark.parametrize("kind", list(DayOffKind))
def test_add_fails_if_date_exists(kind):
    entries = _entries((date(2025, 5, 28), "fever", DayPortion.HALF))
    with pytest.raises(ValueError, match="already exists"):
        add_day_off(entries, kind, date(2025, 5, 28), "headache")
    assert entries[date(2025, 5, 28)] == DayOffEntry("fever", DayPortion.HALF)


def test_edit_sick_day_updates_entry():
    entries = _entries(
        (date(2025, 5, 28), "headache", DayPortion.FULL),
        (date(2025, 5, 29), "fever", DayPortion.HALF),
    )
    edit_day_off(entries, DayOffKind.SICK_DAY, date(2025, 5, 29), "hayfever", DayPortion.FULL)
    assert entries[date(2025, 5, 29)] == DayOffEntry("hayfever", DayPortion.FULL)
    assert entries[date(2025, 5, 28)] == DayOffEntry("headache", DayPortion.FULL)


def test_edit_sick_day_fails_if_not_exists():
    entries = _entries((date(2025, 5, 29), "fever", DayPortion.HALF))
    with pytest.raises(LookupError, match="No sick day found on 2025-05-28"):
        edit_day_off(entries, DayOffKind.SICK_DAY, date(2025, 5, 28), "hayfever", DayPortion.FULL)
    assert entries[date(2025, 5, 29)].description == "fever"


def test_edit_holiday_fails_if_not_exists():
    with pytest.raises(LookupError, match="No holiday exists on 2025-05-28"):
        edit_day_off({}, DayOffKind.HOLIDAY, date(2025, 5, 28), "Mountain Day")


def test_remove_sick_day_removes_entry():
    entries = _entries(
        (date(2025, 5, 28), "headache", DayPortion.FULL),
        (date(2025, 5, 29), "fever", DayPortion.HALF),
    )
    removed = remove_day_off(entries, DayOffKind.SICK_DAY, date(2025, 5, 28))
    assert removed == DayOff(date(2025, 5, 28), "headache", DayPortion.FULL)
    assert date(2025, 5, 28) not in entries
    assert entries[date(2025, 5, 29)].description == "fever"


def test_remove_fails_if_missing():
    entries = _entries((date(2025, 5, 29), "fever", DayPortion.HALF))
    with pytest.raises(LookupError, match="No sick day found on 2025-05-28"):
        remove_day_off(entries, DayOffKind.SICK_DAY, date(2025, 5, 28))
    assert entries[date(2025, 5, 29)].description == "fever"


def test_change_messages():
    day_off = DayOff(date(2025, 5, 28), "Mountain Day", DayPortion.FULL)
    assert (
        change_message(DayOffKind.HOLIDAY, "add", day_off)
        == "Holiday 'Mountain Day' added on 2025-05-28."
    )
    assert (
        change_message(DayOffKind.SICK_DAY, "edit", day_off)
        == "Updated sick day 'Mountain Day' on 2025-05-28."
    )
    assert (
        change_message(DayOffKind.HOLIDAY, "remove", day_off)
        == "Removed holiday 'Mountain Day' on 2025-05-28."
    )


def test_change_message_rejects_unknown_action():
    day_off = DayOff(date(2025, 5, 28), "x")
    with pytest.raises(ValueError):
        change_message(DayOffKind.VACATION, "rename", day_off)


def test_empty_list_messages():
    assert empty_list_message(DayOffKind.HOLIDAY) == "No holidays found."
    assert empty_list_message(DayOffKind.HOLIDAY, 2024) == "No holidays found for 2024."
    assert empty_list_message(DayOffKind.SICK_DAY) == "No sick days found."
    assert empty_list_message(DayOffKind.SICK_DAY, 2024) == "No sick days found for 2024."