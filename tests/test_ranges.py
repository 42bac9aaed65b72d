"""Tests for whole-day date ranges and picker shortcuts."""

import logging
from datetime import datetime

import pytest

from pmun_utils import (
    COMMON_DATE_SHORTCUTS,
    DateRange,
    configure,
    create_date_shortcuts,
    get_date_by_offset,
    get_last_days_range,
    get_last_months_range,
    get_last_weeks_range,
    get_this_half_year_range,
    get_this_month_range,
    get_this_quarter_range,
    get_this_week_range,
    get_this_year_range,
    get_today_range,
    get_today_str,
    get_yesterday_str,
    to_datetime,
)

BASE = "2023-05-15 12:00:00"  # a Monday


def bounds(r: DateRange) -> tuple[datetime, datetime]:
    return to_datetime(r.start), to_datetime(r.end)


def day_start(text: str) -> datetime:
    return datetime.fromisoformat(text)


def day_end(text: str) -> datetime:
    return datetime.fromisoformat(text).replace(
        hour=23, minute=59, second=59, microsecond=999000
    )


def test_get_date_by_offset_keeps_time_of_day():
    assert get_date_by_offset(-1, BASE) == datetime(2023, 5, 14, 12)
    assert get_date_by_offset(0, BASE) == datetime(2023, 5, 15, 12)
    assert get_date_by_offset(20, BASE) == datetime(2023, 6, 4, 12)


def test_today_and_yesterday_strings():
    assert get_today_str(BASE) == "2023-05-15"
    assert get_yesterday_str(BASE) == "2023-05-14"
    assert get_yesterday_str("2023-03-01") == "2023-02-28"


def test_today_range_covers_the_whole_day():
    r = get_today_range(BASE)
    assert bounds(r) == (day_start("2023-05-15"), day_end("2023-05-15"))
    assert r.end - r.start == 86_400_000 - 1


@pytest.mark.parametrize(
    "base,first,last",
    [
        (BASE, "2023-05-15", "2023-05-21"),
        ("2023-05-21 08:00", "2023-05-15", "2023-05-21"),
        ("2023-05-17", "2023-05-15", "2023-05-21"),
    ],
)
def test_this_week_runs_monday_to_sunday(base, first, last):
    assert bounds(get_this_week_range(base)) == (day_start(first), day_end(last))


def test_this_week_ignores_locale_week_start():
    configure(locale="en")
    assert bounds(get_this_week_range("2023-05-14"))[0] == day_start("2023-05-08")


def test_this_month_range():
    assert bounds(get_this_month_range(BASE)) == (
        day_start("2023-05-01"),
        day_end("2023-05-31"),
    )
    assert bounds(get_this_month_range("2024-02-10")) == (
        day_start("2024-02-01"),
        day_end("2024-02-29"),
    )


@pytest.mark.parametrize(
    "base,first,last",
    [
        ("2023-02-10", "2023-01-01", "2023-03-31"),
        (BASE, "2023-04-01", "2023-06-30"),
        ("2023-09-30", "2023-07-01", "2023-09-30"),
        ("2023-11-01", "2023-10-01", "2023-12-31"),
    ],
)
def test_this_quarter_range(base, first, last):
    assert bounds(get_this_quarter_range(base)) == (day_start(first), day_end(last))


def test_this_half_year_range():
    assert bounds(get_this_half_year_range(BASE)) == (
        day_start("2023-01-01"),
        day_end("2023-06-30"),
    )
    assert bounds(get_this_half_year_range("2023-09-10")) == (
        day_start("2023-07-01"),
        day_end("2023-12-31"),
    )


def test_this_year_range():
    assert bounds(get_this_year_range(BASE)) == (
        day_start("2023-01-01"),
        day_end("2023-12-31"),
    )


def test_last_days_range_includes_today():
    assert bounds(get_last_days_range(7, BASE)) == (
        day_start("2023-05-09"),
        day_end("2023-05-15"),
    )
    assert bounds(get_last_days_range(1, BASE)) == bounds(get_today_range(BASE))


def test_last_weeks_range():
    assert bounds(get_last_weeks_range(2, BASE)) == (
        day_start("2023-05-01"),
        day_end("2023-05-15"),
    )


def test_last_months_range():
    assert bounds(get_last_months_range(3, BASE)) == (
        day_start("2023-02-15"),
        day_end("2023-05-15"),
    )
    # Clamped to the shorter month
    assert bounds(get_last_months_range(1, "2023-03-31")) == (
        day_start("2023-02-28"),
        day_end("2023-03-31"),
    )


@pytest.mark.parametrize(
    "fn", [get_last_days_range, get_last_weeks_range, get_last_months_range]
)
def test_last_ranges_reject_non_positive_counts(fn):
    with pytest.raises(ValueError, match="must be >= 1"):
        fn(0, BASE)


class TestDateRange:
    def test_start_must_not_follow_end(self):
        with pytest.raises(ValueError, match="must be <= end"):
            DateRange(start=2, end=1)

    def test_keyword_only(self):
        with pytest.raises(TypeError):
            DateRange(1, 2)  # type: ignore[misc]

    def test_unpacking(self):
        start, end = DateRange(start=1, end=2)
        assert (start, end) == (1, 2)

    def test_membership_is_inclusive(self):
        r = DateRange(start=10, end=20)
        assert 10 in r
        assert 20 in r
        assert 15.5 in r
        assert 21 not in r
        assert "15" not in r
        assert True not in r

    def test_str_shows_both_ends(self):
        r = get_today_range(BASE)
        assert str(r) == "DateRange(2023-05-15 00:00:00→2023-05-15 23:59:59)"


class TestShortcuts:
    def test_builtin_names(self):
        assert set(COMMON_DATE_SHORTCUTS) == {
            "today",
            "this_week",
            "this_month",
            "this_quarter",
            "this_half_year",
            "this_year",
            "last_7_days",
            "last_30_days",
            "last_3_months",
            "last_6_months",
            "last_year",
        }

    def test_shortcuts_return_ranges(self):
        for fn in COMMON_DATE_SHORTCUTS.values():
            r = fn()
            assert isinstance(r, DateRange)
            assert r.start <= r.end

    def test_list_of_names(self):
        shortcuts = create_date_shortcuts(["today", "this_month"])
        assert list(shortcuts) == ["today", "this_month"]
        assert shortcuts["today"] is COMMON_DATE_SHORTCUTS["today"]

    def test_relabelled_and_custom_entries(self):
        custom = lambda: get_today_range(BASE)  # noqa: E731
        shortcuts = create_date_shortcuts(
            [{"Today": "today"}, {"Pinned": custom}, "this_week"]
        )
        assert list(shortcuts) == ["Today", "Pinned", "this_week"]
        assert shortcuts["Pinned"] is custom

    def test_mapping_is_returned_unchanged(self):
        config = {"Today": COMMON_DATE_SHORTCUTS["today"]}
        assert create_date_shortcuts(config) is config

    def test_unknown_names_are_skipped_with_a_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="pmun_utils.ranges"):
            shortcuts = create_date_shortcuts(["today", "next_decade", {"X": "nope"}])
        assert list(shortcuts) == ["today"]
        assert 'shortcut not found: "next_decade"' in caplog.text
        assert 'shortcut not found: "nope"' in caplog.text
