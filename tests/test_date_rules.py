"""Tests for date rules and layout translation."""

from datetime import datetime, timedelta, timezone

import pytest

from beanvalidator.rules import dates
from beanvalidator.rules.dates import (
    after,
    before,
    between,
    date_format_rule,
    date_rule,
    future,
    future_inclusive,
    parse_date,
    past,
    past_inclusive,
    translate_layout,
)

FIELD = "TestField"
LAYOUT = "2006-01-02"

# Noon, so "today at midnight" and "now" differ.
PINNED_NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def pinned_clock(monkeypatch):
    """Pin the rule clock to PINNED_NOW."""
    monkeypatch.setattr(dates, "utcnow", lambda: PINNED_NOW)
    return PINNED_NOW


def day(offset: int) -> str:
    """PINNED_NOW shifted by offset days, formatted as YYYY-MM-DD."""
    return (PINNED_NOW + timedelta(days=offset)).strftime("%Y-%m-%d")


# =============================================================================
# Layout Tests
# =============================================================================


class TestTranslateLayout:
    def test_common_layouts(self):
        cases = {
            "2006-01-02": "%Y-%m-%d",
            "02/01/2006": "%d/%m/%Y",
            "01-02-2006": "%m-%d-%Y",
            "2006-01-02T15:04:05": "%Y-%m-%dT%H:%M:%S",
            "Jan 2, 2006": "%b %d, %Y",
            "Monday, January 2 2006": "%A, %B %d %Y",
            "3:04PM": "%I:%M%p",
            "2006-01-02 15:04:05 -0700": "%Y-%m-%d %H:%M:%S %z",
            "06.002": "%y.%j",
        }
        for layout, expected in cases.items():
            assert translate_layout(layout) == expected, layout

    def test_literal_percent_is_escaped(self):
        assert translate_layout("2006-01-02 (%)") == "%Y-%m-%d (%%)"

    def test_strptime_formats_pass_through(self):
        parsed = parse_date("2024-02-01", "%Y-%m-%d")
        assert parsed == datetime(2024, 2, 1, tzinfo=timezone.utc)

    def test_naive_values_are_utc(self):
        assert parse_date("2024-02-01", LAYOUT).tzinfo == timezone.utc

    def test_zone_offsets_are_kept(self):
        parsed = parse_date("2024-02-01 10:00 +0200", "2006-01-02 15:04 -0700")
        assert parsed == datetime(2024, 2, 1, 8, 0, tzinfo=timezone.utc)

    def test_invalid_calendar_date_raises(self):
        with pytest.raises(ValueError):
            parse_date("2024-02-30", LAYOUT)

    def test_padded_tokens_need_their_full_width(self):
        cases = [
            ("2024-1-05", "2006-01-02"),
            ("2024-01-5", "2006-01-02"),
            ("24-01-05", "2006-01-02"),
            ("2024-01-05 09:4:05", "2006-01-02 15:04:05"),
            ("2024-01-05 09:04:5", "2006-01-02 15:04:05"),
            ("3:04PM", "03:04PM"),
            ("24.32", "06.002"),
        ]
        for value, layout in cases:
            with pytest.raises(ValueError):
                parse_date(value, layout)

    def test_unpadded_tokens_take_one_or_two_digits(self):
        expected = datetime(2024, 1, 5, tzinfo=timezone.utc)
        assert parse_date("2024-1-5", "2006-1-2") == expected
        assert parse_date("2024-01-05", "2006-1-2") == expected
        assert parse_date("Jan 5, 2024", "Jan 2, 2006") == expected
        assert parse_date("2024-01-05 9:04", "2006-01-02 15:04") == datetime(
            2024, 1, 5, 9, 4, tzinfo=timezone.utc
        )

    def test_literal_text_must_match_exactly(self):
        with pytest.raises(ValueError):
            parse_date("2024-01-05  ", LAYOUT)


# =============================================================================
# Format Rule Tests
# =============================================================================


class TestDateRule:
    def test_valid_date(self):
        assert date_rule(FIELD, "2024-02-01", LAYOUT) is None

    def test_invalid_dates(self):
        for value in ["2024-02-30", "not-a-date", "", "2024-1-5", "2024-01-5"]:
            assert date_rule(FIELD, value, LAYOUT) == (
                "TestField must match the format 2006-01-02"
            ), value

    def test_non_string_value(self):
        assert date_rule(FIELD, 20240201, LAYOUT) == (
            "TestField must be a string representing a date"
        )

    def test_missing_format(self):
        assert date_rule(FIELD, "2024-02-01") == (
            "date rule requires a format parameter (e.g., '2006-01-02')"
        )


class TestDateFormatRule:
    def test_layouts(self):
        assert date_format_rule(FIELD, "2024-02-01", "2006-01-02") is None
        assert date_format_rule(FIELD, "01/02/2024", "02/01/2006") is None
        assert date_format_rule(FIELD, "01-02-2024", "02-01-2006") is None

    def test_mismatch(self):
        assert date_format_rule(FIELD, "not-a-date", LAYOUT) == (
            "TestField must match the format 2006-01-02"
        )

    def test_missing_format(self):
        assert date_format_rule(FIELD, "2024-02-01") == (
            "date-format rule requires a format parameter"
        )


# =============================================================================
# Reference Date Rule Tests
# =============================================================================


class TestAfterBefore:
    def test_after(self):
        assert after(FIELD, "2024-02-01", "2024-01-01", LAYOUT) is None
        assert after(FIELD, "2023-12-31", "2024-01-01", LAYOUT) == (
            "TestField must be after 2024-01-01"
        )

    def test_after_is_strict(self):
        assert after(FIELD, "2024-01-01", "2024-01-01", LAYOUT) == (
            "TestField must be after 2024-01-01"
        )

    def test_before(self):
        assert before(FIELD, "2023-12-31", "2024-01-01", LAYOUT) is None
        assert before(FIELD, "2024-02-01", "2024-01-01", LAYOUT) == (
            "TestField must be before 2024-01-01"
        )

    def test_invalid_reference(self):
        assert after(FIELD, "2024-02-01", "soon", LAYOUT) == (
            "invalid reference date for TestField"
        )
        assert before(FIELD, "2024-02-01", "2024-13-01", LAYOUT) == (
            "invalid reference date for TestField"
        )

    def test_value_checked_before_reference(self):
        assert after(FIELD, "garbage", "soon", LAYOUT) == (
            "TestField must match the format 2006-01-02"
        )

    def test_missing_parameters(self):
        assert after(FIELD, "2024-02-01", "2024-01-01") == (
            "after rule requires a reference date and format (e.g., '2024-01-01,2006-01-02')"
        )
        assert before(FIELD, "2024-02-01") == (
            "before rule requires a reference date and format (e.g., '2024-01-01,2006-01-02')"
        )


class TestBetween:
    def test_inside_range(self):
        assert between(FIELD, "2024-06-01", "2024-01-01", "2024-12-31", LAYOUT) is None

    def test_bounds_are_inclusive(self):
        assert between(FIELD, "2024-01-01", "2024-01-01", "2024-12-31", LAYOUT) is None
        assert between(FIELD, "2024-12-31", "2024-01-01", "2024-12-31", LAYOUT) is None

    def test_outside_range_names_both_bounds(self):
        expected = "TestField must be between 2024-01-01 and 2024-12-31"
        assert between(FIELD, "2023-12-31", "2024-01-01", "2024-12-31", LAYOUT) == expected
        assert between(FIELD, "2025-01-01", "2024-01-01", "2024-12-31", LAYOUT) == expected

    def test_invalid_bounds(self):
        assert between(FIELD, "2024-06-01", "x", "2024-12-31", LAYOUT) == (
            "invalid start date for TestField"
        )
        assert between(FIELD, "2024-06-01", "2024-01-01", "y", LAYOUT) == (
            "invalid end date for TestField"
        )

    def test_missing_parameters(self):
        assert between(FIELD, "2024-06-01", "2024-01-01") == (
            "between rule requires a start date, end date, and format "
            "(e.g., '2024-01-01,2024-12-31,2006-01-02')"
        )


# =============================================================================
# Clock Rule Tests
# =============================================================================


class TestPastFuture:
    def test_past(self, pinned_clock):
        assert past(FIELD, day(-1), LAYOUT) is None
        assert past(FIELD, day(0), LAYOUT) == "TestField must be in the past"
        assert past(FIELD, day(1), LAYOUT) == "TestField must be in the past"

    def test_future(self, pinned_clock):
        assert future(FIELD, day(1), LAYOUT) is None
        assert future(FIELD, day(0), LAYOUT) == "TestField must be in the future"
        assert future(FIELD, day(-1), LAYOUT) == "TestField must be in the future"

    def test_missing_format(self):
        assert past(FIELD, "2024-01-01") == (
            "past rule requires a format parameter (e.g., '2006-01-02')"
        )
        assert future(FIELD, "2024-01-01") == (
            "future rule requires a format parameter (e.g., '2006-01-02')"
        )

    def test_real_clock(self):
        today = datetime.now(timezone.utc)
        assert past(FIELD, (today - timedelta(days=2)).strftime("%Y-%m-%d"), LAYOUT) is None
        assert future(FIELD, (today + timedelta(days=2)).strftime("%Y-%m-%d"), LAYOUT) is None


class TestInclusiveRules:
    def test_past_inclusive(self, pinned_clock):
        assert past_inclusive(FIELD, day(-1), LAYOUT) is None
        assert past_inclusive(FIELD, day(0), LAYOUT) is None
        assert past_inclusive(FIELD, day(1), LAYOUT) == "TestField must be in the past or today"

    def test_past_inclusive_compares_with_current_instant(self, pinned_clock):
        layout = "2006-01-02 15:04"
        assert past_inclusive(FIELD, "2024-06-15 11:59", layout) is None
        assert past_inclusive(FIELD, "2024-06-15 12:01", layout) == (
            "TestField must be in the past or today"
        )

    def test_future_inclusive(self, pinned_clock):
        assert future_inclusive(FIELD, day(1), LAYOUT) is None
        assert future_inclusive(FIELD, day(0), LAYOUT) is None
        assert future_inclusive(FIELD, day(-1), LAYOUT) == (
            "TestField must be in the future or today"
        )

    def test_future_inclusive_compares_with_midnight(self, pinned_clock):
        layout = "2006-01-02 15:04"
        assert future_inclusive(FIELD, "2024-06-15 00:00", layout) is None
        assert future_inclusive(FIELD, "2024-06-14 23:59", layout) == (
            "TestField must be in the future or today"
        )

    def test_missing_format(self):
        assert past_inclusive(FIELD, "2024-01-01") == (
            "past-inclusive rule requires a format parameter (e.g., '2006-01-02')"
        )
        assert future_inclusive(FIELD, "2024-01-01") == (
            "future-inclusive rule requires a format parameter (e.g., '2006-01-02')"
        )

    def test_non_string_value(self, pinned_clock):
        assert past_inclusive(FIELD, PINNED_NOW, LAYOUT) == (
            "TestField must be a string representing a date"
        )
