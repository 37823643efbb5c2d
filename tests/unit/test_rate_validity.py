"""Unit tests for rate validity windows."""

from __future__ import annotations

from datetime import date

import pytest

from cabinet_pricing.domain.services.rate_validity import (
    classify_rate,
    coerce_date,
    is_rate_valid_on,
    read_date,
    validate_rate_window,
)
from cabinet_pricing.domain.value_objects import RateStatus


class TestClassifyRate:
    """Tests for classify_rate()."""

    @pytest.mark.parametrize(
        "today,expected",
        [
            ("2025-07-01", RateStatus.EXPIRED),
            ("2024-12-01", RateStatus.FUTURE),
            ("2025-03-01", RateStatus.CURRENT),
        ],
    )
    def test_reference_window(self, today: str, expected: RateStatus) -> None:
        assert classify_rate("2025-01-01", "2025-06-01", today) is expected

    def test_last_day_is_still_current(self) -> None:
        assert classify_rate("2025-01-01", "2025-06-01", "2025-06-01") is RateStatus.CURRENT

    def test_start_day_is_current(self) -> None:
        assert classify_rate("2025-01-01", None, "2025-01-01") is RateStatus.CURRENT

    def test_open_ended_rate_never_expires(self) -> None:
        assert classify_rate("2020-01-01", None, "2099-01-01") is RateStatus.CURRENT

    def test_expired_wins_over_future_for_malformed_window(self) -> None:
        assert classify_rate("2025-09-01", "2025-02-01", "2025-05-01") is RateStatus.EXPIRED

    def test_accepts_dates(self) -> None:
        assert (
            classify_rate(date(2025, 1, 1), date(2025, 6, 1), date(2025, 7, 1))
            is RateStatus.EXPIRED
        )

    def test_defaults_to_today(self) -> None:
        assert classify_rate("2000-01-01", None) is RateStatus.CURRENT

    @pytest.mark.parametrize(
        "effective_from,effective_to",
        [("01/01/2025", None), ("2025-01-01", "soon"), ("garbage", "31-12-2024"), (20250101, None)],
    )
    def test_unreadable_dates_are_ignored(self, effective_from, effective_to) -> None:
        assert classify_rate(effective_from, effective_to, "2025-03-01") is RateStatus.CURRENT

    def test_unreadable_reference_date_means_today(self) -> None:
        assert classify_rate("2000-01-01", "2001-01-01", "someday") is RateStatus.EXPIRED


class TestIsRateValidOn:
    """Tests for is_rate_valid_on()."""

    def test_inside_window(self) -> None:
        assert is_rate_valid_on("2025-01-01", "2025-06-01", "2025-03-01")

    def test_start_inclusive_end_exclusive(self) -> None:
        assert is_rate_valid_on("2025-01-01", "2025-06-01", "2025-01-01")
        assert not is_rate_valid_on("2025-01-01", "2025-06-01", "2025-06-01")

    def test_before_start(self) -> None:
        assert not is_rate_valid_on("2025-01-01", None, "2024-12-31")

    def test_open_ended(self) -> None:
        assert is_rate_valid_on("2025-01-01", None, "2030-01-01")

    def test_missing_start_is_never_valid(self) -> None:
        assert not is_rate_valid_on(None, None, "2025-01-01")

    def test_unreadable_start_or_query_is_never_valid(self) -> None:
        assert not is_rate_valid_on("garbage", None, "2025-03-01")
        assert not is_rate_valid_on("01/01/2025", None, "2025-03-01")
        assert not is_rate_valid_on("2025-01-01", None, "March")

    def test_unreadable_end_is_open_ended(self) -> None:
        assert is_rate_valid_on("2025-01-01", "n/a", "2030-01-01")


class TestValidateRateWindow:
    """Tests for validate_rate_window()."""

    TODAY = date(2025, 3, 10)

    def test_valid_window(self) -> None:
        assert validate_rate_window("2025-03-10", "2025-12-31", self.TODAY) == {}

    def test_effective_from_required(self) -> None:
        errors = validate_rate_window("", None, self.TODAY)
        assert errors == {"effective_from": "Effective from date is required"}

    def test_yesterday_is_allowed_at_creation(self) -> None:
        assert validate_rate_window("2025-03-09", None, self.TODAY) == {}

    def test_earlier_than_yesterday_rejected_at_creation(self) -> None:
        errors = validate_rate_window("2025-03-08", None, self.TODAY)
        assert errors == {"effective_from": "Effective from date cannot be in the past"}

    def test_past_start_allowed_when_editing(self) -> None:
        assert validate_rate_window("2024-01-01", None, self.TODAY, creating=False) == {}

    @pytest.mark.parametrize("effective_to", ["2025-03-10", "2025-03-01"])
    def test_effective_to_must_follow_effective_from(self, effective_to: str) -> None:
        errors = validate_rate_window("2025-03-10", effective_to, self.TODAY)
        assert errors == {
            "effective_to": "Effective to date must be after effective from date"
        }

    def test_invalid_dates(self) -> None:
        errors = validate_rate_window("10/03/2025", "soon", self.TODAY)
        assert errors == {
            "effective_from": "Effective from date is invalid",
            "effective_to": "Effective to date is invalid",
        }


class TestCoerceDate:
    def test_datetime_string_keeps_date(self) -> None:
        assert coerce_date("2025-01-02T10:00:00Z") == date(2025, 1, 2)

    def test_blank(self) -> None:
        assert coerce_date("  ") is None
        assert coerce_date(None) is None

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            coerce_date("not a date")

    def test_read_date_never_raises(self) -> None:
        assert read_date("not a date") is None
        assert read_date("2025-02-30") is None
        assert read_date("2025-01-02") == date(2025, 1, 2)
