"""Tests for the pure input checks and the deterministic clock."""

from datetime import date, datetime, timezone

import pytest

from stock_kernel.domain.clock import DeterministicClock
from stock_kernel.domain.validation import (
    parse_calendar_date,
    require_non_negative_stock,
    require_positive_limit,
    require_positive_quantity,
    require_text,
)
from stock_kernel.exceptions import (
    InvalidDateFormatError,
    InvalidLimitError,
    InvalidProductFieldError,
    InvalidQuantityError,
    ValidationError,
)


class TestQuantities:

    @pytest.mark.parametrize("value", [0, -1, 1.5, "3", True, None])
    def test_positive_quantity_rejects(self, value):
        with pytest.raises(InvalidQuantityError):
            require_positive_quantity(value)

    def test_positive_quantity_accepts(self):
        require_positive_quantity(1)

    def test_zero_stock_allowed(self):
        require_non_negative_stock(0)

    def test_negative_stock_reason(self):
        with pytest.raises(InvalidQuantityError, match="stock must not be negative"):
            require_non_negative_stock(-1)

    def test_limit(self):
        with pytest.raises(InvalidLimitError):
            require_positive_limit(0)
        require_positive_limit(1)


class TestText:

    def test_stripped(self):
        assert require_text("  Widget ", "name") == "Widget"

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_empty_rejected(self, value):
        with pytest.raises(InvalidProductFieldError) as exc_info:
            require_text(value, "category")
        assert exc_info.value.field_name == "category"


class TestCalendarDate:

    def test_valid(self):
        assert parse_calendar_date("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize("value", ["2023-02-29", "2024-00-10", "20240101", "2024-01-01T00:00", 20240101])
    def test_invalid(self, value):
        with pytest.raises(InvalidDateFormatError):
            parse_calendar_date(value)

    def test_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            parse_calendar_date("nope")


class TestDeterministicClock:

    def test_fixed_until_advanced(self):
        start = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)
        clock = DeterministicClock(start)

        assert clock.now() == clock.now() == start
        clock.advance()
        assert clock.now() == datetime(2024, 5, 1, 8, 0, 1, tzinfo=timezone.utc)
        clock.advance(59)
        assert clock.now_utc() == datetime(2024, 5, 1, 8, 1, tzinfo=timezone.utc)
