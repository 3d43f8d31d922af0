"""
Unit tests for utils.py module.
"""

import warnings
from datetime import date, datetime

import numpy as np
import pandas as pd
import pytest

from flowcast.exceptions import ConfigurationError, PayloadError
from flowcast.utils import (
    clamp_day,
    coerce_date,
    finite_or_zero,
    format_currency,
    is_month_key,
    month_index,
    month_key,
    month_start,
    next_month_start,
    period_bounds,
    safe_divide,
    safe_sum,
    to_date,
    unwrap_payload,
)


class TestCoerceDate:
    """Tests for coerce_date."""

    def test_passthrough_date(self):
        assert coerce_date(date(2025, 3, 1)) == date(2025, 3, 1)

    def test_datetime_and_timestamp(self):
        assert coerce_date(datetime(2025, 3, 1, 18, 30)) == date(2025, 3, 1)
        assert coerce_date(pd.Timestamp("2025-03-01 10:00")) == date(2025, 3, 1)

    def test_iso_strings(self):
        assert coerce_date("2025-03-01") == date(2025, 3, 1)
        assert coerce_date("2025-03-01T00:00:00.000Z") == date(2025, 3, 1)

    @pytest.mark.parametrize("value", [
        None, "", "   ", "not a date", "2025-13-45", 12345, pd.NaT, "01/12/2025", "31/03/2025",
    ])
    def test_unusable_values(self, value):
        assert coerce_date(value) is None

    def test_non_iso_strings_silent(self):
        """Day-first or US-style strings are not guessed at and raise no warning."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert coerce_date("01/12/2025") is None

    def test_to_date(self):
        assert to_date(datetime(2025, 1, 2, 3, 4)) == date(2025, 1, 2)
        assert to_date(date(2025, 1, 2)) == date(2025, 1, 2)


class TestCalendar:
    """Tests for month helpers."""

    def test_month_start_and_key(self):
        assert month_start(date(2025, 7, 19)) == date(2025, 7, 1)
        assert month_key(date(2025, 7, 19)) == "2025-07"

    def test_next_month_start(self):
        assert next_month_start(date(2025, 1, 31)) == date(2025, 2, 1)
        assert next_month_start(date(2025, 12, 15)) == date(2026, 1, 1)

    @pytest.mark.parametrize("value,expected", [
        ("2025-01", True), ("2025-12", True), ("2025-13", False), ("2025-1", False),
        ("2025-01-01", False), ("meses_proyectados", False), (202501, False), (None, False),
    ])
    def test_is_month_key(self, value, expected):
        assert is_month_key(value) is expected

    def test_month_index(self):
        idx = month_index(date(2025, 11, 20), 3)
        assert list(idx) == [
            pd.Timestamp("2025-11-01"), pd.Timestamp("2025-12-01"), pd.Timestamp("2026-01-01"),
        ]

    def test_month_index_empty(self):
        assert len(month_index(date(2025, 1, 1), 0)) == 0

    @pytest.mark.parametrize("year,month,day,expected", [
        (2025, 2, 31, date(2025, 2, 28)),
        (2024, 2, 31, date(2024, 2, 29)),
        (2025, 4, 31, date(2025, 4, 30)),
        (2025, 1, 31, date(2025, 1, 31)),
        (2025, 6, 15, date(2025, 6, 15)),
    ])
    def test_clamp_day(self, year, month, day, expected):
        assert clamp_day(year, month, day) == expected


class TestPeriodBounds:
    """Tests for period_bounds."""

    @pytest.mark.parametrize("reference", [
        date(2025, 5, 12),  # Monday
        date(2025, 5, 14),  # Wednesday
        date(2025, 5, 18),  # Sunday
    ])
    def test_week_starts_monday(self, reference):
        assert period_bounds("week", reference) == (date(2025, 5, 12), date(2025, 5, 18))

    def test_week_across_months(self):
        assert period_bounds("week", date(2025, 7, 1)) == (date(2025, 6, 30), date(2025, 7, 6))

    def test_month(self):
        assert period_bounds("month", date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_quarter(self):
        assert period_bounds("quarter", date(2025, 8, 3)) == (date(2025, 7, 1), date(2025, 9, 30))

    def test_year(self):
        assert period_bounds("year", datetime(2025, 8, 3, 9)) == (date(2025, 1, 1), date(2025, 12, 31))

    def test_unknown_kind(self):
        with pytest.raises(ConfigurationError, match="period must be one of"):
            period_bounds("fortnight", date(2025, 1, 1))


class TestUnwrapPayload:
    """Tests for unwrap_payload."""

    def test_default_envelope(self):
        assert unwrap_payload({"success": True, "data": [1, 2]}) == [1, 2]

    def test_nested_envelopes(self):
        payload = {"data": {"proyeccion": [{"mes": "2025-01"}], "meses_proyectados": 1}}
        assert unwrap_payload(payload, keys=("data", "proyeccion")) == [{"mes": "2025-01"}]

    def test_unlisted_key_not_unwrapped(self):
        with pytest.raises(PayloadError, match="Expected a list"):
            unwrap_payload({"proyeccion": []})


class TestNumericGuards:
    """Tests for finite_or_zero, safe_divide and safe_sum."""

    @pytest.mark.parametrize("value,expected", [
        (12.5, 12.5), ("1500.75", 1500.75), (None, 0.0), ("abc", 0.0),
        (float("nan"), 0.0), (float("inf"), 0.0), (np.float64(3), 3.0),
    ])
    def test_finite_or_zero(self, value, expected):
        assert finite_or_zero(value) == expected

    def test_safe_divide(self):
        assert safe_divide(300, 3) == pytest.approx(100)
        assert safe_divide(1, 0) == 0.0
        assert safe_divide(0, 0) == 0.0
        assert safe_divide(float("inf"), 2) == 0.0
        assert safe_divide(1, 0, default=-1.0) == -1.0

    def test_safe_sum(self):
        assert safe_sum([1.0, 2.0, float("nan"), float("inf"), 3.0]) == pytest.approx(6.0)
        assert safe_sum([]) == 0.0
        assert safe_sum(x for x in (1, 2)) == pytest.approx(3.0)


class TestFormatCurrency:
    def test_defaults(self):
        assert format_currency(1_500_000) == "$1,500,000.00"

    def test_symbol_and_decimals(self):
        assert format_currency(60_000, decimals=0, symbol="US$") == "US$60,000"

    def test_negative_and_nan(self):
        assert format_currency(-20_000) == "-$20,000.00"
        assert format_currency(float("nan")) == "$0.00"
