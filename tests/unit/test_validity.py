"""
Unit tests for validity.py module.
"""

from datetime import date, datetime

from flowcast.validity import is_active_for, overlaps_period


class TestIsActiveFor:
    """Tests for the month-granularity validity filter."""

    def test_inactive_never(self, make_record):
        """Inactive records are rejected whatever the window."""
        record = make_record(active=False)
        assert not is_active_for(record, date(2025, 3, 1))

    def test_no_bounds(self, make_record):
        """Missing bounds impose no restriction."""
        record = make_record()
        assert is_active_for(record, date(1999, 1, 1))
        assert is_active_for(record, date(2099, 12, 31))

    def test_valid_until_before_target(self, make_record):
        """Record ending in February is excluded in March."""
        record = make_record(valid_until=date(2025, 2, 28))
        assert not is_active_for(record, date(2025, 3, 1))

    def test_valid_until_inclusive_month(self, make_record):
        """Record ending early in the target month is still valid that month."""
        record = make_record(valid_until=date(2025, 3, 2))
        assert is_active_for(record, date(2025, 3, 31))

    def test_valid_from_after_target(self, make_record):
        """Record starting in April is excluded in March."""
        record = make_record(valid_from=date(2025, 4, 1))
        assert not is_active_for(record, date(2025, 3, 15))

    def test_valid_from_inclusive_month(self, make_record):
        """Record starting late in the target month is valid that month."""
        record = make_record(valid_from=date(2025, 3, 28))
        assert is_active_for(record, date(2025, 3, 1))

    def test_string_bounds(self, make_record):
        """ISO strings are accepted as bounds."""
        record = make_record(valid_from="2025-01-01", valid_until="2025-03-31T00:00:00.000Z")
        assert not is_active_for(record, date(2024, 12, 1))
        assert is_active_for(record, date(2025, 2, 1))
        assert not is_active_for(record, date(2025, 4, 1))

    def test_unparsable_bounds_impose_nothing(self, make_record):
        """Garbage bounds are treated as no constraint."""
        record = make_record(valid_from="soon", valid_until="31/31/2025")
        assert is_active_for(record, date(2025, 6, 1))

    def test_datetime_target(self, make_record):
        """Datetime targets are reduced to their month."""
        record = make_record(valid_until=date(2025, 3, 1))
        assert is_active_for(record, datetime(2025, 3, 31, 23, 59))


class TestOverlapsPeriod:
    """Tests for the day-level period overlap check."""

    def test_valid_from_after_end(self, make_record):
        record = make_record(valid_from=date(2025, 5, 19))
        assert not overlaps_period(record, date(2025, 5, 12), date(2025, 5, 18))

    def test_valid_until_before_start(self, make_record):
        record = make_record(valid_until=date(2025, 5, 11))
        assert not overlaps_period(record, date(2025, 5, 12), date(2025, 5, 18))

    def test_boundary_days_inclusive(self, make_record):
        """Bounds touching the period edges overlap."""
        record = make_record(valid_from=date(2025, 5, 18), valid_until=date(2025, 5, 12))
        assert overlaps_period(record, date(2025, 5, 12), date(2025, 5, 18))

    def test_no_bounds(self, make_record):
        assert overlaps_period(make_record(), date(2025, 1, 1), date(2025, 12, 31))
