"""
Validity window filter for Flowcast.

Decides whether a recurring record is active for a target month or overlaps
a period. Bounds may be missing (no constraint on that side) and are coerced
with ``utils.coerce_date``, so unparsable bound strings also impose nothing.
"""

from __future__ import annotations

from datetime import date, datetime

from .records import RecurringRecord
from .utils import coerce_date, month_start, to_date

__all__ = ["is_active_for", "overlaps_period"]


def is_active_for(record: RecurringRecord, target: date | datetime) -> bool:
    """
    Whether *record* is active during the month containing *target*.

    Month granularity: the record is excluded when the target month is
    strictly before the ``valid_from`` month or strictly after the
    ``valid_until`` month. Both bounds are inclusive.

    Examples
    --------
    >>> r = RecurringRecord(1, "Rent", 100.0, valid_until=date(2025, 3, 5))
    >>> is_active_for(r, date(2025, 3, 31))
    True
    >>> is_active_for(r, date(2025, 4, 1))
    False
    """
    if not record.active:
        return False
    target_month = month_start(to_date(target))

    valid_from = coerce_date(record.valid_from)
    if valid_from is not None and target_month < month_start(valid_from):
        return False

    valid_until = coerce_date(record.valid_until)
    if valid_until is not None and target_month > month_start(valid_until):
        return False

    return True


def overlaps_period(record: RecurringRecord, start: date, end: date) -> bool:
    """Day-level check: False if ``valid_from`` > *end* or ``valid_until`` < *start*."""
    valid_from = coerce_date(record.valid_from)
    if valid_from is not None and valid_from > end:
        return False
    valid_until = coerce_date(record.valid_until)
    if valid_until is not None and valid_until < start:
        return False
    return True
