"""
Period aggregation module for Flowcast.

Purpose
-------
Sums the expected contribution of recurring records to one calendar period
(week, month, quarter or year) containing a reference instant. Frequencies
are reconciled through per-rule multipliers (a monthly record contributes 3×
to a quarter, a weekly one 13×, an annual one only to a year), which is a
proportional approximation rather than a count of calendar occurrences.

Key components
--------------
- aggregate_period:
    Scalar primary-currency total for the period.
- aggregate_breakdown:
    Per-record contributions as a pandas Series whose sum equals
    ``aggregate_period``.

Exclusion rules
---------------
A record contributes nothing when it is inactive, when it is not valid for
the month in which the period starts, when its ``valid_from`` is after the
period's last day or its ``valid_until`` before the period's first day, or
when its frequency needs an anchor month it does not have.

Example
-------
>>> from datetime import date
>>> from flowcast.records import RecurringRecord
>>> from flowcast.aggregation import aggregate_period
>>> wage = RecurringRecord(1, "Wage", 50_000, frequency_label="semanal")
>>> aggregate_period([wage], None, "month", date(2025, 5, 14))
200000.0
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from .constants import PERIOD_KINDS
from .records import RecurringRecord
from .recurrence import FrequencyTable, as_table
from .utils import finite_or_zero, period_bounds, safe_sum
from .validity import is_active_for, overlaps_period

__all__ = [
    "aggregate_period",
    "aggregate_breakdown",
]

logger = logging.getLogger(__name__)


def aggregate_breakdown(
    records: Iterable[RecurringRecord],
    frequencies: Optional[FrequencyTable | Iterable],
    period_kind: str,
    reference: date | datetime,
) -> pd.Series:
    """
    Contribution of each record to the period containing *reference*.

    Parameters
    ----------
    records : Iterable[RecurringRecord]
        Recurring records.
    frequencies : FrequencyTable or iterable of catalog entries, optional
        Frequency catalog used to resolve ``record.frequency_id``.
    period_kind : {"week", "month", "quarter", "year"}
        Period to aggregate into. Weeks run Monday to Sunday.
    reference : date or datetime
        "Now"; selects the period.

    Returns
    -------
    pd.Series
        Float contributions indexed by record id (name ``contribution``).
        Only records with a non-zero contribution are listed; an unknown
        period kind yields an empty Series.
    """
    ids, values = [], []
    if period_kind not in PERIOD_KINDS:
        logger.debug("Unknown period kind %r, nothing to aggregate", period_kind)
        return pd.Series(values, index=pd.Index(ids, name="record_id"), name="contribution", dtype=float)

    table = as_table(frequencies)
    start, end = period_bounds(period_kind, reference)

    for record in records:
        if not record.active:
            continue
        if not is_active_for(record, start):
            continue
        if not overlaps_period(record, start, end):
            continue
        rule = table.rule_for(record)
        if rule.requires_anchor and record.month_of_period is None:
            continue
        contribution = finite_or_zero(record.amount_primary) * rule.period_multiplier(period_kind)
        if contribution == 0.0 or not np.isfinite(contribution):
            continue
        ids.append(record.id)
        values.append(contribution)

    return pd.Series(values, index=pd.Index(ids, name="record_id"), name="contribution", dtype=float)


def aggregate_period(
    records: Iterable[RecurringRecord],
    frequencies: Optional[FrequencyTable | Iterable],
    period_kind: str,
    reference: date | datetime,
) -> float:
    """
    Primary-currency total of all record contributions to one period.

    Same parameters as ``aggregate_breakdown``. Never raises for well-typed
    input: anything that produces no contribution yields 0.0.

    Examples
    --------
    >>> aggregate_period(records, table, "quarter", date(2025, 8, 3))
    450000.0
    """
    breakdown = aggregate_breakdown(records, frequencies, period_kind, reference)
    return safe_sum(breakdown.to_numpy())
