"""
Month projection module for Flowcast.

Purpose
-------
Expands recurring records into concrete monthly occurrences over a horizon
of future months. Produces a mapping keyed by ``YYYY-MM`` that presentation
code can render directly or combine with backend expense projections keyed
the same way.

Key components
--------------
- project_months:
    For each month of the horizon (starting the month after ``reference``;
    the current month counts as already realized) and each record, emits one
    ProjectedOccurrence when the record is active, valid for that month and
    its frequency fires in that month.

- monthly_totals:
    Per-month totals (both currencies) and occurrence counts as a
    pandas DataFrame indexed by month key.

Design principles
-----------------
- Pure: no clock reads, no I/O, no caching. ``reference`` is explicit.
- Stable: occurrences follow input record order within each month.
- Finite: non-finite amounts are emitted as 0.0.

Example
-------
>>> from datetime import date
>>> from flowcast.records import RecurringRecord
>>> from flowcast.projection import project_months
>>> rent = RecurringRecord(1, "Rent", 100_000, day_of_period=10)
>>> proj = project_months([rent], None, 3, reference=date(2025, 1, 15))
>>> list(proj)
['2025-02', '2025-03', '2025-04']
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, Iterable, List, Literal, Mapping, Optional

import pandas as pd

from .records import ProjectedOccurrence, RecurringRecord
from .recurrence import FrequencyTable, as_table
from .utils import (
    clamp_day,
    finite_or_zero,
    month_index,
    month_key,
    next_month_start,
    safe_sum,
    to_date,
)
from .validity import is_active_for

__all__ = [
    "Projection",
    "OCCURRENCE_COLUMNS",
    "project_months",
    "projection_frame",
    "monthly_totals",
]

logger = logging.getLogger(__name__)

Projection = Dict[str, List[ProjectedOccurrence]]

OCCURRENCE_COLUMNS = [
    "month",
    "source_record_id",
    "description",
    "amount_primary",
    "amount_secondary",
    "occurrence_date",
    "source_label",
]


def project_months(
    records: Iterable[RecurringRecord],
    frequencies: Optional[FrequencyTable | Iterable] = None,
    horizon_months: int = 3,
    *,
    reference: date | datetime,
    output: Literal["dict", "dataframe"] = "dict",
) -> Projection | pd.DataFrame:
    """
    Project recurring records over the next *horizon_months* months.

    Parameters
    ----------
    records : Iterable[RecurringRecord]
        Recurring records, in the order occurrences should be listed.
    frequencies : FrequencyTable or iterable of catalog entries, optional
        Frequency catalog used to resolve ``record.frequency_id``. Records
        whose frequency cannot be resolved are treated as monthly.
    horizon_months : int, default 3
        Number of consecutive months to project. Values < 1 yield an empty
        projection.
    reference : date or datetime
        "Now". Projection starts the month after the one containing it.
    output : {"dict", "dataframe"}, default "dict"
        - "dict": ``{"YYYY-MM": [ProjectedOccurrence, ...]}``, every month of
          the horizon present (possibly with an empty list).
        - "dataframe": one row per occurrence with OCCURRENCE_COLUMNS.

    Returns
    -------
    dict or pd.DataFrame

    Notes
    -----
    - Occurrence amount = record amount × occurrences per month (weekly 4,
      biweekly 2, others 1), in both currencies.
    - Occurrence day = ``day_of_period`` clamped to the last day of the month
      (day 31 lands on Feb 28/29, Apr 30, ...), so every occurrence stays in
      the month it is keyed under.
    """
    table = as_table(frequencies)
    records = list(records)
    first = next_month_start(to_date(reference))
    months = month_index(first, horizon_months)

    projection: Projection = {}
    for ts in months:
        target = ts.date()
        key = month_key(target)
        occurrences: List[ProjectedOccurrence] = []
        for record in records:
            if not record.active:
                continue
            if not is_active_for(record, target):
                continue
            rule = table.rule_for(record)
            if not rule.occurs_in_month(target.month, record.month_of_period):
                continue
            factor = rule.occurrences_per_month
            occurrences.append(
                ProjectedOccurrence(
                    source_record_id=record.id,
                    description=record.description,
                    amount_primary=finite_or_zero(record.amount_primary) * factor,
                    amount_secondary=finite_or_zero(record.amount_secondary) * factor,
                    occurrence_date=clamp_day(target.year, target.month, record.day_of_period),
                    source_label=record.source_label,
                )
            )
        projection[key] = occurrences

    logger.debug(
        "Projected %d records over %d months from %s",
        len(records), len(projection), first.isoformat(),
    )

    if output == "dict":
        return projection
    elif output == "dataframe":
        return projection_frame(projection)
    else:
        raise ValueError(f"output must be 'dict' or 'dataframe', got: {output}")


def projection_frame(projection: Mapping[str, List[ProjectedOccurrence]]) -> pd.DataFrame:
    """Flatten a projection mapping into one row per occurrence."""
    rows = [
        {
            "month": key,
            "source_record_id": occ.source_record_id,
            "description": occ.description,
            "amount_primary": occ.amount_primary,
            "amount_secondary": occ.amount_secondary,
            "occurrence_date": occ.occurrence_date,
            "source_label": occ.source_label,
        }
        for key, occurrences in projection.items()
        for occ in occurrences
    ]
    return pd.DataFrame(rows, columns=OCCURRENCE_COLUMNS)


def monthly_totals(projection: Mapping[str, List[ProjectedOccurrence]]) -> pd.DataFrame:
    """
    Per-month totals of a projection.

    Returns
    -------
    pd.DataFrame
        Indexed by month key (all months of the projection, in order), with
        columns ``amount_primary``, ``amount_secondary`` (floats) and
        ``count`` (int).
    """
    data = {
        "amount_primary": [safe_sum(o.amount_primary for o in occ) for occ in projection.values()],
        "amount_secondary": [safe_sum(o.amount_secondary for o in occ) for occ in projection.values()],
        "count": [len(occ) for occ in projection.values()],
    }
    frame = pd.DataFrame(data, index=pd.Index(list(projection.keys()), name="month"))
    return frame.astype({"amount_primary": float, "amount_secondary": float, "count": int})
