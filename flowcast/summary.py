"""
Summary reduction for Flowcast.

Purpose
-------
Folds month projections and period totals into the figures dashboards show:
totals in both currencies, occurrence count and monthly run-rate. Every
number returned is finite; NaN/inf guards live in ``utils.safe_divide`` and
``utils.safe_sum``.

Also joins this engine's income projection with an expense projection
computed elsewhere (keyed by the same ``YYYY-MM`` month keys) for
side-by-side reporting.

Example
-------
>>> from flowcast.summary import summarize
>>> summary = summarize(project_months(records, table, 3, reference=today))
>>> summary.monthly_average
100000.0
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from numbers import Real
from typing import Any, Iterable, List, Mapping, Optional, Union

import pandas as pd

from .constants import EXPENSE_ENVELOPE_KEYS
from .records import ProjectedOccurrence
from .projection import monthly_totals
from .types import SummaryDict
from .utils import finite_or_zero, is_month_key, safe_divide, safe_sum, unwrap_payload

__all__ = [
    "ProjectionSummary",
    "summarize",
    "combine_with_expenses",
]


@dataclass(frozen=True)
class ProjectionSummary:
    """Totals of a projection or period aggregation."""
    total_primary: float
    total_secondary: float
    count: int
    monthly_average: float

    def to_dict(self) -> SummaryDict:
        return SummaryDict(**asdict(self))


def summarize(
    result: Union[Mapping[str, List[ProjectedOccurrence]], pd.DataFrame, float],
    horizon_months: Optional[int] = None,
) -> ProjectionSummary:
    """
    Reduce a month projection or a period total to a ProjectionSummary.

    Parameters
    ----------
    result : mapping, DataFrame or float
        - Month projection (``{"YYYY-MM": [ProjectedOccurrence, ...]}``):
          totals over all months and occurrences, ``count`` = occurrences,
          ``monthly_average`` = total_primary / horizon.
        - Occurrence frame (``project_months(..., output="dataframe")``):
          same figures, one row per occurrence.
        - Period total (scalar): wrapped as total_primary, with
          total_secondary, count and monthly_average all 0 (no occurrence
          detail exists at that granularity and no averaging is done).
    horizon_months : int, optional
        Divisor of the monthly average. Defaults to the number of month keys
        in the projection. A frame only holds months with occurrences, so
        its default is the number of distinct ``month`` values; pass the
        projection horizon when some months may be empty. A zero horizon
        yields an average of 0.0.

    Returns
    -------
    ProjectionSummary
    """
    if isinstance(result, pd.DataFrame):
        total_primary = safe_sum(result.get("amount_primary", ()))
        total_secondary = safe_sum(result.get("amount_secondary", ()))
        if horizon_months is None:
            horizon_months = result["month"].nunique() if "month" in result else 0
        return ProjectionSummary(
            total_primary=total_primary,
            total_secondary=total_secondary,
            count=len(result),
            monthly_average=safe_divide(total_primary, horizon_months),
        )

    if isinstance(result, Real):
        return ProjectionSummary(
            total_primary=finite_or_zero(result),
            total_secondary=0.0,
            count=0,
            monthly_average=0.0,
        )

    occurrences = [occ for month in result.values() for occ in month]
    total_primary = safe_sum(o.amount_primary for o in occurrences)
    total_secondary = safe_sum(o.amount_secondary for o in occurrences)
    horizon = len(result) if horizon_months is None else horizon_months
    return ProjectionSummary(
        total_primary=total_primary,
        total_secondary=total_secondary,
        count=len(occurrences),
        monthly_average=safe_divide(total_primary, horizon),
    )


def _expense_series(expenses: Union[Mapping[str, Any], Iterable[Mapping[str, Any]]]) -> pd.Series:
    """Month key → expense total, from a month mapping, backend rows or their envelope."""
    if isinstance(expenses, Mapping) and not any(k in expenses for k in EXPENSE_ENVELOPE_KEYS):
        pairs = {k: finite_or_zero(v) for k, v in expenses.items() if is_month_key(k)}
        return pd.Series(pairs, dtype=float)

    pairs = {}
    if isinstance(expenses, Mapping):
        rows = unwrap_payload(expenses, keys=EXPENSE_ENVELOPE_KEYS)
    else:
        rows = list(expenses)
    for row in rows:
        if not isinstance(row, Mapping):
            continue
        key = row.get("mes") or row.get("month")
        if not is_month_key(key):
            continue
        amount = row.get("total_ars", row.get("total", row.get("amount_primary")))
        pairs[key] = pairs.get(key, 0.0) + finite_or_zero(amount)
    return pd.Series(pairs, dtype=float)


def combine_with_expenses(
    projection: Mapping[str, List[ProjectedOccurrence]],
    expenses: Union[Mapping[str, Any], Iterable[Mapping[str, Any]]],
) -> pd.DataFrame:
    """
    Join projected income with an externally computed expense projection.

    Parameters
    ----------
    projection : mapping
        Output of ``project_months`` (income records).
    expenses : mapping or iterable of mappings
        Either ``{"YYYY-MM": amount}`` or the backend's monthly rows, each with
        ``mes`` (or ``month``) and ``total_ars`` (or ``total``). The rows may
        come wrapped as the backend returns them
        (``{"data": {"proyeccion": [...], "meses_proyectados": N}}``).
        Keys and rows that are not ``YYYY-MM`` months are ignored.

    Returns
    -------
    pd.DataFrame
        Indexed by month key over the union of both inputs (sorted), with
        float columns ``income``, ``expenses`` and ``net = income - expenses``.
        Months missing on either side count as 0.

    Raises
    ------
    PayloadError
        If an envelope does not hold a list of rows.
    """
    income = monthly_totals(projection)["amount_primary"]
    spent = _expense_series(expenses)
    months = sorted(set(income.index) | set(spent.index))
    frame = pd.DataFrame(
        {
            "income": income.reindex(months, fill_value=0.0),
            "expenses": spent.reindex(months, fill_value=0.0),
        },
        index=pd.Index(months, name="month"),
    ).astype(float)
    frame["net"] = frame["income"] - frame["expenses"]
    return frame
