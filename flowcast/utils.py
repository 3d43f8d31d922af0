"""General utilities for Flowcast

Contents
--------
- Date coercion (date/datetime/Timestamp/ISO string → date)
- Calendar helpers (month start, month keys, month index, day clamping)
- Period boundaries (week/month/quarter/year via pandas periods)
- Payload unwrapping (bare lists or REST envelopes)
- Numeric guards (finite_or_zero, safe_divide, safe_sum)
- Reporting helpers (format_currency)
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .constants import (
    MONTH_KEY_FORMAT,
    MONTH_KEY_PATTERN,
    PAYLOAD_ENVELOPE_KEYS,
    PERIOD_KINDS,
)
from .exceptions import ConfigurationError, PayloadError

__all__ = [
    # Dates
    "coerce_date",
    "to_date",
    # Calendar
    "month_start",
    "month_key",
    "is_month_key",
    "month_index",
    "next_month_start",
    "clamp_day",
    # Periods
    "period_bounds",
    # Payloads
    "unwrap_payload",
    # Numeric guards
    "finite_or_zero",
    "safe_divide",
    "safe_sum",
    # Reporting
    "format_currency",
]

# pandas Period frequencies; W-SUN periods run Monday..Sunday
_PERIOD_FREQ = {
    "week": "W-SUN",
    "month": "M",
    "quarter": "Q",
    "year": "Y",
}


# ---------------------------------------------------------------------------
# Date coercion
# ---------------------------------------------------------------------------

def coerce_date(value: Any) -> Optional[date]:
    """Best-effort conversion of *value* to a ``date``.

    Accepts ``date``, ``datetime``/``pd.Timestamp`` and ISO 8601 strings
    (``"2025-03-01"``, ``"2025-03-01T00:00:00.000Z"``). Anything else,
    including day-first or US-style strings such as ``"01/12/2025"``,
    yields ``None`` ("no constraint").
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if pd.isna(value):
            return None
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        ts = pd.to_datetime(text, format="ISO8601", errors="coerce")
        if pd.isna(ts):
            return None
        return ts.date()
    return None


def to_date(reference: date | datetime | pd.Timestamp) -> date:
    """Return the calendar date of a reference instant."""
    if isinstance(reference, datetime):
        return reference.date()
    return reference


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------

def month_start(value: date) -> date:
    """First day of the month containing *value*."""
    return date(value.year, value.month, 1)


def month_key(value: date) -> str:
    """``YYYY-MM`` key of the month containing *value*."""
    return value.strftime(MONTH_KEY_FORMAT)


def is_month_key(value: Any) -> bool:
    """Whether *value* is a ``YYYY-MM`` month key string."""
    return isinstance(value, str) and re.match(MONTH_KEY_PATTERN, value) is not None


def next_month_start(value: date) -> date:
    """First day of the month after the one containing *value*."""
    period = pd.Period(pd.Timestamp(value.year, value.month, 1), freq="M") + 1
    return period.start_time.date()


def month_index(start: date, months: int) -> pd.DatetimeIndex:
    """Construct a first-of-month DatetimeIndex for *months* periods.

    The first period is the month containing *start*.
    """
    if months <= 0:
        return pd.DatetimeIndex([], dtype="datetime64[ns]")
    first = pd.Timestamp(start.year, start.month, 1)
    return pd.date_range(start=first, periods=months, freq="MS")


def clamp_day(year: int, month: int, day: int) -> date:
    """Date for *day* in the given month, clamped to the month's last day.

    ``clamp_day(2025, 2, 31)`` → ``date(2025, 2, 28)``.
    """
    last = pd.Timestamp(year, month, 1).days_in_month
    return date(year, month, max(1, min(int(day), last)))


# ---------------------------------------------------------------------------
# Period boundaries
# ---------------------------------------------------------------------------

def period_bounds(period_kind: str, reference: date | datetime) -> Tuple[date, date]:
    """Return the (first day, last day) of the period containing *reference*.

    Weeks start on Monday; month, quarter and year use calendar boundaries.

    Raises
    ------
    ConfigurationError
        If *period_kind* is not one of week, month, quarter, year.
    """
    freq = _PERIOD_FREQ.get(period_kind)
    if freq is None:
        raise ConfigurationError(
            f"period must be one of {', '.join(PERIOD_KINDS)} (got {period_kind!r})."
        )
    period = pd.Period(pd.Timestamp(to_date(reference)), freq=freq)
    return period.start_time.date(), period.end_time.date()


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------

def unwrap_payload(payload: Any, keys: Sequence[str] = PAYLOAD_ENVELOPE_KEYS) -> List[Any]:
    """
    Return the list of entries inside *payload*.

    Accepts a bare list or an envelope holding it under one of *keys*
    (``{"data": [...]}`` by default). Nested envelopes are unwrapped too,
    e.g. ``{"data": {"proyeccion": [...]}}`` with
    ``keys=("data", "proyeccion")``.

    Raises
    ------
    PayloadError
        If *payload* has neither shape.
    """
    while isinstance(payload, Mapping):
        key = next((k for k in keys if k in payload), None)
        if key is None:
            break
        payload = payload[key]
    if not isinstance(payload, list):
        raise PayloadError(
            f"Expected a list of entries or a {{'{keys[0]}': [...]}} envelope, "
            f"got {type(payload).__name__}."
        )
    return payload


# ---------------------------------------------------------------------------
# Numeric guards
# ---------------------------------------------------------------------------

def finite_or_zero(value: Any) -> float:
    """Return *value* as float, or 0.0 if missing, unparsable or non-finite."""
    if value is None:
        return 0.0
    try:
        x = float(value)
    except (TypeError, ValueError):
        return 0.0
    return x if np.isfinite(x) else 0.0


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, replacing any non-finite result (0/0, x/0, inf) with *default*."""
    with np.errstate(divide="ignore", invalid="ignore"):
        result = np.float64(numerator) / np.float64(denominator)
    return float(result) if np.isfinite(result) else float(default)


def safe_sum(values: Iterable[float]) -> float:
    """Sum of the finite entries of *values* (NaN and ±inf are skipped)."""
    arr = np.fromiter((finite_or_zero(v) for v in values), dtype=float)
    if arr.size == 0:
        return 0.0
    return float(arr.sum())


# ---------------------------------------------------------------------------
# Reporting helpers
# ---------------------------------------------------------------------------

def format_currency(value: float, decimals: int = 2, symbol: str = "$") -> str:
    """
    Format a monetary amount for tables and text output.

    Examples
    --------
    >>> format_currency(1_500_000)
    '$1,500,000.00'
    >>> format_currency(60_000, decimals=0, symbol='US$')
    'US$60,000'
    """
    amount = finite_or_zero(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{decimals}f}"
