"""
Global constants for Flowcast.

Purpose
-------
Centralizes the frequency vocabulary, the period-multiplier tables and the
default values used throughout the Flowcast codebase.

Usage
-----
>>> from flowcast.constants import DEFAULT_HORIZON_MONTHS, PERIOD_KINDS
>>> summary = summarize(project_months(records, table, DEFAULT_HORIZON_MONTHS, reference=today))

Categories
----------
- Frequencies: canonical names and label aliases
- Periods: aggregation period kinds and multipliers
- Projection: horizon bounds and defaults
- Currencies: default currency codes
"""

from typing import Dict, Tuple

__all__ = [
    # Frequencies
    "WEEKLY",
    "BIWEEKLY",
    "MONTHLY",
    "QUARTERLY",
    "SEMIANNUAL",
    "ANNUAL",
    "FREQUENCY_ALIASES",
    "DEFAULT_QUARTER_MONTHS",
    # Periods
    "PERIOD_KINDS",
    "PERIOD_MULTIPLIERS",
    "OCCURRENCES_PER_MONTH",
    # Projection
    "DEFAULT_HORIZON_MONTHS",
    "MAX_HORIZON_MONTHS",
    "DEFAULT_PERIOD",
    "MONTHS_PER_YEAR",
    "MONTH_KEY_FORMAT",
    "MONTH_KEY_PATTERN",
    "PAYLOAD_ENVELOPE_KEYS",
    "EXPENSE_ENVELOPE_KEYS",
    # Currencies
    "DEFAULT_PRIMARY_CURRENCY",
    "DEFAULT_SECONDARY_CURRENCY",
]


# =============================================================================
# Frequencies
# =============================================================================

WEEKLY: str = "weekly"
BIWEEKLY: str = "biweekly"
MONTHLY: str = "monthly"
QUARTERLY: str = "quarterly"
SEMIANNUAL: str = "semiannual"
ANNUAL: str = "annual"

FREQUENCY_ALIASES: Dict[str, str] = {
    "weekly": WEEKLY,
    "semanal": WEEKLY,
    "biweekly": BIWEEKLY,
    "fortnightly": BIWEEKLY,
    "quincenal": BIWEEKLY,
    "monthly": MONTHLY,
    "mensual": MONTHLY,
    "quarterly": QUARTERLY,
    "trimestral": QUARTERLY,
    "semiannual": SEMIANNUAL,
    "semestral": SEMIANNUAL,
    "annual": ANNUAL,
    "yearly": ANNUAL,
    "anual": ANNUAL,
}
"""Normalized label → canonical frequency name.

Keys are already normalized (lower case, no accents, no separators), so
"Bi-Weekly", "semi_annual" and "Semestral" all resolve through this table.
"""

DEFAULT_QUARTER_MONTHS: Tuple[int, ...] = (3, 6, 9, 12)
"""Months in which a quarterly record without anchor month fires."""


# =============================================================================
# Periods
# =============================================================================

PERIOD_KINDS: Tuple[str, ...] = ("week", "month", "quarter", "year")
"""Aggregation period kinds accepted by the period aggregator."""

PERIOD_MULTIPLIERS: Dict[str, Dict[str, float]] = {
    MONTHLY: {"week": 0.25, "month": 1.0, "quarter": 3.0, "year": 12.0},
    BIWEEKLY: {"week": 0.5, "month": 2.0, "quarter": 6.0, "year": 24.0},
    WEEKLY: {"week": 1.0, "month": 4.0, "quarter": 13.0, "year": 52.0},
    ANNUAL: {"week": 0.0, "month": 0.0, "quarter": 0.0, "year": 1.0},
    SEMIANNUAL: {"week": 0.0, "month": 0.0, "quarter": 0.5, "year": 2.0},
    QUARTERLY: {"week": 0.0, "month": 0.0, "quarter": 1.0, "year": 4.0},
}
"""Expected contribution of one nominal amount to each period kind.

Proportional approximation, not a count of calendar occurrences.
"""

OCCURRENCES_PER_MONTH: Dict[str, int] = {
    WEEKLY: 4,
    BIWEEKLY: 2,
    MONTHLY: 1,
    QUARTERLY: 1,
    SEMIANNUAL: 1,
    ANNUAL: 1,
}
"""Amount multiplier applied to one projected month occurrence."""


# =============================================================================
# Projection Defaults
# =============================================================================

DEFAULT_HORIZON_MONTHS: int = 3
"""Default number of future months to project (backend default)."""

MAX_HORIZON_MONTHS: int = 12
"""Largest horizon accepted by ProjectionConfig and the CLI."""

DEFAULT_PERIOD: str = "month"
"""Default aggregation period kind."""

MONTHS_PER_YEAR: int = 12
"""Number of months in a year."""

MONTH_KEY_FORMAT: str = "%Y-%m"
"""strftime format of projection month keys (YYYY-MM)."""

MONTH_KEY_PATTERN: str = r"^\d{4}-(0[1-9]|1[0-2])$"
"""Regular expression a string must match to be read as a month key."""

PAYLOAD_ENVELOPE_KEYS: Tuple[str, ...] = ("data",)
"""Keys under which the REST API wraps lists of entries."""

EXPENSE_ENVELOPE_KEYS: Tuple[str, ...] = ("data", "proyeccion")
"""Keys wrapping the monthly rows of a backend expense projection."""


# =============================================================================
# Currencies
# =============================================================================

DEFAULT_PRIMARY_CURRENCY: str = "ARS"
"""Currency code of amount_primary in reports."""

DEFAULT_SECONDARY_CURRENCY: str = "USD"
"""Currency code of amount_secondary in reports."""
