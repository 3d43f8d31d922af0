"""
Recurrence classification for Flowcast.

Purpose
-------
Maps a frequency label to a closed set of recurrence rules. Each rule knows
in which calendar months a record fires and how one nominal amount scales
into a week, month, quarter or year.

Key components
--------------
- FrequencyRule:
    Enum with one member per recognized frequency (weekly, biweekly, monthly,
    quarterly, semiannual, annual). Members carry ``occurs_in_month``,
    ``period_multiplier``, ``occurrences_per_month`` and ``requires_anchor``.

- normalize_label / classify:
    Label normalization (case, accents and separators ignored) and lookup,
    with an explicit fallback to MONTHLY for unrecognized labels.

- FrequencyTable:
    Resolves a record's rule through the frequency catalog, falling back to
    the label embedded on the record, then to MONTHLY.

Example
-------
>>> from flowcast.recurrence import classify, FrequencyRule
>>> classify("Trimestral") is FrequencyRule.QUARTERLY
True
>>> FrequencyRule.QUARTERLY.occurs_in_month(8, anchor_month=2)
True
>>> FrequencyRule.WEEKLY.period_multiplier("quarter")
13.0
"""

from __future__ import annotations

import logging
import unicodedata
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from .constants import (
    ANNUAL,
    BIWEEKLY,
    DEFAULT_QUARTER_MONTHS,
    FREQUENCY_ALIASES,
    MONTHLY,
    OCCURRENCES_PER_MONTH,
    PERIOD_MULTIPLIERS,
    QUARTERLY,
    SEMIANNUAL,
    WEEKLY,
)
from .records import FrequencyDefinition, RecurringRecord

__all__ = [
    "FrequencyRule",
    "FrequencyTable",
    "normalize_label",
    "classify",
    "as_table",
]

logger = logging.getLogger(__name__)


class FrequencyRule(Enum):
    """Closed set of recurrence rules, one member per frequency."""

    WEEKLY = WEEKLY
    BIWEEKLY = BIWEEKLY
    MONTHLY = MONTHLY
    QUARTERLY = QUARTERLY
    SEMIANNUAL = SEMIANNUAL
    ANNUAL = ANNUAL

    @property
    def requires_anchor(self) -> bool:
        """Whether the rule never fires without an anchor month."""
        return self in (FrequencyRule.ANNUAL, FrequencyRule.SEMIANNUAL)

    @property
    def occurrences_per_month(self) -> int:
        """Amount multiplier for one projected month (weekly 4, biweekly 2)."""
        return OCCURRENCES_PER_MONTH[self.value]

    def occurs_in_month(self, month: int, anchor_month: Optional[int] = None) -> bool:
        """
        Decide whether the rule produces an occurrence in calendar *month*.

        Weekly, biweekly and monthly rules fire every month. Annual fires in
        the anchor month, semiannual every 6 months from it, quarterly every
        3 months from it (or in March, June, September and December when no
        anchor is given). Annual and semiannual rules without anchor never
        fire.
        """
        if self in (FrequencyRule.WEEKLY, FrequencyRule.BIWEEKLY, FrequencyRule.MONTHLY):
            return True
        if self is FrequencyRule.QUARTERLY:
            if anchor_month is None:
                return month in DEFAULT_QUARTER_MONTHS
            return (month - anchor_month) % 3 == 0
        if anchor_month is None:
            return False
        if self is FrequencyRule.SEMIANNUAL:
            return (month - anchor_month) % 6 == 0
        return month == anchor_month

    def period_multiplier(self, period_kind: str) -> float:
        """
        Scaling factor from one nominal amount to a *period_kind* contribution.

        Unknown period kinds yield 0.0.
        """
        return PERIOD_MULTIPLIERS[self.value].get(period_kind, 0.0)


def normalize_label(label: Optional[str]) -> str:
    """Lower-case *label* and drop accents, spaces, hyphens and underscores."""
    if not label:
        return ""
    decomposed = unicodedata.normalize("NFKD", str(label))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return "".join(ch for ch in stripped.casefold() if ch.isalnum())


def classify(label: Optional[str]) -> FrequencyRule:
    """
    Map a frequency label to its rule.

    Unrecognized or missing labels are treated as MONTHLY.
    """
    canonical = FREQUENCY_ALIASES.get(normalize_label(label))
    if canonical is None:
        if label:
            logger.debug("Unrecognized frequency label %r, treating as monthly", label)
        return FrequencyRule.MONTHLY
    return FrequencyRule(canonical)


FrequencyEntry = Union[FrequencyDefinition, Mapping[str, Any]]


class FrequencyTable:
    """
    Frequency catalog lookup.

    Parameters
    ----------
    definitions : Iterable[FrequencyDefinition | Mapping], optional
        Catalog entries. Mappings need an ``id`` and one of ``label``,
        ``nombre_frecuencia`` or ``nombre`` (the backend's field names).
        Entries without an id are ignored.

    Examples
    --------
    >>> table = FrequencyTable([{"id": 8, "nombre_frecuencia": "Anual"}])
    >>> table.rule_for_id(8)
    <FrequencyRule.ANNUAL: 'annual'>
    >>> table.rule_for_id(99)
    <FrequencyRule.MONTHLY: 'monthly'>
    """

    def __init__(self, definitions: Optional[Iterable[FrequencyEntry]] = None):
        self._labels: Dict[Any, str] = {}
        for entry in definitions or ():
            if isinstance(entry, FrequencyDefinition):
                self._labels[entry.id] = entry.label
                continue
            freq_id = entry.get("id")
            if freq_id is None:
                continue
            label = entry.get("label") or entry.get("nombre_frecuencia") or entry.get("nombre")
            self._labels[freq_id] = label or ""

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, freq_id: object) -> bool:
        return freq_id in self._labels

    def label_for(self, freq_id: Any) -> Optional[str]:
        """Catalog label for *freq_id*, or None if absent."""
        return self._labels.get(freq_id)

    def rule_for_id(self, freq_id: Any) -> FrequencyRule:
        """Rule for a catalog id; unknown ids are treated as MONTHLY."""
        return classify(self._labels.get(freq_id))

    def rule_for(self, record: RecurringRecord) -> FrequencyRule:
        """Resolve a record's rule: catalog id, then embedded label, then MONTHLY."""
        if record.frequency_id is not None and record.frequency_id in self._labels:
            return classify(self._labels[record.frequency_id])
        return classify(record.frequency_label)

    def items(self):
        """(id, label) pairs in insertion order."""
        return self._labels.items()


def as_table(frequencies: Optional[Union[FrequencyTable, Iterable[FrequencyEntry]]]) -> FrequencyTable:
    """Accept a ready FrequencyTable or build one from raw catalog entries."""
    if isinstance(frequencies, FrequencyTable):
        return frequencies
    return FrequencyTable(frequencies)
