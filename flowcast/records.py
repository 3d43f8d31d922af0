"""
Recurring record data model for Flowcast.

Purpose
-------
Immutable value objects exchanged between the data layer, the projection
engine and the presentation layer:

- RecurringRecord:
    A recurring income or expense commitment with amounts in two currencies,
    a frequency reference, a day-of-month anchor, an optional anchor month,
    an active flag and an optional validity window.

- FrequencyDefinition:
    One entry of the frequency catalog, mapping ``id`` to a human label.

- ProjectedOccurrence:
    One concrete occurrence of a record in a projected month. Ephemeral,
    recomputed on every projection.

Records are supplied fresh by the caller on each call; nothing here holds
mutable state.

Example
-------
>>> from datetime import date
>>> from flowcast.records import RecurringRecord
>>> salary = RecurringRecord(
...     id=1, description="Salary", amount_primary=1_500_000,
...     amount_secondary=1_250, frequency_id=4, day_of_period=5,
... )
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from .exceptions import ValidationError

__all__ = [
    "RecordId",
    "RecurringRecord",
    "FrequencyDefinition",
    "ProjectedOccurrence",
]

RecordId = Union[int, str]


@dataclass(frozen=True)
class RecurringRecord:
    """
    Recurring income or expense commitment.

    Parameters
    ----------
    id : int or str
        Unique identifier, copied onto every projected occurrence.
    description : str
        Free text label.
    amount_primary : float
        Nominal amount per occurrence in the primary (reporting) currency.
    amount_secondary : float, default 0.0
        Reference conversion in the secondary currency, computed upstream.
    frequency_id : Optional[int], default None
        Reference into the frequency catalog.
    day_of_period : int, default 1
        Anchor day (1..31) within the month an occurrence lands in.
    month_of_period : Optional[int], default None
        Anchor month (1..12). Needed by annual and semiannual frequencies and
        optional for quarterly ones.
    active : bool, default True
        Inactive records never contribute.
    valid_from, valid_until : Optional[date | str], default None
        Validity window bounds, compared at month granularity by the month
        projector. Unparsable values impose no constraint.
    source_label : Optional[str], default None
        Income source or category name carried onto occurrences.
    frequency_label : Optional[str], default None
        Embedded frequency label, used when ``frequency_id`` is not found in
        the catalog.
    currency : Optional[str], default None
        Native currency code of the record (informational).

    Raises
    ------
    ValidationError
        If ``day_of_period`` is outside 1..31 or ``month_of_period`` outside
        1..12.
    """

    id: RecordId
    description: str
    amount_primary: float
    amount_secondary: float = 0.0
    frequency_id: Optional[int] = None
    day_of_period: int = 1
    month_of_period: Optional[int] = None
    active: bool = True
    valid_from: Optional[Union[date, str]] = None
    valid_until: Optional[Union[date, str]] = None
    source_label: Optional[str] = None
    frequency_label: Optional[str] = None
    currency: Optional[str] = None

    def __post_init__(self) -> None:
        if not 1 <= int(self.day_of_period) <= 31:
            raise ValidationError(
                f"day_of_period must be in 1..31 (got {self.day_of_period}) "
                f"for record {self.id!r}."
            )
        if self.month_of_period is not None and not 1 <= int(self.month_of_period) <= 12:
            raise ValidationError(
                f"month_of_period must be in 1..12 (got {self.month_of_period}) "
                f"for record {self.id!r}."
            )


@dataclass(frozen=True)
class FrequencyDefinition:
    """Frequency catalog entry: ``id`` → human label (e.g. "Mensual")."""

    id: int
    label: str


@dataclass(frozen=True)
class ProjectedOccurrence:
    """One occurrence of a recurring record in a projected month."""

    source_record_id: RecordId
    description: str
    amount_primary: float
    amount_secondary: float
    occurrence_date: date
    source_label: Optional[str] = None
