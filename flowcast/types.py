"""
Type definitions for Flowcast.

Purpose
-------
Provides TypedDict definitions for the JSON-able dictionaries Flowcast hands
to presentation code and writes to disk.

Type Definitions
----------------
OccurrenceDict
    One projected occurrence: {"source_record_id", "description", ...}

SummaryDict
    Projection/period summary: {"total_primary", "total_secondary", "count",
    "monthly_average"}

ProjectionDict
    Exported projection: {"schema_version", "reference", "horizon_months",
    "months", "summary"}
"""

from typing import Dict, List, Optional, Union
from typing_extensions import TypedDict, NotRequired

__all__ = [
    "OccurrenceDict",
    "SummaryDict",
    "ProjectionDict",
]


class OccurrenceDict(TypedDict):
    """
    One projected occurrence, dates as ISO strings.

    Examples
    --------
    >>> occ: OccurrenceDict = {
    ...     "source_record_id": 7,
    ...     "description": "Salary",
    ...     "amount_primary": 1_500_000.0,
    ...     "amount_secondary": 1_250.0,
    ...     "occurrence_date": "2025-02-05",
    ...     "source_label": "Employer",
    ... }
    """

    source_record_id: Union[int, str]
    description: str
    amount_primary: float
    amount_secondary: float
    occurrence_date: str
    source_label: Optional[str]


class SummaryDict(TypedDict):
    """Totals of a projection or period aggregation (all numbers finite)."""

    total_primary: float
    total_secondary: float
    count: int
    monthly_average: float


class ProjectionDict(TypedDict):
    """
    Exported month projection.

    ``months`` maps ``YYYY-MM`` keys to their occurrences, in horizon order.
    """

    schema_version: str
    reference: str
    horizon_months: int
    months: Dict[str, List[OccurrenceDict]]
    summary: SummaryDict
    totals: NotRequired[Dict[str, float]]
