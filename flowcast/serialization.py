"""
Serialization module for Flowcast.

Purpose
-------
Loads recurring records and frequency catalogs from REST payloads or JSON
files, and exports projections to JSON for presentation code.

Supports:
- Record payloads as a list or as the API's ``{"data": [...]}`` envelope,
  with the API's field names or Flowcast's own (see ``RecurringRecordConfig``)
- Frequency catalogs in the same shapes
- Projection export with summary and per-month totals

Design Principles
-----------------
- Type-safe: every record is validated through Pydantic configs
- Human-readable: JSON with ISO dates and ``YYYY-MM`` month keys
- Versioned: exports carry ``schema_version``

Example
-------
>>> from pathlib import Path
>>> from flowcast.serialization import load_records, load_frequencies, save_projection
>>> records = load_records(Path("ingresos.json"))
>>> table = load_frequencies(Path("frecuencias.json"))
>>> proj = project_months(records, table, 6, reference=date(2025, 1, 15))
>>> save_projection(Path("projection.json"), proj, reference=date(2025, 1, 15))
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from .config import FrequencyDefinitionConfig, RecurringRecordConfig
from .exceptions import PayloadError, ValidationError
from .projection import monthly_totals
from .records import FrequencyDefinition, ProjectedOccurrence, RecurringRecord
from .recurrence import FrequencyTable
from .summary import summarize
from .types import OccurrenceDict, ProjectionDict
from .utils import unwrap_payload

__all__ = [
    "SCHEMA_VERSION",
    "unwrap_payload",
    "record_from_dict",
    "record_to_dict",
    "records_from_payload",
    "frequencies_from_payload",
    "load_records",
    "load_frequencies",
    "occurrence_to_dict",
    "projection_to_dict",
    "save_projection",
]


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------

def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise PayloadError(f"File not found: {path}") from e
    except json.JSONDecodeError as e:
        raise PayloadError(f"Invalid JSON in {path}: {e}") from e


# ---------------------------------------------------------------------------
# Record Serialization
# ---------------------------------------------------------------------------

def record_from_dict(data: Mapping[str, Any]) -> RecurringRecord:
    """
    Create a RecurringRecord from a dictionary.

    Parameters
    ----------
    data : dict
        Record fields, with Flowcast or REST API names.

    Returns
    -------
    RecurringRecord

    Raises
    ------
    ValidationError
        If the record fails validation (e.g. ``dia_de_pago`` = 40).
    """
    try:
        return RecurringRecordConfig.model_validate(dict(data)).to_record()
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid record {data.get('id')!r}: {e}") from e


def record_to_dict(record: RecurringRecord) -> Dict[str, Any]:
    """
    Convert a RecurringRecord to a JSON-able dictionary.

    ``record_from_dict(record_to_dict(r))`` rebuilds an equal record when
    the validity bounds of *r* are dates (or None).
    """
    def iso(value):
        return value.isoformat() if isinstance(value, date) else value

    return {
        "id": record.id,
        "description": record.description,
        "amount_primary": record.amount_primary,
        "amount_secondary": record.amount_secondary,
        "frequency_id": record.frequency_id,
        "day_of_period": record.day_of_period,
        "month_of_period": record.month_of_period,
        "active": record.active,
        "valid_from": iso(record.valid_from),
        "valid_until": iso(record.valid_until),
        "source_label": record.source_label,
        "frequency_label": record.frequency_label,
        "currency": record.currency,
    }


def records_from_payload(payload: Any) -> List[RecurringRecord]:
    """Validate every entry of a record payload (list or envelope)."""
    entries = unwrap_payload(payload)
    records = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise PayloadError(f"Record entries must be objects, got {type(entry).__name__}.")
        records.append(record_from_dict(entry))
    return records


def frequencies_from_payload(payload: Any) -> FrequencyTable:
    """Build a FrequencyTable from a catalog payload (list or envelope)."""
    definitions: List[FrequencyDefinition] = []
    for entry in unwrap_payload(payload):
        try:
            definitions.append(FrequencyDefinitionConfig.model_validate(entry).to_definition())
        except PydanticValidationError as e:
            raise PayloadError(f"Invalid frequency definition {entry!r}: {e}") from e
    return FrequencyTable(definitions)


def load_records(path: Path) -> List[RecurringRecord]:
    """Load recurring records from a JSON file."""
    return records_from_payload(_read_json(Path(path)))


def load_frequencies(path: Path) -> FrequencyTable:
    """Load a frequency catalog from a JSON file."""
    return frequencies_from_payload(_read_json(Path(path)))


# ---------------------------------------------------------------------------
# Projection Serialization
# ---------------------------------------------------------------------------

def occurrence_to_dict(occurrence: ProjectedOccurrence) -> OccurrenceDict:
    """Convert a ProjectedOccurrence to a JSON-able dictionary."""
    return {
        "source_record_id": occurrence.source_record_id,
        "description": occurrence.description,
        "amount_primary": float(occurrence.amount_primary),
        "amount_secondary": float(occurrence.amount_secondary),
        "occurrence_date": occurrence.occurrence_date.isoformat(),
        "source_label": occurrence.source_label,
    }


def projection_to_dict(
    projection: Mapping[str, List[ProjectedOccurrence]],
    *,
    reference: date,
    horizon_months: Optional[int] = None,
) -> ProjectionDict:
    """
    Convert a month projection to a JSON-able dictionary.

    Includes the schema version, the reference date, every month's
    occurrences, per-month primary totals and the summary.
    """
    horizon = len(projection) if horizon_months is None else horizon_months
    totals = monthly_totals(projection)["amount_primary"]
    return {
        "schema_version": SCHEMA_VERSION,
        "reference": reference.isoformat(),
        "horizon_months": horizon,
        "months": {
            key: [occurrence_to_dict(o) for o in occurrences]
            for key, occurrences in projection.items()
        },
        "summary": summarize(projection, horizon).to_dict(),
        "totals": {key: float(value) for key, value in totals.items()},
    }


def save_projection(
    path: Path,
    projection: Mapping[str, List[ProjectedOccurrence]],
    *,
    reference: date,
    horizon_months: Optional[int] = None,
) -> Path:
    """Write a projection to *path* as JSON (parent directories created)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = projection_to_dict(projection, reference=reference, horizon_months=horizon_months)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    return path
