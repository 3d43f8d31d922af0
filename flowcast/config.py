"""
Configuration management module for Flowcast.

Purpose
-------
Pydantic models for validated loading of recurring records and frequency
catalogs, for projection/aggregation run parameters, and for
environment-driven application settings.

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Lenient on the wire: record payloads use the REST API's field names
  (``descripcion``, ``monto_ars``, ``dia_de_pago``, ...) or Flowcast's own;
  amounts given as strings are parsed and missing optional fields mean
  "no constraint" or 0
- Environment-aware: Supports .env files and FLOWCAST_ variables

Example
-------
>>> from flowcast.config import RecurringRecordConfig, ProjectionConfig
>>> cfg = RecurringRecordConfig.model_validate(
...     {"id": 3, "descripcion": "Sueldo", "monto_ars": "1500000.00",
...      "frecuencia_gasto_id": 4, "dia_de_pago": 5, "activo": True}
... )
>>> record = cfg.to_record()
>>> ProjectionConfig(horizon_months=6).horizon_months
6
"""

from __future__ import annotations

import datetime
import warnings
from typing import Any, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_HORIZON_MONTHS,
    DEFAULT_PERIOD,
    DEFAULT_PRIMARY_CURRENCY,
    DEFAULT_SECONDARY_CURRENCY,
    MAX_HORIZON_MONTHS,
)
from .records import FrequencyDefinition, RecurringRecord
from .utils import coerce_date, finite_or_zero

__all__ = [
    "RecurringRecordConfig",
    "FrequencyDefinitionConfig",
    "ProjectionConfig",
    "AggregationConfig",
    "AppSettings",
]

PeriodKind = Literal["week", "month", "quarter", "year"]


# ---------------------------------------------------------------------------
# Record Configuration
# ---------------------------------------------------------------------------

class RecurringRecordConfig(BaseModel):
    """
    Wire model for one recurring income or expense record.

    Attributes
    ----------
    id : int or str
        Record identifier.
    description : str
        Label (alias ``descripcion``).
    amount_primary : float
        Primary-currency amount (aliases ``monto_ars``, ``monto``).
    amount_secondary : float
        Secondary-currency amount (alias ``monto_usd``).
    frequency_id : int, optional
        Catalog reference (alias ``frecuencia_gasto_id``).
    day_of_period : int
        Anchor day 1..31 (alias ``dia_de_pago``), default 1.
    month_of_period : int, optional
        Anchor month 1..12 (alias ``mes_de_pago``).
    active : bool
        Alias ``activo``, default True.
    valid_from, valid_until : date, optional
        Validity bounds (aliases ``fecha_inicio``, ``fecha_fin``).
        Unparsable values become None with a UserWarning.
    source_label : str, optional
        Defaults to the nested ``fuenteIngreso.nombre`` or
        ``categoria.nombre_categoria`` relation when present.
    frequency_label : str, optional
        Defaults to the nested ``frecuencia.nombre_frecuencia`` relation.
    currency : str, optional
        Native currency (alias ``moneda_origen``).

    Examples
    --------
    >>> RecurringRecordConfig.model_validate(
    ...     {"id": 1, "description": "Rent", "amount_primary": 100_000,
    ...      "frequency_label": "monthly", "day_of_period": 10}
    ... ).to_record().day_of_period
    10
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Union[int, str]
    description: str = Field(
        default="",
        validation_alias=AliasChoices("description", "descripcion"),
        description="Free text label",
    )
    amount_primary: float = Field(
        default=0.0,
        validation_alias=AliasChoices("amount_primary", "monto_ars", "monto"),
        description="Amount in the primary currency",
    )
    amount_secondary: float = Field(
        default=0.0,
        validation_alias=AliasChoices("amount_secondary", "monto_usd"),
        description="Reference amount in the secondary currency",
    )
    frequency_id: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("frequency_id", "frecuencia_gasto_id", "frecuencia_id"),
        description="Reference into the frequency catalog",
    )
    day_of_period: int = Field(
        default=1,
        ge=1,
        le=31,
        validation_alias=AliasChoices("day_of_period", "dia_de_pago"),
        description="Anchor day of the month (1-31)",
    )
    month_of_period: Optional[int] = Field(
        default=None,
        ge=1,
        le=12,
        validation_alias=AliasChoices("month_of_period", "mes_de_pago"),
        description="Anchor month (1-12)",
    )
    active: bool = Field(
        default=True,
        validation_alias=AliasChoices("active", "activo"),
        description="Inactive records never contribute",
    )
    valid_from: Optional[datetime.date] = Field(
        default=None,
        validation_alias=AliasChoices("valid_from", "fecha_inicio"),
        description="First day of validity (month granularity)",
    )
    valid_until: Optional[datetime.date] = Field(
        default=None,
        validation_alias=AliasChoices("valid_until", "fecha_fin"),
        description="Last day of validity (month granularity)",
    )
    source_label: Optional[str] = Field(
        default=None,
        description="Income source or category name",
    )
    frequency_label: Optional[str] = Field(
        default=None,
        description="Embedded frequency label",
    )
    currency: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("currency", "moneda_origen"),
        description="Native currency code",
    )

    @model_validator(mode="before")
    @classmethod
    def flatten_relations(cls, data: Any) -> Any:
        """Lift labels out of the nested relations the REST API embeds."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if not data.get("source_label"):
            source = data.get("fuenteIngreso") or data.get("fuente_ingreso") or {}
            category = data.get("categoria") or {}
            label = (
                (source.get("nombre") if isinstance(source, dict) else None)
                or (category.get("nombre_categoria") if isinstance(category, dict) else None)
            )
            if label:
                data["source_label"] = label
        if not data.get("frequency_label"):
            frequency = data.get("frecuencia") or {}
            if isinstance(frequency, dict):
                label = frequency.get("nombre_frecuencia") or frequency.get("nombre")
                if label:
                    data["frequency_label"] = label
        return data

    @field_validator("amount_primary", "amount_secondary", mode="before")
    @classmethod
    def parse_amount(cls, v):
        """Parse numeric strings; missing or unparsable amounts become 0."""
        return finite_or_zero(v)

    @field_validator("day_of_period", mode="before")
    @classmethod
    def default_day(cls, v):
        """Missing anchor day means the first of the month."""
        return 1 if v is None or v == "" else v

    @field_validator("valid_from", "valid_until", mode="before")
    @classmethod
    def parse_bound(cls, v, info):
        """Unparsable bounds impose no constraint."""
        if v is None or v == "":
            return None
        parsed = coerce_date(v)
        if parsed is None:
            warnings.warn(
                f"Unparsable {info.field_name} {v!r}; treating it as no constraint.",
                UserWarning,
                stacklevel=2,
            )
        return parsed

    def to_record(self) -> RecurringRecord:
        """Build the engine's RecurringRecord."""
        return RecurringRecord(
            id=self.id,
            description=self.description,
            amount_primary=self.amount_primary,
            amount_secondary=self.amount_secondary,
            frequency_id=self.frequency_id,
            day_of_period=self.day_of_period,
            month_of_period=self.month_of_period,
            active=self.active,
            valid_from=self.valid_from,
            valid_until=self.valid_until,
            source_label=self.source_label,
            frequency_label=self.frequency_label,
            currency=self.currency,
        )


class FrequencyDefinitionConfig(BaseModel):
    """Frequency catalog entry (label aliases ``nombre_frecuencia``, ``nombre``)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    label: str = Field(
        default="",
        validation_alias=AliasChoices("label", "nombre_frecuencia", "nombre"),
        description="Human frequency label",
    )

    def to_definition(self) -> FrequencyDefinition:
        return FrequencyDefinition(id=self.id, label=self.label)


# ---------------------------------------------------------------------------
# Run Configuration
# ---------------------------------------------------------------------------

class ProjectionConfig(BaseModel):
    """
    Parameters of a month projection.

    Attributes
    ----------
    horizon_months : int
        Months to project (1-12).
    reference : date, optional
        "Now". The caller supplies today's date when None.

    Examples
    --------
    >>> ProjectionConfig().horizon_months
    3
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    horizon_months: int = Field(
        default=DEFAULT_HORIZON_MONTHS,
        ge=1,
        le=MAX_HORIZON_MONTHS,
        description="Number of future months to project",
    )
    reference: Optional[datetime.date] = Field(
        default=None,
        description="Reference date (projection starts the following month)",
    )


class AggregationConfig(BaseModel):
    """Parameters of a period aggregation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    period: PeriodKind = Field(
        default=DEFAULT_PERIOD,
        description="Aggregation period kind",
    )
    reference: Optional[datetime.date] = Field(
        default=None,
        description="Reference date selecting the period",
    )


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Environment variables are prefixed with FLOWCAST_ (e.g.
    FLOWCAST_LOG_LEVEL=DEBUG). A local .env file is read when present.

    Attributes
    ----------
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR"
    default_horizon : int
        Horizon used by the CLI when --months is not given
    default_period : str
        Period used by the CLI when --period is not given
    currency_primary, currency_secondary : str
        Currency codes shown next to amounts

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.log_level
    'WARNING'
    """

    model_config = SettingsConfigDict(
        env_prefix="FLOWCAST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level",
    )
    default_horizon: int = Field(
        default=DEFAULT_HORIZON_MONTHS,
        ge=1,
        le=MAX_HORIZON_MONTHS,
        description="Default projection horizon (months)",
    )
    default_period: PeriodKind = Field(
        default=DEFAULT_PERIOD,
        description="Default aggregation period",
    )
    currency_primary: str = Field(
        default=DEFAULT_PRIMARY_CURRENCY,
        min_length=1,
        max_length=5,
        description="Primary currency code",
    )
    currency_secondary: str = Field(
        default=DEFAULT_SECONDARY_CURRENCY,
        min_length=1,
        max_length=5,
        description="Secondary currency code",
    )
