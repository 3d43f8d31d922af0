"""
Pytest configuration and fixtures for the Flowcast test suite.

Fixtures mirror the backend's data: a Spanish frequency catalog, recurring
income records, and a fixed reference date so projections are reproducible.
"""

from datetime import date
from typing import List

import pytest

from flowcast.records import RecurringRecord
from flowcast.recurrence import FrequencyTable


# ---------------------------------------------------------------------------
# Date Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def reference_date() -> date:
    """Mid-December 2024: a 12-month projection covers January..December 2025."""
    return date(2024, 12, 15)


# ---------------------------------------------------------------------------
# Frequency Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def frequency_catalog() -> List[dict]:
    """Frequency catalog as returned by the backend."""
    return [
        {"id": 1, "nombre_frecuencia": "Único"},
        {"id": 2, "nombre_frecuencia": "Diario"},
        {"id": 3, "nombre_frecuencia": "Semanal"},
        {"id": 4, "nombre_frecuencia": "Mensual"},
        {"id": 5, "nombre_frecuencia": "Bimestral"},
        {"id": 6, "nombre_frecuencia": "Trimestral"},
        {"id": 7, "nombre_frecuencia": "Semestral"},
        {"id": 8, "nombre_frecuencia": "Anual"},
        {"id": 9, "nombre_frecuencia": "Quincenal"},
    ]


@pytest.fixture
def frequency_table(frequency_catalog) -> FrequencyTable:
    """FrequencyTable built from the backend catalog."""
    return FrequencyTable(frequency_catalog)


# ---------------------------------------------------------------------------
# Record Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_record():
    """
    Factory for RecurringRecord with monthly defaults.

    Usage: make_record(amount_primary=500, frequency_label="anual", month_of_period=6)
    """
    counter = {"next": 1}

    def _make(**overrides) -> RecurringRecord:
        fields = {
            "id": counter["next"],
            "description": f"Record {counter['next']}",
            "amount_primary": 100_000.0,
            "amount_secondary": 100.0,
            "day_of_period": 10,
            "frequency_label": "monthly",
        }
        fields.update(overrides)
        counter["next"] += 1
        return RecurringRecord(**fields)

    return _make


@pytest.fixture
def monthly_record(make_record) -> RecurringRecord:
    """100,000 monthly on day 10, no validity bounds."""
    return make_record(id=1, description="Salary", amount_primary=100_000.0)


@pytest.fixture
def annual_record(make_record) -> RecurringRecord:
    """60,000 once a year in June."""
    return make_record(
        id=2,
        description="Bonus",
        amount_primary=60_000.0,
        amount_secondary=60.0,
        frequency_label="annual",
        month_of_period=6,
        day_of_period=1,
    )


@pytest.fixture
def income_payload() -> dict:
    """Recurring income payload in the backend's {"data": [...]} envelope."""
    return {
        "success": True,
        "data": [
            {
                "id": 11,
                "descripcion": "Sueldo",
                "monto_ars": "1500000.00",
                "monto_usd": "1250.00",
                "moneda_origen": "ARS",
                "dia_de_pago": 5,
                "mes_de_pago": None,
                "activo": True,
                "fecha_inicio": None,
                "fecha_fin": None,
                "frecuencia_gasto_id": 4,
                "fuenteIngreso": {"id": 1, "nombre": "Empleo"},
                "frecuencia": {"id": 4, "nombre_frecuencia": "Mensual"},
            },
            {
                "id": 12,
                "descripcion": "Aguinaldo",
                "monto_ars": "750000.00",
                "monto_usd": "625.00",
                "moneda_origen": "ARS",
                "dia_de_pago": 30,
                "mes_de_pago": 6,
                "activo": True,
                "fecha_inicio": "2024-01-01",
                "fecha_fin": None,
                "frecuencia_gasto_id": 7,
                "fuenteIngreso": {"id": 1, "nombre": "Empleo"},
            },
            {
                "id": 13,
                "descripcion": "Alquiler cochera",
                "monto_ars": "80000.00",
                "monto_usd": "66.67",
                "moneda_origen": "ARS",
                "dia_de_pago": 10,
                "mes_de_pago": None,
                "activo": False,
                "fecha_inicio": None,
                "fecha_fin": None,
                "frecuencia_gasto_id": 4,
            },
            {
                "id": 14,
                "descripcion": "Clases particulares",
                "monto_ars": "20000.00",
                "monto_usd": "16.67",
                "moneda_origen": "ARS",
                "dia_de_pago": 1,
                "mes_de_pago": None,
                "activo": True,
                "fecha_inicio": "2025-01-01",
                "fecha_fin": "2025-03-31",
                "frecuencia_gasto_id": 3,
            },
        ],
    }
