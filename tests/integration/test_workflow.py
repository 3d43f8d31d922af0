"""
Integration test for the full Flowcast workflow.

Tests the pipeline from a backend payload through projection, aggregation,
summary, expense comparison and JSON export.
"""

import json
from datetime import date

import pytest

from flowcast.aggregation import aggregate_breakdown, aggregate_period
from flowcast.projection import monthly_totals, project_months
from flowcast.serialization import (
    frequencies_from_payload,
    load_records,
    records_from_payload,
    save_projection,
)
from flowcast.summary import combine_with_expenses, summarize


@pytest.mark.integration
class TestFullWorkflow:
    """Integration tests for the complete projection workflow."""

    def test_payload_to_export(self, tmp_path, income_payload, frequency_catalog, reference_date):
        """
        Backend payload → records → 12-month projection → summary → export.
        """
        # 1. Load records and catalog
        records = records_from_payload(income_payload)
        table = frequencies_from_payload({"data": frequency_catalog})
        assert len(records) == 4

        # 2. Project January..December 2025
        proj = project_months(records, table, 12, reference=reference_date)
        assert list(proj)[0] == "2025-01"
        assert list(proj)[-1] == "2025-12"

        # Semiannual bonus on June 30 and December 30
        bonus = [o for occ in proj.values() for o in occ if o.source_record_id == 12]
        assert [o.occurrence_date for o in bonus] == [date(2025, 6, 30), date(2025, 12, 30)]

        # Weekly classes only inside their validity window, x4 per month
        classes = {k: [o for o in v if o.source_record_id == 14] for k, v in proj.items()}
        assert [k for k, v in classes.items() if v] == ["2025-01", "2025-02", "2025-03"]
        assert classes["2025-01"][0].amount_primary == pytest.approx(80_000)

        # Inactive record never shows up
        assert all(o.source_record_id != 13 for occ in proj.values() for o in occ)

        # 3. Summary
        summary = summarize(proj)
        assert summary.count == 17
        assert summary.total_primary == pytest.approx(19_740_000)
        assert summary.monthly_average == pytest.approx(1_645_000)

        # 4. Compare with backend expense projection
        expenses = [
            {"mes": "2025-01", "total_ars": "900000.00"},
            {"mes": "2025-06", "total_ars": "2500000.00"},
        ]
        frame = combine_with_expenses(proj, expenses)
        assert len(frame) == 12
        assert frame.loc["2025-01", "net"] == pytest.approx(680_000)
        assert frame.loc["2025-06", "net"] == pytest.approx(-250_000)

        # 5. Export and reload
        path = save_projection(tmp_path / "projection.json", proj, reference=reference_date)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["summary"]["count"] == 17
        assert data["totals"]["2025-12"] == pytest.approx(2_250_000)
        assert data["months"]["2025-06"][1]["source_label"] == "Empleo"

    def test_month_aggregation_matches_projection(self, income_payload, frequency_catalog):
        """For the month after the reference, both views agree."""
        records = records_from_payload(income_payload)
        table = frequencies_from_payload(frequency_catalog)

        proj = project_months(records, table, 1, reference=date(2025, 1, 20))
        projected = monthly_totals(proj).loc["2025-02", "amount_primary"]

        assert aggregate_period(records, table, "month", date(2025, 2, 10)) == pytest.approx(projected)
        assert projected == pytest.approx(1_580_000)

    def test_year_breakdown(self, tmp_path, income_payload, frequency_catalog):
        path = tmp_path / "ingresos.json"
        path.write_text(json.dumps(income_payload), encoding="utf-8")
        records = load_records(path)
        table = frequencies_from_payload(frequency_catalog)

        breakdown = aggregate_breakdown(records, table, "year", date(2025, 5, 14))

        assert list(breakdown.index) == [11, 12, 14]
        assert breakdown.loc[11] == pytest.approx(18_000_000)
        assert breakdown.loc[12] == pytest.approx(1_500_000)
        assert breakdown.loc[14] == pytest.approx(1_040_000)
