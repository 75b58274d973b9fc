"""
Unit tests for batch evaluation.

Each row is evaluated independently: a malformed row gets its own status
and errors while the rows after it are evaluated normally.
"""

from __future__ import annotations

import math
from datetime import date
from pathlib import Path

import polars as pl
import pytest

from adb_calc.contracts.config import CalculationConfig
from adb_calc.contracts.errors import ERROR_MISSING_FIELD, ERROR_TARGET_BEFORE_STATS
from adb_calc.data.schemas import (
    DATED_LAYOUT,
    DATED_RESULT_SCHEMA,
    DAY_COUNT_LAYOUT,
    DAY_COUNT_RESULT_SCHEMA,
)
from adb_calc.engine.batch import evaluate_dated_batch, evaluate_tier_batch
from adb_calc.engine.loader import load_batch


FIXTURES = Path(__file__).parent.parent / "fixtures" / "batch"


@pytest.fixture
def dated_records() -> pl.DataFrame:
    return load_batch(FIXTURES / "dated_batch.csv", DATED_LAYOUT)


@pytest.fixture
def day_count_records() -> pl.DataFrame:
    return load_batch(FIXTURES / "day_count_batch.csv", DAY_COUNT_LAYOUT)


class TestEvaluateDatedBatch:
    """Tests for evaluate_dated_batch."""

    def test_one_output_row_per_input_row(self, dated_records: pl.DataFrame) -> None:
        result = evaluate_dated_batch(dated_records)

        assert result.row_count == 6
        assert result.frame.schema == pl.Schema(DATED_RESULT_SCHEMA)
        assert result.frame["id"].to_list() == ["A001", "A002", "A003", "A004", "A005", "A006"]
        assert result.frame["row_number"].to_list() == [1, 2, 3, 4, 5, 6]

    def test_statuses(self, dated_records: pl.DataFrame) -> None:
        result = evaluate_dated_batch(dated_records)
        assert result.frame["status"].to_list() == [
            "evaluated",
            "incomplete",
            "target_before_stats",
            "evaluated",
            "evaluated",
            "evaluated",
        ]

    def test_malformed_row_does_not_affect_later_rows(self, dated_records: pl.DataFrame) -> None:
        result = evaluate_dated_batch(dated_records)
        rows = result.frame.to_dicts()

        assert math.isnan(rows[1]["projected_average"])
        assert rows[3]["is_hit"] is True
        assert rows[3]["attainment_date"] == date(2025, 6, 30)

    def test_year_end_results(self, dated_records: pl.DataFrame) -> None:
        row = evaluate_dated_batch(dated_records).frame.row(0, named=True)

        assert row["tier"] == "basic"
        assert row["elapsed_days"] == 100
        assert row["is_hit"] is False
        assert row["required_balance"] == pytest.approx(2_840_000 / 264)
        assert row["attainment_date"] == date(2025, 7, 20)

    def test_mid_level(self, dated_records: pl.DataFrame) -> None:
        row = evaluate_dated_batch(dated_records).frame.row(3, named=True)
        assert row["tier"] == "mid"
        assert row["threshold"] == 500_000.0

    def test_unreachable_days(self, dated_records: pl.DataFrame) -> None:
        frame = evaluate_dated_batch(dated_records).frame
        assert frame["required_extra_days"][4] == math.inf
        assert frame["required_extra_days"][5] == pytest.approx(167.0)
        assert frame["attainment_date"][5] is None

    def test_row_errors_reference_record_ids(self, dated_records: pl.DataFrame) -> None:
        result = evaluate_dated_batch(dated_records)

        assert result.has_errors
        codes = {(e.record_reference, e.code) for e in result.errors}
        assert codes == {("A002", ERROR_MISSING_FIELD), ("A003", ERROR_TARGET_BEFORE_STATS)}

    def test_year_mode_applies_to_every_row(self, dated_records: pl.DataFrame) -> None:
        result = evaluate_dated_batch(dated_records, CalculationConfig.year())
        # 600000 × 180 < 500000 × 365
        assert result.frame["is_hit"][3] is False

    def test_row_without_id_uses_row_number(self) -> None:
        records = pl.DataFrame(
            {
                "name": [""],
                "id": [""],
                "avg_to_date": [None],
                "current_balance": [1.0],
                "stats_date": [date(2025, 1, 2)],
                "target_date": [date(2025, 1, 3)],
                "level": ["basic"],
            },
            schema=DATED_LAYOUT.schema,
        )
        result = evaluate_dated_batch(records)
        assert result.errors[0].record_reference == "row 1"

    def test_empty_batch(self) -> None:
        records = pl.DataFrame(schema=DATED_LAYOUT.schema)
        result = evaluate_dated_batch(records)
        assert result.row_count == 0
        assert result.errors == []


class TestEvaluateTierBatch:
    """Tests for evaluate_tier_batch."""

    def test_per_tier_columns(self, day_count_records: pl.DataFrame) -> None:
        result = evaluate_tier_batch(day_count_records)
        row = result.frame.row(0, named=True)

        assert result.frame.schema == pl.Schema(DAY_COUNT_RESULT_SCHEMA)
        assert row["basic_is_hit"] is True
        assert row["basic_projected_average"] == pytest.approx(3_980_000 / 365)
        assert row["basic_required_extra_days"] == pytest.approx(100.0)
        assert row["mid_is_hit"] is False
        assert row["mid_required_extra_days"] == math.inf
        assert row["mid_required_balance"] == pytest.approx((500_000 * 365 - 800_000) / 265)

    def test_statuses(self, day_count_records: pl.DataFrame) -> None:
        result = evaluate_tier_batch(day_count_records)
        assert result.frame["status"].to_list() == [
            "evaluated",
            "evaluated",
            "incomplete",
            "target_before_stats",
        ]
        assert {e.record_reference for e in result.errors} == {"B003", "B004"}
