"""Unit tests for the API models module.

Tests cover:
- DepositRequest mapping onto DepositInput
- BatchRequest display names
- KpiDisplay badge kinds
- BatchResponse error partitioning and counts
- PerformanceMetrics throughput
"""

from __future__ import annotations

import dataclasses
import math
from datetime import date, datetime
from pathlib import Path

import polars as pl
import pytest

from adb_calc.api.models import (
    APIError,
    BatchRequest,
    BatchResponse,
    DepositRequest,
    KpiDisplay,
    PerformanceMetrics,
)
from adb_calc.domain.enums import AccountTier


class TestDepositRequest:
    """Tests for DepositRequest."""

    def test_to_input(self) -> None:
        request = DepositRequest(
            avg_to_date=8000,
            current_balance=None,
            stats_date=date(2025, 4, 11),
            target_date=date(2025, 12, 31),
            tier="mid",
        )
        inputs = request.to_input()

        assert inputs.avg_to_date == 8000.0
        assert math.isnan(inputs.current_balance)
        assert inputs.tier == AccountTier.MID

    def test_to_input_parses_iso_dates(self) -> None:
        inputs = DepositRequest(8000, 12000, "2025-04-11", " ").to_input()

        assert inputs.stats_date == date(2025, 4, 11)
        assert inputs.target_date is None

    def test_is_frozen(self) -> None:
        request = DepositRequest(1.0, 1.0, None, None)
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.mode = "year"  # type: ignore[misc]


class TestBatchRequest:
    def test_display_name_prefers_source_name(self) -> None:
        assert BatchRequest(source=b"x", source_name="up.csv").display_name == "up.csv"

    def test_display_name_from_path(self) -> None:
        assert BatchRequest(source=Path("/data/batch.csv")).display_name == "batch.csv"

    def test_display_name_for_anonymous_bytes(self) -> None:
        assert BatchRequest(source=b"x").display_name == "upload"


class TestKpiDisplay:
    @pytest.mark.parametrize("is_hit, kind", [(True, "success"), (False, "danger"), (None, "neutral")])
    def test_badge_kind(self, is_hit: bool | None, kind: str) -> None:
        display = KpiDisplay("s", is_hit, "a", "b", "c")
        assert display.badge_kind == kind


class TestBatchResponse:
    """Tests for BatchResponse properties."""

    def test_counts_and_error_partitions(self) -> None:
        file_error = APIError("LOAD001", "bad", "critical", "Data Loading")
        row_error = APIError("DQ001", "missing", "error", "Data Quality")
        response = BatchResponse(
            success=True,
            layout="dated",
            results=pl.DataFrame({"status": ["evaluated", "incomplete", "target_before_stats"]}),
            errors=[file_error, row_error],
        )

        assert response.row_count == 3
        assert response.invalid_count == 2
        assert response.has_errors is True
        assert response.file_errors == [file_error]
        assert response.row_errors == [row_error]

    def test_empty_results(self) -> None:
        response = BatchResponse(success=False, layout="dated", results=pl.DataFrame())
        assert response.row_count == 0
        assert response.invalid_count == 0
        assert response.has_errors is False


class TestPerformanceMetrics:
    def test_records_per_second(self) -> None:
        now = datetime(2025, 1, 1)
        assert PerformanceMetrics(now, now, 2.0, 10).records_per_second == 5.0
        assert PerformanceMetrics(now, now, 0.0, 10).records_per_second == 0.0


class TestAPIError:
    def test_str(self) -> None:
        assert str(APIError("DQ006", "late", "error", "Business Rule")) == "[DQ006] ERROR: late"
