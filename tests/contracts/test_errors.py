"""Tests for error handling contracts.

Tests the CalculationError and BatchResult classes,
including error accumulation and filtering.
"""

import polars as pl
import pytest

from adb_calc.contracts.errors import (
    ERROR_INVALID_VALUE,
    ERROR_MISSING_FIELD,
    ERROR_TARGET_BEFORE_STATS,
    ERROR_TARGET_OTHER_YEAR,
    BatchResult,
    CalculationError,
    invalid_value_error,
    missing_field_error,
    target_order_error,
    target_year_error,
)
from adb_calc.domain.enums import ErrorCategory, ErrorSeverity


class TestCalculationError:
    """Tests for CalculationError dataclass."""

    def test_create_basic_error(self):
        """Should create error with required fields."""
        error = CalculationError(
            code="TEST001",
            message="Test error message",
            severity=ErrorSeverity.ERROR,
            category=ErrorCategory.DATA_QUALITY,
        )

        assert error.code == "TEST001"
        assert error.record_reference is None
        assert error.field_name is None

    def test_str_includes_context(self):
        error = missing_field_error("stats_date", "A002")
        assert str(error) == (
            "[DQ001] ERROR: Required field 'stats_date' is missing or empty"
            " | Record: A002 | Field: stats_date"
        )

    def test_to_dict(self):
        error = invalid_value_error("avg_to_date", "inf", "finite number", "A001")
        data = error.to_dict()

        assert data["code"] == ERROR_INVALID_VALUE
        assert data["severity"] == "error"
        assert data["category"] == "data_quality"
        assert data["expected_value"] == "finite number"
        assert data["actual_value"] == "inf"

    def test_is_immutable(self):
        error = missing_field_error("id")
        with pytest.raises(AttributeError):
            error.code = "OTHER"  # type: ignore[misc]


class TestErrorFactories:
    def test_missing_field_error(self):
        error = missing_field_error("current_balance", "row 3")
        assert error.code == ERROR_MISSING_FIELD
        assert error.category == ErrorCategory.DATA_QUALITY
        assert error.record_reference == "row 3"

    def test_target_order_error(self):
        error = target_order_error("2025-03-31", "2025-06-30", "A003")
        assert error.code == ERROR_TARGET_BEFORE_STATS
        assert error.category == ErrorCategory.BUSINESS_RULE
        assert error.field_name == "target_date"
        assert error.expected_value == ">= 2025-06-30"

    def test_target_order_error_custom_field(self):
        assert target_order_error("10", "20", field_name="total_days").field_name == "total_days"

    def test_target_year_error(self):
        error = target_year_error("2026-01-31", "2025-12-01", "A007")
        assert error.code == ERROR_TARGET_OTHER_YEAR
        assert error.category == ErrorCategory.BUSINESS_RULE
        assert error.field_name == "target_date"
        assert error.expected_value == "year 2025"
        assert error.actual_value == "2026-01-31"


class TestBatchResult:
    """Tests for BatchResult."""

    @pytest.fixture
    def result(self) -> BatchResult:
        return BatchResult(frame=pl.DataFrame({"row_number": [1, 2, 3]}))

    def test_starts_without_errors(self, result: BatchResult):
        assert result.row_count == 3
        assert result.has_errors is False
        assert result.errors == []

    def test_errors_given_at_construction(self):
        result = BatchResult(
            frame=pl.DataFrame({"row_number": [1, 2]}),
            errors=[missing_field_error("stats_date", "A002")],
        )

        assert result.has_errors is True
        assert result.errors[0].record_reference == "A002"

    def test_error_lists_are_not_shared(self):
        first = BatchResult(frame=pl.DataFrame())
        second = BatchResult(frame=pl.DataFrame())
        first.errors.append(missing_field_error("id"))

        assert second.errors == []
