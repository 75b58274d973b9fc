"""
Error handling contracts for the average daily balance calculator.

Provides structured error representation using the Result pattern:
- CalculationError: Immutable error details for a record or file
- BatchResult: Combines a batch result frame with accumulated errors

Records that cannot be evaluated are reported, never raised, so one bad
row never stops the rest of a batch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from adb_calc.domain.enums import ErrorCategory, ErrorSeverity

if TYPE_CHECKING:
    import polars as pl


@dataclass(frozen=True)
class CalculationError:
    """
    Immutable representation of a calculation error.

    Attributes:
        code: Unique error code (e.g., "DQ001", "LOAD001")
        message: Human-readable description of the issue
        severity: Error severity level (ERROR, CRITICAL)
        category: Error category for filtering
        record_reference: Optional reference to the affected record (id or row)
        field_name: Optional name of the problematic field
        expected_value: Optional description of expected value/format
        actual_value: Optional actual value that caused the error
    """

    code: str
    message: str
    severity: ErrorSeverity
    category: ErrorCategory
    record_reference: str | None = None
    field_name: str | None = None
    expected_value: str | None = None
    actual_value: str | None = None

    def __str__(self) -> str:
        """Human-readable error representation."""
        parts = [f"[{self.code}] {self.severity.value.upper()}: {self.message}"]

        if self.record_reference:
            parts.append(f"Record: {self.record_reference}")
        if self.field_name:
            parts.append(f"Field: {self.field_name}")

        return " | ".join(parts)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "record_reference": self.record_reference,
            "field_name": self.field_name,
            "expected_value": self.expected_value,
            "actual_value": self.actual_value,
        }


@dataclass
class BatchResult:
    """
    Result container combining a batch output frame with accumulated errors.

    Attributes:
        frame: One output row per input row, in input order
        errors: Errors for rows that could not be evaluated

    Usage:
        result = evaluate_dated_batch(records, config)
        if result.has_errors:
            # Rows flagged in result.frame["status"], details in result.errors
    """

    frame: pl.DataFrame
    errors: list[CalculationError] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return self.frame.height

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


# =============================================================================
# ERROR CODE CONSTANTS
# =============================================================================

# Data quality error codes
ERROR_MISSING_FIELD = "DQ001"
ERROR_INVALID_VALUE = "DQ002"
ERROR_TARGET_BEFORE_STATS = "DQ006"
ERROR_TARGET_OTHER_YEAR = "DQ007"

# Loading and validation error codes
ERROR_LOAD_FAILED = "LOAD001"
ERROR_VALIDATION = "VAL001"
ERROR_FILE_NOT_FOUND = "VAL002"
ERROR_MISSING_COLUMNS = "VAL003"

# Configuration error codes
ERROR_INVALID_CONFIG = "CFG001"


# =============================================================================
# ERROR FACTORY FUNCTIONS
# =============================================================================


def missing_field_error(
    field_name: str,
    record_reference: str | None = None,
) -> CalculationError:
    """Create a missing field error."""
    return CalculationError(
        code=ERROR_MISSING_FIELD,
        message=f"Required field '{field_name}' is missing or empty",
        severity=ErrorSeverity.ERROR,
        category=ErrorCategory.DATA_QUALITY,
        record_reference=record_reference,
        field_name=field_name,
    )


def invalid_value_error(
    field_name: str,
    actual_value: str,
    expected_value: str,
    record_reference: str | None = None,
) -> CalculationError:
    """Create an invalid value error."""
    return CalculationError(
        code=ERROR_INVALID_VALUE,
        message=f"Invalid value for '{field_name}': expected {expected_value}, got {actual_value}",
        severity=ErrorSeverity.ERROR,
        category=ErrorCategory.DATA_QUALITY,
        record_reference=record_reference,
        field_name=field_name,
        expected_value=expected_value,
        actual_value=actual_value,
    )


def target_order_error(
    target_value: str,
    stats_value: str,
    record_reference: str | None = None,
    field_name: str = "target_date",
) -> CalculationError:
    """Create an error for a target that precedes the statistics point."""
    return CalculationError(
        code=ERROR_TARGET_BEFORE_STATS,
        message=f"Target {target_value} is earlier than statistics point {stats_value}",
        severity=ErrorSeverity.ERROR,
        category=ErrorCategory.BUSINESS_RULE,
        record_reference=record_reference,
        field_name=field_name,
        expected_value=f">= {stats_value}",
        actual_value=target_value,
    )


def target_year_error(
    target_value: str,
    stats_value: str,
    record_reference: str | None = None,
) -> CalculationError:
    """Create an error for a target outside the statistics year."""
    return CalculationError(
        code=ERROR_TARGET_OTHER_YEAR,
        message=f"Target {target_value} is not in the same year as statistics date {stats_value}",
        severity=ErrorSeverity.ERROR,
        category=ErrorCategory.BUSINESS_RULE,
        record_reference=record_reference,
        field_name="target_date",
        expected_value=f"year {stats_value[:4]}",
        actual_value=target_value,
    )
