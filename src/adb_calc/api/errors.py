"""
Error conversion utilities for the average daily balance calculator API.

convert_to_api_error: Converts internal CalculationError to user-friendly APIError
convert_errors: Batch conversion of error lists
create_api_error: Factory function for creating APIError instances

Provides user-friendly error messages and categorization for UI display.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from adb_calc.api.models import APIError
from adb_calc.contracts.errors import (
    ERROR_FILE_NOT_FOUND,
    ERROR_LOAD_FAILED,
    ERROR_MISSING_COLUMNS,
    ERROR_VALIDATION,
)

if TYPE_CHECKING:
    from adb_calc.contracts.errors import CalculationError


# =============================================================================
# User-Friendly Error Messages
# =============================================================================


ERROR_MESSAGE_OVERRIDES: dict[str, str] = {
    "DQ001": "Required field is missing or empty",
    "DQ002": "Field contains an invalid value",
    "DQ006": "Target is earlier than the statistics date",
    "DQ007": "Target is not in the statistics year",
    "CFG001": "Invalid configuration parameter",
}


CATEGORY_DISPLAY_NAMES: dict[str, str] = {
    "data_quality": "Data Quality",
    "business_rule": "Business Rule",
    "schema_validation": "Schema Validation",
    "configuration": "Configuration",
    "data_loading": "Data Loading",
}


NO_FILE_MESSAGE = "请先选择 CSV 文件"


# =============================================================================
# Conversion Functions
# =============================================================================


def convert_to_api_error(error: CalculationError) -> APIError:
    """
    Convert internal CalculationError to user-friendly APIError.

    Args:
        error: Internal CalculationError from an evaluation

    Returns:
        APIError with user-friendly message and details
    """
    severity = error.severity.value if hasattr(error.severity, "value") else str(error.severity)
    category = error.category.value if hasattr(error.category, "value") else str(error.category)

    return APIError(
        code=error.code,
        message=_get_user_friendly_message(error),
        severity=severity,
        category=CATEGORY_DISPLAY_NAMES.get(category, category),
        details=_build_error_details(error),
    )


def convert_errors(errors: list[CalculationError]) -> list[APIError]:
    """Convert a list of CalculationErrors to APIErrors."""
    return [convert_to_api_error(error) for error in errors]


def create_api_error(
    code: str,
    message: str,
    severity: str = "error",
    category: str = "Calculation",
    **details: str | None,
) -> APIError:
    """
    Factory function to create APIError with optional details.

    Args:
        code: Error code
        message: Error message
        severity: Error severity (error or critical)
        category: Error category
        **details: Additional context (record_reference, field_name, etc.)

    Returns:
        APIError instance
    """
    filtered_details = {k: v for k, v in details.items() if v is not None}
    return APIError(
        code=code,
        message=message,
        severity=severity,
        category=category,
        details=filtered_details,
    )


# =============================================================================
# Helper Functions
# =============================================================================


def _get_user_friendly_message(error: CalculationError) -> str:
    """Override message if known, with record and field context appended."""
    base_message = ERROR_MESSAGE_OVERRIDES.get(error.code, error.message)

    context_parts = []
    if error.record_reference:
        context_parts.append(f"Record: {error.record_reference}")
    if error.field_name:
        context_parts.append(f"Field: {error.field_name}")
    if error.actual_value and error.expected_value:
        context_parts.append(f"Expected {error.expected_value}, got {error.actual_value}")

    if context_parts:
        return f"{base_message} ({', '.join(context_parts)})"
    return base_message


def _build_error_details(error: CalculationError) -> dict:
    details = {}

    if error.record_reference:
        details["record_reference"] = error.record_reference
    if error.field_name:
        details["field_name"] = error.field_name
    if error.expected_value:
        details["expected_value"] = error.expected_value
    if error.actual_value:
        details["actual_value"] = error.actual_value

    return details


def create_validation_error(message: str, path: str | None = None) -> APIError:
    """
    Create an error for upload validation failures.

    Args:
        message: Error message
        path: Optional file path or name

    Returns:
        APIError for validation failure
    """
    details = {"path": path} if path else {}
    return APIError(
        code=ERROR_VALIDATION,
        message=message,
        severity="critical",
        category="Validation",
        details=details,
    )


def create_no_file_error() -> APIError:
    """Create the error shown when the batch action runs without a file."""
    return create_validation_error(NO_FILE_MESSAGE)


def create_file_not_found_error(file_path: str) -> APIError:
    """Create an error for a batch file path that does not exist."""
    return APIError(
        code=ERROR_FILE_NOT_FOUND,
        message=f"File not found: {file_path}",
        severity="critical",
        category="Validation",
        details={"path": file_path},
    )


def create_missing_columns_error(missing: list[str], source: str | None = None) -> APIError:
    """
    Create an error for a batch header lacking required columns.

    Args:
        missing: Required column names absent from the header
        source: Optional file name

    Returns:
        APIError for the missing columns
    """
    details = {"missing_columns": ", ".join(missing)}
    if source:
        details["source"] = source
    return APIError(
        code=ERROR_MISSING_COLUMNS,
        message=f"Missing required columns: {', '.join(missing)}",
        severity="critical",
        category="Schema Validation",
        details=details,
    )


def create_load_error(message: str, source: str | None = None) -> APIError:
    """
    Create an error for data loading failures.

    Args:
        message: Error message
        source: Optional source file

    Returns:
        APIError for load failure
    """
    details = {"source": source} if source else {}
    return APIError(
        code=ERROR_LOAD_FAILED,
        message=f"Failed to load data: {message}",
        severity="critical",
        category="Data Loading",
        details=details,
    )
