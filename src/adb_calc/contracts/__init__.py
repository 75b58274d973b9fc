"""
Contracts module for the average daily balance calculator.

Submodules:
- config: CalculationConfig and TierThresholds
- errors: CalculationError and BatchResult for error handling
"""

# Configuration contracts
from adb_calc.contracts.config import (
    CalculationConfig,
    TierThresholds,
)

# Error handling contracts
from adb_calc.contracts.errors import (
    ERROR_FILE_NOT_FOUND,
    ERROR_INVALID_CONFIG,
    ERROR_INVALID_VALUE,
    ERROR_LOAD_FAILED,
    ERROR_MISSING_COLUMNS,
    ERROR_MISSING_FIELD,
    ERROR_TARGET_BEFORE_STATS,
    ERROR_TARGET_OTHER_YEAR,
    ERROR_VALIDATION,
    BatchResult,
    CalculationError,
    invalid_value_error,
    missing_field_error,
    target_order_error,
    target_year_error,
)

__all__ = [
    # Configuration
    "CalculationConfig",
    "TierThresholds",
    # Errors
    "BatchResult",
    "CalculationError",
    "invalid_value_error",
    "missing_field_error",
    "target_order_error",
    "target_year_error",
    # Error codes
    "ERROR_FILE_NOT_FOUND",
    "ERROR_INVALID_CONFIG",
    "ERROR_INVALID_VALUE",
    "ERROR_LOAD_FAILED",
    "ERROR_MISSING_COLUMNS",
    "ERROR_MISSING_FIELD",
    "ERROR_TARGET_BEFORE_STATS",
    "ERROR_TARGET_OTHER_YEAR",
    "ERROR_VALIDATION",
]
