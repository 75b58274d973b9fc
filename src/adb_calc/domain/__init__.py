"""
Domain module for the average daily balance calculator.

Contains the enumerations shared by the engine, the API and the notebooks.
"""

from adb_calc.domain.enums import (
    AccountTier,
    ErrorCategory,
    ErrorSeverity,
    HitMode,
    RecordStatus,
)

__all__ = [
    "AccountTier",
    "ErrorCategory",
    "ErrorSeverity",
    "HitMode",
    "RecordStatus",
]
