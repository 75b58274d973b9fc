"""Configuration module for the average daily balance calculator."""

from .thresholds import (
    BALANCE_EPSILON,
    CURRENCY_SYMBOL,
    HIT_TOLERANCE,
    INFINITY_TEXT,
    MISSING_TEXT,
    TIER_THRESHOLDS,
    YEAR_DAYS,
    get_tier_threshold,
)

__all__ = [
    "BALANCE_EPSILON",
    "CURRENCY_SYMBOL",
    "HIT_TOLERANCE",
    "INFINITY_TEXT",
    "MISSING_TEXT",
    "TIER_THRESHOLDS",
    "YEAR_DAYS",
    "get_tier_threshold",
]
