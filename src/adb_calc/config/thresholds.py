"""
Threshold and tolerance configuration for average-balance calculations.

The tier thresholds are regulatory values and the two tolerances are fixed
constants that reference outputs depend on. This module provides:
- Canonical required averages per account tier
- The hit tolerance and the near-equal balance epsilon
- Display constants for the fixed currency

Usage:
    from adb_calc.config import get_tier_threshold, HIT_TOLERANCE

    threshold = get_tier_threshold("mid")  # 500000.0
"""

from typing import Literal


# =============================================================================
# CANONICAL TIER THRESHOLDS
# =============================================================================

TierKey = Literal[
    "basic",
    "mid",
]

# Required average daily balance per account tier.
# Do not modify these - they are regulatory constants.
TIER_THRESHOLDS: dict[TierKey, float] = {
    # 达标户
    "basic": 10000.0,
    # 中型
    "mid": 500000.0,
}


# =============================================================================
# NUMERIC TOLERANCES
# =============================================================================

# Slack applied to "average >= threshold" comparisons
HIT_TOLERANCE: float = 1e-9

# Balances this close to the threshold cannot move the average
BALANCE_EPSILON: float = 1e-12

# Annualisation factor of the "year" hit mode (not leap-year aware)
YEAR_DAYS: int = 365


# =============================================================================
# DISPLAY
# =============================================================================

CURRENCY_SYMBOL: str = "¥"

INFINITY_TEXT: str = "∞"

MISSING_TEXT: str = "—"


def get_tier_threshold(tier_key: str) -> float:
    """
    Get the required average for a tier key.

    Unknown keys fall back to the basic tier, matching the level column
    of uploaded files where anything other than "mid" is basic.

    Args:
        tier_key: "basic" or "mid"

    Returns:
        Required average daily balance

    Example:
        >>> get_tier_threshold("mid")
        500000.0
    """
    if tier_key == "mid":
        return TIER_THRESHOLDS["mid"]
    return TIER_THRESHOLDS["basic"]
