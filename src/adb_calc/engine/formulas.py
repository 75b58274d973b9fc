"""
Average daily balance formulas.

Closed-form arithmetic for projecting an average daily balance and solving
for the balance or number of days needed to reach a tier threshold.

Key formulas (A = average to date, D = elapsed days, M = balance held
constant from now on, T = target day count, t = threshold):
- Projected average  avg_T = (A × D + M × max(0, T - D)) / T
- Required balance   M = (t × T - A × D) / (T - D)
- Extra days         N × (M - t) >= D × (t - A)

Result policy for the solvers:
- finite value: computed answer
- math.inf:     evaluable, but no finite answer exists (unreachable)
- math.nan:     inputs cannot be evaluated (invalid)

None of the functions raise for unfavourable or invalid numeric inputs.
"""

from __future__ import annotations

import math

from adb_calc.config.thresholds import BALANCE_EPSILON, HIT_TOLERANCE, YEAR_DAYS
from adb_calc.domain.enums import HitMode


def _is_finite_values(*values: object) -> bool:
    """True when every value is a real number that is neither inf nor nan."""
    return all(
        isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)
        for v in values
    )


# =============================================================================
# THRESHOLD-HIT EVALUATION
# =============================================================================


def projected_average(
    avg_to_date: float,
    elapsed_days: float,
    current_balance: float,
    target_days: float,
) -> float:
    """
    Average at target_days if current_balance is held for every remaining day.

    Args:
        avg_to_date: Average balance over the elapsed days
        elapsed_days: Days already counted in avg_to_date
        current_balance: Balance held constant from now until target_days
        target_days: Day count at which the average is projected

    Returns:
        Projected average, or nan if target_days <= 0 or any input is non-finite
    """
    if not _is_finite_values(avg_to_date, elapsed_days, current_balance, target_days):
        return math.nan
    if target_days <= 0:
        return math.nan

    remain = max(0, target_days - elapsed_days)
    total = avg_to_date * elapsed_days + current_balance * remain
    return total / target_days


def is_meeting_at_t(
    avg_to_date: float,
    elapsed_days: float,
    current_balance: float,
    target_days: float,
    threshold: float,
) -> bool:
    """
    Check whether the projected average at target_days meets the threshold.

    avg_T = (avg_to_date × D + current_balance × max(0, T - D)) / T
    Hit when avg_T >= threshold - 1e-9.

    "Cannot evaluate" (target_days <= 0, non-finite input) is reported as
    not hit.
    """
    if not _is_finite_values(avg_to_date, elapsed_days, current_balance, target_days, threshold):
        return False
    if target_days <= 0:
        return False

    avg_t = projected_average(avg_to_date, elapsed_days, current_balance, target_days)
    return avg_t >= threshold - HIT_TOLERANCE


def is_hit_by_mode(
    avg_to_date: float,
    elapsed_days: float,
    threshold: float,
    mode: HitMode | str,
    year_days: int = YEAR_DAYS,
) -> bool:
    """
    Check whether the threshold is already met under a display policy.

    Policies:
    - YEAR:  avg_to_date × D >= threshold × 365 (annualised running total)
    - POINT: avg_to_date >= threshold - 1e-9, but D == 0 is never a hit

    Args:
        avg_to_date: Average balance over the elapsed days
        elapsed_days: Days already counted (clamped to >= 0)
        threshold: Required average
        mode: HitMode or its string value
        year_days: Annualisation factor for the YEAR policy

    Returns:
        True if the threshold is met under the selected policy
    """
    hit_mode = mode if isinstance(mode, HitMode) else HitMode(mode)
    if not _is_finite_values(avg_to_date, elapsed_days, threshold):
        return False
    days = max(0, elapsed_days)

    if hit_mode == HitMode.YEAR:
        return avg_to_date * days >= threshold * year_days

    if days == 0:
        return False
    return avg_to_date >= threshold - HIT_TOLERANCE


# =============================================================================
# SOLVERS
# =============================================================================


def required_balance_for_t(
    avg_to_date: float,
    elapsed_days: float,
    target_days: float,
    threshold: float,
) -> float:
    """
    Minimum constant balance that makes the average at target_days meet threshold.

    Solves (A × D + M × (T - D)) / T = t for M:
        M = (t × T - A × D) / (T - D)

    A negative M is returned unchanged (the threshold is already exceeded);
    callers decide how to display it.

    Args:
        avg_to_date: Average balance over the elapsed days
        elapsed_days: Days already counted
        target_days: Day count at which the threshold must be met
        threshold: Required average

    Returns:
        M; 0 or inf when no days remain (T == D); nan for invalid input
    """
    if not _is_finite_values(avg_to_date, elapsed_days, target_days, threshold):
        return math.nan
    if target_days <= 0:
        return math.nan

    if target_days == elapsed_days:
        return 0.0 if avg_to_date >= threshold else math.inf

    numerator = threshold * target_days - avg_to_date * elapsed_days
    denominator = target_days - elapsed_days
    return numerator / denominator


def days_needed_with_m(
    avg_to_date: float,
    elapsed_days: float,
    current_balance: float,
    threshold: float,
) -> float:
    """
    Minimum extra days holding current_balance until the average meets threshold.

    From (A × D + M × N) / (D + N) >= t:
        N × (M - t) >= D × (t - A)

    Branches:
    - M == +inf:           0 (immediately sufficient)
    - |M - t| < 1e-12:     0 if already met, else inf (average cannot move)
    - M > t:               D × (t - A) / (M - t), floored at 0
    - M < t:               0 if already met, else inf

    Returns:
        N as a real number (round up for display), inf if unreachable,
        nan for invalid input
    """
    if current_balance == math.inf and _is_finite_values(avg_to_date, elapsed_days, threshold):
        return 0.0
    if not _is_finite_values(avg_to_date, elapsed_days, current_balance, threshold):
        return math.nan

    days = max(0, elapsed_days)
    rhs = days * (threshold - avg_to_date)

    if abs(current_balance - threshold) < BALANCE_EPSILON:
        return 0.0 if rhs <= 0 else math.inf

    if current_balance > threshold:
        return max(0.0, rhs / (current_balance - threshold))

    return 0.0 if rhs <= 0 else math.inf
