"""
Deposit-average engine.

Provides:
- formulas: leaf functions (hit tests, required balance, required days)
- calendar: day-of-year arithmetic and preset targets
- evaluator: single-record orchestration with typed results
- batch: per-row batch drivers for both file layouts
- loader: CSV loading with polars

Usage:
    from adb_calc.engine import evaluate_deposit, DepositInput
    from adb_calc.contracts.config import CalculationConfig

    evaluation = evaluate_deposit(inputs, CalculationConfig.point())
"""

from adb_calc.engine.batch import evaluate_dated_batch, evaluate_tier_batch
from adb_calc.engine.calendar import day_of_year, days_since_year_start
from adb_calc.engine.evaluator import (
    DepositEvaluation,
    DepositInput,
    TierDayCountEvaluation,
    TierDayCountInput,
    evaluate_deposit,
    evaluate_tier_day_counts,
)
from adb_calc.engine.formulas import (
    days_needed_with_m,
    is_hit_by_mode,
    is_meeting_at_t,
    projected_average,
    required_balance_for_t,
)
from adb_calc.engine.loader import CSVBatchLoader, DataLoadError, load_batch

__all__ = [
    # Formulas
    "days_needed_with_m",
    "is_hit_by_mode",
    "is_meeting_at_t",
    "projected_average",
    "required_balance_for_t",
    # Calendar
    "day_of_year",
    "days_since_year_start",
    # Evaluation
    "DepositEvaluation",
    "DepositInput",
    "TierDayCountEvaluation",
    "TierDayCountInput",
    "evaluate_deposit",
    "evaluate_tier_day_counts",
    # Batch
    "evaluate_dated_batch",
    "evaluate_tier_batch",
    # Loading
    "CSVBatchLoader",
    "DataLoadError",
    "load_batch",
]
