"""
Batch evaluation for uploaded record tables.

Applies the single-record pipeline to every row of a loaded batch:
- evaluate_dated_batch: statistics/target dates with a per-row tier
- evaluate_tier_batch: explicit day counts, evaluated against every tier

Each row is evaluated independently. A row that cannot be evaluated gets a
status other than "evaluated" and its own errors in the BatchResult; the
remaining rows are unaffected. Output rows keep input order.

Usage:
    from adb_calc.engine.batch import evaluate_dated_batch
    from adb_calc.engine.loader import load_batch
    from adb_calc.data.schemas import DATED_LAYOUT

    records = load_batch("/path/to/batch.csv", DATED_LAYOUT)
    result = evaluate_dated_batch(records, CalculationConfig.point())
    print(result.frame)
"""

from __future__ import annotations

import logging
import math
from typing import Any

import polars as pl

from adb_calc.contracts.config import CalculationConfig
from adb_calc.contracts.errors import BatchResult, CalculationError
from adb_calc.data.schemas import DATED_RESULT_SCHEMA, DAY_COUNT_RESULT_SCHEMA
from adb_calc.domain.enums import AccountTier
from adb_calc.engine.evaluator import (
    DepositInput,
    TierDayCountInput,
    deposit_input_errors,
    evaluate_deposit,
    evaluate_tier_day_counts,
    tier_day_count_errors,
)


logger = logging.getLogger(__name__)


def _number(value: Any) -> float:
    """Null cells become nan so the evaluators see them as missing."""
    if value is None:
        return math.nan
    return float(value)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _record_reference(row: dict[str, Any], row_number: int) -> str:
    record_id = _text(row.get("id")).strip()
    return record_id or f"row {row_number}"


# =============================================================================
# DATED BATCH
# =============================================================================


def evaluate_dated_batch(
    records: pl.DataFrame,
    config: CalculationConfig | None = None,
) -> BatchResult:
    """
    Evaluate every row of a dated batch.

    Expects columns: name, id, avg_to_date, current_balance, stats_date,
    target_date, level (as produced by the loader with DATED_LAYOUT).

    Args:
        records: Typed batch records
        config: Calculation configuration; its hit mode applies to every row

    Returns:
        BatchResult with one output row per input row
    """
    config = config or CalculationConfig.point()
    rows: list[dict[str, Any]] = []
    errors: list[CalculationError] = []

    for row_number, row in enumerate(records.iter_rows(named=True), start=1):
        inputs = DepositInput(
            avg_to_date=_number(row.get("avg_to_date")),
            current_balance=_number(row.get("current_balance")),
            stats_date=row.get("stats_date"),
            target_date=row.get("target_date"),
            tier=AccountTier.from_level(row.get("level")),
        )
        evaluation = evaluate_deposit(inputs, config)

        if not evaluation.is_valid:
            reference = _record_reference(row, row_number)
            errors.extend(deposit_input_errors(inputs, reference))
            logger.debug("Row %d (%s) not evaluated: %s", row_number, reference, evaluation.status.value)

        rows.append({
            "row_number": row_number,
            "name": _text(row.get("name")),
            "id": _text(row.get("id")),
            "avg_to_date": inputs.avg_to_date,
            "current_balance": inputs.current_balance,
            "stats_date": inputs.stats_date,
            "target_date": inputs.target_date,
            "tier": inputs.tier.value,
            "status": evaluation.status.value,
            "threshold": evaluation.threshold,
            "elapsed_days": evaluation.elapsed_days,
            "target_days": evaluation.target_days,
            "is_hit": evaluation.is_hit,
            "projected_average": evaluation.projected_average,
            "required_balance": evaluation.required_balance,
            "required_extra_days": evaluation.required_extra_days,
            "attainment_date": evaluation.attainment_date,
        })

    logger.debug("Evaluated %d dated rows, %d errors", len(rows), len(errors))
    return BatchResult(
        frame=pl.DataFrame(rows, schema=DATED_RESULT_SCHEMA),
        errors=errors,
    )


# =============================================================================
# DAY-COUNT BATCH
# =============================================================================


def evaluate_tier_batch(
    records: pl.DataFrame,
    config: CalculationConfig | None = None,
) -> BatchResult:
    """
    Evaluate every row of a day-count batch against both tiers.

    Expects columns: name, id, avg_to_date, elapsed_days, current_balance,
    total_days (as produced by the loader with DAY_COUNT_LAYOUT).

    Args:
        records: Typed batch records
        config: Calculation configuration supplying the tier thresholds

    Returns:
        BatchResult with one output row per input row and per-tier columns
    """
    config = config or CalculationConfig.point()
    rows: list[dict[str, Any]] = []
    errors: list[CalculationError] = []

    for row_number, row in enumerate(records.iter_rows(named=True), start=1):
        inputs = TierDayCountInput(
            avg_to_date=_number(row.get("avg_to_date")),
            elapsed_days=_number(row.get("elapsed_days")),
            current_balance=_number(row.get("current_balance")),
            total_days=_number(row.get("total_days")),
        )
        evaluation = evaluate_tier_day_counts(inputs, config)

        if not evaluation.is_valid:
            reference = _record_reference(row, row_number)
            errors.extend(tier_day_count_errors(inputs, reference))
            logger.debug("Row %d (%s) not evaluated: %s", row_number, reference, evaluation.status.value)

        out: dict[str, Any] = {
            "row_number": row_number,
            "name": _text(row.get("name")),
            "id": _text(row.get("id")),
            "avg_to_date": inputs.avg_to_date,
            "elapsed_days": inputs.elapsed_days,
            "current_balance": inputs.current_balance,
            "total_days": inputs.total_days,
            "status": evaluation.status.value,
        }
        for tier, outcome in evaluation.outcomes.items():
            prefix = tier.value
            out[f"{prefix}_is_hit"] = outcome.is_meeting_at_target
            out[f"{prefix}_projected_average"] = outcome.projected_average
            out[f"{prefix}_required_balance"] = outcome.required_balance
            out[f"{prefix}_required_extra_days"] = outcome.required_extra_days
        rows.append(out)

    logger.debug("Evaluated %d day-count rows, %d errors", len(rows), len(errors))
    return BatchResult(
        frame=pl.DataFrame(rows, schema=DAY_COUNT_RESULT_SCHEMA),
        errors=errors,
    )
