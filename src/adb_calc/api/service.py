"""
Average Daily Balance Calculator API Service.

DepositService provides a clean facade for the calculator:
- evaluate: Evaluate one record from form values
- evaluate_batch: Evaluate an uploaded CSV file
- validate_upload: Check an upload before evaluation
- get_tiers / get_hit_modes: Options for the UI selectors
- get_quick_target: Preset target dates

This is the main entry point for UI integration. The notebooks only build
requests and render responses.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from adb_calc.api.errors import (
    convert_errors,
    create_api_error,
    create_load_error,
    create_missing_columns_error,
)
from adb_calc.api.formatters import ResultFormatter
from adb_calc.api.models import (
    BatchRequest,
    BatchResponse,
    DepositRequest,
    DepositResponse,
    ValidationResponse,
)
from adb_calc.api.validation import UploadValidator
from adb_calc.contracts.errors import ERROR_INVALID_CONFIG
from adb_calc.data.schemas import BATCH_LAYOUTS
from adb_calc.engine.batch import evaluate_dated_batch, evaluate_tier_batch
from adb_calc.engine.calendar import quick_target
from adb_calc.engine.evaluator import deposit_input_errors, evaluate_deposit
from adb_calc.engine.loader import DataLoadError, MissingColumnsError, load_batch

if TYPE_CHECKING:
    from adb_calc.contracts.config import CalculationConfig


logger = logging.getLogger(__name__)


# =============================================================================
# Deposit Service
# =============================================================================


class DepositService:
    """
    High-level service for average daily balance evaluations.

    Usage:
        from adb_calc.api import DepositService, DepositRequest
        from datetime import date

        service = DepositService()
        response = service.evaluate(
            DepositRequest(
                avg_to_date=8000,
                current_balance=12000,
                stats_date=date(2025, 4, 11),
                target_date=date(2025, 12, 31),
            )
        )
        print(response.display.status_text)
    """

    def __init__(self) -> None:
        """Initialize DepositService with default components."""
        self._validator = UploadValidator()
        self._formatter = ResultFormatter()

    def evaluate(self, request: DepositRequest) -> DepositResponse:
        """
        Evaluate one record.

        Incomplete or inconsistent inputs do not raise; the response is
        unsuccessful and every KPI shows "—".

        Args:
            request: DepositRequest with form values

        Returns:
            DepositResponse with the evaluation and KPI text

        Raises:
            ValueError: If mode or threshold are not valid configuration
        """
        config = self._create_config(request.mode, request.threshold)
        inputs = request.to_input()
        evaluation = evaluate_deposit(inputs, config)

        errors = []
        if not evaluation.is_valid:
            errors = convert_errors(deposit_input_errors(inputs))

        return self._formatter.format_deposit_response(
            evaluation=evaluation,
            target_date=inputs.target_date,
            errors=errors,
            currency_symbol=config.currency_symbol,
        )

    def evaluate_batch(self, request: BatchRequest) -> BatchResponse:
        """
        Evaluate an uploaded batch file.

        File-level problems (no file, unreadable CSV, missing columns) abort
        the batch and return an unsuccessful response. Row-level problems
        only mark their own row.

        Args:
            request: BatchRequest with source, layout, mode and optional threshold

        Returns:
            BatchResponse with one result row per input row, or errors
        """
        started_at = datetime.now()

        validation = self._validator.validate(request)
        if not validation.valid:
            logger.warning("Batch upload %s rejected: %s", validation.source_name, validation.errors[0].message)
            return self._formatter.format_error_response(
                errors=validation.errors,
                layout=request.layout,
                started_at=started_at,
            )

        try:
            config = self._create_config(request.mode, request.threshold)
        except ValueError as e:
            logger.warning("Batch upload %s has invalid settings: %s", validation.source_name, e)
            error = create_api_error(ERROR_INVALID_CONFIG, str(e), severity="critical", category="Configuration")
            return self._formatter.format_error_response(
                errors=[error],
                layout=request.layout,
                started_at=started_at,
            )

        layout = BATCH_LAYOUTS[request.layout]
        try:
            records = load_batch(request.source, layout, source_name=validation.source_name)
        except MissingColumnsError as e:
            logger.warning("Batch upload %s is missing columns: %s", validation.source_name, e.missing)
            return self._formatter.format_error_response(
                errors=[create_missing_columns_error(e.missing, source=e.source)],
                layout=request.layout,
                started_at=started_at,
            )
        except DataLoadError as e:
            logger.warning("Batch upload %s could not be loaded: %s", validation.source_name, e)
            return self._formatter.format_error_response(
                errors=[create_load_error(str(e), source=e.source)],
                layout=request.layout,
                started_at=started_at,
            )

        if request.layout == "day_count":
            result = evaluate_tier_batch(records, config)
        else:
            result = evaluate_dated_batch(records, config)

        logger.info(
            "Evaluated %d %s rows from %s (%d errors)",
            result.row_count,
            request.layout,
            validation.source_name,
            len(result.errors),
        )
        if result.has_errors:
            logger.debug("First row error in %s: %s", validation.source_name, result.errors[0])
        return self._formatter.format_batch_response(
            result=result,
            layout=request.layout,
            started_at=started_at,
            currency_symbol=config.currency_symbol,
        )

    def validate_upload(self, request: BatchRequest) -> ValidationResponse:
        """Validate a batch upload without evaluating it."""
        return self._validator.validate(request)

    def get_tiers(self) -> list[dict[str, str]]:
        """
        Get the account tiers for the tier selector.

        Returns:
            List of tier descriptors with id, name and threshold
        """
        from adb_calc.contracts.config import TierThresholds
        from adb_calc.domain.enums import AccountTier

        thresholds = TierThresholds.regulatory()
        return [
            {
                "id": AccountTier.BASIC.value,
                "name": "达标户",
                "threshold": f"{thresholds.basic:,.0f}",
            },
            {
                "id": AccountTier.MID.value,
                "name": "中型户",
                "threshold": f"{thresholds.mid:,.0f}",
            },
        ]

    def get_hit_modes(self) -> list[dict[str, str]]:
        """Get the hit policies for the mode selector."""
        return [
            {
                "id": "point",
                "name": "时点",
                "description": "Average to date meets the threshold (day zero never counts)",
            },
            {
                "id": "year",
                "name": "全年",
                "description": "Running total meets the threshold over a 365-day year",
            },
        ]

    def get_quick_target(self, kind: str, stats_date: date | None = None) -> date:
        """
        Preset target date in the statistics year (today's year if unset).

        Args:
            kind: "q3" (September 30) or "year" (December 31)
            stats_date: Statistics date selecting the year
        """
        return quick_target(kind, stats_date)

    def _create_config(self, mode: str, threshold: float | None = None) -> CalculationConfig:
        from adb_calc.contracts.config import CalculationConfig, TierThresholds

        thresholds = TierThresholds.custom(threshold) if threshold is not None else None
        return CalculationConfig.for_mode(mode, thresholds)


# =============================================================================
# Convenience Functions
# =============================================================================


def create_service() -> DepositService:
    """
    Factory function to create DepositService instance.

    Returns:
        Configured DepositService
    """
    return DepositService()


def quick_evaluate_batch(
    source: str | Path,
    layout: str = "dated",
    mode: str = "point",
    threshold: float | None = None,
) -> BatchResponse:
    """
    Evaluate a batch file with minimal setup.

    Example:
        response = quick_evaluate_batch("/path/to/batch.csv")
        print(response.results)
    """
    return DepositService().evaluate_batch(
        BatchRequest(source=source, layout=layout, mode=mode, threshold=threshold)
    )
