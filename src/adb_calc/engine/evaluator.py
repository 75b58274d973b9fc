"""
Single-record evaluation for the average daily balance calculator.

Combines the leaf formulas and calendar arithmetic into one typed result:
- DepositInput / evaluate_deposit: dated records (statistics and target dates)
- TierDayCountInput / evaluate_tier_day_counts: explicit day counts, both tiers

Dual horizon:
    The projected average uses the caller's target date. The balance-needed
    and days-needed figures always use December 31 of the statistics year,
    independent of the chosen target. required_balance_at_target carries the
    solver result for the caller's own target date.

Usage:
    from adb_calc.engine.evaluator import DepositInput, evaluate_deposit

    evaluation = evaluate_deposit(inputs, CalculationConfig.point())
    if evaluation.status.is_valid:
        print(evaluation.projected_average)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date

from adb_calc.contracts.config import CalculationConfig
from adb_calc.contracts.errors import (
    CalculationError,
    invalid_value_error,
    missing_field_error,
    target_order_error,
    target_year_error,
)
from adb_calc.domain.enums import AccountTier, HitMode, RecordStatus
from adb_calc.engine.calendar import (
    add_days,
    days_since_year_start,
    format_date,
    year_end,
)
from adb_calc.engine.formulas import (
    days_needed_with_m,
    is_hit_by_mode,
    is_meeting_at_t,
    projected_average,
    required_balance_for_t,
)


def _finite(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def _whole(value: float) -> bool:
    return float(value).is_integer()


# =============================================================================
# DATED RECORDS
# =============================================================================


@dataclass(frozen=True)
class DepositInput:
    """
    One observation plus target, as entered on the form or read from a file.

    Attributes:
        avg_to_date: Average balance from January 1 to the statistics date
        current_balance: Balance held at the statistics date
        stats_date: Observation date (None when missing)
        target_date: Date at which the average is projected (None when missing)
        tier: Account tier selecting the threshold
    """

    avg_to_date: float
    current_balance: float
    stats_date: date | None
    target_date: date | None
    tier: AccountTier = AccountTier.BASIC

    @property
    def status(self) -> RecordStatus:
        """Whether the input can be evaluated."""
        if (
            not _finite(self.avg_to_date)
            or not _finite(self.current_balance)
            or self.stats_date is None
            or self.target_date is None
        ):
            return RecordStatus.INCOMPLETE
        if self.target_date < self.stats_date:
            return RecordStatus.TARGET_BEFORE_STATS
        if self.target_date.year != self.stats_date.year:
            return RecordStatus.TARGET_OTHER_YEAR
        return RecordStatus.EVALUATED


@dataclass(frozen=True)
class DepositEvaluation:
    """
    Derived result for one DepositInput. Never stored.

    Numeric fields use math.inf for "unreachable" and math.nan for
    "not evaluated".

    Attributes:
        status: Evaluation status
        tier: Account tier evaluated
        threshold: Required average used
        hit_mode: Policy used for is_hit
        elapsed_days: Day offset of the statistics date
        target_days: Day offset of the target date
        year_end_days: Day offset of December 31 of the statistics year
        remaining_days: Days left in the year after the statistics date
        is_hit: Threshold met under the hit-mode policy
        is_meeting_at_target: Projected average at the target meets the threshold
        projected_average: Average at the target date holding current_balance
        required_balance: Constant balance needed to meet the threshold by year end
        required_balance_at_target: Constant balance needed by the target date
        required_extra_days: Days needed at current_balance to meet the threshold
        attainment_date: Date the threshold is met, if within the year
    """

    status: RecordStatus
    tier: AccountTier
    threshold: float
    hit_mode: HitMode
    elapsed_days: int | None = None
    target_days: int | None = None
    year_end_days: int | None = None
    remaining_days: int | None = None
    is_hit: bool = False
    is_meeting_at_target: bool = False
    projected_average: float = math.nan
    required_balance: float = math.nan
    required_balance_at_target: float = math.nan
    required_extra_days: float = math.nan
    attainment_date: date | None = None

    @property
    def is_valid(self) -> bool:
        return self.status.is_valid

    @property
    def is_days_unreachable(self) -> bool:
        """No finite day count at the current balance."""
        return self.required_extra_days == math.inf

    @property
    def is_attainable_this_year(self) -> bool:
        return self.attainment_date is not None

    @property
    def required_extra_days_ceil(self) -> int | None:
        """Extra days rounded up to whole days (None when not finite)."""
        if not _finite(self.required_extra_days):
            return None
        return math.ceil(self.required_extra_days)


def evaluate_deposit(
    inputs: DepositInput,
    config: CalculationConfig | None = None,
) -> DepositEvaluation:
    """
    Evaluate one dated record.

    Args:
        inputs: Observation, target and tier
        config: Calculation configuration (defaults to point mode)

    Returns:
        DepositEvaluation; invalid inputs return a result whose status says
        why and whose numeric fields are nan
    """
    config = config or CalculationConfig.point()
    threshold = config.get_threshold(inputs.tier)

    status = inputs.status
    if not status.is_valid:
        return DepositEvaluation(
            status=status,
            tier=inputs.tier,
            threshold=threshold,
            hit_mode=config.hit_mode,
        )

    elapsed_days = days_since_year_start(inputs.stats_date)
    target_days = days_since_year_start(inputs.target_date)
    year_end_days = days_since_year_start(year_end(inputs.stats_date))
    remaining_days = max(0, year_end_days - elapsed_days)

    required_extra_days = days_needed_with_m(
        inputs.avg_to_date, elapsed_days, inputs.current_balance, threshold
    )

    attainment_date = None
    if _finite(required_extra_days) and required_extra_days <= remaining_days:
        attainment_date = add_days(inputs.stats_date, math.ceil(required_extra_days))

    return DepositEvaluation(
        status=status,
        tier=inputs.tier,
        threshold=threshold,
        hit_mode=config.hit_mode,
        elapsed_days=elapsed_days,
        target_days=target_days,
        year_end_days=year_end_days,
        remaining_days=remaining_days,
        is_hit=is_hit_by_mode(
            inputs.avg_to_date, elapsed_days, threshold, config.hit_mode, config.year_days
        ),
        is_meeting_at_target=is_meeting_at_t(
            inputs.avg_to_date, elapsed_days, inputs.current_balance, target_days, threshold
        ),
        projected_average=projected_average(
            inputs.avg_to_date, elapsed_days, inputs.current_balance, target_days
        ),
        required_balance=required_balance_for_t(
            inputs.avg_to_date, elapsed_days, year_end_days, threshold
        ),
        required_balance_at_target=required_balance_for_t(
            inputs.avg_to_date, elapsed_days, target_days, threshold
        ),
        required_extra_days=required_extra_days,
        attainment_date=attainment_date,
    )


def deposit_input_errors(
    inputs: DepositInput,
    record_reference: str | None = None,
) -> list[CalculationError]:
    """
    Describe why a dated record cannot be evaluated.

    Returns an empty list for evaluable records.
    """
    errors: list[CalculationError] = []

    for field_name, value in (
        ("avg_to_date", inputs.avg_to_date),
        ("current_balance", inputs.current_balance),
    ):
        if value is None or (isinstance(value, float) and math.isnan(value)):
            errors.append(missing_field_error(field_name, record_reference))
        elif not _finite(value):
            errors.append(invalid_value_error(field_name, str(value), "finite number", record_reference))

    if inputs.stats_date is None:
        errors.append(missing_field_error("stats_date", record_reference))
    if inputs.target_date is None:
        errors.append(missing_field_error("target_date", record_reference))

    if not errors and inputs.target_date < inputs.stats_date:
        errors.append(target_order_error(
            format_date(inputs.target_date),
            format_date(inputs.stats_date),
            record_reference,
        ))
    elif not errors and inputs.target_date.year != inputs.stats_date.year:
        errors.append(target_year_error(
            format_date(inputs.target_date),
            format_date(inputs.stats_date),
            record_reference,
        ))

    return errors


# =============================================================================
# DAY-COUNT RECORDS
# =============================================================================


@dataclass(frozen=True)
class TierDayCountInput:
    """
    Observation given directly in day counts.

    Attributes:
        avg_to_date: Average balance over elapsed_days
        elapsed_days: Whole days already counted
        current_balance: Balance held constant from now on
        total_days: Whole day count at which compliance is projected
    """

    avg_to_date: float
    elapsed_days: float
    current_balance: float
    total_days: float

    @property
    def status(self) -> RecordStatus:
        if not all(
            _finite(v)
            for v in (self.avg_to_date, self.elapsed_days, self.current_balance, self.total_days)
        ):
            return RecordStatus.INCOMPLETE
        if not _whole(self.elapsed_days) or not _whole(self.total_days):
            return RecordStatus.INCOMPLETE
        if self.elapsed_days < 0 or self.total_days <= 0:
            return RecordStatus.INCOMPLETE
        if self.total_days < self.elapsed_days:
            return RecordStatus.TARGET_BEFORE_STATS
        return RecordStatus.EVALUATED


@dataclass(frozen=True)
class TierOutcome:
    """Evaluation against one tier threshold."""

    tier: AccountTier
    threshold: float
    is_meeting_at_target: bool = False
    projected_average: float = math.nan
    required_balance: float = math.nan
    required_extra_days: float = math.nan


@dataclass(frozen=True)
class TierDayCountEvaluation:
    """Evaluation of a TierDayCountInput against every tier."""

    status: RecordStatus
    outcomes: dict[AccountTier, TierOutcome]

    @property
    def is_valid(self) -> bool:
        return self.status.is_valid

    def outcome(self, tier: AccountTier) -> TierOutcome:
        return self.outcomes[tier]


def evaluate_tier_day_counts(
    inputs: TierDayCountInput,
    config: CalculationConfig | None = None,
) -> TierDayCountEvaluation:
    """
    Evaluate a day-count record against all configured tier thresholds.

    target_days is total_days for every tier.
    """
    config = config or CalculationConfig.point()
    status = inputs.status
    outcomes: dict[AccountTier, TierOutcome] = {}

    for tier, threshold in config.thresholds.as_dict().items():
        if not status.is_valid:
            outcomes[tier] = TierOutcome(tier=tier, threshold=threshold)
            continue

        outcomes[tier] = TierOutcome(
            tier=tier,
            threshold=threshold,
            is_meeting_at_target=is_meeting_at_t(
                inputs.avg_to_date,
                inputs.elapsed_days,
                inputs.current_balance,
                inputs.total_days,
                threshold,
            ),
            projected_average=projected_average(
                inputs.avg_to_date,
                inputs.elapsed_days,
                inputs.current_balance,
                inputs.total_days,
            ),
            required_balance=required_balance_for_t(
                inputs.avg_to_date, inputs.elapsed_days, inputs.total_days, threshold
            ),
            required_extra_days=days_needed_with_m(
                inputs.avg_to_date, inputs.elapsed_days, inputs.current_balance, threshold
            ),
        )

    return TierDayCountEvaluation(status=status, outcomes=outcomes)


def tier_day_count_errors(
    inputs: TierDayCountInput,
    record_reference: str | None = None,
) -> list[CalculationError]:
    """Describe why a day-count record cannot be evaluated."""
    errors: list[CalculationError] = []

    for field_name in ("avg_to_date", "elapsed_days", "current_balance", "total_days"):
        value = getattr(inputs, field_name)
        if value is None or (isinstance(value, float) and math.isnan(value)):
            errors.append(missing_field_error(field_name, record_reference))
        elif not _finite(value):
            errors.append(invalid_value_error(field_name, str(value), "finite number", record_reference))

    if errors:
        return errors

    for field_name in ("elapsed_days", "total_days"):
        value = getattr(inputs, field_name)
        if not _whole(value):
            errors.append(invalid_value_error(field_name, str(value), "whole number of days", record_reference))
    if errors:
        return errors

    if inputs.elapsed_days < 0:
        errors.append(invalid_value_error(
            "elapsed_days", str(inputs.elapsed_days), ">= 0", record_reference
        ))
    if inputs.total_days <= 0:
        errors.append(invalid_value_error(
            "total_days", str(inputs.total_days), "> 0", record_reference
        ))
    if not errors and inputs.total_days < inputs.elapsed_days:
        errors.append(target_order_error(
            str(inputs.total_days),
            str(inputs.elapsed_days),
            record_reference,
            field_name="total_days",
        ))

    return errors
