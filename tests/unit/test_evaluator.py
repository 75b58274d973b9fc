"""
Unit tests for single-record evaluation.

Covers the dual horizon (user target for the projected average, year end
for balance and days), attainment dates and invalid-input statuses.
"""

import math
from datetime import date

import pytest

from adb_calc.contracts.config import CalculationConfig, TierThresholds
from adb_calc.contracts.errors import (
    ERROR_INVALID_VALUE,
    ERROR_MISSING_FIELD,
    ERROR_TARGET_BEFORE_STATS,
    ERROR_TARGET_OTHER_YEAR,
)
from adb_calc.domain.enums import AccountTier, HitMode, RecordStatus
from adb_calc.engine.evaluator import (
    DepositInput,
    TierDayCountInput,
    deposit_input_errors,
    evaluate_deposit,
    evaluate_tier_day_counts,
    tier_day_count_errors,
)


@pytest.fixture
def basic_input() -> DepositInput:
    """8000 average over 100 days, 12000 held, target at September 30."""
    return DepositInput(
        avg_to_date=8000.0,
        current_balance=12000.0,
        stats_date=date(2025, 4, 11),
        target_date=date(2025, 9, 30),
    )


class TestEvaluateDeposit:
    """Tests for evaluate_deposit."""

    def test_day_counts(self, basic_input: DepositInput) -> None:
        result = evaluate_deposit(basic_input)

        assert result.status == RecordStatus.EVALUATED
        assert result.elapsed_days == 100
        assert result.target_days == 272
        assert result.year_end_days == 364
        assert result.remaining_days == 264

    def test_point_mode_is_hit_uses_average_to_date(self, basic_input: DepositInput) -> None:
        result = evaluate_deposit(basic_input, CalculationConfig.point())
        assert result.hit_mode == HitMode.POINT
        assert result.is_hit is False

    def test_projected_average_uses_user_target(self, basic_input: DepositInput) -> None:
        result = evaluate_deposit(basic_input)
        assert result.projected_average == pytest.approx((800_000 + 12000 * 172) / 272)
        assert result.is_meeting_at_target is True

    def test_required_balance_uses_year_end(self, basic_input: DepositInput) -> None:
        """Required balance ignores the user target."""
        result = evaluate_deposit(basic_input)
        assert result.required_balance == pytest.approx((10000 * 364 - 800_000) / 264)
        assert result.required_balance_at_target == pytest.approx((10000 * 272 - 800_000) / 172)

    def test_attainment_date(self, basic_input: DepositInput) -> None:
        """100 extra days from April 11."""
        result = evaluate_deposit(basic_input)
        assert result.required_extra_days == pytest.approx(100.0)
        assert result.required_extra_days_ceil == 100
        assert result.attainment_date == date(2025, 7, 20)
        assert result.is_attainable_this_year is True

    def test_unreachable_balance_below_threshold(self) -> None:
        result = evaluate_deposit(DepositInput(
            avg_to_date=5000.0,
            current_balance=5000.0,
            stats_date=date(2025, 2, 20),
            target_date=date(2025, 12, 31),
        ))
        assert result.elapsed_days == 50
        assert result.is_days_unreachable is True
        assert result.attainment_date is None

    def test_needs_more_days_than_remaining(self) -> None:
        result = evaluate_deposit(DepositInput(
            avg_to_date=5000.0,
            current_balance=20000.0,
            stats_date=date(2025, 12, 1),
            target_date=date(2025, 12, 31),
        ))
        assert result.remaining_days == 30
        assert result.required_extra_days == pytest.approx(167.0)
        assert result.attainment_date is None
        assert result.is_days_unreachable is False

    def test_mid_tier_threshold(self) -> None:
        result = evaluate_deposit(DepositInput(
            avg_to_date=600_000.0,
            current_balance=600_000.0,
            stats_date=date(2025, 6, 30),
            target_date=date(2025, 9, 30),
            tier=AccountTier.MID,
        ))
        assert result.threshold == 500_000.0
        assert result.is_hit is True
        assert result.attainment_date == date(2025, 6, 30)

    def test_custom_threshold(self, basic_input: DepositInput) -> None:
        config = CalculationConfig.point(TierThresholds.custom(5000.0))
        result = evaluate_deposit(basic_input, config)
        assert result.threshold == 5000.0
        assert result.is_hit is True

    def test_year_mode(self) -> None:
        result = evaluate_deposit(
            DepositInput(
                avg_to_date=20000.0,
                current_balance=0.0,
                stats_date=date(2025, 7, 20),
                target_date=date(2025, 12, 31),
            ),
            CalculationConfig.year(),
        )
        # 20000 × 200 >= 10000 × 365
        assert result.elapsed_days == 200
        assert result.is_hit is True

    def test_missing_stats_date_is_incomplete(self, basic_input: DepositInput) -> None:
        inputs = DepositInput(
            avg_to_date=basic_input.avg_to_date,
            current_balance=basic_input.current_balance,
            stats_date=None,
            target_date=basic_input.target_date,
        )
        result = evaluate_deposit(inputs)
        assert result.status == RecordStatus.INCOMPLETE
        assert result.is_valid is False
        assert math.isnan(result.projected_average)
        assert math.isnan(result.required_balance)
        assert result.attainment_date is None

    def test_nan_balance_is_incomplete(self, basic_input: DepositInput) -> None:
        inputs = DepositInput(
            avg_to_date=8000.0,
            current_balance=math.nan,
            stats_date=basic_input.stats_date,
            target_date=basic_input.target_date,
        )
        assert evaluate_deposit(inputs).status == RecordStatus.INCOMPLETE

    def test_target_before_stats(self) -> None:
        result = evaluate_deposit(DepositInput(
            avg_to_date=12000.0,
            current_balance=12000.0,
            stats_date=date(2025, 6, 30),
            target_date=date(2025, 3, 31),
        ))
        assert result.status == RecordStatus.TARGET_BEFORE_STATS
        assert result.is_hit is False

    def test_target_in_following_year_is_not_evaluated(self) -> None:
        """Day offsets restart on January 1, so a next-year target cannot be projected."""
        result = evaluate_deposit(DepositInput(
            avg_to_date=8000.0,
            current_balance=8000.0,
            stats_date=date(2025, 12, 1),
            target_date=date(2026, 1, 31),
        ))
        assert result.status == RecordStatus.TARGET_OTHER_YEAR
        assert result.is_valid is False
        assert result.is_meeting_at_target is False
        assert math.isnan(result.projected_average)
        assert result.target_days is None

    def test_target_equal_to_stats_is_valid(self) -> None:
        result = evaluate_deposit(DepositInput(
            avg_to_date=12000.0,
            current_balance=0.0,
            stats_date=date(2025, 6, 30),
            target_date=date(2025, 6, 30),
        ))
        assert result.status == RecordStatus.EVALUATED
        assert result.projected_average == pytest.approx(12000.0)


class TestDepositInputErrors:
    """Tests for deposit_input_errors."""

    def test_valid_input_has_no_errors(self, basic_input: DepositInput) -> None:
        assert deposit_input_errors(basic_input) == []

    def test_missing_fields(self) -> None:
        inputs = DepositInput(
            avg_to_date=math.nan,
            current_balance=1.0,
            stats_date=None,
            target_date=date(2025, 1, 1),
        )
        errors = deposit_input_errors(inputs, "A001")
        assert [e.field_name for e in errors] == ["avg_to_date", "stats_date"]
        assert all(e.code == ERROR_MISSING_FIELD for e in errors)
        assert all(e.record_reference == "A001" for e in errors)

    def test_infinite_value_is_invalid(self) -> None:
        inputs = DepositInput(
            avg_to_date=math.inf,
            current_balance=1.0,
            stats_date=date(2025, 1, 1),
            target_date=date(2025, 1, 1),
        )
        errors = deposit_input_errors(inputs)
        assert [e.code for e in errors] == [ERROR_INVALID_VALUE]

    def test_target_before_stats(self) -> None:
        inputs = DepositInput(
            avg_to_date=1.0,
            current_balance=1.0,
            stats_date=date(2025, 6, 30),
            target_date=date(2025, 3, 31),
        )
        (error,) = deposit_input_errors(inputs)
        assert error.code == ERROR_TARGET_BEFORE_STATS
        assert error.actual_value == "2025-03-31"

    def test_target_in_following_year(self) -> None:
        inputs = DepositInput(
            avg_to_date=8000.0,
            current_balance=8000.0,
            stats_date=date(2025, 12, 1),
            target_date=date(2026, 1, 31),
        )
        (error,) = deposit_input_errors(inputs, "A007")
        assert error.code == ERROR_TARGET_OTHER_YEAR
        assert error.field_name == "target_date"
        assert error.record_reference == "A007"


class TestTierDayCounts:
    """Tests for evaluate_tier_day_counts."""

    def test_both_tiers_evaluated(self) -> None:
        result = evaluate_tier_day_counts(TierDayCountInput(8000, 100, 12000, 365))

        basic = result.outcome(AccountTier.BASIC)
        mid = result.outcome(AccountTier.MID)

        assert result.is_valid
        assert basic.is_meeting_at_target is True
        assert basic.projected_average == pytest.approx(3_980_000 / 365)
        assert basic.required_balance == pytest.approx(2_850_000 / 265)
        assert basic.required_extra_days == pytest.approx(100.0)
        assert mid.is_meeting_at_target is False
        assert mid.required_extra_days == math.inf

    @pytest.mark.parametrize(
        "inputs, status",
        [
            (TierDayCountInput(math.nan, 50, 5000, 365), RecordStatus.INCOMPLETE),
            (TierDayCountInput(5000, -1, 5000, 365), RecordStatus.INCOMPLETE),
            (TierDayCountInput(5000, 0, 5000, 0), RecordStatus.INCOMPLETE),
            (TierDayCountInput(5000, 10.5, 5000, 365), RecordStatus.INCOMPLETE),
            (TierDayCountInput(5000, 10, 5000, 365.5), RecordStatus.INCOMPLETE),
            (TierDayCountInput(600000, 200, 400000, 100), RecordStatus.TARGET_BEFORE_STATS),
        ],
    )
    def test_invalid_rows(self, inputs: TierDayCountInput, status: RecordStatus) -> None:
        result = evaluate_tier_day_counts(inputs)
        assert result.status == status
        assert all(math.isnan(o.projected_average) for o in result.outcomes.values())

    def test_errors_describe_invalid_rows(self) -> None:
        errors = tier_day_count_errors(TierDayCountInput(600000, 200, 400000, 100), "B004")
        assert [e.code for e in errors] == [ERROR_TARGET_BEFORE_STATS]
        assert errors[0].field_name == "total_days"

        errors = tier_day_count_errors(TierDayCountInput(5000, -1, 5000, 0))
        assert [e.field_name for e in errors] == ["elapsed_days", "total_days"]

    def test_fractional_day_counts_are_reported(self) -> None:
        errors = tier_day_count_errors(TierDayCountInput(5000, 10.5, 5000, 365.5), "B005")
        assert [e.code for e in errors] == [ERROR_INVALID_VALUE, ERROR_INVALID_VALUE]
        assert [e.field_name for e in errors] == ["elapsed_days", "total_days"]
        assert errors[0].expected_value == "whole number of days"

    def test_whole_float_day_counts_are_accepted(self) -> None:
        assert evaluate_tier_day_counts(TierDayCountInput(8000, 100.0, 12000, 365.0)).is_valid
