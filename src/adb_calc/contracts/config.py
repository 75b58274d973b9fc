"""
Configuration contracts for the average daily balance calculator.

Provides immutable configuration dataclasses:
- TierThresholds: Required average per account tier
- CalculationConfig: Master configuration with factory methods

Factory methods .point() and .year() select the hit-mode policy used for
the "already met" badge. Thresholds are floats because the engine works in
IEEE arithmetic with explicit inf/nan sentinels.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from adb_calc.config.thresholds import (
    CURRENCY_SYMBOL,
    YEAR_DAYS,
    get_tier_threshold,
)
from adb_calc.domain.enums import AccountTier, HitMode


@dataclass(frozen=True)
class TierThresholds:
    """
    Required average daily balance by account tier.

    Defaults are the regulatory values (basic 10,000 / mid 500,000).
    Use .custom() when a threshold is supplied directly, which applies
    the same value to every tier.
    """

    basic: float = get_tier_threshold(AccountTier.BASIC.value)
    mid: float = get_tier_threshold(AccountTier.MID.value)

    def __post_init__(self) -> None:
        for name in ("basic", "mid"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                msg = f"Threshold for tier '{name}' must be a positive finite number, got {value}"
                raise ValueError(msg)

    def get_threshold(self, tier: AccountTier) -> float:
        """Get the required average for a tier."""
        if tier == AccountTier.MID:
            return self.mid
        return self.basic

    def as_dict(self) -> dict[AccountTier, float]:
        """Thresholds keyed by tier, in tier declaration order."""
        return {tier: self.get_threshold(tier) for tier in AccountTier}

    @classmethod
    def regulatory(cls) -> TierThresholds:
        """Regulatory tier thresholds."""
        return cls(
            basic=get_tier_threshold(AccountTier.BASIC.value),
            mid=get_tier_threshold(AccountTier.MID.value),
        )

    @classmethod
    def custom(cls, threshold: float) -> TierThresholds:
        """Single directly supplied threshold used for every tier."""
        return cls(basic=threshold, mid=threshold)


@dataclass(frozen=True)
class CalculationConfig:
    """
    Master configuration for average-balance evaluations.

    Attributes:
        hit_mode: Policy for the "already met" badge (point or year)
        thresholds: Required averages by tier
        year_days: Annualisation factor used by the year hit mode
        currency_symbol: Symbol used when formatting money
    """

    hit_mode: HitMode = HitMode.POINT
    thresholds: TierThresholds = field(default_factory=TierThresholds.regulatory)
    year_days: int = YEAR_DAYS
    currency_symbol: str = CURRENCY_SYMBOL

    @property
    def is_point_mode(self) -> bool:
        """Check if the point-in-time hit policy is selected."""
        return self.hit_mode == HitMode.POINT

    @property
    def is_year_mode(self) -> bool:
        """Check if the annualised hit policy is selected."""
        return self.hit_mode == HitMode.YEAR

    def get_threshold(self, tier: AccountTier) -> float:
        """Get the configured required average for a tier."""
        return self.thresholds.get_threshold(tier)

    @classmethod
    def point(cls, thresholds: TierThresholds | None = None) -> CalculationConfig:
        """
        Create configuration using the point-in-time hit policy.

        The badge compares the average-to-date with the threshold; a record
        with no elapsed days is never a hit.
        """
        return cls(
            hit_mode=HitMode.POINT,
            thresholds=thresholds or TierThresholds.regulatory(),
        )

    @classmethod
    def year(cls, thresholds: TierThresholds | None = None) -> CalculationConfig:
        """
        Create configuration using the annualised hit policy.

        The badge compares average x elapsed days with threshold x 365.
        """
        return cls(
            hit_mode=HitMode.YEAR,
            thresholds=thresholds or TierThresholds.regulatory(),
        )

    @classmethod
    def for_mode(
        cls,
        mode: HitMode | str,
        thresholds: TierThresholds | None = None,
    ) -> CalculationConfig:
        """
        Create configuration from a mode selector value.

        Args:
            mode: HitMode or its string value ("point" / "year")
            thresholds: Optional tier thresholds

        Raises:
            ValueError: If mode is not a known hit mode
        """
        hit_mode = mode if isinstance(mode, HitMode) else HitMode(mode)
        if hit_mode == HitMode.YEAR:
            return cls.year(thresholds)
        return cls.point(thresholds)
