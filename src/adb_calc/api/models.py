"""
API request and response models for the average daily balance calculator.

DepositService uses these models for clean interface contracts:
- DepositRequest: Form values for one record
- BatchRequest: Uploaded file plus layout and mode
- KpiDisplay: Display text for the single-record KPIs
- DepositResponse / BatchResponse: Results with display text and errors
- ValidationResponse: Upload validation results

All models are frozen dataclasses following existing project patterns.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from adb_calc.domain.enums import AccountTier

if TYPE_CHECKING:
    import polars as pl

    from adb_calc.engine.evaluator import DepositEvaluation, DepositInput


TierValue = Literal["basic", "mid"]
ModeValue = Literal["point", "year"]
LayoutValue = Literal["dated", "day_count"]


# =============================================================================
# Request Models
# =============================================================================


@dataclass(frozen=True)
class DepositRequest:
    """
    Request model for a single-record evaluation.

    Mirrors the calculator form. Empty numeric inputs are None.

    Attributes:
        avg_to_date: Average balance from January 1 to the statistics date
        current_balance: Balance held at the statistics date
        stats_date: Statistics (observation) date, as a date or ISO string
        target_date: Date at which the average is projected
        tier: "basic" or "mid"
        mode: Hit policy, "point" or "year"
        threshold: Direct required average overriding the tier thresholds
    """

    avg_to_date: float | None
    current_balance: float | None
    stats_date: date | str | None
    target_date: date | str | None
    tier: TierValue = "basic"
    mode: ModeValue = "point"
    threshold: float | None = None

    def to_input(self) -> DepositInput:
        """Map form values onto the engine's typed input."""
        from adb_calc.engine.calendar import parse_date
        from adb_calc.engine.evaluator import DepositInput

        return DepositInput(
            avg_to_date=math.nan if self.avg_to_date is None else float(self.avg_to_date),
            current_balance=math.nan if self.current_balance is None else float(self.current_balance),
            stats_date=parse_date(self.stats_date),
            target_date=parse_date(self.target_date),
            tier=AccountTier.from_level(self.tier),
        )


@dataclass(frozen=True)
class BatchRequest:
    """
    Request model for a batch evaluation.

    Attributes:
        source: Uploaded file bytes or a path to a CSV file (None if no file chosen)
        source_name: Original file name, used for validation and messages
        layout: "dated" (dates and level) or "day_count" (explicit day counts)
        mode: Hit policy for dated rows, "point" or "year"
        threshold: Direct required average overriding the tier thresholds
    """

    source: bytes | str | Path | None
    source_name: str | None = None
    layout: LayoutValue = "dated"
    mode: ModeValue = "point"
    threshold: float | None = None

    @property
    def display_name(self) -> str:
        if self.source_name:
            return self.source_name
        if isinstance(self.source, (str, Path)):
            return Path(self.source).name
        return "upload"


# =============================================================================
# Response Models - Errors
# =============================================================================


@dataclass(frozen=True)
class APIError:
    """
    User-friendly error representation for API responses.

    Attributes:
        code: Error code (e.g., "DQ001")
        message: User-friendly error message
        severity: Error severity ("error" or "critical")
        category: Error category for grouping
        details: Additional context (record_reference, field_name, etc.)
    """

    code: str
    message: str
    severity: Literal["error", "critical"]
    category: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"[{self.code}] {self.severity.upper()}: {self.message}"


# =============================================================================
# Response Models - Display
# =============================================================================


@dataclass(frozen=True)
class KpiDisplay:
    """
    Display text for the single-record KPIs.

    Attributes:
        status_text: "已达标" / "未达标", or "—" when not evaluated
        is_hit: Badge state (None when not evaluated)
        average_text: Projected average at the target date
        required_balance_text: Balance needed by year end
        attainment_text: Date the threshold is reached, or why it is not
    """

    status_text: str
    is_hit: bool | None
    average_text: str
    required_balance_text: str
    attainment_text: str

    @property
    def badge_kind(self) -> str:
        """Callout kind for the status badge."""
        if self.is_hit is None:
            return "neutral"
        return "success" if self.is_hit else "danger"


# =============================================================================
# Response Models - Performance
# =============================================================================


@dataclass(frozen=True)
class PerformanceMetrics:
    """
    Performance metrics for a batch run.

    Attributes:
        started_at: Evaluation start timestamp
        completed_at: Evaluation end timestamp
        duration_seconds: Total time in seconds
        record_count: Number of records processed
    """

    started_at: datetime
    completed_at: datetime
    duration_seconds: float
    record_count: int

    @property
    def records_per_second(self) -> float:
        """Calculate processing throughput."""
        if self.duration_seconds > 0:
            return self.record_count / self.duration_seconds
        return 0.0


# =============================================================================
# Response Models - Main Responses
# =============================================================================


@dataclass(frozen=True)
class DepositResponse:
    """
    Response model for a single-record evaluation.

    Attributes:
        success: Whether the record could be evaluated
        evaluation: Typed engine result (raw numbers and sentinels)
        display: Formatted KPI text
        errors: Reasons the record could not be evaluated
    """

    success: bool
    evaluation: DepositEvaluation
    display: KpiDisplay
    errors: list[APIError] = field(default_factory=list)


@dataclass(frozen=True)
class BatchResponse:
    """
    Response model for a batch evaluation.

    A response always replaces any earlier one; results are never merged.

    Attributes:
        success: Whether the file was read and every row processed
        layout: Layout used to read the file
        results: One row per input row with raw and display columns
        errors: File-level errors and per-row errors
        performance: Timing for the run
    """

    success: bool
    layout: str
    results: pl.DataFrame
    errors: list[APIError] = field(default_factory=list)
    performance: PerformanceMetrics | None = None

    @property
    def row_count(self) -> int:
        return self.results.height

    @property
    def invalid_count(self) -> int:
        """Rows that could not be evaluated."""
        if "status" not in self.results.columns:
            return 0
        return self.results.filter(self.results["status"] != "evaluated").height

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def file_errors(self) -> list[APIError]:
        """Errors that aborted the batch action."""
        return [e for e in self.errors if e.severity == "critical"]

    @property
    def row_errors(self) -> list[APIError]:
        """Errors attached to individual rows."""
        return [e for e in self.errors if e.severity != "critical"]


@dataclass(frozen=True)
class ValidationResponse:
    """
    Response model for upload validation.

    Attributes:
        valid: Whether the upload can be evaluated
        source_name: Name of the validated upload
        errors: List of validation errors
    """

    valid: bool
    source_name: str
    errors: list[APIError] = field(default_factory=list)
