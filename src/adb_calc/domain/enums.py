"""
Domain enums for the average daily balance calculator.

Defines core enumerations used throughout the engine:
- AccountTier: Account classification that selects the required average
- HitMode: Policy used for the "already met" badge
- RecordStatus: Whether a record could be evaluated
- ErrorSeverity / ErrorCategory: Classification of accumulated errors
"""

from enum import Enum


class AccountTier(Enum):
    """
    Account tiers with a regulatory average-balance requirement.

    BASIC: Standard compliant account (达标户)
    MID: Mid-sized account (中型)
    """

    BASIC = "basic"
    MID = "mid"

    @classmethod
    def from_level(cls, level: str | None) -> "AccountTier":
        """
        Map a free-text level value onto a tier.

        Anything other than "mid" (after trimming) is treated as BASIC,
        including blank and missing values.
        """
        if level is not None and level.strip() == cls.MID.value:
            return cls.MID
        return cls.BASIC


class HitMode(Enum):
    """
    Policy for deciding whether the threshold is currently met.

    POINT: Average-to-date compared directly with the threshold.
           Day zero is never a hit.
    YEAR:  Running total (average x elapsed days) compared with the
           annualised requirement (threshold x 365).
    """

    POINT = "point"
    YEAR = "year"


class RecordStatus(Enum):
    """
    Evaluation status of a single record.

    Invalid statuses mean the record could not be evaluated at all, which is
    distinct from an evaluated record whose answer is unreachable.
    """

    # All numeric and date fields were usable
    EVALUATED = "evaluated"

    # Missing date or non-finite number
    INCOMPLETE = "incomplete"

    # Target date earlier than the statistics date (or total < elapsed days)
    TARGET_BEFORE_STATS = "target_before_stats"

    # Target date in a different calendar year than the statistics date
    TARGET_OTHER_YEAR = "target_other_year"

    @property
    def is_valid(self) -> bool:
        return self is RecordStatus.EVALUATED


class ErrorSeverity(Enum):
    """
    Severity levels for calculation errors.
    """

    # Record could not be evaluated
    ERROR = "error"

    # The whole batch action was aborted
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """
    Categories for calculation errors.

    Enables filtering and analysis of error types.
    """

    # Missing or invalid input data
    DATA_QUALITY = "data_quality"

    # Violation of an ordering or business rule
    BUSINESS_RULE = "business_rule"

    # Header / column problems in an uploaded file
    SCHEMA_VALIDATION = "schema_validation"

    # Invalid configuration parameters
    CONFIGURATION = "configuration"

    # Failures while reading input files
    DATA_LOADING = "data_loading"
