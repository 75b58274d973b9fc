"""
Average Daily Balance Calculator.

Determines whether a deposit account's average daily balance meets a
regulatory tier threshold and, if not, the constant balance or the number
of additional days needed to meet it.

Basic usage:
    >>> from datetime import date
    >>> from adb_calc.contracts.config import CalculationConfig
    >>> from adb_calc.domain.enums import AccountTier
    >>> from adb_calc.engine.evaluator import DepositInput, evaluate_deposit
    >>>
    >>> evaluation = evaluate_deposit(
    ...     DepositInput(
    ...         avg_to_date=8000.0,
    ...         current_balance=12000.0,
    ...         stats_date=date(2024, 4, 10),
    ...         target_date=date(2024, 12, 31),
    ...         tier=AccountTier.BASIC,
    ...     ),
    ...     CalculationConfig.point(),
    ... )
"""

__version__ = "0.1.0"
__author__ = "OpenAfterHours"
__license__ = "Apache-2.0"

__all__ = [
    "__version__",
    "__author__",
    "__license__",
]
