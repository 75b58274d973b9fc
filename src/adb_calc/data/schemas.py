"""
This module contains the schemas for the batch inputs and outputs of adb_calc.

Key Data Inputs:
- Dated batch               # name, id, avg_to_date, current_balance, stats_date, target_date, level
- Day-count batch           # name, id, avg_to_date, elapsed_days, current_balance, total_days

Outputs:
- Dated batch result        # input values and raw results per row
- Day-count batch result    # input values and per-tier raw results

Display text columns are added by adb_calc.api.formatters.

All input columns are read as text and cast with these schemas; values that
fail to cast become null and the row is reported as incomplete.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import polars as pl

DATED_BATCH_SCHEMA = {
    "name": pl.String,
    "id": pl.String,
    "avg_to_date": pl.Float64,
    "current_balance": pl.Float64,
    "stats_date": pl.Date,
    "target_date": pl.Date,
    "level": pl.String,  # "basic" (default) or "mid"
}

DAY_COUNT_BATCH_SCHEMA = {
    "name": pl.String,
    "id": pl.String,
    "avg_to_date": pl.Float64,
    "elapsed_days": pl.Float64,
    "current_balance": pl.Float64,
    "total_days": pl.Float64,
}

DATED_RESULT_SCHEMA = {
    "row_number": pl.Int64,
    "name": pl.String,
    "id": pl.String,
    "avg_to_date": pl.Float64,
    "current_balance": pl.Float64,
    "stats_date": pl.Date,
    "target_date": pl.Date,
    "tier": pl.String,
    "status": pl.String,
    "threshold": pl.Float64,
    "elapsed_days": pl.Int64,
    "target_days": pl.Int64,
    "is_hit": pl.Boolean,
    "projected_average": pl.Float64,
    "required_balance": pl.Float64,
    "required_extra_days": pl.Float64,
    "attainment_date": pl.Date,
}

DAY_COUNT_RESULT_SCHEMA = {
    "row_number": pl.Int64,
    "name": pl.String,
    "id": pl.String,
    "avg_to_date": pl.Float64,
    "elapsed_days": pl.Float64,
    "current_balance": pl.Float64,
    "total_days": pl.Float64,
    "status": pl.String,
    "basic_is_hit": pl.Boolean,
    "basic_projected_average": pl.Float64,
    "basic_required_balance": pl.Float64,
    "basic_required_extra_days": pl.Float64,
    "mid_is_hit": pl.Boolean,
    "mid_projected_average": pl.Float64,
    "mid_required_balance": pl.Float64,
    "mid_required_extra_days": pl.Float64,
}


@dataclass(frozen=True)
class BatchLayout:
    """
    Column layout of one batch file variant.

    Attributes:
        name: Layout identifier ("dated" or "day_count")
        schema: Column types after casting
        required_columns: Columns that must be present in the header
        defaults: Literal values for optional columns missing from the header
    """

    name: str
    schema: dict[str, pl.DataType]
    required_columns: tuple[str, ...]
    defaults: dict[str, str] = field(default_factory=dict)

    def missing_columns(self, columns: list[str]) -> list[str]:
        present = set(columns)
        return [col for col in self.required_columns if col not in present]


DATED_LAYOUT = BatchLayout(
    name="dated",
    schema=DATED_BATCH_SCHEMA,
    required_columns=("avg_to_date", "current_balance", "stats_date", "target_date"),
    defaults={"name": "", "id": "", "level": "basic"},
)

DAY_COUNT_LAYOUT = BatchLayout(
    name="day_count",
    schema=DAY_COUNT_BATCH_SCHEMA,
    required_columns=("avg_to_date", "elapsed_days", "current_balance", "total_days"),
    defaults={"name": "", "id": ""},
)

BATCH_LAYOUTS: dict[str, BatchLayout] = {
    DATED_LAYOUT.name: DATED_LAYOUT,
    DAY_COUNT_LAYOUT.name: DAY_COUNT_LAYOUT,
}
