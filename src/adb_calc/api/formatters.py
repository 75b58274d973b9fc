"""
Result formatting utilities for the average daily balance calculator API.

ResultFormatter: Builds API responses from engine results
format_money / format_number: Locale-style number text with sentinels
build_kpi_display: Display text for a single evaluation
add_dated_display_columns / add_tier_display_columns: Batch display text
render_batch_html / to_csv: Batch table output

Numbers are rounded half away from zero and grouped in thousands. math.inf
renders as "∞" and math.nan as "—".
"""

from __future__ import annotations

import html
import math
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import TYPE_CHECKING, Any

import polars as pl

from adb_calc.api.errors import convert_errors
from adb_calc.api.models import (
    APIError,
    BatchResponse,
    DepositResponse,
    KpiDisplay,
    PerformanceMetrics,
)
from adb_calc.config.thresholds import CURRENCY_SYMBOL, INFINITY_TEXT, MISSING_TEXT
from adb_calc.domain.enums import AccountTier, RecordStatus
from adb_calc.engine.calendar import format_date

if TYPE_CHECKING:
    from adb_calc.contracts.errors import BatchResult
    from adb_calc.engine.evaluator import DepositEvaluation


# =============================================================================
# Display Labels
# =============================================================================

HIT_TEXT = "已达标"
NOT_HIT_TEXT = "未达标"
BATCH_HIT_TEXT = "达标"
UNREACHABLE_TEXT = "不可达"
NO_INCREASE_TEXT = "0（无需增加）"

STATUS_TEXT: dict[str, str] = {
    RecordStatus.INCOMPLETE.value: "数据不完整",
    RecordStatus.TARGET_BEFORE_STATS.value: "目标早于统计日",
    RecordStatus.TARGET_OTHER_YEAR.value: "目标不在统计年度",
}

LEVEL_TEXT: dict[str, str] = {
    AccountTier.BASIC.value: "达标",
    AccountTier.MID.value: "中型",
}

DATED_TABLE_COLUMNS: dict[str, str] = {
    "name": "姓名",
    "id": "账号",
    "avg_to_date_text": "统计日日均",
    "current_balance_text": "当前余额",
    "stats_date_text": "统计日",
    "target_date_text": "目标日",
    "level_text": "级别",
    "hit_text": "是否达标",
    "required_balance_text": "年末达标需时点存款",
    "attainment_text": "达标日期",
}

TIER_TABLE_COLUMNS: dict[str, str] = {
    "name": "姓名",
    "id": "账号",
    "avg_to_date_text": "统计日日均",
    "elapsed_days_text": "已计天数",
    "current_balance_text": "当前余额",
    "total_days_text": "目标天数",
    "status_text": "状态",
    "basic_hit_text": "达标户",
    "basic_average_text": "达标户目标日均",
    "basic_required_balance_text": "达标户需时点存款",
    "basic_days_text": "达标户需天数",
    "mid_hit_text": "中型户",
    "mid_average_text": "中型户目标日均",
    "mid_required_balance_text": "中型户需时点存款",
    "mid_days_text": "中型户需天数",
}

TABLE_COLUMNS: dict[str, dict[str, str]] = {
    "dated": DATED_TABLE_COLUMNS,
    "day_count": TIER_TABLE_COLUMNS,
}


# =============================================================================
# Number Formatting
# =============================================================================


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _round_half_up(value: float, digits: int) -> Decimal:
    exact = Decimal(repr(float(value)))
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + digits + 2)
        return exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)


def format_number(value: float | None, digits: int = 2) -> str:
    """
    Format a number with thousands grouping and at most `digits` decimals.

    Trailing zeros are trimmed.

    Example:
        >>> format_number(9479.4520547)
        '9,479.45'
        >>> format_number(10000.0)
        '10,000'
    """
    if _is_missing(value):
        return MISSING_TEXT
    if math.isinf(value):
        return INFINITY_TEXT if value > 0 else f"-{INFINITY_TEXT}"

    text = f"{_round_half_up(value, digits):,.{digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_money(value: float | None, currency_symbol: str = CURRENCY_SYMBOL) -> str:
    """
    Format a currency amount with two decimals.

    Example:
        >>> format_money(-1234.5)
        '-¥1,234.50'
    """
    if _is_missing(value):
        return MISSING_TEXT
    if math.isinf(value):
        return INFINITY_TEXT if value > 0 else f"-{INFINITY_TEXT}"

    amount = _round_half_up(value, 2)
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol}{amount.copy_abs():,.2f}"


def _format_optional_date(value: date | None) -> str:
    return format_date(value) if value is not None else MISSING_TEXT


def _days_ceil_text(days: float) -> str:
    return format_number(math.ceil(days), 0)


# =============================================================================
# Single Evaluation Text
# =============================================================================


def build_kpi_display(
    evaluation: DepositEvaluation,
    target_date: date | None,
    currency_symbol: str = CURRENCY_SYMBOL,
) -> KpiDisplay:
    """
    Build the KPI card text for one evaluation.

    Invalid evaluations show "—" on every card.
    """
    if not evaluation.is_valid:
        return KpiDisplay(
            status_text=MISSING_TEXT,
            is_hit=None,
            average_text=MISSING_TEXT,
            required_balance_text=MISSING_TEXT,
            attainment_text=MISSING_TEXT,
        )

    return KpiDisplay(
        status_text=HIT_TEXT if evaluation.is_hit else NOT_HIT_TEXT,
        is_hit=evaluation.is_hit,
        average_text=f"{_format_optional_date(target_date)} 日均：{format_number(evaluation.projected_average)}",
        required_balance_text=required_balance_text(
            evaluation.required_balance, no_increase=NO_INCREASE_TEXT, currency_symbol=currency_symbol
        ),
        attainment_text=_kpi_attainment_text(evaluation),
    )


def required_balance_text(
    value: float,
    no_increase: str = "0",
    currency_symbol: str = CURRENCY_SYMBOL,
) -> str:
    """Balance needed: no_increase when nothing more is needed, or unreachable."""
    if value <= 0:
        return no_increase
    if value == math.inf:
        return UNREACHABLE_TEXT
    return format_money(value, currency_symbol)


def _kpi_attainment_text(evaluation: DepositEvaluation) -> str:
    if evaluation.is_days_unreachable:
        return f"{UNREACHABLE_TEXT}（需提高M）"
    if evaluation.is_attainable_this_year:
        return format_date(evaluation.attainment_date)
    days = evaluation.required_extra_days_ceil
    if days is None:
        return MISSING_TEXT
    return f"{UNREACHABLE_TEXT}（至少需要{format_number(days, 0)}天）"


def _batch_attainment_text(extra_days: float, attainment_date: date | None) -> str:
    if extra_days == math.inf:
        return UNREACHABLE_TEXT
    if attainment_date is not None:
        return format_date(attainment_date)
    if _is_missing(extra_days):
        return MISSING_TEXT
    return f"{UNREACHABLE_TEXT}(需≥{_days_ceil_text(extra_days)}天)"


def _days_text(extra_days: float) -> str:
    if extra_days == math.inf:
        return UNREACHABLE_TEXT
    if _is_missing(extra_days):
        return MISSING_TEXT
    return f"{_days_ceil_text(extra_days)}天"


# =============================================================================
# Batch Display Columns
# =============================================================================


def _dated_row_text(row: dict[str, Any], currency_symbol: str) -> dict[str, str]:
    text = {
        "avg_to_date_text": format_number(row["avg_to_date"]),
        "current_balance_text": format_money(row["current_balance"], currency_symbol),
        "stats_date_text": _format_optional_date(row["stats_date"]),
        "target_date_text": _format_optional_date(row["target_date"]),
        "level_text": LEVEL_TEXT.get(row["tier"], LEVEL_TEXT[AccountTier.BASIC.value]),
    }

    if row["status"] != RecordStatus.EVALUATED.value:
        text.update(
            hit_text=STATUS_TEXT.get(row["status"], MISSING_TEXT),
            required_balance_text=MISSING_TEXT,
            attainment_text=MISSING_TEXT,
        )
        return text

    text.update(
        hit_text=BATCH_HIT_TEXT if row["is_hit"] else NOT_HIT_TEXT,
        required_balance_text=required_balance_text(row["required_balance"], currency_symbol=currency_symbol),
        attainment_text=_batch_attainment_text(row["required_extra_days"], row["attainment_date"]),
    )
    return text


def _tier_row_text(row: dict[str, Any], currency_symbol: str) -> dict[str, str]:
    evaluated = row["status"] == RecordStatus.EVALUATED.value
    text = {
        "avg_to_date_text": format_number(row["avg_to_date"]),
        "elapsed_days_text": format_number(row["elapsed_days"], 0),
        "current_balance_text": format_money(row["current_balance"], currency_symbol),
        "total_days_text": format_number(row["total_days"], 0),
        "status_text": "" if evaluated else STATUS_TEXT.get(row["status"], MISSING_TEXT),
    }

    for tier in AccountTier:
        prefix = tier.value
        if not evaluated:
            text[f"{prefix}_hit_text"] = MISSING_TEXT
            text[f"{prefix}_average_text"] = MISSING_TEXT
            text[f"{prefix}_required_balance_text"] = MISSING_TEXT
            text[f"{prefix}_days_text"] = MISSING_TEXT
            continue
        text[f"{prefix}_hit_text"] = BATCH_HIT_TEXT if row[f"{prefix}_is_hit"] else NOT_HIT_TEXT
        text[f"{prefix}_average_text"] = format_number(row[f"{prefix}_projected_average"])
        text[f"{prefix}_required_balance_text"] = required_balance_text(
            row[f"{prefix}_required_balance"], currency_symbol=currency_symbol
        )
        text[f"{prefix}_days_text"] = _days_text(row[f"{prefix}_required_extra_days"])

    return text


def _add_text_columns(
    frame: pl.DataFrame,
    row_text,
    columns: list[str],
    currency_symbol: str,
) -> pl.DataFrame:
    texts = [row_text(row, currency_symbol) for row in frame.iter_rows(named=True)]
    return frame.with_columns([
        pl.Series(col, [t[col] for t in texts], dtype=pl.String)
        for col in columns
    ])


def add_dated_display_columns(frame: pl.DataFrame, currency_symbol: str = CURRENCY_SYMBOL) -> pl.DataFrame:
    """Append the dated batch text columns to a raw result frame."""
    columns = [c for c in DATED_TABLE_COLUMNS if c.endswith("_text")]
    return _add_text_columns(frame, _dated_row_text, columns, currency_symbol)


def add_tier_display_columns(frame: pl.DataFrame, currency_symbol: str = CURRENCY_SYMBOL) -> pl.DataFrame:
    """Append the per-tier text columns to a raw day-count result frame."""
    columns = [c for c in TIER_TABLE_COLUMNS if c.endswith("_text")]
    return _add_text_columns(frame, _tier_row_text, columns, currency_symbol)


def display_table(frame: pl.DataFrame, layout: str) -> pl.DataFrame:
    """Select the display columns under their table headers."""
    columns = TABLE_COLUMNS[layout]
    return frame.select([pl.col(col).alias(header) for col, header in columns.items()])


def render_batch_html(frame: pl.DataFrame, layout: str) -> str:
    """
    Render a batch result as an HTML table.

    Every cell is HTML-escaped; name and id come straight from the upload.
    Hit cells carry class "ok" or "not-ok".
    """
    columns = TABLE_COLUMNS[layout]
    head = "".join(f"<th>{html.escape(header)}</th>" for header in columns.values())

    body_rows = []
    for row in frame.iter_rows(named=True):
        cells = []
        for col in columns:
            value = "" if row[col] is None else str(row[col])
            css = _cell_class(col, value)
            attr = f' class="{css}"' if css else ""
            cells.append(f"<td{attr}>{html.escape(value)}</td>")
        body_rows.append(f"<tr>{''.join(cells)}</tr>")

    return (
        '<table class="batch-table">'
        f"<thead><tr>{head}</tr></thead>"
        f"<tbody>{''.join(body_rows)}</tbody>"
        "</table>"
    )


def _cell_class(col: str, value: str) -> str:
    if not col.endswith("hit_text"):
        return ""
    if value == BATCH_HIT_TEXT:
        return "ok"
    if value == NOT_HIT_TEXT:
        return "not-ok"
    return ""


def to_csv(frame: pl.DataFrame, layout: str) -> str:
    """Batch display table as CSV text with a byte-order mark for spreadsheets."""
    return "\ufeff" + display_table(frame, layout).write_csv()


# =============================================================================
# Result Formatter
# =============================================================================


class ResultFormatter:
    """
    Formats engine results for API responses.

    Handles:
    - KPI text for single evaluations
    - Display columns for batch results
    - Error conversion to API format
    - Performance metrics calculation

    Usage:
        formatter = ResultFormatter()
        response = formatter.format_batch_response(
            result=batch_result,
            layout="dated",
            started_at=datetime.now(),
        )
    """

    def format_deposit_response(
        self,
        evaluation: DepositEvaluation,
        target_date: date | None,
        errors: list[APIError] | None = None,
        currency_symbol: str = CURRENCY_SYMBOL,
    ) -> DepositResponse:
        return DepositResponse(
            success=evaluation.is_valid,
            evaluation=evaluation,
            display=build_kpi_display(evaluation, target_date, currency_symbol),
            errors=errors or [],
        )

    def format_batch_response(
        self,
        result: BatchResult,
        layout: str,
        started_at: datetime,
        currency_symbol: str = CURRENCY_SYMBOL,
    ) -> BatchResponse:
        """
        Format a batch result into a BatchResponse.

        Args:
            result: Engine batch result with raw columns and row errors
            layout: "dated" or "day_count"
            started_at: When the evaluation started
            currency_symbol: Symbol used in money columns

        Returns:
            BatchResponse with display columns appended
        """
        if layout == "day_count":
            frame = add_tier_display_columns(result.frame, currency_symbol)
        else:
            frame = add_dated_display_columns(result.frame, currency_symbol)

        completed_at = datetime.now()
        return BatchResponse(
            success=True,
            layout=layout,
            results=frame,
            errors=convert_errors(result.errors),
            performance=PerformanceMetrics(
                started_at=started_at,
                completed_at=completed_at,
                duration_seconds=(completed_at - started_at).total_seconds(),
                record_count=frame.height,
            ),
        )

    def format_error_response(
        self,
        errors: list[APIError],
        layout: str,
        started_at: datetime,
    ) -> BatchResponse:
        """
        Create an error response when the batch cannot be evaluated.

        Args:
            errors: File-level errors
            layout: Requested layout
            started_at: When the evaluation started

        Returns:
            Unsuccessful BatchResponse with an empty results table
        """
        completed_at = datetime.now()
        return BatchResponse(
            success=False,
            layout=layout,
            results=pl.DataFrame(),
            errors=errors,
            performance=PerformanceMetrics(
                started_at=started_at,
                completed_at=completed_at,
                duration_seconds=(completed_at - started_at).total_seconds(),
                record_count=0,
            ),
        )
