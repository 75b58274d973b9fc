"""
Average Daily Balance Calculator Marimo Application.

Interactive UI for single-record and batch evaluations using DepositService.

Usage:
    uv run marimo edit src/adb_calc/ui/marimo/deposit_app.py
    uv run marimo run src/adb_calc/ui/marimo/deposit_app.py

Features:
    - Average-to-date, balance, statistics and target date inputs
    - Tier (basic / mid) and hit mode (point / year) selection
    - Quick targets for September 30 and December 31
    - KPI cards: status, projected average, balance needed, attainment date
    - CSV batch upload with results table and export
"""

import marimo

__generated_with = "0.19.4"
app = marimo.App(width="medium")


@app.cell
def _():
    import marimo as mo
    import sys
    from pathlib import Path
    from datetime import date

    src_dir = Path(__file__).parent.parent.parent.parent
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))

    return date, mo


@app.cell
def _(mo):
    mo.sidebar(
        [
            mo.md("# 日均存款计算器"),
            mo.nav_menu(
                {
                    "/calculator": f"{mo.icon('calculator')} 日均计算",
                    "/tiers": f"{mo.icon('table')} 分档批量",
                },
                orientation="vertical",
            ),
        ],
        footer=mo.md("*adb-calc v0.1*"),
    )
    return


@app.cell
def _(mo):
    from adb_calc.api import DepositService

    service = DepositService()

    mo.output.replace(mo.md("""
# 日均存款达标计算

输入截至统计日的日均与当前余额，查看目标日日均、年末达标所需时点存款和达标日期。
    """))
    return (service,)


@app.cell
def _(mo, service):
    tier_dropdown = mo.ui.dropdown(
        options={f"{t['name']} ({t['threshold']})": t["id"] for t in service.get_tiers()},
        value=f"{service.get_tiers()[0]['name']} ({service.get_tiers()[0]['threshold']})",
        label="账户级别",
    )

    mode_dropdown = mo.ui.dropdown(
        options={m["name"]: m["id"] for m in service.get_hit_modes()},
        value=service.get_hit_modes()[0]["name"],
        label="达标口径",
    )

    mo.output.replace(mo.hstack([tier_dropdown, mode_dropdown], justify="start", gap=2))
    return mode_dropdown, tier_dropdown


@app.cell
def _(date, mo):
    avg_input = mo.ui.number(value=8000.0, step=0.01, label="统计日日均")
    balance_input = mo.ui.number(value=12000.0, step=0.01, label="当前余额")
    stats_date_input = mo.ui.date(value=date.today(), label="统计日")

    mo.output.replace(mo.hstack([avg_input, balance_input, stats_date_input], justify="start", gap=2))
    return avg_input, balance_input, stats_date_input


@app.cell
def _(mo):
    get_target, set_target = mo.state(None)
    return get_target, set_target


@app.cell
def _(mo, service, set_target, stats_date_input):
    q3_button = mo.ui.button(
        label="三季度末",
        on_click=lambda _: set_target(service.get_quick_target("q3", stats_date_input.value)),
    )
    year_button = mo.ui.button(
        label="年末",
        on_click=lambda _: set_target(service.get_quick_target("year", stats_date_input.value)),
    )
    return q3_button, year_button


@app.cell
def _(get_target, mo, q3_button, service, stats_date_input, year_button):
    target_date_input = mo.ui.date(
        value=get_target() or service.get_quick_target("year", stats_date_input.value),
        label="目标日",
    )

    mo.output.replace(mo.hstack([target_date_input, q3_button, year_button], justify="start", gap=1))
    return (target_date_input,)


@app.cell
def _(
    avg_input,
    balance_input,
    mode_dropdown,
    service,
    stats_date_input,
    target_date_input,
    tier_dropdown,
):
    from adb_calc.api import DepositRequest

    deposit_response = service.evaluate(
        DepositRequest(
            avg_to_date=avg_input.value,
            current_balance=balance_input.value,
            stats_date=stats_date_input.value,
            target_date=target_date_input.value,
            tier=tier_dropdown.value,
            mode=mode_dropdown.value,
        )
    )
    return (deposit_response,)


@app.cell
def _(deposit_response, mo):
    display = deposit_response.display

    cards = mo.hstack(
        [
            mo.callout(mo.md(f"**达标状态**\n\n{display.status_text}"), kind=display.badge_kind),
            mo.stat(value=display.average_text, label="目标日日均"),
            mo.stat(value=display.required_balance_text, label="年末达标需时点存款"),
            mo.stat(value=display.attainment_text, label="按当前余额达标日期"),
        ],
        justify="start",
        gap=2,
        wrap=True,
    )

    if deposit_response.errors:
        problems = "\n".join(f"- {e.message}" for e in deposit_response.errors)
        mo.output.replace(mo.vstack([cards, mo.callout(mo.md(problems), kind="warn")]))
    else:
        mo.output.replace(cards)
    return


@app.cell
def _(mo):
    file_upload = mo.ui.file(filetypes=[".csv"], kind="area", label="批量 CSV")
    batch_button = mo.ui.run_button(label="批量计算")

    mo.output.replace(
        mo.vstack([
            mo.md("""
## 批量计算

表头：`name,id,avg_to_date,current_balance,stats_date,target_date,level`，日期格式 `YYYY-MM-DD`，`level` 为 `basic` 或 `mid`。
            """),
            file_upload,
            mo.hstack([batch_button], justify="start"),
        ])
    )
    return batch_button, file_upload


@app.cell
def _(batch_button, file_upload, mo, mode_dropdown, service):
    from adb_calc.api import BatchRequest

    mo.stop(not batch_button.value)

    batch_response = service.evaluate_batch(
        BatchRequest(
            source=file_upload.contents(),
            source_name=file_upload.name(),
            layout="dated",
            mode=mode_dropdown.value,
        )
    )
    return (batch_response,)


@app.cell
def _(batch_response, mo):
    from adb_calc.api.formatters import render_batch_html, to_csv

    if not batch_response.success:
        messages = "; ".join(e.message for e in batch_response.file_errors)
        mo.output.replace(mo.callout(messages, kind="danger"))
    else:
        summary = f"共 {batch_response.row_count} 行，{batch_response.invalid_count} 行无法计算"
        mo.output.replace(
            mo.vstack([
                mo.md(f"### 批量结果\n\n{summary}"),
                mo.Html(render_batch_html(batch_response.results, "dated")),
                mo.download(
                    data=to_csv(batch_response.results, "dated").encode("utf-8"),
                    filename="adb_batch_results.csv",
                    label="下载 CSV",
                ),
            ])
        )
    return


@app.cell
def _(batch_response, mo):
    if batch_response.success and batch_response.row_errors:
        error_items = "\n".join([
            f"- **[{e.code}]** {e.message}"
            for e in batch_response.row_errors[:10]
        ])
        more_errors = f"\n\n*({len(batch_response.row_errors) - 10} more)*" if len(batch_response.row_errors) > 10 else ""
        mo.output.replace(mo.accordion({
            f"行错误 ({len(batch_response.row_errors)})": mo.md(f"{error_items}{more_errors}"),
        }))
    return


if __name__ == "__main__":
    app.run()
