"""
Tier Batch Marimo Application.

Evaluates a CSV of explicit day counts against every account tier at once.

Usage:
    uv run marimo edit src/adb_calc/ui/marimo/tier_batch_app.py
    uv run marimo run src/adb_calc/ui/marimo/tier_batch_app.py

Expected header: name,id,avg_to_date,elapsed_days,current_balance,total_days
"""

import marimo

__generated_with = "0.19.4"
app = marimo.App(width="full")


@app.cell
def _():
    import marimo as mo
    import sys
    from pathlib import Path

    src_dir = Path(__file__).parent.parent.parent.parent
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))

    return (mo,)


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
    from adb_calc.api import DepositService, get_required_columns

    service = DepositService()
    tier_lines = "\n".join(f"- **{t['name']}**: {t['threshold']}" for t in service.get_tiers())

    mo.output.replace(mo.md(f"""
# 分档批量计算

每行按已计天数与目标天数同时评估所有档位：

{tier_lines}

必需列：`{", ".join(get_required_columns("day_count"))}`（可选 `name`, `id`）。
    """))
    return (service,)


@app.cell
def _(mo):
    file_upload = mo.ui.file(filetypes=[".csv"], kind="area", label="天数 CSV")
    custom_threshold = mo.ui.checkbox(label="自定义日均门槛（替代所有档位）")
    threshold_input = mo.ui.number(start=0.01, value=10000.0, step=0.01, label="日均门槛")
    run_button = mo.ui.run_button(label="计算")

    mo.output.replace(mo.vstack([
        file_upload,
        mo.hstack([custom_threshold, threshold_input], justify="start"),
        mo.hstack([run_button], justify="start"),
    ]))
    return custom_threshold, file_upload, run_button, threshold_input


@app.cell
def _(custom_threshold, file_upload, mo, run_button, service, threshold_input):
    from adb_calc.api import BatchRequest

    mo.stop(not run_button.value)

    tier_response = service.evaluate_batch(
        BatchRequest(
            source=file_upload.contents(),
            source_name=file_upload.name(),
            layout="day_count",
            threshold=threshold_input.value if custom_threshold.value else None,
        )
    )
    return (tier_response,)


@app.cell
def _(mo, tier_response):
    from adb_calc.api.formatters import display_table, to_csv

    if not tier_response.success:
        mo.output.replace(mo.callout(
            "; ".join(e.message for e in tier_response.file_errors),
            kind="danger",
        ))
    else:
        mo.output.replace(
            mo.vstack([
                mo.md(f"### 结果（{tier_response.row_count} 行，{tier_response.invalid_count} 行无法计算）"),
                mo.ui.table(display_table(tier_response.results, "day_count"), selection=None),
                mo.download(
                    data=to_csv(tier_response.results, "day_count").encode("utf-8"),
                    filename="adb_tier_results.csv",
                    label="下载 CSV",
                ),
            ])
        )
    return


@app.cell
def _(mo, tier_response):
    if tier_response.success and tier_response.performance:
        perf = tier_response.performance
        mo.output.replace(mo.md(f"""
- **Duration**: {perf.duration_seconds:.3f} seconds
- **Throughput**: {perf.records_per_second:,.0f} rows/second
        """))
    return


if __name__ == "__main__":
    app.run()
