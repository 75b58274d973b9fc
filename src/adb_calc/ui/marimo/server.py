"""
Average Daily Balance Calculator Multi-App Server.

Serves both Marimo applications with navigation between them.

Usage:
    uv run python src/adb_calc/ui/marimo/server.py

    Or with uvicorn directly:
    uv run uvicorn adb_calc.ui.marimo.server:app --host 0.0.0.0 --port 8000
"""

import marimo
from pathlib import Path

apps_dir = Path(__file__).parent

app = (
    marimo.create_asgi_app()
    .with_app(path="", root=str(apps_dir / "deposit_app.py"))
    .with_app(path="/calculator", root=str(apps_dir / "deposit_app.py"))
    .with_app(path="/tiers", root=str(apps_dir / "tier_batch_app.py"))
    .build()
)

if __name__ == "__main__":
    import uvicorn
    print("Starting average daily balance calculator server...")
    print("Apps available at:")
    print("  - http://localhost:8000/           (Calculator)")
    print("  - http://localhost:8000/calculator (Calculator)")
    print("  - http://localhost:8000/tiers      (Tier Batch)")
    uvicorn.run(app, host="0.0.0.0", port=8000)
