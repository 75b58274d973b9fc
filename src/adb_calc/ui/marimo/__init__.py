"""Marimo UI applications for the average daily balance calculator.

Available applications:
    - deposit_app.py: Single-record calculator with dated CSV batch upload
    - tier_batch_app.py: Day-count CSV batch evaluated against every tier

Usage (Multi-App Server - Recommended):
    # Start the server with all apps
    uv run python src/adb_calc/ui/marimo/server.py

    # Apps available at:
    #   http://localhost:8000/           (Calculator)
    #   http://localhost:8000/calculator (Calculator)
    #   http://localhost:8000/tiers      (Tier Batch)

Usage (Single App):
    uv run marimo edit src/adb_calc/ui/marimo/deposit_app.py
    uv run marimo run src/adb_calc/ui/marimo/deposit_app.py

    Note: Navigation between apps only works with the multi-app server.
"""
