"""
Average Daily Balance Calculator API Module.

Public API for the calculator providing:
- DepositService: Main service facade for evaluations
- Request/Response models: Clean interface contracts
- Validation utilities: Batch upload validation

Usage:
    from adb_calc.api import DepositService, BatchRequest
    from pathlib import Path

    service = DepositService()
    response = service.evaluate_batch(
        BatchRequest(source=Path("batch.csv"), layout="dated", mode="point")
    )

    if response.success:
        print(f"Rows: {response.row_count}, invalid: {response.invalid_count}")
        print(response.results)
    else:
        for error in response.errors:
            print(f"{error.code}: {error.message}")
"""

from adb_calc.api.models import (
    APIError,
    BatchRequest,
    BatchResponse,
    DepositRequest,
    DepositResponse,
    KpiDisplay,
    PerformanceMetrics,
    ValidationResponse,
)
from adb_calc.api.service import (
    DepositService,
    create_service,
    quick_evaluate_batch,
)
from adb_calc.api.validation import (
    UploadValidator,
    get_required_columns,
    validate_upload,
)

__all__ = [
    # Service
    "DepositService",
    "create_service",
    "quick_evaluate_batch",
    # Request models
    "DepositRequest",
    "BatchRequest",
    # Response models
    "DepositResponse",
    "BatchResponse",
    "KpiDisplay",
    "ValidationResponse",
    "APIError",
    "PerformanceMetrics",
    # Validation
    "UploadValidator",
    "validate_upload",
    "get_required_columns",
]
