"""
Upload validation utilities for the average daily balance calculator API.

UploadValidator: Checks a batch upload before it is read
validate_upload: Convenience function for quick validation
get_required_columns: Required header columns per layout

Reports a missing upload, a missing file or an unexpected extension before
any parsing happens.
"""

from __future__ import annotations

from pathlib import Path

from adb_calc.api.errors import (
    create_file_not_found_error,
    create_no_file_error,
    create_validation_error,
)
from adb_calc.api.models import APIError, BatchRequest, ValidationResponse
from adb_calc.data.schemas import BATCH_LAYOUTS


ALLOWED_SUFFIXES = (".csv",)


class UploadValidator:
    """
    Validates a batch upload before evaluation.

    Usage:
        validator = UploadValidator()
        response = validator.validate(BatchRequest(source=file_bytes, source_name="batch.csv"))
        if not response.valid:
            # Show response.errors
    """

    def validate(self, request: BatchRequest) -> ValidationResponse:
        """
        Validate a batch request's source.

        Args:
            request: BatchRequest with source, name and layout

        Returns:
            ValidationResponse with validation results
        """
        name = request.display_name
        errors: list[APIError] = []

        if request.source is None:
            errors.append(create_no_file_error())
            return ValidationResponse(valid=False, source_name=name, errors=errors)

        if request.layout not in BATCH_LAYOUTS:
            errors.append(create_validation_error(
                f"Unknown batch layout: {request.layout}",
                path=name,
            ))

        if isinstance(request.source, bytes):
            if not request.source.strip():
                errors.append(create_validation_error("File is empty", path=name))
        else:
            path = Path(request.source)
            if not path.exists():
                errors.append(create_file_not_found_error(str(path)))
            elif not path.is_file():
                errors.append(create_validation_error(f"Not a file: {path}", path=str(path)))

        if request.source_name or not isinstance(request.source, bytes):
            suffix = Path(name).suffix.lower()
            if suffix not in ALLOWED_SUFFIXES:
                errors.append(create_validation_error(
                    f"Expected a CSV file, got '{suffix or name}'",
                    path=name,
                ))

        return ValidationResponse(
            valid=len(errors) == 0,
            source_name=name,
            errors=errors,
        )


# =============================================================================
# Convenience Functions
# =============================================================================


def validate_upload(
    source: bytes | str | Path | None,
    source_name: str | None = None,
    layout: str = "dated",
) -> ValidationResponse:
    """
    Validate a batch upload.

    Example:
        response = validate_upload(Path("batch.csv"))
        if not response.valid:
            for error in response.errors:
                print(error)
    """
    request = BatchRequest(source=source, source_name=source_name, layout=layout)
    return UploadValidator().validate(request)


def get_required_columns(layout: str = "dated") -> list[str]:
    """Required header columns for a batch layout."""
    return list(BATCH_LAYOUTS[layout].required_columns)
