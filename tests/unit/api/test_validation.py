"""Unit tests for the API upload validation module.

Tests cover:
- UploadValidator
- validate_upload convenience function
- get_required_columns
"""

from __future__ import annotations

from pathlib import Path

import pytest

from adb_calc.api.models import BatchRequest
from adb_calc.api.validation import (
    UploadValidator,
    get_required_columns,
    validate_upload,
)


@pytest.fixture
def validator() -> UploadValidator:
    return UploadValidator()


@pytest.fixture
def csv_file(tmp_path: Path) -> Path:
    path = tmp_path / "batch.csv"
    path.write_text("avg_to_date,current_balance,stats_date,target_date\n", encoding="utf-8")
    return path


class TestUploadValidator:
    """Tests for UploadValidator."""

    def test_valid_path(self, validator: UploadValidator, csv_file: Path) -> None:
        response = validator.validate(BatchRequest(source=csv_file))

        assert response.valid is True
        assert response.source_name == "batch.csv"
        assert response.errors == []

    def test_valid_bytes(self, validator: UploadValidator) -> None:
        response = validator.validate(BatchRequest(source=b"a,b\n1,2\n", source_name="upload.CSV"))
        assert response.valid is True

    def test_no_file(self, validator: UploadValidator) -> None:
        response = validator.validate(BatchRequest(source=None))

        assert response.valid is False
        assert [e.message for e in response.errors] == ["请先选择 CSV 文件"]

    def test_empty_bytes(self, validator: UploadValidator) -> None:
        response = validator.validate(BatchRequest(source=b"  \n", source_name="x.csv"))
        assert response.valid is False
        assert response.errors[0].message == "File is empty"

    def test_missing_path(self, validator: UploadValidator, tmp_path: Path) -> None:
        response = validator.validate(BatchRequest(source=tmp_path / "none.csv"))
        assert [e.code for e in response.errors] == ["VAL002"]

    def test_directory_is_not_a_file(self, validator: UploadValidator, tmp_path: Path) -> None:
        folder = tmp_path / "folder.csv"
        folder.mkdir()
        response = validator.validate(BatchRequest(source=folder))
        assert response.valid is False

    def test_wrong_extension(self, validator: UploadValidator) -> None:
        response = validator.validate(BatchRequest(source=b"a,b\n", source_name="batch.xlsx"))
        assert response.valid is False
        assert ".xlsx" in response.errors[0].message

    def test_unknown_layout(self, validator: UploadValidator, csv_file: Path) -> None:
        response = validator.validate(BatchRequest(source=csv_file, layout="weekly"))
        assert response.valid is False


class TestConvenienceFunctions:
    def test_validate_upload(self, csv_file: Path) -> None:
        assert validate_upload(csv_file).valid is True
        assert validate_upload(None).valid is False

    def test_required_columns(self) -> None:
        assert get_required_columns("dated") == ["avg_to_date", "current_balance", "stats_date", "target_date"]
        assert get_required_columns("day_count") == ["avg_to_date", "elapsed_days", "current_balance", "total_days"]
