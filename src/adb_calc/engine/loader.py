"""
CSV loader for batch evaluations.

Reads an uploaded or on-disk CSV file into a typed polars DataFrame for one
of the batch layouts.

Classes:
    CSVBatchLoader: Load a batch file for a given BatchLayout

Usage:
    from adb_calc.data.schemas import DATED_LAYOUT
    from adb_calc.engine.loader import CSVBatchLoader

    loader = CSVBatchLoader(DATED_LAYOUT)
    records = loader.load("/path/to/batch.csv")

Every column is read as text first. Numeric and date columns are then cast
non-strictly, so a malformed cell becomes null and only its own row is
affected downstream.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import polars as pl

from adb_calc.data.schemas import BatchLayout

logger = logging.getLogger(__name__)

BatchSource = str | Path | bytes

DATE_FORMAT = "%Y-%m-%d"


class DataLoadError(Exception):
    """Exception raised when batch data cannot be loaded."""

    def __init__(self, message: str, source: str | None = None) -> None:
        """
        Initialize DataLoadError.

        Args:
            message: Error message
            source: Source file that caused the error
        """
        self.source = source
        super().__init__(f"{message}" + (f" (source: {source})" if source else ""))


class MissingColumnsError(DataLoadError):
    """Raised when a batch header lacks required columns."""

    def __init__(self, missing: list[str], source: str | None = None) -> None:
        self.missing = missing
        super().__init__(f"Missing required columns: {', '.join(missing)}", source=source)


def normalize_columns(df: pl.DataFrame) -> pl.DataFrame:
    """
    Normalize column names to lowercase with underscores.

    Also strips surrounding whitespace and a leading byte-order mark, which
    spreadsheet exports commonly add to the first header cell.
    """
    return df.rename(
        lambda col: col.lstrip("\ufeff").strip().lower().replace(" ", "_")
    )


def drop_empty_rows(df: pl.DataFrame) -> pl.DataFrame:
    """Remove rows where every cell is null or blank."""
    if df.width == 0:
        return df
    is_blank = [
        pl.col(col).is_null() | (pl.col(col).str.strip_chars() == "")
        for col in df.columns
    ]
    return df.filter(~pl.all_horizontal(is_blank))


def enforce_schema(
    df: pl.DataFrame,
    schema: dict[str, pl.DataType],
) -> pl.DataFrame:
    """
    Cast text columns to the layout schema.

    Dates use the ISO YYYY-MM-DD format. Values that cannot be converted
    become null rather than failing the whole file.

    Args:
        df: DataFrame with all-text columns
        schema: Dictionary mapping column names to expected Polars types

    Returns:
        DataFrame with columns cast to expected types
    """
    cast_exprs = []
    for col_name, expected_type in schema.items():
        if col_name not in df.columns:
            continue

        text = pl.col(col_name).cast(pl.String).str.strip_chars()
        if expected_type == pl.Date:
            expr = text.str.to_date(DATE_FORMAT, strict=False)
        elif expected_type == pl.String:
            expr = text
        else:
            expr = text.cast(expected_type, strict=False)
        cast_exprs.append(expr.alias(col_name))

    if not cast_exprs:
        return df

    return df.with_columns(cast_exprs)


class CSVBatchLoader:
    """
    Load a batch CSV file for one layout.

    Attributes:
        layout: Expected column layout
        enforce_schemas: Whether to cast columns to layout types (default True)
    """

    def __init__(
        self,
        layout: BatchLayout,
        enforce_schemas: bool = True,
    ) -> None:
        self.layout = layout
        self.enforce_schemas = enforce_schemas

    def read_raw(self, source: BatchSource, source_name: str | None = None) -> pl.DataFrame:
        """
        Read a CSV source with every column as text.

        Args:
            source: File path or raw file bytes
            source_name: Name used in error messages (defaults to the path)

        Raises:
            DataLoadError: If the file is missing or cannot be parsed
        """
        name = source_name or (str(source) if not isinstance(source, bytes) else None)

        if isinstance(source, bytes):
            handle: io.BytesIO | Path = io.BytesIO(source)
        else:
            handle = Path(source)
            if not handle.exists():
                raise DataLoadError(f"File not found: {handle}", source=name)

        try:
            df = pl.read_csv(handle, infer_schema=False)
        except pl.exceptions.NoDataError as e:
            raise DataLoadError("File is empty", source=name) from e
        except Exception as e:
            raise DataLoadError(f"Failed to parse CSV: {e}", source=name) from e

        return drop_empty_rows(normalize_columns(df))

    def load(self, source: BatchSource, source_name: str | None = None) -> pl.DataFrame:
        """
        Load and type a batch file.

        Optional columns missing from the header are filled with the layout
        defaults.

        Args:
            source: File path or raw file bytes
            source_name: Name used in error messages

        Returns:
            DataFrame with every layout column, in file row order

        Raises:
            DataLoadError: If the file cannot be read
            MissingColumnsError: If a required column is absent
        """
        name = source_name or (str(source) if not isinstance(source, bytes) else None)
        df = self.read_raw(source, name)

        missing = self.layout.missing_columns(df.columns)
        if missing:
            raise MissingColumnsError(missing, source=name)

        for col_name, default in self.layout.defaults.items():
            if col_name not in df.columns:
                df = df.with_columns(pl.lit(default, dtype=pl.String).alias(col_name))

        if self.enforce_schemas:
            df = enforce_schema(df, self.layout.schema)

        logger.debug(
            "Loaded %d %s batch rows from %s",
            df.height,
            self.layout.name,
            name or "upload",
        )
        return df.select(list(self.layout.schema))


def load_batch(
    source: BatchSource,
    layout: BatchLayout,
    source_name: str | None = None,
) -> pl.DataFrame:
    """
    Convenience function to load a batch file.

    Args:
        source: File path or raw file bytes
        layout: Expected column layout
        source_name: Name used in error messages

    Returns:
        Typed DataFrame for the layout
    """
    return CSVBatchLoader(layout).load(source, source_name)
