"""
Uploaded-file decoding: CSV text or the first sheet of a workbook into rows.
"""

from __future__ import annotations

import io
import logging
from datetime import date, datetime

import numpy as np
import pandas as pd

from core.models import Dataset

logger = logging.getLogger("uvicorn.error")

CSV_EXTENSIONS = {"csv"}
EXCEL_EXTENSIONS = {"xls", "xlsx"}


class DecodeError(ValueError):
    """Raised when an uploaded file cannot be turned into rows."""


def file_extension(filename: str) -> str:
    return (filename.rsplit(".", 1)[1].lower() if "." in filename else "").strip()


def df_json_safe(df: pd.DataFrame) -> pd.DataFrame:
    """Replace +/-inf -> NaN, then NaN -> None so JSON serialization works."""
    if df.empty:
        return df
    tmp = df.replace([np.inf, -np.inf], np.nan)
    tmp = tmp.astype(object)
    return tmp.where(pd.notna(tmp), None)


def _plain_cell(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def df_to_rows(df: pd.DataFrame) -> Dataset:
    """DataFrame -> list of row dicts with JSON-safe, plain Python cells."""
    records = df_json_safe(df).to_dict(orient="records")
    return [{str(k): _plain_cell(v) for k, v in rec.items()} for rec in records]


def _read_csv(content: bytes) -> pd.DataFrame:
    try:
        # every cell stays text; empty fields stay "" like the browser parser
        return pd.read_csv(
            io.BytesIO(content),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()


def _read_excel(content: bytes) -> pd.DataFrame:
    return pd.read_excel(io.BytesIO(content), sheet_name=0)


def decode_upload(filename: str, content: bytes) -> Dataset:
    """
    Decode an uploaded file into an ordered list of rows.

    Raises DecodeError for unsupported extensions and unreadable content; a
    failure never yields a partial dataset.
    """
    ext = file_extension(filename or "")
    if ext in CSV_EXTENSIONS:
        reader = _read_csv
    elif ext in EXCEL_EXTENSIONS:
        reader = _read_excel
    else:
        raise DecodeError("Unsupported file type")

    try:
        df = reader(content)
    except Exception as e:
        logger.exception("Failed to decode %s", filename)
        raise DecodeError(f"Failed to parse {filename}: {e}") from e

    rows = df_to_rows(df)
    logger.info("Decoded %s: %d rows, %d columns", filename, len(rows), len(df.columns))
    return rows
