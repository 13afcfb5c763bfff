"""
Dashboard API routes: mounted as a sub-router on the main FastAPI app.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import Response

from core.config import get_settings
from core.decode import DecodeError, decode_upload
from core.storage import DatasetStore
from server.orchestrator import build_report_summary, build_visuals, filter_rows, preview_table
from skills.columns import classify_columns
from skills.csv_codec import encode_csv

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/api", tags=["dashboard"])

EXPORT_FILENAME = "export.csv"


@lru_cache()
def get_store() -> DatasetStore:
    settings = get_settings()
    return DatasetStore(settings.data_dir, settings.storage_key)


async def _decode(file: UploadFile):
    content = await file.read()
    filename = file.filename or "table.csv"
    try:
        return filename, decode_upload(filename, content)
    except DecodeError as e:
        logger.warning("Upload rejected (%s): %s", filename, e)
        raise HTTPException(status_code=400, detail=str(e))


# ---------------------------------------------------------------------------
# Upload
# ---------------------------------------------------------------------------

@router.post("/upload")
async def upload(file: UploadFile = File(...), store: DatasetStore = Depends(get_store)):
    """Decode the file and replace the stored dataset with it."""
    filename, rows = await _decode(file)
    store.save(rows)
    classification = classify_columns(rows)
    return {
        "ok": True,
        "file_name": filename,
        "rows": len(rows),
        "columns": classification.all_columns,
        "classification": classification.model_dump(),
    }


@router.post("/upload/preview")
async def upload_preview(file: UploadFile = File(...)):
    """Decode without saving; return the first rows for a quick look."""
    filename, rows = await _decode(file)
    table = preview_table(rows, get_settings().preview_rows)
    return {"file_name": filename, **table.model_dump()}


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

@router.get("/visuals")
async def visuals(
    date_column: Optional[str] = None,
    value_column: Optional[str] = None,
    category_column: Optional[str] = None,
    rows: Optional[int] = Query(None, ge=0),
    store: DatasetStore = Depends(get_store),
):
    state = build_visuals(
        store.load(),
        date_column=date_column,
        value_column=value_column,
        category_column=category_column,
        table_rows=get_settings().table_rows_default if rows is None else rows,
    )
    return state.model_dump()


@router.get("/table")
async def table(
    q: Optional[str] = None,
    rows: Optional[int] = Query(None, ge=0),
    store: DatasetStore = Depends(get_store),
):
    """Table preview, optionally filtered by a free-text query."""
    data = filter_rows(store.load() or [], q)
    limit = get_settings().table_rows_default if rows is None else rows
    return preview_table(data, limit).model_dump()


@router.get("/report")
async def report(store: DatasetStore = Depends(get_store)):
    data = store.load() or []
    return build_report_summary(data, classify_columns(data)).model_dump()


@router.get("/export.csv")
async def export_csv(store: DatasetStore = Depends(get_store)):
    csv_text = encode_csv(store.load() or [])
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.delete("/dataset")
async def clear_dataset(store: DatasetStore = Depends(get_store)):
    store.clear()
    return {"ok": True}
