"""Runtime settings read from the environment (and an optional .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip() or default


def _env_int(key: str, default: int) -> int:
    raw = _env(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    data_dir: str
    storage_key: str
    cors_origins: List[str]
    table_rows_default: int
    preview_rows: int


@lru_cache()
def get_settings() -> Settings:
    origins = _env("CORS_ORIGINS", "*") or "*"
    return Settings(
        data_dir=_env("DATA_DIR", "./data") or "./data",
        storage_key=_env("STORAGE_KEY", "dashboardData_v1") or "dashboardData_v1",
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        table_rows_default=_env_int("TABLE_ROWS_DEFAULT", 25),
        preview_rows=_env_int("PREVIEW_ROWS", 50),
    )
