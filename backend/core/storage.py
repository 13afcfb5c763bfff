"""
Persistent dataset store.

Holds exactly one dataset at a time under a fixed key, as a JSON document on
disk. "Nothing stored" (load() -> None) is distinct from an empty dataset.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

from core.models import Dataset

logger = logging.getLogger("uvicorn.error")


class DatasetStore:
    def __init__(self, data_dir: str, key: str = "dashboardData_v1"):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.key = key
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self.data_dir / f"{self.key}.json"

    def save(self, rows: Dataset) -> None:
        """Replace the stored dataset; write to a temp file, then rename."""
        with self._lock:
            fd, tmp_path = tempfile.mkstemp(dir=str(self.data_dir), suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(rows, f, default=str)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_path, str(self.path))
            except BaseException:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
                raise
        logger.info("Saved dataset %r (%d rows)", self.key, len(rows))

    def load(self) -> Optional[Dataset]:
        """Stored rows, or None when nothing (readable) is stored."""
        with self._lock:
            if not self.path.exists():
                return None
            try:
                with open(self.path, encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                logger.warning("Ignoring unreadable dataset %s: %s", self.path, e)
                return None
        if not isinstance(data, list):
            logger.warning("Ignoring dataset %s: expected a list of rows", self.path)
            return None
        return data

    def clear(self) -> None:
        with self._lock:
            try:
                self.path.unlink()
            except FileNotFoundError:
                pass
        logger.info("Cleared dataset %r", self.key)
