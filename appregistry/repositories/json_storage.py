"""
JSON-file persistence adapter.

The whole collection lives in one file holding a single JSON array. Writes go
to a temporary sibling file that atomically replaces the target, so readers
always see a complete snapshot.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

from appregistry.repositories import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)

_locks: dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _locks_guard:
        return _locks.setdefault(path, threading.Lock())


class JsonDocumentStorage:
    """Reads and rewrites the records document on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).resolve()
        self._lock = _lock_for(self.path)

    def load(self) -> list[dict]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.error("Error reading data file %s: %s", self.path, exc)
            raise StorageReadError("Failed to read data file") from exc
        if not isinstance(data, list):
            logger.error("Data file %s does not hold a JSON array", self.path)
            raise StorageReadError("Failed to read data file")
        return data

    def save(self, records: list[dict]) -> None:
        try:
            payload = json.dumps(records, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as exc:
            raise StorageWriteError("Records are not JSON serializable") from exc
        with self._lock:
            tmp_name = None
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
                )
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                    f.write("\n")
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, self.path)
                tmp_name = None
            except OSError as exc:
                logger.error("Error writing data file %s: %s", self.path, exc)
                raise StorageWriteError("Failed to write data file") from exc
            finally:
                if tmp_name and os.path.exists(tmp_name):
                    os.unlink(tmp_name)
