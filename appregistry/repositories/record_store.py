"""Record store: read/search/update/delete over the persisted collection."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from appregistry.domain.records import UPDATABLE_FIELDS, matches_criteria
from appregistry.repositories import DocumentStorage

logger = logging.getLogger(__name__)


def _find_index(records: list[dict], name: str) -> int:
    for index, record in enumerate(records):
        if record.get("appName") == name:
            return index
    return -1


class RecordStore:
    """
    Application records kept in a single document.

    Nothing is cached between calls: every operation loads the collection from
    storage, and mutations persist the whole collection before returning. A
    failed write surfaces as ``StorageWriteError`` and the next call starts
    again from what is actually stored. "Not found" is returned as ``None``.
    """

    def __init__(self, storage: DocumentStorage) -> None:
        self.storage = storage

    def load_all(self) -> list[dict]:
        return self.storage.load()

    def find_by_name(self, name: str) -> Optional[dict]:
        records = self.storage.load()
        index = _find_index(records, name)
        return records[index] if index >= 0 else None

    def search(self, criteria: Mapping[str, Any]) -> list[dict]:
        return [record for record in self.storage.load() if matches_criteria(record, criteria)]

    def update(self, name: str, patch: Mapping[str, Any]) -> Optional[dict]:
        records = self.storage.load()
        index = _find_index(records, name)
        if index < 0:
            return None

        record = records[index]
        app_data = record.setdefault("appData", {})
        for field in UPDATABLE_FIELDS:
            if field in patch:
                app_data[field] = patch[field]

        self.storage.save(records)
        logger.info("Updated app %s", name)
        return record

    def delete(self, name: str) -> Optional[dict]:
        records = self.storage.load()
        index = _find_index(records, name)
        if index < 0:
            return None

        removed = records.pop(index)
        self.storage.save(records)
        logger.info("Deleted app %s", name)
        return removed
