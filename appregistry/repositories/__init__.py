"""
Persistence adapters.

Storage backends expose the same two operations over an opaque document
(``load`` the whole collection, ``save`` the whole collection) so the record
store can target a JSON file or a SQL database without changing its contract.
"""

from __future__ import annotations

from typing import Protocol

from appregistry.core.config import Settings


class StorageError(Exception):
    """Base class for storage failures."""


class StorageReadError(StorageError):
    """Backing document missing, unreadable or malformed."""


class StorageWriteError(StorageError):
    """Backing document could not be replaced."""


class DocumentStorage(Protocol):
    """Whole-document access used by the record store."""

    def load(self) -> list[dict]:
        ...

    def save(self, records: list[dict]) -> None:
        ...


def build_storage(settings: Settings) -> DocumentStorage:
    """Pick the storage backend configured by STORAGE_BACKEND."""
    backend = settings.storage_backend
    if backend == "json":
        from appregistry.repositories.json_storage import JsonDocumentStorage

        return JsonDocumentStorage(settings.data_file)
    if backend == "sql":
        from appregistry.repositories.sql_storage import SqlDocumentStorage

        return SqlDocumentStorage()
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")


__all__ = [
    "DocumentStorage",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "build_storage",
]
