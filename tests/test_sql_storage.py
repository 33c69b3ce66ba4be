"""
Record store running on the SQL backend against a temporary SQLite database.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the appregistry package importable for local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from appregistry.core import config as core_config
from appregistry.db import session as db_session
from appregistry.db.create_tables import create_all
from appregistry.repositories import StorageReadError, StorageWriteError, build_storage
from appregistry.repositories.record_store import RecordStore
from appregistry.repositories.sql_storage import SqlDocumentStorage

RECORDS = [
    {"appName": "appOne", "appData": {"appPath": "/p1", "appOwner": "Osman", "isValid": True}},
    {"appName": "appTwo", "appData": {"appPath": "/p2", "appOwner": "Fatima", "isValid": False}},
    {"appName": "appThree", "appData": {"appPath": "/p3", "appOwner": "Lina", "isValid": True}},
]


def _reset_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Point DATABASE_URL at a throwaway SQLite file and rebuild the schema."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("STORAGE_BACKEND", "sql")
    _reset_caches()

    engine = db_session.get_engine()
    create_all(engine, drop_first=True)

    yield db_file

    engine.dispose()
    _reset_caches()


def test_empty_table_loads_empty_collection(temp_db):
    assert SqlDocumentStorage().load() == []


def test_round_trip_preserves_order(temp_db):
    storage = SqlDocumentStorage()
    storage.save(RECORDS)
    assert storage.load() == RECORDS

    storage.save(list(reversed(RECORDS)))
    assert [r["appName"] for r in storage.load()] == ["appThree", "appTwo", "appOne"]


def test_build_storage_selects_sql(temp_db):
    assert isinstance(build_storage(core_config.get_settings()), SqlDocumentStorage)


def test_record_store_on_sql(temp_db):
    SqlDocumentStorage().save(RECORDS)
    store = RecordStore(SqlDocumentStorage())

    assert [r["appName"] for r in store.search({"isValid": "true"})] == ["appOne", "appThree"]
    updated = store.update("appTwo", {"appOwner": "Selin"})
    assert updated["appData"] == {"appPath": "/p2", "appOwner": "Selin", "isValid": False}
    assert store.delete("appOne")["appName"] == "appOne"
    assert [r["appName"] for r in store.load_all()] == ["appTwo", "appThree"]
    assert store.find_by_name("appTwo")["appData"]["appOwner"] == "Selin"


def test_failed_save_rolls_back(temp_db):
    storage = SqlDocumentStorage()
    storage.save(RECORDS)
    broken = [RECORDS[0], {"appName": "broken", "appData": {"appPath": "/b"}}]
    with pytest.raises(StorageWriteError):
        storage.save(broken)
    assert storage.load() == RECORDS


def test_missing_database_url_is_a_read_error(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    _reset_caches()
    try:
        with pytest.raises(StorageReadError):
            SqlDocumentStorage().load()
    finally:
        _reset_caches()
