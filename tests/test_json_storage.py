from __future__ import annotations

import json
import sys
import threading
from pathlib import Path

import pytest

# Make the appregistry package importable for local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from appregistry.repositories import StorageReadError, StorageWriteError
from appregistry.repositories import json_storage
from appregistry.repositories.json_storage import JsonDocumentStorage
from appregistry.repositories.record_store import RecordStore

RECORDS = [{"appName": "café", "appData": {"appPath": "/c", "appOwner": "Zoë", "isValid": True}}]


def test_missing_file_is_a_read_error(tmp_path):
    with pytest.raises(StorageReadError):
        JsonDocumentStorage(tmp_path / "nope.json").load()


def test_malformed_json_is_a_read_error(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[{not json", encoding="utf-8")
    with pytest.raises(StorageReadError):
        JsonDocumentStorage(path).load()


def test_top_level_object_is_a_read_error(tmp_path):
    path = tmp_path / "object.json"
    path.write_text('{"appName": "x"}', encoding="utf-8")
    with pytest.raises(StorageReadError):
        JsonDocumentStorage(path).load()


def test_save_writes_whole_array_with_unicode(tmp_path):
    path = tmp_path / "apps.json"
    storage = JsonDocumentStorage(path)
    storage.save(RECORDS)

    text = path.read_text(encoding="utf-8")
    assert "Zoë" in text
    assert json.loads(text) == RECORDS
    assert storage.load() == RECORDS


def test_save_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "dir" / "apps.json"
    JsonDocumentStorage(path).save([])
    assert json.loads(path.read_text(encoding="utf-8")) == []


def test_failed_replace_keeps_previous_document(tmp_path, monkeypatch):
    path = tmp_path / "apps.json"
    storage = JsonDocumentStorage(path)
    storage.save(RECORDS)
    before = path.read_bytes()

    def _boom(src, dst):
        raise OSError("read-only filesystem")

    monkeypatch.setattr(json_storage.os, "replace", _boom)
    with pytest.raises(StorageWriteError):
        storage.save([])

    assert path.read_bytes() == before
    assert sorted(p.name for p in tmp_path.iterdir()) == ["apps.json"]


def test_unserializable_records_are_a_write_error(tmp_path):
    path = tmp_path / "apps.json"
    with pytest.raises(StorageWriteError):
        JsonDocumentStorage(path).save([{"appName": object()}])
    assert not path.exists()


def test_instances_for_same_path_share_a_lock(tmp_path):
    a = JsonDocumentStorage(tmp_path / "apps.json")
    b = JsonDocumentStorage(str(tmp_path / "apps.json"))
    assert a._lock is b._lock


def test_concurrent_writers_leave_a_complete_document(tmp_path):
    path = tmp_path / "apps.json"
    seed = [
        {"appName": f"app{i}", "appData": {"appPath": f"/app{i}", "appOwner": "Osman", "isValid": True}}
        for i in range(4)
    ]
    JsonDocumentStorage(path).save(seed)
    errors: list[BaseException] = []

    def worker(n: int) -> None:
        store = RecordStore(JsonDocumentStorage(path))
        try:
            for i in range(50):
                store.update(f"app{i % 4}", {"appOwner": f"owner-{n}-{i}", "isValid": i % 2 == 0})
                assert len(store.load_all()) == 4
        except BaseException as exc:  # collected and asserted below
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    final = json.loads(path.read_text(encoding="utf-8"))
    assert [r["appName"] for r in final] == ["app0", "app1", "app2", "app3"]
    assert sorted(p.name for p in tmp_path.iterdir()) == ["apps.json"]
