"""
Tests for the catalog index kept by StorageManager.
"""

import os
import threading
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from video_stream_service.storage.manager import StorageManager


def make_record(base_path, file_id, created_at=None, **overrides):
    path = Path(base_path) / f"video-{file_id}.mp4"
    path.write_bytes(b"\x00" * 64)
    record = {
        "file_id": file_id,
        "filename": path.name,
        "original_name": f"{file_id}.mp4",
        "file_path": str(path),
        "file_size_bytes": 64,
        "mime_type": "video/mp4",
        "created_at": (created_at or datetime.now()).isoformat(),
        "duration_seconds": 5,
        "resolution": "320x240",
        "thumbnail_path": None,
    }
    record.update(overrides)
    return record


def test_register_and_lookup_returns_copy(config, storage_manager):
    storage_manager.register_file(make_record(config.storage.base_path, "a1"))

    info = storage_manager.get_file_info("a1")
    info["original_name"] = "changed.mp4"

    assert storage_manager.get_file_info("a1")["original_name"] == "a1.mp4"
    assert storage_manager.get_file_info("missing") is None


def test_duplicate_id_is_rejected(config, storage_manager):
    storage_manager.register_file(make_record(config.storage.base_path, "a1"))

    with pytest.raises(ValueError):
        storage_manager.register_file(make_record(config.storage.base_path, "a1"))


def test_files_are_listed_newest_first(config, storage_manager):
    now = datetime.now()
    for offset, file_id in enumerate(["old", "middle", "new"]):
        storage_manager.register_file(make_record(config.storage.base_path, file_id, created_at=now + timedelta(minutes=offset)))

    assert [f["file_id"] for f in storage_manager.get_files()] == ["new", "middle", "old"]
    assert [f["file_id"] for f in storage_manager.get_files(limit=2)] == ["new", "middle"]


def test_index_survives_restart(config, storage_manager):
    storage_manager.register_file(make_record(config.storage.base_path, "a1"))

    reloaded = StorageManager(config)

    assert reloaded.get_file_info("a1")["filename"] == "video-a1.mp4"
    assert os.path.exists(config.storage.index_path)


def test_delete_removes_record_and_files(config, storage_manager):
    thumbnail = config.storage.thumbnails_path / "video-a1.jpg"
    thumbnail.write_bytes(b"jpeg")
    record = make_record(config.storage.base_path, "a1", thumbnail_path=str(thumbnail))
    storage_manager.register_file(record)

    report = storage_manager.delete_file("a1")

    assert report["errors"] == []
    assert set(report["removed_files"]) == {record["file_path"], str(thumbnail)}
    assert not os.path.exists(record["file_path"])
    assert not thumbnail.exists()
    assert storage_manager.get_file_info("a1") is None
    assert storage_manager.delete_file("a1") is None


def test_delete_is_best_effort(config, storage_manager):
    # A directory in place of the thumbnail makes os.remove fail
    blocker = config.storage.thumbnails_path / "video-a1.jpg"
    blocker.mkdir()
    storage_manager.register_file(make_record(config.storage.base_path, "a1", thumbnail_path=str(blocker)))

    report = storage_manager.delete_file("a1")

    assert len(report["errors"]) == 1
    assert storage_manager.get_file_info("a1") is None
    assert StorageManager(config).get_file_info("a1") is None


def test_delete_tolerates_already_missing_file(config, storage_manager):
    record = make_record(config.storage.base_path, "a1")
    storage_manager.register_file(record)
    os.remove(record["file_path"])

    report = storage_manager.delete_file("a1")

    assert report["removed_files"] == []
    assert report["errors"] == []


def test_integrity_report(config, storage_manager):
    kept = make_record(config.storage.base_path, "kept")
    gone = make_record(config.storage.base_path, "gone")
    storage_manager.register_file(kept)
    storage_manager.register_file(gone)
    os.remove(gone["file_path"])
    orphan = Path(config.storage.base_path) / "video-orphan.mp4"
    orphan.write_bytes(b"\x00")

    report = storage_manager.verify_storage_integrity()

    assert report["total_files_in_index"] == 2
    assert report["missing_files"] == ["gone"]
    assert report["orphaned_files"] == [str(orphan)]
    # Reporting never removes anything
    assert orphan.exists()
    assert storage_manager.get_file_info("gone") is not None


def test_storage_statistics(config, storage_manager):
    storage_manager.register_file(make_record(config.storage.base_path, "a1"))
    storage_manager.register_file(make_record(config.storage.base_path, "a2"))

    stats = storage_manager.get_storage_statistics()

    assert stats["total_files"] == 2
    assert stats["total_size_bytes"] == 128
    assert stats["total_duration_seconds"] == 10
    assert "free_bytes" in stats["disk_usage"]


def test_concurrent_registration(config, storage_manager):
    errors = []

    def register(index):
        try:
            storage_manager.register_file(make_record(config.storage.base_path, f"t{index}"))
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=register, args=(i,)) for i in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(storage_manager.get_files()) == 20
    assert len(StorageManager(config).get_files()) == 20
