"""
Storage Manager for the Video Stream Service.

Owns the on-disk catalog index (one JSON document mapping video ids to their
records) and the upload/thumbnail directories. All index mutations happen under
a lock and are persisted with an atomic replace, so concurrent lookups never
observe a half-written record.
"""

import os
import json
import logging
import shutil
import tempfile
import threading
from typing import Dict, List, Optional, Any
from datetime import datetime
from pathlib import Path

from ..core.config import Config


class StorageManager:
    """Manages the video catalog index and stored files"""

    def __init__(self, config: Config):
        self.config = config
        self.storage_config = config.storage
        self.logger = logging.getLogger(__name__)
        self._lock = threading.RLock()

        self._ensure_storage_structure()

        self.file_index_path = str(self.storage_config.index_path)
        self.file_index = self._load_file_index()

    def _ensure_storage_structure(self) -> None:
        """Ensure upload and thumbnail directories exist"""
        try:
            Path(self.storage_config.base_path).mkdir(parents=True, exist_ok=True)
            self.storage_config.thumbnails_path.mkdir(parents=True, exist_ok=True)
            self.logger.info("Storage directory structure verified")

        except Exception as e:
            self.logger.error(f"Error creating storage structure: {e}")
            raise

    def _load_file_index(self) -> Dict[str, Any]:
        """Load file index from disk"""
        try:
            if os.path.exists(self.file_index_path):
                with open(self.file_index_path, "r") as f:
                    return json.load(f)
            else:
                return {"files": {}, "last_updated": None}
        except Exception as e:
            self.logger.error(f"Error loading file index: {e}")
            return {"files": {}, "last_updated": None}

    def _save_file_index(self) -> None:
        """Persist the index via a temp file and atomic rename. Caller holds the lock."""
        self.file_index["last_updated"] = datetime.now().isoformat()
        index_dir = os.path.dirname(self.file_index_path) or "."
        fd, tmp_path = tempfile.mkstemp(prefix=".catalog-", suffix=".json", dir=index_dir)
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(self.file_index, f, indent=2)
            os.replace(tmp_path, self.file_index_path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def register_file(self, file_info: Dict[str, Any]) -> str:
        """Add a catalog record; the record becomes visible only once persisted"""
        file_id = file_info["file_id"]
        with self._lock:
            if file_id in self.file_index["files"]:
                raise ValueError(f"File ID already registered: {file_id}")

            self.file_index["files"][file_id] = dict(file_info)
            try:
                self._save_file_index()
            except Exception:
                del self.file_index["files"][file_id]
                raise

        self.logger.info(f"Registered video file: {file_id}")
        return file_id

    def get_file_info(self, file_id: str) -> Optional[Dict[str, Any]]:
        """Get information about a specific file"""
        with self._lock:
            file_info = self.file_index["files"].get(file_id)
            return dict(file_info) if file_info else None

    def get_files(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Get all catalog records, newest first"""
        with self._lock:
            files = [dict(file_info) for file_info in self.file_index["files"].values()]

        files.sort(key=lambda x: x.get("created_at") or "", reverse=True)

        if limit:
            files = files[:limit]

        return files

    def delete_file(self, file_id: str) -> Optional[Dict[str, Any]]:
        """
        Delete a catalog record and its backing files.

        File removal is best-effort: failures are logged and reported but the
        record is removed regardless. Returns None if the record does not exist.
        """
        with self._lock:
            file_info = self.file_index["files"].pop(file_id, None)
            if file_info is None:
                self.logger.warning(f"File ID not found: {file_id}")
                return None
            self._save_file_index()

        report = {"file_id": file_id, "removed_files": [], "errors": []}

        for path in (file_info.get("file_path"), file_info.get("thumbnail_path")):
            if not path:
                continue
            try:
                if os.path.exists(path):
                    os.remove(path)
                    report["removed_files"].append(path)
                    self.logger.info(f"Deleted file: {path}")
            except OSError as e:
                error_msg = f"Could not delete {path}: {e}"
                report["errors"].append(error_msg)
                self.logger.warning(error_msg)

        return report

    def get_storage_statistics(self) -> Dict[str, Any]:
        """Get storage usage statistics"""
        try:
            with self._lock:
                files = list(self.file_index["files"].values())

            stats = {
                "base_path": self.storage_config.base_path,
                "total_files": len(files),
                "total_size_bytes": sum(f.get("file_size_bytes") or 0 for f in files),
                "total_duration_seconds": sum(f.get("duration_seconds") or 0 for f in files),
                "disk_usage": {},
            }

            if os.path.exists(self.storage_config.base_path):
                disk_usage = shutil.disk_usage(self.storage_config.base_path)
                stats["disk_usage"] = {"total_bytes": disk_usage.total, "used_bytes": disk_usage.used, "free_bytes": disk_usage.free, "used_percent": (disk_usage.used / disk_usage.total) * 100}

            return stats

        except Exception as e:
            self.logger.error(f"Error getting storage statistics: {e}")
            return {}

    def verify_storage_integrity(self) -> Dict[str, Any]:
        """
        Report records whose backing file is gone and stored files no record
        points to. Nothing is removed: a record with a missing file keeps
        answering FileMissing until it is deleted explicitly.
        """
        with self._lock:
            files = {file_id: dict(info) for file_id, info in self.file_index["files"].items()}

        integrity_report = {"total_files_in_index": len(files), "missing_files": [], "orphaned_files": []}

        try:
            indexed_paths = set()
            for file_id, file_info in files.items():
                path = file_info.get("file_path")
                if path:
                    indexed_paths.add(os.path.abspath(path))
                    if not os.path.exists(path):
                        integrity_report["missing_files"].append(file_id)

            base_path = Path(self.storage_config.base_path)
            for candidate in base_path.glob("video-*"):
                if candidate.is_file() and str(candidate.resolve()) not in indexed_paths and os.path.abspath(candidate) not in indexed_paths:
                    integrity_report["orphaned_files"].append(str(candidate))

            self.logger.info(f"Storage integrity check completed: {len(integrity_report['missing_files'])} missing, {len(integrity_report['orphaned_files'])} orphaned")

            return integrity_report

        except Exception as e:
            self.logger.error(f"Error during integrity check: {e}")
            integrity_report["error"] = str(e)
            return integrity_report
