"""
Video Repository Implementations.

Catalog-backed implementation of the video repository interface.
"""

import asyncio
import logging
from typing import List, Optional
from datetime import datetime
from pathlib import Path

from ..domain.interfaces import VideoRepository
from ..domain.models import VideoRecord
from ...storage.manager import StorageManager


class CatalogVideoRepository(VideoRepository):
    """Video repository backed by the storage manager's catalog index"""

    def __init__(self, storage_manager: StorageManager):
        self.storage_manager = storage_manager
        self.logger = logging.getLogger(__name__)

    async def get_by_id(self, file_id: str) -> Optional[VideoRecord]:
        """Get video record by ID"""
        file_info = self.storage_manager.get_file_info(file_id)
        if not file_info:
            return None

        try:
            return self._convert_to_record(file_info)
        except (KeyError, TypeError, ValueError) as e:
            # Treated as absent, same as get_all
            self.logger.warning(f"Unreadable catalog entry {file_id}: {e}")
            return None

    async def get_all(self, limit: Optional[int] = None) -> List[VideoRecord]:
        """Get all video records, newest first"""
        files = self.storage_manager.get_files(limit=limit)
        records = []
        for file_info in files:
            try:
                records.append(self._convert_to_record(file_info))
            except (KeyError, TypeError, ValueError) as e:
                self.logger.warning(f"Skipping unreadable catalog entry {file_info.get('file_id')}: {e}")
        return records

    async def add(self, record: VideoRecord) -> None:
        """Add a record to the catalog"""
        file_info = self._convert_to_file_info(record)
        await asyncio.get_event_loop().run_in_executor(None, self.storage_manager.register_file, file_info)

    async def remove(self, file_id: str) -> bool:
        """Remove a record and its files; file deletion failures do not stop the record removal"""
        report = await asyncio.get_event_loop().run_in_executor(None, self.storage_manager.delete_file, file_id)
        if report is None:
            return False

        if report["errors"]:
            self.logger.warning(f"Removed record {file_id} with {len(report['errors'])} file deletion error(s)")
        return True

    def _convert_to_record(self, file_info: dict) -> VideoRecord:
        """Convert catalog file info to the VideoRecord domain model"""
        thumbnail_path = file_info.get("thumbnail_path")
        created_at = file_info.get("created_at")

        return VideoRecord(
            file_id=file_info["file_id"],
            filename=file_info["filename"],
            original_name=file_info.get("original_name") or file_info["filename"],
            file_path=Path(file_info["file_path"]),
            file_size_bytes=file_info.get("file_size_bytes") or 0,
            mime_type=file_info["mime_type"],
            created_at=datetime.fromisoformat(created_at) if created_at else datetime.now(),
            duration_seconds=file_info.get("duration_seconds"),
            resolution=file_info.get("resolution"),
            thumbnail_path=Path(thumbnail_path) if thumbnail_path else None,
        )

    def _convert_to_file_info(self, record: VideoRecord) -> dict:
        return {
            "file_id": record.file_id,
            "filename": record.filename,
            "original_name": record.original_name,
            "file_path": str(record.file_path),
            "file_size_bytes": record.file_size_bytes,
            "mime_type": record.mime_type,
            "created_at": record.created_at.isoformat(),
            "duration_seconds": record.duration_seconds,
            "resolution": record.resolution,
            "thumbnail_path": str(record.thumbnail_path) if record.thumbnail_path else None,
        }
