"""
Video Application Service.

Orchestrates upload ingestion, catalog queries, thumbnails and deletion.
"""

import logging
import math
import os
import random
import time
import uuid
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import aiofiles

from ...core.config import StorageConfig, ThumbnailConfig
from ..domain.errors import InvalidUploadError, MetadataExtractionError, RecordNotFoundError, ThumbnailNotFoundError
from ..domain.interfaces import MetadataExtractor, VideoRepository
from ..domain.models import VideoRecord

UPLOAD_CHUNK_SIZE = 1024 * 1024


class VideoService:
    """Application service for video management"""

    def __init__(
        self,
        video_repository: VideoRepository,
        metadata_extractor: MetadataExtractor,
        storage_config: StorageConfig,
        thumbnail_config: Optional[ThumbnailConfig] = None
    ):
        self.video_repository = video_repository
        self.metadata_extractor = metadata_extractor
        self.storage_config = storage_config
        self.thumbnail_config = thumbnail_config or ThumbnailConfig()
        self.logger = logging.getLogger(__name__)

    async def upload_video(self, original_name: str, content_type: Optional[str], source) -> VideoRecord:
        """
        Store an uploaded video, extract its metadata and thumbnail, and add it
        to the catalog.

        source is anything with an async read(size) method, such as FastAPI's
        UploadFile. On any failure after the bytes hit the disk, the stored
        files are removed before the error propagates.
        """
        if not original_name:
            raise InvalidUploadError("No video provided")

        if content_type not in self.storage_config.allowed_mime_types:
            raise InvalidUploadError("Invalid file type. Only video files are allowed.", status_code=415)

        stored_name = self._generate_stored_filename(original_name)
        video_path = Path(self.storage_config.base_path) / stored_name
        thumbnail_path = self.storage_config.thumbnails_path / f"{video_path.stem}.jpg"

        try:
            size = await self._write_upload(source, video_path)
            if size == 0:
                raise InvalidUploadError("Uploaded video is empty")

            metadata = await self.metadata_extractor.extract(video_path)

            thumbnail_at = metadata.duration_seconds * self.thumbnail_config.position_ratio
            await self.metadata_extractor.extract_thumbnail(
                video_path,
                thumbnail_path,
                timestamp_seconds=thumbnail_at,
                size=(self.thumbnail_config.width, self.thumbnail_config.height)
            )

            record = VideoRecord(
                file_id=uuid.uuid4().hex,
                filename=stored_name,
                original_name=original_name,
                file_path=video_path,
                file_size_bytes=size,
                mime_type=content_type,
                created_at=datetime.now(),
                duration_seconds=math.floor(metadata.duration_seconds),
                resolution=metadata.resolution,
                thumbnail_path=thumbnail_path,
            )
            await self.video_repository.add(record)

        except InvalidUploadError:
            self._discard_files(video_path, thumbnail_path)
            raise
        except MetadataExtractionError as e:
            self.logger.error(f"Upload of {original_name} failed: {e}")
            self._discard_files(video_path, thumbnail_path)
            raise
        except Exception as e:
            self.logger.error(f"Upload of {original_name} failed: {e}")
            self._discard_files(video_path, thumbnail_path)
            raise MetadataExtractionError(f"Upload failed: {e}")

        self.logger.info(f"Uploaded {original_name} as {record.file_id} ({size} bytes, {record.resolution}, {record.duration_seconds}s)")
        return record

    async def list_videos(self, limit: Optional[int] = None) -> List[VideoRecord]:
        """List catalog records, newest first"""
        return await self.video_repository.get_all(limit=limit)

    async def get_video(self, file_id: str) -> VideoRecord:
        record = await self.video_repository.get_by_id(file_id)
        if record is None:
            raise RecordNotFoundError(file_id)
        return record

    async def get_thumbnail_path(self, file_id: str) -> Path:
        record = await self.get_video(file_id)
        if not record.thumbnail_path or not record.thumbnail_path.is_file():
            raise ThumbnailNotFoundError(file_id)
        return record.thumbnail_path

    async def delete_video(self, file_id: str) -> None:
        """Delete a record and, best-effort, its video and thumbnail files"""
        if not await self.video_repository.remove(file_id):
            raise RecordNotFoundError(file_id)
        self.logger.info(f"Deleted video {file_id}")

    async def _write_upload(self, source, video_path: Path) -> int:
        """Copy the upload to disk in chunks, enforcing the size limit"""
        max_size = self.storage_config.max_upload_size_bytes
        written = 0

        video_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(video_path, "wb") as f:
            while True:
                chunk = await source.read(UPLOAD_CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_size:
                    raise InvalidUploadError(f"Upload exceeds {self.storage_config.max_upload_size_mb}MB limit", status_code=413)
                await f.write(chunk)

        return written

    def _generate_stored_filename(self, original_name: str) -> str:
        unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        extension = Path(original_name).suffix.lower()
        return f"video-{unique_suffix}{extension}"

    def _discard_files(self, *paths: Path) -> None:
        for path in paths:
            try:
                if path.exists():
                    os.remove(path)
            except OSError as e:
                self.logger.warning(f"Could not remove {path} after failed upload: {e}")
