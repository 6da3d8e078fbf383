"""
Video Streaming Application Service.

Resolves a video id to a stream target, parses the requested range and opens
the backing file. Every check runs at request time: files can disappear out of
band between upload and playback.
"""

import logging
from typing import Optional

from ...core.config import StreamingConfig
from ..domain.errors import FileMissingError, PreStreamIOError, RecordNotFoundError
from ..domain.interfaces import VideoRepository, VideoStorage
from ..domain.models import RangeSpec, StreamTarget
from ..domain.ranges import parse_range_header


class StreamingService:
    """Application service for video streaming"""

    def __init__(
        self,
        video_repository: VideoRepository,
        video_storage: VideoStorage,
        streaming_config: Optional[StreamingConfig] = None
    ):
        self.video_repository = video_repository
        self.video_storage = video_storage
        self.streaming_config = streaming_config or StreamingConfig()
        self.logger = logging.getLogger(__name__)

    async def resolve_target(self, file_id: str) -> StreamTarget:
        """
        Look up the record and check the backing file.

        Raises RecordNotFoundError or FileMissingError; the size comes from the
        file itself so Content-Length always matches what will be read.
        """
        record = await self.video_repository.get_by_id(file_id)
        if record is None:
            raise RecordNotFoundError(file_id)

        if not self.video_storage.file_exists(record.file_path):
            self.logger.warning(f"Backing file missing for {file_id}: {record.file_path}")
            raise FileMissingError(file_id, str(record.file_path))

        try:
            total_size = self.video_storage.file_size(record.file_path)
        except FileNotFoundError:
            raise FileMissingError(file_id, str(record.file_path))
        except OSError as e:
            raise PreStreamIOError(f"Could not stat video file for {file_id}: {e.strerror or e}")

        return StreamTarget(path=record.file_path, total_size=total_size, content_type=record.mime_type)

    def parse_range(self, range_header: Optional[str], target: StreamTarget) -> RangeSpec:
        """Parse the Range header against the target; raises a RangeError on 416 cases"""
        return parse_range_header(range_header, target.total_size)

    async def open_stream(self, file_id: str, target: StreamTarget, spec: RangeSpec):
        """Open the backing file at the first byte to send"""
        start = 0 if spec.is_full else spec.byte_range.start
        try:
            return await self.video_storage.open_for_read(target.path, start)
        except FileNotFoundError:
            raise FileMissingError(file_id, str(target.path))
        except OSError as e:
            self.logger.error(f"Error opening {target.path} for {file_id}: {e}")
            raise PreStreamIOError(f"Could not read video file for {file_id}")

    def get_optimal_chunk_size(self, file_size: int) -> int:
        """Chunk size for streaming; configured value wins over the adaptive default"""
        if self.streaming_config.chunk_size_bytes > 0:
            return self.streaming_config.chunk_size_bytes

        if file_size < 1024 * 1024:  # < 1MB
            return 64 * 1024
        elif file_size < 10 * 1024 * 1024:  # < 10MB
            return 256 * 1024
        elif file_size < 100 * 1024 * 1024:  # < 100MB
            return 512 * 1024
        else:
            return 1024 * 1024

    @property
    def idle_read_timeout(self) -> Optional[float]:
        return self.streaming_config.idle_read_timeout_seconds
