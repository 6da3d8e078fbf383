"""
Video Domain Interfaces.

Abstract interfaces that define contracts for video operations.
These interfaces allow dependency inversion - domain logic doesn't depend on infrastructure.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
from pathlib import Path

from .models import VideoRecord, VideoMetadata


class VideoRepository(ABC):
    """Abstract catalog of video records"""

    @abstractmethod
    async def get_by_id(self, file_id: str) -> Optional[VideoRecord]:
        """Get video record by ID"""
        pass

    @abstractmethod
    async def get_all(self, limit: Optional[int] = None) -> List[VideoRecord]:
        """Get all video records, newest first"""
        pass

    @abstractmethod
    async def add(self, record: VideoRecord) -> None:
        """Add a record to the catalog"""
        pass

    @abstractmethod
    async def remove(self, file_id: str) -> bool:
        """Remove a record and its backing files (best-effort); False if unknown"""
        pass


class VideoStorage(ABC):
    """Abstract access to stored video bytes"""

    @abstractmethod
    def file_exists(self, path: Path) -> bool:
        """Check whether the backing file is present right now"""
        pass

    @abstractmethod
    def file_size(self, path: Path) -> int:
        """Current size of the backing file in bytes"""
        pass

    @abstractmethod
    async def open_for_read(self, path: Path, start: int = 0) -> Any:
        """Open the file positioned at start; raises OSError on failure"""
        pass


class MetadataExtractor(ABC):
    """Abstract video metadata extractor"""

    @abstractmethod
    async def extract(self, file_path: Path) -> VideoMetadata:
        """Extract metadata from video file; raises MetadataExtractionError"""
        pass

    @abstractmethod
    async def extract_thumbnail(
        self,
        file_path: Path,
        output_path: Path,
        timestamp_seconds: float = 1.0,
        size: tuple = (320, 180)
    ) -> Path:
        """Write a JPEG thumbnail to output_path; raises MetadataExtractionError"""
        pass
