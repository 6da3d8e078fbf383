"""
Video Domain Models.

Pure business entities and value objects for video operations.
These models contain no external dependencies and represent core business concepts.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class VideoMetadata:
    """Video metadata value object"""
    duration_seconds: float
    width: int
    height: int
    fps: float
    codec: str
    bitrate: Optional[int] = None

    @property
    def resolution(self) -> str:
        """Resolution rendered as WIDTHxHEIGHT"""
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class ByteRange:
    """Inclusive byte interval [start, end] into a file of known size"""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0:
            raise ValueError("Start byte cannot be negative")
        if self.end < self.start:
            raise ValueError("End byte cannot be less than start byte")

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def content_range(self, total_size: int) -> str:
        """Content-Range header value for this range"""
        return f"bytes {self.start}-{self.end}/{total_size}"


@dataclass(frozen=True)
class RangeSpec:
    """What part of a file to serve: everything, or one byte range"""
    byte_range: Optional[ByteRange] = None

    @classmethod
    def full(cls) -> 'RangeSpec':
        return cls()

    @classmethod
    def partial(cls, start: int, end: int) -> 'RangeSpec':
        return cls(byte_range=ByteRange(start=start, end=end))

    @property
    def is_full(self) -> bool:
        return self.byte_range is None


@dataclass(frozen=True)
class StreamTarget:
    """A stored file resolved for a single streaming response"""
    path: Path
    total_size: int
    content_type: str


@dataclass
class VideoRecord:
    """Catalog entry for an uploaded video"""
    file_id: str
    filename: str
    original_name: str
    file_path: Path
    file_size_bytes: int
    mime_type: str
    created_at: datetime
    duration_seconds: Optional[int] = None
    resolution: Optional[str] = None
    thumbnail_path: Optional[Path] = None

    def __post_init__(self):
        """Validate record data"""
        if not self.file_id:
            raise ValueError("File ID cannot be empty")
        if not self.mime_type:
            raise ValueError("MIME type cannot be empty")
        if self.file_size_bytes < 0:
            raise ValueError("File size cannot be negative")

    @property
    def stream_url(self) -> str:
        return f"/video/{self.file_id}/stream"

    @property
    def thumbnail_url(self) -> str:
        return f"/video/{self.file_id}/thumbnail"
