"""
Video Domain Layer.

Contains pure business logic and domain models for video operations.
No external dependencies - only Python standard library and domain concepts.
"""

from .models import VideoRecord, VideoMetadata, ByteRange, RangeSpec, StreamTarget
from .interfaces import VideoRepository, VideoStorage, MetadataExtractor
from .ranges import parse_range_header

__all__ = [
    "VideoRecord",
    "VideoMetadata",
    "ByteRange",
    "RangeSpec",
    "StreamTarget",
    "VideoRepository",
    "VideoStorage",
    "MetadataExtractor",
    "parse_range_header",
]
