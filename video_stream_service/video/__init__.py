"""
Video Module for the Video Stream Service.

Upload ingestion, catalog access and range-based HTTP streaming, organized
following clean architecture principles.
"""

from .domain.models import VideoRecord, VideoMetadata, ByteRange, RangeSpec, StreamTarget
from .application.video_service import VideoService
from .application.streaming_service import StreamingService
from .integration import VideoModule, create_video_module

__all__ = ["VideoRecord", "VideoMetadata", "ByteRange", "RangeSpec", "StreamTarget", "VideoService", "StreamingService", "VideoModule", "create_video_module"]
