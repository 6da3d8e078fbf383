"""
Video Presentation Layer.

Contains HTTP controllers, the range responder, request/response models, and
API route definitions.
"""

from .controllers import VideoController, StreamingController
from .responder import RangeResponder
from .schemas import VideoSummaryResponse, VideoListResponse, StreamingInfoResponse
from .routes import create_video_routes

__all__ = [
    "VideoController",
    "StreamingController",
    "RangeResponder",
    "VideoSummaryResponse",
    "VideoListResponse",
    "StreamingInfoResponse",
    "create_video_routes",
]
