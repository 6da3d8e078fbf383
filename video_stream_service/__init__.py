"""
Video Stream Service

Upload video files, keep a catalog of them, and stream them back over HTTP with
byte-range support for seekable playback.
"""

__version__ = "1.0.0"

from .main import VideoStreamSystem

__all__ = ["VideoStreamSystem"]
