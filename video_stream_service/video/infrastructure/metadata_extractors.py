"""
Video Metadata Extractors.

OpenCV-based extraction of duration, resolution and thumbnails. OpenCV calls
block, so they run in the default thread pool.
"""

import asyncio
import logging
from pathlib import Path

import cv2

from ..domain.errors import MetadataExtractionError
from ..domain.interfaces import MetadataExtractor
from ..domain.models import VideoMetadata


class OpenCVMetadataExtractor(MetadataExtractor):
    """OpenCV-based metadata extractor"""

    def __init__(self, jpeg_quality: int = 85):
        self.jpeg_quality = jpeg_quality
        self.logger = logging.getLogger(__name__)

    async def extract(self, file_path: Path) -> VideoMetadata:
        """Extract metadata from video file using OpenCV"""
        return await asyncio.get_event_loop().run_in_executor(None, self._extract_sync, file_path)

    def _extract_sync(self, file_path: Path) -> VideoMetadata:
        cap = cv2.VideoCapture(str(file_path))
        try:
            if not cap.isOpened():
                raise MetadataExtractionError(f"Could not open video file: {file_path.name}")

            width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
            height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
            fps = cap.get(cv2.CAP_PROP_FPS)
            frame_count = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))

            if width <= 0 or height <= 0:
                raise MetadataExtractionError(f"No video stream found in {file_path.name}")

            duration_seconds = frame_count / fps if fps > 0 else 0.0

            fourcc = int(cap.get(cv2.CAP_PROP_FOURCC))
            bitrate = cap.get(cv2.CAP_PROP_BITRATE)

            return VideoMetadata(
                duration_seconds=duration_seconds,
                width=width,
                height=height,
                fps=fps,
                codec=self._fourcc_to_string(fourcc),
                bitrate=int(bitrate) if bitrate > 0 else None
            )

        finally:
            cap.release()

    async def extract_thumbnail(
        self,
        file_path: Path,
        output_path: Path,
        timestamp_seconds: float = 1.0,
        size: tuple = (320, 180)
    ) -> Path:
        """Grab a frame at timestamp_seconds, resize it and write it as JPEG"""
        return await asyncio.get_event_loop().run_in_executor(
            None, self._extract_thumbnail_sync, file_path, output_path, timestamp_seconds, size
        )

    def _extract_thumbnail_sync(
        self,
        file_path: Path,
        output_path: Path,
        timestamp_seconds: float,
        size: tuple
    ) -> Path:
        cap = cv2.VideoCapture(str(file_path))
        try:
            if not cap.isOpened():
                raise MetadataExtractionError(f"Could not open video file: {file_path.name}")

            fps = cap.get(cv2.CAP_PROP_FPS)
            if fps <= 0:
                fps = 30

            cap.set(cv2.CAP_PROP_POS_FRAMES, int(timestamp_seconds * fps))
            ret, frame = cap.read()
            if not ret or frame is None:
                # Fall back to the first frame
                cap.set(cv2.CAP_PROP_POS_FRAMES, 0)
                ret, frame = cap.read()
                if not ret or frame is None:
                    raise MetadataExtractionError(f"Could not read a frame from {file_path.name}")

            thumbnail = cv2.resize(frame, tuple(size))

            output_path.parent.mkdir(parents=True, exist_ok=True)
            if not cv2.imwrite(str(output_path), thumbnail, [cv2.IMWRITE_JPEG_QUALITY, self.jpeg_quality]):
                raise MetadataExtractionError(f"Could not write thumbnail {output_path.name}")

            self.logger.debug(f"Wrote thumbnail {output_path}")
            return output_path

        finally:
            cap.release()

    def _fourcc_to_string(self, fourcc: int) -> str:
        """Convert OpenCV fourcc code to string"""
        chars = [(fourcc >> shift) & 0xFF for shift in (0, 8, 16, 24)]
        return "".join(chr(c) if 32 <= c <= 126 else "?" for c in chars).strip() or "UNKNOWN"
