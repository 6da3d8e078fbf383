"""
Tests for the OpenCV metadata extractor against a small generated clip.
"""

import asyncio

import cv2
import numpy as np
import pytest

from video_stream_service.video.domain.errors import MetadataExtractionError
from video_stream_service.video.infrastructure.metadata_extractors import OpenCVMetadataExtractor

WIDTH, HEIGHT, FPS, FRAMES = 64, 48, 10.0, 25


@pytest.fixture
def clip_path(tmp_path):
    """2.5 seconds of MJPG video, each frame a different shade of gray"""
    path = tmp_path / "clip.avi"
    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), FPS, (WIDTH, HEIGHT))
    assert writer.isOpened()
    for index in range(FRAMES):
        writer.write(np.full((HEIGHT, WIDTH, 3), index * 10, dtype=np.uint8))
    writer.release()
    return path


def test_extract_metadata(clip_path):
    metadata = asyncio.run(OpenCVMetadataExtractor().extract(clip_path))

    assert metadata.resolution == "64x48"
    assert metadata.fps == pytest.approx(FPS)
    assert metadata.duration_seconds == pytest.approx(FRAMES / FPS, abs=0.2)
    assert metadata.codec == "MJPG"


def test_extract_thumbnail(clip_path, tmp_path):
    output_path = tmp_path / "thumbnails" / "clip.jpg"

    result = asyncio.run(OpenCVMetadataExtractor().extract_thumbnail(clip_path, output_path, timestamp_seconds=0.25, size=(320, 180)))

    assert result == output_path
    thumbnail = cv2.imread(str(output_path))
    assert thumbnail.shape == (180, 320, 3)


def test_thumbnail_past_end_still_writes_a_frame(clip_path, tmp_path):
    output_path = tmp_path / "late.jpg"

    asyncio.run(OpenCVMetadataExtractor().extract_thumbnail(clip_path, output_path, timestamp_seconds=60, size=(32, 24)))

    assert cv2.imread(str(output_path)).shape == (24, 32, 3)


def test_non_video_file_is_rejected(tmp_path):
    path = tmp_path / "notes.mp4"
    path.write_bytes(b"this is not a video")

    with pytest.raises(MetadataExtractionError):
        asyncio.run(OpenCVMetadataExtractor().extract(path))
