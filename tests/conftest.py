"""
Shared fixtures: a service instance rooted in a temp directory, with the OpenCV
extractor replaced by a stub so no real video files are needed.
"""

import json
import uuid
from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from video_stream_service.api.server import APIServer
from video_stream_service.core.config import Config
from video_stream_service.storage.manager import StorageManager
from video_stream_service.video.domain.errors import MetadataExtractionError
from video_stream_service.video.domain.interfaces import MetadataExtractor
from video_stream_service.video.domain.models import VideoMetadata
from video_stream_service.video.integration import create_video_module

VIDEO_BYTES = bytes((i * 7) % 256 for i in range(1000))


class StubMetadataExtractor(MetadataExtractor):
    """Returns fixed metadata and writes a fake JPEG"""

    def __init__(self, metadata=None, fail=False):
        self.metadata = metadata or VideoMetadata(duration_seconds=12.7, width=640, height=360, fps=25.0, codec="avc1")
        self.fail = fail
        self.thumbnail_calls = []

    async def extract(self, file_path):
        if self.fail:
            raise MetadataExtractionError(f"Could not open video file: {file_path.name}")
        return self.metadata

    async def extract_thumbnail(self, file_path, output_path, timestamp_seconds=1.0, size=(320, 180)):
        self.thumbnail_calls.append((file_path, output_path, timestamp_seconds, size))
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(b"\xff\xd8fake-jpeg\xff\xd9")
        return output_path


@pytest.fixture
def config(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({
        "storage": {"base_path": str(tmp_path / "uploads"), "max_upload_size_mb": 1},
        "streaming": {"chunk_size_bytes": 128},
        "system": {"log_file": None},
    }))
    return Config(str(config_file))


@pytest.fixture
def storage_manager(config):
    return StorageManager(config)


@pytest.fixture
def extractor():
    return StubMetadataExtractor()


@pytest.fixture
def video_module(config, storage_manager, extractor):
    return create_video_module(config, storage_manager, metadata_extractor=extractor)


@pytest.fixture
def client(config, storage_manager, video_module):
    server = APIServer(config, storage_manager, video_module)
    with TestClient(server.app) as test_client:
        yield test_client


@pytest.fixture
def add_video(config, storage_manager):
    """Store bytes on disk and register a catalog record for them"""

    def _add_video(data: bytes = VIDEO_BYTES, mime_type: str = "video/mp4", created_at: datetime = None) -> str:
        file_id = uuid.uuid4().hex
        path = Path(config.storage.base_path) / f"video-{file_id}.mp4"
        path.write_bytes(data)
        storage_manager.register_file({
            "file_id": file_id,
            "filename": path.name,
            "original_name": "clip.mp4",
            "file_path": str(path),
            "file_size_bytes": len(data),
            "mime_type": mime_type,
            "created_at": (created_at or datetime.now()).isoformat(),
            "duration_seconds": 10,
            "resolution": "640x360",
            "thumbnail_path": None,
        })
        return file_id

    return _add_video
