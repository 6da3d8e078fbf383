"""
Tests for configuration loading and logging helpers.
"""

import json
import logging

from video_stream_service.core.config import Config, DEFAULT_ALLOWED_MIME_TYPES
from video_stream_service.core.logging_config import ColoredFormatter, get_error_tracker


def test_missing_config_file_is_written_with_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config_file = tmp_path / "config.json"

    config = Config(str(config_file))

    assert config_file.exists()
    saved = json.loads(config_file.read_text())
    assert saved["system"]["api_port"] == 3000
    assert saved["storage"]["max_upload_size_mb"] == 500
    assert config.storage.allowed_mime_types == DEFAULT_ALLOWED_MIME_TYPES
    assert config.thumbnail.position_ratio == 0.1
    assert (tmp_path / "uploads" / "thumbnails").is_dir()


def test_sections_are_loaded_from_file(config, tmp_path):
    assert config.storage.base_path == str(tmp_path / "uploads")
    assert config.storage.max_upload_size_bytes == 1024 * 1024
    assert config.storage.index_path == tmp_path / "uploads" / "catalog.json"
    assert config.streaming.chunk_size_bytes == 128
    assert config.streaming.idle_read_timeout_seconds is None
    assert config.system.log_file is None


def test_colored_formatter_leaves_record_untouched():
    record = logging.LogRecord("test", logging.WARNING, __file__, 1, "careful", None, None)

    output = ColoredFormatter("%(levelname)s %(message)s").format(record)

    assert "\033[33mWARNING" in output
    assert record.levelname == "WARNING"


def test_error_tracker_counts_errors(caplog):
    tracker = get_error_tracker("streaming")

    with caplog.at_level(logging.ERROR, logger="errors.streaming"):
        tracker.log_error(OSError("disk gone"), context="mid_stream", exc_info=False)

    stats = tracker.get_error_stats()
    assert stats["error_count"] == 1
    assert stats["last_error_time"] is not None
    assert "Error in streaming (mid_stream): disk gone" in caplog.text
