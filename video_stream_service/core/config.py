"""
Configuration management for the Video Stream Service.

This module handles all configuration settings including storage paths,
upload limits, streaming behaviour, thumbnail generation and API parameters.
"""

import json
import logging
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, asdict, field
from pathlib import Path


DEFAULT_ALLOWED_MIME_TYPES = ["video/mp4", "video/mpeg", "video/quicktime", "video/x-msvideo", "video/webm"]


@dataclass
class StorageConfig:
    """Storage configuration"""

    base_path: str = "uploads"
    thumbnails_dir: str = "thumbnails"  # Relative to base_path
    index_filename: str = "catalog.json"
    max_upload_size_mb: int = 500
    allowed_mime_types: List[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_MIME_TYPES))

    @property
    def thumbnails_path(self) -> Path:
        return Path(self.base_path) / self.thumbnails_dir

    @property
    def index_path(self) -> Path:
        return Path(self.base_path) / self.index_filename

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


@dataclass
class StreamingConfig:
    """Streaming configuration"""

    chunk_size_bytes: int = 0  # 0 = adaptive chunk size based on file size
    idle_read_timeout_seconds: Optional[float] = None  # None disables the idle-read timeout


@dataclass
class ThumbnailConfig:
    """Thumbnail generation settings"""

    width: int = 320
    height: int = 180
    position_ratio: float = 0.1  # Fraction of the video duration to grab the frame from


@dataclass
class SystemConfig:
    """System-wide configuration"""

    log_level: str = "INFO"
    log_file: Optional[str] = "video_stream_service.log"
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    api_prefix: str = ""
    enable_api: bool = True
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


class Config:
    """Main configuration manager"""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = config_file or "config.json"
        self.logger = logging.getLogger(__name__)

        # Default configurations
        self.storage = StorageConfig()
        self.streaming = StreamingConfig()
        self.thumbnail = ThumbnailConfig()
        self.system = SystemConfig()

        # Load configuration
        self.load_config()

        # Ensure storage directories exist
        self._ensure_storage_directories()

    def load_config(self) -> None:
        """Load configuration from file"""
        config_path = Path(self.config_file)

        if config_path.exists():
            try:
                with open(config_path, "r") as f:
                    config_data = json.load(f)

                if "storage" in config_data:
                    self.storage = StorageConfig(**config_data["storage"])

                if "streaming" in config_data:
                    self.streaming = StreamingConfig(**config_data["streaming"])

                if "thumbnail" in config_data:
                    self.thumbnail = ThumbnailConfig(**config_data["thumbnail"])

                if "system" in config_data:
                    self.system = SystemConfig(**config_data["system"])

                self.logger.info(f"Configuration loaded from {config_path}")

            except Exception as e:
                self.logger.error(f"Error loading config from {config_path}: {e}")
        else:
            self.logger.info(f"Config file {config_path} not found, using defaults")
            self.save_config()  # Save default config

    def save_config(self) -> None:
        """Save current configuration to file"""
        try:
            with open(self.config_file, "w") as f:
                json.dump(self.to_dict(), f, indent=2)
            self.logger.info(f"Configuration saved to {self.config_file}")
        except Exception as e:
            self.logger.error(f"Error saving config to {self.config_file}: {e}")

    def _ensure_storage_directories(self) -> None:
        """Ensure upload and thumbnail directories exist"""
        try:
            Path(self.storage.base_path).mkdir(parents=True, exist_ok=True)
            self.storage.thumbnails_path.mkdir(parents=True, exist_ok=True)
            self.logger.info("Storage directories verified/created")
        except Exception as e:
            self.logger.error(f"Error creating storage directories: {e}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {"storage": asdict(self.storage), "streaming": asdict(self.streaming), "thumbnail": asdict(self.thumbnail), "system": asdict(self.system)}
