"""
Video Module Integration.

Composition root for the video module: creates the infrastructure
implementations, application services and controllers, and wires them together.
"""

import logging
from typing import Optional

from ..core.config import Config
from ..storage.manager import StorageManager

# Domain interfaces
from .domain.interfaces import VideoRepository, VideoStorage, MetadataExtractor

# Infrastructure implementations
from .infrastructure.repositories import CatalogVideoRepository
from .infrastructure.file_storage import FileSystemVideoStorage
from .infrastructure.metadata_extractors import OpenCVMetadataExtractor

# Application services
from .application.video_service import VideoService
from .application.streaming_service import StreamingService

# Presentation layer
from .presentation.controllers import VideoController, StreamingController
from .presentation.responder import RangeResponder
from .presentation.routes import create_video_routes


class VideoModule:
    """
    Main video module that provides dependency injection and service composition.

    A metadata extractor can be passed in to replace the OpenCV one, e.g. when
    the extraction tool is not available.
    """

    def __init__(
        self,
        config: Config,
        storage_manager: StorageManager,
        metadata_extractor: Optional[MetadataExtractor] = None
    ):
        self.config = config
        self.storage_manager = storage_manager
        self.logger = logging.getLogger(__name__)

        self._initialize_services(metadata_extractor)

        self.logger.info("Video module initialized successfully")

    def _initialize_services(self, metadata_extractor: Optional[MetadataExtractor]):
        """Initialize all video services with proper dependency injection"""

        # Infrastructure layer
        self.video_repository: VideoRepository = CatalogVideoRepository(self.storage_manager)
        self.video_storage: VideoStorage = FileSystemVideoStorage()
        self.metadata_extractor = metadata_extractor or OpenCVMetadataExtractor()

        # Application layer
        self.video_service = VideoService(
            video_repository=self.video_repository,
            metadata_extractor=self.metadata_extractor,
            storage_config=self.config.storage,
            thumbnail_config=self.config.thumbnail
        )

        self.streaming_service = StreamingService(
            video_repository=self.video_repository,
            video_storage=self.video_storage,
            streaming_config=self.config.streaming
        )

        # Presentation layer
        self.responder = RangeResponder(idle_read_timeout=self.streaming_service.idle_read_timeout)
        self.video_controller = VideoController(self.video_service, url_prefix=self.config.system.api_prefix)
        self.streaming_controller = StreamingController(
            streaming_service=self.streaming_service,
            responder=self.responder
        )

    def get_api_routes(self):
        """Get FastAPI routes for video functionality"""
        return create_video_routes(
            video_controller=self.video_controller,
            streaming_controller=self.streaming_controller,
            prefix=self.config.system.api_prefix
        )

    def get_module_status(self) -> dict:
        """Get status information about the video module"""
        return {
            "video_repository": type(self.video_repository).__name__,
            "video_storage": type(self.video_storage).__name__,
            "metadata_extractor": type(self.metadata_extractor).__name__,
            "chunk_size_bytes": self.config.streaming.chunk_size_bytes or "adaptive",
            "idle_read_timeout_seconds": self.config.streaming.idle_read_timeout_seconds,
            "stream_errors": self.responder.error_tracker.get_error_stats(),
        }


def create_video_module(
    config: Config,
    storage_manager: StorageManager,
    metadata_extractor: Optional[MetadataExtractor] = None
) -> VideoModule:
    """Factory function to create a configured video module."""
    return VideoModule(
        config=config,
        storage_manager=storage_manager,
        metadata_extractor=metadata_extractor
    )
