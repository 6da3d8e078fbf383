"""
Video HTTP Controllers.

Handle HTTP requests and responses for video operations. Controllers raise
domain errors; the API server turns them into structured error responses.
"""

import logging
from typing import Optional

from fastapi import Request, UploadFile
from fastapi.responses import FileResponse, Response

from ..application.video_service import VideoService
from ..application.streaming_service import StreamingService
from ..domain.errors import InvalidUploadError
from ..domain.models import VideoRecord
from .responder import RangeResponder
from .schemas import DeleteResponse, StreamingInfoResponse, UploadResponse, VideoListResponse, VideoSummaryResponse


class VideoController:
    """Controller for video management operations"""

    def __init__(self, video_service: VideoService, url_prefix: str = ""):
        self.video_service = video_service
        self.url_prefix = url_prefix
        self.logger = logging.getLogger(__name__)

    async def upload_video(self, video: Optional[UploadFile]) -> UploadResponse:
        """Store an uploaded video and return its catalog entry"""
        if video is None or not video.filename:
            raise InvalidUploadError("No video provided")

        try:
            record = await self.video_service.upload_video(video.filename, video.content_type, video)
        finally:
            await video.close()

        return UploadResponse(message="Video uploaded successfully", video=self._convert_to_response(record))

    async def list_videos(self, limit: Optional[int] = None) -> VideoListResponse:
        videos = await self.video_service.list_videos(limit=limit)
        video_responses = [self._convert_to_response(video) for video in videos]
        return VideoListResponse(videos=video_responses, total_count=len(video_responses))

    async def get_video_info(self, file_id: str) -> VideoSummaryResponse:
        record = await self.video_service.get_video(file_id)
        return self._convert_to_response(record)

    async def get_video_thumbnail(self, file_id: str) -> Response:
        thumbnail_path = await self.video_service.get_thumbnail_path(file_id)
        return FileResponse(thumbnail_path, media_type="image/jpeg", headers={"Cache-Control": "public, max-age=3600"})

    async def delete_video(self, file_id: str) -> DeleteResponse:
        await self.video_service.delete_video(file_id)
        return DeleteResponse(message="Video deleted successfully", file_id=file_id)

    def _convert_to_response(self, record: VideoRecord) -> VideoSummaryResponse:
        """Convert domain model to response model"""
        return VideoSummaryResponse(
            id=record.file_id,
            filename=record.original_name,
            size=record.file_size_bytes,
            duration=record.duration_seconds,
            resolution=record.resolution,
            mime_type=record.mime_type,
            created_at=record.created_at,
            thumbnail_url=f"{self.url_prefix}{record.thumbnail_url}",
            stream_url=f"{self.url_prefix}{record.stream_url}",
        )


class StreamingController:
    """Controller for video streaming operations"""

    def __init__(self, streaming_service: StreamingService, responder: RangeResponder):
        self.streaming_service = streaming_service
        self.responder = responder
        self.logger = logging.getLogger(__name__)

    async def get_streaming_info(self, file_id: str) -> StreamingInfoResponse:
        target = await self.streaming_service.resolve_target(file_id)

        return StreamingInfoResponse(
            file_id=file_id,
            file_size_bytes=target.total_size,
            content_type=target.content_type,
            supports_range_requests=True,
            chunk_size_bytes=self.streaming_service.get_optimal_chunk_size(target.total_size),
        )

    async def stream_video(self, file_id: str, request: Request) -> Response:
        """Stream video with range request support"""
        target = await self.streaming_service.resolve_target(file_id)
        spec = self.streaming_service.parse_range(request.headers.get("range"), target)

        # Open before building the response so open failures still get an error status
        handle = await self.streaming_service.open_stream(file_id, target, spec)

        chunk_size = self.streaming_service.get_optimal_chunk_size(target.total_size)
        return self.responder.respond(target, spec, handle, chunk_size=chunk_size)
