"""
Video API Request/Response Schemas.

Pydantic models for API serialization and validation.
"""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class VideoSummaryResponse(BaseModel):
    """Catalog entry as returned to clients"""
    id: str = Field(..., description="Unique video identifier")
    filename: str = Field(..., description="Original filename")
    size: int = Field(..., description="File size in bytes")
    duration: Optional[int] = Field(None, description="Duration in whole seconds")
    resolution: Optional[str] = Field(None, description="Resolution as WIDTHxHEIGHT")
    mime_type: str = Field(..., description="MIME type the video is served with")
    created_at: datetime = Field(..., description="Upload timestamp")
    thumbnail_url: str = Field(..., description="Thumbnail URL")
    stream_url: str = Field(..., description="Range-capable stream URL")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "id": "3f2b8c0e5d7a4f1e9b6c2a8d4e0f1a2b",
            "filename": "holiday.mp4",
            "size": 52428800,
            "duration": 120,
            "resolution": "1920x1080",
            "mime_type": "video/mp4",
            "created_at": "2025-08-04T14:30:22",
            "thumbnail_url": "/video/3f2b8c0e5d7a4f1e9b6c2a8d4e0f1a2b/thumbnail",
            "stream_url": "/video/3f2b8c0e5d7a4f1e9b6c2a8d4e0f1a2b/stream"
        }
    })


class UploadResponse(BaseModel):
    """Upload result"""
    message: str = Field(..., description="Human readable result")
    video: VideoSummaryResponse


class VideoListResponse(BaseModel):
    """Video list response"""
    videos: List[VideoSummaryResponse] = Field(..., description="Videos, newest first")
    total_count: int = Field(..., description="Number of videos returned")


class StreamingInfoResponse(BaseModel):
    """Streaming information response"""
    file_id: str = Field(..., description="Video file ID")
    file_size_bytes: int = Field(..., description="Total file size")
    content_type: str = Field(..., description="MIME content type")
    supports_range_requests: bool = Field(..., description="Whether range requests are supported")
    chunk_size_bytes: int = Field(..., description="Chunk size used when streaming")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "file_id": "3f2b8c0e5d7a4f1e9b6c2a8d4e0f1a2b",
            "file_size_bytes": 52428800,
            "content_type": "video/mp4",
            "supports_range_requests": True,
            "chunk_size_bytes": 524288
        }
    })


class DeleteResponse(BaseModel):
    message: str
    file_id: str


class ErrorResponse(BaseModel):
    """Structured error body for every pre-stream failure"""
    error: str = Field(..., description="Machine readable error kind")
    detail: str = Field(..., description="Human readable message")
