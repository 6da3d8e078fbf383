"""
Video API Routes.

FastAPI route definitions for video upload, catalog and streaming.
"""

from typing import Optional

from fastapi import APIRouter, File, Query, Request, UploadFile

from .controllers import VideoController, StreamingController
from .schemas import (
    DeleteResponse, ErrorResponse, StreamingInfoResponse,
    UploadResponse, VideoListResponse, VideoSummaryResponse
)

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Record or backing file not found"}}


def create_video_routes(
    video_controller: VideoController,
    streaming_controller: StreamingController,
    prefix: str = ""
) -> APIRouter:
    """Create video API routes with dependency injection"""

    router = APIRouter(prefix=prefix, tags=["videos"])

    @router.post("/upload", response_model=UploadResponse, status_code=201, responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 415: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
    async def upload_video(video: Optional[UploadFile] = File(None, description="Video file")):
        """
        Upload a video.

        The file is stored, its duration and resolution are extracted, a
        thumbnail is generated and a catalog record is created.
        """
        return await video_controller.upload_video(video)

    @router.get("/videos", response_model=VideoListResponse)
    async def list_videos(limit: Optional[int] = Query(None, ge=1, description="Maximum number of results")):
        """List uploaded videos, newest first."""
        return await video_controller.list_videos(limit)

    @router.get("/video/{file_id}", response_model=VideoSummaryResponse, responses=NOT_FOUND)
    async def get_video_info(file_id: str):
        """Get the catalog entry of a video."""
        return await video_controller.get_video_info(file_id)

    @router.get("/video/{file_id}/stream", responses={**NOT_FOUND, 206: {"description": "Partial content"}, 416: {"description": "Range not satisfiable"}})
    async def stream_video(file_id: str, request: Request):
        """
        Stream video with HTTP range request support.

        - **No Range header**: 200 with the whole file
        - **Range: bytes=start-end**: 206 with exactly that span
        - **Unsatisfiable range**: 416 with `Content-Range: bytes */size`

        Usage in HTML5:
        ```html
        <video controls>
            <source src="/video/{file_id}/stream" type="video/mp4">
        </video>
        ```
        """
        return await streaming_controller.stream_video(file_id, request)

    @router.get("/video/{file_id}/info", response_model=StreamingInfoResponse, responses=NOT_FOUND)
    async def get_streaming_info(file_id: str):
        """Get size, content type and chunk size used for streaming."""
        return await streaming_controller.get_streaming_info(file_id)

    @router.get("/video/{file_id}/thumbnail", responses={404: {"model": ErrorResponse}})
    async def get_video_thumbnail(file_id: str):
        """Return the JPEG thumbnail generated at upload time."""
        return await video_controller.get_video_thumbnail(file_id)

    @router.delete("/video/{file_id}", response_model=DeleteResponse, responses=NOT_FOUND)
    async def delete_video(file_id: str):
        """
        Delete a video.

        Removing the video and thumbnail files is best-effort; the catalog
        record is removed even if a file cannot be deleted.
        """
        return await video_controller.delete_video(file_id)

    return router
