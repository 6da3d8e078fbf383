"""
Data models for the Video Stream Service API.

Service-level responses; video payloads live in video.presentation.schemas.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Generic success response"""

    success: bool = True
    message: str
    data: Optional[Dict[str, Any]] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class StorageStatsResponse(BaseModel):
    """Catalog and disk usage statistics"""

    base_path: str
    total_files: int
    total_size_bytes: int
    total_duration_seconds: float
    disk_usage: Dict[str, Any]
