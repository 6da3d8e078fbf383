"""
Video Infrastructure Layer.

Contains implementations of domain interfaces using external dependencies
like the file system, aiofiles and OpenCV.
"""

from .repositories import CatalogVideoRepository
from .file_storage import FileSystemVideoStorage
from .metadata_extractors import OpenCVMetadataExtractor

__all__ = [
    "CatalogVideoRepository",
    "FileSystemVideoStorage",
    "OpenCVMetadataExtractor",
]
