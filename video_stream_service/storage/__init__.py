"""
Video Stream Service - Storage Module

The catalog index and file organization for uploaded videos and thumbnails.
"""

from .manager import StorageManager

__all__ = ["StorageManager"]
