"""
Video Stream Service - API Module

FastAPI application, service-level routes and error rendering.
"""

from .server import APIServer

__all__ = ["APIServer"]
