"""
FastAPI Server for the Video Stream Service.

Builds the application (CORS, error handlers, service routes, video routes,
static thumbnails) and runs it with uvicorn in a background thread.
"""

import asyncio
import logging
import threading
from typing import Any, Dict, Optional
from datetime import datetime

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
import uvicorn

from ..core.config import Config
from ..storage.manager import StorageManager
from ..video.domain.errors import RangeError, VideoServiceError
from ..video.integration import VideoModule
from .models import HealthResponse, StorageStatsResponse, SuccessResponse


class APIServer:
    """FastAPI server for the Video Stream Service"""

    def __init__(self, config: Config, storage_manager: StorageManager, video_module: VideoModule):
        self.config = config
        self.storage_manager = storage_manager
        self.video_module = video_module
        self.logger = logging.getLogger(__name__)

        self.app = FastAPI(title="Video Stream Service API", description="Upload, catalog and range-stream video files", version="1.0.0")

        # Server state
        self.server_start_time = datetime.now()
        self.running = False
        self._server_thread: Optional[threading.Thread] = None

        # Range requests need Range in and Content-Range/Accept-Ranges out across origins
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=self.config.system.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", "Range"],
            expose_headers=["Content-Range", "Accept-Ranges", "Content-Length"],
        )

        self._setup_error_handlers()
        self._setup_routes()

        self.app.include_router(self.video_module.get_api_routes())
        self.app.mount("/thumbnails", StaticFiles(directory=str(self.config.storage.thumbnails_path)), name="thumbnails")

    def _setup_error_handlers(self):
        """Render domain errors as structured responses"""

        @self.app.exception_handler(VideoServiceError)
        async def video_service_error_handler(request: Request, exc: VideoServiceError):
            if isinstance(exc, RangeError):
                return self.video_module.responder.range_not_satisfiable(exc)

            if exc.status_code >= 500:
                self.logger.error(f"{exc.kind} on {request.url.path}: {exc.message}")
            else:
                self.logger.info(f"{exc.kind} on {request.url.path}: {exc.message}")

            return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    def _setup_routes(self):
        """Setup service-level API routes"""

        @self.app.get("/", response_model=SuccessResponse)
        async def root():
            return SuccessResponse(message="Video Stream Service API")

        @self.app.get("/health", response_model=HealthResponse)
        async def health_check():
            return HealthResponse(status="healthy", timestamp=datetime.now().isoformat())

        @self.app.get("/storage/stats", response_model=StorageStatsResponse)
        async def get_storage_stats():
            """Get catalog and disk usage statistics"""
            stats = await asyncio.get_event_loop().run_in_executor(None, self.storage_manager.get_storage_statistics)
            if not stats:
                raise HTTPException(status_code=500, detail="Could not read storage statistics")
            return StorageStatsResponse(**stats)

        @self.app.get("/system/status", response_model=SuccessResponse)
        async def get_system_status():
            return SuccessResponse(message="Video Stream Service status", data={"server": self.get_server_info(), "video_module": self.video_module.get_module_status()})

    def start(self) -> bool:
        """Start the API server"""
        if self.running:
            self.logger.warning("API server is already running")
            return True

        if not self.config.system.enable_api:
            self.logger.info("API server disabled in configuration")
            return False

        try:
            self.logger.info(f"Starting API server on {self.config.system.api_host}:{self.config.system.api_port}")
            self.running = True

            self._server_thread = threading.Thread(target=self._run_server, daemon=True)
            self._server_thread.start()

            return True

        except Exception as e:
            self.logger.error(f"Error starting API server: {e}")
            self.running = False
            return False

    def stop(self) -> None:
        """Stop the API server"""
        if not self.running:
            return

        self.logger.info("Stopping API server...")
        self.running = False
        self.logger.info("API server stopped")

    def _run_server(self) -> None:
        """Run the uvicorn server"""
        try:
            uvicorn.run(self.app, host=self.config.system.api_host, port=self.config.system.api_port, log_level=self.config.system.log_level.lower())
        except Exception as e:
            self.logger.error(f"Error running API server: {e}")
        finally:
            self.running = False

    def is_running(self) -> bool:
        return self.running

    def get_server_info(self) -> Dict[str, Any]:
        """Get server information"""
        return {"running": self.running, "host": self.config.system.api_host, "port": self.config.system.api_port, "start_time": self.server_start_time.isoformat(), "uptime_seconds": (datetime.now() - self.server_start_time).total_seconds()}
