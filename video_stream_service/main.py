"""
Main Application Coordinator for the Video Stream Service.

This module wires configuration, logging, the catalog, the video module and the
API server together and provides graceful startup/shutdown.
"""

import signal
import time
import logging
import sys
from typing import Optional
from datetime import datetime

from .core.config import Config
from .core.logging_config import setup_logging, get_error_tracker, get_performance_logger
from .storage.manager import StorageManager
from .video.integration import create_video_module
from .api.server import APIServer


class VideoStreamSystem:
    """Main application coordinator for the Video Stream Service"""

    def __init__(self, config_file: Optional[str] = None, log_level: Optional[str] = None):
        # Load configuration first (basic logging will be used initially)
        self.config = Config(config_file)
        if log_level:
            self.config.system.log_level = log_level

        self.logger_setup = setup_logging(log_level=self.config.system.log_level, log_file=self.config.system.log_file)
        self.logger = logging.getLogger(__name__)

        self.error_tracker = get_error_tracker("main_system")
        self.performance_logger = get_performance_logger("main_system")

        self.storage_manager = StorageManager(self.config)
        self.video_module = create_video_module(self.config, self.storage_manager)
        self.api_server = APIServer(self.config, self.storage_manager, self.video_module)

        self.running = False
        self.start_time: Optional[datetime] = None

        self._setup_signal_handlers()

        self.logger.info("Video Stream Service initialized")

    def _setup_signal_handlers(self) -> None:
        """Setup signal handlers for graceful shutdown"""

        def signal_handler(signum, frame):
            self.logger.info(f"Received signal {signum}, initiating graceful shutdown...")
            self.stop()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def start(self) -> bool:
        """Start the service"""
        if self.running:
            self.logger.warning("System is already running")
            return True

        self.logger.info("Starting Video Stream Service...")
        self.performance_logger.start_timer("system_startup")
        self.start_time = datetime.now()

        try:
            integrity_report = self.storage_manager.verify_storage_integrity()
            if integrity_report.get("missing_files"):
                self.error_tracker.log_warning(f"{len(integrity_report['missing_files'])} catalog record(s) have no backing file", "storage_integrity")
            if integrity_report.get("orphaned_files"):
                self.error_tracker.log_warning(f"{len(integrity_report['orphaned_files'])} stored file(s) are not in the catalog", "storage_integrity")
        except Exception as e:
            self.error_tracker.log_error(e, "storage_integrity")

        try:
            if not self.api_server.start():
                self.error_tracker.log_error(Exception("API server failed to start"), "api_startup")
                return False
        except Exception as e:
            self.error_tracker.log_error(e, "api_startup")
            return False

        self.running = True

        startup_time = self.performance_logger.end_timer("system_startup")
        self.logger.info(f"Video Stream Service started successfully in {startup_time:.2f}s")
        return True

    def stop(self) -> None:
        """Stop the service gracefully"""
        if not self.running:
            return

        self.logger.info("Stopping Video Stream Service...")
        self.running = False

        try:
            self.api_server.stop()

            if self.start_time:
                uptime = (datetime.now() - self.start_time).total_seconds()
                self.logger.info(f"System uptime: {uptime:.1f} seconds")

            self.logger.info("Video Stream Service stopped")

        except Exception as e:
            self.logger.error(f"Error during system shutdown: {e}")

    def run(self) -> None:
        """Run the service (blocking call)"""
        if not self.start():
            self.logger.error("Failed to start system")
            return

        try:
            self.logger.info("System running... Press Ctrl+C to stop")

            while self.running and self.api_server.is_running():
                time.sleep(1)

        except KeyboardInterrupt:
            self.logger.info("Keyboard interrupt received")
        finally:
            self.stop()


def main():
    """Main entry point for the application"""
    import argparse

    parser = argparse.ArgumentParser(description="Video Stream Service")
    parser.add_argument("--config", type=str, help="Path to configuration file", default="config.json")
    parser.add_argument("--log-level", type=str, choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Override log level", default=None)

    args = parser.parse_args()

    system = VideoStreamSystem(args.config, log_level=args.log_level)

    try:
        system.run()
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
