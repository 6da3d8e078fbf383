#!/usr/bin/env python3
"""
Main entry point for the Video Stream Service.

Starts the HTTP API for uploading, cataloging and range-streaming videos.
"""

import sys
import os

# Add the current directory to Python path to import our modules
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from video_stream_service.main import main

if __name__ == "__main__":
    main()
