"""
File system access to stored video bytes.
"""

import logging
import os
from pathlib import Path

import aiofiles

from ..domain.interfaces import VideoStorage


class FileSystemVideoStorage(VideoStorage):
    """Reads video files from local disk with aiofiles"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def file_exists(self, path: Path) -> bool:
        return os.path.isfile(path)

    def file_size(self, path: Path) -> int:
        return os.stat(path).st_size

    async def open_for_read(self, path: Path, start: int = 0):
        """Open path for binary reading, positioned at start"""
        handle = await aiofiles.open(path, "rb")
        try:
            if start:
                await handle.seek(start)
        except OSError:
            await handle.close()
            raise
        return handle
