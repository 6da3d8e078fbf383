"""
Range Responder.

Turns a resolved stream target and range spec into a 200, 206 or 416 response.
The file handle is opened by the caller before respond() is called, so an
unreadable file is still answered with a proper error status. Once the body
starts, headers are on the wire: read failures only abort the stream.
"""

import asyncio
import logging
from typing import AsyncIterator, Optional

from fastapi.responses import Response, StreamingResponse

from ...core.logging_config import get_error_tracker
from ..domain.errors import RangeError, StreamInterruptedError
from ..domain.models import RangeSpec, StreamTarget

DEFAULT_CHUNK_SIZE = 64 * 1024


class RangeStreamingResponse(StreamingResponse):
    """StreamingResponse that owns an open file handle and closes it however the response ends"""

    def __init__(self, content, handle=None, **kwargs):
        super().__init__(content, **kwargs)
        self.handle = handle

    async def __call__(self, scope, receive, send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            await self.body_iterator.aclose()
            # The body may never have started (client gone before the status line)
            if self.handle is not None:
                await self.handle.close()


class RangeResponder:
    """Builds range-aware HTTP responses for stored videos"""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE, idle_read_timeout: Optional[float] = None):
        self.chunk_size = chunk_size
        self.idle_read_timeout = idle_read_timeout
        self.logger = logging.getLogger(__name__)
        self.error_tracker = get_error_tracker("streaming")

    def respond(self, target: StreamTarget, spec: RangeSpec, handle, chunk_size: Optional[int] = None) -> Response:
        """
        Build the response for target. handle must already be positioned at
        the first byte to send; the response owns it from here on.
        """
        headers = {"Accept-Ranges": "bytes"}

        if spec.is_full:
            status_code = 200
            length = target.total_size
        else:
            byte_range = spec.byte_range
            status_code = 206
            length = byte_range.length
            headers["Content-Range"] = byte_range.content_range(target.total_size)

        headers["Content-Length"] = str(length)

        self.logger.debug(f"Streaming {target.path.name}: status {status_code}, {length} of {target.total_size} bytes")

        body = self._iter_file(handle, target, length, chunk_size or self.chunk_size)
        return RangeStreamingResponse(body, handle=handle, status_code=status_code, headers=headers, media_type=target.content_type)

    def range_not_satisfiable(self, error: RangeError) -> Response:
        """416 with the total size, so the client can retry with a valid range"""
        self.logger.info(f"Rejected range ({error.kind}): {error.message}")
        return Response(status_code=416, headers={"Content-Range": error.content_range})

    async def _iter_file(self, handle, target: StreamTarget, length: int, chunk_size: int) -> AsyncIterator[bytes]:
        remaining = length
        sent = 0
        while remaining > 0:
            read = handle.read(min(chunk_size, remaining))
            try:
                if self.idle_read_timeout:
                    chunk = await asyncio.wait_for(read, self.idle_read_timeout)
                else:
                    chunk = await read
            except asyncio.TimeoutError:
                raise self._interrupted(target, sent, f"no data within {self.idle_read_timeout}s")
            except OSError as e:
                raise self._interrupted(target, sent, str(e)) from e

            if not chunk:
                raise self._interrupted(target, sent, f"file ended {remaining} bytes early")

            remaining -= len(chunk)
            sent += len(chunk)
            yield chunk

    def _interrupted(self, target: StreamTarget, sent: int, reason: str) -> StreamInterruptedError:
        """Log a mid-stream failure; the caller raises the result to abort the connection"""
        error = StreamInterruptedError(f"Stream of {target.path.name} aborted after {sent} bytes: {reason}", bytes_sent=sent)
        self.error_tracker.log_error(error, context="mid_stream", exc_info=False)
        return error
