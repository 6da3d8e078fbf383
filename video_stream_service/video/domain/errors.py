"""
Video Domain Errors.

Every error the video module can report carries a machine-readable kind.
VideoServiceError subclasses also carry the HTTP status they map to.
StreamInterruptedError has none: by the time it is raised the response headers
are already on the wire.
"""

from typing import Optional


class VideoServiceError(Exception):
    """Base class for video service errors"""

    kind = "InternalError"
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


class RecordNotFoundError(VideoServiceError):
    kind = "RecordNotFound"
    status_code = 404

    def __init__(self, file_id: str):
        super().__init__(f"Video {file_id} not found")
        self.file_id = file_id


class FileMissingError(VideoServiceError):
    kind = "FileMissing"
    status_code = 404

    def __init__(self, file_id: str, path: str):
        super().__init__(f"Video file missing for {file_id}")
        self.file_id = file_id
        self.path = path


class RangeError(VideoServiceError):
    """A Range header that cannot be served; answered with 416"""

    status_code = 416

    def __init__(self, message: str, total_size: int):
        super().__init__(message)
        self.total_size = total_size

    @property
    def content_range(self) -> str:
        return f"bytes */{self.total_size}"


class MalformedRangeError(RangeError):
    kind = "MalformedRange"


class UnsatisfiableRangeError(RangeError):
    kind = "UnsatisfiableRange"


class PreStreamIOError(VideoServiceError):
    kind = "IOErrorPreStream"
    status_code = 500


class StreamInterruptedError(Exception):
    """
    I/O failure after the response started; the connection is abandoned.

    Not a VideoServiceError: it must reach the server unhandled, because no
    error response can be sent once headers are out.
    """

    kind = "IOErrorMidStream"

    def __init__(self, message: str, bytes_sent: int = 0):
        super().__init__(message)
        self.message = message
        self.bytes_sent = bytes_sent


class InvalidUploadError(VideoServiceError):
    kind = "InvalidUpload"
    status_code = 400


class MetadataExtractionError(VideoServiceError):
    kind = "UploadFailed"
    status_code = 500


class ThumbnailNotFoundError(VideoServiceError):
    kind = "ThumbnailNotFound"
    status_code = 404

    def __init__(self, file_id: str):
        super().__init__(f"Thumbnail not found for {file_id}")
        self.file_id = file_id
