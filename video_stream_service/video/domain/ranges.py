"""
HTTP Range header parsing.

Only single byte ranges are served. A header that does not use the bytes unit,
or that asks for several ranges at once, is ignored and the whole file is served.
"""

from typing import Optional

from .errors import MalformedRangeError, UnsatisfiableRangeError
from .models import RangeSpec

RANGE_UNIT_PREFIX = "bytes="


def _parse_offset(token: str, header_value: str, total_size: int) -> int:
    if not (token.isascii() and token.isdigit()):
        raise MalformedRangeError(f"Invalid byte offset in range: {header_value!r}", total_size)
    return int(token)


def parse_range_header(header_value: Optional[str], total_size: int) -> RangeSpec:
    """
    Parse a Range header against a file of total_size bytes.

    Returns RangeSpec.full() when the header is absent, uses another unit, or
    names multiple ranges. Raises MalformedRangeError for syntax errors and
    start > end, and UnsatisfiableRangeError when no byte of the file is
    selected. An end beyond the file is clamped to the last byte.
    """
    if header_value is None or not header_value.startswith(RANGE_UNIT_PREFIX):
        return RangeSpec.full()

    range_spec = header_value[len(RANGE_UNIT_PREFIX):]

    if "," in range_spec:
        return RangeSpec.full()

    if "-" not in range_spec:
        raise MalformedRangeError(f"Invalid range specification: {header_value!r}", total_size)

    start_str, end_str = (token.strip() for token in range_spec.split("-", 1))

    if not start_str and not end_str:
        raise MalformedRangeError(f"Invalid range specification: {header_value!r}", total_size)

    if not start_str:
        # Suffix range (e.g. "-500" means the last 500 bytes)
        suffix_length = _parse_offset(end_str, header_value, total_size)
        start = max(0, total_size - suffix_length)
        end = total_size - 1
    else:
        start = _parse_offset(start_str, header_value, total_size)
        if end_str:
            end = _parse_offset(end_str, header_value, total_size)
            if start > end:
                raise MalformedRangeError(f"Range start {start} is after end {end}", total_size)
        else:
            end = total_size - 1

    if start >= total_size:
        raise UnsatisfiableRangeError(f"Range {header_value!r} not satisfiable for {total_size} bytes", total_size)

    return RangeSpec.partial(start, min(end, total_size - 1))
