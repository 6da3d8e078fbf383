"""
Tests for Range header parsing.
"""

import pytest

from video_stream_service.video.domain.errors import MalformedRangeError, UnsatisfiableRangeError
from video_stream_service.video.domain.models import ByteRange, RangeSpec
from video_stream_service.video.domain.ranges import parse_range_header


def test_absent_header_serves_full_file():
    for total_size in (1, 1000, 10**9):
        assert parse_range_header(None, total_size).is_full


def test_other_unit_is_ignored():
    assert parse_range_header("items=0-5", 1000) == RangeSpec.full()
    assert parse_range_header("0-5", 1000).is_full


def test_explicit_range():
    spec = parse_range_header("bytes=0-1023", 2000)
    assert spec.byte_range == ByteRange(0, 1023)
    assert spec.byte_range.length == 1024


def test_single_byte_range():
    assert parse_range_header("bytes=999-999", 1000).byte_range == ByteRange(999, 999)


def test_open_ended_range():
    assert parse_range_header("bytes=500-", 1000).byte_range == ByteRange(500, 999)


def test_suffix_range():
    assert parse_range_header("bytes=-100", 1000).byte_range == ByteRange(900, 999)


def test_suffix_longer_than_file_is_clamped_to_start():
    assert parse_range_header("bytes=-5000", 1000).byte_range == ByteRange(0, 999)


def test_end_past_file_is_clamped():
    assert parse_range_header("bytes=900-5000", 1000).byte_range == ByteRange(900, 999)


def test_whitespace_around_offsets():
    assert parse_range_header("bytes= 10 - 20 ", 1000).byte_range == ByteRange(10, 20)


def test_multi_range_falls_back_to_full():
    assert parse_range_header("bytes=0-99,200-299", 1000).is_full


@pytest.mark.parametrize("header", ["bytes=2000-", "bytes=1000-1200", "bytes=-0"])
def test_unsatisfiable_ranges(header):
    with pytest.raises(UnsatisfiableRangeError) as exc_info:
        parse_range_header(header, 1000)

    assert exc_info.value.status_code == 416
    assert exc_info.value.content_range == "bytes */1000"


def test_any_range_on_empty_file_is_unsatisfiable():
    with pytest.raises(UnsatisfiableRangeError):
        parse_range_header("bytes=0-", 0)


@pytest.mark.parametrize("header", ["bytes=abc-def", "bytes=5", "bytes=-", "bytes=500-100", "bytes=--5", "bytes=1.5-3", "bytes=0x10-20"])
def test_malformed_ranges(header):
    with pytest.raises(MalformedRangeError) as exc_info:
        parse_range_header(header, 1000)

    assert exc_info.value.kind == "MalformedRange"
    assert exc_info.value.content_range == "bytes */1000"


def test_byte_range_invariants():
    with pytest.raises(ValueError):
        ByteRange(-1, 5)
    with pytest.raises(ValueError):
        ByteRange(10, 5)

    assert ByteRange(0, 499).content_range(1000) == "bytes 0-499/1000"
