"""Tests for InflateReader and PayloadReader."""

import io
import zlib

import pytest

from objstore.errors import CorruptObjectError, SizeMismatchError
from objstore.objects import PayloadReader
from objstore.objects._inflate import InflateReader

OID = "ab" * 20


def _inflate(data: bytes, *, chunk_size: int = 16) -> InflateReader:
    return InflateReader(io.BytesIO(zlib.compress(data)), oid=OID, chunk_size=chunk_size)


def test_inflate_reads_whole_stream() -> None:
    data = bytes(range(256)) * 40
    reader = _inflate(data)
    out = b""
    while chunk := reader.read(100):
        assert len(chunk) <= 100
        out += chunk
    assert out == data
    assert reader.eof is True


def test_inflate_zero_size_read() -> None:
    assert _inflate(b"data").read(0) == b""


def test_inflate_bounds_output_per_call() -> None:
    reader = _inflate(b"\x00" * 1_000_000, chunk_size=1024)
    assert len(reader.read(10)) == 10


def test_inflate_rejects_garbage() -> None:
    reader = InflateReader(io.BytesIO(b"not zlib at all"), oid=OID, chunk_size=16)
    with pytest.raises(CorruptObjectError) as excinfo:
        reader.read(10)
    assert excinfo.value.oid == OID


def test_inflate_detects_truncation() -> None:
    compressed = zlib.compress(b"x" * 100 + bytes(range(256)) * 8)
    reader = InflateReader(io.BytesIO(compressed[: len(compressed) // 2]), oid=OID, chunk_size=16)
    with pytest.raises(CorruptObjectError, match="truncated"):
        while reader.read(64):
            pass


def test_payload_reads_exactly_declared_size() -> None:
    payload = PayloadReader(_inflate(b"hello world"), oid=OID, size=11)
    assert payload.read() == b"hello world"
    assert payload.bytes_read == 11
    assert payload.remaining == 0
    assert payload.read() == b""


def test_payload_caps_longer_stream() -> None:
    payload = PayloadReader(_inflate(b"hello world"), oid=OID, size=5)
    assert payload.read() == b"hello"
    assert payload.read(10) == b""


def test_payload_uses_prefix_before_stream() -> None:
    payload = PayloadReader(_inflate(b"world"), oid=OID, size=8, prefix=b"hi ")
    assert payload.read(2) == b"hi"
    assert payload.read() == b" world"


def test_payload_prefix_is_capped_too() -> None:
    payload = PayloadReader(_inflate(b""), oid=OID, size=2, prefix=b"abcdef")
    assert payload.read() == b"ab"


def test_payload_short_stream_raises_size_mismatch() -> None:
    payload = PayloadReader(_inflate(b"hello"), oid=OID, size=10)
    with pytest.raises(SizeMismatchError) as excinfo:
        payload.read()
    assert excinfo.value.expected == 10
    assert excinfo.value.actual == 5


def test_payload_empty() -> None:
    payload = PayloadReader(_inflate(b""), oid=OID, size=0)
    assert payload.read() == b""


def test_payload_close_closes_handle() -> None:
    handle = io.BytesIO(zlib.compress(b"data"))
    payload = PayloadReader(InflateReader(handle, oid=OID, chunk_size=16), oid=OID, size=4, handle=handle)
    payload.close()
    assert payload.closed
    assert handle.closed
    with pytest.raises(ValueError):
        payload.read(1)


def test_payload_is_readable_stream() -> None:
    payload = PayloadReader(_inflate(b"line one\nline two\n"), oid=OID, size=18)
    assert payload.readable() is True
    assert io.BufferedReader(payload).readlines() == [b"line one\n", b"line two\n"]
