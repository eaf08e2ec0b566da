"""Tests for the digest and compression consumers."""

import hashlib
import io
import zlib

import pytest

from objstore.errors import SinkWriteError
from objstore.objects import ByteConsumer, DeflateConsumer, DigestConsumer, NullSink, tee


class _RecordingConsumer:
    def __init__(self) -> None:
        self.chunks: list[bytes] = []
        self.finished = 0

    def update(self, data: bytes) -> None:
        self.chunks.append(data)

    def finish(self) -> None:
        self.finished += 1


class _FailingSink:
    name = "failing-sink"

    def write(self, data: bytes) -> int:
        msg = "No space left on device"
        raise OSError(msg)

    def flush(self) -> None:
        return None


def test_digest_matches_hashlib() -> None:
    digest = DigestConsumer()
    digest.update(b"blob 11\x00")
    digest.update(b"hello world")
    assert digest.hexdigest() == hashlib.sha1(b"blob 11\x00hello world").hexdigest()
    assert digest.byte_count == 19


def test_deflate_output_decompresses() -> None:
    sink = io.BytesIO()
    deflate = DeflateConsumer(sink)
    deflate.update(b"abc" * 1000)
    deflate.finish()
    assert zlib.decompress(sink.getvalue()) == b"abc" * 1000


def test_deflate_finish_is_idempotent() -> None:
    sink = io.BytesIO()
    deflate = DeflateConsumer(sink)
    deflate.update(b"data")
    deflate.finish()
    size = len(sink.getvalue())
    deflate.finish()
    assert len(sink.getvalue()) == size


def test_deflate_rejects_updates_after_finish() -> None:
    deflate = DeflateConsumer(io.BytesIO())
    deflate.finish()
    with pytest.raises(ValueError):
        deflate.update(b"late")


def test_deflate_wraps_sink_failures() -> None:
    deflate = DeflateConsumer(_FailingSink(), level=0)
    with pytest.raises(SinkWriteError) as excinfo:
        deflate.update(b"x" * 100_000)
        deflate.finish()
    assert excinfo.value.target == "failing-sink"


def test_null_sink_discards() -> None:
    sink = NullSink()
    assert sink.write(b"12345") == 5
    sink.flush()


def test_tee_feeds_every_consumer_in_order() -> None:
    first = _RecordingConsumer()
    second = _RecordingConsumer()
    tee([b"a", b"b", b"c"], first, second)
    assert first.chunks == second.chunks == [b"a", b"b", b"c"]
    assert first.finished == second.finished == 1


def test_consumers_satisfy_protocol() -> None:
    assert isinstance(DigestConsumer(), ByteConsumer)
    assert isinstance(DeflateConsumer(NullSink()), ByteConsumer)
    assert isinstance(_RecordingConsumer(), ByteConsumer)


def test_digest_is_independent_of_compression_level() -> None:
    results = []
    for level in (0, 9):
        digest = DigestConsumer()
        sink = io.BytesIO()
        tee([b"payload" * 50], digest, DeflateConsumer(sink, level=level))
        results.append((digest.hexdigest(), len(sink.getvalue())))
    assert results[0][0] == results[1][0]
    assert results[0][1] != results[1][1]
