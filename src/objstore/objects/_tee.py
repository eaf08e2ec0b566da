"""Byte consumers fed from one logical stream: a digest and a compressor."""

from __future__ import annotations

import zlib
from collections.abc import Iterable
from typing import BinaryIO, Protocol, runtime_checkable

from objstore.errors import SinkWriteError
from objstore.objects._address import new_hasher


@runtime_checkable
class ByteConsumer(Protocol):
    """Something that accepts a byte stream in order and is told when it ends."""

    def update(self, data: bytes) -> None:
        """Consume the next chunk."""
        ...

    def finish(self) -> None:
        """Flush any buffered state once the stream is complete."""
        ...


class NullSink:
    """Binary sink that discards everything written to it."""

    def write(self, data: bytes) -> int:
        """Accept ``data`` and report it as fully written."""
        return len(data)

    def flush(self) -> None:
        """Do nothing; there is no buffered output."""
        return None


class DigestConsumer:
    """Accumulate the object ID over the uncompressed stream."""

    def __init__(self) -> None:
        self._hasher = new_hasher()
        self.byte_count = 0

    def update(self, data: bytes) -> None:
        """Add ``data`` to the digest and the byte count."""
        self._hasher.update(data)
        self.byte_count += len(data)

    def finish(self) -> None:
        """Nothing to flush; the digest is read with :meth:`hexdigest`."""
        return None

    def hexdigest(self) -> str:
        """Return the lowercase hex object ID of everything consumed."""
        return self._hasher.hexdigest()


class DeflateConsumer:
    """Compress the stream with zlib and write the output to ``sink``."""

    def __init__(
        self,
        sink: BinaryIO | NullSink,
        *,
        level: int = zlib.Z_DEFAULT_COMPRESSION,
        target: object | None = None,
    ) -> None:
        self._sink = sink
        self._target = target if target is not None else getattr(sink, "name", sink)
        self._compressor = zlib.compressobj(level)
        self._finished = False

    def _write(self, data: bytes) -> None:
        if not data:
            return
        try:
            self._sink.write(data)
        except OSError as exc:
            raise SinkWriteError(self._target, str(exc)) from exc

    def update(self, data: bytes) -> None:
        """Compress ``data`` and write whatever output the compressor releases."""
        if self._finished:
            msg = "DeflateConsumer already finished."
            raise ValueError(msg)
        self._write(self._compressor.compress(data))

    def finish(self) -> None:
        """Write the compressed trailer; later calls are no-ops."""
        if self._finished:
            return
        self._finished = True
        self._write(self._compressor.flush())
        try:
            self._sink.flush()
        except OSError as exc:
            raise SinkWriteError(self._target, str(exc)) from exc


def tee(chunks: Iterable[bytes], *consumers: ByteConsumer) -> None:
    """Feed every chunk to each consumer in order, then finish them all."""
    for chunk in chunks:
        for consumer in consumers:
            consumer.update(chunk)
    for consumer in consumers:
        consumer.finish()
