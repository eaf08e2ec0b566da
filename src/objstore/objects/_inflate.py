"""InflateReader: pull-based zlib decompression with bounded output per call."""

from __future__ import annotations

import zlib
from typing import BinaryIO

from objstore.errors import CorruptObjectError


class InflateReader:
    """Decompress a zlib stream from a binary file on demand.

    Each ``read(size)`` call produces at most ``size`` decompressed bytes, so
    memory stays bounded by ``size`` plus one compressed input chunk no
    matter how far the stream would expand.
    """

    def __init__(self, source: BinaryIO, *, oid: str, chunk_size: int) -> None:
        self._source = source
        self._oid = oid
        self._chunk_size = chunk_size
        self._inflater = zlib.decompressobj()
        self._pending = b""

    @property
    def eof(self) -> bool:
        """Whether the end of the compressed stream (and its checksum) has been reached."""
        return self._inflater.eof

    def _fill(self) -> None:
        try:
            self._pending = self._source.read(self._chunk_size)
        except OSError as exc:
            raise CorruptObjectError(self._oid, f"cannot read stored bytes: {exc}") from exc
        if not self._pending:
            raise CorruptObjectError(self._oid, "compressed stream is truncated")

    def read(self, size: int) -> bytes:
        """Return up to ``size`` decompressed bytes; ``b""`` once the stream has ended."""
        if size <= 0:
            return b""
        while not self._inflater.eof:
            if not self._pending:
                self._fill()
            try:
                out = self._inflater.decompress(self._pending, size)
            except zlib.error as exc:
                raise CorruptObjectError(self._oid, f"decompression failed: {exc}") from exc
            self._pending = self._inflater.unconsumed_tail
            if out:
                return out
        return b""
