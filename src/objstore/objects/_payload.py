"""PayloadReader: a hard length cap over a decompressed object body."""

from __future__ import annotations

import io
from typing import BinaryIO

from objstore.errors import SizeMismatchError
from objstore.objects._inflate import InflateReader


class PayloadReader(io.RawIOBase):
    """Readable stream that yields at most the declared payload size.

    Bytes the decompressor could produce past ``size`` are never read, which
    keeps a stored object whose header understates its body (a decompression
    bomb) from costing more than ``size`` bytes of output. Running out of data
    before ``size`` bytes raises :class:`SizeMismatchError`.
    """

    def __init__(
        self,
        inflate: InflateReader,
        *,
        oid: str,
        size: int,
        prefix: bytes = b"",
        handle: BinaryIO | None = None,
    ) -> None:
        """Wrap ``inflate``; ``prefix`` holds body bytes already pulled while scanning the header."""
        super().__init__()
        self._inflate = inflate
        self._oid = oid
        self._size = size
        self._remaining = size
        self._buffer = prefix
        self._handle = handle

    @property
    def oid(self) -> str:
        """Object ID the payload belongs to."""
        return self._oid

    @property
    def size(self) -> int:
        """Declared payload size."""
        return self._size

    @property
    def remaining(self) -> int:
        """Bytes still allowed out of this stream."""
        return self._remaining

    @property
    def bytes_read(self) -> int:
        """Payload bytes handed out so far."""
        return self._size - self._remaining

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: bytearray | memoryview) -> int:  # type: ignore[override]
        """Fill ``buffer`` with up to ``remaining`` bytes; return 0 once the cap is reached."""
        if self.closed:
            msg = "I/O operation on closed payload stream."
            raise ValueError(msg)
        want = min(len(buffer), self._remaining)
        if want == 0:
            return 0

        if self._buffer:
            chunk = self._buffer[:want]
            self._buffer = self._buffer[want:]
        else:
            chunk = self._inflate.read(want)
        if not chunk:
            raise SizeMismatchError(self._oid, self._size, self.bytes_read)

        count = len(chunk)
        buffer[:count] = chunk
        self._remaining -= count
        return count

    def close(self) -> None:
        """Close the stream and the object file behind it."""
        if not self.closed and self._handle is not None:
            self._handle.close()
        super().close()
