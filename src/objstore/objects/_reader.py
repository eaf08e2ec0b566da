"""Object reader: resolve an object ID to a typed, size-capped payload stream."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO

from objstore.config import DEFAULT_CHUNK_SIZE, StoreConfig
from objstore.errors import CorruptObjectError, ObjectNotFoundError, SizeMismatchError
from objstore.objects._address import object_path, validate_object_id
from objstore.objects._header import NUL, parse_header
from objstore.objects._inflate import InflateReader
from objstore.objects._payload import PayloadReader

if TYPE_CHECKING:
    from pathlib import Path
    from types import TracebackType

    from objstore.objects._kind import ObjectKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StoredObject:
    """An opened object: its kind, declared size and an unconsumed payload stream.

    Close it (or use it as a context manager) to release the underlying file.
    """

    oid: str
    kind: ObjectKind
    size: int
    payload: PayloadReader

    def __enter__(self) -> StoredObject:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the payload stream and its file."""
        self.payload.close()

    def read_all(self) -> bytes:
        """Read the remaining payload into memory.

        Only for payloads known to be small; use :meth:`copy_to` otherwise.
        """
        data = self.payload.read()
        if self.payload.remaining:
            raise SizeMismatchError(self.oid, self.size, self.payload.bytes_read)
        return data

    def copy_to(self, sink: BinaryIO, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
        """Stream the remaining payload into ``sink`` and return the number of bytes copied.

        Raises:
            SizeMismatchError: the stored body is shorter than the declared size.
        """
        copied = 0
        while chunk := self.payload.read(chunk_size):
            sink.write(chunk)
            copied += len(chunk)
        if self.payload.bytes_read != self.size:
            raise SizeMismatchError(self.oid, self.size, self.payload.bytes_read)
        return copied


def _scan_header(inflate: InflateReader, *, oid: str, max_length: int) -> tuple[bytes, bytes]:
    """Pull decompressed bytes until the first NUL; return ``(header, leftover)``."""
    step = min(max_length, 64)
    buffer = bytearray()
    scan_from = 0
    while True:
        end = buffer.find(NUL, scan_from)
        if end != -1:
            if end + 1 > max_length:
                break
            return bytes(buffer[: end + 1]), bytes(buffer[end + 1 :])
        if len(buffer) >= max_length:
            break
        scan_from = len(buffer)
        chunk = inflate.read(step)
        if not chunk:
            raise CorruptObjectError(oid, "stream ended before the header terminator")
        buffer += chunk
    raise CorruptObjectError(oid, f"no header terminator within the first {max_length} bytes")


def open_object(objects_dir: str | Path, oid: str, config: StoreConfig | None = None) -> StoredObject:
    """Open the object stored under ``oid`` without consuming its payload.

    Raises:
        InvalidObjectIdError: ``oid`` is not a full hex object ID.
        ObjectNotFoundError: nothing is stored at the derived path.
        CorruptObjectError: the derived path cannot be opened as a file, or
            the stored bytes do not decompress or have no readable header.
        MalformedHeaderError, UnsupportedKindError, InvalidSizeError:
            propagated unchanged from the header codec.
    """
    config = config or StoreConfig()
    oid = validate_object_id(oid)
    path = object_path(objects_dir, oid)
    try:
        handle = path.open("rb")
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise ObjectNotFoundError(oid, path) from exc
    except IsADirectoryError as exc:
        raise CorruptObjectError(oid, f"{path} is a directory, not an object file") from exc
    except OSError as exc:
        raise CorruptObjectError(oid, f"cannot open {path}: {exc.strerror or exc}") from exc

    try:
        inflate = InflateReader(handle, oid=oid, chunk_size=config.chunk_size)
        header, leftover = _scan_header(inflate, oid=oid, max_length=config.max_header_length)
        try:
            header.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CorruptObjectError(oid, "header is not valid text") from exc
        kind, size = parse_header(header)
    except BaseException:
        handle.close()
        raise

    logger.debug("Opened object %s (%s, %d bytes)", oid, kind.value, size)
    payload = PayloadReader(inflate, oid=oid, size=size, prefix=leftover, handle=handle)
    return StoredObject(oid=oid, kind=kind, size=size, payload=payload)
