"""Object writer: hash and compress content, then publish it under its object ID."""

from __future__ import annotations

import io
import logging
import os
import stat
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from itertools import chain
from pathlib import Path
from typing import BinaryIO, Union

from objstore.config import StoreConfig
from objstore.errors import SinkWriteError, SizeUnknownError, SourceReadError
from objstore.objects._address import object_path
from objstore.objects._header import encode_header
from objstore.objects._kind import ObjectKind
from objstore.objects._tee import DeflateConsumer, DigestConsumer, NullSink, tee

logger = logging.getLogger(__name__)

ContentSource = Union[str, "os.PathLike[str]", bytes, bytearray, memoryview, BinaryIO]


def _measure(stream: BinaryIO) -> int | None:
    """Return the number of bytes left in ``stream``, or None when it cannot tell."""
    try:
        info = os.fstat(stream.fileno())
    except (AttributeError, OSError, io.UnsupportedOperation):
        info = None
    if info is not None and stat.S_ISREG(info.st_mode):
        try:
            return info.st_size - stream.tell()
        except (OSError, io.UnsupportedOperation):
            return info.st_size

    try:
        if not stream.seekable():
            return None
        position = stream.tell()
        end = stream.seek(0, io.SEEK_END)
        stream.seek(position)
    except (AttributeError, OSError, io.UnsupportedOperation):
        return None
    return end - position


@contextmanager
def open_source(source: ContentSource, size: int | None = None) -> Iterator[tuple[BinaryIO, int, str]]:
    """Yield ``(stream, size, label)`` for any supported content source.

    The size is settled before any byte is read, since the header carrying it
    precedes the payload. Streams opened here are closed on exit; caller-owned
    streams are left open.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
        if size is not None and size != len(data):
            msg = f"size={size} does not match the {len(data)} bytes given."
            raise ValueError(msg)
        yield io.BytesIO(data), len(data), "<bytes>"
        return

    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        try:
            info = path.stat()
            handle = path.open("rb")
        except OSError as exc:
            raise SourceReadError(str(path), str(exc)) from exc
        with handle:
            yield handle, size if size is not None else info.st_size, str(path)
        return

    label = str(getattr(source, "name", "<stream>"))
    if size is None:
        size = _measure(source)
        if size is None:
            raise SizeUnknownError(label)
    yield source, size, label


def _iter_content(stream: BinaryIO, size: int, *, chunk_size: int, label: str) -> Iterator[bytes]:
    """Yield the source in chunks, insisting that it holds exactly ``size`` bytes."""
    remaining = size
    while True:
        try:
            chunk = stream.read(chunk_size)
        except OSError as exc:
            raise SourceReadError(label, str(exc)) from exc
        if not chunk:
            break
        remaining -= len(chunk)
        if remaining < 0:
            raise SourceReadError(label, f"content is longer than the declared {size} bytes")
        yield chunk
    if remaining:
        raise SourceReadError(label, f"content ended {remaining} bytes short of the declared {size}")


def encode_object(
    kind: ObjectKind | str,
    stream: BinaryIO,
    size: int,
    sink: BinaryIO | NullSink,
    *,
    config: StoreConfig | None = None,
    label: str = "<stream>",
    target: object | None = None,
) -> str:
    """Stream header and payload into a digest and a compressor; return the object ID.

    The digest covers the uncompressed ``<kind> <size>\\0<payload>`` bytes.
    Compressed output goes to ``sink``.
    """
    config = config or StoreConfig()
    header = encode_header(kind, size)
    digest = DigestConsumer()
    deflate = DeflateConsumer(sink, level=config.compression_level, target=target)
    content = _iter_content(stream, size, chunk_size=config.chunk_size, label=label)
    tee(chain([header], content), digest, deflate)
    return digest.hexdigest()


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not remove staging file %s: %s", path, exc)


def _publish(staged: Path, final: Path) -> bool:
    """Move a staged object to its final path; return False when it was already stored."""
    if final.exists():
        _discard(staged)
        return False
    try:
        final.parent.mkdir(parents=True, exist_ok=True)
        os.replace(staged, final)
    except OSError as exc:
        raise SinkWriteError(final, str(exc)) from exc
    return True


def write_object(
    objects_dir: str | Path,
    staging_dir: str | Path,
    kind: ObjectKind | str,
    source: ContentSource,
    *,
    persist: bool = True,
    size: int | None = None,
    config: StoreConfig | None = None,
) -> str:
    """Encode ``source`` as an object of ``kind`` and return its object ID.

    With ``persist`` the compressed object is staged in a temporary file in
    ``staging_dir`` and renamed into ``objects_dir``, so a partially written
    object is never visible under its final name. Without it nothing touches
    the disk.

    Raises:
        SizeUnknownError: the source length cannot be determined up front.
        SourceReadError: reading the source failed or its length changed.
        SinkWriteError: staging or publishing failed.
    """
    config = config or StoreConfig()
    with open_source(source, size) as (stream, length, label):
        if not persist:
            return encode_object(kind, stream, length, NullSink(), config=config, label=label)

        try:
            fd, name = tempfile.mkstemp(prefix=config.temp_prefix, dir=staging_dir)
        except OSError as exc:
            raise SinkWriteError(staging_dir, str(exc)) from exc
        staged = Path(name)
        logger.debug("Staging %s (%d bytes) in %s", label, length, staged)

        try:
            try:
                with os.fdopen(fd, "wb") as handle:
                    oid = encode_object(kind, stream, length, handle, config=config, label=label, target=staged)
                    handle.flush()
                    os.fsync(handle.fileno())
            except OSError as exc:
                raise SinkWriteError(staged, str(exc)) from exc
            published = _publish(staged, object_path(objects_dir, oid))
        except BaseException:
            _discard(staged)
            raise

    if published:
        logger.info("Stored %s object %s", ObjectKind(kind).value, oid)
    else:
        logger.debug("Object %s already stored", oid)
    return oid
