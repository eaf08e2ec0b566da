"""Typed errors for objstore."""

from __future__ import annotations

from pathlib import Path


class ObjstoreError(Exception):
    """Base exception for all objstore errors."""


class InvalidObjectIdError(ObjstoreError, ValueError):
    """Raised when an object ID is not a full, well-formed hex digest."""

    def __init__(self, oid: str) -> None:
        """Initialize with the rejected object ID."""
        self.oid = oid
        super().__init__(f"Not a valid object name: {oid!r}")


class ObjectNotFoundError(ObjstoreError):
    """Raised when no stored file exists at an object's derived address."""

    def __init__(self, oid: str, path: Path) -> None:
        """Initialize with the missing object's ID and the path that was probed."""
        self.oid = oid
        self.path = path
        super().__init__(f"Object not found: {oid} (looked in {path})")


class CorruptObjectError(ObjstoreError):
    """Raised when a stored object cannot be decompressed or its header cannot be located."""

    def __init__(self, oid: str, reason: str) -> None:
        """Initialize with the object ID and a description of the failed stage."""
        self.oid = oid
        self.reason = reason
        super().__init__(f"Corrupt object {oid}: {reason}")


class HeaderError(ObjstoreError):
    """Base class for violations of the ``<kind> <size>\\0`` header grammar."""

    def __init__(self, header: bytes, message: str) -> None:
        """Initialize with the offending header bytes."""
        self.header = header
        super().__init__(message)


class MalformedHeaderError(HeaderError):
    """Raised when a header is not ``<kind> <size>`` terminated by a single NUL."""

    def __init__(self, header: bytes, reason: str = "expected '<kind> <size>\\0'") -> None:
        """Initialize with the header bytes and what was wrong with them."""
        self.reason = reason
        super().__init__(header, f"Malformed object header {header!r}: {reason}")


class UnsupportedKindError(HeaderError):
    """Raised when a header names an object kind outside blob/tree/commit.

    The envelope itself is valid, so callers may surface the kind name and
    carry on instead of treating the store as corrupt.
    """

    def __init__(self, kind: str, header: bytes = b"") -> None:
        """Initialize with the unrecognized kind token."""
        self.kind = kind
        super().__init__(header, f"Unsupported object kind: {kind!r}")


class InvalidSizeError(HeaderError):
    """Raised when the header size field is not a representable non-negative decimal."""

    def __init__(self, size_text: str, header: bytes = b"") -> None:
        """Initialize with the unparsable size text."""
        self.size_text = size_text
        super().__init__(header, f"Invalid object size in header: {size_text!r}")


class SizeMismatchError(ObjstoreError):
    """Raised when a payload yields a different number of bytes than its header declares."""

    def __init__(self, oid: str, expected: int, actual: int) -> None:
        """Initialize with the object ID and the declared and observed lengths."""
        self.oid = oid
        self.expected = expected
        self.actual = actual
        super().__init__(f"Object {oid} was not the expected size (expected: {expected}, actual: {actual})")


class SizeUnknownError(ObjstoreError):
    """Raised when a content source cannot report its length before streaming."""

    def __init__(self, source: object) -> None:
        """Initialize with the source whose length is unknown."""
        self.source = source
        super().__init__(f"Cannot determine content length of {source!r}; pass size explicitly.")


class SourceReadError(ObjstoreError):
    """Raised when reading the content source fails or its length changes mid-stream."""

    def __init__(self, source: object, reason: str) -> None:
        """Initialize with the source and the failure description."""
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to read content from {source!r}: {reason}")


class SinkWriteError(ObjstoreError):
    """Raised when staging or publishing an object on disk fails."""

    def __init__(self, target: object, reason: str) -> None:
        """Initialize with the write target and the failure description."""
        self.target = target
        self.reason = reason
        super().__init__(f"Failed to write object data to {target}: {reason}")


class ObjectKindMismatchError(ObjstoreError):
    """Raised when an object exists but is not of the kind an operation requires."""

    def __init__(self, oid: str, expected: str, actual: str) -> None:
        """Initialize with the object ID and the expected and actual kind names."""
        self.oid = oid
        self.expected = expected
        self.actual = actual
        super().__init__(f"Object {oid} is a {actual}, expected a {expected}")
