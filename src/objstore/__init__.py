"""objstore: content-addressed object storage in the git object format."""

import importlib.metadata as importlib_metadata

from objstore.config import StoreConfig
from objstore.errors import (
    CorruptObjectError,
    HeaderError,
    InvalidObjectIdError,
    InvalidSizeError,
    MalformedHeaderError,
    ObjectKindMismatchError,
    ObjectNotFoundError,
    ObjstoreError,
    SinkWriteError,
    SizeMismatchError,
    SizeUnknownError,
    SourceReadError,
    UnsupportedKindError,
)
from objstore.objects import ObjectKind, StoredObject, TreeEntry, encode_header, parse_header
from objstore.store import ObjectStore, init_store


def _detect_version() -> str:
    """Return installed package version or a local fallback when metadata is unavailable."""
    try:
        return importlib_metadata.version("objstore")
    except importlib_metadata.PackageNotFoundError:
        return "0.0.0+unknown"


__version__ = _detect_version()

__all__ = [
    "CorruptObjectError",
    "HeaderError",
    "InvalidObjectIdError",
    "InvalidSizeError",
    "MalformedHeaderError",
    "ObjectKind",
    "ObjectKindMismatchError",
    "ObjectNotFoundError",
    "ObjectStore",
    "ObjstoreError",
    "SinkWriteError",
    "SizeMismatchError",
    "SizeUnknownError",
    "SourceReadError",
    "StoreConfig",
    "StoredObject",
    "TreeEntry",
    "UnsupportedKindError",
    "encode_header",
    "init_store",
    "parse_header",
]
