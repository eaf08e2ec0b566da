"""Hash-derived addressing shared by the read and write paths."""

from __future__ import annotations

import hashlib
import string
from pathlib import Path
from typing import TYPE_CHECKING

from objstore.errors import InvalidObjectIdError

if TYPE_CHECKING:
    from hashlib import _Hash

HASH_NAME = "sha1"
OID_HEX_LENGTH = 40

_HEX_DIGITS = frozenset(string.hexdigits.lower())


def new_hasher() -> _Hash:
    """Return a fresh digest accumulator for object IDs."""
    return hashlib.new(HASH_NAME)


def validate_object_id(oid: str) -> str:
    """Return ``oid`` normalized to lowercase, rejecting anything but a full hex digest.

    Abbreviated IDs are rejected as well; resolving a prefix is left to callers.
    """
    if not isinstance(oid, str):
        raise InvalidObjectIdError(repr(oid))
    normalized = oid.lower()
    if len(normalized) != OID_HEX_LENGTH or not _HEX_DIGITS.issuperset(normalized):
        raise InvalidObjectIdError(oid)
    return normalized


def object_relpath(oid: str) -> tuple[str, str]:
    """Split an object ID into its fan-out directory and file name."""
    oid = validate_object_id(oid)
    return oid[:2], oid[2:]


def object_path(objects_dir: str | Path, oid: str) -> Path:
    """Return ``<objects_dir>/<first two hex chars>/<remaining hex chars>``."""
    directory, name = object_relpath(oid)
    return Path(objects_dir) / directory / name
