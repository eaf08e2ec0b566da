"""Tree entries: ``<mode> <name>\\0<20-byte id>`` records inside a tree payload."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO

from objstore.errors import CorruptObjectError
from objstore.objects._address import OID_HEX_LENGTH
from objstore.objects._kind import ObjectKind

_RAW_OID_LENGTH = OID_HEX_LENGTH // 2
_MAX_ENTRY_PREFIX = 4096

_TREE_MODE = "40000"
_GITLINK_MODE = "160000"


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """One named child of a tree."""

    mode: str
    name: str
    oid: str

    @property
    def kind(self) -> ObjectKind:
        """Kind of the referenced object, derived from the mode."""
        if self.mode == _TREE_MODE:
            return ObjectKind.TREE
        if self.mode == _GITLINK_MODE:
            return ObjectKind.COMMIT
        return ObjectKind.BLOB

    def format(self) -> str:
        """Render as ``<mode> <kind> <oid>\\t<name>`` with the mode zero-padded to six digits."""
        return f"{self.mode:0>6} {self.kind.value} {self.oid}\t{self.name}"


def _read_exact(stream: BinaryIO, count: int) -> bytes:
    data = b""
    while len(data) < count:
        chunk = stream.read(count - len(data))
        if not chunk:
            break
        data += chunk
    return data


def _read_until_nul(stream: BinaryIO, *, oid: str) -> bytes | None:
    """Read one ``<mode> <name>`` prefix; None at a clean end of stream."""
    prefix = bytearray()
    while True:
        byte = stream.read(1)
        if not byte:
            if prefix:
                raise CorruptObjectError(oid, "tree entry is truncated")
            return None
        if byte == b"\x00":
            return bytes(prefix)
        prefix += byte
        if len(prefix) > _MAX_ENTRY_PREFIX:
            raise CorruptObjectError(oid, "tree entry name is too long")


def iter_tree_entries(stream: BinaryIO, *, oid: str = "") -> Iterator[TreeEntry]:
    """Parse tree entries lazily from a payload stream.

    Wrap unbuffered streams in :class:`io.BufferedReader` first, since the
    prefix is scanned a byte at a time.
    """
    while (prefix := _read_until_nul(stream, oid=oid)) is not None:
        mode, sep, name = prefix.partition(b" ")
        if not sep or not mode.isdigit() or not name:
            raise CorruptObjectError(oid, f"malformed tree entry {prefix!r}")
        raw_oid = _read_exact(stream, _RAW_OID_LENGTH)
        if len(raw_oid) != _RAW_OID_LENGTH:
            raise CorruptObjectError(oid, "tree entry is truncated")
        yield TreeEntry(
            mode=mode.decode("ascii"),
            name=name.decode("utf-8", errors="surrogateescape"),
            oid=raw_oid.hex(),
        )
