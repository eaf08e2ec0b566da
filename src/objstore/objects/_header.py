"""Object header codec: the ``<kind> <size>\\0`` envelope in front of every payload."""

from __future__ import annotations

from objstore.errors import InvalidSizeError, MalformedHeaderError, UnsupportedKindError
from objstore.objects._kind import ObjectKind

NUL = b"\x00"

# Sizes are carried as unsigned 64-bit values by other implementations of the format.
MAX_OBJECT_SIZE = 2**64 - 1


def coerce_kind(kind: ObjectKind | str) -> ObjectKind:
    """Map a kind token onto ObjectKind by exact match."""
    if isinstance(kind, ObjectKind):
        return kind
    try:
        return ObjectKind(kind)
    except ValueError:
        raise UnsupportedKindError(str(kind)) from None


def encode_header(kind: ObjectKind | str, size: int) -> bytes:
    """Serialize the header for a payload of ``size`` bytes."""
    kind = coerce_kind(kind)
    if isinstance(size, bool) or not isinstance(size, int) or not 0 <= size <= MAX_OBJECT_SIZE:
        raise InvalidSizeError(str(size))
    return f"{kind.value} {size}".encode("ascii") + NUL


def _parse_size(size_text: str, header: bytes) -> int:
    # int() alone would accept "+5", " 5", "5_0" and non-ASCII digits.
    if not size_text or not size_text.isascii() or not size_text.isdigit():
        raise InvalidSizeError(size_text, header)
    size = int(size_text)
    if size > MAX_OBJECT_SIZE:
        raise InvalidSizeError(size_text, header)
    return size


def parse_header(header: bytes) -> tuple[ObjectKind, int]:
    """Parse a complete header, NUL terminator included.

    Raises:
        MalformedHeaderError: the terminator is missing, bytes follow it, or
            there is no space between kind and size.
        UnsupportedKindError: the kind token is not blob, tree or commit.
        InvalidSizeError: the size is not a non-negative decimal integer that
            fits in 64 bits.
    """
    header = bytes(header)
    if not header.endswith(NUL):
        raise MalformedHeaderError(header, "missing NUL terminator")
    body = header[:-1]
    if NUL in body:
        raise MalformedHeaderError(header, "unexpected bytes after NUL terminator")
    try:
        text = body.decode("ascii")
    except UnicodeDecodeError as exc:
        raise MalformedHeaderError(header, "header is not ASCII text") from exc

    kind_token, sep, size_text = text.partition(" ")
    if not sep:
        raise MalformedHeaderError(header, "no space between kind and size")
    try:
        kind = ObjectKind(kind_token)
    except ValueError:
        raise UnsupportedKindError(kind_token, header) from None
    return kind, _parse_size(size_text, header)
