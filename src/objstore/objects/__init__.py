"""Object codec and on-disk read/write paths."""

from objstore.objects._address import OID_HEX_LENGTH, object_path, object_relpath, validate_object_id
from objstore.objects._header import MAX_OBJECT_SIZE, encode_header, parse_header
from objstore.objects._kind import ObjectKind
from objstore.objects._payload import PayloadReader
from objstore.objects._reader import StoredObject, open_object
from objstore.objects._tee import ByteConsumer, DeflateConsumer, DigestConsumer, NullSink, tee
from objstore.objects._tree import TreeEntry, iter_tree_entries
from objstore.objects._writer import ContentSource, encode_object, write_object

__all__ = [
    "MAX_OBJECT_SIZE",
    "OID_HEX_LENGTH",
    "ByteConsumer",
    "ContentSource",
    "DeflateConsumer",
    "DigestConsumer",
    "NullSink",
    "ObjectKind",
    "PayloadReader",
    "StoredObject",
    "TreeEntry",
    "encode_header",
    "encode_object",
    "iter_tree_entries",
    "object_path",
    "object_relpath",
    "open_object",
    "parse_header",
    "tee",
    "validate_object_id",
    "write_object",
]
