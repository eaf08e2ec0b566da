"""ObjectKind: the closed set of object types."""

from enum import Enum


class ObjectKind(str, Enum):
    """Kind token written at the start of every object header."""

    BLOB = "blob"
    TREE = "tree"
    COMMIT = "commit"

    def __str__(self) -> str:
        return self.value
