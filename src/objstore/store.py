"""ObjectStore: a content-addressed object database rooted at a ``.git``-style directory."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from objstore.config import StoreConfig
from objstore.errors import ObjectKindMismatchError
from objstore.objects import (
    ContentSource,
    ObjectKind,
    StoredObject,
    iter_tree_entries,
    object_path,
    open_object,
    write_object,
)

logger = logging.getLogger(__name__)

OBJECTS_DIR = "objects"
REFS_DIR = "refs"
HEAD_FILE = "HEAD"
DEFAULT_BRANCH = "main"


class ObjectStore:
    """Object store under a root directory.

    Objects live at ``<root>/objects/<2 hex>/<38 hex>`` as zlib-compressed
    ``<kind> <size>\\0<payload>``. Writes are staged in ``<root>`` and renamed
    into place.
    """

    def __init__(self, root: str | Path, *, config: StoreConfig | None = None) -> None:
        """Initialize with the store root; the directory is not created here (see ``init_store``)."""
        self._root = Path(root)
        self._config = config or StoreConfig()

    @property
    def root(self) -> Path:
        """Return the root directory path."""
        return self._root

    @property
    def objects_dir(self) -> Path:
        return self._root / OBJECTS_DIR

    @property
    def config(self) -> StoreConfig:
        return self._config

    def object_path(self, oid: str) -> Path:
        """Return the path an object with this ID is stored at."""
        return object_path(self.objects_dir, oid)

    def has_object(self, oid: str) -> bool:
        """Check whether an object file exists for ``oid``."""
        return self.object_path(oid).is_file()

    def read_object(self, oid: str) -> StoredObject:
        """Open an object for reading; the caller consumes and closes its payload."""
        return open_object(self.objects_dir, oid, self._config)

    def write_object(
        self,
        kind: ObjectKind | str,
        source: ContentSource,
        *,
        persist: bool = True,
        size: int | None = None,
    ) -> str:
        """Store ``source`` as an object of ``kind`` and return its ID.

        With ``persist=False`` only the ID is computed.
        """
        return write_object(
            self.objects_dir,
            self._root,
            kind,
            source,
            persist=persist,
            size=size,
            config=self._config,
        )

    def write_blob(self, source: ContentSource, *, persist: bool = True, size: int | None = None) -> str:
        """Store file content (a path, bytes, or a binary stream) as a blob and return its ID."""
        return self.write_object(ObjectKind.BLOB, source, persist=persist, size=size)

    def list_tree_entries(self, oid: str, *, name_only: bool = False) -> list[str]:
        """List a tree's entries as ``ls-tree`` lines, or just their names."""
        with self.read_object(oid) as obj:
            if obj.kind is not ObjectKind.TREE:
                raise ObjectKindMismatchError(obj.oid, ObjectKind.TREE.value, obj.kind.value)
            stream = io.BufferedReader(obj.payload, buffer_size=self._config.chunk_size)
            entries = list(iter_tree_entries(stream, oid=obj.oid))
        if name_only:
            return [entry.name for entry in entries]
        return [entry.format() for entry in entries]


def init_store(root: str | Path, *, config: StoreConfig | None = None) -> ObjectStore:
    """Create the object directory, an empty refs area and ``HEAD`` under ``root``.

    Existing contents are left untouched.
    """
    root = Path(root)
    (root / OBJECTS_DIR).mkdir(parents=True, exist_ok=True)
    (root / REFS_DIR).mkdir(exist_ok=True)
    head = root / HEAD_FILE
    if not head.exists():
        head.write_text(f"ref: refs/heads/{DEFAULT_BRANCH}\n", encoding="utf-8")
    logger.info("Initialized object store in %s", root)
    return ObjectStore(root, config=config)
