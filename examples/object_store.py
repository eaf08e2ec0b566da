"""ObjectStore: write, hash and read back objects."""

import io
import tempfile
import zlib
from pathlib import Path

from objstore import ObjectKind, SizeMismatchError, StoreConfig, init_store

with tempfile.TemporaryDirectory() as tmpdir:
    store = init_store(Path(tmpdir) / ".git")
    print(f"[init] root = {store.root}")

    # ---- Dry hash vs. persisted write ----
    # The ID is the same either way; only persist=True touches the disk.

    dry = store.write_blob(b"hello world", persist=False)
    print(f"\n[hash] {dry} stored={store.has_object(dry)}")
    oid = store.write_blob(b"hello world")
    print(f"[write] {oid} stored={store.has_object(oid)}")
    print(f"  path = {store.object_path(oid).relative_to(store.root)}")

    # ---- Streaming a payload back ----

    with store.read_object(oid) as obj:
        sink = io.BytesIO()
        copied = obj.copy_to(sink)
        print(f"\n[read] kind={obj.kind.value} size={obj.size} copied={copied} payload={sink.getvalue()!r}")

    # ---- Files and streams ----
    # Paths report their size via stat; unsized streams need size=.

    sample = Path(tmpdir) / "notes.txt"
    sample.write_bytes(b"line one\nline two\n")
    print(f"\n[file] {store.write_blob(sample)}")
    print(f"[stream] {store.write_blob(io.BytesIO(b'streamed'), size=8)}")

    # ---- Trees ----

    tree = store.write_object(
        ObjectKind.TREE,
        b"100644 hello.txt\x00" + bytes.fromhex(oid),
    )
    print(f"\n[tree] {tree}")
    for line in store.list_tree_entries(tree):
        print(f"  {line}")

    # ---- A truncated object ----
    # The header promises 10 bytes but only 5 follow.

    bad = "ab" * 20
    bad_path = store.object_path(bad)
    bad_path.parent.mkdir(parents=True, exist_ok=True)
    bad_path.write_bytes(zlib.compress(b"blob 10\x00hello"))
    try:
        with store.read_object(bad) as obj:
            obj.read_all()
    except SizeMismatchError as exc:
        print(f"\n[corrupt] {exc}")

# ---- Tuning ----
# StoreConfig changes how bytes move, never the object IDs.

with tempfile.TemporaryDirectory() as tmpdir:
    fast = init_store(Path(tmpdir) / "fast", config=StoreConfig(compression_level=1, chunk_size=4096))
    print(f"\n[config] same id with level=1: {fast.write_blob(b'hello world') == oid}")
