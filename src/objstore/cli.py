"""Command-line front end: init, cat-file, hash-object and ls-tree."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import BinaryIO

from objstore.errors import ObjstoreError, UnsupportedKindError
from objstore.objects import ObjectKind
from objstore.store import ObjectStore, init_store

DEFAULT_GIT_DIR = ".git"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="objstore", description="Read and write content-addressed objects.")
    parser.add_argument("--git-dir", type=Path, default=Path(DEFAULT_GIT_DIR), help="Store root (default: .git).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init", help="Create an empty object store.")

    cat_file = commands.add_parser("cat-file", help="Show an object's content, kind or size.")
    mode = cat_file.add_mutually_exclusive_group(required=True)
    mode.add_argument("-p", dest="mode", action="store_const", const="pretty", help="Print the payload.")
    mode.add_argument("-t", dest="mode", action="store_const", const="kind", help="Print the kind.")
    mode.add_argument("-s", dest="mode", action="store_const", const="size", help="Print the declared size.")
    cat_file.add_argument("object")

    hash_object = commands.add_parser("hash-object", help="Compute an object ID, optionally storing the object.")
    hash_object.add_argument("-w", dest="write", action="store_true", help="Write the object into the store.")
    hash_object.add_argument(
        "-t",
        dest="kind",
        default=ObjectKind.BLOB.value,
        choices=[kind.value for kind in ObjectKind],
        help="Object kind (default: blob).",
    )
    hash_object.add_argument("file", type=Path)

    ls_tree = commands.add_parser("ls-tree", help="List the entries of a tree object.")
    ls_tree.add_argument("--name-only", action="store_true", help="Print entry names only.")
    ls_tree.add_argument("object")
    return parser


def _write_line(out: BinaryIO, text: str) -> None:
    # Tree entry names keep undecodable bytes as surrogates; write them back out unchanged.
    out.write(f"{text}\n".encode("utf-8", errors="surrogateescape"))


def _cat_file(store: ObjectStore, args: argparse.Namespace, out: BinaryIO) -> None:
    with store.read_object(args.object) as obj:
        if args.mode == "kind":
            _write_line(out, obj.kind.value)
        elif args.mode == "size":
            _write_line(out, str(obj.size))
        elif obj.kind is ObjectKind.TREE:
            for line in store.list_tree_entries(obj.oid):
                _write_line(out, line)
        else:
            obj.copy_to(out, chunk_size=store.config.chunk_size)


def _run(args: argparse.Namespace, out: BinaryIO) -> None:
    if args.command == "init":
        init_store(args.git_dir)
        _write_line(out, f"Initialized git repository in {args.git_dir}")
        return

    store = ObjectStore(args.git_dir)
    if args.command == "cat-file":
        _cat_file(store, args, out)
    elif args.command == "hash-object":
        _write_line(out, store.write_object(args.kind, args.file, persist=args.write))
    elif args.command == "ls-tree":
        for line in store.list_tree_entries(args.object, name_only=args.name_only):
            _write_line(out, line)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return a process exit code."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    out = sys.stdout.buffer
    try:
        _run(args, out)
    except UnsupportedKindError as exc:
        # A well-formed object of a kind this tool does not know yet.
        print(f"note: {exc.kind!r} objects are not supported yet", file=sys.stderr)
        return 0
    except ObjstoreError as exc:
        print(f"fatal: {exc}", file=sys.stderr)
        return 1
    finally:
        out.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
