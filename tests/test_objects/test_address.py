"""Tests for hash-derived addressing."""

from pathlib import Path

import pytest

from objstore.errors import InvalidObjectIdError
from objstore.objects import object_path, object_relpath, validate_object_id

OID = "95d09f2b10159347eece71399a7e2e907ea3df4f"


def test_relpath_splits_after_two_chars() -> None:
    assert object_relpath(OID) == ("95", "d09f2b10159347eece71399a7e2e907ea3df4f")


def test_object_path_under_objects_dir(tmp_path: Path) -> None:
    assert object_path(tmp_path, OID) == tmp_path / "95" / "d09f2b10159347eece71399a7e2e907ea3df4f"


def test_object_path_accepts_str_dir(tmp_path: Path) -> None:
    assert object_path(str(tmp_path), OID) == object_path(tmp_path, OID)


def test_uppercase_ids_are_normalized() -> None:
    assert validate_object_id(OID.upper()) == OID


@pytest.mark.parametrize(
    "oid",
    [
        "",
        "95d09f",
        OID + "0",
        OID[:-1] + "g",
        "../" + OID[3:],
        OID[:20] + "/" + OID[21:],
    ],
)
def test_rejects_malformed_ids(oid: str) -> None:
    with pytest.raises(InvalidObjectIdError) as excinfo:
        validate_object_id(oid)
    assert excinfo.value.oid == oid


def test_rejects_non_string_ids() -> None:
    with pytest.raises(InvalidObjectIdError):
        validate_object_id(b"95d09f2b10159347eece71399a7e2e907ea3df4f")  # type: ignore[arg-type]


def test_invalid_id_is_value_error() -> None:
    with pytest.raises(ValueError, match="Not a valid object name"):
        object_path(Path("objects"), "abc")
