"""Tests for StoreConfig."""

import dataclasses
import zlib

import pytest

from objstore.config import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_HEADER_LENGTH, StoreConfig


def test_defaults() -> None:
    config = StoreConfig()
    assert config.compression_level == zlib.Z_DEFAULT_COMPRESSION
    assert config.chunk_size == DEFAULT_CHUNK_SIZE
    assert config.max_header_length == DEFAULT_MAX_HEADER_LENGTH
    assert config.temp_prefix == "tmp_obj_"


def test_is_frozen() -> None:
    config = StoreConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.chunk_size = 1  # type: ignore[misc]


@pytest.mark.parametrize("level", [-2, 10, True])
def test_rejects_bad_compression_level(level: int) -> None:
    with pytest.raises(ValueError, match="compression_level"):
        StoreConfig(compression_level=level)


def test_rejects_non_positive_chunk_size() -> None:
    with pytest.raises(ValueError, match="chunk_size"):
        StoreConfig(chunk_size=0)


def test_rejects_non_positive_header_length() -> None:
    with pytest.raises(ValueError, match="max_header_length"):
        StoreConfig(max_header_length=0)


@pytest.mark.parametrize("prefix", ["", "a/b"])
def test_rejects_bad_temp_prefix(prefix: str) -> None:
    with pytest.raises(ValueError, match="temp_prefix"):
        StoreConfig(temp_prefix=prefix)
