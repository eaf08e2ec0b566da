"""StoreConfig: tunables for reading and writing objects."""

import zlib
from dataclasses import dataclass

DEFAULT_CHUNK_SIZE = 64 * 1024

# "commit " plus the 20 digits of 2**64 - 1 and the NUL fit comfortably.
DEFAULT_MAX_HEADER_LENGTH = 64


@dataclass(frozen=True, slots=True)
class StoreConfig:
    """Streaming and compression settings for an ObjectStore.

    None of these affect the object format or addressing, only how bytes
    move between the store and its callers.
    """

    compression_level: int = zlib.Z_DEFAULT_COMPRESSION
    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_header_length: int = DEFAULT_MAX_HEADER_LENGTH
    temp_prefix: str = "tmp_obj_"

    def __post_init__(self) -> None:
        """Validate ranges."""
        if isinstance(self.compression_level, bool) or not -1 <= self.compression_level <= 9:
            msg = "compression_level must be between -1 and 9."
            raise ValueError(msg)
        if self.chunk_size <= 0:
            msg = "chunk_size must be > 0."
            raise ValueError(msg)
        if self.max_header_length <= 0:
            msg = "max_header_length must be > 0."
            raise ValueError(msg)
        if not self.temp_prefix or "/" in self.temp_prefix:
            msg = "temp_prefix must be a non-empty file name prefix."
            raise ValueError(msg)
