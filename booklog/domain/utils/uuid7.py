"""
Time-ordered identifiers (UUIDv7, RFC 9562) for library records.

Authors, books, series and readings all get a UUIDv7 when they are created,
so ids sort by creation time and inserts stay local in the SQLite
primary-key index.

Layout (128 bits):
- 48 bits Unix timestamp in milliseconds
- 4 bits version (0b0111)
- 12 bits random
- 2 bits variant (0b10)
- 62 bits random
"""

import os
import time
from uuid import UUID

_VERSION = 0x7
_VARIANT = 0b10


def uuid7() -> UUID:
    """
    Generate a new UUIDv7.

    Example:
        >>> from booklog.domain.utils.uuid7 import uuid7
        >>> uuid7().version
        7
    """
    timestamp_ms = time.time_ns() // 1_000_000
    rand = int.from_bytes(os.urandom(10), byteorder="big")

    rand_a = rand & 0xFFF
    rand_b = (rand >> 12) & ((1 << 62) - 1)

    value = (timestamp_ms & ((1 << 48) - 1)) << 80
    value |= _VERSION << 76
    value |= rand_a << 64
    value |= _VARIANT << 62
    value |= rand_b

    return UUID(int=value)

