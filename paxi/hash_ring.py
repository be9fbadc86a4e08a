"""A Chord-like consistent hash ring keyed by MD5."""

from __future__ import annotations

import bisect
import hashlib
from typing import Any


def _digest(data: bytes | str) -> bytes:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.md5(data).digest()


class HashRing:
    """Values placed on a ring in order of the MD5 hash of their bytes."""

    def __init__(self) -> None:
        self._hashes: list[bytes] = []
        self._values: list[Any] = []

    def insert(self, value: Any, data: bytes | str) -> None:
        """Place ``value`` on the ring at the hash of ``data``."""
        h = _digest(data)
        position = bisect.bisect_left(self._hashes, h)
        self._hashes.insert(position, h)
        self._values.insert(position, value)

    def get(self, key: bytes | str) -> Any:
        """Return the value that owns ``key``."""
        if not self._values:
            raise LookupError("hash ring is empty")
        h = _digest(key)
        # The last node on the ring is never chosen by comparison; keys
        # beyond the second to last node wrap around to the head.
        position = bisect.bisect_right(self._hashes, h)
        if position < len(self._values) - 1:
            return self._values[position]
        return self._values[0]

    def next(self, value: Any) -> Any:
        """Return the value following ``value`` on the ring, or None if absent."""
        for position, current in enumerate(self._values):
            if current == value:
                return self._values[(position + 1) % len(self._values)]
        return None

    def __len__(self) -> int:
        return len(self._values)

    def __str__(self) -> str:
        return "".join(f"{value} -> " for value in self._values)