"""Messages of the ABD atomic storage protocol."""

from __future__ import annotations

from dataclasses import dataclass

from .identity import ID


@dataclass(frozen=True)
class Get:
    """Asks a replica for its value and version of a key."""

    id: ID = ID("")
    cid: int = 0
    key: int = 0


@dataclass(frozen=True)
class GetReply:
    """Returns a replica's value and version of a key."""

    id: ID = ID("")
    cid: int = 0
    key: int = 0
    value: bytes | None = None
    version: int = 0


@dataclass(frozen=True)
class Set:
    """Asks a replica to store a value at a version."""

    id: ID = ID("")
    cid: int = 0
    key: int = 0
    value: bytes | None = None
    version: int = 0


@dataclass(frozen=True)
class SetReply:
    """Acknowledges a set, whether it took effect or not."""

    id: ID = ID("")
    cid: int = 0
    key: int = 0