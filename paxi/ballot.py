"""Ballot numbers: a 32-bit counter and a 32-bit node id packed in 64 bits."""

from __future__ import annotations

from .identity import ID, new_id

_MASK64 = (1 << 64) - 1


class Ballot(int):
    """A ballot number laid out as ``<n:32, zone:16, node:16>``."""

    __slots__ = ()

    def __new__(cls, value: int = 0) -> "Ballot":
        return super().__new__(cls, int(value) & _MASK64)

    def n(self) -> int:
        """Return the counter held in the upper 32 bits."""
        return int(self) >> 32

    def id(self) -> ID:
        """Return the node id held in the lower 32 bits."""
        zone = (int(self) & 0xFFFFFFFF) >> 16
        node = int(self) & 0xFFFF
        return new_id(zone, node)

    def next(self, id: str) -> "Ballot":
        """Return the following ballot owned by ``id``."""
        return new_ballot(self.n() + 1, id)

    def __str__(self) -> str:
        return f"{self.n()}.{self.id()}"

    def __repr__(self) -> str:
        return f"Ballot({self})"


def new_ballot(n: int, id: str) -> Ballot:
    """Build a ballot ``<n, zone, node>``."""
    ident = id if isinstance(id, ID) else ID(id)
    return Ballot(n << 32 | ident.zone() << 16 | ident.node())


def ballot_from_string(text: str) -> Ballot:
    """Parse a ballot written as ``n.zone.node``."""
    counter, _, ident = text.partition(".")
    if not (counter.isascii() and counter.isdigit()) or int(counter) >= 1 << 64:
        raise ValueError(f"failed to convert counter {counter!r} to an unsigned integer")
    return new_ballot(int(counter), ID(ident))


def next_ballot(ballot: int, id: str) -> int:
    """Return the next ballot number after ``ballot`` owned by ``id``."""
    ident = id if isinstance(id, ID) else ID(id)
    owner = ident.zone() << 16 | ident.node()
    return ((ballot >> 32) + 1) << 32 | owner


def leader_id(ballot: int) -> ID:
    """Return the node id stored in a ballot number."""
    zone = (ballot & 0xFFFFFFFF) >> 16
    node = ballot & 0xFFFF
    return new_id(zone, node)