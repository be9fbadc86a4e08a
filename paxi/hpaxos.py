"""Messages of the per-slot Paxos variant."""

from __future__ import annotations

from dataclasses import dataclass, field

from .ballot import Ballot
from .db import Command
from .identity import ID


@dataclass(frozen=True)
class P1a:
    """Prepare."""

    ballot: Ballot = Ballot(0)
    slot: int = 0

    def __str__(self) -> str:
        return f"P1a {{b={self.ballot} s={self.slot}}}"


@dataclass(frozen=True)
class P1b:
    """Promise."""

    ballot: Ballot = Ballot(0)
    slot: int = 0
    id: ID = ID("")
    command: Command = field(default_factory=Command)

    def __str__(self) -> str:
        return f"P1b {{b={self.ballot} s={self.slot} id={self.id} cmd={self.command}}}"


@dataclass(frozen=True)
class P2a:
    """Accept."""

    ballot: Ballot = Ballot(0)
    slot: int = 0
    command: Command = field(default_factory=Command)

    def __str__(self) -> str:
        return f"P2a {{b={self.ballot} s={self.slot} cmd={self.command}}}"


@dataclass(frozen=True)
class P2b:
    """Accepted."""

    ballot: Ballot = Ballot(0)
    id: ID = ID("")
    slot: int = 0

    def __str__(self) -> str:
        return f"P2b {{b={self.ballot} id={self.id} s={self.slot}}}"


@dataclass(frozen=True)
class P3:
    """Commit."""

    ballot: Ballot = Ballot(0)
    slot: int = 0
    command: Command = field(default_factory=Command)

    def __str__(self) -> str:
        return f"P3 {{b={self.ballot} s={self.slot} cmd={self.command}}}"