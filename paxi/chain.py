"""Messages of chain replication."""

from __future__ import annotations

from dataclasses import dataclass, field

from .ballot import Ballot
from .db import Command
from .identity import ID


@dataclass(frozen=True)
class Accept:
    """Passes a command down the chain."""

    ballot: Ballot = Ballot(0)
    command: Command = field(default_factory=Command)
    lsn: int = 0
    sender: ID = ID("")

    def __str__(self) -> str:
        return f"Accept {{b={self.ballot} cmd={self.command} lsn={self.lsn} from={self.sender}}}"


@dataclass(frozen=True)
class Ack:
    """Acknowledges a log entry back up the chain."""

    ballot: Ballot = Ballot(0)
    lsn: int = 0
    sender: ID = ID("")

    def __str__(self) -> str:
        return f"Ack {{b={self.ballot} lsn={self.lsn} from={self.sender}}}"