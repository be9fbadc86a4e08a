"""Instances and messages of Egalitarian Paxos."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Mapping

from .ballot import Ballot
from .db import Command
from .identity import ID


class Status(IntEnum):
    """Progress of an instance."""

    NONE = 0
    PREACCEPTED = 1
    ACCEPTED = 2
    COMMITTED = 3
    EXECUTED = 4


def _format_map(mapping: Mapping[Any, Any]) -> str:
    items = sorted(mapping.items(), key=lambda kv: str(kv[0]))
    return "map[" + " ".join(f"{k}:{v}" for k, v in items) + "]"


@dataclass
class Instance:
    """One command slot with its sequence number and dependencies."""

    cmd: Command = field(default_factory=Command)
    ballot: Ballot = Ballot(0)
    status: Status = Status.NONE
    seq: int = 0
    dep: dict[ID, int] = field(default_factory=dict)
    request: Any = None
    quorum: Any = None
    changed: bool = False

    def merge(self, seq: int, dep: Mapping[ID, int]) -> None:
        """Raise seq and dependencies to the given ones, noting any change."""
        if seq > self.seq:
            self.seq = seq
            self.changed = True
        for ident, d in dep.items():
            if d > self.dep.get(ident, 0):
                self.dep[ident] = d
                self.changed = True

    def copy_dep(self) -> dict[ID, int]:
        """Return a copy of the dependency map."""
        return dict(self.dep)


@dataclass(frozen=True)
class PreAccept:
    ballot: Ballot = Ballot(0)
    replica: ID = ID("")
    slot: int = 0
    command: Command = field(default_factory=Command)
    seq: int = 0
    dep: dict[ID, int] = field(default_factory=dict)

    def __str__(self) -> str:
        return (
            f"PreAccept {{bal={int(self.ballot)} id={self.replica} s={self.slot} "
            f"cmd={self.command} seq={self.seq} dep={_format_map(self.dep)}}}"
        )


@dataclass(frozen=True)
class PreAcceptReply:
    ballot: Ballot = Ballot(0)
    replica: ID = ID("")
    slot: int = 0
    seq: int = 0
    dep: dict[ID, int] = field(default_factory=dict)
    committed: dict[ID, int] = field(default_factory=dict)

    def __str__(self) -> str:
        return (
            f"PreAcceptReply {{bal={int(self.ballot)} id={self.replica} s={self.slot} "
            f"seq={self.seq} dep={_format_map(self.dep)} c={_format_map(self.committed)}}}"
        )


@dataclass(frozen=True)
class Accept:
    ballot: Ballot = Ballot(0)
    replica: ID = ID("")
    slot: int = 0
    seq: int = 0
    dep: dict[ID, int] = field(default_factory=dict)


@dataclass(frozen=True)
class AcceptReply:
    ballot: Ballot = Ballot(0)
    replica: ID = ID("")
    slot: int = 0


@dataclass(frozen=True)
class Commit:
    ballot: Ballot = Ballot(0)
    replica: ID = ID("")
    slot: int = 0
    command: Command = field(default_factory=Command)
    seq: int = 0
    dep: dict[ID, int] = field(default_factory=dict)