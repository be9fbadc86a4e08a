"""Messages of the Dynamo-style replicated store."""

from __future__ import annotations

from dataclasses import dataclass, field

from .db import Command


@dataclass(frozen=True)
class Replicate:
    """Carries a write to the replicas of its key."""

    command: Command = field(default_factory=Command)