"""Commands and a multi-version key-value store that executes them."""

from __future__ import annotations

import base64
import json
import threading
from dataclasses import dataclass
from typing import Iterable

from .identity import ID


@dataclass
class Command:
    """A read (value is None) or write against one key."""

    key: int = 0
    value: bytes | None = None
    client_id: ID = ID("")
    command_id: int = 0

    def empty(self) -> bool:
        """Whether every field holds its zero value."""
        return self.key == 0 and self.value is None and self.client_id == "" and self.command_id == 0

    def is_read(self) -> bool:
        """Whether the command reads a value."""
        return self.value is None

    def is_write(self) -> bool:
        """Whether the command writes a value."""
        return self.value is not None

    def __str__(self) -> str:
        if self.value is None:
            return f"Get{{key={self.key} id={self.client_id} cid={self.command_id}}}"
        return (
            f"Put{{key={self.key} value={bytes(self.value).hex()} "
            f"id={self.client_id} cid={self.command_id}}}"
        )


class Database:
    """A thread-safe key-value store that can keep every written value."""

    def __init__(self, multiversion: bool = False) -> None:
        self._lock = threading.RLock()
        self._data: dict[int, bytes] = {}
        self._version = 0
        self._multiversion = multiversion
        self._history: dict[int, list[bytes]] = {}

    def _put(self, key: int, value: bytes | None) -> None:
        if value is None:
            return
        self._data[key] = value
        self._version += 1
        if self._multiversion:
            self._history.setdefault(key, []).append(value)

    def execute(self, command: Command) -> bytes | None:
        """Apply a command and return the value held before it."""
        with self._lock:
            previous = self._data.get(command.key)
            self._put(command.key, command.value)
            return previous

    def get(self, key: int) -> bytes | None:
        """Return the current value of ``key``."""
        with self._lock:
            return self._data.get(key)

    def put(self, key: int, value: bytes | None) -> None:
        """Store a new value for ``key``; None is ignored."""
        with self._lock:
            self._put(key, value)

    def version(self, key: int) -> int:
        """Return the number of writes applied to the store."""
        with self._lock:
            return self._version

    def history(self, key: int) -> list[bytes]:
        """Return every value written to ``key``, oldest first."""
        with self._lock:
            return list(self._history.get(key, ()))

    def __str__(self) -> str:
        with self._lock:
            data = {
                str(k): base64.b64encode(self._data[k]).decode("ascii")
                for k in sorted(self._data, key=str)
            }
        return json.dumps(data, separators=(",", ":"))


def conflict(gamma: Command, delta: Command) -> bool:
    """Whether reordering two commands could change the final state."""
    return gamma.key == delta.key and not (gamma.is_read() and delta.is_read())


def conflict_batch(batch1: Iterable[Command], batch2: Iterable[Command]) -> bool:
    """Whether any command of one batch conflicts with one of the other."""
    second = list(batch2)
    return any(conflict(a, b) for a in batch1 for b in second)