"""Small container types: a stack, a queue and thread-safe maps and sets."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Hashable


class Stack:
    """A last-in first-out stack."""

    def __init__(self) -> None:
        self._items: list[Any] = []

    def push(self, value: Any) -> None:
        """Put a value on top of the stack."""
        self._items.append(value)

    def pop(self) -> Any:
        """Remove and return the top value, or None when empty."""
        return self._items.pop() if self._items else None

    def peek(self) -> Any:
        """Return the top value without removing it, or None when empty."""
        return self._items[-1] if self._items else None

    def empty(self) -> bool:
        """Whether the stack holds nothing."""
        return not self._items

    def __len__(self) -> int:
        return len(self._items)


class Queue:
    """A first-in first-out queue."""

    def __init__(self) -> None:
        self._items: deque[Any] = deque()

    def push(self, item: Any) -> None:
        """Append an item at the tail."""
        self._items.append(item)

    def pop(self) -> Any:
        """Remove and return the head item, or None when empty."""
        return self._items.popleft() if self._items else None

    def __len__(self) -> int:
        return len(self._items)


class CMap:
    """A dictionary safe for use from several threads."""

    def __init__(self) -> None:
        self._data: dict[Hashable, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Any:
        """Return the value for key, or None when absent."""
        with self._lock:
            return self._data.get(key)

    def put(self, key: Hashable, value: Any) -> None:
        """Store value under key."""
        with self._lock:
            self._data[key] = value

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def keys(self) -> list[Hashable]:
        """Return a snapshot of the keys."""
        with self._lock:
            return list(self._data)


class CSet:
    """A set safe for use from several threads."""

    def __init__(self) -> None:
        self._items: set[Hashable] = set()
        self._lock = threading.Lock()

    def put(self, item: Hashable) -> None:
        """Add an item."""
        with self._lock:
            self._items.add(item)

    def get(self) -> Any:
        """Return an arbitrary member, or None when empty."""
        with self._lock:
            return next(iter(self._items), None)

    def __contains__(self, item: object) -> bool:
        with self._lock:
            return item in self._items

    def remove(self, item: Hashable) -> None:
        """Remove an item if present."""
        with self._lock:
            self._items.discard(item)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def to_list(self) -> list[Any]:
        """Return a snapshot of the members."""
        with self._lock:
            return list(self._items)


class MMap:
    """A thread-safe two-level map: key, then secondary key, to value."""

    def __init__(self) -> None:
        self._data: dict[Hashable, dict[Hashable, Any]] = {}
        self._lock = threading.Lock()

    def keys(self) -> list[Hashable]:
        """Return the primary keys."""
        with self._lock:
            return list(self._data)

    def secondary_keys(self, key: Hashable) -> list[Hashable]:
        """Return the secondary keys under a primary key."""
        with self._lock:
            return list(self._data.get(key, {}))

    def get(self, key: Hashable, key2: Hashable) -> Any:
        """Return the value under both keys, or None when absent."""
        with self._lock:
            return self._data.get(key, {}).get(key2)

    def put(self, key: Hashable, key2: Hashable, value: Any) -> None:
        """Store value under both keys."""
        with self._lock:
            self._data.setdefault(key, {})[key2] = value