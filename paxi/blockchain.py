"""Blocks mined by proof of work."""

from __future__ import annotations

import hashlib
import logging
import struct
from dataclasses import dataclass, field

_log = logging.getLogger(__name__)

PREFIX = bytes(4)
"""Leading zero bytes a block hash needs as proof of work."""


def _uint64(value: int) -> bytes:
    return struct.pack("<Q", value)


@dataclass
class Block:
    """A block of data linked to the hash of its predecessor."""

    index: int = 0
    nonce: int = 0
    data: bytes = b""
    prev: bytes = b""
    hash: bytes = b""
    successor: Block | None = field(default=None, repr=False, compare=False)

    def to_bytes(self) -> bytes:
        """The bytes that are hashed: little-endian index, data, previous hash."""
        return _uint64(self.index) + bytes(self.data) + bytes(self.prev)

    def mine(self, prefix: bytes = PREFIX) -> None:
        """Find a nonce whose hash starts with ``prefix`` and record both.

        Each candidate nonce is appended to the running digest, so the hash
        for nonce ``i`` covers the block bytes followed by nonces 0 to ``i``.
        """
        _log.debug("start mining block %d", self.index)
        hasher = hashlib.sha256(self.to_bytes())
        for nonce in range(1 << 64):
            hasher.update(_uint64(nonce))
            digest = hasher.digest()
            if digest.startswith(prefix):
                self.nonce = nonce
                self.hash = digest
                _log.debug("block %d nonce found %d", self.index, nonce)
                return
        raise RuntimeError(f"cannot find nonce for block {self.index}")

    def next(self, data: bytes, prefix: bytes = PREFIX) -> Block:
        """Mine and link the block that follows this one."""
        block = Block(index=self.index + 1, data=data, prev=self.hash)
        block.mine(prefix)
        self.successor = block
        return block


def genesis(prefix: bytes = PREFIX) -> Block:
    """Mine the first block: 1024 zero data bytes and a 256-byte zero hash."""
    block = Block(index=0, data=bytes(1024), prev=bytes(256))
    block.mine(prefix)
    return block