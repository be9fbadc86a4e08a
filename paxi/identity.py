"""Node identifiers of the form ``zone.node``."""

from __future__ import annotations

import logging

_log = logging.getLogger(__name__)

_UINT64_LIMIT = 1 << 64


def _parse_uint(text: str) -> int | None:
    """Parse an unsigned decimal integer, returning None when it is not one."""
    if text.isascii() and text.isdigit():
        value = int(text)
        if value < _UINT64_LIMIT:
            return value
    return None


class ID(str):
    """A node identifier written as ``zone.node``."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"ID({str.__repr__(self)})"

    def zone(self) -> int:
        """Return the zone component, or 0 when it cannot be read."""
        if "." not in self:
            _log.warning('id %s does not contain "."', self)
            return 0
        part = self.split(".")[0]
        zone = _parse_uint(part)
        if zone is None:
            _log.error("Failed to convert Zone %s to int", part)
            return 0
        return zone

    def node(self) -> int:
        """Return the node component, or 0 when it cannot be read."""
        if "." not in self:
            _log.warning('id %s does not contain "."', self)
            part = str(self)
        else:
            part = self.split(".")[1]
        node = _parse_uint(part)
        if node is None:
            _log.error("Failed to convert Node %s to int", part)
            return 0
        return node


def new_id(zone: int, node: int) -> ID:
    """Build an ID from zone and node numbers; signs are dropped."""
    return ID(f"{abs(zone)}.{abs(node)}")


def id_sort_key(id: str) -> tuple[int, int]:
    """Sort key ordering identifiers by zone, then by node."""
    ident = id if isinstance(id, ID) else ID(id)
    return ident.zone(), ident.node()