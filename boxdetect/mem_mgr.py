"""Registry of memory blocks handed out to callers, keyed by address."""

from __future__ import annotations

from collections.abc import Hashable
from enum import IntEnum


class MemType(IntEnum):
    """Kinds of memory block that the registry tracks."""

    RESULT = 0


class MemoryRegistry:
    """Maps addresses of handed-out blocks to the kind of block they are."""

    def __init__(self) -> None:
        self._blocks: dict[Hashable, MemType] = {}

    def add(self, address: Hashable, mem_type: MemType) -> bool:
        """Register ``address``; return False if it is already registered."""
        if address in self._blocks:
            return False
        self._blocks[address] = MemType(mem_type)
        return True

    def find(self, address: Hashable) -> MemType | None:
        """Return the kind registered for ``address``, or None if unknown."""
        return self._blocks.get(address)

    def erase(self, address: Hashable) -> bool:
        """Forget ``address``; return False if it was not registered."""
        return self._blocks.pop(address, None) is not None

    def __contains__(self, address: object) -> bool:
        return address in self._blocks

    def __len__(self) -> int:
        return len(self._blocks)