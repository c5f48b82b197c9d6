"""Append-only store of mutable cells.

Every name in an environment denotes an address here, and pairs and
references hold addresses too, so all mutation in a program is a `write`.
Addresses are handed out in increasing order and are never reclaimed.
"""

from __future__ import annotations

from typing import Iterator

from kont import Address, KontValue
from kont.errors import InvalidReferenceError


class Store:
    """Growable array of values indexed by 0-based address."""

    __slots__ = ("cells",)

    def __init__(self):
        self.cells: list[KontValue] = []

    def allocate(self, value: KontValue) -> Address:
        """Append `value` and return its new address."""
        self.cells.append(value)
        return len(self.cells) - 1

    def _check(self, address: Address) -> None:
        if not isinstance(address, int) or isinstance(address, bool) \
                or address < 0 or address >= len(self.cells):
            raise InvalidReferenceError(address, len(self.cells))

    def read(self, address: Address) -> KontValue:
        self._check(address)
        return self.cells[address]

    def write(self, address: Address, value: KontValue) -> None:
        self._check(address)
        self.cells[address] = value

    def snapshot(self) -> list[str]:
        """Printable rendering of every cell, in address order."""
        from kont.types.values import format_value
        return [format_value(v) for v in self.cells]

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[KontValue]:
        return iter(self.cells)

    def __repr__(self) -> str:
        return f"<Store size={len(self.cells)}>"
