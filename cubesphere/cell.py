"""Cell addresses and the swap-remove set used as a traversal worklist."""
from __future__ import annotations

from dataclasses import dataclass
import random as _random
from typing import Dict, Iterator, List, Optional

from .errors import InvariantViolation, PreconditionViolation


@dataclass(frozen=True, order=True)
class CellCoord:
    """Address of one grid cell: cube ``face`` plus lattice column ``u`` and row ``v``."""

    face: int
    u: int
    v: int

    def __str__(self) -> str:
        return f"({self.face} / {self.u}, {self.v})"


class CellCoordSet:
    """Unordered set of unique :class:`CellCoord` values with O(1) random pick.

    Members live in a dense list while a dict maps each member to its list
    position. Deleting swaps the last member into the freed slot, so add,
    delete, membership and uniform sampling are all constant time.

    The set is a single-owner scratch structure. It is not safe for concurrent
    mutation; callers sharing one across threads must serialize access.
    """

    def __init__(self, rng: Optional[_random.Random] = None) -> None:
        self._index: Dict[CellCoord, int] = {}
        self._items: List[CellCoord] = []
        self._rng = rng if rng is not None else _random.Random()

    def add(self, *coords: CellCoord) -> None:
        """Insert each coordinate; coordinates already present are ignored."""

        for coord in coords:
            if coord in self._index:
                continue
            self._items.append(coord)
            self._index[coord] = len(self._items) - 1
            if __debug__:
                self._check_length()

    def contains(self, coord: CellCoord) -> bool:
        return coord in self._index

    __contains__ = contains

    def delete(self, coord: CellCoord) -> None:
        """Remove ``coord`` if present by swapping the last member into its slot."""

        position = self._index.pop(coord, None)
        if position is not None:
            last = self._items[-1]
            if position != len(self._items) - 1:
                self._items[position] = last
                self._index[last] = position
            self._items.pop()
        if __debug__:
            self._check_length()

    @property
    def count(self) -> int:
        return len(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[CellCoord]:
        return iter(list(self._items))

    def get(self, position: int) -> CellCoord:
        return self._items[position]

    def random(self, rng: Optional[_random.Random] = None) -> CellCoord:
        """Return a uniformly chosen member without removing it."""

        if not self._items:
            raise PreconditionViolation("Cannot pick a random member of an empty CellCoordSet")
        generator = rng if rng is not None else self._rng
        return self._items[generator.randrange(len(self._items))]

    def pop_random(self, rng: Optional[_random.Random] = None) -> CellCoord:
        """Remove and return a uniformly chosen member."""

        if not self._items:
            raise PreconditionViolation("Cannot pop_random from an empty CellCoordSet")
        coord = self.random(rng)
        self.delete(coord)
        return coord

    def clear(self) -> None:
        self._index = {}
        self._items = []

    def __repr__(self) -> str:
        lines = ["Map", "------------------"]
        lines.extend(f"{coord} = {position}" for coord, position in self._index.items())
        lines.extend(["", "Slice", "----------------"])
        lines.extend(f"[{position}] : {coord}" for position, coord in enumerate(self._items))
        return "\n".join(lines)

    def _check_length(self) -> None:
        if len(self._items) != len(self._index):
            raise InvariantViolation(
                f"CellCoordSet index holds {len(self._index)} entries "
                f"but the backing list holds {len(self._items)}"
            )


__all__ = ["CellCoord", "CellCoordSet"]
