"""The eight lattice directions, clockwise from up."""
from __future__ import annotations

from enum import IntEnum
from typing import Tuple


class Direction(IntEnum):
    """Neighbor direction in a face's ``(u, v)`` lattice; ``v`` grows downward."""

    N = 0
    NE = 1
    E = 2
    SE = 3
    S = 4
    SW = 5
    W = 6
    NW = 7

    @property
    def offset(self) -> Tuple[int, int]:
        return OFFSETS[self]


OFFSETS: Tuple[Tuple[int, int], ...] = (
    (0, -1),  # up
    (1, -1),
    (1, 0),  # right
    (1, 1),
    (0, 1),  # down
    (-1, 1),
    (-1, 0),  # left
    (-1, -1),
)


__all__ = ["Direction", "OFFSETS"]
