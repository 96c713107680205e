"""Neighbor lookup across face edges at resolution 8."""
from __future__ import annotations

import pytest

from cubesphere.cell import CellCoord
from cubesphere.directions import OFFSETS, Direction
from cubesphere.errors import PreconditionViolation

NEIGHBOR_CASES = [
    # Cube corners have no diagonal neighbor.
    ((2, 7, 0), Direction.NE, None),
    ((0, 0, 0), Direction.NW, None),
    ((4, 7, 7), Direction.SE, None),
    # Face 0.
    ((0, 7, 3), Direction.E, (1, 0, 3)),
    ((0, 2, 7), Direction.SE, (5, 0, 4)),
    ((0, 6, 0), Direction.NW, (4, 0, 5)),
    ((0, 0, 5), Direction.SW, (3, 7, 6)),
    ((0, 2, 0), Direction.NW, (4, 0, 1)),
    # Face 1.
    ((1, 7, 3), Direction.SE, (2, 0, 4)),
    ((1, 3, 0), Direction.N, (4, 3, 7)),
    ((1, 3, 3), Direction.E, (1, 4, 3)),
    ((1, 0, 3), Direction.W, (0, 7, 3)),
    # Face 2.
    ((2, 7, 5), Direction.NE, (3, 0, 4)),
    ((2, 0, 5), Direction.W, (1, 7, 5)),
    ((2, 6, 7), Direction.SW, (5, 7, 5)),
    ((2, 6, 0), Direction.NE, (4, 7, 0)),
    # Face 3.
    ((3, 0, 5), Direction.SW, (2, 7, 6)),
    ((3, 7, 5), Direction.SE, (0, 0, 6)),
    ((3, 5, 0), Direction.NE, (4, 1, 0)),
    ((3, 1, 7), Direction.SW, (5, 7, 7)),
    # Face 4.
    ((4, 3, 0), Direction.NW, (3, 5, 0)),
    ((4, 0, 5), Direction.SW, (0, 6, 0)),
    ((4, 7, 2), Direction.NE, (2, 5, 1)),
    ((4, 2, 7), Direction.SE, (1, 3, 0)),
]


@pytest.mark.parametrize("source, direction, expected", NEIGHBOR_CASES)
def test_get_neighbor(grid8, source, direction, expected):
    result = grid8.get_neighbor(CellCoord(*source), direction)
    if expected is None:
        assert result is None
    else:
        assert result == CellCoord(*expected)


def test_straight_down_from_face0_bottom_row(grid8):
    assert grid8.get_neighbor(CellCoord(0, 2, 7), Direction.S) == CellCoord(5, 0, 5)


def test_plain_integer_directions_are_accepted(grid8):
    assert grid8.get_neighbor(CellCoord(1, 3, 3), 2) == CellCoord(1, 4, 3)


def test_unknown_direction_is_rejected(grid8):
    with pytest.raises(PreconditionViolation):
        grid8.get_neighbor(CellCoord(1, 3, 3), 8)


def test_direction_offsets():
    assert Direction.N.offset == (0, -1)
    assert Direction.SE.offset == (1, 1)
    assert len(OFFSETS) == len(Direction)


def test_interior_cell_has_eight_neighbors_in_direction_order(grid8):
    neighbors = grid8.get_neighbor_cell_coords(CellCoord(1, 3, 3))
    assert neighbors == [
        CellCoord(1, 3, 2),
        CellCoord(1, 4, 2),
        CellCoord(1, 4, 3),
        CellCoord(1, 4, 4),
        CellCoord(1, 3, 4),
        CellCoord(1, 2, 4),
        CellCoord(1, 2, 3),
        CellCoord(1, 2, 2),
    ]
    assert grid8.get_neighbor_cell_indexes(CellCoord(1, 3, 3)) == [
        grid8.cell_coord_to_cell_index(c) for c in neighbors
    ]


def test_only_cube_corner_cells_lose_a_neighbor(grid8):
    counts = {}
    for coord in grid8.cell_coords:
        neighbors = grid8.get_neighbor_cell_coords(coord)
        # //1.- Every neighbor is a real cell distinct from the source.
        for neighbor in neighbors:
            assert 0 <= neighbor.face < 6
            assert 0 <= neighbor.u < grid8.resolution
            assert 0 <= neighbor.v < grid8.resolution
            assert neighbor != coord
        counts[len(neighbors)] = counts.get(len(neighbors), 0) + 1
    assert counts == {7: 24, 8: grid8.num_cells - 24}
