"""CellCoord and CellCoordSet behaviour."""
from __future__ import annotations

import random

import pytest

from cubesphere.cell import CellCoord, CellCoordSet
from cubesphere.errors import InvariantViolation, PreconditionViolation


def _sample_coords():
    return [
        CellCoord(0, 1, 2),
        CellCoord(1, 1, 2),
        CellCoord(2, 0, 0),
        CellCoord(3, 7, 7),
        CellCoord(4, 3, 5),
        CellCoord(5, 6, 1),
    ]


def test_cell_coord_string_and_ordering():
    assert str(CellCoord(1, 2, 3)) == "(1 / 2, 3)"
    assert CellCoord(0, 5, 5) < CellCoord(1, 0, 0)
    assert CellCoord(2, 3, 4) == CellCoord(2, 3, 4)


def test_add_and_delete_track_count():
    coords = _sample_coords()
    cell_set = CellCoordSet()
    cell_set.add(*coords)
    assert cell_set.count == 6
    assert len(cell_set) == 6

    # //1.- Delete four members, including the current last slot.
    for coord in (coords[0], coords[5], coords[2], coords[3]):
        cell_set.delete(coord)
    assert cell_set.count == 2
    assert set(cell_set) == {coords[1], coords[4]}
    assert coords[0] not in cell_set
    assert cell_set.contains(coords[4])


def test_add_ignores_duplicates_and_delete_ignores_missing():
    cell_set = CellCoordSet()
    cell_set.add(CellCoord(0, 0, 0), CellCoord(0, 0, 0))
    assert cell_set.count == 1
    cell_set.delete(CellCoord(5, 5, 5))
    assert cell_set.count == 1


def test_get_and_clear():
    cell_set = CellCoordSet()
    cell_set.add(CellCoord(3, 1, 1))
    assert cell_set.get(0) == CellCoord(3, 1, 1)
    cell_set.clear()
    assert cell_set.count == 0
    assert list(cell_set) == []


def test_iteration_survives_mutation():
    coords = _sample_coords()
    cell_set = CellCoordSet()
    cell_set.add(*coords)
    for coord in cell_set:
        cell_set.delete(coord)
    assert cell_set.count == 0


def test_pop_random_drains_every_member_once():
    coords = _sample_coords()
    cell_set = CellCoordSet(random.Random(7))
    cell_set.add(*coords)
    popped = [cell_set.pop_random() for _ in range(len(coords))]
    assert sorted(popped) == sorted(coords)
    assert cell_set.count == 0


def test_random_is_reproducible_with_seeded_generator():
    coords = _sample_coords()
    first = CellCoordSet(random.Random(3))
    second = CellCoordSet(random.Random(3))
    first.add(*coords)
    second.add(*coords)
    assert [first.pop_random() for _ in coords] == [second.pop_random() for _ in coords]


def test_random_does_not_remove():
    cell_set = CellCoordSet()
    cell_set.add(CellCoord(1, 1, 1))
    assert cell_set.random() == CellCoord(1, 1, 1)
    assert cell_set.count == 1


def test_empty_set_rejects_random_picks():
    cell_set = CellCoordSet()
    with pytest.raises(PreconditionViolation):
        cell_set.random()
    with pytest.raises(PreconditionViolation):
        cell_set.pop_random()


def test_repr_lists_map_and_slice():
    cell_set = CellCoordSet()
    cell_set.add(CellCoord(0, 1, 2))
    text = repr(cell_set)
    assert "(0 / 1, 2) = 0" in text
    assert "[0] : (0 / 1, 2)" in text


def test_corrupted_bookkeeping_raises_invariant_violation():
    cell_set = CellCoordSet()
    cell_set.add(CellCoord(0, 1, 1))
    # //1.- Leave a dangling index entry with no backing list slot.
    cell_set._index[CellCoord(9, 9, 9)] = 0
    with pytest.raises(InvariantViolation):
        cell_set.add(CellCoord(0, 2, 2))
    with pytest.raises(InvariantViolation):
        cell_set.delete(CellCoord(3, 3, 3))
