"""Frontier expansion over the grid's neighbor graph."""
from __future__ import annotations

from dataclasses import dataclass
import logging
import random
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from .cell import CellCoord, CellCoordSet
from .errors import PreconditionViolation
from .grid import Grid

LOGGER = logging.getLogger(__name__)

UNASSIGNED = -1


@dataclass(frozen=True)
class RegionGrowth:
    """Result of :func:`grow_regions`: one region id per cell index."""

    owners: np.ndarray
    seeds: Tuple[CellCoord, ...]

    def region_of(self, grid: Grid, coord: CellCoord) -> int:
        return int(self.owners[grid.cell_coord_to_cell_index(coord)])

    def sizes(self) -> Dict[int, int]:
        ids, counts = np.unique(self.owners, return_counts=True)
        return {int(region): int(count) for region, count in zip(ids, counts)}


def grow_regions(
    grid: Grid, seeds: Sequence[CellCoord], rng: Optional[random.Random] = None
) -> RegionGrowth:
    """Partition every cell of ``grid`` among the regions started at ``seeds``.

    Regions grow one random frontier cell at a time, claiming each unowned
    neighbor of the popped cell. The outcome depends only on ``rng``.
    """

    if not seeds:
        raise PreconditionViolation("grow_regions needs at least one seed cell")
    generator = rng if rng is not None else random.Random()
    owners = np.full(grid.num_cells, UNASSIGNED, dtype=np.int64)
    frontier = CellCoordSet(generator)

    # //1.- Claim the seed cells, rejecting duplicates that would share an owner slot.
    for region, seed in enumerate(seeds):
        index = grid.cell_coord_to_cell_index(seed)
        if owners[index] != UNASSIGNED:
            raise PreconditionViolation(f"Seed {seed} is listed more than once")
        owners[index] = region
        frontier.add(seed)

    # //2.- Expand a random frontier cell until no unclaimed neighbor remains.
    while len(frontier):
        cell = frontier.pop_random()
        region = owners[grid.cell_coord_to_cell_index(cell)]
        for neighbor in grid.get_neighbor_cell_coords(cell):
            index = grid.cell_coord_to_cell_index(neighbor)
            if owners[index] == UNASSIGNED:
                owners[index] = region
                frontier.add(neighbor)

    owners.flags.writeable = False
    LOGGER.debug("Grew %d regions over %d cells", len(seeds), grid.num_cells)
    return RegionGrowth(owners=owners, seeds=tuple(seeds))


__all__ = ["RegionGrowth", "grow_regions", "UNASSIGNED"]
