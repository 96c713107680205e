"""Cube-sphere grid: six ``N x N`` face lattices warped onto the unit sphere.

The grid is built once from its resolution and never mutated afterwards.
Every lattice point and every cell center is computed eagerly in cube space,
warped onto the sphere and converted to latitude/longitude. The resulting
arrays are read-only, so a grid can be shared between threads freely.

Index layout, with ``N`` the resolution:

* point ``(face, u, v)`` for ``u, v`` in ``[0, N]`` lives at
  ``face * (N + 1) ** 2 + v * (N + 1) + u``;
* cell ``(face, u, v)`` for ``u, v`` in ``[0, N)`` lives at
  ``face * N * N + v * N + u``.

A cell whose first corner is point ``i`` has corners ``i, i + 1, i + N + 2,
i + N + 1`` in that winding order.
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple, Union

import numpy as np

from .angles import HALF_PI, TO_DEGREES
from .cell import CellCoord
from .directions import OFFSETS, Direction
from .errors import PreconditionViolation
from .faces import (
    build_face0_points,
    cross_edge,
    face_points_from_face0,
    project_to_face,
    unwarp_minor_axes,
)
from .latlon import LatLon
from .vector import Vector3

LOGGER = logging.getLogger(__name__)

FACE_COUNT = 6
_UNIT_SNAP = 1e-8
_POLE_TOLERANCE = 1e-6


class Grid:
    """Immutable cube-sphere grid of resolution ``N`` (even)."""

    def __init__(self, resolution: int) -> None:
        # //1.- Validate the resolution before any array is sized from it.
        if isinstance(resolution, bool) or int(resolution) != resolution:
            raise PreconditionViolation(f"Resolution must be an integer, got {resolution!r}")
        resolution = int(resolution)
        if resolution <= 0 or resolution % 2 != 0:
            raise PreconditionViolation(f"Resolution must be a positive even number, got {resolution}")

        self.resolution = resolution
        self.spacing = 2.0 / resolution
        self.cells_per_face = resolution * resolution
        self.points_per_face = (resolution + 1) * (resolution + 1)
        self.num_points = self.points_per_face * FACE_COUNT
        self.num_cells = self.cells_per_face * FACE_COUNT

        # //2.- Lay out face 0 and derive the other faces by rigid transforms.
        self.cube_points = face_points_from_face0(build_face0_points(resolution))
        # //3.- Cell centers are the midpoint of each cell's diagonal corners.
        first_corners = self._first_corner_indexes()
        self.cube_centers = (
            self.cube_points[first_corners] + self.cube_points[first_corners + resolution + 2]
        ) / 2.0
        # //4.- Warp everything onto the sphere and cache geographic coordinates.
        self.sphere_points = _warp_to_sphere(self.cube_points)
        self.sphere_centers = _warp_to_sphere(self.cube_centers)
        self.point_lat_lons = _to_lat_lon_array(self.sphere_points)
        self.center_lat_lons = _to_lat_lon_array(self.sphere_centers)
        self.cell_coords: Tuple[CellCoord, ...] = tuple(
            CellCoord(face, u, v)
            for face in range(FACE_COUNT)
            for v in range(resolution)
            for u in range(resolution)
        )

        for array in (
            self.cube_points,
            self.cube_centers,
            self.sphere_points,
            self.sphere_centers,
            self.point_lat_lons,
            self.center_lat_lons,
        ):
            array.flags.writeable = False

        LOGGER.debug(
            "Built cube-sphere grid resolution=%d points=%d cells=%d",
            resolution,
            self.num_points,
            self.num_cells,
        )

    def __repr__(self) -> str:
        return f"Grid(resolution={self.resolution})"

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------
    def _first_corner_indexes(self) -> np.ndarray:
        n = self.resolution
        face, v, u = np.meshgrid(
            np.arange(FACE_COUNT), np.arange(n), np.arange(n), indexing="ij"
        )
        return (face * self.points_per_face + v * (n + 1) + u).ravel()

    def point_index(self, face: int, u: int, v: int) -> int:
        return face * self.points_per_face + v * (self.resolution + 1) + u

    def cell_coord_to_cell_index(self, coord: CellCoord) -> int:
        return coord.face * self.cells_per_face + coord.v * self.resolution + coord.u

    def cell_index_to_cell_coord(self, index: int) -> CellCoord:
        face, remainder = divmod(index, self.cells_per_face)
        v, u = divmod(remainder, self.resolution)
        return CellCoord(face, u, v)

    def _corner_indexes(self, coord: CellCoord) -> List[int]:
        i = self.point_index(coord.face, coord.u, coord.v)
        n = self.resolution
        return [i, i + 1, i + n + 2, i + n + 1]

    def get_cell_cube_vecs(self, coord: CellCoord) -> List[Vector3]:
        """Cube-space corners of a cell in winding order."""

        return [_row_vector(self.cube_points, i) for i in self._corner_indexes(coord)]

    def get_cell_sphere_vecs(self, coord: CellCoord) -> List[Vector3]:
        """Sphere-space corners of a cell in the same winding order as the cube corners."""

        return [_row_vector(self.sphere_points, i) for i in self._corner_indexes(coord)]

    def cell_coord_to_cube_center_vec(self, coord: CellCoord) -> Vector3:
        return _row_vector(self.cube_centers, self.cell_coord_to_cell_index(coord))

    def cell_coord_to_sphere_center_vec(self, coord: CellCoord) -> Vector3:
        return _row_vector(self.sphere_centers, self.cell_coord_to_cell_index(coord))

    def cell_coord_to_center_lat_lon(self, coord: CellCoord) -> LatLon:
        lat, lon = self.center_lat_lons[self.cell_coord_to_cell_index(coord)]
        return LatLon(float(lat), float(lon))

    def point_lat_lon(self, index: int) -> LatLon:
        lat, lon = self.point_lat_lons[index]
        return LatLon(float(lat), float(lon))

    # ------------------------------------------------------------------
    # Cube <-> sphere
    # ------------------------------------------------------------------
    def cube_vec_to_sphere_vec(self, point: Vector3) -> Vector3:
        """Warp a cube-space point onto the unit sphere.

        Uses ``x' = x * sqrt(1 - y^2/2 - z^2/2 + y^2 z^2 / 3)`` and its cyclic
        counterparts, then renormalizes. Points far off the unit cube can make
        a radicand negative, which is a caller error.
        """

        x2, y2, z2 = point.x * point.x, point.y * point.y, point.z * point.z
        radicands = (
            1.0 - y2 / 2.0 - z2 / 2.0 + y2 * z2 / 3.0,
            1.0 - z2 / 2.0 - x2 / 2.0 + z2 * x2 / 3.0,
            1.0 - x2 / 2.0 - y2 / 2.0 + x2 * y2 / 3.0,
        )
        if any(r < 0.0 or math.isnan(r) for r in radicands):
            raise PreconditionViolation(f"Point {point} does not warp onto the sphere")
        warped = Vector3(
            point.x * math.sqrt(radicands[0]),
            point.y * math.sqrt(radicands[1]),
            point.z * math.sqrt(radicands[2]),
        )
        return warped.normalized()

    def sphere_vec_to_cube_vec(self, point: Vector3) -> Vector3:
        """Map a unit sphere point back onto the cube surface.

        The dominant axis picks the face pair and is pinned to ``+-1`` by its
        sign: ``y`` first (top ``+1`` / bottom ``-1``), then ``x`` (right
        ``+1`` / left ``-1``), otherwise ``z`` (back ``+1`` / front ``-1``;
        back is positive because ``+Z`` points into the screen). The two
        remaining components are recovered in closed form and keep their
        input signs on every face.
        """

        x, y, z = point.x, point.y, point.z
        fx, fy, fz = abs(x), abs(y), abs(z)
        if fy >= fx and fy >= fz:
            res_x, res_z = unwarp_minor_axes(x, z)
            return Vector3(res_x, 1.0 if y > 0 else -1.0, res_z)
        if fx >= fy and fx >= fz:
            res_y, res_z = unwarp_minor_axes(y, z)
            return Vector3(1.0 if x > 0 else -1.0, res_y, res_z)
        res_x, res_y = unwarp_minor_axes(x, y)
        return Vector3(res_x, res_y, 1.0 if z > 0 else -1.0)

    # ------------------------------------------------------------------
    # Point lookup
    # ------------------------------------------------------------------
    def get_uv(self, s: float, t: float) -> Tuple[int, int]:
        """Lattice cell of in-face coordinates ``(s, t)`` in ``[-1, 1]``."""

        last = self.resolution - 1
        u = min(max(math.floor((s + 1.0) / self.spacing), 0), last)
        v = min(max(math.floor((t + 1.0) / self.spacing), 0), last)
        return u, v

    def cube_vec_to_cell_coord(self, point: Vector3) -> CellCoord:
        face, s, t = project_to_face(point.x, point.y, point.z)
        u, v = self.get_uv(s, t)
        return CellCoord(int(face), u, v)

    def sphere_vec_to_cell_coord(self, point: Vector3) -> CellCoord:
        return self.cube_vec_to_cell_coord(self.sphere_vec_to_cube_vec(point))

    def lat_lon_to_cell_coord(self, lat_lon: LatLon) -> CellCoord:
        return self.sphere_vec_to_cell_coord(Vector3.from_lat_lon(lat_lon))

    def lat_lon_to_cell_index(self, lat_lon: LatLon) -> int:
        return self.cell_coord_to_cell_index(self.lat_lon_to_cell_coord(lat_lon))

    # ------------------------------------------------------------------
    # Neighbors
    # ------------------------------------------------------------------
    def get_neighbor(
        self, coord: CellCoord, direction: Union[Direction, int]
    ) -> Optional[CellCoord]:
        """Neighbor of ``coord`` one step in ``direction``.

        Steps that stay on the face are plain offsets. Steps leaving through
        one edge follow the face transition table. Diagonal steps leaving
        through two edges at once (a cube corner) have no neighbor and return
        ``None``.
        """

        if not 0 <= int(direction) < len(OFFSETS):
            raise PreconditionViolation(f"Unknown direction {direction!r}")
        du, dv = OFFSETS[int(direction)]
        new_u = coord.u + du
        new_v = coord.v + dv
        on_u = 0 <= new_u < self.resolution
        on_v = 0 <= new_v < self.resolution
        if on_u and on_v:
            return CellCoord(coord.face, new_u, new_v)
        if not on_u and not on_v:
            return None
        return cross_edge(coord, new_u, new_v, self.resolution)

    def get_neighbor_cell_coords(self, coord: CellCoord) -> List[CellCoord]:
        """All existing neighbors in direction order; corner gaps are skipped."""

        neighbors: List[CellCoord] = []
        for direction in Direction:
            neighbor = self.get_neighbor(coord, direction)
            if neighbor is not None:
                neighbors.append(neighbor)
        return neighbors

    def get_neighbor_cell_indexes(self, coord: CellCoord) -> List[int]:
        return [self.cell_coord_to_cell_index(c) for c in self.get_neighbor_cell_coords(coord)]


def _row_vector(array: np.ndarray, index: int) -> Vector3:
    x, y, z = array[index]
    return Vector3(float(x), float(y), float(z))


def _warp_to_sphere(points: np.ndarray) -> np.ndarray:
    """Vectorized form of :meth:`Grid.cube_vec_to_sphere_vec` over an ``(n, 3)`` array."""

    sq = points * points
    x2, y2, z2 = sq[:, 0], sq[:, 1], sq[:, 2]
    radicands = np.stack(
        [
            1.0 - y2 / 2.0 - z2 / 2.0 + y2 * z2 / 3.0,
            1.0 - z2 / 2.0 - x2 / 2.0 + z2 * x2 / 3.0,
            1.0 - x2 / 2.0 - y2 / 2.0 + x2 * y2 / 3.0,
        ],
        axis=1,
    )
    if np.any(radicands < 0.0) or np.any(np.isnan(radicands)):
        raise PreconditionViolation("Cube points do not warp onto the sphere")
    warped = points * np.sqrt(radicands)
    norms = np.linalg.norm(warped, axis=1)
    if np.any(norms == 0.0):
        raise PreconditionViolation("Cannot normalize a warped point of magnitude zero")
    # Rows already within tolerance of unit length are kept as computed.
    norms = np.where(np.abs(norms - 1.0) < _UNIT_SNAP, 1.0, norms)
    return warped / norms[:, np.newaxis]


def _to_lat_lon_array(points: np.ndarray) -> np.ndarray:
    """Latitude/longitude in degrees for every row of a unit-vector array."""

    points = np.asarray(points, dtype=float)
    phi = np.arcsin(np.clip(points[:, 1], -1.0, 1.0))
    at_pole = np.abs(np.abs(phi) - HALF_PI) < _POLE_TOLERANCE
    lam = np.where(at_pole, 0.0, np.arctan2(points[:, 0], -points[:, 2]))
    return np.stack([phi * TO_DEGREES, lam * TO_DEGREES], axis=1)


__all__ = ["Grid", "FACE_COUNT"]
