"""Cube face layout: face construction, face projection and edge crossings.

Faces are numbered ``0`` (left, ``x = -1``), ``1`` (front, ``z = -1``),
``2`` (right, ``x = 1``), ``3`` (back, ``z = 1``), ``4`` (top, ``y = 1``) and
``5`` (bottom, ``y = -1``). Faces 0-3 form a ring around the Y axis. Every face
is a rigid copy of face 0 and each face has its own ``(u, v)`` orientation, so
stepping off one face lands on a neighbor whose axes may be rotated or
mirrored. :data:`EDGE_TRANSITIONS` records, for each face and edge, where the
step lands and how the lattice coordinates are remapped.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
import math
from typing import Dict, Tuple

import numpy as np

from .cell import CellCoord


class Face(IntEnum):
    LEFT = 0
    FRONT = 1
    RIGHT = 2
    BACK = 3
    TOP = 4
    BOTTOM = 5


class Edge(Enum):
    """Side of a face a lattice step falls off."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class Remap(Enum):
    """How one output lattice coordinate is derived when crossing an edge.

    ``new_u``/``new_v`` are the stepped (possibly off-grid) coordinates on the
    source face and ``source`` is the cell the step started from.
    """

    NEW_U = "new_u"
    NEW_V = "new_v"
    FIRST = "first"
    LAST = "last"
    FLIP_NEW_U = "flip_new_u"
    SOURCE_V = "source_v"
    FLIP_SOURCE_V = "flip_source_v"

    def resolve(self, new_u: int, new_v: int, source: CellCoord, resolution: int) -> int:
        last = resolution - 1
        if self is Remap.NEW_U:
            return new_u
        if self is Remap.NEW_V:
            return new_v
        if self is Remap.FIRST:
            return 0
        if self is Remap.LAST:
            return last
        if self is Remap.FLIP_NEW_U:
            return last - new_u
        if self is Remap.SOURCE_V:
            return source.v
        return last - source.v


@dataclass(frozen=True)
class EdgeTransition:
    """Destination face plus the rules producing the destination ``u`` and ``v``."""

    face: Face
    u: Remap
    v: Remap

    def apply(self, source: CellCoord, new_u: int, new_v: int, resolution: int) -> CellCoord:
        return CellCoord(
            face=int(self.face),
            u=self.u.resolve(new_u, new_v, source, resolution),
            v=self.v.resolve(new_u, new_v, source, resolution),
        )


_T = EdgeTransition
_R = Remap

EDGE_TRANSITIONS: Dict[Tuple[Face, Edge], EdgeTransition] = {
    # Ring faces step sideways onto the adjacent ring face.
    (Face.LEFT, Edge.LEFT): _T(Face.BACK, _R.LAST, _R.NEW_V),
    (Face.FRONT, Edge.LEFT): _T(Face.LEFT, _R.LAST, _R.NEW_V),
    (Face.RIGHT, Edge.LEFT): _T(Face.FRONT, _R.LAST, _R.NEW_V),
    (Face.BACK, Edge.LEFT): _T(Face.RIGHT, _R.LAST, _R.NEW_V),
    (Face.LEFT, Edge.RIGHT): _T(Face.FRONT, _R.FIRST, _R.NEW_V),
    (Face.FRONT, Edge.RIGHT): _T(Face.RIGHT, _R.FIRST, _R.NEW_V),
    (Face.RIGHT, Edge.RIGHT): _T(Face.BACK, _R.FIRST, _R.NEW_V),
    (Face.BACK, Edge.RIGHT): _T(Face.LEFT, _R.FIRST, _R.NEW_V),
    # Ring faces step up onto the top face.
    (Face.LEFT, Edge.UP): _T(Face.TOP, _R.FIRST, _R.NEW_U),
    (Face.FRONT, Edge.UP): _T(Face.TOP, _R.NEW_U, _R.LAST),
    (Face.RIGHT, Edge.UP): _T(Face.TOP, _R.NEW_U, _R.FLIP_NEW_U),
    (Face.BACK, Edge.UP): _T(Face.TOP, _R.FLIP_NEW_U, _R.FIRST),
    # Ring faces step down onto the bottom face.
    (Face.LEFT, Edge.DOWN): _T(Face.BOTTOM, _R.FIRST, _R.FLIP_NEW_U),
    (Face.FRONT, Edge.DOWN): _T(Face.BOTTOM, _R.NEW_U, _R.FIRST),
    (Face.RIGHT, Edge.DOWN): _T(Face.BOTTOM, _R.LAST, _R.NEW_U),
    (Face.BACK, Edge.DOWN): _T(Face.BOTTOM, _R.FLIP_NEW_U, _R.LAST),
    # Top face.
    (Face.TOP, Edge.LEFT): _T(Face.LEFT, _R.NEW_V, _R.FIRST),
    (Face.TOP, Edge.RIGHT): _T(Face.RIGHT, _R.FLIP_SOURCE_V, _R.NEW_V),
    (Face.TOP, Edge.UP): _T(Face.BACK, _R.FLIP_NEW_U, _R.FIRST),
    (Face.TOP, Edge.DOWN): _T(Face.FRONT, _R.NEW_U, _R.FIRST),
    # Bottom face.
    (Face.BOTTOM, Edge.LEFT): _T(Face.LEFT, _R.FLIP_SOURCE_V, _R.NEW_V),
    (Face.BOTTOM, Edge.RIGHT): _T(Face.RIGHT, _R.SOURCE_V, _R.NEW_V),
    (Face.BOTTOM, Edge.UP): _T(Face.FRONT, _R.NEW_U, _R.LAST),
    (Face.BOTTOM, Edge.DOWN): _T(Face.BACK, _R.FLIP_NEW_U, _R.LAST),
}


def cross_edge(source: CellCoord, new_u: int, new_v: int, resolution: int) -> CellCoord:
    """Map a step that left the source face through exactly one edge.

    Exactly one of ``new_u``/``new_v`` must lie outside ``[0, resolution)``.
    """

    if new_u < 0:
        edge = Edge.LEFT
    elif new_u >= resolution:
        edge = Edge.RIGHT
    elif new_v < 0:
        edge = Edge.UP
    else:
        edge = Edge.DOWN
    transition = EDGE_TRANSITIONS[(Face(source.face), edge)]
    return transition.apply(source, new_u, new_v, resolution)


def build_face0_points(resolution: int) -> np.ndarray:
    """Lattice of face 0 on the plane ``x = -1``, shape ``((N+1)**2, 3)``.

    Rows run ``y`` from 1 down to -1 and columns run ``z`` from 1 down to -1,
    so point ``v * (N + 1) + u`` sits at ``(-1, y[v], z[u])``.
    """

    steps = np.linspace(1.0, -1.0, resolution + 1)
    ys, zs = np.meshgrid(steps, steps, indexing="ij")
    xs = np.full_like(ys, -1.0)
    return np.stack([xs.ravel(), ys.ravel(), zs.ravel()], axis=1)


def face_points_from_face0(face0: np.ndarray) -> np.ndarray:
    """Derive all six faces from face 0 by fixed rigid transforms.

    Returns an array of shape ``(6 * len(face0), 3)`` ordered face by face.
    """

    px, py, pz = face0[:, 0], face0[:, 1], face0[:, 2]
    one = np.ones_like(px)
    faces = (
        face0,
        np.stack([-pz, py, -one], axis=1),
        np.stack([one, py, -pz], axis=1),
        np.stack([pz, py, one], axis=1),
        np.stack([-pz, one, py], axis=1),
        np.stack([-pz, -one, -py], axis=1),
    )
    return np.concatenate(faces, axis=0)


def project_to_face(x: float, y: float, z: float) -> Tuple[Face, float, float]:
    """Pick the dominant face of a cube-space point and its in-face ``(s, t)``.

    ``s`` and ``t`` lie in ``[-1, 1]`` and increase with ``u`` and ``v``
    respectively, inverting :func:`face_points_from_face0` for every face.
    """

    fx, fy, fz = abs(x), abs(y), abs(z)
    if fx >= fy and fx >= fz:
        if x < 0:
            return Face.LEFT, -z, -y
        return Face.RIGHT, z, -y
    if fz > fx and fz > fy:
        if z < 0:
            return Face.FRONT, x, -y
        return Face.BACK, -x, -y
    if y < 0:
        return Face.BOTTOM, x, z
    return Face.TOP, x, -z


_INVERSE_SQRT2 = math.sqrt(0.5)


def unwarp_minor_axes(a: float, b: float) -> Tuple[float, float]:
    """Recover the two in-face cube coordinates from their sphere components.

    Closed-form inverse of the cube-to-sphere warp for the two non-dominant
    axes of a face. Zero inputs stay zero, results are clamped to ``1`` and
    each result takes the sign of its input.
    """

    a2 = a * a * 2.0
    b2 = b * b * 2.0
    inner = b2 - a2 - 3.0
    inner_sqrt = -math.sqrt(max(0.0, inner * inner - 12.0 * a2))
    res_a = 0.0 if a == 0.0 else math.sqrt(max(0.0, inner_sqrt + a2 - b2 + 3.0)) * _INVERSE_SQRT2
    res_b = 0.0 if b == 0.0 else math.sqrt(max(0.0, inner_sqrt - a2 + b2 + 3.0)) * _INVERSE_SQRT2
    res_a = min(res_a, 1.0)
    res_b = min(res_b, 1.0)
    return (-res_a if a < 0 else res_a), (-res_b if b < 0 else res_b)


__all__ = [
    "Face",
    "Edge",
    "Remap",
    "EdgeTransition",
    "EDGE_TRANSITIONS",
    "cross_edge",
    "build_face0_points",
    "face_points_from_face0",
    "project_to_face",
    "unwarp_minor_axes",
]
