"""Cube-sphere grid package.

Six cube faces are subdivided into ``N x N`` cells and warped onto the unit
sphere, giving stable cell addresses, latitude/longitude lookup and neighbor
traversal across face boundaries. Vector and quaternion helpers used by the
grid are exported as well.
"""

from .angles import is_almost_equal, wrap90, wrap180, wrap360
from .cell import CellCoord, CellCoordSet
from .config import GridSettings, load_grid_settings
from .directions import Direction
from .errors import CubeSphereError, InvariantViolation, PreconditionViolation
from .faces import EDGE_TRANSITIONS, Edge, EdgeTransition, Face, Remap
from .grid import Grid
from .latlon import LatLon
from .quaternion import Quaternion
from .spherical import SphereBody, SphericalVelocity, resolve_collision
from .traversal import RegionGrowth, grow_regions
from .vector import Vector3

__all__ = [
    "is_almost_equal",
    "wrap90",
    "wrap180",
    "wrap360",
    "CellCoord",
    "CellCoordSet",
    "GridSettings",
    "load_grid_settings",
    "Direction",
    "CubeSphereError",
    "InvariantViolation",
    "PreconditionViolation",
    "EDGE_TRANSITIONS",
    "Edge",
    "EdgeTransition",
    "Face",
    "Remap",
    "Grid",
    "LatLon",
    "Quaternion",
    "SphereBody",
    "SphericalVelocity",
    "resolve_collision",
    "RegionGrowth",
    "grow_regions",
    "Vector3",
]
