"""Immutable 3D vector math used by the grid and rotation helpers.

Axis convention: +X is right, +Y is up, +Z points into the screen. The
convention matters for the geographic conversion in :mod:`cubesphere.latlon`
and for the sign choices of the inverse cube warp.
"""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import TYPE_CHECKING, Iterable, Tuple

from .angles import DEFAULT_EPSILON, TO_RADIANS, is_almost_equal
from .errors import PreconditionViolation

if TYPE_CHECKING:  # pragma: no cover - import only needed for annotations
    from .latlon import LatLon


@dataclass(frozen=True)
class Vector3:
    """Immutable double precision 3D vector."""

    x: float
    y: float
    z: float

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vector3":
        return self.scale(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vector3":
        if scalar == 0.0:
            raise PreconditionViolation("Cannot divide a Vector3 by zero")
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def scale(self, factor: float) -> "Vector3":
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    def midpoint(self, other: "Vector3") -> "Vector3":
        return Vector3(
            (other.x + self.x) / 2.0,
            (other.y + self.y) / 2.0,
            (other.z + self.z) / 2.0,
        )

    def magnitude_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def magnitude(self) -> float:
        return math.sqrt(self.magnitude_squared())

    def normalized(self) -> "Vector3":
        """Return the unit vector pointing the same way.

        Vectors already within ``1e-8`` of unit length are returned as-is.
        Normalizing a zero vector is a caller error.
        """

        magnitude = self.magnitude()
        if magnitude == 0.0:
            raise PreconditionViolation("Cannot normalize a Vector3 of magnitude zero")
        if is_almost_equal(magnitude, 1.0):
            return self
        return Vector3(self.x / magnitude, self.y / magnitude, self.z / magnitude)

    def is_almost_equal(self, other: "Vector3", epsilon: float = DEFAULT_EPSILON) -> bool:
        return (
            is_almost_equal(self.x, other.x, epsilon)
            and is_almost_equal(self.y, other.y, epsilon)
            and is_almost_equal(self.z, other.z, epsilon)
        )

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_lat_lon(self) -> "LatLon":
        from .latlon import LatLon

        return LatLon.from_vector(self)

    @staticmethod
    def zero() -> "Vector3":
        return Vector3(0.0, 0.0, 0.0)

    @staticmethod
    def unit_x() -> "Vector3":
        return Vector3(1.0, 0.0, 0.0)

    @staticmethod
    def unit_y() -> "Vector3":
        return Vector3(0.0, 1.0, 0.0)

    @staticmethod
    def unit_z() -> "Vector3":
        return Vector3(0.0, 0.0, 1.0)

    @staticmethod
    def from_iter(values: Iterable[float]) -> "Vector3":
        x, y, z = values
        return Vector3(float(x), float(y), float(z))

    @staticmethod
    def from_lat_lon(lat_lon: "LatLon") -> "Vector3":
        """Return the unit sphere point for a latitude/longitude in degrees."""

        phi = lat_lon.lat * TO_RADIANS
        lam = lat_lon.lon * TO_RADIANS
        return Vector3(
            math.cos(phi) * math.sin(lam),
            math.sin(phi),
            -math.cos(phi) * math.cos(lam),
        )


__all__ = ["Vector3", "DEFAULT_EPSILON"]
