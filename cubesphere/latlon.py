"""Geographic coordinates on the unit sphere.

Naming used in this module:

* ``lat`` / ``lon`` are degrees, north and east positive.
* ``phi`` / ``lam`` are the same angles in radians.
"""
from __future__ import annotations

from dataclasses import dataclass
import math

from .angles import DEFAULT_EPSILON, HALF_PI, TO_DEGREES, is_almost_equal
from .errors import PreconditionViolation
from .vector import Vector3

_UNIT_TOLERANCE = 1e-9
_POLE_TOLERANCE = 1e-6


@dataclass(frozen=True)
class LatLon:
    """A point on the unit sphere expressed in degrees."""

    lat: float
    lon: float

    @classmethod
    def from_vector(cls, point: Vector3) -> "LatLon":
        """Convert a unit vector into latitude/longitude.

        Longitude is pinned to zero at either pole where it is undefined.
        """

        magnitude = point.magnitude()
        if not is_almost_equal(magnitude, 1.0, _UNIT_TOLERANCE):
            raise PreconditionViolation(
                f"LatLon requires a unit vector, got {point} with magnitude {magnitude}"
            )
        phi = math.asin(max(-1.0, min(1.0, point.y)))
        lam = 0.0
        at_pole = is_almost_equal(phi, HALF_PI, _POLE_TOLERANCE) or is_almost_equal(
            phi, -HALF_PI, _POLE_TOLERANCE
        )
        if not at_pole:
            lam = math.atan2(point.x, -point.z)
        return cls(lat=phi * TO_DEGREES, lon=lam * TO_DEGREES)

    def to_vector(self) -> Vector3:
        return Vector3.from_lat_lon(self)

    def is_almost_equal(self, other: "LatLon", epsilon: float = DEFAULT_EPSILON) -> bool:
        return is_almost_equal(self.lat, other.lat, epsilon) and is_almost_equal(
            self.lon, other.lon, epsilon
        )


__all__ = ["LatLon"]
