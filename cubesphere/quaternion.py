"""Quaternion rotation algebra and great-circle motion helpers.

Quaternions follow the ``w + xi + yj + zk`` convention with ``w`` the scalar
part. Values are not kept unit length at all times; operations that need a
rotation normalize on demand.
"""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Tuple, Union, overload

from .angles import DEFAULT_EPSILON, TO_DEGREES, TO_RADIANS
from .vector import Vector3

_NORMALIZED_TOLERANCE = 1e-10
_SAME_DIRECTION_DOT = 0.99999
_SLERP_LINEAR_DOT = 0.9995
_AXIS_UNSTABLE = 0.001
_DEGENERATE_AXIS = 1e-10


@dataclass(frozen=True)
class Quaternion:
    """Rotation quaternion with Hamilton product semantics."""

    w: float
    x: float
    y: float
    z: float

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @staticmethod
    def identity() -> "Quaternion":
        return Quaternion(1.0, 0.0, 0.0, 0.0)

    @staticmethod
    def from_scalar_vector(scalar: float, vector: Vector3) -> "Quaternion":
        return Quaternion(scalar, vector.x, vector.y, vector.z)

    @staticmethod
    def from_axis_angle(axis: Vector3, angle: float) -> "Quaternion":
        """Build a rotation of ``angle`` radians about ``axis``.

        A zero length axis yields the identity.
        """

        if axis.magnitude_squared() <= 0.0:
            return Quaternion.identity()
        half_angle = angle * 0.5
        s = math.sin(half_angle)
        unit = axis.normalized()
        return Quaternion(math.cos(half_angle), unit.x * s, unit.y * s, unit.z * s)

    @staticmethod
    def from_axis_angle_degrees(axis: Vector3, angle_degrees: float) -> "Quaternion":
        return Quaternion.from_axis_angle(axis, angle_degrees * TO_RADIANS)

    @staticmethod
    def from_vectors(source: Vector3, target: Vector3) -> "Quaternion":
        """Return the shortest rotation that turns ``source`` onto ``target``."""

        if source.magnitude_squared() <= 0.0 or target.magnitude_squared() <= 0.0:
            return Quaternion.identity()
        from_norm = source.normalized()
        to_norm = target.normalized()
        dot = from_norm.dot(to_norm)
        if dot > _SAME_DIRECTION_DOT:
            return Quaternion.identity()
        if dot < -_SAME_DIRECTION_DOT:
            # Opposite vectors: any axis perpendicular to the source works.
            axis = Vector3.unit_x().cross(from_norm)
            if axis.magnitude_squared() < 0.00001:
                axis = Vector3.unit_y().cross(from_norm)
            return Quaternion.from_axis_angle(axis.normalized(), math.pi)
        axis = from_norm.cross(to_norm).normalized()
        return Quaternion.from_axis_angle(axis, math.acos(dot))

    @staticmethod
    def from_euler(roll: float, pitch: float, yaw: float) -> "Quaternion":
        """Compose roll (X), pitch (Y) and yaw (Z) given in radians."""

        cy = math.cos(yaw * 0.5)
        sy = math.sin(yaw * 0.5)
        cp = math.cos(pitch * 0.5)
        sp = math.sin(pitch * 0.5)
        cr = math.cos(roll * 0.5)
        sr = math.sin(roll * 0.5)
        return Quaternion(
            w=cr * cp * cy + sr * sp * sy,
            x=sr * cp * cy - cr * sp * sy,
            y=cr * sp * cy + sr * cp * sy,
            z=cr * cp * sy - sr * sp * cy,
        )

    @staticmethod
    def from_euler_degrees(roll: float, pitch: float, yaw: float) -> "Quaternion":
        return Quaternion.from_euler(roll * TO_RADIANS, pitch * TO_RADIANS, yaw * TO_RADIANS)

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------
    @property
    def vector(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)

    def magnitude_squared(self) -> float:
        return self.w * self.w + self.x * self.x + self.y * self.y + self.z * self.z

    def magnitude(self) -> float:
        return math.sqrt(self.magnitude_squared())

    def conjugate(self) -> "Quaternion":
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def inverse(self) -> "Quaternion":
        """Return ``conjugate / magnitude_squared`` or the identity for a zero quaternion."""

        mag_sq = self.magnitude_squared()
        if mag_sq <= 0.0:
            return Quaternion.identity()
        inv = 1.0 / mag_sq
        return Quaternion(self.w * inv, -self.x * inv, -self.y * inv, -self.z * inv)

    def normalized(self) -> "Quaternion":
        mag_sq = self.magnitude_squared()
        if abs(mag_sq - 1.0) < _NORMALIZED_TOLERANCE:
            return self
        if mag_sq <= 0.0:
            return Quaternion.identity()
        inv = 1.0 / math.sqrt(mag_sq)
        return Quaternion(self.w * inv, self.x * inv, self.y * inv, self.z * inv)

    def multiply(self, other: "Quaternion") -> "Quaternion":
        """Hamilton product ``self * other`` (apply ``other`` first, then ``self``)."""

        return Quaternion(
            w=self.w * other.w - self.x * other.x - self.y * other.y - self.z * other.z,
            x=self.w * other.x + self.x * other.w + self.y * other.z - self.z * other.y,
            y=self.w * other.y - self.x * other.z + self.y * other.w + self.z * other.x,
            z=self.w * other.z + self.x * other.y - self.y * other.x + self.z * other.w,
        )

    def rotate(self, vector: Vector3) -> Vector3:
        """Rotate ``vector`` with the sandwich product ``q * v * q^-1``."""

        q = self.normalized()
        pure = Quaternion(0.0, vector.x, vector.y, vector.z)
        rotated = q.multiply(pure).multiply(q.conjugate())
        return Vector3(rotated.x, rotated.y, rotated.z)

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------
    def to_axis_angle(self) -> Tuple[Vector3, float]:
        """Return ``(axis, angle)`` with the angle in radians.

        Near zero (or full turn) rotations have no stable axis, so the X axis
        is reported together with the computed angle.
        """

        q = self.normalized()
        w = min(max(q.w, -1.0), 1.0)
        angle = 2.0 * math.acos(w)
        s = math.sqrt(1.0 - w * w)
        if s < _AXIS_UNSTABLE:
            return Vector3.unit_x(), angle
        return Vector3(q.x / s, q.y / s, q.z / s), angle

    def to_euler(self) -> Tuple[float, float, float]:
        """Return ``(roll, pitch, yaw)`` in radians, pitch clamped at gimbal lock."""

        w, x, y, z = self.w, self.x, self.y, self.z
        roll = math.atan2(2.0 * (w * x + y * z), 1.0 - 2.0 * (x * x + y * y))
        sinp = 2.0 * (w * y - z * x)
        if abs(sinp) >= 1.0:
            pitch = math.copysign(math.pi / 2.0, sinp)
        else:
            pitch = math.asin(sinp)
        yaw = math.atan2(2.0 * (w * z + x * y), 1.0 - 2.0 * (y * y + z * z))
        return roll, pitch, yaw

    def to_euler_degrees(self) -> Tuple[float, float, float]:
        roll, pitch, yaw = self.to_euler()
        return roll * TO_DEGREES, pitch * TO_DEGREES, yaw * TO_DEGREES

    # ------------------------------------------------------------------
    # Interpolation and comparison
    # ------------------------------------------------------------------
    @staticmethod
    def slerp(q1: "Quaternion", q2: "Quaternion", t: float) -> "Quaternion":
        """Spherical linear interpolation along the shorter arc, ``t`` clamped to ``[0, 1]``."""

        t = min(max(t, 0.0), 1.0)
        a = q1.normalized()
        b = q2.normalized()
        dot = a.w * b.w + a.x * b.x + a.y * b.y + a.z * b.z
        if dot < 0.0:
            b = -b
            dot = -dot
        if dot > _SLERP_LINEAR_DOT:
            return Quaternion(
                a.w + t * (b.w - a.w),
                a.x + t * (b.x - a.x),
                a.y + t * (b.y - a.y),
                a.z + t * (b.z - a.z),
            ).normalized()
        theta0 = math.acos(dot)
        theta = theta0 * t
        sin_theta = math.sin(theta)
        sin_theta0 = math.sin(theta0)
        s0 = math.cos(theta) - dot * sin_theta / sin_theta0
        s1 = sin_theta / sin_theta0
        return Quaternion(
            s0 * a.w + s1 * b.w,
            s0 * a.x + s1 * b.x,
            s0 * a.y + s1 * b.y,
            s0 * a.z + s1 * b.z,
        )

    def is_almost_equal(self, other: "Quaternion", epsilon: float = DEFAULT_EPSILON) -> bool:
        """Compare rotations, so ``q`` and ``-q`` count as equal."""

        dot = abs(self.w * other.w + self.x * other.x + self.y * other.y + self.z * other.z)
        norm_product = self.magnitude() * other.magnitude()
        if abs(norm_product) < epsilon:
            return False
        return abs(dot / norm_product - 1.0) < epsilon

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------
    @overload
    def __mul__(self, other: "Quaternion") -> "Quaternion": ...

    @overload
    def __mul__(self, other: Vector3) -> Vector3: ...

    @overload
    def __mul__(self, other: float) -> "Quaternion": ...

    def __mul__(self, other: Union["Quaternion", Vector3, float]):
        if isinstance(other, Quaternion):
            return self.multiply(other)
        if isinstance(other, Vector3):
            return self.rotate(other)
        if isinstance(other, (int, float)):
            return Quaternion(self.w * other, self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: float) -> "Quaternion":
        if isinstance(other, (int, float)):
            return Quaternion(other * self.w, other * self.x, other * self.y, other * self.z)
        return NotImplemented

    def __add__(self, other: "Quaternion") -> "Quaternion":
        return Quaternion(self.w + other.w, self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Quaternion") -> "Quaternion":
        return Quaternion(self.w - other.w, self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Quaternion":
        return Quaternion(-self.w, -self.x, -self.y, -self.z)

    def __str__(self) -> str:
        return f"Quaternion({self.w:.5f}, {self.x:.5f}, {self.y:.5f}, {self.z:.5f})"

    # ------------------------------------------------------------------
    # Motion on the unit sphere
    # ------------------------------------------------------------------
    @staticmethod
    def great_circle_rotation(source: Vector3, target: Vector3) -> "Quaternion":
        """Rotation about the sphere center carrying ``source`` onto ``target``."""

        from_norm = source.normalized()
        to_norm = target.normalized()
        axis = from_norm.cross(to_norm)
        if axis.magnitude_squared() < _DEGENERATE_AXIS:
            if from_norm.dot(to_norm) > _SAME_DIRECTION_DOT:
                return Quaternion.identity()
            return Quaternion.from_axis_angle(_perpendicular_axis(from_norm), math.pi)
        angle = math.acos(min(max(from_norm.dot(to_norm), -1.0), 1.0))
        return Quaternion.from_axis_angle(axis.normalized(), angle)

    @staticmethod
    def great_circle_step(position: Vector3, velocity: Vector3, distance: float) -> "Quaternion":
        """Rotation moving ``position`` by ``distance`` radians along ``velocity``.

        Only the tangential part of ``velocity`` counts; a radial or zero
        velocity gives the identity.
        """

        pos = position.normalized()
        tangent = velocity - pos * pos.dot(velocity)
        if tangent.magnitude_squared() < _DEGENERATE_AXIS:
            return Quaternion.identity()
        axis = pos.cross(tangent.normalized())
        return Quaternion.from_axis_angle(axis, distance)

    @staticmethod
    def sphere_collision_velocity(
        pos1: Vector3,
        vel1: Vector3,
        mass1: float,
        pos2: Vector3,
        vel2: Vector3,
        mass2: float,
        restitution: float = 0.8,
    ) -> Tuple[Vector3, Vector3]:
        """Resolve a 1D collision along the great-circle contact normal.

        The contact normal is the axis of the great-circle rotation carrying
        ``pos1`` onto ``pos2``, i.e. the normal of the plane holding both
        bodies. Each velocity is split into a part along that normal and a
        perpendicular remainder. The along parts go through the elastic
        collision formula scaled by ``restitution``; the perpendicular parts
        are kept.
        """

        normal, _ = Quaternion.great_circle_rotation(pos1, pos2).to_axis_angle()
        v1_along = vel1.dot(normal)
        v2_along = vel2.dot(normal)
        total_mass = mass1 + mass2
        new_v1_along = ((mass1 - mass2) * v1_along + 2.0 * mass2 * v2_along) / total_mass * restitution
        new_v2_along = ((mass2 - mass1) * v2_along + 2.0 * mass1 * v1_along) / total_mass * restitution
        v1_perp = vel1 - normal * v1_along
        v2_perp = vel2 - normal * v2_along
        return v1_perp + normal * new_v1_along, v2_perp + normal * new_v2_along


def _perpendicular_axis(direction: Vector3) -> Vector3:
    axis = direction.cross(Vector3.unit_y())
    if axis.magnitude_squared() < _DEGENERATE_AXIS:
        axis = direction.cross(Vector3.unit_x())
    return axis.normalized()


__all__ = ["Quaternion"]
