"""Tangent velocities and collisions for bodies moving on the unit sphere."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .quaternion import Quaternion
from .vector import Vector3


@dataclass(frozen=True)
class SphericalVelocity:
    """Velocity vector constrained to the tangent plane of its position."""

    vector: Vector3

    @classmethod
    def at(cls, position: Vector3, direction: Vector3, speed: float) -> "SphericalVelocity":
        """Project ``direction`` onto the tangent plane at ``position`` and scale to ``speed``.

        A zero ``speed`` yields the zero velocity. A ``direction`` that is
        purely radial has no tangent and is a caller error.
        """

        if speed == 0.0:
            return cls(Vector3.zero())
        normal = position.normalized()
        tangent = direction - normal * direction.dot(normal)
        return cls(tangent.normalized() * speed)

    @property
    def speed(self) -> float:
        return self.vector.magnitude()

    def step(self, position: Vector3, distance: float) -> Vector3:
        """Advance ``position`` by ``distance`` radians along this velocity."""

        rotation = Quaternion.great_circle_step(position, self.vector, distance)
        return rotation.rotate(position.normalized())


@dataclass(frozen=True)
class SphereBody:
    """Point mass travelling on the unit sphere."""

    position: Vector3
    velocity: SphericalVelocity
    mass: float


def resolve_collision(
    body1: SphereBody, body2: SphereBody, restitution: float = 1.0
) -> Tuple[SphericalVelocity, SphericalVelocity]:
    """Return the post-collision velocities of two bodies.

    The collision acts along the normal of the great circle joining the
    bodies; the results are projected back onto each body's tangent plane.
    """

    new_vel1, new_vel2 = Quaternion.sphere_collision_velocity(
        body1.position,
        body1.velocity.vector,
        body1.mass,
        body2.position,
        body2.velocity.vector,
        body2.mass,
        restitution,
    )
    return (
        _retangent(body1.position, new_vel1),
        _retangent(body2.position, new_vel2),
    )


def _retangent(position: Vector3, velocity: Vector3) -> SphericalVelocity:
    normal = position.normalized()
    tangent = velocity - normal * velocity.dot(normal)
    if tangent.magnitude_squared() == 0.0:
        return SphericalVelocity(Vector3.zero())
    return SphericalVelocity.at(position, tangent, velocity.magnitude())


__all__ = ["SphericalVelocity", "SphereBody", "resolve_collision"]
