"""Tangent velocity and collision tests for bodies on the unit sphere."""
from __future__ import annotations

import math

import pytest

from cubesphere.spherical import SphereBody, SphericalVelocity, resolve_collision
from cubesphere.vector import Vector3


def test_velocity_is_projected_onto_the_tangent_plane():
    velocity = SphericalVelocity.at(Vector3(1.0, 0.0, 0.0), Vector3(1.0, 1.0, 0.0), 2.0)
    assert velocity.vector.is_almost_equal(Vector3(0.0, 2.0, 0.0))
    assert velocity.speed == pytest.approx(2.0)


def test_zero_speed_gives_zero_velocity():
    velocity = SphericalVelocity.at(Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0), 0.0)
    assert velocity.vector == Vector3.zero()


def test_step_follows_the_great_circle():
    velocity = SphericalVelocity(Vector3(0.0, 1.0, 0.0))
    moved = velocity.step(Vector3(1.0, 0.0, 0.0), math.pi / 2.0)
    assert moved.is_almost_equal(Vector3(0.0, 1.0, 0.0))


def test_collision_exchanges_contact_components():
    # //1.- Equal masses swap the parts along the +Z great-circle normal.
    body1 = SphereBody(Vector3(1.0, 0.0, 0.0), SphericalVelocity(Vector3(0.0, 1.0, 0.5)), 1.0)
    body2 = SphereBody(Vector3(0.0, 1.0, 0.0), SphericalVelocity(Vector3(-1.0, 0.0, -0.25)), 1.0)
    vel1, vel2 = resolve_collision(body1, body2)
    assert vel1.vector.is_almost_equal(Vector3(0.0, 1.0, -0.25))
    assert vel2.vector.is_almost_equal(Vector3(-1.0, 0.0, 0.5))

    # //2.- Results stay on each body's tangent plane.
    assert vel1.vector.dot(body1.position) == pytest.approx(0.0, abs=1e-12)
    assert vel2.vector.dot(body2.position) == pytest.approx(0.0, abs=1e-12)


def test_head_on_collision_along_the_normal_swaps_velocities():
    body1 = SphereBody(Vector3(1.0, 0.0, 0.0), SphericalVelocity(Vector3(0.0, 0.0, 1.0)), 1.0)
    body2 = SphereBody(Vector3(0.0, 1.0, 0.0), SphericalVelocity(Vector3(0.0, 0.0, -1.0)), 1.0)
    vel1, vel2 = resolve_collision(body1, body2)
    assert vel1.vector.is_almost_equal(Vector3(0.0, 0.0, -1.0))
    assert vel2.vector.is_almost_equal(Vector3(0.0, 0.0, 1.0))


def test_collision_keeps_motion_perpendicular_to_contact():
    body1 = SphereBody(Vector3(1.0, 0.0, 0.0), SphericalVelocity(Vector3(0.0, 1.0, 0.0)), 2.0)
    body2 = SphereBody(Vector3(0.0, 1.0, 0.0), SphericalVelocity(Vector3(-1.0, 0.0, 0.0)), 3.0)
    vel1, vel2 = resolve_collision(body1, body2, restitution=0.5)
    assert vel1.vector.is_almost_equal(Vector3(0.0, 1.0, 0.0))
    assert vel2.vector.is_almost_equal(Vector3(-1.0, 0.0, 0.0))


def test_fully_inelastic_collision_can_stop_a_body():
    body1 = SphereBody(Vector3(1.0, 0.0, 0.0), SphericalVelocity(Vector3(0.0, 0.0, 1.0)), 1.0)
    body2 = SphereBody(Vector3(0.0, 1.0, 0.0), SphericalVelocity(Vector3.zero()), 1.0)
    vel1, vel2 = resolve_collision(body1, body2, restitution=0.0)
    assert vel1.speed == pytest.approx(0.0, abs=1e-12)
    assert vel2.speed == pytest.approx(0.0, abs=1e-12)
