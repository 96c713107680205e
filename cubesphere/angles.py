"""Scalar helpers for angle conversion, tolerance checks and wrapping."""
from __future__ import annotations

import math

TO_RADIANS = math.pi / 180.0
TO_DEGREES = 180.0 / math.pi
DOUBLE_PI = 2.0 * math.pi
HALF_PI = math.pi / 2.0

DEFAULT_EPSILON = 1e-8


def is_almost_equal(a: float, b: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    """Return ``True`` when ``a`` and ``b`` differ by strictly less than ``epsilon``."""

    return abs(a - b) < epsilon


def wrap90(value: float) -> float:
    """Fold a latitude into ``[-90, 90]`` by reflecting across the poles.

    The mapping is a triangle wave with period 360, so ``91`` becomes ``89``
    and ``180`` becomes ``0``.
    """

    if -90.0 <= value <= 90.0:
        return value
    a = 90.0
    p = 360.0
    return 4.0 * a / p * abs(math.fmod(math.fmod(value - p / 4.0, p) + p, p) - p / 2.0) - a


def wrap180(value: float) -> float:
    """Wrap a longitude into ``(-180, 180]``. ``-180`` itself is left alone."""

    if -180.0 <= value <= 180.0:
        return value
    a = 180.0
    p = 360.0
    return math.fmod(math.fmod(2.0 * a * value / p - p / 2.0, p) + p, p) - a


def wrap360(value: float) -> float:
    """Wrap an angle in degrees into ``[0, 360)``."""

    if 0.0 <= value < 360.0:
        return value
    a = 180.0
    p = 360.0
    return math.fmod(math.fmod(2.0 * a * value / p, p) + p, p)


__all__ = [
    "TO_RADIANS",
    "TO_DEGREES",
    "DOUBLE_PI",
    "HALF_PI",
    "DEFAULT_EPSILON",
    "is_almost_equal",
    "wrap90",
    "wrap180",
    "wrap360",
]
