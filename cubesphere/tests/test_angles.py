"""Tests for scalar tolerance and angle wrapping helpers."""
from __future__ import annotations

import pytest

from cubesphere.angles import is_almost_equal, wrap90, wrap180, wrap360


def test_is_almost_equal_is_strict_about_epsilon():
    assert is_almost_equal(1.0, 1.0 + 1e-9)
    assert not is_almost_equal(1.0, 1.1)
    assert not is_almost_equal(0.0, 1e-3, epsilon=1e-3)


@pytest.mark.parametrize(
    "value, expected",
    [(0, 0), (-90, -90), (91, 89), (180, 0), (-181, 1), (270, -90)],
)
def test_wrap90(value, expected):
    assert wrap90(value) == pytest.approx(expected, abs=1e-9)


@pytest.mark.parametrize(
    "value, expected",
    [(0, 0), (-180, -180), (181, -179), (360, 0), (-361, -1), (-270, 90)],
)
def test_wrap180(value, expected):
    assert wrap180(value) == pytest.approx(expected, abs=1e-9)


@pytest.mark.parametrize(
    "value, expected",
    [(0, 0), (-180, 180), (361, 1), (360, 0), (-361, 359), (-270, 90)],
)
def test_wrap360(value, expected):
    assert wrap360(value) == pytest.approx(expected, abs=1e-9)
