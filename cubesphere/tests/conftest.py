"""Pytest configuration for cubesphere tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# //1.- Ensure repository root is available on the Python path for package imports.
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cubesphere.grid import Grid  # noqa: E402


# //2.- Share one resolution-8 grid; it is immutable so tests cannot disturb each other.
@pytest.fixture(scope="session")
def grid8() -> Grid:
    return Grid(8)
