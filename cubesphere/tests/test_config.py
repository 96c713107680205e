"""Grid settings loading and validation."""
from __future__ import annotations

import json

import pytest

from cubesphere.config import GridSettings, load_grid_settings
from cubesphere.errors import PreconditionViolation


def test_bundled_defaults():
    settings = load_grid_settings()
    assert settings == GridSettings(resolution=8, seed=0)


def test_mapping_overrides_and_coerces():
    settings = load_grid_settings({"resolution": "16", "seed": 4})
    assert settings.resolution == 16
    assert settings.seed == 4


def test_empty_mapping_gives_defaults():
    assert GridSettings.from_mapping({}) == GridSettings()


def test_json_file(tmp_path):
    path = tmp_path / "grid.json"
    path.write_text(json.dumps({"resolution": 4, "seed": 9}), encoding="utf-8")
    settings = load_grid_settings(path=str(path))
    assert settings == GridSettings(resolution=4, seed=9)


@pytest.mark.parametrize("payload", [{"resolution": 5}, {"resolution": 0}, {"resolution": -4}])
def test_invalid_values_are_rejected(payload):
    with pytest.raises(PreconditionViolation):
        GridSettings.from_mapping(payload)


def test_generator_is_seeded():
    settings = GridSettings(seed=42)
    first = settings.create_generator()
    second = settings.create_generator()
    assert [first.random() for _ in range(3)] == [second.random() for _ in range(3)]
