"""Settings for building grids and seeding their random consumers."""
from __future__ import annotations

import json
import logging
import os
import random
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import PreconditionViolation

LOGGER = logging.getLogger(__name__)


# //1.- Capture the knobs a grid consumer needs in one immutable bundle.
@dataclass(frozen=True)
class GridSettings:
    """Grid resolution and the seed for region sampling."""

    resolution: int = 8
    seed: int = 0

    def __post_init__(self) -> None:
        if self.resolution <= 0 or self.resolution % 2 != 0:
            raise PreconditionViolation(
                f"resolution must be a positive even number, got {self.resolution}"
            )

    # //2.- Coerce loosely typed mappings (parsed JSON, test fixtures) into settings.
    @classmethod
    def from_mapping(cls, payload: Optional[Mapping[str, object]] = None) -> "GridSettings":
        if not payload:
            return cls()
        return cls(
            resolution=int(payload.get("resolution", 8)),
            seed=int(payload.get("seed", 0)),
        )

    @classmethod
    def from_json(cls, path: str) -> "GridSettings":
        with open(path, "r", encoding="utf-8") as handle:
            return cls.from_mapping(json.load(handle))

    # //3.- Hand out a seeded generator so sampling stays reproducible.
    def create_generator(self) -> random.Random:
        return random.Random(self.seed)


def _default_config_path() -> str:
    return os.path.join(os.path.dirname(__file__), "data", "grid.json")


def load_grid_settings(
    mapping: Optional[Mapping[str, object]] = None,
    *,
    path: Optional[str] = None,
) -> GridSettings:
    """Resolve settings from a mapping, a JSON file, or the bundled defaults."""

    if mapping is not None:
        LOGGER.debug("Grid settings taken from an explicit mapping")
        return GridSettings.from_mapping(mapping)
    source = path or _default_config_path()
    LOGGER.debug("Grid settings loaded from %s", source)
    return GridSettings.from_json(source)


__all__ = ["GridSettings", "load_grid_settings"]
