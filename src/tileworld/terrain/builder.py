"""Per-tile noise sampling from three decorrelated fields."""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .config import NoiseConfig, WorldBuilderConfig
from .noise import NoiseGenerator

# Seed offsets keep the three fields decorrelated despite a shared world seed
CONTINENTALITY_SEED_OFFSET = 0
WEIRDNESS_SEED_OFFSET = 1
RIVERS_SEED_OFFSET = 2


@dataclass(frozen=True)
class NoiseSample:
    """The three noise values for one tile."""

    continentality: float
    weirdness: float
    rivers: float


@dataclass(frozen=True)
class NoiseFields:
    """Whole-world noise fields, each shaped (size, size) and indexed [y, x]."""

    continentality: NDArray[np.float64]
    weirdness: NDArray[np.float64]
    rivers: NDArray[np.float64]

    def at(self, x: int, y: int) -> NoiseSample:
        """Noise triple for tile (x, y)."""
        return NoiseSample(
            continentality=float(self.continentality[y, x]),
            weirdness=float(self.weirdness[y, x]),
            rivers=float(self.rivers[y, x]),
        )


class WorldBuilder:
    """Samples continentality, weirdness and rivers noise for a world seed.

    Continentality drives the land/water boundary, weirdness perturbs biome
    choice, and rivers carves narrow bands independent of both.
    """

    def __init__(self, seed: int, config: WorldBuilderConfig | None = None):
        self.seed = seed
        self.config = config or WorldBuilderConfig()
        self.continentality = _make_generator(
            seed + CONTINENTALITY_SEED_OFFSET, self.config.continentality
        )
        self.weirdness = _make_generator(
            seed + WEIRDNESS_SEED_OFFSET, self.config.weirdness
        )
        self.rivers = _make_generator(seed + RIVERS_SEED_OFFSET, self.config.rivers)

    def continentality_at(self, x: float, y: float) -> float:
        return self.continentality.fractal(x, y)

    def weirdness_at(self, x: float, y: float) -> float:
        return self.weirdness.fractal(x, y)

    def rivers_at(self, x: float, y: float) -> float:
        return self.rivers.fractal(x, y)

    def noise_at(self, x: float, y: float) -> NoiseSample:
        """All three noise values at (x, y)."""
        return NoiseSample(
            continentality=self.continentality_at(x, y),
            weirdness=self.weirdness_at(x, y),
            rivers=self.rivers_at(x, y),
        )

    def sample_fields(self, size: int) -> NoiseFields:
        """Sample all three fields over a size x size tile grid.

        Values match the scalar ``*_at`` queries cell for cell.
        """
        coords = np.arange(size, dtype=np.float64)
        return NoiseFields(
            continentality=self.continentality.fractal_grid(coords, coords),
            weirdness=self.weirdness.fractal_grid(coords, coords),
            rivers=self.rivers.fractal_grid(coords, coords),
        )


def _make_generator(seed: int, config: NoiseConfig) -> NoiseGenerator:
    return NoiseGenerator(
        seed,
        octaves=config.octaves,
        roughness=config.roughness,
        scale=config.scale,
    )
