"""Fractal noise sampling for terrain generation.

Sums octaves of OpenSimplex noise at doubling frequencies and
decaying weights. The sum is intentionally left unnormalized so that
classification thresholds are expressed in raw noise units.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from opensimplex import OpenSimplex

from ..exceptions import ConfigurationError

LACUNARITY = 2.0


def amplitude_sum(octaves: int, roughness: float) -> float:
    """Sum of octave weights, the bound factor of a fractal sum.

    Args:
        octaves: Number of octaves.
        roughness: Weight multiplier per octave.

    Returns:
        1 + roughness + roughness**2 + ... over ``octaves`` terms.
    """
    _check_octaves(octaves)
    return sum(roughness**i for i in range(octaves))


class NoiseGenerator:
    """Seeded fractal noise source.

    Args:
        seed: Seed for the underlying OpenSimplex permutation.
        octaves: Default number of octaves for ``fractal``.
        roughness: Default weight multiplier per octave.
        scale: Default starting frequency.

    Raises:
        ConfigurationError: If ``octaves < 1`` or ``scale``/``roughness``
            are not positive.
    """

    def __init__(
        self,
        seed: int,
        octaves: int = 8,
        roughness: float = 0.5,
        scale: float = 0.5,
    ):
        _check_octaves(octaves)
        if scale <= 0:
            raise ConfigurationError(f"scale must be positive, got {scale}")
        if roughness <= 0:
            raise ConfigurationError(f"roughness must be positive, got {roughness}")
        self.seed = seed
        self.octaves = octaves
        self.roughness = roughness
        self.scale = scale
        self._simplex = OpenSimplex(seed=seed)

    def sample(self, x: float, y: float) -> float:
        """Single-octave noise value at (x, y), roughly in [-1, 1]."""
        return self._simplex.noise2(x, y)

    def fractal(
        self,
        x: float,
        y: float,
        octaves: int | None = None,
        roughness: float | None = None,
        scale: float | None = None,
    ) -> float:
        """Multi-octave noise value at (x, y).

        Parameters left as None fall back to the generator defaults.
        """
        octaves, roughness, scale = self._resolve(octaves, roughness, scale)

        noise = 0.0
        frequency = scale
        weight = 1.0
        for _ in range(octaves):
            noise += self.sample(x * frequency, y * frequency) * weight
            frequency *= LACUNARITY
            weight *= roughness
        return noise

    def fractal_grid(
        self,
        xs: ArrayLike,
        ys: ArrayLike,
        octaves: int | None = None,
        roughness: float | None = None,
        scale: float | None = None,
    ) -> NDArray[np.float64]:
        """Multi-octave noise over the cartesian product of xs and ys.

        Args:
            xs: 1D x coordinates.
            ys: 1D y coordinates.

        Returns:
            Array of shape (len(ys), len(xs)); cell [j, i] equals
            ``fractal(xs[i], ys[j])``.
        """
        octaves, roughness, scale = self._resolve(octaves, roughness, scale)
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)

        noise = np.zeros((ys.size, xs.size), dtype=np.float64)
        frequency = scale
        weight = 1.0
        for _ in range(octaves):
            layer = self._simplex.noise2array(xs * frequency, ys * frequency)
            noise += layer * weight
            frequency *= LACUNARITY
            weight *= roughness
        return noise

    def _resolve(
        self,
        octaves: int | None,
        roughness: float | None,
        scale: float | None,
    ) -> tuple[int, float, float]:
        octaves = self.octaves if octaves is None else octaves
        _check_octaves(octaves)
        roughness = self.roughness if roughness is None else roughness
        scale = self.scale if scale is None else scale
        return octaves, roughness, scale

    def __repr__(self) -> str:
        return (
            f"NoiseGenerator(seed={self.seed}, octaves={self.octaves}, "
            f"roughness={self.roughness}, scale={self.scale})"
        )


def _check_octaves(octaves: int) -> None:
    if octaves < 1:
        raise ConfigurationError(f"octaves must be at least 1, got {octaves}")
