"""Noise-based terrain generation.

Fractal noise fields, per-tile sampling and threshold classification into
terrain types and biomes.
"""

from .builder import NoiseFields, NoiseSample, WorldBuilder
from .classification import classify, make_terrain
from .config import (
    ClassificationConfig,
    FeatureDensityConfig,
    GenerationConfig,
    NoiseConfig,
    WorldBuilderConfig,
)
from .noise import NoiseGenerator, amplitude_sum

__all__ = [
    "ClassificationConfig",
    "FeatureDensityConfig",
    "GenerationConfig",
    "NoiseConfig",
    "NoiseFields",
    "NoiseGenerator",
    "NoiseSample",
    "WorldBuilder",
    "WorldBuilderConfig",
    "amplitude_sum",
    "classify",
    "make_terrain",
]
