"""Terrain classification: water, sand, gravel, snow, stone, grass."""

from ..state import Terrain
from ..terrain_types import Biome, TerrainType
from .builder import NoiseSample
from .config import ClassificationConfig

DEFAULT_CLASSIFICATION = ClassificationConfig()


def classify(
    continentality: float,
    weirdness: float,
    rivers: float,
    config: ClassificationConfig = DEFAULT_CLASSIFICATION,
) -> tuple[TerrainType, Biome]:
    """Classify a noise triple into a terrain type and biome.

    Water is decided by continentality alone; above the water threshold,
    rivers and weirdness select the land type.

    Args:
        continentality: Continentality noise at the tile.
        weirdness: Weirdness noise at the tile.
        rivers: Rivers noise at the tile.
        config: Classification thresholds.

    Returns:
        Tuple of (TerrainType, Biome).
    """
    if continentality < config.water_threshold:
        return TerrainType.WATER, Biome.OCEAN
    if continentality < config.beach_threshold:
        return TerrainType.SAND, Biome.BEACH
    # Rivers noise crosses zero along narrow bands
    if abs(rivers) < config.riverbed_width:
        return TerrainType.GRAVEL, Biome.RIVERBED
    if weirdness >= config.snow_threshold:
        return TerrainType.SNOW, Biome.TUNDRA
    if weirdness >= config.mountain_threshold:
        return TerrainType.STONE, Biome.MOUNTAINS
    if weirdness <= config.desert_threshold:
        return TerrainType.SAND, Biome.DESERT
    return TerrainType.GRASS, Biome.PLAINS


def make_terrain(
    sample: NoiseSample,
    config: ClassificationConfig = DEFAULT_CLASSIFICATION,
) -> Terrain:
    """Build the immutable Terrain record for one tile."""
    terrain_type, biome = classify(
        sample.continentality, sample.weirdness, sample.rivers, config
    )
    return Terrain(
        type=terrain_type,
        biome=biome,
        continentality_noise=sample.continentality,
        weirdness_noise=sample.weirdness,
        rivers_noise=sample.rivers,
    )
