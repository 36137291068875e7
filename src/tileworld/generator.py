"""Main world generation orchestration."""

from dataclasses import dataclass

import structlog

from .placement import FeaturePlacer, PlacementStats
from .state import World
from .terrain.builder import NoiseFields, WorldBuilder
from .terrain.classification import make_terrain
from .terrain.config import ClassificationConfig, GenerationConfig

logger = structlog.get_logger()


@dataclass
class GenerationResult:
    """Result of world generation with intermediate data."""

    world: World
    fields: NoiseFields
    placement: PlacementStats
    config: GenerationConfig


def generate_terrain(config: GenerationConfig) -> GenerationResult:
    """Generate a complete world from configuration.

    Stages run in a fixed order: sample noise fields, classify every tile,
    place features, seal.

    Args:
        config: World generation configuration.

    Returns:
        GenerationResult with the sealed world, noise fields and placement
        statistics.
    """
    logger.info("world_generation_started", seed=config.seed, size=config.size)

    # Stage A: noise fields
    builder = WorldBuilder(config.seed, config.builder)
    fields = builder.sample_fields(config.size)

    # Stage B: classification
    world = World(size=config.size, seed=config.seed)
    _classify_tiles(world, fields, config.classification)
    _log_terrain_stats(world)

    # Stage C: feature placement
    placer = FeaturePlacer(world, config.seed, config.features)
    stats = placer.place_all()

    world.seal()
    logger.info(
        "world_generation_finished",
        seed=config.seed,
        size=config.size,
        features=stats.total_placed,
    )
    return GenerationResult(world=world, fields=fields, placement=stats, config=config)


def generate_world(config: GenerationConfig) -> World:
    """Generate a sealed World from configuration."""
    return generate_terrain(config).world


def generate(seed: int, size: int) -> World:
    """Generate a sealed World with default generation parameters."""
    return generate_world(GenerationConfig(seed=seed, size=size))


def _classify_tiles(
    world: World,
    fields: NoiseFields,
    config: ClassificationConfig,
) -> None:
    for y in range(world.size):
        for x in range(world.size):
            world.set_terrain(x, y, make_terrain(fields.at(x, y), config))


def _log_terrain_stats(world: World) -> None:
    """Log per-type tile counts."""
    total = world.size * world.size
    for terrain_type, count in world.terrain_counts().items():
        logger.debug(
            "terrain_stats",
            terrain=terrain_type.value,
            tiles=count,
            percent=round(count / total * 100, 1),
        )
