"""Shared test fixtures for tileworld tests."""

from typing import Callable

import pytest

from tileworld.state import Terrain, World
from tileworld.terrain_types import Biome, TerrainType

_BIOMES = {
    TerrainType.WATER: Biome.OCEAN,
    TerrainType.GRASS: Biome.PLAINS,
    TerrainType.SAND: Biome.DESERT,
    TerrainType.STONE: Biome.MOUNTAINS,
    TerrainType.SNOW: Biome.TUNDRA,
    TerrainType.GRAVEL: Biome.RIVERBED,
}


def make_terrain(terrain_type: TerrainType) -> Terrain:
    """Terrain record with zeroed noise values."""
    return Terrain(
        type=terrain_type,
        biome=_BIOMES[terrain_type],
        continentality_noise=0.0,
        weirdness_noise=0.0,
        rivers_noise=0.0,
    )


def make_world(
    size: int,
    terrain_type: TerrainType = TerrainType.GRASS,
    overrides: dict[tuple[int, int], TerrainType] | None = None,
) -> World:
    """Unsealed world filled with one terrain type plus per-cell overrides."""
    overrides = overrides or {}
    world = World(size=size, seed=1)
    for y in range(size):
        for x in range(size):
            world.set_terrain(x, y, make_terrain(overrides.get((x, y), terrain_type)))
    return world


@pytest.fixture
def world_factory() -> Callable[..., World]:
    return make_world


@pytest.fixture
def grass_world() -> World:
    """8x8 world with all tiles grass."""
    return make_world(8)


@pytest.fixture
def stone_world() -> World:
    """8x8 world with all tiles stone."""
    return make_world(8, TerrainType.STONE)
