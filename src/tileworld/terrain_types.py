"""Terrain types, biomes and their properties."""

from enum import Enum


class TerrainType(str, Enum):
    """Tile surface types with rendering handles.

    ``texture`` is an opaque handle resolved by the renderer; ``random_uv``
    tells it whether the tile texture may be drawn in a random orientation.
    """

    WATER = "water"
    GRASS = "grass"
    SAND = "sand"
    STONE = "stone"
    SNOW = "snow"
    GRAVEL = "gravel"

    @property
    def texture(self) -> str:
        """Texture handle for the renderer."""
        return self.value

    @property
    def random_uv(self) -> bool:
        """Whether the tile texture uses randomized UV orientation."""
        return self not in _FIXED_UV_TYPES

    @property
    def value_id(self) -> int:
        """Compact uint8 code used for array storage."""
        return _TERRAIN_VALUES[self]


class Biome(str, Enum):
    """Biome labels derived from noise thresholds."""

    OCEAN = "ocean"
    BEACH = "beach"
    PLAINS = "plains"
    DESERT = "desert"
    MOUNTAINS = "mountains"
    TUNDRA = "tundra"
    RIVERBED = "riverbed"


_FIXED_UV_TYPES = frozenset({TerrainType.WATER})

# Order matches declaration; stable across releases since grids are compared
_TERRAIN_VALUES: dict[TerrainType, int] = {
    terrain_type: index for index, terrain_type in enumerate(TerrainType)
}
_VALUE_TERRAINS: dict[int, TerrainType] = {
    index: terrain_type for terrain_type, index in _TERRAIN_VALUES.items()
}

# Marks grid cells whose terrain has not been generated yet
UNSET_VALUE = 255


def terrain_type_from_value(value: int) -> TerrainType:
    """Convert uint8 value back to TerrainType.

    Raises:
        ValueError: If the value does not encode a terrain type.
    """
    try:
        return _VALUE_TERRAINS[value]
    except KeyError:
        raise ValueError(f"Unknown terrain value: {value}") from None
