"""World state: terrain grid and feature index."""

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, PrivateAttr, field_validator

from .exceptions import (
    ConfigurationError,
    LocationOutOfBoundsError,
    PositionOccupiedError,
    TerrainAlreadySetError,
    WorldSealedError,
)
from .features import Feature, FeatureKind
from .terrain_types import UNSET_VALUE, Biome, TerrainType


class Terrain(BaseModel, frozen=True):
    """Immutable per-tile terrain record."""

    type: TerrainType
    biome: Biome
    continentality_noise: float
    weirdness_noise: float
    rivers_noise: float


class World(BaseModel):
    """
    Square tile world owned by the generation pipeline.

    Writable while generating; ``seal`` turns it read-only so it can be
    shared with any number of readers. Terrain is stored both as records
    (for noise values and biome) and as a uint8 type grid for bulk reads.
    """

    size: int
    seed: int = 0

    _terrain: list[list[Terrain | None]] = PrivateAttr()
    _type_grid: NDArray[np.uint8] = PrivateAttr()

    # Kind -> features in commit order (dict used as an ordered set)
    _features: dict[FeatureKind, dict[Feature, None]] = PrivateAttr()
    _commit_order: list[Feature] = PrivateAttr(default_factory=list)

    # Cell -> feature covering it
    _occupancy: dict[tuple[int, int], Feature] = PrivateAttr(default_factory=dict)

    _sealed: bool = PrivateAttr(default=False)

    @field_validator("size")
    @classmethod
    def _check_size(cls, value: int) -> int:
        if value < 1:
            raise ConfigurationError(f"World size must be positive, got {value}")
        return value

    def model_post_init(self, __context: object) -> None:
        self._terrain = [[None] * self.size for _ in range(self.size)]
        self._type_grid = np.full((self.size, self.size), UNSET_VALUE, dtype=np.uint8)
        self._features = {kind: {} for kind in FeatureKind}

    # --- Generation (writer) operations ---

    def set_terrain(self, x: int, y: int, terrain: Terrain) -> None:
        """Store the terrain for a tile. Each tile is written once.

        Raises:
            WorldSealedError: If the world is sealed.
            LocationOutOfBoundsError: If (x, y) is outside the grid.
            TerrainAlreadySetError: If the tile already has terrain.
        """
        self._check_writable()
        if not self.in_bounds(x, y):
            raise LocationOutOfBoundsError(
                f"Tile ({x}, {y}) outside {self.size}x{self.size} world"
            )
        if self._terrain[y][x] is not None:
            raise TerrainAlreadySetError(f"Terrain at ({x}, {y}) already set")
        self._terrain[y][x] = terrain
        self._type_grid[y, x] = terrain.type.value_id

    def add_feature(self, feature: Feature) -> None:
        """Commit a feature: register it under its kind and occupy its footprint.

        Raises:
            WorldSealedError: If the world is sealed.
            LocationOutOfBoundsError: If the footprint leaves the grid.
            PositionOccupiedError: If any footprint cell is occupied.
        """
        self._check_writable()
        cells = list(feature.footprint())
        for x, y in cells:
            if not self.in_bounds(x, y):
                raise LocationOutOfBoundsError(
                    f"{feature.kind.value} footprint cell ({x}, {y}) outside world"
                )
            if (x, y) in self._occupancy:
                occupant = self._occupancy[(x, y)]
                raise PositionOccupiedError(
                    f"Cell ({x}, {y}) already occupied by {occupant.kind.value}"
                )
        for cell in cells:
            self._occupancy[cell] = feature
        self._features[feature.kind][feature] = None
        self._commit_order.append(feature)

    def seal(self) -> None:
        """End the generation phase; all further writes are rejected."""
        self._sealed = True

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def _check_writable(self) -> None:
        if self._sealed:
            raise WorldSealedError("World is sealed; generation has finished")

    # --- Read operations ---

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if (x, y) is within world bounds."""
        return 0 <= x < self.size and 0 <= y < self.size

    def terrain_at(self, x: int, y: int) -> Terrain | None:
        """Terrain at (x, y), or None if no such location."""
        if not self.in_bounds(x, y):
            return None
        return self._terrain[y][x]

    def feature_at(self, x: int, y: int) -> Feature | None:
        """Feature whose footprint covers (x, y), or None."""
        return self._occupancy.get((x, y))

    def is_occupied(self, x: int, y: int) -> bool:
        """Check if a feature covers (x, y)."""
        return (x, y) in self._occupancy

    def features_of_kind(self, kind: FeatureKind) -> tuple[Feature, ...]:
        """Features of one kind in commit order."""
        return tuple(self._features[kind])

    def all_features(self) -> tuple[Feature, ...]:
        """All features in commit order."""
        return tuple(self._commit_order)

    def feature_count(self, kind: FeatureKind | None = None) -> int:
        """Number of placed features, optionally of a single kind."""
        if kind is None:
            return len(self._commit_order)
        return len(self._features[kind])

    def terrain_type_grid(self) -> NDArray[np.uint8]:
        """Copy of the terrain type grid, shape (size, size), indexed [y, x].

        Values are ``TerrainType.value_id``; ungenerated cells hold
        ``UNSET_VALUE``.
        """
        grid = self._type_grid.copy()
        grid.flags.writeable = False
        return grid

    def terrain_counts(self) -> dict[TerrainType, int]:
        """Number of tiles per terrain type."""
        values, counts = np.unique(self._type_grid, return_counts=True)
        by_value = dict(zip(values.tolist(), counts.tolist()))
        return {
            terrain_type: by_value.get(terrain_type.value_id, 0)
            for terrain_type in TerrainType
        }
