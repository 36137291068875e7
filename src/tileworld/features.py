"""Feature kinds, their static placement parameters, and placed features."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterator

import numpy as np
from pydantic import BaseModel, model_validator

from .terrain_types import TerrainType
from .types import Location, Size

if TYPE_CHECKING:
    from .state import World


class FeatureKind(str, Enum):
    """Kinds of features that can be placed on the world."""

    ROCK = "rock"
    FLOWER = "flower"
    BUSH = "bush"
    TREE = "tree"

    @property
    def spec(self) -> "FeatureSpec":
        return FEATURE_SPECS[self]

    @property
    def size(self) -> Size:
        return self.spec.size

    @property
    def variants(self) -> int:
        """Number of visual variants."""
        return len(self.spec.textures)

    @property
    def textures(self) -> tuple[str, ...]:
        """Texture handle per variant, for the renderer."""
        return self.spec.textures

    @property
    def offset_divisor(self) -> tuple[int, int]:
        return self.spec.offset_divisor

    def create_feature(
        self,
        x: int,
        y: int,
        rng: np.random.Generator,
        variant: int | None = None,
    ) -> "Feature":
        """Create a feature anchored at tile (x, y).

        The location is displaced inside the tile by ``rand() / divisor`` on
        each axis with a non-zero divisor. A missing variant is drawn from
        ``rng``.

        Args:
            x: Anchor tile x.
            y: Anchor tile y.
            rng: Random stream for variant and offset.
            variant: Explicit variant index, or None to pick one.

        Returns:
            The new Feature (not yet committed to any world).
        """
        if variant is None:
            variant = int(rng.integers(self.variants))

        divisor_x, divisor_y = self.offset_divisor
        offset_x = rng.random() / divisor_x if divisor_x != 0 else 0.0
        offset_y = rng.random() / divisor_y if divisor_y != 0 else 0.0

        return Feature(
            location=Location(x=x, y=y).add(offset_x, offset_y),
            size=self.size,
            kind=self,
            variant=variant,
        )


class Feature(BaseModel, frozen=True):
    """A placed feature.

    Ordered by descending Y so that sorting yields back-to-front draw order.
    """

    location: Location
    size: Size
    kind: FeatureKind
    variant: int = 0

    @model_validator(mode="after")
    def _check_variant(self) -> "Feature":
        if not 0 <= self.variant < self.kind.variants:
            raise ValueError(
                f"variant {self.variant} out of range for {self.kind.value} "
                f"({self.kind.variants} variants)"
            )
        return self

    @property
    def anchor(self) -> tuple[int, int]:
        """Integer tile the footprint is anchored at."""
        return self.location.tile

    def footprint(self) -> Iterator[tuple[int, int]]:
        """Yield every (x, y) cell covered by this feature."""
        yield from footprint_cells(*self.anchor, self.size)

    def covers(self, x: int, y: int) -> bool:
        """Whether cell (x, y) lies inside the footprint."""
        ax, ay = self.anchor
        return ax <= x < ax + self.size.width and ay <= y < ay + self.size.height

    def overlaps(self, other: "Feature") -> bool:
        """Whether the two footprints share at least one cell."""
        ax, ay = self.anchor
        bx, by = other.anchor
        return (
            ax < bx + other.size.width
            and bx < ax + self.size.width
            and ay < by + other.size.height
            and by < ay + self.size.height
        )

    def __lt__(self, other: "Feature") -> bool:
        return self.location.y > other.location.y

    def __hash__(self) -> int:
        return hash(self.location)


def footprint_cells(x: int, y: int, size: Size) -> Iterator[tuple[int, int]]:
    """Yield the cells of a size rectangle anchored at (x, y)."""
    for dy in range(size.height):
        for dx in range(size.width):
            yield x + dx, y + dy


# --- Kind-specific placement conditions ---

PlacementCondition = Callable[["World", int, int, Size], bool]


def _all_terrain_in(allowed: frozenset[TerrainType]) -> PlacementCondition:
    def condition(world: "World", x: int, y: int, size: Size) -> bool:
        for cx, cy in footprint_cells(x, y, size):
            terrain = world.terrain_at(cx, cy)
            if terrain is None or terrain.type not in allowed:
                return False
        return True

    return condition


def _grass_away_from_water(world: "World", x: int, y: int, size: Size) -> bool:
    if not _all_terrain_in(frozenset({TerrainType.GRASS}))(world, x, y, size):
        return False
    # 8-neighbourhood of the footprint; out-of-bounds neighbours are ignored
    for cy in range(y - 1, y + size.height + 1):
        for cx in range(x - 1, x + size.width + 1):
            terrain = world.terrain_at(cx, cy)
            if terrain is not None and terrain.type == TerrainType.WATER:
                return False
    return True


@dataclass(frozen=True)
class FeatureSpec:
    """Static parameters of a feature kind."""

    size: Size
    textures: tuple[str, ...]
    offset_divisor: tuple[int, int]
    condition: PlacementCondition

    def check(self, world: "World", x: int, y: int) -> bool:
        """Evaluate the kind-specific condition for an anchor at (x, y)."""
        return self.condition(world, x, y, self.size)


FEATURE_SPECS: dict[FeatureKind, FeatureSpec] = {
    FeatureKind.ROCK: FeatureSpec(
        size=Size(width=1, height=1),
        textures=("rock",),
        offset_divisor=(3, 3),
        condition=_all_terrain_in(frozenset({TerrainType.STONE, TerrainType.GRAVEL})),
    ),
    FeatureKind.FLOWER: FeatureSpec(
        size=Size(width=1, height=1),
        textures=("tulip", "tulip_2", "blue_orchid", "dandelion", "red_lily"),
        offset_divisor=(2, 2),
        condition=_grass_away_from_water,
    ),
    FeatureKind.BUSH: FeatureSpec(
        size=Size(width=1, height=1),
        textures=("bush",),
        offset_divisor=(3, 3),
        condition=_all_terrain_in(frozenset({TerrainType.GRASS})),
    ),
    FeatureKind.TREE: FeatureSpec(
        size=Size(width=2, height=2),
        textures=("tree1", "tree2"),
        offset_divisor=(4, 0),
        condition=_all_terrain_in(frozenset({TerrainType.GRASS})),
    ),
}

# Earlier kinds claim cells first; changing this changes every seeded world
PLACEMENT_ORDER: tuple[FeatureKind, ...] = (
    FeatureKind.ROCK,
    FeatureKind.BUSH,
    FeatureKind.TREE,
    FeatureKind.FLOWER,
)
