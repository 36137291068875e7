"""Feature placement: rocks, bushes, trees and flowers with non-overlap."""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np
import structlog

from .features import PLACEMENT_ORDER, Feature, FeatureKind, footprint_cells
from .state import World
from .terrain.config import FeatureDensityConfig

logger = structlog.get_logger()

_KIND_INDEX: dict[FeatureKind, int] = {kind: i for i, kind in enumerate(FeatureKind)}
_SEED_MASK = (1 << 64) - 1


class PlacementRejection(str, Enum):
    """Why a candidate could not be placed."""

    OUT_OF_BOUNDS = "out_of_bounds"
    OCCUPIED = "occupied"
    TERRAIN = "terrain"


@dataclass
class PlacementStats:
    """Per-kind counters from a placement run."""

    placed: dict[FeatureKind, int] = field(default_factory=dict)
    candidates: dict[FeatureKind, int] = field(default_factory=dict)
    rejected: dict[PlacementRejection, int] = field(
        default_factory=lambda: {reason: 0 for reason in PlacementRejection}
    )

    @property
    def total_placed(self) -> int:
        return sum(self.placed.values())


def candidate_rng(seed: int, kind: FeatureKind, x: int, y: int) -> np.random.Generator:
    """Random stream for one placement candidate.

    Derived only from the world seed, the kind and the tile, so a
    candidate's rolls do not depend on how many candidates came before.
    """
    entropy = [seed & _SEED_MASK, _KIND_INDEX[kind], x, y]
    return np.random.default_rng(np.random.SeedSequence(entropy))


def check_placement(
    world: World, kind: FeatureKind, x: int, y: int
) -> PlacementRejection | None:
    """Check whether a feature of ``kind`` can be anchored at (x, y).

    Checks run in order: footprint bounds, occupancy by any placed feature,
    then the kind-specific condition.

    Returns:
        None if placement is legal, otherwise the first failed check.
    """
    cells = list(footprint_cells(x, y, kind.size))
    if not all(world.in_bounds(cx, cy) for cx, cy in cells):
        return PlacementRejection.OUT_OF_BOUNDS
    if any(world.is_occupied(cx, cy) for cx, cy in cells):
        return PlacementRejection.OCCUPIED
    if not kind.spec.check(world, x, y):
        return PlacementRejection.TERRAIN
    return None


class FeaturePlacer:
    """Populates a world with features, one kind at a time.

    Each tile is a candidate for each kind with a seeded probability (the
    density policy); accepted candidates are committed immediately so they
    block later candidates of every kind.
    """

    def __init__(
        self,
        world: World,
        seed: int,
        config: FeatureDensityConfig | None = None,
    ):
        self.world = world
        self.seed = seed
        self.config = config or FeatureDensityConfig()
        self.stats = PlacementStats()

    def spawn_probability(self, kind: FeatureKind, x: int, y: int) -> float:
        """Probability that tile (x, y) is a candidate for ``kind``."""
        base = self.config.base_probability(kind.value)
        terrain = self.world.terrain_at(x, y)
        if terrain is None:
            return 0.0
        return base * self.config.multiplier(kind.value, terrain.biome.value)

    def try_place(
        self,
        kind: FeatureKind,
        x: int,
        y: int,
        variant: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> Feature | None:
        """Place a feature anchored at (x, y) if legal.

        Args:
            kind: Feature kind.
            x: Anchor tile x.
            y: Anchor tile y.
            variant: Explicit variant, or None for a seeded pick.
            rng: Stream for variant and offset; defaults to the candidate's
                own stream.

        Returns:
            The committed Feature, or None if the candidate was rejected.

        Raises:
            ValueError: If ``variant`` is out of range for the kind.
        """
        if variant is not None and not 0 <= variant < kind.variants:
            raise ValueError(
                f"variant {variant} out of range for {kind.value} "
                f"({kind.variants} variants)"
            )

        rejection = check_placement(self.world, kind, x, y)
        if rejection is not None:
            self.stats.rejected[rejection] += 1
            return None

        if rng is None:
            rng = candidate_rng(self.seed, kind, x, y)
        feature = kind.create_feature(x, y, rng, variant=variant)
        self.world.add_feature(feature)
        self.stats.placed[kind] = self.stats.placed.get(kind, 0) + 1
        return feature

    def place_kind(self, kind: FeatureKind) -> list[Feature]:
        """Scan the grid row-major and place every accepted candidate.

        Returns:
            Features of this kind placed during the scan, in commit order.
        """
        placed: list[Feature] = []
        candidates = 0

        for y in range(self.world.size):
            for x in range(self.world.size):
                probability = self.spawn_probability(kind, x, y)
                if probability <= 0.0:
                    continue
                rng = candidate_rng(self.seed, kind, x, y)
                if rng.random() >= probability:
                    continue
                candidates += 1
                feature = self.try_place(kind, x, y, rng=rng)
                if feature is not None:
                    placed.append(feature)

        self.stats.candidates[kind] = self.stats.candidates.get(kind, 0) + candidates
        logger.info(
            "feature_kind_placed",
            kind=kind.value,
            candidates=candidates,
            placed=len(placed),
        )
        return placed

    def place_all(self) -> PlacementStats:
        """Place every kind in ``PLACEMENT_ORDER``."""
        for kind in PLACEMENT_ORDER:
            self.place_kind(kind)
        return self.stats
