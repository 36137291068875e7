"""Tests for the feature placement engine."""

import numpy as np
import pytest
from structlog.testing import capture_logs

from tileworld.features import FeatureKind
from tileworld.placement import (
    FeaturePlacer,
    PlacementRejection,
    candidate_rng,
    check_placement,
)
from tileworld.state import World
from tileworld.terrain.config import FeatureDensityConfig
from tileworld.terrain_types import TerrainType

ALWAYS = FeatureDensityConfig(rock=1.0, flower=1.0, bush=1.0, tree=1.0)
NEVER = FeatureDensityConfig(rock=0.0, flower=0.0, bush=0.0, tree=0.0)


class TestCheckPlacement:
    """Tests for legality checks."""

    def test_tree_then_rock_on_shared_cell(self, grass_world: World) -> None:
        """A 2x2 tree at (3, 3) blocks a later candidate at (4, 4)."""
        placer = FeaturePlacer(grass_world, seed=42)
        tree = placer.try_place(FeatureKind.TREE, 3, 3)

        assert tree is not None
        assert set(tree.footprint()) == {(3, 3), (3, 4), (4, 3), (4, 4)}
        assert check_placement(grass_world, FeatureKind.ROCK, 4, 4) == PlacementRejection.OCCUPIED
        assert placer.try_place(FeatureKind.ROCK, 4, 4) is None
        assert grass_world.feature_at(4, 4) == tree

    def test_footprint_outside_grid(self, grass_world: World) -> None:
        assert check_placement(grass_world, FeatureKind.TREE, 7, 3) == PlacementRejection.OUT_OF_BOUNDS
        assert check_placement(grass_world, FeatureKind.TREE, 3, 7) == PlacementRejection.OUT_OF_BOUNDS
        assert check_placement(grass_world, FeatureKind.BUSH, -1, 0) == PlacementRejection.OUT_OF_BOUNDS
        assert check_placement(grass_world, FeatureKind.TREE, 6, 6) is None

    def test_tree_requires_grass_under_every_cell(self, world_factory) -> None:
        world = world_factory(8, overrides={(4, 4): TerrainType.SAND})
        assert check_placement(world, FeatureKind.TREE, 3, 3) == PlacementRejection.TERRAIN
        assert check_placement(world, FeatureKind.TREE, 1, 1) is None

    def test_bush_requires_grass(self, stone_world: World) -> None:
        assert check_placement(stone_world, FeatureKind.BUSH, 2, 2) == PlacementRejection.TERRAIN

    @pytest.mark.parametrize("terrain_type", [TerrainType.STONE, TerrainType.GRAVEL])
    def test_rock_on_stone_or_gravel(self, world_factory, terrain_type: TerrainType) -> None:
        world = world_factory(4, terrain_type)
        assert check_placement(world, FeatureKind.ROCK, 1, 1) is None

    def test_rock_rejected_on_grass(self, grass_world: World) -> None:
        assert check_placement(grass_world, FeatureKind.ROCK, 1, 1) == PlacementRejection.TERRAIN

    def test_flower_rejected_next_to_water(self, world_factory) -> None:
        world = world_factory(8, overrides={(5, 5): TerrainType.WATER})
        assert check_placement(world, FeatureKind.FLOWER, 4, 4) == PlacementRejection.TERRAIN
        assert check_placement(world, FeatureKind.FLOWER, 6, 5) == PlacementRejection.TERRAIN
        assert check_placement(world, FeatureKind.FLOWER, 3, 3) is None

    def test_flower_at_edge_ignores_outside_neighbours(self, grass_world: World) -> None:
        assert check_placement(grass_world, FeatureKind.FLOWER, 0, 0) is None

    def test_occupancy_checked_across_kinds(self, grass_world: World) -> None:
        placer = FeaturePlacer(grass_world, seed=1)
        placer.try_place(FeatureKind.BUSH, 2, 2)
        assert check_placement(grass_world, FeatureKind.FLOWER, 2, 2) == PlacementRejection.OCCUPIED
        assert check_placement(grass_world, FeatureKind.TREE, 1, 1) == PlacementRejection.OCCUPIED


class TestTryPlace:
    """Tests for single placements."""

    def test_explicit_variant(self, grass_world: World) -> None:
        placer = FeaturePlacer(grass_world, seed=1)
        flower = placer.try_place(FeatureKind.FLOWER, 1, 1, variant=3)
        assert flower.variant == 3

    def test_invalid_variant_raises(self, grass_world: World) -> None:
        placer = FeaturePlacer(grass_world, seed=1)
        with pytest.raises(ValueError):
            placer.try_place(FeatureKind.TREE, 1, 1, variant=2)
        assert grass_world.feature_count() == 0

    def test_seeded_placement_reproducible(self, world_factory) -> None:
        a = FeaturePlacer(world_factory(8), seed=5).try_place(FeatureKind.FLOWER, 2, 6)
        b = FeaturePlacer(world_factory(8), seed=5).try_place(FeatureKind.FLOWER, 2, 6)
        assert a == b

    def test_location_offset_within_anchor(self, grass_world: World) -> None:
        placer = FeaturePlacer(grass_world, seed=3)
        bush = placer.try_place(FeatureKind.BUSH, 6, 2)
        assert bush.anchor == (6, 2)
        assert bush.location.x - 6 < 1 / 3
        assert bush.location.y - 2 < 1 / 3

    def test_rejections_counted(self, grass_world: World) -> None:
        placer = FeaturePlacer(grass_world, seed=3)
        placer.try_place(FeatureKind.ROCK, 0, 0)
        placer.try_place(FeatureKind.TREE, 7, 0)
        assert placer.stats.rejected[PlacementRejection.TERRAIN] == 1
        assert placer.stats.rejected[PlacementRejection.OUT_OF_BOUNDS] == 1


class TestCandidateRng:
    def test_deterministic(self) -> None:
        a = candidate_rng(42, FeatureKind.TREE, 3, 4).random(3)
        b = candidate_rng(42, FeatureKind.TREE, 3, 4).random(3)
        np.testing.assert_array_equal(a, b)

    def test_depends_on_kind_and_tile(self) -> None:
        base = candidate_rng(42, FeatureKind.TREE, 3, 4).random()
        assert candidate_rng(42, FeatureKind.ROCK, 3, 4).random() != base
        assert candidate_rng(42, FeatureKind.TREE, 4, 3).random() != base
        assert candidate_rng(43, FeatureKind.TREE, 3, 4).random() != base

    def test_negative_seed(self) -> None:
        value = candidate_rng(-7, FeatureKind.BUSH, 0, 0).random()
        assert 0.0 <= value < 1.0


class TestPlaceKind:
    """Tests for grid scans."""

    def test_full_density_trees_tile_the_grid(self, grass_world: World) -> None:
        """Row-major greedy scan packs 2x2 trees at even coordinates."""
        placer = FeaturePlacer(grass_world, seed=1, config=ALWAYS)
        trees = placer.place_kind(FeatureKind.TREE)
        assert len(trees) == 16
        assert {tree.anchor for tree in trees} == {
            (x, y) for x in range(0, 8, 2) for y in range(0, 8, 2)
        }

    def test_scan_logs_once_per_kind(self, grass_world: World) -> None:
        """Rejected candidates are counted, not logged."""
        placer = FeaturePlacer(grass_world, seed=1, config=ALWAYS)
        with capture_logs() as logs:
            placer.place_kind(FeatureKind.ROCK)
        assert placer.stats.rejected[PlacementRejection.TERRAIN] == 64
        assert [entry["event"] for entry in logs] == ["feature_kind_placed"]

    def test_zero_density_places_nothing(self, grass_world: World) -> None:
        placer = FeaturePlacer(grass_world, seed=1, config=NEVER)
        stats = placer.place_all()
        assert stats.total_placed == 0
        assert grass_world.feature_count() == 0

    def test_biome_multiplier_scales_probability(self, world_factory) -> None:
        world = world_factory(4, TerrainType.GRAVEL)
        placer = FeaturePlacer(world, seed=1, config=FeatureDensityConfig(rock=0.5))
        assert placer.spawn_probability(FeatureKind.ROCK, 0, 0) == pytest.approx(0.25)

    def test_out_of_bounds_probability_zero(self, grass_world: World) -> None:
        placer = FeaturePlacer(grass_world, seed=1)
        assert placer.spawn_probability(FeatureKind.BUSH, 8, 8) == 0.0


class TestPlaceAll:
    def test_order_is_rock_bush_tree_flower(self, grass_world: World) -> None:
        """Bushes run before trees, so at full density they take every cell."""
        placer = FeaturePlacer(grass_world, seed=1, config=ALWAYS)
        stats = placer.place_all()
        assert grass_world.feature_count(FeatureKind.BUSH) == 64
        assert grass_world.feature_count(FeatureKind.TREE) == 0
        assert grass_world.feature_count(FeatureKind.FLOWER) == 0
        assert stats.placed[FeatureKind.BUSH] == 64

    def test_same_seed_same_features(self, world_factory) -> None:
        config = FeatureDensityConfig(rock=0.3, flower=0.3, bush=0.2, tree=0.3)
        overrides = {(x, 0): TerrainType.STONE for x in range(10)}
        worlds = [world_factory(10, overrides=overrides) for _ in range(2)]
        for world in worlds:
            FeaturePlacer(world, seed=99, config=config).place_all()
        assert worlds[0].all_features() == worlds[1].all_features()
        assert worlds[0].feature_count() > 0
