"""Tests for post-generation validation."""

from tileworld.features import Feature, FeatureKind
from tileworld.generator import generate
from tileworld.state import World
from tileworld.terrain_types import TerrainType
from tileworld.types import Location
from tileworld.validation import validate_world


class TestValidateWorld:
    def test_generated_world_passes(self) -> None:
        result = validate_world(generate(42, 20))
        assert result.passed
        assert result.errors == []

    def test_missing_terrain_is_error(self) -> None:
        result = validate_world(World(size=3))
        assert not result.passed
        assert "9 tiles have no terrain" in result.errors[0]

    def test_all_water_warns(self, world_factory) -> None:
        result = validate_world(world_factory(4, TerrainType.WATER))
        assert result.passed
        assert result.warnings == ["World has no land"]

    def test_illegal_feature_is_error(self, world_factory) -> None:
        # Committed directly, bypassing the placement checks
        world = world_factory(4, TerrainType.SAND)
        world.add_feature(
            Feature(
                location=Location(x=1, y=1),
                size=FeatureKind.BUSH.size,
                kind=FeatureKind.BUSH,
            )
        )
        result = validate_world(world)
        assert not result.passed
        assert any("not allowed" in error for error in result.errors)
