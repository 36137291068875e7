"""Procedural tile world generation core."""

from .exceptions import (
    ConfigurationError,
    LocationOutOfBoundsError,
    PositionOccupiedError,
    TerrainAlreadySetError,
    WorldError,
    WorldSealedError,
)
from .features import FEATURE_SPECS, PLACEMENT_ORDER, Feature, FeatureKind, FeatureSpec
from .generator import GenerationResult, generate, generate_terrain, generate_world
from .placement import (
    FeaturePlacer,
    PlacementRejection,
    PlacementStats,
    candidate_rng,
    check_placement,
)
from .state import Terrain, World
from .terrain_types import Biome, TerrainType
from .types import Location, Size
from .validation import ValidationResult, validate_world

__all__ = [
    # Types
    "Location",
    "Size",
    "TerrainType",
    "Biome",
    # State
    "Terrain",
    "World",
    # Features
    "Feature",
    "FeatureKind",
    "FeatureSpec",
    "FEATURE_SPECS",
    "PLACEMENT_ORDER",
    # Placement
    "FeaturePlacer",
    "PlacementRejection",
    "PlacementStats",
    "candidate_rng",
    "check_placement",
    # Generation
    "GenerationResult",
    "generate",
    "generate_terrain",
    "generate_world",
    # Validation
    "ValidationResult",
    "validate_world",
    # Exceptions
    "WorldError",
    "ConfigurationError",
    "LocationOutOfBoundsError",
    "PositionOccupiedError",
    "TerrainAlreadySetError",
    "WorldSealedError",
]
