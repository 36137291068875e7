"""Post-generation validation of a world's invariants."""

import structlog

from .features import Feature
from .state import World
from .terrain_types import TerrainType

logger = structlog.get_logger()


class ValidationResult:
    """Result of world validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_world(world: World) -> ValidationResult:
    """Validate a generated world.

    Args:
        world: World to check, sealed or not.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    _check_terrain_complete(world, result)
    features = world.all_features()
    _check_bounds(world, features, result)
    _check_overlap(features, result)
    _check_kind_legality(world, features, result)
    _check_land(world, result)

    if result.passed:
        logger.info("world_validation_passed", features=len(features))
    else:
        logger.warning("world_validation_failed", errors=len(result.errors))
        for error in result.errors:
            logger.error("world_validation_error", detail=error)

    for warning in result.warnings:
        logger.warning("world_validation_warning", detail=warning)

    return result


def _check_terrain_complete(world: World, result: ValidationResult) -> None:
    missing = sum(
        1
        for y in range(world.size)
        for x in range(world.size)
        if world.terrain_at(x, y) is None
    )
    if missing:
        result.add_error(f"{missing} tiles have no terrain")


def _check_bounds(
    world: World, features: tuple[Feature, ...], result: ValidationResult
) -> None:
    outside = sum(
        1
        for feature in features
        if not all(world.in_bounds(x, y) for x, y in feature.footprint())
    )
    if outside:
        result.add_error(f"{outside} features extend outside the world")


def _check_overlap(features: tuple[Feature, ...], result: ValidationResult) -> None:
    owners: dict[tuple[int, int], Feature] = {}
    overlapping = 0
    for feature in features:
        for cell in feature.footprint():
            if cell in owners:
                overlapping += 1
            else:
                owners[cell] = feature
    if overlapping:
        result.add_error(f"{overlapping} footprint cells claimed by more than one feature")


def _check_kind_legality(
    world: World, features: tuple[Feature, ...], result: ValidationResult
) -> None:
    illegal = 0
    for feature in features:
        x, y = feature.anchor
        if not feature.kind.spec.check(world, x, y):
            illegal += 1
    if illegal:
        result.add_error(f"{illegal} features on terrain not allowed for their kind")


def _check_land(world: World, result: ValidationResult) -> None:
    counts = world.terrain_counts()
    land = sum(
        count
        for terrain_type, count in counts.items()
        if terrain_type != TerrainType.WATER
    )
    if land == 0:
        result.add_warning("World has no land")
