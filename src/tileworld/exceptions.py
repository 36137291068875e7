"""Custom exceptions for world generation."""


class WorldError(Exception):
    """Base exception for world errors."""

    pass


class ConfigurationError(WorldError):
    """Raised when generation parameters would produce a degenerate world."""

    pass


class LocationOutOfBoundsError(WorldError):
    """Raised when writing outside the world grid."""

    pass


class PositionOccupiedError(WorldError):
    """Raised when committing a feature onto an occupied cell."""

    pass


class TerrainAlreadySetError(WorldError):
    """Raised when a tile's terrain is written twice."""

    pass


class WorldSealedError(WorldError):
    """Raised when mutating a world after generation has finished."""

    pass
