"""Core value types for the world grid."""

import math

from pydantic import BaseModel, Field


class Location(BaseModel, frozen=True):
    """Immutable 2D world coordinate with sub-tile precision."""

    x: float
    y: float

    def add(self, dx: float, dy: float) -> "Location":
        """Return new location translated by (dx, dy)."""
        return Location(x=self.x + dx, y=self.y + dy)

    def __add__(self, other: "Location") -> "Location":
        return Location(x=self.x + other.x, y=self.y + other.y)

    @property
    def tile(self) -> tuple[int, int]:
        """Integer tile containing this location."""
        return math.floor(self.x), math.floor(self.y)

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f})"

    def __repr__(self) -> str:
        return f"Location(x={self.x}, y={self.y})"


class Size(BaseModel, frozen=True):
    """Footprint size of a feature in tiles."""

    width: int = Field(ge=1)
    height: int = Field(ge=1)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"
