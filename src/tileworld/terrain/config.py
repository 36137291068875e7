"""Terrain generation configuration models."""

from pydantic import BaseModel, Field, field_validator, model_validator

from ..exceptions import ConfigurationError
from ..features import FeatureKind
from ..terrain_types import Biome


class NoiseConfig(BaseModel):
    """Fractal noise parameters for a single field."""

    octaves: int = Field(default=8, description="Number of octaves summed")
    roughness: float = Field(default=0.5, description="Weight multiplier per octave")
    scale: float = Field(default=0.5, description="Base frequency")

    @field_validator("octaves")
    @classmethod
    def _check_octaves(cls, value: int) -> int:
        if value < 1:
            raise ConfigurationError(f"octaves must be at least 1, got {value}")
        return value

    @field_validator("roughness", "scale")
    @classmethod
    def _check_positive(cls, value: float) -> float:
        if value <= 0:
            raise ConfigurationError(f"expected a positive value, got {value}")
        return value


class WorldBuilderConfig(BaseModel):
    """Parameters of the three noise fields sampled per tile."""

    continentality: NoiseConfig = Field(default_factory=NoiseConfig)
    weirdness: NoiseConfig = Field(default_factory=NoiseConfig)
    # Higher frequency, steeper falloff: narrow jagged bands
    rivers: NoiseConfig = Field(
        default_factory=lambda: NoiseConfig(scale=0.5 / 3, roughness=0.75)
    )


class ClassificationConfig(BaseModel):
    """Terrain classification thresholds.

    Noise sums are unnormalized; with 8 octaves and roughness 0.5 the
    continentality and weirdness fields stay within roughly [-2, 2].
    """

    water_threshold: float = Field(
        default=-0.1, description="Continentality below this is water"
    )
    beach_threshold: float = Field(
        default=-0.02, description="Continentality below this (and above water) is beach"
    )
    riverbed_width: float = Field(
        default=0.05, ge=0.0, description="|rivers| below this becomes gravel"
    )
    mountain_threshold: float = Field(
        default=0.3, description="Weirdness at or above this is stone"
    )
    snow_threshold: float = Field(
        default=0.55, description="Weirdness at or above this is snow"
    )
    desert_threshold: float = Field(
        default=-0.4, description="Weirdness at or below this is desert sand"
    )

    @model_validator(mode="after")
    def _check_ordering(self) -> "ClassificationConfig":
        if self.beach_threshold < self.water_threshold:
            raise ValueError("beach_threshold must not be below water_threshold")
        if self.snow_threshold < self.mountain_threshold:
            raise ValueError("snow_threshold must not be below mountain_threshold")
        if self.desert_threshold >= self.mountain_threshold:
            raise ValueError("desert_threshold must be below mountain_threshold")
        return self


class FeatureDensityConfig(BaseModel):
    """Spawn-density policy for feature placement.

    Each tile rolls once per kind; the kind is attempted there when the roll
    is below ``base * biome_multiplier``.
    """

    rock: float = Field(default=0.08, ge=0.0, le=1.0, description="Rock probability")
    flower: float = Field(default=0.06, ge=0.0, le=1.0, description="Flower probability")
    bush: float = Field(default=0.04, ge=0.0, le=1.0, description="Bush probability")
    tree: float = Field(default=0.10, ge=0.0, le=1.0, description="Tree probability")
    biome_multipliers: dict[str, dict[str, float]] = Field(
        default_factory=lambda: {"rock": {"riverbed": 0.5}},
        description="kind -> biome -> multiplier (missing biome = 1.0)",
    )

    @field_validator("biome_multipliers")
    @classmethod
    def _check_multipliers(
        cls, value: dict[str, dict[str, float]]
    ) -> dict[str, dict[str, float]]:
        kinds = {kind.value for kind in FeatureKind}
        biomes = {biome.value for biome in Biome}
        for kind, table in value.items():
            if kind not in kinds:
                raise ConfigurationError(f"Unknown feature kind: {kind}")
            for biome, multiplier in table.items():
                if biome not in biomes:
                    raise ConfigurationError(f"Unknown biome for {kind}: {biome}")
                if multiplier < 0:
                    raise ConfigurationError(
                        f"Negative multiplier for {kind} on {biome}: {multiplier}"
                    )
        return value

    def base_probability(self, kind: str) -> float:
        """Base spawn probability for a feature kind name."""
        return getattr(self, kind)

    def multiplier(self, kind: str, biome: str) -> float:
        """Biome multiplier for a feature kind name."""
        return self.biome_multipliers.get(kind, {}).get(biome, 1.0)


class GenerationConfig(BaseModel):
    """Complete world generation configuration."""

    seed: int = Field(default=42, description="World seed")
    size: int = Field(default=128, description="Tiles per side")

    builder: WorldBuilderConfig = Field(default_factory=WorldBuilderConfig)
    classification: ClassificationConfig = Field(
        default_factory=ClassificationConfig
    )
    features: FeatureDensityConfig = Field(default_factory=FeatureDensityConfig)

    @field_validator("size")
    @classmethod
    def _check_size(cls, value: int) -> int:
        if value < 1:
            raise ConfigurationError(f"World size must be positive, got {value}")
        return value
