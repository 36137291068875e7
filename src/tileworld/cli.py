"""Command-line interface for world generation."""

import argparse
import logging
import time
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from .state import World

# Preview glyphs per terrain type and feature kind
_TERRAIN_GLYPHS = {
    "water": "~",
    "grass": ".",
    "sand": ":",
    "stone": "^",
    "snow": "*",
    "gravel": ",",
}
_FEATURE_GLYPHS = {
    "rock": "o",
    "flower": "f",
    "bush": "b",
    "tree": "T",
}


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for world generation."""
    parser = argparse.ArgumentParser(description="Generate a procedural tile world")
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Config name (from configs/) or path to a TOML file",
    )
    parser.add_argument("--seed", type=int, default=None, help="Override world seed")
    parser.add_argument("--size", type=int, default=None, help="Override tiles per side")
    parser.add_argument(
        "--preview", action="store_true", help="Print an ASCII preview of the world"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )

    # Import here to avoid slow startup for --help
    from .config import find_config, load_config
    from .features import FeatureKind
    from .generator import generate_terrain
    from .terrain.config import GenerationConfig
    from .validation import validate_world

    config = load_config(find_config(args.config)) if args.config else GenerationConfig()
    overrides = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.size is not None:
        overrides["size"] = args.size
    if overrides:
        config = GenerationConfig.model_validate(config.model_dump() | overrides)

    print(f"Generating {config.size}x{config.size} world with seed {config.seed}")

    start_time = time.time()
    result = generate_terrain(config)
    gen_time = time.time() - start_time
    world = result.world

    print(f"Generation complete in {gen_time:.1f}s")
    print()

    total = world.size * world.size
    print("Terrain:")
    for terrain_type, count in world.terrain_counts().items():
        print(f"  {terrain_type.value:<8} {count:>8,} ({count / total:.1%})")

    print("Features:")
    for kind in FeatureKind:
        print(f"  {kind.value:<8} {world.feature_count(kind):>8,}")

    validation = validate_world(world)
    print(f"Validation: {'passed' if validation.passed else 'FAILED'}")

    if args.preview:
        print()
        print(render_preview(world))


def render_preview(world: "World") -> str:
    """Render the world as ASCII, one character per tile."""
    lines = []
    for y in range(world.size):
        row = []
        for x in range(world.size):
            feature = world.feature_at(x, y)
            if feature is not None:
                row.append(_FEATURE_GLYPHS[feature.kind.value])
            else:
                row.append(_TERRAIN_GLYPHS[world.terrain_at(x, y).type.value])
        lines.append("".join(row))
    return "\n".join(lines)


if __name__ == "__main__":
    main()
