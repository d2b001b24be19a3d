"""Command-line interface for world generation and road building."""

import argparse
import logging
import sys
import time
from pathlib import Path

import structlog


def _parse_endpoint(value: str) -> tuple[str, int]:
    """Parse 'settlement:ID' or 'resource:ID'."""
    if ":" not in value:
        raise argparse.ArgumentTypeError(
            f"Invalid endpoint {value!r} (expected 'settlement:ID' or 'resource:ID')"
        )
    kind, raw_id = value.split(":", 1)
    if kind not in ("settlement", "resource"):
        raise argparse.ArgumentTypeError(f"Unknown endpoint kind: {kind}")
    try:
        return kind, int(raw_id)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid endpoint id: {raw_id}") from None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate tile worlds and build roads across them"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate and save a world")
    generate.add_argument(
        "--config", type=str, default=None, help="TOML config file (optional)"
    )
    generate.add_argument("--width", type=int, default=None, help="World width")
    generate.add_argument("--height", type=int, default=None, help="World height")
    generate.add_argument(
        "--seed", type=int, default=None, help="Random seed (default: time-derived)"
    )
    generate.add_argument(
        "--output",
        "-o",
        type=str,
        default="saves/world.npz",
        help="Output path (default: saves/world.npz)",
    )

    road = subparsers.add_parser("road", help="Build a road in a saved world")
    road.add_argument("world", type=str, help="Path to a saved .npz world")
    road.add_argument(
        "--from", dest="from_", type=_parse_endpoint, required=True,
        help="Origin, e.g. settlement:3",
    )
    road.add_argument(
        "--to", type=_parse_endpoint, required=True, help="Destination, e.g. resource:7"
    )
    road.add_argument(
        "--config", type=str, default=None, help="TOML config file (optional)"
    )

    return parser


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def _run_generate(args: argparse.Namespace) -> int:
    from .config import Config, load_config
    from .terrain.generator import generate_terrain
    from .terrain.persistence import save_world
    from .terrain.validation import validate_world

    config = load_config(Path(args.config)) if args.config else Config()
    updates = {
        key: value
        for key, value in (("width", args.width), ("height", args.height), ("seed", args.seed))
        if value is not None
    }
    world_config = config.world.model_copy(update=updates)

    output_path = Path(args.output)

    print(f"Generating {world_config.width}x{world_config.height} world")
    print(f"Output: {output_path}")
    print()

    start_time = time.time()
    result = generate_terrain(world_config)
    gen_time = time.time() - start_time

    world = result.world
    print()
    print(f"Generation complete in {gen_time:.1f}s (seed {world.seed})")
    print(
        f"{len(result.rivers)} rivers, {len(world.settlements)} settlements, "
        f"{len(world.resources)} resource nodes"
    )

    validation = validate_world(
        world, world_config.settlements, world_config.resources
    )
    if not validation.passed:
        return 1

    output_path.parent.mkdir(parents=True, exist_ok=True)
    save_world(output_path, world)

    print(f"Saved to {output_path}")
    return 0


def _run_road(args: argparse.Namespace) -> int:
    from .config import Config, load_config
    from .roads import build_road_between, create_initial_road_build_state, endpoint_for
    from .terrain.persistence import load_world, save_world

    config = load_config(Path(args.config)) if args.config else Config()
    world_path = Path(args.world)
    world = load_world(world_path)

    endpoints = []
    for kind, item_id in (args.from_, args.to):
        item = (
            world.get_settlement(item_id)
            if kind == "settlement"
            else world.get_resource(item_id)
        )
        if item is None:
            print(f"No {kind} with id {item_id}", file=sys.stderr)
            return 1
        endpoints.append(endpoint_for(item))

    if args.from_ == args.to:
        print("Cannot build a road from a source to itself", file=sys.stderr)
        return 1

    state = create_initial_road_build_state(world.roads)
    road = build_road_between(state, world, endpoints[0], endpoints[1], config.roads)
    if road is None:
        print("No path found between sources")
        return 1

    save_world(world_path, world)
    print(f"Built road {road.id} ({len(road.path)} tiles), saved to {world_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "generate":
        return _run_generate(args)
    return _run_road(args)


if __name__ == "__main__":
    sys.exit(main())
