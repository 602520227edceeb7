from __future__ import annotations

import argparse
import json
import logging
import sys

from . import __version__
from .config import GenerationSettings
from .dungeon import generate_dungeon
from .exceptions import ConfigError, GenerationError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_GENERATION_FAILED = 1
EXIT_BAD_CONFIG = 2


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="delve",
        description="Generate a dungeon floor plan and print it",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--seed", type=int, default=None, help="Seed for deterministic output")
    parser.add_argument("--rooms", type=int, default=None, help="Corridor-linked rooms after the first")
    parser.add_argument("--max-retries", type=int, default=None, help="Attempt bound per retryable step")
    parser.add_argument("--config", default=None, help="Path to a generation.yaml file")
    parser.add_argument("--format", choices=("ascii", "json"), default="ascii", help="Output format")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _setup_logging(args.verbose)

    try:
        settings = GenerationSettings.load(
            args.config,
            seed=args.seed,
            corridor_rooms=args.rooms,
            max_retries=args.max_retries,
        )
    except ConfigError as e:
        print(e.to_human(), file=sys.stderr)
        return EXIT_BAD_CONFIG

    try:
        dungeon = generate_dungeon(settings)
    except GenerationError as e:
        logger.error("Dungeon generation failed: %s", e)
        return EXIT_GENERATION_FAILED

    if args.format == "json":
        print(json.dumps(dungeon.to_dict(), indent=2, sort_keys=True))
    else:
        print("\n".join(dungeon.tiles.to_str_lines(dungeon.spawns)))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
