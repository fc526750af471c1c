"""delve CLI entry point.

Generates a dungeon level and prints it as text, followed by a short
summary. Accepts configuration via flags and DELVE_* environment variables,
with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import logging
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from delve.dungeon import Dungeon, DiggerConfig
from delve.dungeon.config import STRATEGIES
from delve.errors import DelveError
from delve.logging_utils import log

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()

_STDLIB_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    delve dungeon generator

    Partition a map with a BSP tree, carve rooms and corridors, and print the
    result. Configuration can be provided via CLI flags or environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          DELVE_WIDTH          Map width in cells (default: 80)
          DELVE_HEIGHT         Map height in cells (default: 48)
          DELVE_SEED           Random seed (default: random)
          DELVE_STRATEGY       hall_first or avoidance (default: hall_first)
          DELVE_INTERRUPTABLE  Stop corridors at the first structure they meet (default: 0)
          DELVE_PER            Room shrink allowance, parts per 1000 (default: 200)
          DELVE_POPULATE       Objects dropped into each room (default: 0)
          DELVE_LOG_LEVEL      debug, info, warn or error (default: info)
          DELVE_LOG_JSON       Emit log lines as JSON (default: 0)

        Examples:
          # Generate a level with a fixed seed
          python run.py generate --seed 42

          # Rooms first, corridors around them, three objects per room
          python run.py generate --strategy avoidance --populate 3

          # Load variables from .env then print a JSON summary
          python run.py --env-file .env generate --json
        """
    )

    parser = argparse.ArgumentParser(
        prog="delve",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"delve dungeon generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a level and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one dungeon level and print the map and a summary",
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Random seed (default: env DELVE_SEED or random)")
    gen_parser.add_argument("--width", type=int, default=None, help="Map width (default: env DELVE_WIDTH or 80)")
    gen_parser.add_argument("--height", type=int, default=None, help="Map height (default: env DELVE_HEIGHT or 48)")
    gen_parser.add_argument(
        "--strategy",
        choices=STRATEGIES,
        default=None,
        help="Carving strategy (default: env DELVE_STRATEGY or hall_first)",
    )
    gen_parser.add_argument(
        "--populate",
        type=int,
        default=None,
        help="Objects to place in each room (default: env DELVE_POPULATE or 0)",
    )
    gen_parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON summary instead of the text map",
    )
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    args = parser.parse_args(argv)
    return args


def build_config(args: argparse.Namespace) -> DiggerConfig:
    return DiggerConfig.from_env(
        seed=getattr(args, "seed", None),
        width=getattr(args, "width", None),
        height=getattr(args, "height", None),
        strategy=getattr(args, "strategy", None),
        populate=getattr(args, "populate", None),
    )


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    # Load .env if requested; otherwise a default .env if present (no error if missing)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    logging.basicConfig(
        level=_STDLIB_LEVELS.get(os.getenv("DELVE_LOG_LEVEL", "info").lower(), logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = build_config(args)
        dungeon = Dungeon(config)
    except DelveError as exc:
        log.error(event="generate_failed", error=str(exc))
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    if getattr(args, "json", False):
        print(json.dumps(dungeon.summary(), indent=2, default=str))
        return 0

    print(dungeon.to_text())

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    m = dungeon.metrics
    lines = [
        divider,
        f"  {label('Seed:'):12} {value(dungeon.seed)}",
        f"  {label('Size:'):12} {value(f'{dungeon.height}x{dungeon.width}')}",
        f"  {label('Strategy:'):12} {value(config.strategy)}",
        f"  {label('Rooms:'):12} {value(len(dungeon.rooms))}",
        f"  {label('Doors:'):12} {value(m.get('doors_created', 0))}",
        f"  {label('Placed:'):12} {value(m.get('things_placed', 0))}",
        f"  {label('Unreached:'):12} {value(m.get('unreachable_rooms', 0))}",
        f"  {label('Runtime:'):12} {value(str(m.get('runtime_ms', 0)) + ' ms')}",
        divider,
    ]
    print("\n".join(lines))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
