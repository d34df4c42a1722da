"""CLI entry point: run a map headless with a scripted action sequence."""

import argparse
import logging
import sys
import tomllib

import structlog
from pydantic import ValidationError

from .config import Config, config_to_session, find_config, load_config
from .exceptions import MapLoadError
from .maps import format_grid
from .tick import run_ticks
from .types import parse_actions


def main(argv: list[str] | None = None) -> int:
    """Run a session for a number of ticks and print the final grid."""
    parser = argparse.ArgumentParser(
        description="Boulder - run a cave map headless and print the result"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path or name of session TOML config file",
    )
    parser.add_argument(
        "--map", type=str, default=None, help="Map name or path (overrides config)"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed (overrides config)"
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=None,
        help="Ticks to run (default: length of --actions, or 1)",
    )
    parser.add_argument(
        "--actions",
        type=str,
        default="",
        help="Player actions, one character per tick: U D L R, '.' for none",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args(argv)

    # Configure structlog
    level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )

    logger = structlog.get_logger()

    try:
        script = parse_actions(args.actions)
    except ValueError as e:
        parser.error(str(e))

    # Load config
    if args.config:
        try:
            config = load_config(find_config(args.config))
        except (FileNotFoundError, tomllib.TOMLDecodeError, ValidationError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    else:
        config = Config()

    # Apply CLI overrides
    if args.map is not None:
        config.session.map = args.map
    if args.seed is not None:
        config.session.seed = args.seed

    try:
        session = config_to_session(config)
    except (FileNotFoundError, MapLoadError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    num_ticks = args.ticks if args.ticks is not None else max(len(script), 1)
    logger.info("session_started", map=config.session.map, ticks=num_ticks)

    run_ticks(session, num_ticks, script)

    print(format_grid(session.grid), end="")
    print(f"Diamonds: {session.grid.diamond_count}")
    print(f"Score: {session.grid.score:0>6}")
    print(f"Time: {int(session.elapsed_seconds)}")
    print(f"Ticks: {session.tick}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
