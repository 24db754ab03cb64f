"""Entry point: ``python -m delve``.

Supports two modes:
  - ``python -m delve``            → Launch the FastAPI level server
  - ``python -m delve cli``        → Generate a level and run the tick loop headless
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deterministic procedural dungeon engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI level server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--agents", type=int, default=8)
    srv.add_argument("--connect-caves", action="store_true")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Generate a level and run it headless")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--width", type=int, default=180)
    cli.add_argument("--height", type=int, default=60)
    cli.add_argument("--fill", type=float, default=0.45, help="Initial wall probability")
    cli.add_argument("--iterations", type=int, default=5)
    cli.add_argument("--connect-caves", action="store_true")
    cli.add_argument("--agents", type=int, default=8)
    cli.add_argument("--ticks", type=int, default=200)
    cli.add_argument("--show-map", action="store_true", help="Print the generated grid")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from delve.api.app import create_app
    from delve.config import LevelConfig

    config = LevelConfig(
        seed=args.seed,
        agent_count=args.agents,
        connect_caves=args.connect_caves,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> int:
    from delve.config import LevelConfig
    from delve.core.errors import InvalidConfiguration
    from delve.engine.session import GameSession
    from delve.utils.logging import setup_logging

    config = LevelConfig(
        seed=args.seed,
        width=args.width,
        height=args.height,
        fill_probability=args.fill,
        iterations=args.iterations,
        connect_caves=args.connect_caves,
        agent_count=args.agents,
        max_ticks=args.ticks,
        log_level=args.log_level,
    )

    setup_logging(config.log_level)

    try:
        session = GameSession(config)
    except InvalidConfiguration as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    level = session.level
    if args.show_map:
        print(level.grid.as_string(), end="")

    moves = session.run()
    stats = level.pathfinder.cache.stats()
    logger.info(
        "Done. fingerprint=%s rooms=%d walkable=%d moves=%d searches=%d cache hits=%d misses=%d clears=%d",
        level.grid.fingerprint(), len(level.rooms), level.grid.walkable_count(), moves,
        level.pathfinder.search_count, stats.hits, stats.misses, stats.clears,
    )
    return 0


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            # Re-parse with serve defaults
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        raise SystemExit(_run_cli(args))


if __name__ == "__main__":
    main()
