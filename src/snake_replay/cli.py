"""Command-line tools for the snake replay service."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from snake_replay.config import ServiceConfig
from snake_replay.engine import ReplayStatus, check_and_replay, create_game

logger = logging.getLogger(__name__)

# Process exit codes for the ``replay`` command.
_EXIT_CODES: dict[ReplayStatus, int] = {
    ReplayStatus.SUCCESS: 0,
    ReplayStatus.NOT_FOUND: 1,
    ReplayStatus.FAIL: 2,
    ReplayStatus.INVALID: 3,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-replay",
        description="Stateless snake move-validation service and tools.",
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON service config file.",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for fruit placement (overrides the config).",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the HTTP service.")
    serve_p.add_argument("--host", type=str, default=None)
    serve_p.add_argument("--port", type=int, default=None)

    # --- new-game ---
    new_p = sub.add_parser("new-game", help="Print a fresh game state.")
    new_p.add_argument("--width", type=int, required=True)
    new_p.add_argument("--height", type=int, required=True)

    # --- replay ---
    replay_p = sub.add_parser(
        "replay", help="Check a replay request stored in a JSON file.",
    )
    replay_p.add_argument("request", help="Path to the request JSON.")

    return parser


def _load_config(args: argparse.Namespace) -> ServiceConfig:
    config = ServiceConfig.load(args.config) if args.config else ServiceConfig()

    overrides: dict = {}
    for name in ("seed", "host", "port"):
        val = getattr(args, name, None)
        if val is not None:
            overrides[name] = val
    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


def _run_serve(args: argparse.Namespace, config: ServiceConfig) -> int:
    import uvicorn

    from snake_replay.server.app import create_app

    logger.info("Serving on %s:%d", config.host, config.port)
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
    return 0


def _run_new_game(args: argparse.Namespace, config: ServiceConfig) -> int:
    if args.width <= 0 or args.height <= 0:
        logger.error("width and height must be positive numbers.")
        return 2
    state = create_game(
        args.width,
        args.height,
        config.make_spawner(),
        initial_velocity=config.start_velocity,
    )
    print(json.dumps(state.to_dict()))  # noqa: T201
    return 0


def _run_replay(args: argparse.Namespace, config: ServiceConfig) -> int:
    payload = json.loads(Path(args.request).read_text())
    if not isinstance(payload, dict):
        logger.error("%s does not contain a JSON object.", args.request)
        return _EXIT_CODES[ReplayStatus.INVALID]

    outcome = check_and_replay(payload, config.make_spawner())
    result: dict = {"status": outcome.status.value}
    if outcome.state is not None:
        result["state"] = outcome.state.to_dict()
    else:
        result["message"] = outcome.message
    print(json.dumps(result))  # noqa: T201
    return _EXIT_CODES[outcome.status]


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-replay`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = _load_config(args)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    handlers = {
        "serve": _run_serve,
        "new-game": _run_new_game,
        "replay": _run_replay,
    }
    return handlers[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
