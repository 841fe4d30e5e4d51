"""Delve CLI entry point.

Provides subcommands for running the JSON game server, printing a generated
level for a seed, and soaking the turn scheduler with random commands.
Accepts configuration via flags and environment variables, with optional
.env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import random
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()

# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()

from delve import __version__  # noqa: E402


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Delve simulation core

    Run the JSON game server, print a generated level, or soak the turn
    scheduler. Configuration can be provided via CLI flags or environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                Bind address for the web server (default: 0.0.0.0)
          PORT                Port for the web server (default: 5000)
          DELVE_SEED          Default level seed when none is given
          DELVE_SIGHT_RADIUS  Player sight radius (default: 10)
          DELVE_LOG_LEVEL     debug | info | warn | error (default: info)
          DELVE_LOG_JSON      1 to emit JSON log lines

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print the level generated for seed 42
          python run.py map --seed 42

          # Play 500 random turns on seed 7 and print a summary
          python run.py simulate --seed 7 --turns 500
        """
    )

    parser = argparse.ArgumentParser(
        prog="Delve",
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
        version=f"Delve {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the JSON game server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask game API",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    map_parser = subparsers.add_parser(
        "map",
        help="Print a generated level as ASCII",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    map_parser.add_argument("--seed", type=int, default=None, help="Level seed (default: env DELVE_SEED or random)")
    map_parser.set_defaults(command="map")

    sim_parser = subparsers.add_parser(
        "simulate",
        help="Feed random commands to the scheduler and print a JSON summary",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    sim_parser.add_argument("--seed", type=int, default=None, help="Level seed (default: env DELVE_SEED or random)")
    sim_parser.add_argument("--turns", type=int, default=200, help="Commands to issue before exiting (default: 200)")
    sim_parser.set_defaults(command="simulate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def render_level(game) -> str:
    """Full-reveal ASCII dump: terrain first, then entities in slot order (player last on top)."""
    level = game.level
    rows = [["#" if level.grid[x][y].blocked else "." for x in range(level.width)] for y in range(level.height)]
    for idx, e in reversed(list(level.registry.enumerate())):
        rows[e.y][e.x] = e.glyph
    return "\n".join("".join(r) for r in rows)


def _simulate(game, turns: int) -> dict:
    pool = ["move_up", "move_down", "move_left", "move_right", "pick_up", "rest"]
    rng = random.Random(game.seed)
    issued = iter(range(turns))

    def next_command():
        return rng.choice(pool) if next(issued, None) is not None else "exit"

    taken = game.run(next_command)
    snap = game.snapshot(status_tail=5)
    return {
        "seed": game.seed,
        "turns_taken": taken,
        "player": snap["player"],
        "inventory": [i["name"] for i in snap["inventory"]],
        "last_statuses": [s["m"] for s in snap["statuses"]],
    }


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    mode = (getattr(args, "command", None) or "server").lower()

    from delve.config import GameConfig
    from delve.game import Game
    from delve.logging_utils import log

    if mode == "map":
        game = Game(GameConfig.from_env(**({"seed": args.seed} if args.seed is not None else {})))
        print(render_level(game))
        print(f"seed={game.seed} rooms={len(game.level.rooms)} entities={len(game.registry)}")
        return 0
    if mode == "simulate":
        game = Game(GameConfig.from_env(**({"seed": args.seed} if args.seed is not None else {})))
        print(json.dumps(_simulate(game, max(0, args.turns)), indent=2))
        return 0

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    title = f"{Fore.CYAN}{Style.BRIGHT}Delve Game Server{Style.RESET_ALL}" if _COLOR_ENABLED else "Delve Game Server"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Version:'):12} {value(__version__)}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="startup", mode=mode, host=host, port=port)

    from delve import create_app

    app = create_app()
    app.run(host=host, port=port, debug=bool(getattr(args, "debug", False)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
