"""bspmap CLI entry point.

Provides subcommands for running the HTTP map server, generating a single map
to stdout, and inspecting or clearing the stored map history. Accepts
configuration via flags and environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    try:
        with open("VERSION", "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    bspmap tile map generator

    Run the HTTP map server, or generate a seeded BSP tile map straight to the
    terminal. Configuration can be provided via CLI flags or environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST            Bind address for the web server (default: 0.0.0.0)
          PORT            Port for the web server (default: 5000)
          DATABASE_URL    SQLAlchemy database URI (default: sqlite:///instance/bspmap.db)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print a 40x30 map for seed 42
          python run.py generate --seed 42 --width 40 --height 30

          # Same map as JSON with custom room bounds
          python run.py generate --seed 42 --min-room 6,6 --max-room 12,12 --json

          # Show or wipe the maps handed out by the API
          python run.py list
          python run.py clear
        """
    )

    parser = argparse.ArgumentParser(
        prog="bspmap",
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
        version=f"bspmap {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP map server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask map generation server",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--db",
        dest="db_uri",
        default=None,
        help="Database URI (default: env DATABASE_URL or sqlite:///instance/bspmap.db)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one map and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a seeded BSP map and print its rendering ('0' floor, '1' wall).",
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Unsigned 32-bit seed (default: random)")
    gen_parser.add_argument("--width", type=int, default=40, help="Map width (>= 20, default 40)")
    gen_parser.add_argument("--height", type=int, default=40, help="Map height (>= 20, default 40)")
    gen_parser.add_argument("--min-room", dest="min_room", default="6,6", help="Minimum room size W,H (default 6,6)")
    gen_parser.add_argument("--max-room", dest="max_room", default="10,10", help="Maximum room size W,H (default 10,10)")
    gen_parser.add_argument("--json", action="store_true", help="Print a JSON document instead of the raw grid")
    gen_parser.set_defaults(command="generate")

    list_parser = subparsers.add_parser("list", help="List stored maps (index, seed, size)")
    list_parser.set_defaults(command="list")

    clear_parser = subparsers.add_parser("clear", help="Delete every stored map")
    clear_parser.set_defaults(command="clear")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _generate(args) -> int:
    from bspmap.mapgen import MapConfig, MapConfigError, TileMap
    from bspmap.validation import parse_pair

    min_room = parse_pair(args.min_room)
    max_room = parse_pair(args.max_room)
    if min_room is None or max_room is None:
        print("[ERROR] Room sizes must be given as W,H", file=sys.stderr)
        return 2
    config = MapConfig(
        width=args.width,
        height=args.height,
        seed=args.seed,
        min_room_width=min_room[0],
        min_room_height=min_room[1],
        max_room_width=max_room[0],
        max_room_height=max_room[1],
    )
    try:
        tilemap = TileMap(config)
    except MapConfigError as e:
        print(f"[ERROR] {e.reason}", file=sys.stderr)
        return 2
    if args.json:
        doc = {
            "seed": tilemap.seed,
            "width": tilemap.width,
            "height": tilemap.height,
            "rows": tilemap.rows(),
            "rooms": [r.as_dict() for r in tilemap.rooms],
            "corridors": [c.as_dict() for c in tilemap.corridors],
            "metrics": tilemap.metrics,
        }
        print(json.dumps(doc, indent=2))
    else:
        print(tilemap.render())
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()

    if mode == "generate":
        return _generate(args)

    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    env_db = os.getenv("DATABASE_URL")

    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    db_uri_cli = getattr(args, "db_uri", None)

    # Make DATABASE_URL available to the Flask app BEFORE importing it
    if db_uri_cli:
        os.environ["DATABASE_URL"] = db_uri_cli

    db_banner = db_uri_cli or env_db or "auto (instance/bspmap.db)"

    # Import server entrypoints only after environment is ready
    from bspmap.logging_utils import get_logger

    log = get_logger("bspmap").bind(source="cli")
    from bspmap.server import clear_maps, list_maps, start_server

    if mode == "list":
        rows = list_maps()
        if not rows:
            print("[INFO] No stored maps.")
        for index, record in rows:
            print(f"{index:>4}  seed={record.seed:<10}  {record.width}x{record.height}  "
                  f"rooms {record.min_room_width}x{record.min_room_height}..{record.max_room_width}x{record.max_room_height}")
        return 0
    if mode == "clear":
        cleared = clear_maps()
        log.info(event="maps_cleared", cleared=cleared)
        print(f"[OK] Cleared {cleared} stored maps.")
        return 0

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    title = f"{Fore.CYAN}{Style.BRIGHT}BSP Map Server Bootup{Style.RESET_ALL}" if _COLOR_ENABLED else "BSP Map Server Bootup"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Database:'):12} {value(db_banner)}",
        divider,
        "",
    ]
    print("\n".join(lines))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")
    log.info(event="listen", host=host, port=port, debug=debug, db=db_banner)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
