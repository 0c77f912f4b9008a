"""
apsync CLI - Command-line tools for the client.

Usage:
    apsync check-config [PATH]        Validate an apconfig.json
    apsync check-slot-data PATH       Validate slot data saved from a server
    apsync serve                      Run the status API against an in-memory game

`serve` is for overlay development: the session is driven by an in-memory
game and a scripted connection, so no game or server is needed.
"""

import argparse
import json
import sys
import threading
import time


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="apsync - Archipelago client tools",
        prog="apsync",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Check config command
    config_parser = subparsers.add_parser("check-config", help="Validate an apconfig.json")
    config_parser.add_argument("path", nargs="?", help="Path to the config file")

    # Check slot data command
    slot_parser = subparsers.add_parser("check-slot-data", help="Validate slot data JSON")
    slot_parser.add_argument("path", help="Path to a slot data JSON file")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the status API")
    serve_parser.add_argument("--config", help="Path to the config file")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")
    serve_parser.add_argument("--tick-rate", type=float, default=30.0, help="Updates per second")

    args = parser.parse_args(argv)

    if args.command == "check-config":
        return cmd_check_config(args)
    elif args.command == "check-slot-data":
        return cmd_check_slot_data(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        return 1


def cmd_check_config(args) -> int:
    """Validate a config file."""
    from .config import Config
    from .errors import ConfigError

    try:
        config = Config.load(args.path)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    print(f"Config: {config.path}")
    print(f"  Server: {config.url}")
    print(f"  Slot: {config.slot}")
    print(f"  Seed: {config.seed}")
    if config.client_version:
        print(f"  Client version: {config.client_version}")
    if config.debug_commands:
        print("  Debug commands enabled")
    return 0


def cmd_check_slot_data(args) -> int:
    """Validate slot data saved from a server."""
    from pydantic import ValidationError
    from .connection import SlotData

    try:
        with open(args.path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {args.path}")
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: {args.path} isn't valid JSON: {e}")
        return 1

    try:
        slot_data = SlotData.model_validate(raw)
    except ValidationError as e:
        print(f"Error: invalid slot data:\n{e}")
        return 1

    options = slot_data.options
    print(f"Items mapped: {len(slot_data.ap_ids_to_item_ids)}")
    print(f"Items with counts: {len(slot_data.item_counts)}")
    print(f"Goal flags: {len(slot_data.goal)}")
    print(f"Death link: {options.death_link.name.lower()}"
          f" (amnesty {options.death_link_amnesty})")
    print(f"DLC: {'enabled' if options.enable_dlc else 'disabled'}")

    if not slot_data.goal:
        print("\nWarnings:")
        print("  - No goal flags; the goal is reported as soon as a save is loaded")
    return 0


def cmd_serve(args) -> int:
    """Run the status API against an in-memory game."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn")
        return 1

    from .api import StatusService, create_app
    from .config import Config
    from .connection import ScriptedConnection
    from .errors import ConfigError
    from .game import InMemoryGame
    from .games import DarkSouls3Routine
    from .host import ClientRunner, HostBindings
    from .logs import start_logger
    from .persistence import MemorySaveStore, SaveData
    from .session import SystemClock, UpdateCycle

    start_logger()

    try:
        config = Config.load(args.config)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    def connect(config):
        connection = ScriptedConnection(seed=config.seed, player=config.slot)
        connection.connect()
        connection.say(f"Connected to {config.url} (offline)")
        return connection

    clock = SystemClock()
    game = InMemoryGame()
    saves = MemorySaveStore(SaveData())
    routine = DarkSouls3Routine(game, saves, clock, debug_commands=config.debug_commands)
    cycle = UpdateCycle(config, connect, routine, clock=clock)
    runner = ClientRunner(cycle, HostBindings(is_main_menu=lambda: not game.loaded))

    interval = 1.0 / args.tick_rate

    def tick_forever():
        while True:
            runner.tick()
            time.sleep(interval)

    threading.Thread(target=tick_forever, name="apsync-tick", daemon=True).start()

    print(f"Serving status API on http://{args.host}:{args.port}/api/docs")
    uvicorn.run(create_app(StatusService(cycle=cycle, saves=saves)),
                host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
