"""
Tictac CLI - Command-line interface for the engine.

Usage:
    tictac init                                 Initialize the session registry
    tictac new-player                           Generate a player identity
    tictac create <player_one> <player_two>     Create a game
    tictac start <address>                      Start hook (no state change)
    tictac play <address> <row> <column> --player <id>
    tictac show <address>                       Print a game
    tictac list                                 List games
    tictac serve                                Run the HTTP API

Games are stored under --data-dir (default: $TICTAC_DATA_DIR or ~/.tictac/data).
"""

import argparse
import logging
import sys

from .config import DEFAULT_CLI_DATA_DIR, get_config, configure_logging

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Tictac - Two-player tic-tac-toe sessions",
        prog="tictac",
    )
    parser.add_argument("--data-dir", help="Directory holding game records")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("init", help="Initialize the session registry")

    subparsers.add_parser("new-player", help="Generate a player identity")

    create_parser = subparsers.add_parser("create", help="Create a game")
    create_parser.add_argument("player_one", help="Identity of player one (X)")
    create_parser.add_argument("player_two", help="Identity of player two (O)")
    create_parser.add_argument("--caller", help="Acting identity (default: player one)")

    start_parser = subparsers.add_parser("start", help="Start a game")
    start_parser.add_argument("address", help="Game address")

    play_parser = subparsers.add_parser("play", help="Play a move")
    play_parser.add_argument("address", help="Game address")
    play_parser.add_argument("row", type=int, help="Row, 0-2")
    play_parser.add_argument("column", type=int, help="Column, 0-2")
    play_parser.add_argument("--player", required=True, help="Acting identity")

    show_parser = subparsers.add_parser("show", help="Print a game")
    show_parser.add_argument("address", help="Game address")

    subparsers.add_parser("list", help="List games")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    configure_logging()

    commands = {
        "init": cmd_init,
        "new-player": cmd_new_player,
        "create": cmd_create,
        "start": cmd_start,
        "play": cmd_play,
        "show": cmd_show,
        "list": cmd_list,
        "serve": cmd_serve,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)
    command(args)


def _manager(args):
    from .session import GameManager
    from .storage import FileStore

    data_dir = args.data_dir or get_config().data_dir or DEFAULT_CLI_DATA_DIR
    return GameManager(FileStore(data_dir))


def _fail(message):
    print(f"Error: {message}")
    sys.exit(1)


def _print_game(address, game):
    print(f"Game: {address}")
    print(f"X: {game.players[0]}")
    print(f"O: {game.players[1]}")
    print(f"Turn: {game.turn}")
    print(f"State: {game.state.describe()}")
    if game.is_active():
        print(f"To move: {game.current_player()} ({game.current_sign().symbol})")
    print()
    print(game.render())


def cmd_init(args):
    """Initialize the session registry."""
    from .session import RegistryAlreadyInitialized

    manager = _manager(args)
    try:
        manager.initialize_registry()
    except RegistryAlreadyInitialized as e:
        _fail(e)
    print("Registry initialized")


def cmd_new_player(args):
    """Generate a player identity."""
    from .storage import new_identity
    from .api.auth import sign_identity

    identity = new_identity()
    print(f"Identity: {identity}")
    secret = get_config().auth_secret
    if secret:
        print(f"Signature: {sign_identity(identity, secret)}")


def cmd_create(args):
    """Create a game."""
    from .session import CallerMismatch, RegistryNotInitialized
    from .storage import RecordExists

    manager = _manager(args)
    try:
        handle = manager.create_game(
            args.caller or args.player_one, args.player_one, args.player_two
        )
    except (CallerMismatch, RegistryNotInitialized, RecordExists, ValueError) as e:
        _fail(e)

    print(f"Created game #{handle.game_count}")
    _print_game(handle.address, handle.game)


def cmd_start(args):
    """Start a game."""
    from .session import GameNotFound

    manager = _manager(args)
    try:
        game = manager.start_game(args.address)
    except GameNotFound as e:
        _fail(e)
    _print_game(args.address, game)


def cmd_play(args):
    """Play a move."""
    from .engine_core import Tile
    from .session import GameNotFound
    from .storage import parse_identity

    manager = _manager(args)
    try:
        player = parse_identity(args.player)
        result = manager.play(args.address, Tile(args.row, args.column), player)
    except (GameNotFound, ValueError) as e:
        _fail(e)

    if not result.success:
        _fail(f"{result.error_code}: {result.error}")

    for change in result.state_changes:
        print(change)
    _print_game(args.address, result.new_state)


def cmd_show(args):
    """Print a game."""
    from .session import GameNotFound

    manager = _manager(args)
    try:
        game = manager.get_game(args.address)
    except GameNotFound as e:
        _fail(e)
    _print_game(args.address, game)


def cmd_list(args):
    """List games."""
    manager = _manager(args)
    games = manager.list_games()
    if not games:
        print("No games")
    for address in games:
        print(address)


def cmd_serve(args):
    """Run the HTTP API."""
    from dataclasses import replace

    import uvicorn

    from .api.app import create_app

    config = get_config()
    if args.data_dir:
        config = replace(config, data_dir=args.data_dir)

    print(f"Serving on http://{args.host}:{args.port}")
    uvicorn.run(create_app(config=config), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
