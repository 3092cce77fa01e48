#!/usr/bin/env python3
"""
Multi-mine Minesweeper - Main entry point.

Usage:
    python main.py play [--preset NAME] [--seed TEXT] [custom sizes]
    python main.py show [--preset NAME] [--seed TEXT] [--first ROW COL]
    python main.py presets
"""
import argparse
import time
from typing import Callable

from src.multimine import (
    ConfigError,
    CoordinateError,
    Game,
    GameConfig,
    PRESETS,
    render_text,
    seed_from_text,
)


HELP_TEXT = """Commands:
  o ROW COL        open a cell (chords if already open)
  c ROW COL        chord an opened cell
  m ROW COL [N]    cycle the marker, or set it to N
  u ROW COL        cycle the marker backwards
  h ROW COL        hint: show a closed cell's mine count
  g                give up
  q                quit"""


def build_config(args: argparse.Namespace) -> GameConfig:
    """Build a configuration from a preset plus command-line overrides."""
    base = PRESETS[args.preset]
    seed = seed_from_text(args.seed) if args.seed else time.time_ns() // 1_000_000
    return GameConfig(
        rows=args.rows if args.rows is not None else base.rows,
        cols=args.cols if args.cols is not None else base.cols,
        total_mines=args.mines if args.mines is not None else base.total_mines,
        max_mines_per_cell=(
            args.max if args.max is not None else base.max_mines_per_cell
        ),
        density=args.density if args.density is not None else base.density,
        seed=seed,
    )


def print_board(game: Game) -> None:
    """Print the board, mine counter and per-group breakdown."""
    print(render_text(game.cell_views(), game.status, game.cols))
    if game.is_lost:
        print("You hit a mine!" if game.exploded_position else "You gave up.")
    elif game.is_won:
        print("Congratulations, you win!")
    else:
        print(f"Mines remaining: {game.remaining_mines()}")
    breakdown = "  ".join(
        f"{group.group}x: {group.flagged}/{group.total}"
        for group in game.mine_distribution()
    )
    if breakdown:
        print(breakdown)


def apply_command(game: Game, line: str) -> bool:
    """
    Run one text command against a game.

    Returns:
        False if the player asked to quit, True otherwise.
    """
    parts = line.split()
    if not parts:
        return True
    action, numbers = parts[0].lower(), [int(p) for p in parts[1:]]

    if action == "q":
        return False
    if action == "g":
        game.give_up()
    elif action == "o":
        row, col = numbers[:2]
        if game.board.cell_at(row, col).opened:
            game.chord_open(row, col)
        else:
            game.open(row, col)
    elif action == "c":
        game.chord_open(*numbers[:2])
    elif action == "m" and len(numbers) >= 3:
        game.set_marker(*numbers[:3])
    elif action == "m":
        game.cycle_marker(*numbers[:2])
    elif action == "u":
        game.cycle_marker(*numbers[:2], reverse=True)
    elif action == "h":
        game.apply_hint(*numbers[:2])
    else:
        print(HELP_TEXT)
    return True


def play(args: argparse.Namespace, read: Callable[[str], str] = input) -> None:
    """Play a game in the terminal."""
    game = Game(build_config(args))
    print(f"Seed: {game.config.seed}")
    print(HELP_TEXT)

    while True:
        print_board(game)
        if not game.is_playing:
            break
        try:
            line = read("> ")
        except EOFError:
            break
        try:
            if not apply_command(game, line):
                break
        except (ValueError, TypeError):
            print(HELP_TEXT)
        except CoordinateError as exc:
            print(exc)


def show(args: argparse.Namespace) -> None:
    """Print the full generated board for a seed."""
    game = Game(build_config(args))
    if args.first:
        game.open(*args.first)
    print(f"Seed: {game.config.seed}")
    for row in game.board.mine_grid():
        print(" ".join(str(count) if count else "." for count in row))


def presets(args: argparse.Namespace) -> None:
    """List the built-in presets."""
    print(f"{'Preset':<14} {'Size':<8} {'Mines':<7} {'Max':<5} {'Density':<7}")
    print("-" * 45)
    for name, config in PRESETS.items():
        print(
            f"{name:<14} {f'{config.rows}x{config.cols}':<8} "
            f"{config.total_mines:<7} {config.max_mines_per_cell:<5} "
            f"{config.density:<7.2f}"
        )


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by commands that create a board."""
    parser.add_argument(
        "--preset", choices=sorted(PRESETS), default="beginner",
        help="Starting preset",
    )
    parser.add_argument("--seed", help="Seed number or phrase")
    parser.add_argument("--rows", type=int, help="Override rows")
    parser.add_argument("--cols", type=int, help="Override columns")
    parser.add_argument("--mines", type=int, help="Override total mines")
    parser.add_argument("--max", type=int, help="Override max mines per cell")
    parser.add_argument("--density", type=float, help="Override density (0-1)")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Multi-mine Minesweeper - play and inspect boards"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_arguments(play_parser)

    show_parser = subparsers.add_parser("show", help="Print a generated board")
    add_board_arguments(show_parser)
    show_parser.add_argument(
        "--first", type=int, nargs=2, metavar=("ROW", "COL"),
        help="Apply a first click before printing",
    )

    subparsers.add_parser("presets", help="List presets")

    args = parser.parse_args()

    commands = {"play": play, "show": show, "presets": presets}
    if args.command not in commands:
        parser.print_help()
        return
    try:
        commands[args.command](args)
    except ConfigError as exc:
        print(f"Invalid configuration: {exc}")


if __name__ == "__main__":
    main()
