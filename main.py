#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py play [--width W] [--height H] [--mines N] [--seed S | --seed-text T]
    python main.py simulate [--games N]
    python main.py show [--seed S | --seed-text T]
"""
import argparse
import logging
from typing import Optional

import numpy as np

from src.minefield.cell import CellHandle
from src.minefield.environment import MinesweeperEnv, render_ansi
from src.minefield.generator import DIFFICULTIES, GenerationOptions, generate
from src.minefield.session import GameSession

PLAY_HELP = "Commands: r COL ROW (reveal), m COL ROW (mark), q (quit)"


def build_options(args: argparse.Namespace) -> GenerationOptions:
    """Build generation options from command line arguments."""
    if args.difficulty:
        width, height, mines = DIFFICULTIES[args.difficulty]
    else:
        width, height, mines = args.width, args.height, args.mines
    if args.seed_text is not None:
        return GenerationOptions.from_seed_text(args.seed_text, width, height, mines)
    if args.seed is not None:
        return GenerationOptions(width, height, mines, args.seed)
    return GenerationOptions(width, height, mines)


def format_board(observation: np.ndarray) -> str:
    """Render an observation with column and row labels."""
    width = observation.shape[1]
    header = "    " + " ".join(str(column % 10) for column in range(width))
    rows = render_ansi(observation).split("\n")
    return "\n".join(
        [header] + [f"{row:>3} {line}" for row, line in enumerate(rows)]
    )


def parse_command(line: str) -> Optional[tuple]:
    """Parse 'r COL ROW' / 'm COL ROW' / 'q' into (verb, handle)."""
    parts = line.split()
    if parts == ["q"]:
        return ("q", None)
    if len(parts) != 3 or parts[0] not in ("r", "m"):
        return None
    try:
        column, row = int(parts[1]), int(parts[2])
    except ValueError:
        return None
    if column < 0 or row < 0:
        return None
    return (parts[0], CellHandle(column, row))


def play(args: argparse.Namespace) -> None:
    """Play a game in the terminal."""
    options = build_options(args)
    session = GameSession(options)
    board = session.board

    print(f"Board: {options.width}x{options.height} with {options.mine_count} mines")
    print(f"Seed: {options.seed}")
    print(PLAY_HELP)

    while session.is_playing:
        print()
        print(format_board(board.to_observation()))
        try:
            line = input("> ").strip()
        except EOFError:
            break

        command = parse_command(line)
        if command is None:
            print(PLAY_HELP)
            continue
        verb, handle = command
        if verb == "q":
            break
        if handle not in board:
            print(f"{handle} is off the board")
            continue

        if verb == "m":
            if not session.toggle_mark(handle):
                print(f"{handle} is already revealed")
            continue

        result = session.reveal(handle)
        if result.is_already_revealed:
            print(f"{handle} is already revealed")

    if not session.is_playing:
        session.reveal_all()
        print()
        print(format_board(board.to_observation()))
        print("\n*** WIN! ***" if session.is_won else "\n*** LOST (hit mine) ***")


def simulate(args: argparse.Namespace) -> None:
    """Play random games through the environment and report statistics."""
    width, height, mines = DIFFICULTIES[args.difficulty or "beginner"]
    env = MinesweeperEnv(GenerationOptions(width, height, mines))
    rng = np.random.default_rng(args.seed)

    wins = 0
    total_steps = 0
    total_revealed = 0

    for game in range(args.games):
        env.reset(seed=int(rng.integers(0, 2 ** 31)))
        done = False
        info = {}

        while not done:
            valid = np.flatnonzero(env.get_action_mask())
            action = int(rng.choice(valid))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        total_steps += info["steps"]
        total_revealed += info["revealed"]
        if info["game_state"] == "WON":
            wins += 1

    print(f"\nRandom play over {args.games} games:")
    print(f"  Win rate: {wins / args.games:.1%}")
    print(f"  Avg steps: {total_steps / args.games:.1f}")
    print(f"  Avg revealed: {total_revealed / args.games:.1f} cells")


def show(args: argparse.Namespace) -> None:
    """Print the mine layout generated for the given options."""
    options = build_options(args)
    board = generate(options)

    print(f"Seed: {options.seed}")
    for row in range(board.height):
        line = []
        for column in range(board.width):
            handle = CellHandle(column, row)
            if board.cell(handle).is_mine:
                line.append("*")
            else:
                count = board.adjacent_mine_count(handle)
                line.append(str(count) if count else ".")
        print(" ".join(line))


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    """Add board size and seed arguments to a subcommand."""
    parser.add_argument("--width", type=int, default=10, help="Number of columns")
    parser.add_argument("--height", type=int, default=10, help="Number of rows")
    parser.add_argument("--mines", type=int, default=10, help="Number of mines")
    parser.add_argument(
        "--difficulty", choices=sorted(DIFFICULTIES), help="Use a preset size"
    )
    seed_group = parser.add_mutually_exclusive_group()
    seed_group.add_argument("--seed", type=int, help="Layout seed (unsigned 64-bit)")
    seed_group.add_argument("--seed-text", help="Derive the layout seed from text")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minefield - play and simulate")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_arguments(play_parser)

    simulate_parser = subparsers.add_parser("simulate", help="Random-play statistics")
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    simulate_parser.add_argument(
        "--difficulty", choices=sorted(DIFFICULTIES), help="Board preset (default: beginner)"
    )
    simulate_parser.add_argument("--seed", type=int, help="Seed for the random policy")

    show_parser = subparsers.add_parser("show", help="Print a generated layout")
    add_board_arguments(show_parser)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "play":
            play(args)
        elif args.command == "simulate":
            simulate(args)
        elif args.command == "show":
            show(args)
        else:
            parser.print_help()
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
