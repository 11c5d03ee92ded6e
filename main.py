#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {beginner,intermediate,expert}]
    python main.py demo [--games N] [--delay SECONDS]
"""
import argparse
import logging
import time
from typing import Optional

import numpy as np

from src.minesweeper import (
    DIFFICULTIES,
    BoardConfig,
    GameSession,
    GameStatus,
    MinesweeperError,
    MinesweeperEnv,
    render_observation,
)


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Resolve board size from a preset and explicit overrides."""
    preset = DIFFICULTIES[args.difficulty]
    return BoardConfig(
        rows=args.rows if args.rows is not None else preset.rows,
        cols=args.cols if args.cols is not None else preset.cols,
        num_mines=args.mines if args.mines is not None else preset.num_mines,
    )


def parse_move(line: str) -> Optional[tuple]:
    """Parse 'row col' into a coordinate pair, or None."""
    parts = line.replace(",", " ").split()
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def play(args: argparse.Namespace) -> None:
    """Play a game in the terminal."""
    config = build_config(args)
    session = GameSession(config, rng=np.random.default_rng(args.seed))

    def on_status(status: GameStatus) -> None:
        if status == GameStatus.WON:
            print("\n*** WIN! ***")
        elif status == GameStatus.LOST:
            print("\n*** LOST (hit mine) ***")

    session.events.status_changed.subscribe(on_status)

    print(
        f"Board: {config.rows}x{config.cols} with {config.num_mines} mines"
    )
    print("Enter 'row col' to reveal a cell, 'q' to quit.\n")

    while session.is_playing:
        print(render_observation(session.get_observation()))
        print(f"Safe cells left: {session.remaining_safe_cells}")
        try:
            line = input("> ").strip()
        except EOFError:
            break
        if line.lower() in ("q", "quit", "exit"):
            break
        move = parse_move(line)
        if move is None:
            print("Expected two numbers: row col")
            continue
        try:
            session.reveal(*move)
        except MinesweeperError as exc:
            print(exc)

    print(render_observation(session.get_observation()))


def demo(args: argparse.Namespace) -> None:
    """Watch a random policy play through the Gymnasium environment."""
    config = build_config(args)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    env.action_space.seed(args.seed)

    density = 100 * config.num_mines / config.total_cells
    print(
        f"Board: {config.rows}x{config.cols} with {config.num_mines} mines "
        f"({density:.1f}% density)"
    )

    wins = 0
    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        env.reset(seed=seed)
        done = False
        step = 0
        info = {}

        while not done:
            action = env.action_space.sample(mask=env.get_action_mask())
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            if args.delay > 0:
                print(f"\n=== Game {game + 1}/{args.games} | Step {step} ===")
                print(env.render())
                time.sleep(args.delay)

        if info.get("game_state") == GameStatus.WON.name:
            wins += 1
        print(
            f"Game {game + 1}: {info.get('game_state')} after {step} moves, "
            f"{info.get('revealed')} cells opened"
        )

    print(f"\n=== Final: {wins}/{args.games} wins ({100*wins/args.games:.0f}%) ===")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    board_args = argparse.ArgumentParser(add_help=False)
    board_args.add_argument(
        "--difficulty",
        choices=sorted(DIFFICULTIES),
        default="beginner",
        help="Preset board size",
    )
    board_args.add_argument("--rows", type=int, default=None, help="Rows")
    board_args.add_argument("--cols", type=int, default=None, help="Columns")
    board_args.add_argument(
        "--mines", type=int, default=None, help="Number of mines"
    )
    board_args.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )

    subparsers.add_parser(
        "play", parents=[board_args], help="Play in the terminal"
    )

    demo_parser = subparsers.add_parser(
        "demo", parents=[board_args], help="Watch random games"
    )
    demo_parser.add_argument(
        "--games", type=int, default=5, help="Number of games"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.0, help="Delay between moves"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        if args.command == "play":
            play(args)
        elif args.command == "demo":
            demo(args)
        else:
            parser.print_help()
    except MinesweeperError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
