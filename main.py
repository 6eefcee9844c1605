#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--size N] [--mines M] [--seed S]
    python main.py evaluate [--games N] [--size N] [--mines M] [--seed S]
"""
import argparse
import random
import time

import numpy as np

from src.minesweeper import GameConfig, GameState, MinesweeperEnv, Session, parse_command
from src.minesweeper.environment import REVEAL


HELP_TEXT = """Commands:
  r ROW COL     click: reveal a cell (flag it when the flag tool is on)
  f ROW COL     right click: flag a cell, or chord on a revealed number
  tool          toggle the flag tool
  cheat         toggle showing the mines
  end           finish the board and check the flags
  new [N M]     start a new N x N game with M mines
  quit          leave"""


def play(args: argparse.Namespace) -> None:
    """Play interactively in the terminal."""
    rng = random.Random(args.seed) if args.seed is not None else None
    session = Session(GameConfig(size=args.size, num_mines=args.mines), rng=rng)

    print(f"Board: {args.size}x{args.size} with {args.mines} mines")
    print(HELP_TEXT)

    while True:
        print(session.render())
        if session.is_playing:
            flags = session.game.player_grid.flag_count
            print(f"Flags: {flags}/{session.config.num_mines}")
        try:
            line = input("> ")
        except EOFError:
            break

        try:
            name, cmd_args = parse_command(line)
            if name == "quit":
                break
            if name == "new":
                config = GameConfig(*cmd_args) if cmd_args else None
                session.new_game(config)
                continue
            if name == "tool":
                print(f"Flag tool {'on' if session.toggle_flag_tool() else 'off'}")
                continue
            if name == "cheat":
                print(f"Cheat mode {'on' if session.toggle_cheat_mode() else 'off'}")
                continue

            was_playing = session.is_playing
            if name == "end":
                state = session.end()
            elif name == "r":
                state = session.click(*cmd_args)
            else:
                state = session.click(*cmd_args, secondary=True)
        except ValueError as e:
            print(f"Error: {e}")
            continue

        if was_playing and state == GameState.WON:
            print("\n*** WIN! ***")
        elif was_playing and state == GameState.LOST:
            print("\n*** LOST ***")


def evaluate(args: argparse.Namespace) -> None:
    """Play random reveals in the environment and print results."""
    config = GameConfig(size=args.size, num_mines=args.mines)
    env = MinesweeperEnv(config=config)
    rng = np.random.default_rng(args.seed)
    cells = env.cells

    print(f"\nEvaluating random reveals over {args.games} games...")
    start_time = time.time()

    wins = 0
    rewards = []
    steps = []
    revealed = []

    for game in range(args.games):
        seed = args.seed + game if args.seed is not None else None
        obs, info = env.reset(seed=seed)
        total_reward = 0.0
        done = False

        while not done:
            mask = env.get_action_mask()[REVEAL * cells:(REVEAL + 1) * cells]
            valid_indices = np.flatnonzero(mask)
            if len(valid_indices) == 0:
                break
            action = env.encode_action(REVEAL, *divmod(int(rng.choice(valid_indices)), args.size))

            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            done = terminated or truncated

        if info["game_state"] == GameState.WON.name:
            wins += 1
        rewards.append(total_reward)
        steps.append(info["steps"])
        revealed.append(info["revealed"])

    env.close()
    elapsed = time.time() - start_time

    print(f"Results for random reveals:")
    print(f"  Win rate: {wins / args.games:.1%}")
    print(f"  Avg reward: {np.mean(rewards):.2f}")
    print(f"  Avg steps: {np.mean(steps):.1f}")
    print(f"  Avg revealed: {np.mean(revealed):.1f} cells")
    print(f"  Speed: {args.games / elapsed:.1f} games/s")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - Play in the terminal or evaluate a random player"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play interactively")
    play_parser.add_argument("--size", type=int, default=8, help="Board size (NxN)")
    play_parser.add_argument("--mines", type=int, default=10, help="Number of mines")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    # Evaluate command
    eval_parser = subparsers.add_parser(
        "evaluate", help="Evaluate random reveals in the environment"
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    eval_parser.add_argument("--size", type=int, default=8, help="Board size (NxN)")
    eval_parser.add_argument("--mines", type=int, default=10, help="Number of mines")
    eval_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args()

    if args.command == "play":
        play(args)
    elif args.command == "evaluate":
        evaluate(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
