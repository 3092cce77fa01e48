#!/usr/bin/env python3
"""
Play random games on a preset and report how each one ended.

Each game prints its seed, so any board can be replayed with
``python main.py show --preset P --seed N --first ROW COL``.
"""
import argparse

import numpy as np

from src.multimine import PRESETS, render_text
from src.multimine.environment import MultiMinesweeperEnv


def play_one(env: MultiMinesweeperEnv, seed: int) -> dict:
    """Play one masked random game and summarise it."""
    env.reset(seed=seed)
    first_click = None
    steps = 0
    info = {}
    terminated = False

    while not terminated:
        action = env.action_space.sample(mask=env.get_action_mask())
        if first_click is None:
            first_click = divmod(int(action), env.config.cols)
        _, _, terminated, _, info = env.step(action)
        steps += 1

    game = env.game
    return {
        "seed": seed,
        "first_click": first_click,
        "steps": steps,
        "opened": info["opened"],
        "safe": int((game.board.mine_grid() == 0).sum()),
        "result": info["game_state"],
        "groups": game.mine_distribution(),
        "board": render_text(game.cell_views(), game.status, game.cols),
    }


def demo(games: int = 5, preset: str = "beginner", base_seed: int = 0,
         show_boards: bool = False) -> None:
    """Run several games and print a results table."""
    config = PRESETS[preset]
    env = MultiMinesweeperEnv(config=config)

    print(
        f"{preset}: {config.rows}x{config.cols}, {config.total_mines} mines, "
        f"max {config.max_mines_per_cell} per cell, density {config.density:.2f}"
    )
    print(f"{'Seed':>8} {'First':>8} {'Steps':>6} {'Opened':>7}  Result")

    results = []
    for offset in range(games):
        summary = play_one(env, base_seed + offset)
        results.append(summary)
        row, col = summary["first_click"]
        print(
            f"{summary['seed']:>8} {f'{row},{col}':>8} {summary['steps']:>6} "
            f"{summary['opened']:>7}  {summary['result']}"
        )
        if show_boards:
            print(summary["board"])
            print()

    groups = results[-1]["groups"]
    print("\nMine groups on the last board:")
    for group in groups:
        print(f"  {group.group} per cell: {group.total} cells")

    wins = sum(1 for summary in results if summary["result"] == "WON")
    share = np.mean([summary["opened"] / summary["safe"] for summary in results])
    print(f"\nWins: {wins}/{games} | mean share of safe cells opened {share:.0%}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--preset", choices=sorted(PRESETS), default="beginner")
    parser.add_argument("--seed", type=int, default=0, help="Seed of the first game")
    parser.add_argument("--boards", action="store_true", help="Print final boards")
    args = parser.parse_args()

    demo(games=args.games, preset=args.preset, base_seed=args.seed,
         show_boards=args.boards)
