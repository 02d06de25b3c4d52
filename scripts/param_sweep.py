#!/usr/bin/env python3
"""
Parameter sweep for MCTSAgent: naive (first) vs trained (second) matches.

Iterates over:
  • train_per_move = [1, 10, 50, 100]
  • seeds          = [0, 1, 2]

Logs:
  |T|   – positions in the trained agent's statistics table
  win%  – trained agent win rate over the games played
  time  – wall-clock runtime
"""
import sys, pathlib
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

import time
import itertools
import numpy as np
from agent_factory import make_agent
from connect_game import ConnectGame
from game_data import GameData

GAMES = 20


def run_one(train_per_move: int, seed: int) -> float:
    agent = make_agent(seed=seed)
    data = GameData(agent=agent, seed=seed)
    data.set_training_schedule(train_per_move, 3_000_000)
    game = ConnectGame(data)

    t0 = time.perf_counter()
    results = game.play(GAMES)
    t1 = time.perf_counter()

    win_rate = results['trained_wins'] / GAMES
    print(f"train={train_per_move:4d}  seed={seed}  "
          f"|T|={len(agent.table):7d}  iter={agent.total_iterations:7d}  "
          f"win%={100 * win_rate:5.1f}  time={t1 - t0:6.2f}s")
    return win_rate


def main():
    budgets = [1, 10, 50, 100]
    seeds = [0, 1, 2]

    print(f"Parameter sweep ({GAMES} games per run, naive first vs trained second)")
    rates = {}
    for b, s in itertools.product(budgets, seeds):
        rates.setdefault(b, []).append(run_one(b, s))

    for b in budgets:
        print(f"train={b:4d}  mean win%={100 * np.mean(rates[b]):5.1f}  std={100 * np.std(rates[b]):5.1f}")


if __name__ == "__main__":
    main()
