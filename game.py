import argparse
import sys
from typing import Optional

from agent_factory import make_agent
from connect_game import ConnectGame
from game_data import GameData


def start(games: int = 10, max_train_per_move: int = 100, max_train_threshold: int = 3_000_000,
          seed: Optional[int] = None, table_path: Optional[str] = None,
          save_path: Optional[str] = None, verbose: bool = False):
    agent = make_agent(seed=seed, table_path=table_path, verbose=verbose)
    data = GameData(agent=agent, seed=seed)
    data.set_training_schedule(max_train_per_move, max_train_threshold)
    game = ConnectGame(data, verbose=verbose)

    print(f"Playing {games} games: naive agent (first) vs trained agent (second)")
    results = game.play(games)

    print(f"Naive: {results['naive_wins']}  Trained: {results['trained_wins']}  Draws: {results['draws']}")
    agent.print_stats("Trained MCTS stats")

    if save_path:
        agent.table.save(save_path)
        print(f"Saved {len(agent.table)} positions to {save_path}")
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(description="Connect Four self-play MCTS trainer")
    parser.add_argument("--games", type=int, default=10, help="number of games to play")
    parser.add_argument("--train-per-move", type=int, default=100,
                        help="background training iterations per tick before tapering")
    parser.add_argument("--train-threshold", type=int, default=3_000_000,
                        help="lifetime iterations at which training tapers to 1 per tick")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--load", dest="table_path", default=None,
                        help="resume from a statistics table saved earlier")
    parser.add_argument("--save", dest="save_path", default=None,
                        help="write the statistics table here when done")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    start(games=args.games,
          max_train_per_move=args.train_per_move,
          max_train_threshold=args.train_threshold,
          seed=args.seed,
          table_path=args.table_path,
          save_path=args.save_path,
          verbose=args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
