from typing import Dict, Optional

from agent_factory import make_naive_agent
from game_board import print_board
from game_data import GameData
from game_state import GameState


class ConnectGame:
    """
    Holds all of the game logic for a headless session: background training,
    whose turn it is, result bookkeeping and restarting finished games.
    """

    game_data: GameData

    def __init__(self, game_data: GameData, verbose: bool = False):
        """
        Initializes the connect game.
        :param game_data: A reference to the game data object.
        :param verbose: Print the board after every move.
        """
        self.game_data = game_data
        self.verbose = verbose
        self.games_finished = 0

    def make_move(self, col: int, is_agent_move: bool = False) -> GameState:
        """
        Make a move in the specified column.

        Args:
            col: The column to make the move in
            is_agent_move: Flag indicating if this move is being made by an agent

        Returns:
            GameState: The live state after the move

        Raises:
            IllegalMoveError: If the column cannot be played
        """
        data = self.game_data
        data.state = data.state.apply_action(col)
        data.last_move_col.append(col)

        if self.verbose:
            who = "Agent" if is_agent_move else "Player"
            print(f"{who} played column {col + 1}")
            self.print_board()

        if data.state.is_terminal():
            data.game_over = True
            self._record_result()
        return data.state

    def _record_result(self) -> None:
        """Update tallies and the trained agent's counters for a finished game."""
        data = self.game_data
        agent = data.agent
        winner = data.state.winner()
        self.games_finished += 1

        if winner is None:
            data.draws += 1
            agent.record_game(False)
            print(f"DRAW! Draws: {data.draws} MCTS Stats: {agent.get_stats()}")
            return

        if winner == data.agent_player:
            data.agent_wins += 1
            agent.record_game(True)
            if data.game_mode == 'pva':
                print(f"AI WINS! Human: {data.player_wins} AI: {data.agent_wins} "
                      f"MCTS Stats: {agent.get_stats()}")
            else:
                print(f"TRAINED MODEL WINS! Naive: {data.player_wins} Trained: {data.agent_wins} "
                      f"Trained MCTS Stats: {agent.get_stats()}")
        else:
            data.player_wins += 1
            agent.record_game(False)
            if data.game_mode == 'pva':
                print(f"HUMAN WINS! Human: {data.player_wins} AI: {data.agent_wins} "
                      f"MCTS Stats: {agent.get_stats()}")
            else:
                print(f"NAIVE MODEL WINS! Naive: {data.player_wins} Trained: {data.agent_wins} "
                      f"Trained MCTS Stats: {agent.get_stats()}")

    def train(self) -> Optional[int]:
        """
        Refine the agent's statistics from the live position. The move the
        search reports is not played.
        """
        data = self.game_data
        if data.game_over:
            return None
        return data.agent.search(data.state, data.training_budget())

    def handle_agent_move(self) -> None:
        """
        Handle agent moves when it's their turn.
        """
        data = self.game_data
        if data.game_over:
            return

        if data.is_agent_turn():
            col = data.agent.choose_action(data.state)
        elif data.game_mode == 'ava':
            # A brand new agent every move, so it never learns anything.
            naive = make_naive_agent(rng=data.naive_rng)
            col = naive.choose_action(data.state)
        else:
            # Waiting on the caller in 'pva'.
            return

        self.make_move(col, is_agent_move=True)

    def update(self) -> None:
        """
        One host tick: restart a finished agent-vs-agent game, otherwise train
        in the background and let an agent move if it's its turn.
        """
        data = self.game_data
        if data.game_over:
            if data.game_mode == 'ava':
                data.reset_game()
            return

        self.train()
        self.handle_agent_move()

    def new_game(self) -> None:
        self.game_data.reset_game()

    def play(self, games: int) -> Dict[str, int]:
        """
        Run agent-vs-agent games to completion.

        Args:
            games: Number of games to finish

        Returns:
            Dict with the tallies after the last game
        """
        self.game_data.set_game_mode('ava')
        target = self.games_finished + games
        while self.games_finished < target:
            self.update()

        data = self.game_data
        return {
            'naive_wins': data.player_wins,
            'trained_wins': data.agent_wins,
            'draws': data.draws,
        }

    def print_board(self):
        """
        Prints the state of the board to the console.
        """
        print_board(self.game_data.state.first_perspective)
