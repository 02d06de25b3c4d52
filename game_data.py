from typing import List, Optional
import random

from agent_factory import make_agent
from game_board import FIRST_PLAYER, SECOND_PLAYER
from game_state import GameState
from mcts_agent import MCTSAgent

GAME_MODES = ('pva', 'ava')


def training_iterations(total_iterations: int, max_train_per_move: int = 100,
                        max_train_threshold: int = 3_000_000) -> int:
    """
    Background training budget for one host tick.

    Starts at max_train_per_move and tapers linearly as the agent's lifetime
    iteration count approaches max_train_threshold, never dropping below 1.
    """
    if total_iterations >= max_train_threshold:
        return 1
    budget = int(round(max_train_per_move * (1 - total_iterations / max_train_threshold)))
    return max(1, budget)


class GameData:
    """
    The game data class contains all of the data for a headless session:
    the live position, the trained agent, the match mode and the tallies.
    """

    state: GameState
    game_over: bool
    last_move_col: List[int]

    # 'pva': the caller supplies the opponent's moves; 'ava': naive vs trained
    game_mode: str
    agent: MCTSAgent
    agent_is_first: bool

    player_wins: int
    agent_wins: int
    draws: int

    max_train_per_move: int
    max_train_threshold: int

    def __init__(self, agent: Optional[MCTSAgent] = None, seed: Optional[int] = None):
        self.state = GameState()
        self.game_over = False
        self.last_move_col = []

        self.game_mode = 'ava'
        self.agent = agent if agent is not None else make_agent(seed=seed)
        self.agent_is_first = False
        # Move order of every naive agent is drawn from here.
        self.naive_rng = random.Random(seed)

        self.player_wins = 0
        self.agent_wins = 0
        self.draws = 0

        self.max_train_per_move = 100
        self.max_train_threshold = 3_000_000

    def set_game_mode(self, mode: str) -> None:
        """
        Set the game mode.

        Args:
            mode: 'pva' for caller (human) vs agent, 'ava' for naive agent vs
            trained agent
        """
        if mode not in GAME_MODES:
            raise ValueError(f"Unknown game mode {mode!r}, expected one of {GAME_MODES}")
        self.game_mode = mode

    def set_training_schedule(self, max_train_per_move: int, max_train_threshold: int) -> None:
        self.max_train_per_move = max_train_per_move
        self.max_train_threshold = max_train_threshold

    def training_budget(self) -> int:
        return training_iterations(self.agent.total_iterations,
                                   self.max_train_per_move,
                                   self.max_train_threshold)

    @property
    def agent_player(self) -> int:
        return FIRST_PLAYER if self.agent_is_first else SECOND_PLAYER

    def is_agent_turn(self) -> bool:
        return self.state.turn_is_first_player == self.agent_is_first

    def reset_game(self) -> None:
        """Start a fresh game; the agent and the tallies carry over."""
        self.state = GameState()
        self.game_over = False
        self.last_move_col = []
