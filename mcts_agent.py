from typing import List, Optional, Tuple
import math
import operator
import random
import time

from errors import InvalidIterationCountError
from game_board import COLS
from game_state import GameState
from stats_table import StatsEntry, StatsTable

"""
--------------------------------------------------------------------------
Connect-4 online MCTS  —  self-play search over a shared statistics table
--------------------------------------------------------------------------

Statistics
----------
• One `StatsTable` per agent maps the canonical key of a position (the board
  as seen by the player to move) to `(wins, visits)`.  Positions reached by
  different move orders, or by either colour, share an entry.
• `wins` at a key counts rollouts won by the player who *made the move into*
  that position, i.e. the player choosing it from the parent.  A node whose
  side to move is the first player is credited when the first player did not
  win; draws therefore credit positions where the first player is to move.

One iteration of `search`
-------------------------
1. **Select**  – from the root, while every legal child already has an entry,
   descend to the child with the highest UCT score (lowest column on ties).
2. **Expand**  – try columns in a shuffled order, register the first child
   whose key is new.
3. **Rollout** – play shuffled-first-legal moves to the end of the game.
4. **Backpropagate** – pop the path leaf to root, `visits += 1` everywhere,
   `wins += 1` where the outcome favours the node's mover.  The depth-1 node
   popped last gives the move reported for this iteration.

`search(state, n)` returns the move from the *final* iteration, not an argmax
over the root's children.  With an empty table one iteration is a single
expansion + random playout: that is the naive agent.

UCT
---
    score = wins/visits + c · sqrt( ln(parent.visits) / visits ),  c = √2
--------------------------------------------------------------------------
"""

SQRT_2 = math.sqrt(2)


def uct_score(parent: StatsEntry, child: StatsEntry, exploration: float = SQRT_2) -> float:
    """
    UCB1 score of a child as seen from its parent.

    Args:
        parent: Statistics of the parent position
        child: Statistics of the child position
        exploration: Weight of the exploration term

    Returns:
        float: Exploitation plus exploration; +inf for an unvisited child
    """
    if child.visits == 0:
        return math.inf
    win_ratio = float(child.wins) / float(child.visits)
    # A parent can be fully explored before its own first visit when all its
    # children were registered through transpositions.
    log_parent = math.log(parent.visits) if parent.visits > 0 else 0.0
    visit_ratio = log_parent / float(child.visits)
    return win_ratio + exploration * math.sqrt(visit_ratio)


class MCTSAgent:
    """
    Monte Carlo Tree Search agent for Connect4.
    Refines a persistent statistics table a few iterations at a time while a
    game is in progress and recommends a column from whatever it has learned.
    """

    def __init__(self, table: Optional[StatsTable] = None, exploration: float = SQRT_2,
                 rng: Optional[random.Random] = None, seed: Optional[int] = None,
                 verbose: bool = False):
        """
        Initialize the MCTS agent.

        Args:
            table: Statistics to start from; a fresh empty table if None
            exploration: UCT exploration constant
            rng: Random source used for expansion and rollout move order
            seed: Seed for a private random source when rng is not given
            verbose: Master verbosity flag for console output
        """
        self.table = table if table is not None else StatsTable()
        self.exploration = exploration
        self.rng = rng if rng is not None else random.Random(seed)
        self.verbose = verbose

        # ------------------------------------------------------------------
        # Telemetry counters (read-only for callers, only ever increase)
        # ------------------------------------------------------------------
        self.total_iterations: int = 0
        self.games_played: int = 0
        self.wins: int = 0
        self.last_search_time: float = 0.0

        self._vprint(f"Agent initialized. {len(self.table)} known positions, exploration={exploration:.4f}.")

    def set_exploration(self, exploration: float) -> None:
        """Set the UCT exploration constant."""
        self.exploration = exploration

    def set_verbose(self, flag: bool) -> None:
        """Enable or disable console printing."""
        self.verbose = flag

    def _vprint(self, *args, **kwargs):
        """Verbose-controlled print."""
        if self.verbose:
            print(*args, **kwargs)

    @property
    def nodes_expanded(self) -> int:
        """Number of distinct canonical keys registered so far."""
        return len(self.table)

    # ------------------------------------------------------------------
    # Public search contract
    # ------------------------------------------------------------------
    def search(self, root: GameState, iterations: int) -> Optional[int]:
        """
        Run `iterations` playouts from root and report a move.

        Args:
            root: The position to search from
            iterations: Number of select/expand/rollout/backpropagate passes
                (any integer type, numpy integers included; not bool)

        Returns:
            The column captured by the last iteration, or None if that pass
            never left the root (terminal root).

        Raises:
            InvalidIterationCountError: If iterations is not positive
        """
        if isinstance(iterations, bool):
            raise InvalidIterationCountError(iterations)
        try:
            count = operator.index(iterations)
        except TypeError:
            raise InvalidIterationCountError(iterations) from None
        if count <= 0:
            raise InvalidIterationCountError(iterations)

        start_time = time.time()
        self.table.register(root.canonical_key())

        move = None
        for _ in range(count):
            path = self._traverse(root)
            first_player_won = self._rollout(path[-1])
            move = self._backpropagate(path, first_player_won)
            self.total_iterations += 1

        self.last_search_time = time.time() - start_time
        self._vprint(f"Search: {iterations} iterations in {self.last_search_time:.3f}s, "
                     f"{len(self.table)} known positions, move={'-' if move is None else move + 1}")
        return move

    def choose_action(self, state: GameState) -> Optional[int]:
        """Choose a move for the live game with a single search iteration."""
        move = self.search(state, 1)
        self._vprint(f"Agent chose column {'-' if move is None else move + 1}")
        return move

    # ------------------------------------------------------------------
    # The four phases
    # ------------------------------------------------------------------
    def _children(self, node: GameState) -> List[GameState]:
        """Children in increasing column order."""
        return [node.apply_action(col) for col in node.get_valid_actions()]

    def _traverse(self, root: GameState) -> List[GameState]:
        """Select down through fully explored nodes, then expand one child."""
        path = []
        node = root
        children, explored = self._exploration_status(node)
        while explored:
            path.append(node)
            node = self._best_child(node, children)
            children, explored = self._exploration_status(node)
        path.append(node)

        if not node.is_terminal():
            child = self._expand(node)
            if child is not None:
                path.append(child)
        return path

    def _exploration_status(self, node: GameState) -> Tuple[List[GameState], bool]:
        """
        Children of node (increasing column order) and whether node is fully
        explored: live, with every legal child already in the table.
        """
        if node.is_terminal():
            return [], False
        children = self._children(node)
        return children, all(child.canonical_key() in self.table for child in children)

    def _fully_explored(self, node: GameState) -> bool:
        return self._exploration_status(node)[1]

    def _best_child(self, node: GameState, children: List[GameState]) -> GameState:
        parent = self.table.get(node.canonical_key())
        best_child = None
        best_score = -math.inf
        for child in children:
            score = uct_score(parent, self.table.get(child.canonical_key()), self.exploration)
            if score > best_score:
                best_child = child
                best_score = score
        return best_child

    def _random_moves(self) -> List[int]:
        """A fresh permutation of all columns."""
        moves = list(range(COLS))
        self.rng.shuffle(moves)
        return moves

    def _expand(self, node: GameState) -> Optional[GameState]:
        for move in self._random_moves():
            if node.is_legal(move):
                child = node.apply_action(move)
                if self.table.register(child.canonical_key()):
                    return child
        return None

    def _rollout(self, node: GameState) -> bool:
        """Play random moves to the end; return whether the first player won."""
        while not node.is_terminal():
            node = self._rollout_step(node)
        return node.first_player_won

    def _rollout_step(self, node: GameState) -> GameState:
        for move in self._random_moves():
            if node.is_legal(move):
                return node.apply_action(move)
        raise AssertionError("non-terminal state with no legal move")

    def _backpropagate(self, path: List[GameState], first_player_won: bool) -> Optional[int]:
        move = None
        while path:
            node = path.pop()
            if len(path) == 1:
                move = node.last_move_column
            self.table.record(node.canonical_key(), first_player_won != node.turn_is_first_player)
        return move

    # ------------------------------------------------------------------
    # Telemetry
    # ------------------------------------------------------------------
    def record_game(self, won: bool) -> None:
        """Count a finished match played by this agent."""
        self.games_played += 1
        if won:
            self.wins += 1

    def get_stats(self) -> str:
        return (f"Total Expanded: {self.nodes_expanded} Total Iterations: {self.total_iterations} "
                f"Games Played: {self.games_played} Wins: {self.wins}")

    def print_stats(self, label: str = "MCTS stats") -> None:
        """Print the telemetry counters in a single line."""
        print(f"{label}: {self.get_stats()}")
