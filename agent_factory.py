"""
agent_factory.py
----------------
Centralised helper to configure and create MCTSAgent instances.

Edit the defaults here (exploration constant, seeding, verbosity) instead of
hunting through game_data.py or other files.  Any module can simply:

    from agent_factory import make_agent, make_naive_agent
    agent = make_agent()                     # empty table, c=√2, quiet
    naive = make_naive_agent()               # throwaway one-playout agent
    loud  = make_agent(seed=7, verbose=True)
"""

from typing import Any, Optional

from mcts_agent import MCTSAgent, SQRT_2
from stats_table import StatsTable

DEFAULT_EXPLORATION = SQRT_2


def make_agent(
    *,
    exploration: float = DEFAULT_EXPLORATION,
    seed: Optional[int] = None,
    table_path: Optional[str] = None,
    verbose: bool = False,
    **kwargs: Any
) -> MCTSAgent:
    """
    Build and return the long-lived, trained MCTSAgent.

    Args
    ----
    exploration : UCT exploration constant.
    seed        : Seed for the agent's private random source (None → OS entropy).
    table_path  : Optional pickle written by StatsTable.save() to resume from.
    verbose     : Master verbosity flag controlling console prints.
    **kwargs    : Passed straight to the MCTSAgent constructor.

    Returns
    -------
    MCTSAgent instance with the requested configuration.
    """
    table = StatsTable.load(table_path) if table_path else None
    return MCTSAgent(
        table=table,
        exploration=exploration,
        seed=seed,
        verbose=verbose,
        **kwargs,
    )


def make_naive_agent(*, seed: Optional[int] = None, **kwargs: Any) -> MCTSAgent:
    """
    Build a zero-training agent: an empty table, meant to be asked for one
    iteration.  Selection never finds a fully explored node, so each move is
    a single expansion plus one random playout.
    """
    return MCTSAgent(table=StatsTable(), seed=seed, **kwargs)
