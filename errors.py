"""
errors.py
---------
Exception hierarchy for the Connect-4 MCTS engine.

Every error raised on purpose by the engine derives from Connect4Error, so a
caller driving the game can catch the whole family in one place:

    from errors import Connect4Error, IllegalMoveError

    try:
        state = state.apply_action(col)
    except IllegalMoveError as e:
        print(f"Rejected move: {e.message} {e.context}")
"""

from typing import Any, Dict, Optional

__all__ = [
    "Connect4Error",
    "IllegalMoveError",
    "InvalidIterationCountError",
]


class Connect4Error(Exception):
    """Base exception for all engine errors.

    Attributes:
        code: Machine-readable error code
        message: Human-readable description
        context: Extra values useful when debugging
    """
    code: str = "CONNECT4_ERROR"

    def __init__(self, message: str, code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"


class IllegalMoveError(Connect4Error):
    """A piece was dropped into a full or non-existent column, or after the game ended."""
    code: str = "ILLEGAL_MOVE"

    def __init__(self, column: Any, reason: str = "column is full"):
        super().__init__(f"Cannot play column {column}: {reason}",
                         context={"column": column})
        self.column = column


class InvalidIterationCountError(Connect4Error):
    """search() was asked for a non-positive number of iterations."""
    code: str = "INVALID_ITERATION_COUNT"

    def __init__(self, iterations: Any):
        super().__init__("Iteration count must be a positive integer",
                         context={"iterations": iterations})
        self.iterations = iterations
