"""Win/visit statistics keyed by canonical position.

StatsTable is the only long-lived memory of the search: a dict from the
42-byte canonical key of a GameState to a StatsEntry. Entries are created
lazily with zero counts and never removed.

Usage:

    from stats_table import StatsTable

    table = StatsTable()
    table.register(state.canonical_key())
    table.record(state.canonical_key(), won=True)
    entry = table.get(state.canonical_key())
    print(entry.wins, entry.visits)

"""
from __future__ import annotations

import pickle
import threading
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple


@dataclass
class StatsEntry:
    wins: int = 0
    visits: int = 0

    def __iter__(self):
        return iter((self.wins, self.visits))


class StatsTable:
    """Mapping canonical key -> StatsEntry.

    Mutations go through a lock so a table can be updated from a dedicated
    writer thread; a single search never needs it.
    Methods:
      - get(key) -> Optional[StatsEntry]
      - register(key) -> bool  (True when the key was new)
      - record(key, won)
      - save(path) / StatsTable.load(path)
    """

    def __init__(self):
        self._table: Dict[bytes, StatsEntry] = {}
        self._lock = threading.Lock()

    def __contains__(self, key: bytes) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._table)

    def get(self, key: bytes) -> Optional[StatsEntry]:
        return self._table.get(key)

    def register(self, key: bytes) -> bool:
        with self._lock:
            if key in self._table:
                return False
            self._table[key] = StatsEntry()
            return True

    def record(self, key: bytes, won: bool) -> None:
        """Count one backpropagation pass through key.

        A missing key means the search path and the table disagree, which is
        a logic fault; the KeyError is left to propagate.
        """
        with self._lock:
            entry = self._table[key]
            entry.visits += 1
            if won:
                entry.wins += 1

    def clear(self):
        with self._lock:
            self._table.clear()

    def snapshot(self) -> Dict[bytes, Tuple[int, int]]:
        with self._lock:
            return {k: (e.wins, e.visits) for k, e in self._table.items()}

    def save(self, path: str) -> None:
        with open(path, "wb") as f:
            pickle.dump(self.snapshot(), f)

    @classmethod
    def load(cls, path: str) -> "StatsTable":
        with open(path, "rb") as f:
            raw = pickle.load(f)
        table = cls()
        for key, (wins, visits) in raw.items():
            table._table[key] = StatsEntry(wins, visits)
        return table


# small self-test when run directly
if __name__ == "__main__":
    from game_state import GameState

    root = GameState()
    t = StatsTable()
    print("New:", t.register(root.canonical_key()))
    t.record(root.canonical_key(), won=True)
    print(t.get(root.canonical_key()))
