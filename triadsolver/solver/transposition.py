"""Transposition table for the exact search."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .. import actions, state


class TTFlag(IntEnum):
    """Transposition table entry type."""
    EXACT = 0      # Exact value
    LOWER = 1      # Lower bound (fail-high)
    UPPER = 2      # Upper bound (fail-low)


@dataclass
class TTEntry:
    """Transposition table entry."""
    value: int
    flag: TTFlag
    best_move: actions.Move | None = None


class TranspositionTable:
    """Hash table caching search results keyed by the full immutable state.

    Every search reaches terminal positions, so there is no depth to compare:
    an entry is valid for any later probe of the same position.
    """

    def __init__(self, max_size: int = 1_000_000) -> None:
        """Initialize transposition table.

        Args:
            max_size: Maximum number of entries (oldest entries are evicted first)
        """
        self.max_size = max_size
        self._table: dict[state.GameState, TTEntry] = {}
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def probe(
        self,
        key: state.GameState,
        alpha: int,
        beta: int,
    ) -> tuple[bool, int, actions.Move | None]:
        """Probe the table for a cached result.

        Returns:
            Tuple of (found, value, best_move). ``found`` is True only when the
            stored value is exact or a bound that already falls outside the
            (alpha, beta) window; otherwise the best move is still returned
            for move ordering.
        """
        entry = self._table.get(key)

        if entry is None:
            self.misses += 1
            return False, 0, None

        if (
            entry.flag == TTFlag.EXACT
            or (entry.flag == TTFlag.LOWER and entry.value >= beta)
            or (entry.flag == TTFlag.UPPER and entry.value <= alpha)
        ):
            self.hits += 1
            return True, entry.value, entry.best_move

        self.misses += 1
        return False, 0, entry.best_move

    def store(
        self,
        key: state.GameState,
        value: int,
        flag: TTFlag,
        best_move: actions.Move | None,
    ) -> None:
        """Store a result. An exact entry is never downgraded to a bound."""
        existing = self._table.get(key)
        if existing is not None and existing.flag == TTFlag.EXACT and flag != TTFlag.EXACT:
            return

        if existing is None and self._table and len(self._table) >= self.max_size:
            # dicts keep insertion order, so this drops the oldest entry
            self._table.pop(next(iter(self._table)))

        self._table[key] = TTEntry(value, flag, best_move)
        self.stores += 1

    def clear(self) -> None:
        """Clear the transposition table."""
        self._table.clear()
        self.hits = 0
        self.misses = 0
        self.stores = 0

    @property
    def size(self) -> int:
        """Current number of entries."""
        return len(self._table)

    @property
    def hit_rate(self) -> float:
        """Cache hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


__all__ = ["TTEntry", "TTFlag", "TranspositionTable"]
