"""Move definitions for the Triple Triad engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Move:
    """A placement decision for the player to move.

    ``hand_index`` identifies the card within the mover's current hand and
    ``cell`` is the target board cell (0-8, row-major).
    """

    hand_index: int
    cell: int

    def __str__(self) -> str:
        return f"card #{self.hand_index} -> cell {self.cell}"


__all__ = ["Move"]
