"""Deterministic baseline: always the first legal move."""
from __future__ import annotations

from typing import Sequence

from .. import actions, state
from .base import Agent


class FirstLegalAgent(Agent):
    """Plays the lowest empty cell with the first card that may go there.

    ``engine.legal_moves`` orders moves by cell then hand index, so this agent
    fills the board row by row. It is the default opponent in ``simulate.run``.
    """

    def select_action(self, game_state: state.GameState, legal: Sequence[actions.Move]) -> actions.Move:
        if not legal:
            raise RuntimeError(f"No legal moves for {game_state.to_move.name}")
        return legal[0]


__all__ = ["FirstLegalAgent"]
