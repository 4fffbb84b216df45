"""Agent wrapper around the solver facade."""

from __future__ import annotations

from typing import Sequence

from .. import actions, state
from ..agents.base import Agent, ensure_legal
from .config import SolverConfig
from .facade import SolveResult, Solver


class SolverAgent(Agent):
    """Agent that plays the solver's recommended move.

    Useful for pitting exact play against the baseline agents through
    ``simulate.play_game``.
    """

    def __init__(self, config: SolverConfig | None = None) -> None:
        self._solver = Solver(config)
        self._last_result: SolveResult | None = None

    @property
    def name(self) -> str:
        config = self._solver.config
        return f"SolverAgent(playouts={config.playouts}, policy={config.playout_policy})"

    def select_action(self, game_state: state.GameState, legal: Sequence[actions.Move]) -> actions.Move:
        if len(legal) == 1:
            return legal[0]

        result = self._solver.solve(game_state)
        self._last_result = result
        return ensure_legal(result.move, legal)

    def get_last_result(self) -> SolveResult | None:
        """Result of the most recent solve, if any."""
        return self._last_result


__all__ = ["SolverAgent"]
