"""Capture-driven agents: a greedy picker and a capture-weighted sampler."""
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .. import actions, engine, state
from .base import Agent


def capture_counts(game_state: state.GameState, legal: Sequence[actions.Move]) -> np.ndarray:
    """Number of cells each legal move would flip immediately."""
    return np.fromiter(
        (len(engine.captures_for(game_state, move)) for move in legal),
        dtype=np.int64,
        count=len(legal),
    )


class GreedyAgent(Agent):
    """Agent that plays the move flipping the most cards; ties go to the first such move."""

    def select_action(self, game_state: state.GameState, legal: Sequence[actions.Move]) -> actions.Move:
        if not legal:
            raise RuntimeError("GreedyAgent received no legal moves")
        return legal[int(np.argmax(capture_counts(game_state, legal)))]


class CaptureWeightedAgent(Agent):
    """Agent that samples moves with probability proportional to ``1 + weight * captures``.

    With ``weight == 0`` it behaves like a uniform random agent.
    """

    def __init__(
        self,
        weight: float = 1.0,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if weight < 0:
            raise ValueError(f"weight must be >= 0, got {weight}")
        self.weight = weight
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    def select_action(self, game_state: state.GameState, legal: Sequence[actions.Move]) -> actions.Move:
        if not legal:
            raise RuntimeError("CaptureWeightedAgent received no legal moves")
        weights = 1.0 + self.weight * capture_counts(game_state, legal)
        return legal[int(self._rng.choice(len(legal), p=weights / weights.sum()))]


__all__ = ["CaptureWeightedAgent", "GreedyAgent", "capture_counts"]
