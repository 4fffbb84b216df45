"""Uniform random baseline agent."""
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .. import actions, state
from .base import Agent


class RandomAgent(Agent):
    """Agent that samples uniformly from the available legal moves.

    Pass ``rng`` to draw from an existing numpy Generator (one stream per
    worker), or ``seed`` to create a private one.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None) -> None:
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    def select_action(self, game_state: state.GameState, legal: Sequence[actions.Move]) -> actions.Move:
        del game_state  # unused
        if not legal:
            raise RuntimeError("RandomAgent received no legal moves")
        return legal[int(self._rng.integers(len(legal)))]


__all__ = ["RandomAgent"]
