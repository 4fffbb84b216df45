"""Agent abstractions for the Triple Triad solver."""
from __future__ import annotations

import abc
from collections.abc import Callable, Iterable, Sequence

from .. import actions, state

AgentFn = Callable[[state.GameState, Sequence[actions.Move]], actions.Move]


class Agent(abc.ABC):
    """Base class for agents that choose a move given a game state."""

    def __call__(self, game_state: state.GameState, legal: Sequence[actions.Move]) -> actions.Move:
        return self.select_action(game_state, legal)

    @abc.abstractmethod
    def select_action(self, game_state: state.GameState, legal: Sequence[actions.Move]) -> actions.Move:
        """Return one legal move for the player to move."""

    @property
    def name(self) -> str:
        """Return the agent's name for display purposes."""
        return self.__class__.__name__


def ensure_legal(move: actions.Move, legal: Iterable[actions.Move]) -> actions.Move:
    """Validate that the chosen move is legal, raising otherwise."""

    if move not in legal:
        raise ValueError(f"Illegal move selected: {move}")
    return move


__all__ = ["Agent", "AgentFn", "ensure_legal"]
