"""Capture resolution: value adjustment, edge comparison and flip strategies.

A placement is resolved by a CaptureStrategy chosen from the active rules.
The strategy reports which cells change owner; the engine applies them. Rule
variants that alter who flips what plug in as new strategies or comparisons
without touching the search or the state layout.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

from . import rules
from .cards import Card
from .state import GameState


# =============================================================================
# Value adjustment
# =============================================================================

def element_count(game_state: GameState, element: str | None) -> int:
    """Number of cards of ``element`` currently on the board."""
    if element is None:
        return 0
    return sum(1 for cell in game_state.board if cell is not None and cell.card.element == element)


def adjusted_value(
    game_state: GameState,
    card: Card,
    cell: int,
    direction: rules.Direction,
) -> int:
    """Return the edge value of ``card`` at ``cell`` after rule modifiers.

    Ascension/descension shift the value by the number of same-element cards on
    the board, clamped to the printed range. The elemental bonus is applied on
    top and is not capped, so a boosted 10 compares as 11.
    """
    value = card.values[direction]
    game_rules = game_state.rules

    if card.element is not None and (game_rules.ascension or game_rules.descension):
        shift = element_count(game_state, card.element)
        if game_rules.ascension:
            value += shift
        if game_rules.descension:
            value -= shift
        value = max(rules.MIN_VALUE, min(rules.MAX_VALUE, value))

    if game_rules.elemental and card.element is not None and card.element == game_state.elements[cell]:
        value += 1
    return value


# =============================================================================
# Edge comparison
# =============================================================================

class Comparison(Protocol):
    def beats(self, attacker: int, defender: int) -> bool:
        ...


@dataclass(frozen=True)
class HigherWins:
    """Standard rule: the placed edge must strictly exceed the facing edge."""

    def beats(self, attacker: int, defender: int) -> bool:
        return attacker > defender


@dataclass(frozen=True)
class LowerWins:
    """Reverse rule: the placed edge must be strictly lower than the facing edge."""

    def beats(self, attacker: int, defender: int) -> bool:
        return attacker < defender


@dataclass(frozen=True)
class FallenAce:
    """Fallen Ace: a 1 takes an A (an A takes a 1 under reverse), otherwise defer."""

    inner: Comparison
    reverse: bool = False

    def beats(self, attacker: int, defender: int) -> bool:
        if self.reverse:
            if attacker == rules.MAX_VALUE and defender == rules.MIN_VALUE:
                return True
        elif attacker == rules.MIN_VALUE and defender == rules.MAX_VALUE:
            return True
        return self.inner.beats(attacker, defender)


# =============================================================================
# Capture strategies
# =============================================================================

class CaptureStrategy(abc.ABC):
    """Decides which cells flip when ``card`` is placed at ``cell`` by ``mover``."""

    @abc.abstractmethod
    def flips(
        self,
        game_state: GameState,
        cell: int,
        card: Card,
        mover: rules.Color,
    ) -> tuple[int, ...]:
        """Return the cells that change owner, evaluated against the pre-placement board."""


class DirectCapture(CaptureStrategy):
    """Flip each adjacent opponent card whose facing edge the placed card beats.

    Only direct neighbours are examined; flipped cards do not go on to flip
    their own neighbours.
    """

    def __init__(self, comparison: Comparison | None = None) -> None:
        self.comparison = comparison or HigherWins()

    def flips(
        self,
        game_state: GameState,
        cell: int,
        card: Card,
        mover: rules.Color,
    ) -> tuple[int, ...]:
        flipped = []
        for direction, neighbour in rules.NEIGHBOURS[cell]:
            placed = game_state.board[neighbour]
            if placed is None or placed.owner == mover:
                continue
            attack = adjusted_value(game_state, card, cell, direction)
            defend = adjusted_value(game_state, placed.card, neighbour, direction.opposite())
            if self.comparison.beats(attack, defend):
                flipped.append(neighbour)
        return tuple(flipped)

    def __repr__(self) -> str:
        return f"DirectCapture({self.comparison!r})"


@lru_cache(maxsize=None)
def strategy_for(game_rules: rules.Rules) -> CaptureStrategy:
    """Select the capture strategy for a rule set."""
    comparison: Comparison = LowerWins() if game_rules.reverse else HigherWins()
    if game_rules.fallen_ace:
        comparison = FallenAce(comparison, reverse=game_rules.reverse)
    return DirectCapture(comparison)


__all__ = [
    "CaptureStrategy",
    "Comparison",
    "DirectCapture",
    "FallenAce",
    "HigherWins",
    "LowerWins",
    "adjusted_value",
    "element_count",
    "strategy_for",
]
