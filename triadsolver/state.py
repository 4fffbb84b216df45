"""Immutable game state representations and helpers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from . import rules
from .cards import Card
from .exceptions import InvalidStateError

Hand = tuple[Card, ...]

_NO_ELEMENTS: tuple[str | None, ...] = (None,) * rules.BOARD_CELLS


@dataclass(frozen=True)
class Placed:
    """A card on the board together with the color currently owning it."""

    card: Card
    owner: rules.Color


@dataclass(frozen=True)
class GameState:
    """Full immutable snapshot of a match.

    ``board`` holds nine cells in row-major order, each None or a Placed card.
    ``hands`` is indexed by Color. ``elements`` holds the per-cell element tags
    used by the elemental rule.

    The five-card accounting is enforced on construction: with ``k`` occupied
    cells the player to move holds ``5 - k // 2`` cards and the opponent
    ``5 - (k + 1) // 2``. The first player therefore places five cards and the
    second player finishes the match with one card unplayed.
    """

    board: tuple[Placed | None, ...]
    hands: tuple[Hand, Hand]
    to_move: rules.Color
    rules: rules.Rules = field(default_factory=rules.Rules)
    elements: tuple[str | None, ...] = _NO_ELEMENTS

    def __post_init__(self) -> None:
        if len(self.board) != rules.BOARD_CELLS:
            raise InvalidStateError(f"Board must have {rules.BOARD_CELLS} cells, got {len(self.board)}")
        if len(self.elements) != rules.BOARD_CELLS:
            raise InvalidStateError(f"Element tags must cover {rules.BOARD_CELLS} cells")
        if len(self.hands) != rules.PLAYER_COUNT:
            raise InvalidStateError("State must track two hands")
        if not isinstance(self.to_move, rules.Color):
            object.__setattr__(self, "to_move", rules.Color(self.to_move))

        occupied = rules.BOARD_CELLS - self.board.count(None)
        mover_expected = rules.HAND_SIZE - occupied // 2
        other_expected = rules.HAND_SIZE - (occupied + 1) // 2
        mover_hand = len(self.hands[self.to_move])
        other_hand = len(self.hands[self.to_move.other()])
        if mover_hand != mover_expected or other_hand != other_expected:
            raise InvalidStateError(
                f"Hand sizes {mover_hand}/{other_hand} (to move/other) do not match "
                f"{occupied} occupied cells; expected {mover_expected}/{other_expected}"
            )

    @property
    def occupied(self) -> int:
        return rules.BOARD_CELLS - self.board.count(None)

    def is_full(self) -> bool:
        return None not in self.board

    def hand(self, color: rules.Color) -> Hand:
        return self.hands[color]

    def empty_cells(self) -> tuple[int, ...]:
        return tuple(i for i, cell in enumerate(self.board) if cell is None)

    def owned(self, color: rules.Color) -> int:
        """Count cells currently owned by ``color``."""
        return sum(1 for cell in self.board if cell is not None and cell.owner == color)


def initial_state(
    red_hand: Sequence[Card],
    blue_hand: Sequence[Card],
    *,
    first: rules.Color = rules.Color.RED,
    game_rules: rules.Rules | None = None,
    elements: Sequence[str | None] | None = None,
) -> GameState:
    """Create an empty-board state with both full hands."""

    return GameState(
        board=(None,) * rules.BOARD_CELLS,
        hands=(tuple(red_hand), tuple(blue_hand)),
        to_move=rules.Color(first),
        rules=game_rules or rules.Rules(),
        elements=tuple(elements) if elements is not None else _NO_ELEMENTS,
    )


def parse_color(value: Any) -> rules.Color:
    """Accept a Color, its index, or a name such as ``"red"``/``"Blue"``."""

    if isinstance(value, rules.Color):
        return value
    if isinstance(value, str):
        try:
            return rules.Color[value.strip().upper()]
        except KeyError:
            raise InvalidStateError(f"Unknown color: {value!r}") from None
    try:
        return rules.Color(value)
    except ValueError:
        raise InvalidStateError(f"Unknown color: {value!r}") from None


def from_description(
    board: Sequence[tuple[int, Any] | None],
    hands: Mapping[Any, Sequence[int]] | Sequence[Sequence[int]],
    to_move: Any,
    catalog: Mapping[int, Card],
    *,
    game_rules: rules.Rules | None = None,
    elements: Sequence[str | None] | None = None,
) -> GameState:
    """Build a GameState from an externally observed board.

    Args:
        board: Nine entries, each None or a ``(card_id, owner)`` pair.
        hands: Remaining card ids per color, as a two-item sequence indexed by
            Color or a mapping keyed by anything ``parse_color`` accepts.
        to_move: The color to play next.
        catalog: Resolved card data keyed by card id.
        game_rules: Active rule flags.
        elements: Per-cell element tags (only meaningful under the elemental rule).

    Returns:
        A validated, immutable GameState.
    """
    if len(board) != rules.BOARD_CELLS:
        raise InvalidStateError(f"Board must have {rules.BOARD_CELLS} cells, got {len(board)}")

    cells: list[Placed | None] = []
    for entry in board:
        if entry is None:
            cells.append(None)
            continue
        card_id, owner = entry
        cells.append(Placed(card=catalog[card_id], owner=parse_color(owner)))

    if isinstance(hands, Mapping):
        by_color = {parse_color(k): v for k, v in hands.items()}
        ordered = [by_color.get(color, ()) for color in rules.Color]
    else:
        ordered = list(hands)
        if len(ordered) != rules.PLAYER_COUNT:
            raise InvalidStateError("Exactly two hands are required")
    resolved = tuple(tuple(catalog[card_id] for card_id in hand) for hand in ordered)

    return GameState(
        board=tuple(cells),
        hands=(resolved[0], resolved[1]),
        to_move=parse_color(to_move),
        rules=game_rules or rules.Rules(),
        elements=tuple(elements) if elements is not None else _NO_ELEMENTS,
    )


def mirror_colors(game_state: GameState) -> GameState:
    """Return the same position with RED and BLUE swapped everywhere.

    The mirrored position has the same value for the player to move.
    """
    board = tuple(
        None if cell is None else replace(cell, owner=cell.owner.other()) for cell in game_state.board
    )
    return replace(
        game_state,
        board=board,
        hands=(game_state.hands[1], game_state.hands[0]),
        to_move=game_state.to_move.other(),
        rules=_mirror_rules(game_state.rules),
    )


def _mirror_rules(game_rules: rules.Rules) -> rules.Rules:
    if game_rules.order_color is None:
        return game_rules
    return replace(game_rules, order_color=game_rules.order_color.other())


__all__ = [
    "GameState",
    "Hand",
    "Placed",
    "from_description",
    "initial_state",
    "mirror_colors",
    "parse_color",
]
