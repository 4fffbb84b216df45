"""Shared formatting utilities for board and move display."""

from __future__ import annotations

from typing import TYPE_CHECKING

from . import rules

if TYPE_CHECKING:
    from collections.abc import Iterable

    from . import actions, state
    from .cards import Card


_OWNER_MARK = {rules.Color.RED: "R", rules.Color.BLUE: "B"}


def value_label(value: int) -> str:
    """Render an edge value, using "A" for the top rank and above."""
    return "A" if value >= rules.MAX_VALUE else str(value)


def card_label(card: Card) -> str:
    """
    Return a compact label for a card.

    Returns:
        A string like "#12 [5 3 A 2] fire" (north, south, west, east)
    """
    edges = " ".join(value_label(v) for v in card.values)
    suffix = f" {card.element}" if card.element else ""
    return f"#{card.card_id} [{edges}]{suffix}"


def card_list(cards: Iterable[Card]) -> str:
    """Format a collection of cards as a comma-separated list."""
    return ", ".join(card_label(card) for card in cards)


def move_label(game_state: state.GameState, move: actions.Move) -> str:
    """Describe a move in terms of the card it plays."""
    card = game_state.hands[game_state.to_move][move.hand_index]
    return f"{game_state.to_move.name} plays {card_label(card)} at cell {move.cell}"


def render_board(game_state: state.GameState) -> str:
    """Render the 3x3 board as text, one card per 3-line block.

    Each block shows the north value on top, west/owner/east in the middle and
    south at the bottom. Empty cells show their element tag, if any.
    """
    border = "+-------" * rules.BOARD_WIDTH + "+"
    lines = [border]
    for row in range(rules.BOARD_WIDTH):
        top, mid, bottom = [], [], []
        for col in range(rules.BOARD_WIDTH):
            cell = row * rules.BOARD_WIDTH + col
            placed = game_state.board[cell]
            if placed is None:
                tag = (game_state.elements[cell] or "")[:5]
                top.append("       ")
                mid.append(f"{tag:^7}")
                bottom.append("       ")
                continue
            north, south, west, east = (value_label(v) for v in placed.card.values)
            mark = _OWNER_MARK[placed.owner]
            top.append(f"{north:^7}")
            mid.append(f" {west:<2}{mark}{east:>2} ")
            bottom.append(f"{south:^7}")
        lines.append("|" + "|".join(top) + "|")
        lines.append("|" + "|".join(mid) + "|")
        lines.append("|" + "|".join(bottom) + "|")
        lines.append(border)

    red = len(game_state.hands[rules.Color.RED])
    blue = len(game_state.hands[rules.Color.BLUE])
    lines.append(f"to move: {game_state.to_move.name}  hands: RED {red} / BLUE {blue}")
    return "\n".join(lines)


__all__ = ["card_label", "card_list", "move_label", "render_board", "value_label"]
