"""Rule engine entry points: move generation, move application and scoring."""
from __future__ import annotations

from dataclasses import replace

from . import actions, capture, rules, state
from .exceptions import IllegalMoveError, InvalidStateError


def is_terminal(game_state: state.GameState) -> bool:
    """Return True once every cell is occupied."""

    return game_state.is_full()


def legal_moves(game_state: state.GameState) -> tuple[actions.Move, ...]:
    """Return every (card, empty cell) placement for the player to move.

    Moves are ordered by cell, then by hand index. Under the order rule only
    the first card in hand may be played, by both sides or by ``rules.order_color``.
    """

    if is_terminal(game_state):
        raise InvalidStateError("No legal moves; game already finished")
    hand = game_state.hands[game_state.to_move]
    if not hand:
        raise InvalidStateError(f"{game_state.to_move.name} has no cards left to play")

    indices = range(1) if game_state.rules.order_applies(game_state.to_move) else range(len(hand))
    return tuple(
        actions.Move(hand_index=idx, cell=cell)
        for cell in game_state.empty_cells()
        for idx in indices
    )


def captures_for(game_state: state.GameState, move: actions.Move) -> tuple[int, ...]:
    """Return the cells ``move`` would flip, without applying it."""

    _validate_move(game_state, move)
    card = game_state.hands[game_state.to_move][move.hand_index]
    strategy = capture.strategy_for(game_state.rules)
    return strategy.flips(game_state, move.cell, card, game_state.to_move)


def apply_move(game_state: state.GameState, move: actions.Move) -> state.GameState:
    """Place a card for the player to move, resolve captures, and pass the turn.

    The input state is never modified; a new state is returned.
    """

    _validate_move(game_state, move)
    mover = game_state.to_move
    hand = game_state.hands[mover]
    card = hand[move.hand_index]

    flipped = capture.strategy_for(game_state.rules).flips(game_state, move.cell, card, mover)

    board = list(game_state.board)
    for cell in flipped:
        board[cell] = replace(board[cell], owner=mover)
    board[move.cell] = state.Placed(card=card, owner=mover)

    new_hand = hand[: move.hand_index] + hand[move.hand_index + 1 :]
    hands = list(game_state.hands)
    hands[mover] = new_hand

    return replace(
        game_state,
        board=tuple(board),
        hands=(hands[0], hands[1]),
        to_move=mover.other(),
    )


def score(game_state: state.GameState) -> tuple[int, int]:
    """Return owned-cell counts indexed by Color."""

    counts = [0, 0]
    for cell in game_state.board:
        if cell is not None:
            counts[cell.owner] += 1
    return counts[0], counts[1]


def terminal_value(game_state: state.GameState) -> int:
    """Owned cells of the player to move minus owned cells of the opponent."""

    counts = score(game_state)
    me = game_state.to_move
    return counts[me] - counts[me.other()]


def margin(game_state: state.GameState, perspective: rules.Color) -> int:
    """Owned cells of ``perspective`` minus the opponent's, at any point in the game."""

    counts = score(game_state)
    return counts[perspective] - counts[perspective.other()]


def _validate_move(game_state: state.GameState, move: actions.Move) -> None:
    if not (0 <= move.cell < rules.BOARD_CELLS):
        raise IllegalMoveError(f"Cell {move.cell} out of range")
    if game_state.board[move.cell] is not None:
        raise IllegalMoveError(f"Cell {move.cell} is already occupied")
    hand = game_state.hands[game_state.to_move]
    if not (0 <= move.hand_index < len(hand)):
        raise IllegalMoveError(
            f"Hand index {move.hand_index} out of range; {game_state.to_move.name} holds {len(hand)} cards"
        )
    if game_state.rules.order_applies(game_state.to_move) and move.hand_index != 0:
        raise IllegalMoveError("Order rule: the first card in hand must be played")


__all__ = [
    "apply_move",
    "captures_for",
    "is_terminal",
    "legal_moves",
    "margin",
    "score",
    "terminal_value",
]
