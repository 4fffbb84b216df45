"""Pytest fixtures shared across the suite."""

import pytest

from builders import plain_card
from triadsolver import rules, state


@pytest.fixture
def endgame_state():
    """One empty cell (the centre); RED holds a 5-5-5-5 that flips three BLUE neighbours.

    Playing it leaves RED with 8 cells and BLUE with 1, so the exact value is 7.
    """
    weak = plain_card(50, 1)
    red, blue = rules.Color.RED, rules.Color.BLUE
    owners = (red, blue, red, blue, None, red, blue, blue, red)
    board = tuple(
        None if owner is None else state.Placed(card=weak, owner=owner) for owner in owners
    )
    return state.GameState(
        board=board,
        hands=((plain_card(1, 5),), (plain_card(2, 9),)),
        to_move=red,
    )
