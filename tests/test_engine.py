import pytest

from builders import make_card, plain_card
from triadsolver import actions, engine, rules, state
from triadsolver.exceptions import IllegalMoveError, InvalidStateError

RED, BLUE = rules.Color.RED, rules.Color.BLUE


def one_opponent_state(attacker, defender, *, game_rules=None, elements=None):
    """BLUE's ``defender`` sits at cell 1; RED holds ``attacker`` plus four fillers."""
    board = [None] * rules.BOARD_CELLS
    board[1] = state.Placed(card=defender, owner=BLUE)
    red_hand = (attacker,) + tuple(plain_card(10 + i, 1) for i in range(4))
    blue_hand = tuple(plain_card(20 + i, 1) for i in range(4))
    return state.GameState(
        board=tuple(board),
        hands=(red_hand, blue_hand),
        to_move=RED,
        rules=game_rules or rules.Rules(),
        elements=tuple(elements) if elements else (None,) * rules.BOARD_CELLS,
    )


def play_east_attack(attack, defend, **kwargs):
    """RED plays a card with east value ``attack`` at cell 0 against BLUE's west value ``defend``."""
    attacker = make_card(1, 1, 1, 1, attack, kwargs.pop("attacker_element", None))
    defender = make_card(2, 1, 1, defend, 1, kwargs.pop("defender_element", None))
    game_state = one_opponent_state(attacker, defender, **kwargs)
    return engine.apply_move(game_state, actions.Move(hand_index=0, cell=0))


class TestCaptureBoundary:
    def test_strictly_greater_flips(self):
        after = play_east_attack(6, 5)
        assert after.board[1].owner == RED

    def test_equal_does_not_flip(self):
        after = play_east_attack(5, 5)
        assert after.board[1].owner == BLUE

    def test_lower_does_not_flip(self):
        after = play_east_attack(4, 5)
        assert after.board[1].owner == BLUE

    def test_ace_beats_nine(self):
        after = play_east_attack(10, 9)
        assert after.board[1].owner == RED

    def test_ace_ties_ace(self):
        after = play_east_attack(10, 10)
        assert after.board[1].owner == BLUE


class TestElemental:
    def test_matching_element_breaks_a_tie(self):
        elements = ("fire",) + (None,) * 8
        after = play_east_attack(
            5, 5, attacker_element="fire", game_rules=rules.Rules(elemental=True), elements=elements
        )
        assert after.board[1].owner == RED

    def test_bonus_ignored_without_the_rule(self):
        elements = ("fire",) + (None,) * 8
        after = play_east_attack(5, 5, attacker_element="fire", elements=elements)
        assert after.board[1].owner == BLUE

    def test_mismatched_element_gets_nothing(self):
        elements = ("ice",) + (None,) * 8
        after = play_east_attack(
            5, 5, attacker_element="fire", game_rules=rules.Rules(elemental=True), elements=elements
        )
        assert after.board[1].owner == BLUE

    def test_boosted_ace_beats_ace_without_wrapping(self):
        elements = ("fire",) + (None,) * 8
        after = play_east_attack(
            10, 10, attacker_element="fire", game_rules=rules.Rules(elemental=True), elements=elements
        )
        assert after.board[1].owner == RED

    def test_defender_bonus_protects_it(self):
        elements = (None, "ice") + (None,) * 7
        after = play_east_attack(
            6, 5, defender_element="ice", game_rules=rules.Rules(elemental=True), elements=elements
        )
        assert after.board[1].owner == BLUE


class TestRuleVariants:
    def test_reverse_lower_flips(self):
        after = play_east_attack(2, 5, game_rules=rules.Rules(reverse=True))
        assert after.board[1].owner == RED

    def test_reverse_higher_does_not_flip(self):
        after = play_east_attack(6, 5, game_rules=rules.Rules(reverse=True))
        assert after.board[1].owner == BLUE

    def test_fallen_ace_one_takes_ace(self):
        assert play_east_attack(1, 10).board[1].owner == BLUE
        after = play_east_attack(1, 10, game_rules=rules.Rules(fallen_ace=True))
        assert after.board[1].owner == RED

    def test_fallen_ace_under_reverse(self):
        after = play_east_attack(10, 1, game_rules=rules.Rules(fallen_ace=True, reverse=True))
        assert after.board[1].owner == RED

    def test_ascension_and_descension(self):
        attacker = make_card(1, 1, 1, 1, 6, "ice")
        defender = plain_card(2, 6)
        ice_on_board = state.Placed(card=plain_card(3, 1, "ice"), owner=RED)

        def outcome(game_rules):
            base = one_opponent_state(attacker, defender, game_rules=game_rules)
            board = list(base.board)
            board[8] = ice_on_board
            hands = (base.hands[RED][:4], base.hands[BLUE])
            game_state = state.GameState(
                board=tuple(board), hands=hands, to_move=RED, rules=game_rules
            )
            return engine.apply_move(game_state, actions.Move(0, 0)).board[1].owner

        assert outcome(rules.Rules()) == BLUE
        assert outcome(rules.Rules(ascension=True)) == RED
        assert outcome(rules.Rules(descension=True)) == BLUE

    def test_order_rule_only_first_card(self):
        game_state = one_opponent_state(plain_card(1), plain_card(2), game_rules=rules.Rules(order=True))
        legal = engine.legal_moves(game_state)
        assert {move.hand_index for move in legal} == {0}
        assert len(legal) == rules.BOARD_CELLS - 1
        with pytest.raises(IllegalMoveError, match="Order rule"):
            engine.apply_move(game_state, actions.Move(hand_index=2, cell=0))

    def test_order_rule_for_one_color(self):
        game_rules = rules.Rules(order=True, order_color=BLUE)
        game_state = one_opponent_state(plain_card(1), plain_card(2), game_rules=game_rules)
        # RED is free to pick any card
        assert {move.hand_index for move in engine.legal_moves(game_state)} == set(range(5))
        after = engine.apply_move(game_state, actions.Move(hand_index=3, cell=0))
        assert after.to_move == BLUE
        assert {move.hand_index for move in engine.legal_moves(after)} == {0}
        with pytest.raises(IllegalMoveError, match="Order rule"):
            engine.apply_move(after, actions.Move(hand_index=1, cell=2))


def test_captures_are_not_chained():
    # BLUE's card at 1 would beat BLUE's card at 2 if captures cascaded
    board = [None] * rules.BOARD_CELLS
    board[1] = state.Placed(card=make_card(2, 1, 1, 1, 10), owner=BLUE)
    board[2] = state.Placed(card=plain_card(3, 1), owner=BLUE)
    board[4] = state.Placed(card=plain_card(4, 1), owner=BLUE)
    red_hand = (make_card(1, 1, 1, 1, 9),) + tuple(plain_card(10 + i, 1) for i in range(3))
    blue_hand = tuple(plain_card(20 + i, 1) for i in range(3))
    game_state = state.GameState(board=tuple(board), hands=(red_hand, blue_hand), to_move=RED)

    after = engine.apply_move(game_state, actions.Move(hand_index=0, cell=0))

    assert after.board[1].owner == RED
    assert after.board[2].owner == BLUE
    assert after.board[4].owner == BLUE
    assert engine.captures_for(game_state, actions.Move(0, 0)) == (1,)


def test_multiple_neighbours_flip_at_once(endgame_state):
    move = actions.Move(hand_index=0, cell=4)
    assert sorted(engine.captures_for(endgame_state, move)) == [1, 3, 7]
    after = engine.apply_move(endgame_state, move)
    assert engine.score(after) == (8, 1)


def test_own_cards_are_never_flipped():
    board = [None] * rules.BOARD_CELLS
    board[1] = state.Placed(card=plain_card(2, 1), owner=RED)
    red_hand = (plain_card(1, 9),) + tuple(plain_card(10 + i, 1) for i in range(3))
    blue_hand = tuple(plain_card(20 + i, 1) for i in range(5))
    game_state = state.GameState(board=tuple(board), hands=(red_hand, blue_hand), to_move=BLUE)
    game_state = engine.apply_move(game_state, actions.Move(0, 8))

    after = engine.apply_move(game_state, actions.Move(0, 0))
    assert after.board[1].owner == RED
    assert engine.captures_for(game_state, actions.Move(0, 0)) == ()


class TestMoves:
    def test_legal_moves_cover_cells_and_cards(self, endgame_state):
        assert engine.legal_moves(endgame_state) == (actions.Move(hand_index=0, cell=4),)

    def test_legal_moves_ordered_by_cell_then_card(self):
        hand = tuple(plain_card(i) for i in range(rules.HAND_SIZE))
        game_state = state.initial_state(hand, hand)
        legal = engine.legal_moves(game_state)
        assert len(legal) == rules.BOARD_CELLS * rules.HAND_SIZE
        assert legal[:3] == (actions.Move(0, 0), actions.Move(1, 0), actions.Move(2, 0))
        assert legal[-1] == actions.Move(4, 8)

    def test_apply_move_does_not_modify_input(self, endgame_state):
        snapshot = state.GameState(
            board=endgame_state.board,
            hands=endgame_state.hands,
            to_move=endgame_state.to_move,
        )
        after = engine.apply_move(endgame_state, actions.Move(0, 4))
        assert endgame_state == snapshot
        assert after is not endgame_state
        assert endgame_state.board[4] is None

    def test_apply_move_passes_turn_and_spends_card(self):
        hand = tuple(plain_card(i, i + 1) for i in range(rules.HAND_SIZE))
        game_state = state.initial_state(hand, hand)
        after = engine.apply_move(game_state, actions.Move(hand_index=2, cell=4))
        assert after.to_move == BLUE
        assert after.hands[RED] == hand[:2] + hand[3:]
        assert after.board[4] == state.Placed(card=hand[2], owner=RED)

    def test_occupied_cell_rejected(self, endgame_state):
        with pytest.raises(IllegalMoveError, match="occupied"):
            engine.apply_move(endgame_state, actions.Move(0, 0))

    def test_missing_card_rejected(self, endgame_state):
        with pytest.raises(IllegalMoveError, match="Hand index"):
            engine.apply_move(endgame_state, actions.Move(3, 4))

    def test_cell_out_of_range_rejected(self, endgame_state):
        with pytest.raises(IllegalMoveError, match="out of range"):
            engine.apply_move(endgame_state, actions.Move(0, 9))

    def test_no_moves_on_full_board(self, endgame_state):
        final = engine.apply_move(endgame_state, actions.Move(0, 4))
        assert engine.is_terminal(final)
        with pytest.raises(InvalidStateError):
            engine.legal_moves(final)


class TestScoring:
    def test_terminal_value_is_from_player_to_move(self, endgame_state):
        final = engine.apply_move(endgame_state, actions.Move(0, 4))
        assert final.to_move == BLUE
        assert engine.terminal_value(final) == -7
        assert engine.margin(final, RED) == 7

    def test_unplayed_card_does_not_count(self, endgame_state):
        final = engine.apply_move(endgame_state, actions.Move(0, 4))
        assert len(final.hands[BLUE]) == 1
        assert sum(engine.score(final)) == rules.BOARD_CELLS
