import numpy as np
import pytest

from builders import make_card, plain_card, random_position
from triadsolver import actions, engine, formatting, rules, simulate, state
from triadsolver.agents import (
    CaptureWeightedAgent,
    FirstLegalAgent,
    GreedyAgent,
    RandomAgent,
    capture_counts,
    ensure_legal,
)

RED, BLUE = rules.Color.RED, rules.Color.BLUE


def capture_choice_state():
    """RED to move next to a weak BLUE card at cell 1; only placements at 0, 2 or 4 capture it."""
    board = [None] * rules.BOARD_CELLS
    board[1] = state.Placed(card=plain_card(2, 1), owner=BLUE)
    red_hand = (plain_card(1, 1), plain_card(3, 9)) + tuple(plain_card(10 + i, 1) for i in range(3))
    blue_hand = tuple(plain_card(20 + i, 1) for i in range(4))
    return state.GameState(board=tuple(board), hands=(red_hand, blue_hand), to_move=RED)


def test_first_legal_agent_is_deterministic():
    game_state = random_position(0, 6)
    legal = engine.legal_moves(game_state)
    assert FirstLegalAgent()(game_state, legal) == legal[0]


def test_random_agent_reproducible_with_seed():
    game_state = random_position(1, 7)
    legal = engine.legal_moves(game_state)
    picks_a = [RandomAgent(seed=5).select_action(game_state, legal) for _ in range(3)]
    picks_b = [RandomAgent(seed=5).select_action(game_state, legal) for _ in range(3)]
    assert picks_a == picks_b
    assert all(move in legal for move in picks_a)


def test_random_agent_shares_generator():
    rng = np.random.default_rng(0)
    agent = RandomAgent(rng=rng)
    game_state = random_position(2, 7)
    legal = engine.legal_moves(game_state)
    agent(game_state, legal)
    expected_next = np.random.default_rng(0)
    expected_next.integers(len(legal))
    assert rng.bit_generator.state == expected_next.bit_generator.state


def test_capture_counts():
    game_state = capture_choice_state()
    legal = engine.legal_moves(game_state)
    counts = capture_counts(game_state, legal)
    assert counts.shape == (len(legal),)
    capturing = {move for move, count in zip(legal, counts) if count}
    assert {move.cell for move in capturing} == {0, 2, 4}
    assert {move.hand_index for move in capturing} == {1}


def test_greedy_agent_prefers_captures():
    game_state = capture_choice_state()
    move = GreedyAgent().select_action(game_state, engine.legal_moves(game_state))
    assert move == actions.Move(hand_index=1, cell=0)


def test_capture_weighted_agent():
    game_state = capture_choice_state()
    legal = engine.legal_moves(game_state)
    agent = CaptureWeightedAgent(weight=1000.0, seed=3)
    picks = [agent.select_action(game_state, legal) for _ in range(20)]
    assert sum(1 for move in picks if engine.captures_for(game_state, move)) >= 15
    with pytest.raises(ValueError):
        CaptureWeightedAgent(weight=-1.0)


def test_ensure_legal():
    game_state = random_position(3, 6)
    legal = engine.legal_moves(game_state)
    assert ensure_legal(legal[0], legal) == legal[0]
    with pytest.raises(ValueError, match="Illegal move"):
        ensure_legal(actions.Move(0, 99), legal)


class TestSimulate:
    def test_runs_to_full_board(self):
        start = random_position(4, rules.BOARD_CELLS)
        games = list(simulate.run(simulate.SimulationConfig(start=start, games=2)))
        assert len(games) == 2
        assert games[0] == games[1]
        assert all(engine.is_terminal(game) for game in games)
        assert sum(engine.score(games[0])) == rules.BOARD_CELLS

    def test_rejects_zero_games(self):
        with pytest.raises(ValueError):
            next(simulate.run(simulate.SimulationConfig(start=random_position(0, 5), games=0)))

    def test_rejects_illegal_agent_moves(self):
        start = random_position(5, 5)
        rogue = lambda game_state, legal: actions.Move(0, 99)  # noqa: E731
        with pytest.raises(ValueError, match="illegal move"):
            simulate.play_game(start, (rogue, rogue))

    def test_play_game_asks_the_player_to_move(self):
        start = random_position(6, 4)
        seen = []

        def recorder(color):
            def agent(game_state, legal):
                seen.append((color, game_state.to_move))
                return legal[0]
            return agent

        simulate.play_game(start, (recorder(RED), recorder(BLUE)))
        assert len(seen) == 4
        assert all(color == to_move for color, to_move in seen)


class TestFormatting:
    def test_card_label(self):
        card = make_card(12, 5, 3, 10, 2, "fire")
        assert formatting.card_label(card) == "#12 [5 3 A 2] fire"
        assert formatting.card_list([plain_card(1, 4)]) == "#1 [4 4 4 4]"

    def test_move_label(self):
        game_state = capture_choice_state()
        label = formatting.move_label(game_state, actions.Move(1, 0))
        assert label == "RED plays #3 [9 9 9 9] at cell 0"

    def test_render_board(self):
        game_state = capture_choice_state()
        text = formatting.render_board(game_state)
        lines = text.splitlines()
        assert len(lines) == 3 * 4 + 1 + 1
        assert " 1 B 1 " in lines[2]
        assert lines[-1] == "to move: RED  hands: RED 5 / BLUE 4"
