"""Exact negamax search with alpha-beta pruning.

Every line of play is followed to a full board, so values are exact game
outcomes: owned cells of the player to move minus owned cells of the
opponent. There is no depth limit and no heuristic evaluation.

Root analysis returns every move that reaches the best value. A single
alpha-beta pass only bounds the moves it prunes, so after the first pass
finds the value V each root move is re-searched with the null window
(V - 1, V); a move belongs to the tie set iff that search fails high.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from .. import actions, engine, state
from ..exceptions import CancellationError
from .cancel import CancelToken
from .transposition import TranspositionTable, TTFlag

logger = logging.getLogger(__name__)

# Larger than any reachable margin (|value| <= 9)
INF = 100


# =============================================================================
# Search bookkeeping
# =============================================================================

@dataclass
class SearchStats:
    """Statistics from search."""
    nodes: int = 0
    cutoffs: int = 0
    tt_hits: int = 0
    tt_stores: int = 0
    time_ms: float = 0.0

    def merge(self, other: SearchStats) -> None:
        self.nodes += other.nodes
        self.cutoffs += other.cutoffs
        self.tt_hits += other.tt_hits
        self.tt_stores += other.tt_stores


@dataclass
class SearchContext:
    """Per-search resources threaded through the recursion."""
    tt: TranspositionTable | None = None
    cancel: CancelToken | None = None
    order: bool = True
    stats: SearchStats = field(default_factory=SearchStats)

    def check(self) -> None:
        if self.cancel is not None:
            self.cancel.check()


@dataclass
class RootAnalysis:
    """Outcome of a root search.

    ``tie_set`` lists every root move achieving ``value``, in move generation
    order. When ``partial`` is True the search was interrupted: ``value`` and
    ``tie_set`` then describe only the moves evaluated so far.
    """
    value: int
    tie_set: tuple[actions.Move, ...]
    root_moves: tuple[actions.Move, ...]
    stats: SearchStats
    partial: bool = False


# =============================================================================
# Move Ordering
# =============================================================================

def order_moves(
    game_state: state.GameState,
    legal: tuple[actions.Move, ...],
    tt_best: actions.Move | None,
) -> list[actions.Move]:
    """Order moves to improve pruning: cached best move first, then most captures.

    The sort is stable, so equal moves keep generation order.
    """
    if len(legal) <= 1:
        return list(legal)

    def key(move: actions.Move) -> int:
        if tt_best is not None and move == tt_best:
            return -INF
        return -len(engine.captures_for(game_state, move))

    return sorted(legal, key=key)


# =============================================================================
# Negamax
# =============================================================================

def negamax(game_state: state.GameState, alpha: int, beta: int, ctx: SearchContext) -> int:
    """Fail-soft alpha-beta negamax.

    Returns the exact value when it lies strictly inside (alpha, beta); a value
    <= alpha is an upper bound and a value >= beta is a lower bound.
    """
    ctx.stats.nodes += 1

    if engine.is_terminal(game_state):
        return engine.terminal_value(game_state)

    tt_best = None
    if ctx.tt is not None:
        found, tt_value, tt_best = ctx.tt.probe(game_state, alpha, beta)
        if found:
            ctx.stats.tt_hits += 1
            return tt_value

    legal = engine.legal_moves(game_state)
    moves = order_moves(game_state, legal, tt_best) if ctx.order else legal

    alpha_orig = alpha
    best_value = -INF
    best_move = None

    for move in moves:
        score = -negamax(engine.apply_move(game_state, move), -beta, -alpha, ctx)
        ctx.check()

        if score > best_value:
            best_value = score
            best_move = move
        if best_value > alpha:
            alpha = best_value
        if alpha >= beta:
            ctx.stats.cutoffs += 1
            break

    if ctx.tt is not None:
        if best_value <= alpha_orig:
            flag = TTFlag.UPPER
        elif best_value >= beta:
            flag = TTFlag.LOWER
        else:
            flag = TTFlag.EXACT
        ctx.tt.store(game_state, best_value, flag, best_move)
        ctx.stats.tt_stores += 1

    return best_value


def brute_force_value(game_state: state.GameState) -> int:
    """Unpruned negamax over the whole tree. Slow; used as a reference."""
    if engine.is_terminal(game_state):
        return engine.terminal_value(game_state)
    return max(
        -brute_force_value(engine.apply_move(game_state, move))
        for move in engine.legal_moves(game_state)
    )


def evaluate_move(game_state: state.GameState, move: actions.Move, ctx: SearchContext) -> int:
    """Exact value of playing ``move``, from the mover's perspective."""
    return -negamax(engine.apply_move(game_state, move), -INF, INF, ctx)


def value(game_state: state.GameState, ctx: SearchContext | None = None) -> int:
    """Exact value of ``game_state`` for the player to move."""
    return negamax(game_state, -INF, INF, ctx or SearchContext())


# =============================================================================
# Root search with tie enumeration
# =============================================================================

def search_root(
    game_state: state.GameState,
    *,
    tt: TranspositionTable | None = None,
    cancel: CancelToken | None = None,
    order: bool = True,
) -> RootAnalysis:
    """Find the exact value of ``game_state`` and every root move achieving it.

    Args:
        game_state: Non-terminal position; the player to move must hold a card
        tt: Optional transposition table, reused across calls if supplied
        cancel: Optional cancellation token, polled after each evaluated child
        order: Whether to apply move ordering (never changes results)

    Returns:
        RootAnalysis with the value and the tie set in generation order

    Raises:
        CancellationError: if cancelled; ``partial`` carries a RootAnalysis
            marked partial with the best move proven so far (or None)
    """
    start = time.perf_counter()
    ctx = SearchContext(tt=tt, cancel=cancel, order=order)
    root_moves = engine.legal_moves(game_state)

    if len(root_moves) == 1:
        only = root_moves[0]
        try:
            best = evaluate_move(game_state, only, ctx)
        except CancellationError as exc:
            ctx.stats.time_ms = (time.perf_counter() - start) * 1000.0
            raise CancellationError(str(exc), partial=None) from exc
        ctx.stats.time_ms = (time.perf_counter() - start) * 1000.0
        return RootAnalysis(best, (only,), root_moves, ctx.stats)

    # Pass 1: full-window search for the value.
    tt_best = None
    if tt is not None:
        _, _, tt_best = tt.probe(game_state, -INF, INF)
    ordered = order_moves(game_state, root_moves, tt_best) if order else list(root_moves)

    alpha = -INF
    best_move: actions.Move | None = None
    try:
        for move in ordered:
            score = -negamax(engine.apply_move(game_state, move), -INF, -alpha, ctx)
            ctx.check()
            if score > alpha:
                alpha = score
                best_move = move
    except CancellationError as exc:
        ctx.stats.time_ms = (time.perf_counter() - start) * 1000.0
        partial = None
        if best_move is not None:
            partial = RootAnalysis(alpha, (best_move,), root_moves, ctx.stats, partial=True)
        raise CancellationError(str(exc), partial=partial) from exc

    best_value = alpha
    logger.debug("Root value %d found after %d nodes; confirming ties", best_value, ctx.stats.nodes)

    # Pass 2: null-window membership test for each root move.
    ties: list[actions.Move] = []
    try:
        for move in root_moves:
            if move == best_move:
                ties.append(move)
                continue
            score = -negamax(engine.apply_move(game_state, move), -best_value, -best_value + 1, ctx)
            ctx.check()
            if score >= best_value:
                ties.append(move)
    except CancellationError as exc:
        ctx.stats.time_ms = (time.perf_counter() - start) * 1000.0
        proven = tuple(ties) if best_move in ties else (best_move, *ties)
        partial = RootAnalysis(best_value, proven, root_moves, ctx.stats, partial=True)
        raise CancellationError(str(exc), partial=partial) from exc

    if tt is not None:
        tt.store(game_state, best_value, TTFlag.EXACT, best_move)

    ctx.stats.time_ms = (time.perf_counter() - start) * 1000.0
    logger.debug(
        "Root search: value=%d ties=%d/%d nodes=%d cutoffs=%d tt_hits=%d (%.1f ms)",
        best_value,
        len(ties),
        len(root_moves),
        ctx.stats.nodes,
        ctx.stats.cutoffs,
        ctx.stats.tt_hits,
        ctx.stats.time_ms,
    )
    return RootAnalysis(best_value, tuple(ties), root_moves, ctx.stats)


__all__ = [
    "INF",
    "RootAnalysis",
    "SearchContext",
    "SearchStats",
    "brute_force_value",
    "evaluate_move",
    "negamax",
    "order_moves",
    "search_root",
    "value",
]
