"""Solver facade: exact search, then Monte Carlo tie-break when needed.

This is the single entry point for callers::

    result = solve(game_state, SolverConfig(playouts=2000, seed=7))
    result.move, result.value, result.tie_count
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

import numpy as np

from .. import actions, engine, state
from ..exceptions import CancellationError, InvalidStateError
from . import montecarlo, negamax, parallel
from .cancel import CancelToken
from .config import SolverConfig
from .negamax import RootAnalysis, SearchStats
from .transposition import TranspositionTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolveResult:
    """Answer to a solve request.

    Attributes:
        move: Recommended move.
        value: Exact value for the player to move (owned cells minus opponent's).
        tie_count: Number of root moves sharing ``value``.
        tie_set: Those moves, in discovery order.
        candidates: Playout statistics per tied move (empty when no tie-break ran).
        partial: True only on results attached to a CancellationError.
        seed: Seed entropy the playouts used, for reproducing the pick.
        stats: Search statistics.
    """

    move: actions.Move | None
    value: int
    tie_count: int
    tie_set: tuple[actions.Move, ...] = ()
    candidates: tuple[montecarlo.CandidateScore, ...] = ()
    partial: bool = False
    seed: int | None = None
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def used_tiebreak(self) -> bool:
        return bool(self.candidates)


def check_solvable(game_state: state.GameState) -> None:
    """Raise InvalidStateError unless the player to move has a move to make."""
    if engine.is_terminal(game_state):
        raise InvalidStateError("Cannot solve a finished game: every cell is occupied")
    if not game_state.hands[game_state.to_move]:
        raise InvalidStateError(f"{game_state.to_move.name} has no cards left to play")


class Solver:
    """Recommends moves using exact search plus Monte Carlo tie-breaking.

    A Solver keeps its transposition table between calls; cached entries hold
    exact game values, so reuse never changes an answer.
    """

    def __init__(self, config: SolverConfig | None = None) -> None:
        self.config = config or SolverConfig()
        self.config.validate()
        self._tt = TranspositionTable(self.config.tt_size) if self.config.use_transposition else None

    def solve(self, game_state: state.GameState, cancel: CancelToken | None = None) -> SolveResult:
        """Return the recommended move, its exact value and the tie-set size.

        Raises:
            InvalidStateError: if the game is over or the player to move has no cards
            CancellationError: if cancelled; ``partial`` holds a SolveResult
                marked partial, or None when nothing had been proven yet
        """
        check_solvable(game_state)
        config = self.config
        if cancel is None and config.time_limit_ms is not None:
            cancel = CancelToken.with_timeout(config.time_limit_ms)

        start = time.perf_counter()
        analysis = self._search(game_state, cancel)

        seed_seq = np.random.SeedSequence(config.seed)
        try:
            pick = montecarlo.break_ties(
                game_state,
                analysis.tie_set,
                samples=config.playouts,
                seed=seed_seq.entropy,
                policy=config.playout_policy,
                capture_weight=config.capture_weight,
                workers=config.workers,
                cancel=cancel,
            )
        except CancellationError as exc:
            partial = SolveResult(
                move=analysis.tie_set[0],
                value=analysis.value,
                tie_count=len(analysis.tie_set),
                tie_set=analysis.tie_set,
                partial=True,
                seed=seed_seq.entropy,
                stats=analysis.stats,
            )
            raise CancellationError("Tie-break cancelled; exact value is known", partial=partial) from exc

        result = SolveResult(
            move=pick.move,
            value=analysis.value,
            tie_count=len(analysis.tie_set),
            tie_set=analysis.tie_set,
            candidates=pick.scores,
            seed=seed_seq.entropy,
            stats=analysis.stats,
        )
        logger.info(
            "Solved %s to move: value=%d move=%s ties=%d nodes=%d (%.1f ms)",
            game_state.to_move.name,
            result.value,
            result.move,
            result.tie_count,
            analysis.stats.nodes,
            (time.perf_counter() - start) * 1000.0,
        )
        return result

    def _search(self, game_state: state.GameState, cancel: CancelToken | None) -> RootAnalysis:
        config = self.config
        try:
            if config.workers > 1:
                return parallel.search_root_parallel(
                    game_state,
                    config.workers,
                    use_tt=config.use_transposition,
                    tt_size=config.tt_size,
                    order=config.order_moves,
                    cancel=cancel,
                )
            return negamax.search_root(game_state, tt=self._tt, cancel=cancel, order=config.order_moves)
        except CancellationError as exc:
            partial = None
            if exc.partial is not None:
                found = exc.partial
                partial = SolveResult(
                    move=found.tie_set[0] if found.tie_set else None,
                    value=found.value,
                    tie_count=len(found.tie_set),
                    tie_set=found.tie_set,
                    partial=True,
                    stats=found.stats,
                )
            logger.info("Search cancelled before the exact value was proven")
            raise CancellationError("Search cancelled", partial=partial) from exc

    def clear_cache(self) -> None:
        """Clear the transposition table."""
        if self._tt is not None:
            self._tt.clear()


def solve(
    game_state: state.GameState,
    config: SolverConfig | None = None,
    cancel: CancelToken | None = None,
) -> SolveResult:
    """Solve ``game_state`` with a fresh Solver."""
    return Solver(config).solve(game_state, cancel=cancel)


__all__ = ["SolveResult", "Solver", "check_solvable", "solve"]
