"""Root-parallel exact search using worker processes.

Each root move is shipped to a worker together with its own child state (the
state is immutable, so nothing is shared) and evaluated with a full window.
Every root move therefore gets an exact value, and the tie set falls out of
a simple reduction in the parent.
"""

from __future__ import annotations

import logging
import multiprocessing
import time
from collections.abc import Callable, Sequence
from concurrent.futures import FIRST_COMPLETED, ProcessPoolExecutor, wait
from typing import Any

from .. import actions, engine, state
from ..exceptions import CancellationError
from .cancel import CancelToken, install_worker_stop, worker_token
from .negamax import INF, RootAnalysis, SearchContext, SearchStats, negamax
from .transposition import TranspositionTable

logger = logging.getLogger(__name__)

# How often the parent wakes up to look at its cancel token
_POLL_SECONDS = 0.05


def run_in_workers(
    fn: Callable[..., Any],
    jobs: Sequence[tuple],
    workers: int,
    cancel: CancelToken | None,
    results: list,
) -> None:
    """Run ``fn(*job)`` for every job in worker processes, storing results by job index.

    The parent polls ``cancel`` while it waits. On cancellation, or when a
    worker raises, a shared stop event makes running workers give up at their
    next check, queued jobs are dropped, and the pool is joined before the
    exception propagates. ``results`` then holds whatever had finished.
    """
    context = multiprocessing.get_context()
    stop = context.Event()
    with ProcessPoolExecutor(
        max_workers=workers,
        mp_context=context,
        initializer=install_worker_stop,
        initargs=(stop,),
    ) as pool:
        pending = {pool.submit(fn, *job): idx for idx, job in enumerate(jobs)}
        try:
            while pending:
                done, _ = wait(pending, timeout=_POLL_SECONDS, return_when=FIRST_COMPLETED)
                for future in done:
                    idx = pending.pop(future)
                    results[idx] = future.result()
                if cancel is not None:
                    cancel.check()
        except BaseException:
            stop.set()
            pool.shutdown(wait=True, cancel_futures=True)
            raise


def _evaluate_child(
    child: state.GameState,
    use_tt: bool,
    tt_size: int,
    order: bool,
    deadline: float | None,
) -> tuple[int, SearchStats]:
    """Worker entry point: exact value of the root move leading to ``child``."""
    ctx = SearchContext(
        tt=TranspositionTable(tt_size) if use_tt else None,
        cancel=worker_token(deadline),
        order=order,
    )
    return -negamax(child, -INF, INF, ctx), ctx.stats


def search_root_parallel(
    game_state: state.GameState,
    workers: int,
    *,
    use_tt: bool = True,
    tt_size: int = 1_000_000,
    order: bool = True,
    cancel: CancelToken | None = None,
) -> RootAnalysis:
    """Parallel counterpart of ``negamax.search_root``.

    Workers see the token's deadline directly; an explicit ``cancel()`` is
    noticed by the parent within one poll interval and relayed to them.

    Raises:
        CancellationError: with ``partial`` set to the best fully evaluated
            root move so far (or None)
    """
    start = time.perf_counter()
    root_moves = engine.legal_moves(game_state)
    outcomes: list[tuple[int, SearchStats] | None] = [None] * len(root_moves)
    deadline = cancel.deadline if cancel is not None else None
    jobs = [
        (engine.apply_move(game_state, move), use_tt, tt_size, order, deadline)
        for move in root_moves
    ]

    logger.debug("Dispatching %d root moves to %d workers", len(root_moves), workers)
    try:
        run_in_workers(_evaluate_child, jobs, workers, cancel, outcomes)
    except CancellationError as exc:
        stats = _merged_stats(outcomes)
        stats.time_ms = (time.perf_counter() - start) * 1000.0
        raise CancellationError(str(exc), partial=_partial(root_moves, outcomes, stats)) from exc

    stats = _merged_stats(outcomes)
    values = [outcome[0] for outcome in outcomes]
    best_value = max(values)
    ties = tuple(move for move, v in zip(root_moves, values) if v == best_value)
    stats.time_ms = (time.perf_counter() - start) * 1000.0
    logger.debug(
        "Parallel root search: value=%d ties=%d/%d nodes=%d (%.1f ms)",
        best_value,
        len(ties),
        len(root_moves),
        stats.nodes,
        stats.time_ms,
    )
    return RootAnalysis(best_value, ties, root_moves, stats)


def _merged_stats(outcomes: list[tuple[int, SearchStats] | None]) -> SearchStats:
    stats = SearchStats()
    for outcome in outcomes:
        if outcome is not None:
            stats.merge(outcome[1])
    return stats


def _partial(
    root_moves: tuple[actions.Move, ...],
    outcomes: list[tuple[int, SearchStats] | None],
    stats: SearchStats,
) -> RootAnalysis | None:
    evaluated = [(outcome[0], move) for move, outcome in zip(root_moves, outcomes) if outcome is not None]
    if not evaluated:
        return None
    best_value = max(v for v, _ in evaluated)
    ties = tuple(move for v, move in evaluated if v == best_value)
    return RootAnalysis(best_value, ties, root_moves, stats, partial=True)


__all__ = ["run_in_workers", "search_root_parallel"]
