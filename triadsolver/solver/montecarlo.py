"""Monte Carlo tie-break among root moves of equal exact value.

Exact search often leaves several moves with the same value. Each tied move
is applied and played out many times with both sides moving by a playout
policy (uniform random by default). A playout scores the solver's final
margin; the move with the best mean margin wins, and equal means go to the
move listed first in the tie set.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from .. import actions, engine, rules, simulate, state
from ..agents.base import Agent
from ..agents.greedy import CaptureWeightedAgent
from ..agents.random_agent import RandomAgent
from .cancel import CancelToken, worker_token
from .parallel import run_in_workers

logger = logging.getLogger(__name__)


def make_policy(name: str, rng: np.random.Generator, capture_weight: float = 1.0) -> Agent:
    """Build the agent both sides use during playouts."""
    if name == "uniform":
        return RandomAgent(rng=rng)
    if name == "capture_weighted":
        return CaptureWeightedAgent(weight=capture_weight, rng=rng)
    raise ValueError(f"Unknown playout policy: {name!r}")


@dataclass(frozen=True)
class CandidateScore:
    """Playout statistics for one tied root move."""
    move: actions.Move
    mean: float
    std: float
    samples: int


@dataclass(frozen=True)
class TieBreakResult:
    """Chosen move, its position in the tie set, and the per-candidate scores."""
    move: actions.Move
    index: int
    scores: tuple[CandidateScore, ...] = ()


def run_playouts(
    game_state: state.GameState,
    perspective: rules.Color,
    samples: int,
    rng: np.random.Generator,
    *,
    policy: str = "uniform",
    capture_weight: float = 1.0,
    cancel: CancelToken | None = None,
) -> np.ndarray:
    """Play ``samples`` games to the end and return ``perspective``'s final margins."""
    agent = make_policy(policy, rng, capture_weight)
    agents = (agent, agent)
    outcomes = np.empty(samples, dtype=np.int64)
    for i in range(samples):
        final = simulate.play_game(game_state, agents)
        outcomes[i] = engine.margin(final, perspective)
        if cancel is not None:
            cancel.check()
    return outcomes


def _candidate_worker(
    child: state.GameState,
    perspective: rules.Color,
    samples: int,
    seed_seq: np.random.SeedSequence,
    policy: str,
    capture_weight: float,
    deadline: float | None,
) -> np.ndarray:
    return run_playouts(
        child,
        perspective,
        samples,
        np.random.default_rng(seed_seq),
        policy=policy,
        capture_weight=capture_weight,
        cancel=worker_token(deadline),
    )


def break_ties(
    game_state: state.GameState,
    tie_set: Sequence[actions.Move],
    *,
    samples: int,
    seed: int | None = None,
    policy: str = "uniform",
    capture_weight: float = 1.0,
    workers: int = 1,
    cancel: CancelToken | None = None,
) -> TieBreakResult:
    """Pick one move from ``tie_set`` by mean playout margin.

    Each candidate draws from its own stream spawned from ``SeedSequence(seed)``,
    so the pick depends only on the seed, never on ``workers``.

    Args:
        game_state: Root position; its player to move is the solver's color
        tie_set: Tied root moves in discovery order
        samples: Playouts per candidate (K); zero returns the first candidate
        seed: Seed for reproducible playouts
        policy: Playout policy name ("uniform" or "capture_weighted")
        capture_weight: Weight per capture for the capture-weighted policy
        workers: Worker processes; candidates are distributed across them
        cancel: Optional cancellation token, polled after each playout (and
            relayed to worker processes when ``workers > 1``)

    Returns:
        TieBreakResult for the chosen move
    """
    if not tie_set:
        raise ValueError("break_ties requires at least one candidate move")
    if len(tie_set) == 1 or samples == 0:
        return TieBreakResult(tie_set[0], 0)

    start = time.perf_counter()
    perspective = game_state.to_move
    children = [engine.apply_move(game_state, move) for move in tie_set]
    streams = np.random.SeedSequence(seed).spawn(len(tie_set))

    if workers > 1:
        deadline = cancel.deadline if cancel is not None else None
        outcomes: list[np.ndarray | None] = [None] * len(tie_set)
        jobs = [
            (child, perspective, samples, stream, policy, capture_weight, deadline)
            for child, stream in zip(children, streams)
        ]
        run_in_workers(_candidate_worker, jobs, workers, cancel, outcomes)
    else:
        outcomes = [
            run_playouts(
                child,
                perspective,
                samples,
                np.random.default_rng(stream),
                policy=policy,
                capture_weight=capture_weight,
                cancel=cancel,
            )
            for child, stream in zip(children, streams)
        ]

    scores = tuple(
        CandidateScore(move=move, mean=float(np.mean(result)), std=float(np.std(result)), samples=len(result))
        for move, result in zip(tie_set, outcomes)
    )

    best_index = 0
    for idx, score in enumerate(scores):
        if score.mean > scores[best_index].mean:
            best_index = idx

    logger.debug(
        "Tie-break over %d moves x %d playouts (%s): picked %s mean=%.3f (%.1f ms)",
        len(tie_set),
        samples,
        policy,
        tie_set[best_index],
        scores[best_index].mean,
        (time.perf_counter() - start) * 1000.0,
    )
    return TieBreakResult(tie_set[best_index], best_index, scores)


__all__ = [
    "CandidateScore",
    "TieBreakResult",
    "break_ties",
    "make_policy",
    "run_playouts",
]
