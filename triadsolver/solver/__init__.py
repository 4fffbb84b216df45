"""Exact solver for Triple Triad positions.

Negamax with alpha-beta pruning finds the exact value and every root move
that achieves it; Monte Carlo playouts break ties between those moves.
"""

from .agent import SolverAgent
from .cancel import CancelToken
from .config import PLAYOUT_POLICIES, SolverConfig
from .facade import SolveResult, Solver, check_solvable, solve
from .montecarlo import CandidateScore, TieBreakResult, break_ties, make_policy, run_playouts
from .negamax import (
    RootAnalysis,
    SearchContext,
    SearchStats,
    brute_force_value,
    evaluate_move,
    order_moves,
    search_root,
    value,
)
from .parallel import search_root_parallel
from .transposition import TranspositionTable, TTEntry, TTFlag

__all__ = [
    "PLAYOUT_POLICIES",
    "CancelToken",
    "CandidateScore",
    "RootAnalysis",
    "SearchContext",
    "SearchStats",
    "SolveResult",
    "Solver",
    "SolverAgent",
    "SolverConfig",
    "TTEntry",
    "TTFlag",
    "TieBreakResult",
    "TranspositionTable",
    "break_ties",
    "brute_force_value",
    "check_solvable",
    "evaluate_move",
    "make_policy",
    "order_moves",
    "run_playouts",
    "search_root",
    "search_root_parallel",
    "solve",
    "value",
]
