"""Triple Triad move solver.

Core game modules come first; the solver package builds on them.
"""

from . import actions, capture, cards, engine, exceptions, formatting, rules, state
from . import simulate, agents, solver
from .solver import SolveResult, Solver, SolverConfig, solve

__all__ = [
    "SolveResult",
    "Solver",
    "SolverConfig",
    "actions",
    "agents",
    "capture",
    "cards",
    "engine",
    "exceptions",
    "formatting",
    "rules",
    "simulate",
    "solve",
    "solver",
    "state",
]
