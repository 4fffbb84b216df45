"""Agent implementations used for playouts and full-game simulation."""

from .base import Agent, AgentFn, ensure_legal
from .first import FirstLegalAgent
from .greedy import CaptureWeightedAgent, GreedyAgent, capture_counts
from .random_agent import RandomAgent

__all__ = [
    "Agent",
    "AgentFn",
    "CaptureWeightedAgent",
    "FirstLegalAgent",
    "GreedyAgent",
    "RandomAgent",
    "capture_counts",
    "ensure_legal",
]
