"""Game driver: play agents against each other from a given position."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from . import engine, state
from .agents.base import AgentFn
from .agents.first import FirstLegalAgent


@dataclass
class SimulationConfig:
    start: state.GameState
    games: int = 1
    agent_red: Optional[AgentFn] = None
    agent_blue: Optional[AgentFn] = None


def play_game(game: state.GameState, agents: Tuple[AgentFn, AgentFn]) -> state.GameState:
    """Play from ``game`` until the board is full, asking the agent of the player to move.

    ``agents`` is indexed by Color.
    """

    current = game
    while not engine.is_terminal(current):
        legal = engine.legal_moves(current)
        move = agents[current.to_move](current, legal)
        if move not in legal:
            raise ValueError(f"{current.to_move.name} agent returned an illegal move: {move}")
        current = engine.apply_move(current, move)
    return current


def run(config: SimulationConfig) -> Iterator[state.GameState]:
    """Play ``config.games`` games from the configured start position.

    Agents default to the first legal move when not supplied, so re-running
    the same configuration with deterministic agents yields identical games.
    """

    if config.games < 1:
        raise ValueError("Number of games must be at least 1")

    agents: Tuple[AgentFn, AgentFn] = (
        config.agent_red or FirstLegalAgent(),
        config.agent_blue or FirstLegalAgent(),
    )
    for _ in range(config.games):
        yield play_game(config.start, agents)


__all__ = [
    "SimulationConfig",
    "play_game",
    "run",
]
