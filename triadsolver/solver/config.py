"""Configuration for the solver facade."""

from __future__ import annotations

import dataclasses
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from ..exceptions import InvalidConfigError

PLAYOUT_POLICIES = ("uniform", "capture_weighted")


@dataclass
class SolverConfig:
    """Solver settings.

    Attributes:
        playouts: Random playouts per tied root move (K). Zero picks the first tied move.
        seed: Seed for the playout streams. None draws fresh entropy, which the
            result reports so the run can be reproduced.
        playout_policy: How both sides move during playouts: "uniform" or
            "capture_weighted".
        capture_weight: Extra weight per immediate capture for "capture_weighted".
        workers: Worker processes for root search and playouts (1 = in-process).
        use_transposition: Cache positions during search.
        tt_size: Maximum transposition table entries.
        order_moves: Try capturing moves first during search.
        time_limit_ms: Cancel the solve after this many milliseconds (None = no limit).
    """

    playouts: int = 1000
    seed: int | None = None
    playout_policy: str = "uniform"
    capture_weight: float = 1.0
    workers: int = 1
    use_transposition: bool = True
    tt_size: int = 1_000_000
    order_moves: bool = True
    time_limit_ms: int | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.playouts < 0:
            raise InvalidConfigError(f"playouts must be >= 0, got {self.playouts}")
        if self.playout_policy not in PLAYOUT_POLICIES:
            raise InvalidConfigError(
                f"playout_policy must be one of {PLAYOUT_POLICIES}, got {self.playout_policy!r}"
            )
        if self.capture_weight < 0:
            raise InvalidConfigError(f"capture_weight must be >= 0, got {self.capture_weight}")
        if self.workers < 1:
            raise InvalidConfigError(f"workers must be >= 1, got {self.workers}")
        if self.tt_size < 1:
            raise InvalidConfigError(f"tt_size must be >= 1, got {self.tt_size}")
        if self.time_limit_ms is not None and self.time_limit_ms <= 0:
            raise InvalidConfigError(f"time_limit_ms must be positive, got {self.time_limit_ms}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SolverConfig:
        """Create from dictionary, ignoring unknown keys."""
        data = dict(data)

        # Accept a nested "solver" section as written in larger config files
        if "solver" in data and isinstance(data["solver"], dict):
            data.update(data.pop("solver"))

        known_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}

        return cls(**filtered_data)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SolverConfig:
        """Load configuration from YAML file."""
        import yaml

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})


__all__ = ["PLAYOUT_POLICIES", "SolverConfig"]
