"""Custom exception classes for the Triple Triad solver."""

from __future__ import annotations


class TriadError(Exception):
    """Base exception for all solver errors."""


class InvalidStateError(TriadError):
    """Raised when a game state is malformed or cannot be solved (terminal, empty hand)."""


class IllegalMoveError(TriadError):
    """Raised when a move targets an occupied cell or a card the mover does not hold."""


class CancellationError(TriadError):
    """Raised when a solve request is cancelled before the search completed.

    ``partial`` holds a result marked ``partial=True`` with the best root move
    proven so far, or None when no root move had been fully evaluated.
    """

    def __init__(self, message: str = "Search cancelled", partial=None) -> None:
        self.partial = partial
        super().__init__(message)


class UnknownCardError(TriadError, KeyError):
    """Raised when a card id is not present in the catalog."""

    def __init__(self, card_id: int) -> None:
        self.card_id = card_id
        super().__init__(f"Unknown card id: {card_id}")

    def __str__(self) -> str:
        return self.args[0]


class UnsupportedRuleError(TriadError):
    """Raised when a rule is named that the engine does not implement."""

    def __init__(self, rule: str) -> None:
        self.rule = rule
        super().__init__(f"Unsupported rule: {rule}")


class InvalidConfigError(TriadError, ValueError):
    """Raised when solver configuration values are out of range."""


__all__ = [
    "CancellationError",
    "IllegalMoveError",
    "InvalidConfigError",
    "InvalidStateError",
    "TriadError",
    "UnknownCardError",
    "UnsupportedRuleError",
]
