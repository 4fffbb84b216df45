"""Core rule constants, board geometry and rule flags for the Triple Triad solver."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import IntEnum

from .exceptions import UnsupportedRuleError

BOARD_CELLS = 9
BOARD_WIDTH = 3
HAND_SIZE = 5
PLAYER_COUNT = 2

MIN_VALUE = 1
MAX_VALUE = 10  # displayed as "A"


class Color(IntEnum):
    """The two sides of a match. The value doubles as an index into per-player tuples."""

    RED = 0
    BLUE = 1

    def other(self) -> Color:
        return Color.BLUE if self is Color.RED else Color.RED


class Direction(IntEnum):
    """Card edges, in the order card values are stored."""

    NORTH = 0
    SOUTH = 1
    WEST = 2
    EAST = 3

    def opposite(self) -> Direction:
        return _OPPOSITE[self]


_OPPOSITE = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.WEST: Direction.EAST,
    Direction.EAST: Direction.WEST,
}


def _build_neighbours() -> tuple[tuple[tuple[Direction, int], ...], ...]:
    table = []
    for cell in range(BOARD_CELLS):
        row, col = divmod(cell, BOARD_WIDTH)
        entries = []
        if row > 0:
            entries.append((Direction.NORTH, cell - BOARD_WIDTH))
        if row < BOARD_WIDTH - 1:
            entries.append((Direction.SOUTH, cell + BOARD_WIDTH))
        if col > 0:
            entries.append((Direction.WEST, cell - 1))
        if col < BOARD_WIDTH - 1:
            entries.append((Direction.EAST, cell + 1))
        table.append(tuple(entries))
    return tuple(table)


# NEIGHBOURS[cell] lists (direction from cell towards neighbour, neighbour cell).
NEIGHBOURS = _build_neighbours()


# Rule names that exist in the game but change capture into a cascade or move
# cards between hands. They parse, but the engine refuses to play under them.
UNSUPPORTED_RULES = frozenset({"same", "plus", "combo", "swap", "chaos", "random"})


@dataclass(frozen=True)
class Rules:
    """Active rule flags for a match.

    elemental: a card whose element matches its cell's element gets +1 on every edge.
    reverse: lower values flip higher ones.
    fallen_ace: a 1 beats an A (10); under reverse, an A beats a 1.
    ascension / descension: each card of an element already on the board raises
        (or lowers) the values of cards of that element by one.
    order: cards must be played in hand order.
    order_color: restricts the order rule to one side; None applies it to both.
    """

    elemental: bool = False
    reverse: bool = False
    fallen_ace: bool = False
    ascension: bool = False
    descension: bool = False
    order: bool = False
    order_color: Color | None = None

    @classmethod
    def from_names(cls, names) -> Rules:
        """Build a rule set from rule names such as ``"elemental"`` or ``"Fallen Ace"``."""
        known = _flag_names()
        flags: dict[str, bool] = {}
        for raw in names:
            name = str(raw).strip().lower().replace(" ", "_").replace("-", "_")
            if not name:
                continue
            if name in UNSUPPORTED_RULES or name not in known:
                raise UnsupportedRuleError(name)
            flags[name] = True
        return cls(**flags)

    def names(self) -> tuple[str, ...]:
        return tuple(name for name in _flag_names() if getattr(self, name))

    def order_applies(self, color: Color) -> bool:
        """True when ``color`` must play the first card in its hand."""
        return self.order and (self.order_color is None or self.order_color == color)


def _flag_names() -> tuple[str, ...]:
    return tuple(f.name for f in fields(Rules) if isinstance(f.default, bool))


__all__ = [
    "BOARD_CELLS",
    "BOARD_WIDTH",
    "HAND_SIZE",
    "MAX_VALUE",
    "MIN_VALUE",
    "NEIGHBOURS",
    "PLAYER_COUNT",
    "UNSUPPORTED_RULES",
    "Color",
    "Direction",
    "Rules",
]
