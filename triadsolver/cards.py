"""Card definitions and the read-only card catalog consumed by the solver."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from . import rules
from .exceptions import UnknownCardError


@dataclass(frozen=True)
class Card:
    """A playable card: four edge values (north, south, west, east) and an optional element."""

    card_id: int
    values: tuple[int, int, int, int]
    element: str | None = None

    def __post_init__(self) -> None:
        if len(self.values) != 4:
            raise ValueError(f"Card {self.card_id} must have exactly four values")
        for value in self.values:
            if not (rules.MIN_VALUE <= value <= rules.MAX_VALUE):
                raise ValueError(
                    f"Card {self.card_id} value {value} outside [{rules.MIN_VALUE}, {rules.MAX_VALUE}]"
                )

    @classmethod
    def from_edges(
        cls,
        card_id: int,
        north: int,
        south: int,
        west: int,
        east: int,
        element: str | None = None,
    ) -> Card:
        return cls(card_id, (north, south, west, east), element)

    def value(self, direction: rules.Direction) -> int:
        return self.values[direction]


class CardCatalog(Mapping[int, Card]):
    """Immutable mapping from card id to Card.

    The catalog is a snapshot of already-resolved card data. It is handed to
    state construction and never consulted by the search itself.
    """

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: dict[int, Card] = {}
        for card in cards:
            if card.card_id in self._cards:
                raise ValueError(f"Duplicate card id {card.card_id}")
            self._cards[card.card_id] = card

    def __getitem__(self, card_id: int) -> Card:
        try:
            return self._cards[card_id]
        except KeyError:
            raise UnknownCardError(card_id) from None

    def __iter__(self) -> Iterator[int]:
        return iter(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"CardCatalog({len(self._cards)} cards)"

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> CardCatalog:
        """Build a catalog from mappings with ``id``, ``values`` (or the four edge keys) and ``element``."""
        cards = []
        for record in records:
            if "values" in record:
                values = tuple(int(v) for v in record["values"])
            else:
                values = tuple(int(record[key]) for key in ("north", "south", "west", "east"))
            element = record.get("element") or None
            cards.append(Card(int(record["id"]), values, element))
        return cls(cards)

    @classmethod
    def from_yaml(cls, path: str | Path) -> CardCatalog:
        """Load a catalog snapshot from a YAML file holding a list of card records."""
        import yaml

        with open(path) as f:
            data = yaml.safe_load(f)

        if isinstance(data, Mapping):
            data = data.get("cards", [])
        return cls.from_records(data or [])


__all__ = ["Card", "CardCatalog"]
