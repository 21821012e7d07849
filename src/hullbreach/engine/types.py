from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

from .errors import LookupFailure

Attribute = Literal["hull", "shields", "weaponry", "power"]
ATTRIBUTES: tuple[Attribute, ...] = ("hull", "shields", "weaponry", "power")

Role = Literal["player", "enemy"]

TargetPolicy = Literal["self", "single_opponent"]

EffectType = Literal["increase", "decrease"]

EntityId = int
CardId = str

# Keys are only present once set; a missing key reads as 0.
State = dict[Attribute, int]
Delta = dict[Attribute, int]


@dataclass(frozen=True)
class IncreaseEffect:
    type: Literal["increase"]
    attribute: Attribute
    amount: int


@dataclass(frozen=True)
class DecreaseEffect:
    type: Literal["decrease"]
    attribute: Attribute
    amount: int


Effect = IncreaseEffect | DecreaseEffect


@dataclass(frozen=True)
class CardDefinition:
    id: CardId
    name: str
    target: TargetPolicy
    effects: tuple[Effect, ...]
    rules_text: str = ""


@dataclass(frozen=True)
class CardCatalog:
    """Immutable card catalog owned by a single game."""

    cards: dict[CardId, CardDefinition]

    def get(self, card_id: CardId) -> CardDefinition:
        card = self.cards.get(card_id)
        if card is None:
            raise LookupFailure(f"Unknown card: {card_id}")
        return card

    def __contains__(self, card_id: object) -> bool:
        return card_id in self.cards

    def all_ids(self) -> Sequence[CardId]:
        return list(self.cards.keys())


@dataclass
class Entity:
    name: str
    role: Role
    state: State = field(default_factory=dict)
    id: EntityId | None = None

    def get(self, attribute: Attribute) -> int:
        return self.state.get(attribute, 0)
