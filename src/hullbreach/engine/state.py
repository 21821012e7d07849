from __future__ import annotations

import random
from dataclasses import dataclass, field

from .actions import Action, AwaitAction
from .registry import EntityRegistry
from .types import CardCatalog, CardId, EntityId

Event = dict[str, object]


@dataclass(frozen=True)
class GameConfig:
    begin_turn_draw: int = 4


@dataclass
class GameState:
    cards: CardCatalog
    config: GameConfig
    seed: int
    rng: random.Random
    draw: list[CardId]
    hand: list[CardId] = field(default_factory=list)
    discard: list[CardId] = field(default_factory=list)
    action: Action = field(default_factory=AwaitAction)
    entities: EntityRegistry = field(default_factory=EntityRegistry)
    player_id: EntityId | None = None
    enemy_id: EntityId | None = None
    action_log: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    def live_ids(self) -> tuple[EntityId, ...]:
        return self.entities.live_ids()

    def opponents(self) -> list[EntityId]:
        return [eid for eid in self.entities.live_ids() if eid != self.player_id]
