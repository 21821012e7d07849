from __future__ import annotations

from dataclasses import dataclass

from .types import EntityId


@dataclass(frozen=True)
class AwaitAction:
    pass


@dataclass(frozen=True)
class DrawAction:
    pass


@dataclass(frozen=True)
class PlayCardAction:
    target_id: EntityId
    hand_index: int


@dataclass(frozen=True)
class BeginTurnAction:
    pass


@dataclass(frozen=True)
class EndTurnAction:
    pass


Action = AwaitAction | DrawAction | PlayCardAction | BeginTurnAction | EndTurnAction
