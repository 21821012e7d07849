"""Client-side selection flow: pick a card, pick a target, confirm.

Each state is an immutable value and each transition returns a new one.
Only `Confirm` carries a chosen target, so a play can never be built
before a target exists.

    Combat --select_card--> TargetSelect --choose_target--> Confirm
    Combat --select_card (self card)----------------------> Confirm
    TargetSelect / Confirm --cancel--> Combat
    Confirm --confirm--> (Combat, PlayCardAction)
"""

from __future__ import annotations

from dataclasses import dataclass

from .actions import PlayCardAction
from .errors import InvalidIndex, InvalidTarget
from .game import valid_targets
from .state import GameState
from .types import EntityId


@dataclass(frozen=True)
class Combat:
    enemy_id: EntityId | None
    card_index: int | None = None


@dataclass(frozen=True)
class TargetSelect:
    enemy_id: EntityId | None
    card_index: int
    candidates: tuple[EntityId, ...]


@dataclass(frozen=True)
class Confirm:
    enemy_id: EntityId | None
    card_index: int
    target_id: EntityId


WorkflowState = Combat | TargetSelect | Confirm


def start(enemy_id: EntityId | None) -> Combat:
    return Combat(enemy_id=enemy_id, card_index=None)


def select_card(combat: Combat, state: GameState, hand_index: int) -> TargetSelect | Confirm:
    if hand_index < 0 or hand_index >= len(state.hand):
        raise InvalidIndex(f"Invalid hand index: {hand_index}")
    card_def = state.cards.get(state.hand[hand_index])
    targets = valid_targets(state, card_def.id)
    if not targets:
        raise InvalidTarget(f"No legal targets for {card_def.name}.")

    if card_def.target == "self":
        return Confirm(enemy_id=combat.enemy_id, card_index=hand_index, target_id=targets[0])
    return TargetSelect(enemy_id=combat.enemy_id, card_index=hand_index, candidates=tuple(targets))


def choose_target(select: TargetSelect, target_id: EntityId) -> Confirm:
    if target_id not in select.candidates:
        raise InvalidTarget(f"Not a legal target: {target_id}")
    return Confirm(enemy_id=select.enemy_id, card_index=select.card_index, target_id=target_id)


def confirm(resolved: Confirm) -> tuple[Combat, PlayCardAction]:
    action = PlayCardAction(target_id=resolved.target_id, hand_index=resolved.card_index)
    return Combat(enemy_id=resolved.enemy_id, card_index=None), action


def cancel(current: WorkflowState) -> Combat:
    return Combat(enemy_id=current.enemy_id, card_index=None)
