from __future__ import annotations

from collections.abc import Iterable

from .state import GameState
from .types import CardDefinition, DecreaseEffect, Delta, Effect, EntityId, IncreaseEffect


def compute_effect(effect: Effect, state: GameState, target_id: EntityId) -> Delta:
    """Evaluate one effect against a read-only view of the game.

    Must not mutate `state`; the same inputs always give the same delta.
    """
    if isinstance(effect, IncreaseEffect):
        return {effect.attribute: effect.amount}
    if isinstance(effect, DecreaseEffect):
        return {effect.attribute: -effect.amount}
    # should be unreachable
    return {}


def merge_deltas(deltas: Iterable[Delta]) -> Delta:
    merged: Delta = {}
    for delta in deltas:
        for attr, value in delta.items():
            merged[attr] = merged.get(attr, 0) + value
    return merged


def card_delta(card: CardDefinition, state: GameState, target_id: EntityId) -> Delta:
    # Every effect sees the same pre-play state, never another effect's output.
    return merge_deltas(compute_effect(eff, state, target_id) for eff in card.effects)


def apply_delta(state: GameState, target_id: EntityId, delta: Delta) -> bool:
    """Add `delta` onto the target's state.

    Returns True when the target's hull dropped to 0 or below and it was
    removed from play.
    """
    target_state = state.entities.get_state(target_id)
    for attr, value in delta.items():
        target_state[attr] = target_state.get(attr, 0) + value
    state.event_log.append({"type": "DELTA_APPLIED", "target_id": target_id, "delta": dict(delta)})

    hull = target_state.get("hull")
    if hull is None or hull > 0:
        return False

    entity = state.entities.remove(target_id)
    if state.player_id == target_id:
        state.player_id = None
    if state.enemy_id == target_id:
        state.enemy_id = None
    state.event_log.append({"type": "ENTITY_DESTROYED", "target_id": target_id, "name": entity.name})
    return True
