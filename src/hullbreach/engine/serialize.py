from __future__ import annotations


from .actions import (
    Action,
    AwaitAction,
    BeginTurnAction,
    DrawAction,
    EndTurnAction,
    PlayCardAction,
)
from .state import GameState
from .types import Entity


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, PlayCardAction):
        return {"type": "play", "target_id": a.target_id, "hand_index": a.hand_index}
    if isinstance(a, DrawAction):
        return {"type": "draw"}
    if isinstance(a, BeginTurnAction):
        return {"type": "begin_turn"}
    if isinstance(a, EndTurnAction):
        return {"type": "end_turn"}
    if isinstance(a, AwaitAction):
        return {"type": "await"}
    # should be unreachable
    return {"type": "unknown"}


def _entity_to_dict(e: Entity) -> dict[str, object]:
    return {
        "id": e.id,
        "name": e.name,
        "role": e.role,
        "state": {k: e.state[k] for k in sorted(e.state)},
    }


def snapshot(state: GameState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current game state."""
    return {
        "seed": state.seed,
        "pending_action": action_to_dict(state.action),
        "draw": list(state.draw),
        "hand": list(state.hand),
        "discard": list(state.discard),
        "player_id": state.player_id,
        "enemy_id": state.enemy_id,
        "entities": [_entity_to_dict(e) for e in state.entities],
        "action_log": [action_to_dict(a) for a in state.action_log],
    }
