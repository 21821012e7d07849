from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .actions import (
    Action,
    AwaitAction,
    BeginTurnAction,
    DrawAction,
    EndTurnAction,
    PlayCardAction,
)
from .effects import apply_delta, card_delta
from .errors import EngineError, InvalidIndex, LookupFailure
from .piles import discard_hand, draw_many, draw_one, play_from_hand
from .state import Event, GameConfig, GameState
from .types import CardCatalog, CardDefinition, CardId, Entity, EntityId, State


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: EngineError | None = None


def new_game(
    cards: CardCatalog,
    deck: Sequence[CardId],
    seed: int | None = None,
    config: GameConfig | None = None,
) -> GameState:
    """Create a session with `deck` as the draw pile, top card last.

    The deck is used in the given order; shuffling it first is up to the
    caller (see `piles.shuffle_deck`).
    """
    for card_id in deck:
        if card_id not in cards:
            raise LookupFailure(f"Deck references unknown card: {card_id}")
    if seed is None:
        seed = random.randrange(2**31)
    return GameState(
        cards=cards,
        config=config or GameConfig(),
        seed=seed,
        rng=random.Random(seed),
        draw=list(deck),
    )


def register_entity(state: GameState, entity: Entity, entity_id: EntityId | None = None) -> EntityId:
    eid = state.entities.register(entity, entity_id)
    if entity.role == "player" and state.player_id is None:
        state.player_id = eid
    elif entity.role == "enemy" and state.enemy_id is None:
        state.enemy_id = eid
    state.event_log.append({"type": "ENTITY_REGISTERED", "entity_id": eid, "role": entity.role})
    return eid


def set_pending_action(state: GameState, action: Action) -> None:
    state.action = action


def _play_card(state: GameState, action: PlayCardAction) -> None:
    if action.hand_index < 0 or action.hand_index >= len(state.hand):
        raise InvalidIndex(f"Invalid hand index: {action.hand_index}")
    card_id = state.hand[action.hand_index]
    card_def = state.cards.get(card_id)
    if action.target_id not in state.entities:
        raise LookupFailure(f"Unknown entity: {action.target_id}")

    delta = card_delta(card_def, state, action.target_id)

    # The card leaves the hand before the delta lands, so a destroyed
    # target can never strand it.
    play_from_hand(state, action.hand_index)
    state.event_log.append({"type": "CARD_PLAYED", "card_id": card_id, "target_id": action.target_id})
    apply_delta(state, action.target_id, delta)


def tick(state: GameState) -> StepResult:
    """Consume the pending action and advance the game one step.

    The pending action is left as-is; the host decides what comes next.
    Failures leave piles and entities untouched.
    """
    action = state.action
    if isinstance(action, AwaitAction):
        return StepResult(ok=True, events=[])
    state.action_log.append(action)
    before = len(state.event_log)

    try:
        if isinstance(action, DrawAction):
            draw_one(state)
        elif isinstance(action, BeginTurnAction):
            state.event_log.append({"type": "TURN_STARTED"})
            draw_many(state, state.config.begin_turn_draw)
        elif isinstance(action, EndTurnAction):
            discard_hand(state)
            state.event_log.append({"type": "TURN_ENDED"})
        elif isinstance(action, PlayCardAction):
            _play_card(state, action)
        else:
            return StepResult(ok=False, events=[], error=EngineError("Unknown action."))
    except EngineError as e:
        del state.event_log[before:]
        return StepResult(ok=False, events=[], error=e)

    return StepResult(ok=True, events=state.event_log[before:])


def replay(
    cards: CardCatalog,
    deck: Sequence[CardId],
    seed: int,
    entities: Iterable[Entity],
    actions: Iterable[Action],
    config: GameConfig | None = None,
) -> GameState:
    state = new_game(cards, deck, seed=seed, config=config)
    for entity in entities:
        register_entity(state, entity, entity.id)
    for a in actions:
        set_pending_action(state, a)
        tick(state)
    return state


def hand(state: GameState) -> tuple[CardId, ...]:
    return tuple(state.hand)


def entity_state(state: GameState, entity_id: EntityId) -> State:
    return dict(state.entities.get_state(entity_id))


def card(state: GameState, card_id: CardId) -> CardDefinition:
    return state.cards.get(card_id)


def valid_targets(state: GameState, card_id: CardId) -> list[EntityId]:
    """Live entities the card may legally be played on, in registration order."""
    card_def = state.cards.get(card_id)
    if card_def.target == "self":
        return [] if state.player_id is None else [state.player_id]
    return state.opponents()
