from __future__ import annotations

import pytest

from hullbreach.engine.actions import (
    AwaitAction,
    BeginTurnAction,
    DrawAction,
    EndTurnAction,
    PlayCardAction,
)
from hullbreach.engine.errors import InvalidIndex, LookupFailure
from hullbreach.engine.game import new_game, register_entity, set_pending_action, tick
from hullbreach.engine.piles import pile_sizes
from hullbreach.engine.types import CardCatalog, CardDefinition, Entity, IncreaseEffect

from conftest import make_catalog, make_game


def _shields_only_game():
    card = CardDefinition(
        id="shields",
        name="Shields",
        target="self",
        effects=(IncreaseEffect(type="increase", attribute="shields", amount=1),),
    )
    state = new_game(CardCatalog(cards={"shields": card}), ["shields", "shields", "shields"], seed=1)
    pid = register_entity(state, Entity(name="Player", role="player", state={"hull": 10, "shields": 10}))
    return state, pid


def test_begin_turn_then_play_shields() -> None:
    state, pid = _shields_only_game()

    set_pending_action(state, BeginTurnAction())
    res = tick(state)
    assert res.ok
    assert len(state.hand) == 3
    assert state.draw == []

    set_pending_action(state, PlayCardAction(target_id=pid, hand_index=0))
    res = tick(state)
    assert res.ok
    assert len(state.hand) == 2
    assert state.discard == ["shields"]
    assert state.entities.get_state(pid)["shields"] == 11


def test_tick_does_not_reset_pending_action() -> None:
    state, _ = _shields_only_game()
    set_pending_action(state, DrawAction())
    tick(state)
    tick(state)
    assert state.action == DrawAction()
    assert len(state.hand) == 2


def test_await_is_noop() -> None:
    state = make_game(["shields", "phasers"])
    before = (list(state.draw), list(state.hand), list(state.discard))
    events_before = len(state.event_log)
    for _ in range(3):
        res = tick(state)
        assert res.ok
        assert res.events == []
    assert state.action_log == []
    assert len(state.event_log) == events_before
    assert (state.draw, state.hand, state.discard) == before
    assert state.action == AwaitAction()


def test_draw_reshuffles_empty_draw_pile() -> None:
    state = make_game([])
    state.discard = ["shields", "phasers", "torpedo"]
    set_pending_action(state, DrawAction())
    res = tick(state)
    assert res.ok
    assert len(state.hand) == 1
    assert len(state.draw) == 2
    assert state.discard == []
    assert sorted(state.draw + state.hand) == ["phasers", "shields", "torpedo"]
    assert [ev["type"] for ev in res.events] == ["DISCARD_RESHUFFLED", "CARD_DRAWN"]


def test_end_turn_discards_hand() -> None:
    state = make_game(["phasers"] * 6)
    set_pending_action(state, BeginTurnAction())
    tick(state)
    set_pending_action(state, EndTurnAction())
    tick(state)
    assert state.hand == []
    assert state.discard == ["phasers"] * 4
    assert len(state.draw) == 2


def test_play_merges_effects_into_single_delta() -> None:
    state = make_game([])
    state.hand = ["torpedo"]
    eid = state.enemy_id
    assert eid is not None
    state.entities.get_state(eid)["hull"] = 20

    set_pending_action(state, PlayCardAction(target_id=eid, hand_index=0))
    res = tick(state)
    assert res.ok
    assert state.hand == []
    assert state.discard == ["torpedo"]
    assert state.entities.get_state(eid) == {"hull": 16, "shields": 1}
    applied = [ev for ev in res.events if ev["type"] == "DELTA_APPLIED"]
    assert len(applied) == 1
    assert applied[0]["delta"] == {"hull": -4, "shields": -1}


def test_lethal_play_discards_card_and_removes_target() -> None:
    state = make_game([])
    state.hand = ["torpedo", "phasers"]
    eid = state.enemy_id
    assert eid is not None
    state.entities.get_state(eid)["hull"] = 4

    set_pending_action(state, PlayCardAction(target_id=eid, hand_index=0))
    res = tick(state)
    assert res.ok
    assert state.discard == ["torpedo"]
    assert state.hand == ["phasers"]
    assert eid not in state.live_ids()
    assert res.events[-1]["type"] == "ENTITY_DESTROYED"

    # The destroyed entity can no longer be targeted.
    set_pending_action(state, PlayCardAction(target_id=eid, hand_index=0))
    res = tick(state)
    assert not res.ok
    assert isinstance(res.error, LookupFailure)
    assert state.hand == ["phasers"]


def test_play_with_bad_index_is_rejected() -> None:
    state = make_game([])
    state.hand = ["shields"]
    pid = state.player_id
    assert pid is not None
    set_pending_action(state, PlayCardAction(target_id=pid, hand_index=3))
    res = tick(state)
    assert not res.ok
    assert isinstance(res.error, InvalidIndex)
    assert state.hand == ["shields"]
    assert state.discard == []


def test_play_with_uncatalogued_card_is_rejected() -> None:
    state = make_game([])
    state.hand = ["warp_core"]
    pid = state.player_id
    assert pid is not None
    set_pending_action(state, PlayCardAction(target_id=pid, hand_index=0))
    res = tick(state)
    assert not res.ok
    assert isinstance(res.error, LookupFailure)
    assert state.hand == ["warp_core"]


def test_new_game_rejects_unknown_deck_cards() -> None:
    with pytest.raises(LookupFailure):
        new_game(make_catalog(), ["shields", "warp_core"], seed=1)


def test_full_turn_conserves_cards() -> None:
    state = make_game(["shields", "phasers", "phasers", "shields", "phasers"])
    total = pile_sizes(state).total
    eid = state.enemy_id
    assert eid is not None

    set_pending_action(state, BeginTurnAction())
    tick(state)
    for _ in range(2):
        idx = state.hand.index("phasers")
        set_pending_action(state, PlayCardAction(target_id=eid, hand_index=idx))
        assert tick(state).ok
        assert pile_sizes(state).total == total
    set_pending_action(state, EndTurnAction())
    tick(state)
    set_pending_action(state, BeginTurnAction())
    tick(state)
    assert pile_sizes(state).total == total
    assert state.entities.get_state(eid)["hull"] == 3
    assert len(state.action_log) == 5
