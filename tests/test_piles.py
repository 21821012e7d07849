from __future__ import annotations

import random

import pytest

from conftest import make_game
from hullbreach.engine.errors import InvalidIndex
from hullbreach.engine.piles import (
    discard_hand,
    draw_many,
    draw_one,
    pile_sizes,
    play_from_hand,
    shuffle_deck,
)


def test_draw_one_pops_from_top() -> None:
    state = make_game(["shields", "phasers"])
    assert draw_one(state) == "phasers"
    assert state.hand == ["phasers"]
    assert state.draw == ["shields"]


def test_draw_with_empty_piles_is_noop() -> None:
    state = make_game([])
    assert draw_one(state) is None
    assert draw_many(state, 4) == []
    assert pile_sizes(state).total == 0


def test_draw_more_than_available() -> None:
    state = make_game(["phasers"] * 3)
    drawn = draw_many(state, 4)
    assert drawn == ["phasers"] * 3
    assert state.hand == ["phasers"] * 3
    assert state.draw == []


def test_empty_draw_reshuffles_discard_before_pop() -> None:
    state = make_game([])
    state.discard = ["shields", "phasers", "torpedo"]
    card_id = draw_one(state)
    assert card_id is not None
    assert state.discard == []
    assert len(state.draw) == 2
    assert sorted(state.draw + state.hand) == ["phasers", "shields", "torpedo"]
    assert any(ev["type"] == "DISCARD_RESHUFFLED" for ev in state.event_log)


def test_reshuffle_happens_per_draw() -> None:
    state = make_game(["shields"])
    state.discard = ["phasers", "torpedo"]
    draw_many(state, 3)
    assert sorted(state.hand) == ["phasers", "shields", "torpedo"]
    assert state.draw == []
    assert state.discard == []


@pytest.mark.parametrize("n", [0, 1, 3, 5, 11])
def test_drawing_conserves_cards(n: int) -> None:
    state = make_game(["shields", "phasers", "torpedo", "shields"])
    state.hand = ["phasers"]
    state.discard = ["torpedo", "shields"]
    before = pile_sizes(state).total
    draw_many(state, n)
    assert pile_sizes(state).total == before


def test_play_from_hand_moves_to_discard_tail() -> None:
    state = make_game([])
    state.hand = ["shields", "phasers", "torpedo"]
    state.discard = ["shields"]
    assert play_from_hand(state, 1) == "phasers"
    assert state.hand == ["shields", "torpedo"]
    assert state.discard[-1] == "phasers"


@pytest.mark.parametrize("idx", [-1, 2, 10])
def test_play_from_hand_rejects_bad_index(idx: int) -> None:
    state = make_game([])
    state.hand = ["shields", "phasers"]
    with pytest.raises(InvalidIndex):
        play_from_hand(state, idx)
    assert state.hand == ["shields", "phasers"]
    assert state.discard == []


def test_discard_hand_keeps_order() -> None:
    state = make_game([])
    state.hand = ["torpedo", "shields", "phasers"]
    state.discard = ["shields"]
    discard_hand(state)
    assert state.hand == []
    assert state.discard == ["shields", "torpedo", "shields", "phasers"]


def test_shuffle_deck_is_a_permutation() -> None:
    cards = ["shields", "phasers", "torpedo", "phasers"]
    out = shuffle_deck(random.Random(3), list(cards))
    assert sorted(out) == sorted(cards)
