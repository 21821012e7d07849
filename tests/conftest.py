from __future__ import annotations

import pytest

from hullbreach.engine.game import new_game, register_entity
from hullbreach.engine.state import GameState
from hullbreach.engine.types import CardCatalog, CardDefinition, DecreaseEffect, Entity, IncreaseEffect


def make_catalog() -> CardCatalog:
    cards = [
        CardDefinition(
            id="shields",
            name="Shields",
            target="self",
            effects=(IncreaseEffect(type="increase", attribute="shields", amount=1),),
        ),
        CardDefinition(
            id="phasers",
            name="Phasers",
            target="single_opponent",
            effects=(DecreaseEffect(type="decrease", attribute="hull", amount=1),),
        ),
        CardDefinition(
            id="torpedo",
            name="Photon Torpedo",
            target="single_opponent",
            effects=(
                DecreaseEffect(type="decrease", attribute="hull", amount=3),
                DecreaseEffect(type="decrease", attribute="shields", amount=1),
                DecreaseEffect(type="decrease", attribute="hull", amount=1),
            ),
        ),
    ]
    return CardCatalog(cards={c.id: c for c in cards})


def make_game(deck: list[str] | None = None, seed: int = 7) -> GameState:
    state = new_game(make_catalog(), deck or [], seed=seed)
    register_entity(state, Entity(name="Player", role="player", state={"hull": 10, "shields": 10}))
    register_entity(state, Entity(name="Drone", role="enemy", state={"hull": 5, "shields": 2}))
    return state


@pytest.fixture
def catalog() -> CardCatalog:
    return make_catalog()
