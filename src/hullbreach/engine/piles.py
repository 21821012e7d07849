from __future__ import annotations

import random
from dataclasses import dataclass

from .errors import InvalidIndex
from .state import GameState
from .types import CardId


@dataclass(frozen=True)
class PileSizes:
    draw: int
    hand: int
    discard: int

    @property
    def total(self) -> int:
        return self.draw + self.hand + self.discard


def shuffle_deck(rng: random.Random, cards: list[CardId]) -> list[CardId]:
    rng.shuffle(cards)
    return cards


def _reshuffle_discard(state: GameState) -> None:
    moved = len(state.discard)
    shuffle_deck(state.rng, state.discard)
    state.draw.extend(state.discard)
    state.discard.clear()
    state.event_log.append({"type": "DISCARD_RESHUFFLED", "count": moved})


def draw_one(state: GameState) -> CardId | None:
    """Move the top card of the draw pile into the hand.

    An empty draw pile is refilled from the shuffled discard pile first.
    Drawing with both piles empty does nothing.
    """
    if not state.draw and state.discard:
        _reshuffle_discard(state)
    if not state.draw:
        return None
    card_id = state.draw.pop()
    state.hand.append(card_id)
    state.event_log.append({"type": "CARD_DRAWN", "card_id": card_id})
    return card_id


def draw_many(state: GameState, count: int) -> list[CardId]:
    drawn: list[CardId] = []
    for _ in range(max(0, count)):
        card_id = draw_one(state)
        if card_id is not None:
            drawn.append(card_id)
    return drawn


def play_from_hand(state: GameState, hand_index: int) -> CardId:
    if hand_index < 0 or hand_index >= len(state.hand):
        raise InvalidIndex(f"Invalid hand index: {hand_index}")
    card_id = state.hand.pop(hand_index)
    state.discard.append(card_id)
    return card_id


def discard_hand(state: GameState) -> None:
    count = len(state.hand)
    state.discard.extend(state.hand)
    state.hand.clear()
    state.event_log.append({"type": "HAND_DISCARDED", "count": count})


def pile_sizes(state: GameState) -> PileSizes:
    return PileSizes(draw=len(state.draw), hand=len(state.hand), discard=len(state.discard))
