from __future__ import annotations

import json
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from hullbreach.engine.game import new_game, register_entity
from hullbreach.engine.piles import shuffle_deck
from hullbreach.engine.state import GameConfig, GameState
from hullbreach.engine.types import (
    ATTRIBUTES,
    CardCatalog,
    CardDefinition,
    DecreaseEffect,
    Effect,
    Entity,
    IncreaseEffect,
    Role,
    State,
)


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int):
        raise ContentError(f"Expected int for {key}")
    return v


def _parse_effect(raw: Mapping[str, object]) -> Effect:
    t = raw.get("type")
    attribute = _require_str(raw, "attribute")
    if attribute not in ATTRIBUTES:
        raise ContentError(f"Unknown attribute: {attribute}")
    amount = _require_int(raw, "amount")
    if t == "increase":
        return IncreaseEffect(type="increase", attribute=attribute, amount=amount)  # type: ignore[arg-type]
    if t == "decrease":
        return DecreaseEffect(type="decrease", attribute=attribute, amount=amount)  # type: ignore[arg-type]
    raise ContentError(f"Unknown effect type: {t}")


def _parse_state(raw: object) -> State:
    if not isinstance(raw, dict):
        raise ContentError("state must be an object")
    out: State = {}
    for k, v in raw.items():
        if k not in ATTRIBUTES or not isinstance(v, int):
            raise ContentError(f"Invalid state entry: {k}={v!r}")
        out[k] = v
    return out


@dataclass(frozen=True)
class Combatant:
    name: str
    state: dict[str, int]

    def spawn(self, role: Role) -> Entity:
        return Entity(name=self.name, role=role, state=dict(self.state))  # type: ignore[arg-type]


@dataclass(frozen=True)
class DeckEntry:
    card_id: str
    count: int


@dataclass(frozen=True)
class Encounter:
    id: str
    name: str
    player: Combatant
    enemy: Combatant
    deck: tuple[DeckEntry, ...]

    def deck_list(self) -> list[str]:
        out: list[str] = []
        for entry in self.deck:
            out.extend([entry.card_id] * entry.count)
        return out


@dataclass(frozen=True)
class EncounterCatalog:
    default: str
    encounters: dict[str, Encounter]

    def get(self, encounter_id: str | None = None) -> Encounter:
        key = encounter_id or self.default
        enc = self.encounters.get(key)
        if enc is None:
            raise ContentError(f"Unknown encounter: {key}")
        return enc


def begin_encounter(
    cards: CardCatalog,
    encounter: Encounter,
    seed: int | None = None,
    config: GameConfig | None = None,
) -> GameState:
    """Shuffle the encounter deck and seat both combatants, player first."""
    if seed is None:
        seed = random.randrange(2**31)
    deck = shuffle_deck(random.Random(seed), encounter.deck_list())
    state = new_game(cards, deck, seed=seed, config=config)
    register_entity(state, encounter.player.spawn("player"))
    register_entity(state, encounter.enemy.spawn("enemy"))
    return state


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_cards_db(self) -> CardCatalog:
        cards_path = self._data_dir / "cards.json"
        raw = _load_json(cards_path)
        schema = _load_json(self._schema_dir / "cards.schema.json")
        validate_json(raw, schema, context=str(cards_path))

        if not isinstance(raw, dict):
            raise ContentError("cards.json must be an object")
        raw_cards = raw.get("cards")
        if not isinstance(raw_cards, list):
            raise ContentError("cards.json.cards must be a list")

        cards: dict[str, CardDefinition] = {}
        for item in raw_cards:
            if not isinstance(item, dict):
                continue
            card_id = _require_str(item, "id")
            if card_id in cards:
                raise ContentError(f"Duplicate card id: {card_id}")
            effects: list[Effect] = []
            effects_raw = item.get("effects", [])
            if isinstance(effects_raw, list):
                for eff in effects_raw:
                    if isinstance(eff, dict):
                        effects.append(_parse_effect(eff))
            cards[card_id] = CardDefinition(
                id=card_id,
                name=_require_str(item, "name"),
                target=_require_str(item, "target"),  # type: ignore[arg-type]
                effects=tuple(effects),
                rules_text=str(item.get("rules_text", "")),
            )
        return CardCatalog(cards=cards)

    def load_encounters(self, cards: CardCatalog) -> EncounterCatalog:
        path = self._data_dir / "encounters.json"
        raw = _load_json(path)
        schema = _load_json(self._schema_dir / "encounters.schema.json")
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError("encounters.json must be an object")
        raw_list = raw.get("encounters")
        if not isinstance(raw_list, list):
            raise ContentError("encounters.json.encounters must be a list")

        out: dict[str, Encounter] = {}
        for item in raw_list:
            if not isinstance(item, dict):
                continue
            deck: list[DeckEntry] = []
            for e in item.get("deck", []):
                if not isinstance(e, dict):
                    continue
                card_id = _require_str(e, "card_id")
                if card_id not in cards:
                    raise ContentError(f"Encounter deck references unknown card: {card_id}")
                deck.append(DeckEntry(card_id=card_id, count=_require_int(e, "count")))
            enc = Encounter(
                id=_require_str(item, "id"),
                name=_require_str(item, "name"),
                player=self._parse_combatant(item.get("player")),
                enemy=self._parse_combatant(item.get("enemy")),
                deck=tuple(deck),
            )
            out[enc.id] = enc

        default = _require_str(raw, "default")
        if default not in out:
            raise ContentError(f"Default encounter not defined: {default}")
        return EncounterCatalog(default=default, encounters=out)

    @staticmethod
    def _parse_combatant(raw: object) -> Combatant:
        if not isinstance(raw, dict):
            raise ContentError("combatant must be an object")
        return Combatant(name=_require_str(raw, "name"), state=_parse_state(raw.get("state")))

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        cards = self.load_cards_db()
        _ = self.load_encounters(cards)
