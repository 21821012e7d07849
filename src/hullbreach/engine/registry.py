from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace

from .errors import DestroyedEntity, EntityIdConflict, LookupFailure
from .types import Entity, EntityId, State


class EntityRegistry:
    """Owns every live entity and its attribute state.

    Ids are unique for the session: generated ids come from a counter that
    always moves past any explicitly registered id, and explicit ids that
    collide with a live entity are rejected.
    """

    def __init__(self) -> None:
        # Insertion order doubles as targeting order.
        self._entities: dict[EntityId, Entity] = {}
        self._next_id: EntityId = 1

    def register(self, entity: Entity, entity_id: EntityId | None = None) -> EntityId:
        """Store a copy of `entity`; the caller's object is left untouched."""
        hull = entity.state.get("hull")
        if hull is not None and hull <= 0:
            raise DestroyedEntity(f"{entity.name} has hull {hull}")
        if entity_id is None:
            entity_id = self._next_id
        elif entity_id in self._entities:
            raise EntityIdConflict(f"Entity id already in use: {entity_id}")
        self._next_id = max(self._next_id, entity_id + 1)
        self._entities[entity_id] = replace(entity, state=dict(entity.state), id=entity_id)
        return entity_id

    def remove(self, entity_id: EntityId) -> Entity:
        entity = self._entities.pop(entity_id, None)
        if entity is None:
            raise LookupFailure(f"Unknown entity: {entity_id}")
        return entity

    def get(self, entity_id: EntityId) -> Entity:
        entity = self._entities.get(entity_id)
        if entity is None:
            raise LookupFailure(f"Unknown entity: {entity_id}")
        return entity

    def get_state(self, entity_id: EntityId) -> State:
        return self.get(entity_id).state

    def live_ids(self) -> tuple[EntityId, ...]:
        return tuple(self._entities.keys())

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities.values()))
