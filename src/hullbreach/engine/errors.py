from __future__ import annotations


class EngineError(RuntimeError):
    """Base class for recoverable rules-engine failures."""


class LookupFailure(EngineError):
    """A card or entity id has no definition or live entity."""


class InvalidIndex(EngineError):
    """A hand index is out of range."""


class InvalidTarget(EngineError):
    """A target is not a legal choice for the selected card."""


class EntityIdConflict(EngineError):
    """An explicit entity id is already in use."""


class DestroyedEntity(EngineError):
    """An entity cannot enter play with hull already at or below 0."""
