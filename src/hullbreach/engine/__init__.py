"""Deterministic, headless combat engine for hullbreach.

IMPORTANT: This package must never import pygame.
"""

from .actions import (
    Action,
    AwaitAction,
    BeginTurnAction,
    DrawAction,
    EndTurnAction,
    PlayCardAction,
)
from .errors import (
    DestroyedEntity,
    EngineError,
    EntityIdConflict,
    InvalidIndex,
    InvalidTarget,
    LookupFailure,
)
from .game import StepResult, new_game, register_entity, set_pending_action, tick
from .state import GameConfig, GameState
from .types import Attribute, CardCatalog, CardDefinition, Entity, TargetPolicy

__all__ = [
    "Action",
    "Attribute",
    "AwaitAction",
    "BeginTurnAction",
    "CardCatalog",
    "CardDefinition",
    "DestroyedEntity",
    "DrawAction",
    "EndTurnAction",
    "EngineError",
    "Entity",
    "EntityIdConflict",
    "GameConfig",
    "GameState",
    "InvalidIndex",
    "InvalidTarget",
    "LookupFailure",
    "PlayCardAction",
    "StepResult",
    "TargetPolicy",
    "new_game",
    "register_entity",
    "set_pending_action",
    "tick",
]
