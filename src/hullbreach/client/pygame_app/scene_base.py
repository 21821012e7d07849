from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Protocol

import pygame  # type: ignore[import-not-found]


@dataclass
class SceneTransition:
    """Request to swap scenes; `reason` and `details` go to telemetry."""

    next_scene: "Scene"
    reason: str
    details: Mapping[str, object] = field(default_factory=dict)


class Scene(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def update(self, dt: float) -> SceneTransition | None: ...
    def render(self, screen: pygame.Surface) -> None: ...
