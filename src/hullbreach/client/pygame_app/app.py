from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pygame  # type: ignore[import-not-found]

from hullbreach.engine.types import CardCatalog
from hullbreach.paths import Paths
from hullbreach.services.content import ContentService, EncounterCatalog
from hullbreach.services.telemetry import TelemetryService

from .fonts import Fonts
from .scene_base import Scene


@dataclass(frozen=True)
class ClientOptions:
    encounter_id: str | None = None
    seed: int | None = None
    tick_ms: int = 250


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    fonts: Fonts
    content: ContentService
    telemetry: TelemetryService
    options: ClientOptions

    # Loaded at boot
    cards: Optional[CardCatalog] = None
    encounters: Optional[EncounterCatalog] = None


class App:
    def __init__(self, ctx: GameContext, initial_scene: Scene) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.running = True

    def run(self) -> int:
        while self.running:
            dt = self.ctx.clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                self.scene.handle_event(event)

            tr = self.scene.update(dt)
            if tr is not None:
                self.ctx.telemetry.log(
                    "scene",
                    {"to": type(tr.next_scene).__name__, "reason": tr.reason, **tr.details},
                )
                self.scene = tr.next_scene

            self.scene.render(self.ctx.screen)
            pygame.display.flip()

        self.ctx.telemetry.log("shutdown", {})
        return 0
