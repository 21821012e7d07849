from __future__ import annotations

import traceback

import pygame  # type: ignore[import-not-found]

from hullbreach.services.content import begin_encounter
from ..app import GameContext
from ..scene_base import SceneTransition
from ..ui import Button, draw_text
from .combat import CombatScene


class BootScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._did_boot = False
        self._error: str | None = None
        self._quit_button: Button | None = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._quit_button is not None:
            self._quit_button.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        if self._did_boot:
            return None
        self._did_boot = True
        try:
            self.ctx.content.validate_all()
            self.ctx.cards = self.ctx.content.load_cards_db()
            self.ctx.encounters = self.ctx.content.load_encounters(self.ctx.cards)

            encounter = self.ctx.encounters.get(self.ctx.options.encounter_id)
            state = begin_encounter(self.ctx.cards, encounter, seed=self.ctx.options.seed)

            self.ctx.telemetry.log("boot", {"ok": True})
            return SceneTransition(
                CombatScene(self.ctx, state, encounter_name=encounter.name),
                reason="encounter_started",
                details={"encounter": encounter.id, "seed": state.seed},
            )
        except Exception as e:
            tb = traceback.format_exc(limit=8)
            self._error = f"{e}\n\n{tb}"
            self.ctx.telemetry.log("boot", {"ok": False, "error": str(e)})
            self._quit_button = Button(
                rect=pygame.Rect(20, 700, 140, 44),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            )
            return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((10, 10, 10))
        fonts = self.ctx.fonts
        draw_text(screen, fonts.big, "Hullbreach", (20, 20))

        if self._error is None:
            draw_text(screen, fonts.ui, "Booting... validating content.", (20, 80))
        else:
            draw_text(screen, fonts.ui, "BOOT ERROR", (20, 80), color=(240, 80, 80))
            y = 120
            for line in self._error.splitlines()[:22]:
                draw_text(screen, fonts.small, line[:120], (20, y), color=(230, 230, 230))
                y += 18
            if self._quit_button is not None:
                self._quit_button.draw(screen, fonts.ui)
