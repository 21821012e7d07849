from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from hullbreach.engine import workflow
from hullbreach.engine.actions import (
    Action,
    AwaitAction,
    BeginTurnAction,
    DrawAction,
    EndTurnAction,
)
from hullbreach.engine.errors import EngineError
from hullbreach.engine.game import StepResult, set_pending_action, tick
from hullbreach.engine.piles import pile_sizes
from hullbreach.engine.state import GameState
from hullbreach.engine.types import ATTRIBUTES, EntityId
from hullbreach.engine.workflow import Combat, Confirm, TargetSelect, WorkflowState

from ..app import GameContext
from ..scene_base import SceneTransition
from ..ui import Button, draw_panel, draw_text

HAND_X, HAND_Y = 40, 560
CARD_W, CARD_H = 140, 90


class CombatScene:
    def __init__(self, ctx: GameContext, state: GameState, encounter_name: str) -> None:
        self.ctx = ctx
        self.state = state
        self.encounter_name = encounter_name

        self._flow: WorkflowState = workflow.start(state.enemy_id)
        self._queue: list[Action] = [BeginTurnAction()]
        self._since_tick_ms = 0.0
        self._message = ""

        self.btn_end = Button(rect=pygame.Rect(860, 660, 140, 50), text="End Turn", on_click=self._on_end_turn)
        self.btn_draw = Button(rect=pygame.Rect(860, 600, 140, 50), text="Draw", on_click=self._on_draw)

    # -- input -----------------------------------------------------------

    def _idle(self) -> bool:
        return isinstance(self._flow, Combat) and not self._queue

    def _on_end_turn(self) -> None:
        if not self._idle():
            return
        self._queue.extend([EndTurnAction(), BeginTurnAction()])

    def _on_draw(self) -> None:
        if not self._idle():
            return
        self._queue.append(DrawAction())

    def _reset_flow(self, error: EngineError) -> None:
        self._message = str(error)
        self._flow = workflow.cancel(self._flow)
        self.ctx.telemetry.log("workflow_error", {"error": str(error), "kind": type(error).__name__})

    def _select_card(self, hand_index: int) -> None:
        if not isinstance(self._flow, Combat) or self._queue:
            return
        try:
            self._flow = workflow.select_card(self._flow, self.state, hand_index)
        except EngineError as e:
            self._reset_flow(e)
            return
        self._message = "Choose target..." if isinstance(self._flow, TargetSelect) else "Enter to confirm."

    def _choose_target(self, target_id: EntityId) -> None:
        if not isinstance(self._flow, TargetSelect):
            return
        try:
            self._flow = workflow.choose_target(self._flow, target_id)
        except EngineError as e:
            self._reset_flow(e)
            return
        self._message = "Enter to confirm."

    def _confirm(self) -> None:
        if isinstance(self._flow, TargetSelect):
            self._choose_target(self._flow.candidates[0])
            return
        if not isinstance(self._flow, Confirm):
            return
        self._flow, action = workflow.confirm(self._flow)
        self._queue.append(action)
        self._message = ""

    def _cancel(self) -> None:
        self._flow = workflow.cancel(self._flow)
        self._message = ""

    def handle_event(self, event: pygame.event.Event) -> None:
        self.btn_end.handle_event(event)
        self.btn_draw.handle_event(event)

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self._cancel()
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self._confirm()
            elif event.key == pygame.K_d:
                self._on_draw()
            elif event.key == pygame.K_e:
                self._on_end_turn()
            elif pygame.K_1 <= event.key <= pygame.K_9:
                self._select_card(event.key - pygame.K_1)

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._handle_click(event.pos)

    def _handle_click(self, pos: tuple[int, int]) -> None:
        for i in range(len(self.state.hand)):
            if self._card_rect(i).collidepoint(pos):
                self._select_card(i)
                return
        for slot, eid in enumerate(self.state.live_ids()):
            if self._entity_rect(slot).collidepoint(pos):
                if isinstance(self._flow, TargetSelect):
                    self._choose_target(eid)
                elif isinstance(self._flow, Confirm) and self._flow.target_id == eid:
                    self._confirm()
                return

    # -- engine cadence --------------------------------------------------

    def _tick(self) -> None:
        if not self._queue:
            return
        set_pending_action(self.state, self._queue.pop(0))
        res: StepResult = tick(self.state)
        set_pending_action(self.state, AwaitAction())

        self.ctx.telemetry.log_events(res.events)
        if not res.ok and res.error is not None:
            self._queue.clear()
            self._reset_flow(res.error)

    def update(self, dt: float) -> SceneTransition | None:
        self._since_tick_ms += dt * 1000.0
        if self._since_tick_ms >= self.ctx.options.tick_ms:
            self._since_tick_ms = 0.0
            self._tick()
        return None

    # -- rendering -------------------------------------------------------

    def _card_rect(self, i: int) -> pygame.Rect:
        return pygame.Rect(HAND_X + i * (CARD_W + 8), HAND_Y, CARD_W, CARD_H)

    def _entity_rect(self, slot: int) -> pygame.Rect:
        return pygame.Rect(40 + slot * 320, 120, 300, 150)

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((8, 10, 14))
        fonts = self.ctx.fonts
        draw_text(screen, fonts.big, self.encounter_name, (40, 30))

        self.btn_end.enabled = self._idle()
        self.btn_draw.enabled = self._idle()
        self.btn_end.draw(screen, fonts.ui)
        self.btn_draw.draw(screen, fonts.ui)

        highlight: tuple[EntityId, ...] = ()
        if isinstance(self._flow, TargetSelect):
            highlight = self._flow.candidates
        elif isinstance(self._flow, Confirm):
            highlight = (self._flow.target_id,)

        for slot, entity in enumerate(self.state.entities):
            rect = self._entity_rect(slot)
            color = (240, 240, 120) if entity.id in highlight else (0, 0, 0)
            draw_panel(screen, rect, (24, 24, 32), outline=color, width=3 if entity.id in highlight else 2)
            draw_text(screen, fonts.ui, f"{entity.name} ({entity.role})", (rect.x + 10, rect.y + 10))
            y = rect.y + 40
            for attr in ATTRIBUTES:
                if attr in entity.state:
                    draw_text(screen, fonts.small, f"{attr}: {entity.state[attr]}", (rect.x + 10, y))
                    y += 20

        selected = None if isinstance(self._flow, Combat) else self._flow.card_index
        for i, card_id in enumerate(self.state.hand):
            rect = self._card_rect(i)
            outline = (240, 240, 120) if i == selected else (0, 0, 0)
            draw_panel(screen, rect, (28, 28, 40), outline=outline)
            card_def = self.state.cards.get(card_id)
            draw_text(screen, fonts.small, f"{i + 1}. {card_def.name}", (rect.x + 6, rect.y + 8))
            draw_text(screen, fonts.small, card_def.rules_text[:22], (rect.x + 6, rect.y + 34), color=(180, 180, 220))

        sizes = pile_sizes(self.state)
        draw_text(screen, fonts.ui, f"Draw: {sizes.draw}   Discard: {sizes.discard}", (40, 680))

        if self._message:
            draw_text(screen, fonts.ui, self._message, (40, 520), color=(240, 200, 120))
