from __future__ import annotations

import argparse

import pygame  # type: ignore[import-not-found]

from hullbreach.paths import get_paths
from hullbreach.services.content import ContentService
from hullbreach.services.telemetry import TelemetryService

from .app import App, ClientOptions, GameContext
from .fonts import load_fonts
from .scenes.boot import BootScene


def main() -> int:
    parser = argparse.ArgumentParser(prog="hullbreach")
    parser.add_argument("--width", type=int, default=1024)
    parser.add_argument("--height", type=int, default=768)
    parser.add_argument("--encounter", default=None, help="encounter id from encounters.json")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--tick-ms", type=int, default=250, help="milliseconds between engine ticks")
    args = parser.parse_args()

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Hullbreach")

    clock = pygame.time.Clock()
    paths = get_paths()

    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    telemetry = TelemetryService(paths.userdata_dir / "telemetry.jsonl")

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        fonts=load_fonts(),
        content=content,
        telemetry=telemetry,
        options=ClientOptions(encounter_id=args.encounter, seed=args.seed, tick_ms=args.tick_ms),
    )

    app = App(ctx, BootScene(ctx))
    try:
        return app.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    raise SystemExit(main())
