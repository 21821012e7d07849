from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Mapping

from hullbreach.engine.state import Event


@dataclass
class TelemetryService:
    """Append-only JSONL log of client and engine activity."""

    path: Path

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False, default=str) + "\n")

    def log_events(self, events: Iterable[Event]) -> None:
        for ev in events:
            payload = {k: v for k, v in ev.items() if k != "type"}
            self.log(f"engine.{ev.get('type', 'UNKNOWN')}", payload)
