from __future__ import annotations
import json
from datetime import datetime, timezone
from pathlib import Path

LOG_NAME = "planedit.log"

def log_event(log_dir: str | Path, message: str, *, kind: str = "info", data: dict | None = None) -> Path:
    """Ajoute une ligne `ts | kind | message | data-json` au journal de log_dir."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    path = log_dir / LOG_NAME
    ts = datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
    line = f"{ts} | {kind} | {message}"
    if data:
        line += " | " + json.dumps(data, ensure_ascii=False)
    with path.open("a", encoding="utf-8") as f:
        f.write(line.replace("\n", " ") + "\n")
    return path
