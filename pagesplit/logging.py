"""JSON-lines event log: progress on stdout, warnings on stderr."""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, TextIO


def _emit(stream: TextIO, level: str, event: str, fields: Dict[str, Any]) -> None:
    payload = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "event": event,
        **fields,
    }
    json.dump(payload, stream, default=str)
    stream.write("\n")
    stream.flush()


def log(event: str, **fields: Any) -> None:
    _emit(sys.stdout, "info", event, fields)


def warn(event: str, warning: str, message: str, **fields: Any) -> None:
    _emit(sys.stderr, "warning", event, {"warning": warning, "message": message, **fields})


__all__ = ["log", "warn"]
