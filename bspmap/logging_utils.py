"""Event logging for map generation and the HTTP host.

Every record is one line on stdout (stderr for errors): ``level``, ``ts``,
``logger`` and then the event fields as key=value pairs, or one JSON object
when BSPMAP_LOG_JSON is truthy. BSPMAP_LOG_LEVEL picks the threshold
(debug|info|warn|error, default info).

    from bspmap.logging_utils import get_logger
    log = get_logger("bspmap.api")
    log.info(event="map_created", seed=42)
    log.bind(seed=42).debug(event="map_generated", rooms=6)

Fields whose value is None are dropped.
"""

from __future__ import annotations

import json
import os
import sys
import time
from typing import Any, Dict

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("BSPMAP_LOG_LEVEL", "info").lower(), LEVELS["info"])
JSON_MODE = os.getenv("BSPMAP_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def _kv(key: str, value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        value = str(value).replace(" ", "_")
    return f"{key}={value}"


def format_record(level: str, fields: Dict[str, Any]) -> str:
    head = {"level": level, "ts": int(time.time())}
    body = {k: v for k, v in fields.items() if v is not None and k not in head}
    if JSON_MODE:
        return json.dumps({**body, **head}, separators=(",", ":"), default=str)
    return " ".join(_kv(k, v) for k, v in {**head, **body}.items())


class EventLogger:
    """Named logger with optional fixed context merged into every record."""

    __slots__ = ("name", "context")

    def __init__(self, name: str, context: Dict[str, Any] | None = None):
        self.name = name
        self.context = dict(context or {})

    def bind(self, **context) -> "EventLogger":
        return EventLogger(self.name, {**self.context, **context})

    def enabled(self, level: str) -> bool:
        return LEVELS[level] >= CURRENT_LEVEL

    def emit(self, level: str, /, **fields):
        if not self.enabled(level):
            return
        record = {"logger": self.name, **self.context, **fields}
        stream = sys.stderr if level == "error" else sys.stdout
        print(format_record(level, record), file=stream)

    def debug(self, **fields):
        self.emit("debug", **fields)

    def info(self, **fields):
        self.emit("info", **fields)

    def warn(self, **fields):
        self.emit("warn", **fields)

    def error(self, **fields):
        self.emit("error", **fields)


_LOGGERS: Dict[str, EventLogger] = {}


def get_logger(name: str) -> EventLogger:
    return _LOGGERS.setdefault(name, EventLogger(name))


log = get_logger("bspmap")
