from __future__ import annotations

import json
import logging
import os
from typing import Mapping, Optional


TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        base = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def setup_logging(environ: Optional[Mapping[str, str]] = None) -> None:
    env = os.environ if environ is None else environ
    level_name = str(env.get("LOG_LEVEL", "") or "INFO").strip().upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    # Reloads (uvicorn --reload, tests) must not stack handlers.
    for handler in list(root.handlers):
        if getattr(handler, "_starframe", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    if str(env.get("LOG_FORMAT", "")).strip().lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    handler._starframe = True  # type: ignore[attr-defined]
    root.addHandler(handler)
