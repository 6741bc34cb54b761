"""
JSONL logging bootstrap.
Initializes a single JSONL file sink early in CLI startup, plus an optional
Rich console handler for --verbose runs.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

from rich.logging import RichHandler

from target_platform.console import error_console

DEFAULT_PATH = os.environ.get("TARGET_PLATFORM_LOG_PATH", "./target-platform.log.jsonl")
DEFAULT_LEVEL = os.environ.get("TARGET_PLATFORM_LOG_LEVEL", "INFO").upper()

# LogRecord attributes that are not user-supplied extras
_RECORD_FIELDS = frozenset(
    (
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
    )
)


class JsonlHandler(logging.Handler):
    def __init__(self, path: str):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def format_record(self, record: logging.LogRecord) -> dict:
        base = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "lvl": record.levelname,
            "schema": {"name": "target-platform.log", "ver": "1.0.0"},
            "logger": record.name,
            "message": record.getMessage(),
        }
        msg = record.msg
        if isinstance(msg, dict):
            base.update(msg)
        for k, v in record.__dict__.items():
            if k in _RECORD_FIELDS:
                continue
            base.setdefault(k, v if isinstance(v, (str, int, float, bool, type(None))) else str(v))
        return base

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = json.dumps(self.format_record(record), ensure_ascii=False)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            self.handleError(record)


def init_json_logging(path: str | None = None, level: str | None = None, verbose: bool = False) -> None:
    path = path or DEFAULT_PATH
    level = (level or DEFAULT_LEVEL).upper()
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else getattr(logging, level, logging.INFO))
    # Remove existing handlers of the same kind to avoid duplicates
    for h in list(root.handlers):
        if isinstance(h, (JsonlHandler, RichHandler)):
            root.removeHandler(h)
    root.addHandler(JsonlHandler(path))
    if verbose:
        root.addHandler(RichHandler(console=error_console, show_path=False))
