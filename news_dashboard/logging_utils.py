"""Logging setup for the dashboard and its LLM interaction log.

Two loggers are configured from ``LoggingConfig``:
- ``news_dashboard``: operational events, rendered by rich on the console
  and optionally written to a JSONL (or plain) file
- ``news_dashboard.llm``: one JSON line per provider response, with
  URLs or whole payloads redacted according to ``llm_log_redaction``

Structured fields travel as ``extra`` keys (see ``log_event``) and become
top-level keys of each JSONL record.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
import re
from typing import Any, Callable

from rich.logging import RichHandler

from .config import LoggingConfig

APP_LOGGER = "news_dashboard"
LLM_LOGGER = "news_dashboard.llm"

_URL_RE = re.compile(r"https?://\S+")

_REDACTORS: dict[str, Callable[[str], str]] = {
    "none": lambda text: text,
    "redact_content": lambda text: "",
    "redact_urls": lambda text: _URL_RE.sub("[REDACTED_URL]", text),
}


def setup_logging(cfg: LoggingConfig) -> logging.Logger:
    """Configure the application logger and return it."""
    level = _level_from_string(cfg.level)
    logger = _reset_logger(APP_LOGGER, level)

    if cfg.console:
        console_handler = RichHandler(rich_tracebacks=True, show_time=False, show_path=False)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

    if cfg.file:
        formatter = JsonlFormatter() if cfg.format == "jsonl" else logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )
        _attach_file_handler(logger, Path(cfg.file), formatter, level)

    return logger


def setup_llm_logger(cfg: LoggingConfig) -> logging.Logger | None:
    """Configure the LLM interaction logger, or return None when disabled."""
    if not cfg.llm_log_file:
        return None
    level = _level_from_string(cfg.level)
    logger = _reset_logger(LLM_LOGGER, level)
    _attach_file_handler(logger, Path(cfg.llm_log_file), JsonlFormatter(), level)
    return logger


def log_event(logger: logging.Logger | None, message: str, **fields: Any) -> None:
    """Log an INFO event whose keyword fields land in the JSONL record."""
    if logger is None:
        return
    logger.info(message, extra=fields)


def redact_text(text: str, mode: str) -> str:
    """Apply an LLM log redaction mode; unknown modes leave text unchanged."""
    redactor = _REDACTORS.get(mode)
    if redactor is None:
        return text
    return redactor(text)


def truncate_text(text: str, max_chars: int = 20000) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "...(truncated)"


class JsonlFormatter(logging.Formatter):
    """One JSON object per record, extras merged in at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extract_extras(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


_RESERVED = set(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def _extract_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {key: value for key, value in record.__dict__.items() if key not in _RESERVED}


def _reset_logger(name: str, level: int) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False
    return logger


def _attach_file_handler(
    logger: logging.Logger,
    path: Path,
    formatter: logging.Formatter,
    level: int,
) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def _level_from_string(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)
