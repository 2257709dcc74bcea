"""
Persistent summary cache.

Summaries are stored in a single JSON file keyed by article link (or
title when the link is missing). Every write replaces the file
atomically: the new content goes to a temp file in the same directory
which is then renamed over the old one.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import json
import logging
import os
from pathlib import Path
import tempfile
from typing import Any, Callable

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SummaryCache:
    """Key-value store of generated summaries.

    Entries are only ever added or overwritten; empty values are refused.

    Attributes:
        path: JSON file backing the cache, or None for an in-memory cache
        ttl_days: Entries older than this are treated as missing (None: never expire)
    """

    def __init__(
        self,
        path: Path | None = None,
        clock: Clock = utc_now,
        ttl_days: int | None = None,
    ):
        self.path = path
        self.ttl_days = ttl_days
        self._clock = clock
        self._entries: dict[str, dict[str, Any]] = self._load()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def get(self, key: str) -> str | None:
        """Return the cached summary for ``key``, or None if absent or expired."""
        entry = self._entries.get(key)
        if not entry:
            return None
        if self._is_expired(entry):
            return None
        return entry.get("summary") or None

    def set(self, key: str, summary: str) -> bool:
        """Store a summary and persist the cache.

        Returns:
            False (and stores nothing) when the key or summary is empty
        """
        if not key or not summary or not summary.strip():
            return False
        self._entries[key] = {
            "summary": summary,
            "created_at": self._clock().isoformat(),
        }
        self._prune()
        self._save()
        return True

    def _prune(self) -> None:
        if self.ttl_days is None:
            return
        for stale in [k for k, v in self._entries.items() if self._is_expired(v)]:
            del self._entries[stale]

    def _is_expired(self, entry: dict[str, Any]) -> bool:
        if self.ttl_days is None:
            return False
        created_at = entry.get("created_at")
        try:
            created = datetime.fromisoformat(created_at)
        except (TypeError, ValueError):
            return True
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return self._clock() - created > timedelta(days=self.ttl_days)

    def _load(self) -> dict[str, dict[str, Any]]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable summary cache %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed summary cache %s", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, dict) and not self._is_expired(v)}

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self._entries, handle, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
