"""History storage collaborators for Expansion.

The scoring engine never touches storage; orchestration code is handed
a HistoryStore and queries it for snapshots.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from expansion.errors import StoreError
from expansion.fileio import read_json, write_json_atomic
from expansion.models import DayRecord
from expansion.workspace import days_path, workspace_root

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 90


class HistoryStore(Protocol):
    """Persists day records keyed uniquely by (user, date)."""

    def load_history(self, user: str, limit: int = DEFAULT_HISTORY_LIMIT) -> list[DayRecord]:
        """Most recent records first, at most *limit* of them (0 = all)."""
        ...

    def get_day(self, user: str, day: str) -> DayRecord | None:
        ...

    def upsert_day(self, user: str, record: DayRecord) -> DayRecord:
        ...


def _stamp(record: DayRecord, existing: DayRecord | None) -> None:
    now = datetime.now(timezone.utc).isoformat(timespec="seconds")
    record.created_at = existing.created_at if existing and existing.created_at else now
    record.updated_at = now


def _newest_first(records: list[DayRecord], limit: int) -> list[DayRecord]:
    ordered = sorted(records, key=lambda r: r.date, reverse=True)
    return ordered[:limit] if limit > 0 else ordered


class InMemoryHistoryStore:
    def __init__(self) -> None:
        self._days: dict[str, dict[str, DayRecord]] = {}

    def load_history(self, user: str, limit: int = DEFAULT_HISTORY_LIMIT) -> list[DayRecord]:
        return _newest_first(list(self._days.get(user, {}).values()), limit)

    def get_day(self, user: str, day: str) -> DayRecord | None:
        return self._days.get(user, {}).get(day)

    def upsert_day(self, user: str, record: DayRecord) -> DayRecord:
        by_date = self._days.setdefault(user, {})
        _stamp(record, by_date.get(record.date))
        by_date[record.date] = record
        return record


class FileHistoryStore:
    """One JSON file per user under <root>/days/, rewritten atomically."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root if root is not None else workspace_root()

    def _load_all(self, user: str) -> dict[str, DayRecord]:
        path = days_path(user, self.root)
        data = read_json(path)
        if data is None:
            return {}
        if not isinstance(data, dict) or not isinstance(data.get("days", []), list):
            raise StoreError("Unexpected history file layout", path=str(path))
        if data.get("user", user) != user:
            raise StoreError(f"History file belongs to {data['user']!r}, not {user!r}", path=str(path))
        by_date: dict[str, DayRecord] = {}
        for raw in data.get("days", []):
            record = DayRecord.from_dict(raw)
            if record.date:
                # Later entries win if a file ever holds duplicates.
                by_date[record.date] = record
        return by_date

    def _save_all(self, user: str, by_date: dict[str, DayRecord]) -> None:
        days = [by_date[k].to_dict() for k in sorted(by_date)]
        write_json_atomic(days_path(user, self.root), {"user": user, "days": days})

    def load_history(self, user: str, limit: int = DEFAULT_HISTORY_LIMIT) -> list[DayRecord]:
        return _newest_first(list(self._load_all(user).values()), limit)

    def get_day(self, user: str, day: str) -> DayRecord | None:
        return self._load_all(user).get(day)

    def upsert_day(self, user: str, record: DayRecord) -> DayRecord:
        by_date = self._load_all(user)
        _stamp(record, by_date.get(record.date))
        by_date[record.date] = record
        self._save_all(user, by_date)
        logger.debug("Stored %s for %s (submitted=%s)", record.date, user, record.submitted)
        return record
