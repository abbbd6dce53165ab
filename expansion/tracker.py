"""Day tracking: loading, evaluating, saving and submitting a day.

The save pipeline:
1. Validate the date
2. Refuse to touch a day that is already submitted
3. Drop the novelty value the day's mode does not use
4. Evaluate against the stored history (streak, score, stagnation, insight)
5. Persist with the recomputed score
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace

from expansion.autosave import SaveScheduler
from expansion.engine import evaluate_day
from expansion.errors import DaySubmittedError, parse_day
from expansion.models import DayEvaluation, DayRecord, Mode
from expansion.store import HistoryStore
from expansion.workspace import Settings

logger = logging.getLogger(__name__)

DEFAULT_MACRO_NOVELTY = 5


class DayTracker:
    # Shared by every tracker: the API builds one per request.
    _lock = threading.RLock()

    def __init__(self, store: HistoryStore, settings: Settings | None = None) -> None:
        self.store = store
        self.settings = settings or Settings()

    def history(self, user: str) -> list[DayRecord]:
        return self.store.load_history(user, self.settings.history_days)

    def load_day(self, user: str, day: str) -> DayRecord:
        """Stored record for *day*, or a fresh default draft."""
        day = parse_day(day)
        existing = self.store.get_day(user, day)
        if existing is None:
            return DayRecord(date=day)
        if existing.macro_novelty is None:
            # Building days are stored without a macro value; give the
            # form a starting point should the user switch modes.
            return replace(existing, macro_novelty=DEFAULT_MACRO_NOVELTY)
        return existing

    def evaluate(self, user: str, draft: DayRecord) -> DayEvaluation:
        draft = replace(draft, date=parse_day(draft.date))
        return evaluate_day(draft, self.history(user))

    def save_day(self, user: str, draft: DayRecord, submit: bool = False) -> DayEvaluation:
        """Recompute and store *draft*; with submit=True the day is frozen."""
        day = parse_day(draft.date)
        record = replace(draft, date=day)
        if record.mode is Mode.BUILDING:
            record.macro_novelty = None

        # Autosave writes from a timer thread; check and upsert as one step.
        with self._lock:
            existing = self.store.get_day(user, day)
            if existing is not None and existing.submitted:
                raise DaySubmittedError(day)
            evaluation = evaluate_day(record, self.history(user))
            record.score = evaluation.score
            record.submitted = submit
            self.store.upsert_day(user, record)

        logger.info(
            "%s %s for %s: score=%.1f streak=%d",
            "Submitted" if submit else "Saved draft",
            day,
            user,
            evaluation.score,
            evaluation.streak,
        )
        return evaluation

    def submit_day(self, user: str, draft: DayRecord) -> DayEvaluation:
        return self.save_day(user, draft, submit=True)

    def autosaver(self, user: str) -> SaveScheduler:
        """Debounced draft saving for *user*, using the configured delay."""
        return SaveScheduler(
            lambda draft: self.save_day(user, draft),
            delay=self.settings.autosave_delay_seconds,
        )
