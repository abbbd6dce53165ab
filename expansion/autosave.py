"""Debounced draft saving for Expansion.

Every edit calls schedule(); the save only runs once edits have been
quiet for `delay` seconds. Loading existing data is not an edit and
must not schedule anything. Submitted days are never autosaved.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from expansion.models import DayRecord

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 1.5


class SaveScheduler:
    def __init__(self, save: Callable[[DayRecord], Any], delay: float = DEFAULT_DELAY) -> None:
        self._save = save
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._draft: DayRecord | None = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._draft is not None

    def schedule(self, draft: DayRecord) -> bool:
        """Queue *draft* for saving, restarting the debounce window."""
        if draft.submitted:
            return False
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._draft = draft
            self._generation += 1
            self._timer = threading.Timer(self.delay, self._fire, args=(self._generation,))
            self._timer.daemon = True
            self._timer.start()
        return True

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._draft = None

    def flush(self) -> bool:
        """Run the pending save now. Returns False if nothing was pending."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            draft, self._draft = self._draft, None
        if draft is None:
            return False
        self._run(draft)
        return True

    def wait(self, timeout: float | None = None) -> None:
        """Block until the currently scheduled timer has fired."""
        timer = self._timer
        if timer is not None:
            timer.join(timeout)

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A newer schedule() or a flush() superseded this timer.
            if generation != self._generation or self._timer is None:
                return
            draft, self._draft = self._draft, None
        try:
            if draft is not None:
                self._run(draft)
        finally:
            with self._lock:
                if generation == self._generation:
                    self._timer = None

    def _run(self, draft: DayRecord) -> None:
        try:
            self._save(draft)
        except Exception:
            logger.exception("Autosave of %s failed", draft.date)
            raise
