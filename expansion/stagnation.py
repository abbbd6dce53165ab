"""Stagnation detection: a week of Building days without fresh input."""

from __future__ import annotations

from collections.abc import Iterable

from expansion.models import DayRecord, Mode

STAGNATION_WINDOW = 7

# newPlace and newChallenge are intentionally not part of this check.
STAGNATION_FLAGS = ("newBook", "newPerson", "newMethod")


def detect_stagnation(history: Iterable[DayRecord]) -> bool:
    recent = sorted(history, key=lambda d: d.date, reverse=True)[:STAGNATION_WINDOW]
    if len(recent) < STAGNATION_WINDOW:
        return False
    return all(
        day.mode is Mode.BUILDING
        and not any(day.micro_novelty.is_active(f) for f in STAGNATION_FLAGS)
        for day in recent
    )
