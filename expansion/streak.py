"""Consecutive-day streak counting for Expansion."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from expansion.models import DayRecord
from expansion.scoring import calculate_sludge

MIN_STREAK_FOCUS = 4.0
DOPAMINE_CEILING = 4.0
MAX_NET_SLUDGE = 2.0


def qualifies_for_streak(day: DayRecord) -> bool:
    """A day counts if focus > 4h, dopamine < 4 and net sludge <= 2."""
    if day.total_focus <= MIN_STREAK_FOCUS:
        return False
    # No amount of clearing rescues a day at the dopamine ceiling.
    if day.dopamine >= DOPAMINE_CEILING:
        return False
    return calculate_sludge(day.dopamine, day.clearing) <= MAX_NET_SLUDGE


def compute_streak(history: Iterable[DayRecord], reference_date: str) -> int:
    """Count qualifying consecutive days walking back from *reference_date*.

    Records after the reference date are ignored. The walk stops at the
    first date gap of more than one day or the first day that does not
    qualify; a bad record on the reference date itself yields 0.
    """
    ref = date.fromisoformat(reference_date)
    eligible = [d for d in history if d.date <= reference_date]
    eligible.sort(key=lambda d: d.date, reverse=True)

    streak = 0
    expected = ref
    for day in eligible:
        day_date = date.fromisoformat(day.date)
        if (expected - day_date).days > 1:
            break
        if not qualifies_for_streak(day):
            break
        streak += 1
        expected = day_date
    return streak
