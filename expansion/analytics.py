"""History statistics for Expansion.

Mode breakdowns, the recent score series and a month calendar, all
computed from a history snapshot.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from datetime import date

from expansion.models import CalendarCell, DayRecord, Mode, StatsSummary
from expansion.streak import compute_streak

HEAVY_BUILDING = "💡 Heavy on Building. Consider an Expansion day to prevent neural grooves."
HEAVY_EXPANDING = "💡 Lots of exploring! Make sure to lock in Building days to compound gains."
BALANCED = "⚖️ Good balance between Building and Expanding."


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def mode_balance_hint(building_days: int, expanding_days: int) -> str:
    if building_days > expanding_days * 3:
        return HEAVY_BUILDING
    if expanding_days > building_days:
        return HEAVY_EXPANDING
    return BALANCED


def compute_stats(history: Iterable[DayRecord]) -> StatsSummary:
    records = list(history)
    summary = StatsSummary(total_days=len(records))
    if not records:
        return summary

    building = [r for r in records if r.mode is Mode.BUILDING]
    expanding = [r for r in records if r.mode is Mode.EXPANDING]

    summary.building_days = len(building)
    summary.expanding_days = len(expanding)
    summary.avg_building_focus = _mean([r.total_focus for r in building])
    summary.avg_building_score = _mean([r.score for r in building])
    summary.avg_expanding_novelty = _mean([float(r.macro_novelty or 0) for r in expanding])
    summary.avg_expanding_score = _mean([r.score for r in expanding])
    summary.submitted_days = sum(1 for r in records if r.submitted)

    latest = max(r.date for r in records)
    summary.current_streak = compute_streak(records, latest)
    summary.balance_hint = mode_balance_hint(summary.building_days, summary.expanding_days)
    return summary


def recent_scores(history: Iterable[DayRecord], n: int = 7) -> list[dict[str, object]]:
    """Last *n* (date, score) points, oldest first."""
    if n <= 0:
        return []
    ordered = sorted(history, key=lambda r: r.date)
    return [{"date": r.date, "score": r.score, "mode": r.mode.value} for r in ordered[-n:]]


def month_calendar(history: Iterable[DayRecord], year: int, month: int) -> list[CalendarCell]:
    """One cell per day of the month, filled from history where present."""
    by_date = {r.date: r for r in history}
    _first_weekday, days_in_month = calendar.monthrange(year, month)
    cells = []
    for dom in range(1, days_in_month + 1):
        key = date(year, month, dom).isoformat()
        cell = CalendarCell(date=key, day_of_month=dom)
        record = by_date.get(key)
        if record is not None:
            cell.score = record.score
            cell.mode = record.mode.value
            cell.submitted = record.submitted
        cells.append(cell)
    return cells
