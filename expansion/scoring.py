"""Day score computation for Expansion.

Building:  E × F × (1 + N) × streak multiplier / (1 + sludge)
Expanding: N × (F + 1) / (1 + sludge)   (environment fixed at 1.0)
"""

from __future__ import annotations

import math

from expansion.models import DayRecord, MicroNovelty, Mode

CLEARING_WEIGHT = 0.5
NOVELTY_FLAG_WEIGHT = 0.5
STREAK_STEP = 0.1
STREAK_CAP = 1.5
EXPANDING_ENVIRONMENT = 1.0


def round1(value: float) -> float:
    """Round to one decimal, halves away from zero on the positive side (0.25 -> 0.3)."""
    return math.floor(value * 10 + 0.5) / 10


def calculate_sludge(dopamine: float, clearing: float) -> float:
    """Net distraction penalty; clearing only cancels half its weight."""
    return max(0.0, dopamine - clearing * CLEARING_WEIGHT)


def micro_novelty_score(micro: MicroNovelty) -> float:
    return micro.active_count() * NOVELTY_FLAG_WEIGHT


def streak_multiplier(streak: int) -> float:
    return min(1 + STREAK_STEP * streak, STREAK_CAP)


def building_score(day: DayRecord, streak: int) -> float:
    """Focus is a hard gate here: zero focus always scores zero."""
    focus = day.total_focus
    novelty = micro_novelty_score(day.micro_novelty)
    sludge = calculate_sludge(day.dopamine, day.clearing)
    raw = day.environment * focus * (1 + novelty) * streak_multiplier(streak) / (1 + sludge)
    return round1(raw)


def expanding_score(day: DayRecord) -> float:
    """Focus is additive here, so a zero-focus day still scores on novelty."""
    focus = day.total_focus
    novelty = day.macro_novelty or 0
    sludge = calculate_sludge(day.dopamine, day.clearing)
    raw = EXPANDING_ENVIRONMENT * novelty * (focus + 1) / (1 + sludge)
    return round1(raw)


def calculate_score(day: DayRecord, streak: int) -> float:
    if day.mode is Mode.BUILDING:
        return building_score(day, streak)
    return expanding_score(day)


def tier_label(score: float, mode: Mode) -> str:
    if mode is Mode.BUILDING:
        if score >= 35:
            return "Exceptional"
        if score >= 25:
            return "Excellent"
        if score >= 15:
            return "Strong"
        if score >= 8:
            return "Solid"
        return "Building"
    if score >= 50:
        return "Full Expansion"
    if score >= 30:
        return "Exploring"
    if score >= 15:
        return "Discovering"
    return "Starting"
