"""Insight selection for Expansion.

One message per evaluation, picked from an ordered rule table
(first match wins):

1. stagnation warning
2. critical environment (the Room, 0.1x)
3. sludge warning
4. mode-specific wins
5. score tiers
"""

from __future__ import annotations

import math

from expansion.models import DayRecord, Mode
from expansion.scoring import micro_novelty_score, streak_multiplier

CRITICAL_ENVIRONMENT = 0.1
SLUDGE_GAP_WARNING = 2.0

STAGNATION = (
    "⚠️ Neural grooves are deep after 7 days. One pattern break—new place, "
    "new person, new method—resets the clock."
)
CRITICAL_ROOM = (
    "🚨 The Room is a trap. Your multiplier is 0.1x. Get to a Third Space "
    "and watch your score jump 10x."
)
SLUDGE = (
    "⚠️ Sludge is dragging you down. One clearing session (walk, workout, "
    "breathwork) neutralizes the penalty."
)
STREAK_MOMENTUM = (
    "🔥 {streak}-day execution streak! Streak multiplier at {multiplier:.1f}x. "
    "You're compounding into someone unstoppable."
)
PERFECT_BUILDING = (
    "⚡ High execution + neural novelty = perfect Building day. "
    "This is how you grow without stagnating."
)
ADD_NOVELTY = (
    "💪 Strong execution. Add one micro-novelty tomorrow (new book, "
    "conversation, or method) to keep the neural pathways fresh."
)
SOLID_BUILDING = (
    "🔨 Solid Building day. Keep stacking—your streak multiplier grows "
    "with consistency."
)
MAX_EXPANSION = (
    "🌍 Maximum expansion! Days like this create lifetime memories. "
    "Now capture the lessons."
)
SWEET_SPOT = (
    "🚀 High novelty + solid focus = the sweet spot. You're expanding AND building."
)
CHANNEL_TOMORROW = (
    "🗺️ Great exploration! Tomorrow, channel these new inputs into focused execution."
)
EXCEPTIONAL = "🏆 Exceptional day. Top-tier performance in either mode."
STRONG = "📈 Strong progress. You're moving the needle."
MOMENTUM = "🌱 Building momentum. Every logged day compounds."
DAY_LOGGED = "🎯 Day logged. Pick one variable to push higher tomorrow."


def _building_insight(day: DayRecord, streak: int) -> str | None:
    focus = day.total_focus
    novelty = micro_novelty_score(day.micro_novelty)
    if streak >= 7:
        return STREAK_MOMENTUM.format(streak=streak, multiplier=streak_multiplier(streak))
    if focus >= 6 and novelty >= 1:
        return PERFECT_BUILDING
    if focus >= 6 and novelty == 0:
        return ADD_NOVELTY
    if focus > 4:
        return SOLID_BUILDING
    return None


def _expanding_insight(day: DayRecord) -> str | None:
    focus = day.total_focus
    macro = day.macro_novelty or 0
    if macro >= 9:
        return MAX_EXPANSION
    if macro >= 7 and focus >= 2:
        return SWEET_SPOT
    if macro >= 7 and focus < 1:
        return CHANNEL_TOMORROW
    return None


def get_insight(day: DayRecord, score: float, streak: int, stagnating: bool) -> str:
    if stagnating:
        return STAGNATION
    # Checked in both modes even though it only matters for Building.
    if math.isclose(day.environment, CRITICAL_ENVIRONMENT):
        return CRITICAL_ROOM
    if day.dopamine - day.clearing > SLUDGE_GAP_WARNING:
        return SLUDGE

    if day.mode is Mode.BUILDING:
        message = _building_insight(day, streak)
    else:
        message = _expanding_insight(day)
    if message:
        return message

    if score >= 50:
        return EXCEPTIONAL
    if score >= 30:
        return STRONG
    if score >= 15:
        return MOMENTUM
    return DAY_LOGGED
