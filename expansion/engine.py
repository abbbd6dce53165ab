"""Single entry point that runs the scoring pipeline for one day.

history + reference date -> streak -> score -> stagnation -> insight

Pure: nothing here reads or writes storage, and the supplied history
is never mutated.
"""

from __future__ import annotations

from collections.abc import Iterable

from expansion.insight import get_insight
from expansion.models import DayEvaluation, DayRecord
from expansion.scoring import calculate_score
from expansion.stagnation import detect_stagnation
from expansion.streak import compute_streak


def evaluate_day(
    draft: DayRecord,
    history: Iterable[DayRecord],
    reference_date: str | None = None,
) -> DayEvaluation:
    """Evaluate *draft* against *history*.

    The streak is computed from the history as supplied (the stored
    version of the reference day included), not from the draft itself.
    """
    snapshot = list(history)
    ref = reference_date or draft.date
    streak = compute_streak(snapshot, ref)
    score = calculate_score(draft, streak)
    stagnating = detect_stagnation(snapshot)
    insight = get_insight(draft, score, streak, stagnating)
    return DayEvaluation(
        date=ref,
        score=score,
        streak=streak,
        stagnating=stagnating,
        insight=insight,
    )
