from __future__ import annotations

import calendar
import logging
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from expansion import (
    DayRecord,
    DayTracker,
    ExpansionError,
    FileHistoryStore,
    Settings,
    compute_stats,
    configure_logging,
    load_settings,
    month_calendar,
    recent_scores,
    tier_label,
    today_str,
    workspace_root,
)
from expansion.errors import parse_day

logger = logging.getLogger(__name__)

app = FastAPI(title="Expansion Tracker", version="0.1.0")

configure_logging(load_settings().log_level)


@app.exception_handler(ExpansionError)
async def expansion_exception_handler(request: Request, exc: ExpansionError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


# ── Dependencies ──────────────────────────────────────────────


def get_settings() -> Settings:
    return load_settings(workspace_root())


def get_tracker(settings: Settings = Depends(get_settings)) -> DayTracker:
    return DayTracker(FileHistoryStore(workspace_root()), settings)


def _user(user: str | None, settings: Settings) -> str:
    return (user or "").strip() or settings.user


def _draft_from_payload(day: str, payload: dict[str, Any]) -> DayRecord:
    data = dict(payload)
    data["date"] = day
    data.pop("score", None)
    data.pop("submitted", None)
    try:
        return DayRecord.from_dict(data)
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid day payload: {e}")


def _day_response(record: DayRecord, evaluation: Any) -> dict[str, Any]:
    return {
        "day": record.to_dict(),
        "evaluation": evaluation.to_dict(),
        "tier": tier_label(evaluation.score, record.mode),
    }


# ── Endpoints ─────────────────────────────────────────────────


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/api/today")
def api_today() -> dict[str, str]:
    return {"today": today_str(workspace_root())}


@app.get("/api/days/{day}")
def api_get_day(
    day: str,
    user: str | None = None,
    settings: Settings = Depends(get_settings),
    tracker: DayTracker = Depends(get_tracker),
) -> dict[str, Any]:
    """Stored day (or a default draft) with its live evaluation."""
    uid = _user(user, settings)
    record = tracker.load_day(uid, day)
    return _day_response(record, tracker.evaluate(uid, record))


@app.put("/api/days/{day}")
def api_save_day(
    day: str,
    payload: dict[str, Any] = Body(...),
    user: str | None = None,
    settings: Settings = Depends(get_settings),
    tracker: DayTracker = Depends(get_tracker),
) -> dict[str, Any]:
    """Save a draft; the score is always recomputed server-side."""
    uid = _user(user, settings)
    draft = _draft_from_payload(parse_day(day), payload)
    evaluation = tracker.save_day(uid, draft)
    return {"ok": True, **_day_response(tracker.load_day(uid, day), evaluation)}


@app.post("/api/days/{day}/submit")
def api_submit_day(
    day: str,
    payload: dict[str, Any] = Body(...),
    user: str | None = None,
    settings: Settings = Depends(get_settings),
    tracker: DayTracker = Depends(get_tracker),
) -> dict[str, Any]:
    uid = _user(user, settings)
    draft = _draft_from_payload(parse_day(day), payload)
    evaluation = tracker.submit_day(uid, draft)
    return {"ok": True, **_day_response(tracker.load_day(uid, day), evaluation)}


@app.post("/api/evaluate")
def api_evaluate(
    payload: dict[str, Any] = Body(...),
    user: str | None = None,
    settings: Settings = Depends(get_settings),
    tracker: DayTracker = Depends(get_tracker),
) -> dict[str, Any]:
    """Evaluate a draft without storing it (live preview while typing)."""
    uid = _user(user, settings)
    day = parse_day(payload.get("date") or today_str(workspace_root()))
    draft = _draft_from_payload(day, payload)
    evaluation = tracker.evaluate(uid, draft)
    return {"evaluation": evaluation.to_dict(), "tier": tier_label(evaluation.score, draft.mode)}


@app.get("/api/history")
def api_history(
    limit: int | None = None,
    user: str | None = None,
    settings: Settings = Depends(get_settings),
    tracker: DayTracker = Depends(get_tracker),
) -> dict[str, Any]:
    uid = _user(user, settings)
    records = tracker.store.load_history(uid, limit or settings.history_days)
    return {"count": len(records), "days": [r.to_dict() for r in records]}


@app.get("/api/stats")
def api_stats(
    user: str | None = None,
    settings: Settings = Depends(get_settings),
    tracker: DayTracker = Depends(get_tracker),
) -> dict[str, Any]:
    history = tracker.history(_user(user, settings))
    return {
        "stats": compute_stats(history).to_dict(),
        "recent": recent_scores(history),
    }


@app.get("/api/calendar/{year}/{month}")
def api_calendar(
    year: int,
    month: int,
    user: str | None = None,
    settings: Settings = Depends(get_settings),
    tracker: DayTracker = Depends(get_tracker),
) -> dict[str, Any]:
    # Whole history, not just the scoring window, so older months fill in.
    history = tracker.store.load_history(_user(user, settings), 0)
    try:
        cells = month_calendar(history, year, month)
    except (calendar.IllegalMonthError, ValueError):
        raise HTTPException(status_code=400, detail=f"Invalid month: {year}-{month}")
    return {"year": year, "month": month, "days": [c.to_dict() for c in cells]}
