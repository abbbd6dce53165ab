"""Shared test fixtures for Expansion tests."""

from __future__ import annotations

import json
import os
from datetime import date, timedelta
from pathlib import Path
from typing import Any

import pytest
import yaml

from expansion.models import DayRecord, MicroNovelty, Mode


def _day(
    day: str,
    mode: Mode = Mode.BUILDING,
    business: float = 5.0,
    training: float = 1.0,
    dopamine: float = 0.0,
    clearing: float = 0.0,
    environment: float = 0.5,
    novelty: tuple[str, ...] = (),
    macro: int | None = 5,
    score: float = 0.0,
    submitted: bool = False,
) -> DayRecord:
    return DayRecord(
        date=day,
        mode=mode,
        environment=environment,
        business_focus=business,
        training_focus=training,
        micro_novelty=MicroNovelty.of(*novelty),
        macro_novelty=macro,
        dopamine=dopamine,
        clearing=clearing,
        score=score,
        submitted=submitted,
    )


@pytest.fixture
def make_day():
    """Factory for DayRecords; defaults describe a streak-qualifying Building day."""
    return _day


@pytest.fixture
def run_of_days():
    """N consecutive qualifying days ending at *end* (newest last)."""

    def build(end: str, n: int, **kwargs: Any) -> list[DayRecord]:
        last = date.fromisoformat(end)
        return [_day((last - timedelta(days=i)).isoformat(), **kwargs) for i in reversed(range(n))]

    return build


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with a profile and one user's history."""
    root = tmp_path / "workspace"
    (root / "days").mkdir(parents=True)

    profile = {
        "timezone": "UTC",
        "user": "alice",
        "history_days": 90,
        "autosave_delay_seconds": 0.05,
        "log_level": "DEBUG",
    }
    (root / "profile.yaml").write_text(
        yaml.dump(profile, default_flow_style=False), encoding="utf-8"
    )

    history = {
        "user": "alice",
        "days": [
            {
                "date": "2026-02-08",
                "mode": "building",
                "environment": 0.8,
                "businessFocus": 4,
                "trainingFocus": 1,
                "microNovelty": [{"id": "newBook", "active": True, "note": "Deep Work ch. 2"}],
                "macroNovelty": None,
                "dopamine": 1,
                "clearing": 1,
                "score": 6.0,
                "submitted": True,
            },
            {
                "date": "2026-02-09",
                "mode": "building",
                "environment": 0.8,
                "businessFocus": 5,
                "trainingFocus": 1,
                "microNovelty": [],
                "macroNovelty": None,
                "dopamine": 0,
                "clearing": 0,
                "score": 5.3,
                "submitted": True,
            },
            {
                "date": "2026-02-10",
                "mode": "expanding",
                "environment": 0.5,
                "businessFocus": 1,
                "trainingFocus": 0,
                "microNovelty": [],
                "macroNovelty": 8,
                "dopamine": 2,
                "clearing": 1,
                "score": 6.4,
                "submitted": False,
            },
        ],
    }
    (root / "days" / "alice.json").write_text(json.dumps(history, indent=2), encoding="utf-8")

    os.environ["EXPANSION_ROOT"] = str(root)
    yield root
    if "EXPANSION_ROOT" in os.environ:
        del os.environ["EXPANSION_ROOT"]
