"""Typed dataclasses for the Expansion data model.

All models use from_dict/to_dict for JSON/YAML serialization.
camelCase in JSON is mapped to snake_case in Python; the snake_case
column names of the original table are accepted on read as well.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Mode(str, Enum):
    """Which formula and which novelty signal a day is scored with."""

    BUILDING = "building"
    EXPANDING = "expanding"

    @classmethod
    def parse(cls, value: Any) -> Mode:
        if isinstance(value, Mode):
            return value
        text = str(value or "").strip().lower()
        return cls.EXPANDING if text == cls.EXPANDING.value else cls.BUILDING


# ── Micro-novelty ─────────────────────────────────────────────

NOVELTY_IDS = ("newBook", "newPerson", "newMethod", "newPlace", "newChallenge")

NOVELTY_LABELS = {
    "newBook": "New Knowledge",
    "newPerson": "New Conversation",
    "newMethod": "New Method",
    "newPlace": "New Spot",
    "newChallenge": "Hard Challenge",
}


def _as_bool(value: Any) -> bool:
    """JSON booleans as-is; "true"/"false" style strings parsed, not truth-tested."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    if isinstance(value, (int, float)):
        return value != 0
    return False


@dataclass
class NoveltyFlag:
    id: str
    active: bool = False
    note: str | None = None

    @property
    def label(self) -> str:
        return NOVELTY_LABELS.get(self.id, self.id)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"id": self.id, "active": self.active}
        if self.note:
            d["note"] = self.note
        return d


@dataclass
class MicroNovelty:
    """The five Building-mode novelty flags, always in NOVELTY_IDS order."""

    flags: list[NoveltyFlag] = field(
        default_factory=lambda: [NoveltyFlag(id=i) for i in NOVELTY_IDS]
    )

    @classmethod
    def of(cls, *active: str, notes: dict[str, str] | None = None) -> MicroNovelty:
        """Build a set with the given flag ids switched on."""
        unknown = set(active) - set(NOVELTY_IDS)
        if unknown:
            raise ValueError(f"Unknown novelty flag(s): {', '.join(sorted(unknown))}")
        notes = notes or {}
        return cls([NoveltyFlag(id=i, active=i in active, note=notes.get(i)) for i in NOVELTY_IDS])

    @classmethod
    def from_dict(cls, d: Any) -> MicroNovelty:
        """Accept either the list form or the legacy keyed form.

        List:   [{"id": "newBook", "active": true, "note": "..."}, ...]
        Keyed:  {"newBook": true, "newBookText": "...", ...}
        """
        by_id: dict[str, NoveltyFlag] = {}
        if isinstance(d, list):
            for entry in d:
                if isinstance(entry, dict) and entry.get("id") in NOVELTY_IDS:
                    by_id[entry["id"]] = NoveltyFlag(
                        id=entry["id"],
                        active=_as_bool(entry.get("active")),
                        note=entry.get("note") or None,
                    )
        elif isinstance(d, dict):
            for flag_id in NOVELTY_IDS:
                by_id[flag_id] = NoveltyFlag(
                    id=flag_id,
                    active=_as_bool(d.get(flag_id)),
                    note=d.get(f"{flag_id}Text") or None,
                )
        return cls([by_id.get(i, NoveltyFlag(id=i)) for i in NOVELTY_IDS])

    def to_dict(self) -> list[dict[str, Any]]:
        return [f.to_dict() for f in self.flags]

    def is_active(self, flag_id: str) -> bool:
        for f in self.flags:
            if f.id == flag_id:
                return f.active
        raise KeyError(flag_id)

    def active_count(self) -> int:
        return sum(1 for f in self.flags if f.active)


# ── Day record ────────────────────────────────────────────────


def _pick(d: dict[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in d:
        return d[camel]
    return d.get(snake, default)


@dataclass
class DayRecord:
    date: str = ""
    mode: Mode = Mode.BUILDING
    environment: float = 0.5
    business_focus: float = 0.0
    training_focus: float = 0.0
    micro_novelty: MicroNovelty = field(default_factory=MicroNovelty)
    macro_novelty: int | None = 5
    dopamine: float = 0.0
    clearing: float = 0.0
    score: float = 0.0
    submitted: bool = False
    created_at: str = ""
    updated_at: str = ""

    @property
    def total_focus(self) -> float:
        return self.business_focus + self.training_focus

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DayRecord:
        if not d or not isinstance(d, dict):
            return cls()
        macro = _pick(d, "macroNovelty", "macro_novelty", 5)
        environment = d.get("environment")
        return cls(
            date=str(d.get("date", "")),
            mode=Mode.parse(d.get("mode")),
            environment=float(environment) if environment is not None else 0.5,
            business_focus=float(_pick(d, "businessFocus", "business_focus", 0.0) or 0.0),
            training_focus=float(_pick(d, "trainingFocus", "training_focus", 0.0) or 0.0),
            micro_novelty=MicroNovelty.from_dict(_pick(d, "microNovelty", "micro_novelty")),
            macro_novelty=int(macro) if macro is not None else None,
            dopamine=float(d.get("dopamine", 0.0) or 0.0),
            clearing=float(d.get("clearing", 0.0) or 0.0),
            score=float(d.get("score", 0.0) or 0.0),
            submitted=bool(d.get("submitted", False)),
            created_at=str(_pick(d, "createdAt", "created_at", "") or ""),
            updated_at=str(_pick(d, "updatedAt", "updated_at", "") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "date": self.date,
            "mode": self.mode.value,
            "environment": self.environment,
            "businessFocus": self.business_focus,
            "trainingFocus": self.training_focus,
            "microNovelty": self.micro_novelty.to_dict(),
            "macroNovelty": self.macro_novelty,
            "dopamine": self.dopamine,
            "clearing": self.clearing,
            "score": self.score,
            "submitted": self.submitted,
        }
        if self.created_at:
            d["createdAt"] = self.created_at
        if self.updated_at:
            d["updatedAt"] = self.updated_at
        return d


# ── Engine output ─────────────────────────────────────────────


@dataclass
class DayEvaluation:
    date: str
    score: float
    streak: int
    stagnating: bool
    insight: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "score": self.score,
            "streak": self.streak,
            "stagnating": self.stagnating,
            "insight": self.insight,
        }


# ── Statistics ────────────────────────────────────────────────


@dataclass
class StatsSummary:
    building_days: int = 0
    expanding_days: int = 0
    avg_building_focus: float = 0.0
    avg_building_score: float = 0.0
    avg_expanding_novelty: float = 0.0
    avg_expanding_score: float = 0.0
    total_days: int = 0
    submitted_days: int = 0
    current_streak: int = 0
    balance_hint: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "buildingDays": self.building_days,
            "expandingDays": self.expanding_days,
            "avgBuildingFocus": round(self.avg_building_focus, 1),
            "avgBuildingScore": round(self.avg_building_score, 1),
            "avgExpandingNovelty": round(self.avg_expanding_novelty, 1),
            "avgExpandingScore": round(self.avg_expanding_score, 1),
            "totalDays": self.total_days,
            "submittedDays": self.submitted_days,
            "currentStreak": self.current_streak,
            "balanceHint": self.balance_hint,
        }


@dataclass
class CalendarCell:
    date: str
    day_of_month: int
    score: float | None = None
    mode: str | None = None
    submitted: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "dayOfMonth": self.day_of_month,
            "score": self.score,
            "mode": self.mode,
            "submitted": self.submitted,
        }
