"""Expansion core library: day-scoring engine plus its collaborators.

Public API re-exports for convenient imports:
    from expansion import evaluate_day, DayRecord, MicroNovelty, ...
"""

# Models
from expansion.models import (
    Mode,
    NoveltyFlag,
    MicroNovelty,
    NOVELTY_IDS,
    DayRecord,
    DayEvaluation,
    StatsSummary,
    CalendarCell,
)

# Engine
from expansion.scoring import (
    calculate_sludge,
    micro_novelty_score,
    streak_multiplier,
    building_score,
    expanding_score,
    calculate_score,
    tier_label,
)
from expansion.streak import compute_streak, qualifies_for_streak
from expansion.stagnation import detect_stagnation
from expansion.insight import get_insight
from expansion.engine import evaluate_day

# Errors
from expansion.errors import (
    ExpansionError,
    InvalidDateError,
    DaySubmittedError,
    StoreError,
)

# Workspace & settings
from expansion.workspace import (
    Settings,
    load_settings,
    init_workspace,
    configure_logging,
    workspace_root,
    today_str,
)

# Storage & orchestration
from expansion.store import HistoryStore, InMemoryHistoryStore, FileHistoryStore
from expansion.tracker import DayTracker
from expansion.autosave import SaveScheduler

# Statistics
from expansion.analytics import compute_stats, recent_scores, month_calendar
