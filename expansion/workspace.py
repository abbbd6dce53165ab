"""Workspace root, settings, timezone and path helpers for Expansion."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any
from urllib.parse import quote
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from expansion.fileio import read_yaml, write_yaml_atomic

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def workspace_root() -> Path:
    """Get the workspace root directory (contains profile.yaml and days/)."""
    return Path(
        os.environ.get("EXPANSION_ROOT", str(Path.home() / "expansion"))
    ).expanduser().resolve()


# ── Settings ──────────────────────────────────────────────────


@dataclass
class Settings:
    timezone: str = "UTC"
    user: str = "default"
    history_days: int = 90
    autosave_delay_seconds: float = 1.5
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            timezone=str(d.get("timezone", "UTC")),
            user=str(d.get("user", "default")),
            history_days=int(d.get("history_days", 90)),
            autosave_delay_seconds=float(d.get("autosave_delay_seconds", 1.5)),
            log_level=str(d.get("log_level", "INFO")).upper(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "timezone": self.timezone,
            "user": self.user,
            "history_days": self.history_days,
            "autosave_delay_seconds": self.autosave_delay_seconds,
            "log_level": self.log_level,
        }


def load_settings(root: Path | None = None) -> Settings:
    """Load profile.yaml, falling back to defaults if missing or broken."""
    if root is None:
        root = workspace_root()
    path = profile_path(root)
    try:
        return Settings.from_dict(read_yaml(path))
    except (yaml.YAMLError, ValueError, TypeError) as e:
        logger.warning("Ignoring unreadable profile %s: %s", path, e)
        return Settings()


def init_workspace(root: Path | None = None, settings: Settings | None = None) -> Path:
    """Create the workspace layout and a default profile.yaml if absent."""
    if root is None:
        root = workspace_root()
    days_dir(root).mkdir(parents=True, exist_ok=True)
    if not profile_path(root).exists():
        write_yaml_atomic(profile_path(root), (settings or Settings()).to_dict())
        logger.info("Initialized workspace at %s", root)
    return root


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


# ── Time ──────────────────────────────────────────────────────


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """Get user's timezone from profile.yaml, defaulting to UTC."""
    name = load_settings(root).timezone
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using UTC", name)
        return ZoneInfo("UTC")


def today_str(root: Path | None = None) -> str:
    """Get today's date string (YYYY-MM-DD) in user's timezone."""
    tz = get_user_timezone(root)
    return datetime.now(tz).date().isoformat()


# ── Path helpers ──────────────────────────────────────────────


def profile_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "profile.yaml"


def days_dir(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "days"


def days_path(user: str, root: Path | None = None) -> Path:
    """One history file per user, named by the percent-encoded user id.

    The encoding is reversible, so distinct ids never share a file.
    """
    if not user:
        raise ValueError("user id must not be empty")
    name = quote(user, safe="")
    return days_dir(root) / f"{name}.json"
