"""Exception hierarchy for Expansion.

Every error carries a machine-readable `code` so API clients can
branch on it without parsing English messages. The scoring engine
itself never raises these; they come from storage and orchestration.
"""

from __future__ import annotations

from datetime import date
from typing import Any


class ExpansionError(Exception):
    """Base class for all application-level errors."""

    http_status: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidDateError(ExpansionError):
    http_status = 422
    code = "INVALID_DATE"

    def __init__(self, value: str):
        super().__init__(
            message=f"Invalid date: {value!r}. Expected YYYY-MM-DD.",
            details={"value": value},
        )


class DaySubmittedError(ExpansionError):
    http_status = 409
    code = "DAY_ALREADY_SUBMITTED"

    def __init__(self, day: str):
        super().__init__(
            message=f"Day {day} is already submitted.",
            details={"day": day},
        )


class StoreError(ExpansionError):
    http_status = 500
    code = "STORE_ERROR"

    def __init__(self, message: str, path: str | None = None):
        super().__init__(
            message=message,
            details={"path": path} if path else {},
        )


def parse_day(value: str) -> str:
    """Normalize an ISO date string, raising InvalidDateError otherwise."""
    try:
        return date.fromisoformat(str(value).strip()).isoformat()
    except ValueError:
        raise InvalidDateError(str(value)) from None
