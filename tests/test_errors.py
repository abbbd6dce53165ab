"""Tests for expansion/errors.py — codes, statuses and payloads."""

import pytest

from expansion.errors import (
    DaySubmittedError,
    ExpansionError,
    InvalidDateError,
    StoreError,
    parse_day,
)


class TestExceptionClasses:
    def test_base_error(self):
        err = ExpansionError("boom")
        assert err.http_status == 500
        assert err.to_dict() == {"code": "INTERNAL_ERROR", "message": "boom"}

    def test_day_submitted_error(self):
        err = DaySubmittedError("2026-02-20")
        assert err.http_status == 409
        assert err.code == "DAY_ALREADY_SUBMITTED"
        assert "2026-02-20" in err.message
        assert err.to_dict()["details"]["day"] == "2026-02-20"

    def test_invalid_date_error(self):
        err = InvalidDateError("yesterday")
        assert err.http_status == 422
        assert err.details == {"value": "yesterday"}

    def test_store_error_without_path(self):
        err = StoreError("disk gone")
        assert err.code == "STORE_ERROR"
        assert "details" not in err.to_dict()


def test_parse_day_normalizes():
    assert parse_day(" 2026-03-01 ") == "2026-03-01"


@pytest.mark.parametrize("value", ["", "2026-02-30", "03/01/2026", "tomorrow"])
def test_parse_day_rejects(value):
    with pytest.raises(InvalidDateError):
        parse_day(value)
