"""Reservation input validation.

Checks run in a fixed order and the first failure wins:

1. required fields present (name, facility, date, start_time, end_time)
2. date is strictly YYYY-MM-DD and a real calendar day
3. start_time / end_time are strictly 24-hour HH:MM (end_time may be 24:00)
4. date is not before today (creation only)
5. start_time < end_time

The overlap check is the sixth step and lives in slot_conflict because it
needs the store.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import date, time
from typing import Any, Mapping

from .errors import (
    InvalidDateFormatError,
    InvalidTimeFormatError,
    InvalidTimeRangeError,
    MissingFieldError,
    MissingRangeBoundsError,
    PastDateError,
)

# Stored when the requester gives no phone number ("not provided").
PHONE_NOT_PROVIDED = "미입력"
# Stored when the reservation is for the facility as a whole, not a sub-unit.
DETAIL_NONE = "-"

REQUIRED_FIELDS = ("name", "facility", "date", "start_time", "end_time")

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_TIME_RE = re.compile(r"([01][0-9]|2[0-3]):([0-5][0-9])")
_END_OF_DAY_TEXT = "24:00"

# An end time of 24:00 is the last instant of the day. The time column cannot
# hold 24:00, so it is stored as time.max and read back as 24:00.
END_OF_DAY = time.max


@dataclass(frozen=True)
class ReservationInput:
    """A validated reservation request.

    phone and detail stay None when the caller omitted them;
    with_defaults() fills in the stored sentinels.
    """

    name: str
    facility: str
    date: date
    start_time: time
    end_time: time
    phone: str | None = None
    detail: str | None = None
    age: int | None = None
    gender: str | None = None
    purpose: str | None = None

    def with_defaults(self) -> "ReservationInput":
        return replace(
            self,
            phone=self.phone or PHONE_NOT_PROVIDED,
            detail=self.detail or DETAIL_NONE,
        )


def _blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def _optional_str(value: Any) -> str | None:
    if _blank(value):
        return None
    return str(value).strip()


def parse_date(value: Any) -> date:
    """Parse a strict YYYY-MM-DD calendar date.

    Raises:
        InvalidDateFormatError: On any other shape, or an impossible day
            such as 2025-02-30.
    """
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        raise InvalidDateFormatError()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidDateFormatError() from None


def parse_time(value: Any, *, allow_end_of_day: bool = False) -> time:
    """Parse a strict 24-hour HH:MM time of day.

    Args:
        value: Raw field value.
        allow_end_of_day: Accept "24:00" as END_OF_DAY (end times only).

    Raises:
        InvalidTimeFormatError: If value is not zero-padded HH:MM in 00:00-23:59
            (or exactly 24:00 when allowed).
    """
    if not isinstance(value, str):
        raise InvalidTimeFormatError()
    if allow_end_of_day and value == _END_OF_DAY_TEXT:
        return END_OF_DAY
    match = _TIME_RE.fullmatch(value)
    if match is None:
        raise InvalidTimeFormatError()
    return time(int(match.group(1)), int(match.group(2)))


def format_time(value: time) -> str:
    """HH:MM for a stored time, with END_OF_DAY shown as 24:00."""
    if value == END_OF_DAY:
        return _END_OF_DAY_TEXT
    return value.strftime("%H:%M")


def _parse_age(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        return int(value.strip())
    return None


def validate_reservation(
    payload: Mapping[str, Any],
    *,
    today: date | None = None,
    reject_past: bool = True,
) -> ReservationInput:
    """Validate a reservation request body.

    Args:
        payload: Raw request fields.
        today: Reference calendar date for the past-date rule.
        reject_past: Apply the past-date rule (creation only).

    Returns:
        ReservationInput without sentinel defaults applied.
    """
    missing = [
        f
        for f in REQUIRED_FIELDS
        if _blank(payload.get(f))
        or (f in ("name", "facility") and not isinstance(payload.get(f), str))
    ]
    if missing:
        raise MissingFieldError(missing)

    booking_date = parse_date(payload["date"])
    start = parse_time(payload["start_time"])
    end = parse_time(payload["end_time"], allow_end_of_day=True)

    if reject_past:
        if today is None:
            raise ValueError("today is required when reject_past is set")
        if booking_date < today:
            raise PastDateError()

    if start >= end:
        raise InvalidTimeRangeError()

    return ReservationInput(
        name=payload["name"].strip(),
        facility=payload["facility"].strip(),
        date=booking_date,
        start_time=start,
        end_time=end,
        phone=_optional_str(payload.get("phone")),
        detail=_optional_str(payload.get("detail")),
        age=_parse_age(payload.get("age")),
        gender=_optional_str(payload.get("gender")),
        purpose=_optional_str(payload.get("purpose")),
    )


def _range_bound(value: Any) -> date:
    if isinstance(value, date):
        return value
    return parse_date(value)


def validate_range(start: Any, end: Any) -> tuple[date, date]:
    """Validate inclusive date-range bounds for listing.

    Each bound may be a date or a YYYY-MM-DD string, independently.

    Raises:
        MissingRangeBoundsError: If either bound is absent.
        InvalidDateFormatError: If a string bound is not YYYY-MM-DD.
    """
    if _blank(start) or _blank(end):
        raise MissingRangeBoundsError()
    return _range_bound(start), _range_bound(end)
