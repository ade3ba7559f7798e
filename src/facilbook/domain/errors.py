"""Booking error taxonomy.

Validation errors and conflicts map to HTTP 400, NotFoundError to 404 and
StoreError to 500. Nothing here is retried.
"""

from __future__ import annotations


class BookingError(Exception):
    """Base class; ``message`` is safe to return to API clients."""

    message = "예약 처리 중 오류가 발생했습니다."

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(BookingError):
    """Request input was rejected before touching the store."""


class MissingFieldError(ValidationError):
    message = "필수 필드를 입력해주세요. (이름, 시설, 날짜, 시작시간, 종료시간)"

    def __init__(self, missing: list[str] | None = None) -> None:
        self.missing = list(missing or [])
        super().__init__()


class InvalidDateFormatError(ValidationError):
    message = "올바른 날짜 형식을 입력해주세요 (YYYY-MM-DD)."


class InvalidTimeFormatError(ValidationError):
    message = "올바른 시간 형식을 입력해주세요 (HH:mm)."


class PastDateError(ValidationError):
    message = "과거 날짜는 예약할 수 없습니다."


class InvalidTimeRangeError(ValidationError):
    message = "종료 시간은 시작 시간보다 늦어야 합니다."


class MissingRangeBoundsError(ValidationError):
    message = "시작일과 종료일을 입력하세요."


class ConflictError(BookingError):
    """The requested slot overlaps an existing reservation."""

    message = "해당 시간에 이미 예약이 있습니다."

    def __init__(self, conflicting_reservation_id: int | None = None) -> None:
        self.conflicting_reservation_id = conflicting_reservation_id
        super().__init__()


class NotFoundError(BookingError):
    message = "해당 예약을 찾을 수 없습니다."

    def __init__(self, reservation_id: int | None = None) -> None:
        self.reservation_id = reservation_id
        super().__init__()


class StoreError(BookingError):
    """Underlying persistence failure. The driver error is chained."""

    message = "데이터베이스 오류가 발생했습니다."
