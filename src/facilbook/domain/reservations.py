"""Reservation ledger.

Create and update run validation, then lock the (facility, detail, date)
unit and check for overlaps in the same transaction as the write, so two
concurrent requests for one slot cannot both succeed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Mapping

from psycopg2 import errors as pg_errors

from facilbook.infra.db import Store
from facilbook.infra.repositories import reservations_repository as repo
from facilbook.infra.time import local_today
from facilbook.observability.logging import get_logger

from .errors import ConflictError, NotFoundError
from .slot_conflict import assert_no_slot_conflict
from .validation import (
    PHONE_NOT_PROVIDED,
    format_time,
    parse_date,
    validate_range,
    validate_reservation,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class Reservation:
    id: int
    name: str
    phone: str
    age: int | None
    gender: str | None
    facility: str
    detail: str
    date: date
    start_time: time
    end_time: time
    purpose: str | None
    created_at: datetime | None

    @classmethod
    def from_row(cls, row: tuple) -> "Reservation":
        return cls(*row)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "age": self.age,
            "gender": self.gender,
            "facility": self.facility,
            "detail": self.detail,
            "date": self.date.isoformat(),
            "start_time": format_time(self.start_time),
            "end_time": format_time(self.end_time),
            "purpose": self.purpose,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


def create_reservation(
    store: Store,
    payload: Mapping[str, Any],
    *,
    today: date | None = None,
) -> Reservation:
    """Validate and book a slot.

    Args:
        store: Open store.
        payload: Request fields (name, phone, age, gender, facility, detail,
                 date, start_time, end_time, purpose).
        today: Reference date for the past-date rule. Defaults to the local
               calendar date.

    Returns:
        The persisted reservation, including its id and created_at.

    Raises:
        ValidationError: Any input rule failed (see validation module).
        ConflictError: The slot overlaps an existing reservation.
        StoreError: The database failed.
    """
    data = validate_reservation(
        payload, today=today if today is not None else local_today()
    ).with_defaults()

    with store.txn() as cur:
        assert_no_slot_conflict(
            cur,
            facility=data.facility,
            detail=data.detail,
            day=data.date,
            start_time=data.start_time,
            end_time=data.end_time,
        )
        try:
            row = repo.insert_reservation(
                cur,
                name=data.name,
                phone=data.phone,
                age=data.age,
                gender=data.gender,
                facility=data.facility,
                detail=data.detail,
                day=data.date,
                start_time=data.start_time,
                end_time=data.end_time,
                purpose=data.purpose,
            )
        except pg_errors.ExclusionViolation:
            raise ConflictError() from None

    reservation = Reservation.from_row(row)
    logger.info(
        "reservation created",
        extra={
            "extra_fields": {
                "reservation_id": reservation.id,
                "facility": reservation.facility,
                "detail": reservation.detail,
                "date": reservation.date.isoformat(),
            }
        },
    )
    return reservation


def list_all(store: Store) -> list[Reservation]:
    """Every reservation, newest date first, then by start time."""
    with store.txn() as cur:
        rows = repo.select_all(cur)
    return [Reservation.from_row(row) for row in rows]


def list_by_date(store: Store, day: date | str) -> list[Reservation]:
    """Reservations on one date ordered by start time."""
    if isinstance(day, str):
        day = parse_date(day)
    with store.txn() as cur:
        rows = repo.select_by_date(cur, day)
    return [Reservation.from_row(row) for row in rows]


def list_by_range(store: Store, start: date | str | None, end: date | str | None) -> list[Reservation]:
    """Reservations with start <= date <= end, ordered by date then start time.

    Raises:
        MissingRangeBoundsError: If either bound is missing.
    """
    start, end = validate_range(start, end)
    with store.txn() as cur:
        rows = repo.select_by_range(cur, start, end)
    return [Reservation.from_row(row) for row in rows]


def update_reservation(store: Store, reservation_id: int, payload: Mapping[str, Any]) -> None:
    """Overwrite name, phone, facility, date, times and purpose.

    The body goes through the same validation as creation except the
    past-date rule, and the new slot is checked for overlaps against every
    other reservation of the same unit. detail is not editable.

    Raises:
        ValidationError: Any input rule failed.
        NotFoundError: No reservation with this id.
        ConflictError: The new slot overlaps another reservation.
    """
    data = validate_reservation(payload, reject_past=False)

    with store.txn() as cur:
        row = repo.select_for_update(cur, reservation_id)
        if row is None:
            raise NotFoundError(reservation_id)
        current = Reservation.from_row(row)

        assert_no_slot_conflict(
            cur,
            facility=data.facility,
            detail=current.detail,
            day=data.date,
            start_time=data.start_time,
            end_time=data.end_time,
            exclude_reservation_id=reservation_id,
        )
        try:
            changed = repo.update_reservation(
                cur,
                reservation_id,
                name=data.name,
                phone=data.phone or PHONE_NOT_PROVIDED,
                facility=data.facility,
                day=data.date,
                start_time=data.start_time,
                end_time=data.end_time,
                purpose=data.purpose,
            )
        except pg_errors.ExclusionViolation:
            raise ConflictError() from None

        if changed == 0:
            raise NotFoundError(reservation_id)

    logger.info(
        "reservation updated",
        extra={"extra_fields": {"reservation_id": reservation_id}},
    )


def delete_reservation(store: Store, reservation_id: int) -> None:
    """Remove a reservation.

    Raises:
        NotFoundError: No reservation with this id.
    """
    with store.txn() as cur:
        deleted = repo.delete_reservation(cur, reservation_id)

    if deleted == 0:
        raise NotFoundError(reservation_id)

    logger.info(
        "reservation deleted",
        extra={"extra_fields": {"reservation_id": reservation_id}},
    )
