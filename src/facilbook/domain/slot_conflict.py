"""Slot conflict detection.

A bookable unit is a (facility, detail) pair. Two reservations of the same
unit on the same date conflict when their [start, end) intervals share a
point in time of day:

    new_start < existing_end AND existing_start < new_end

Strict inequality lets one booking end exactly when the next begins.
The reservations table carries the same rule as an exclusion constraint
(no_slot_overlap), so this check is the first of two layers.
"""

from __future__ import annotations

import logging
from datetime import date, time

from psycopg2.extensions import cursor as PgCursor

from facilbook.infra.db import advisory_xact_lock

from .errors import ConflictError
from .validation import format_time

logger = logging.getLogger(__name__)


def intervals_overlap(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """True if [start_a, end_a) and [start_b, end_b) share any instant."""
    return start_a < end_b and start_b < end_a


def lock_slot_day(cur: PgCursor, *, facility: str, detail: str, day: date) -> None:
    """Serialise writers for one bookable unit on one day.

    Held until the surrounding transaction ends, so a check followed by an
    insert in the same transaction cannot interleave with another writer.
    """
    advisory_xact_lock(cur, f"slot:{facility}\x1f{detail}\x1f{day.isoformat()}")


def check_slot_conflict(
    cur: PgCursor,
    *,
    facility: str,
    detail: str,
    day: date,
    start_time: time,
    end_time: time,
    exclude_reservation_id: int | None = None,
) -> int | None:
    """Find an existing reservation overlapping the requested slot.

    Args:
        cur: Database cursor (should be within a transaction).
        facility: Facility name.
        detail: Sub-unit qualifier, already defaulted.
        day: Reservation date.
        start_time: Requested start (inclusive).
        end_time: Requested end (exclusive).
        exclude_reservation_id: Reservation to ignore (for updates).

    Returns:
        The ID of the first conflicting reservation, or None.
    """
    conditions = [
        "facility = %s",
        "detail = %s",
        "date = %s",
        "start_time < %s",  # existing start < new end
        "end_time > %s",    # existing end > new start
    ]
    params: list = [facility, detail, day, end_time, start_time]

    if exclude_reservation_id is not None:
        conditions.append("id != %s")
        params.append(exclude_reservation_id)

    where = " AND ".join(conditions)

    cur.execute(
        f"""
        SELECT id, start_time, end_time
        FROM reservations
        WHERE {where}
        ORDER BY start_time
        LIMIT 1
        """,
        params,
    )
    row = cur.fetchone()

    if row is None:
        return None

    conflicting_id = row[0]
    # no requester fields in logs
    logger.warning(
        "slot conflict detected",
        extra={
            "extra_fields": {
                "facility": facility,
                "detail": detail,
                "date": day.isoformat(),
                "requested_start": format_time(start_time),
                "requested_end": format_time(end_time),
                "conflicting_reservation_id": conflicting_id,
                "existing_start": format_time(row[1]),
                "existing_end": format_time(row[2]),
            },
        },
    )
    return conflicting_id


def assert_no_slot_conflict(
    cur: PgCursor,
    *,
    facility: str,
    detail: str,
    day: date,
    start_time: time,
    end_time: time,
    exclude_reservation_id: int | None = None,
) -> None:
    """Lock the unit/day, then raise ConflictError on any overlap.

    All arguments are forwarded to check_slot_conflict.
    """
    lock_slot_day(cur, facility=facility, detail=detail, day=day)
    conflicting_id = check_slot_conflict(
        cur,
        facility=facility,
        detail=detail,
        day=day,
        start_time=start_time,
        end_time=end_time,
        exclude_reservation_id=exclude_reservation_id,
    )
    if conflicting_id is not None:
        raise ConflictError(conflicting_id)
