"""Reservations repository - persistence for reservation records.

Uses raw SQL with psycopg2 (no ORM). Callers own the transaction.
"""

from __future__ import annotations

from datetime import date, time

from psycopg2.extensions import cursor as PgCursor

from facilbook.infra.db import fetchall, fetchone

RESERVATION_COLUMNS = (
    "id, name, phone, age, gender, facility, detail, "
    "date, start_time, end_time, purpose, created_at"
)


def insert_reservation(
    cur: PgCursor,
    *,
    name: str,
    phone: str,
    age: int | None,
    gender: str | None,
    facility: str,
    detail: str,
    day: date,
    start_time: time,
    end_time: time,
    purpose: str | None,
) -> tuple:
    """Insert a reservation and return the full stored row.

    May raise psycopg2.errors.ExclusionViolation if the slot overlaps an
    existing one (no_slot_overlap constraint).
    """
    row = fetchone(
        cur,
        f"""
        INSERT INTO reservations (
            name, phone, age, gender, facility, detail,
            date, start_time, end_time, purpose
        )
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
        RETURNING {RESERVATION_COLUMNS}
        """,
        (name, phone, age, gender, facility, detail, day, start_time, end_time, purpose),
    )
    return row


def select_all(cur: PgCursor) -> list[tuple]:
    return fetchall(
        cur,
        f"""
        SELECT {RESERVATION_COLUMNS}
        FROM reservations
        ORDER BY date DESC, start_time ASC
        """,
    )


def select_by_date(cur: PgCursor, day: date) -> list[tuple]:
    return fetchall(
        cur,
        f"""
        SELECT {RESERVATION_COLUMNS}
        FROM reservations
        WHERE date = %s
        ORDER BY start_time ASC
        """,
        (day,),
    )


def select_by_range(cur: PgCursor, start: date, end: date) -> list[tuple]:
    """Reservations with start <= date <= end."""
    return fetchall(
        cur,
        f"""
        SELECT {RESERVATION_COLUMNS}
        FROM reservations
        WHERE date >= %s AND date <= %s
        ORDER BY date ASC, start_time ASC
        """,
        (start, end),
    )


def select_for_update(cur: PgCursor, reservation_id: int) -> tuple | None:
    """Fetch one reservation and lock its row until the transaction ends."""
    return fetchone(
        cur,
        f"""
        SELECT {RESERVATION_COLUMNS}
        FROM reservations
        WHERE id = %s
        FOR UPDATE
        """,
        (reservation_id,),
    )


def update_reservation(
    cur: PgCursor,
    reservation_id: int,
    *,
    name: str,
    phone: str,
    facility: str,
    day: date,
    start_time: time,
    end_time: time,
    purpose: str | None,
) -> int:
    """Overwrite the editable fields. Returns the number of rows changed."""
    cur.execute(
        """
        UPDATE reservations
        SET name = %s, phone = %s, facility = %s, date = %s,
            start_time = %s, end_time = %s, purpose = %s
        WHERE id = %s
        """,
        (name, phone, facility, day, start_time, end_time, purpose, reservation_id),
    )
    return cur.rowcount


def delete_reservation(cur: PgCursor, reservation_id: int) -> int:
    """Delete by id. Returns the number of rows removed."""
    cur.execute("DELETE FROM reservations WHERE id = %s", (reservation_id,))
    return cur.rowcount
