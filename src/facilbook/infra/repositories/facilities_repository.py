"""Facilities repository."""

from __future__ import annotations

from psycopg2.extensions import cursor as PgCursor

from facilbook.infra.db import fetchall, fetchone


def count_facilities(cur: PgCursor) -> int:
    row = fetchone(cur, "SELECT COUNT(*) FROM facilities")
    return int(row[0]) if row else 0


def insert_facility(
    cur: PgCursor,
    *,
    name: str,
    description: str | None,
    max_capacity: int,
    hourly_rate: int,
) -> int:
    row = fetchone(
        cur,
        """
        INSERT INTO facilities (name, description, max_capacity, hourly_rate)
        VALUES (%s, %s, %s, %s)
        RETURNING id
        """,
        (name, description, max_capacity, hourly_rate),
    )
    return row[0]


def select_all_facilities(cur: PgCursor) -> list[tuple]:
    return fetchall(
        cur,
        """
        SELECT id, name, description, max_capacity, hourly_rate
        FROM facilities
        ORDER BY name
        """,
    )
