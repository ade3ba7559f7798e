"""Shared test helper functions.

Regular functions, not fixtures, so test modules can import them directly.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from unittest.mock import MagicMock

from facilbook.infra.db import Store


def make_store(cur: MagicMock | None = None) -> tuple[Store, MagicMock, MagicMock]:
    """A real Store whose pool hands out a mocked connection.

    Returns:
        (store, conn, cur) so tests can assert on commit/rollback and SQL.
    """
    if cur is None:
        cur = MagicMock()
    conn = MagicMock()
    conn.cursor.return_value.__enter__.return_value = cur
    store = Store("dbname=facilbook_test user=test host=localhost")
    store._pool = MagicMock()
    store._pool.getconn.return_value = conn
    return store, conn, cur


def reservation_row(
    id: int = 1,
    name: str = "홍길동",
    phone: str = "미입력",
    facility: str = "체육관",
    detail: str = "-",
    day: date = date(2025, 6, 1),
    start: time = time(9, 0),
    end: time = time(10, 0),
    purpose: str | None = None,
    age: int | None = None,
    gender: str | None = None,
) -> tuple:
    """Row tuple in RESERVATION_COLUMNS order."""
    return (
        id,
        name,
        phone,
        age,
        gender,
        facility,
        detail,
        day,
        start,
        end,
        purpose,
        datetime(2025, 5, 20, 12, 0, tzinfo=timezone.utc),
    )


def facility_row(id: int, name: str, capacity: int = 10, rate: int = 1000) -> tuple:
    return (id, name, f"{name} 공간", capacity, rate)
