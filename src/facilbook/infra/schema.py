"""Schema DDL and startup bootstrap.

The DDL is idempotent so it can run on every process start; the Alembic
migration 001_initial_schema applies the same statements.

no_slot_overlap enforces the booking invariant in the database itself:
tsrange '[)' means a slot ending at 10:00 and one starting at 10:00 do not
collide. A 24:00 end is stored as 23:59:59.999999, which still sorts after
every HH:MM start, so the CHECK and the exclusion hold for it too.
"""

from __future__ import annotations

from psycopg2.extensions import cursor as PgCursor

SCHEMA_SQL = """
CREATE EXTENSION IF NOT EXISTS btree_gist;

CREATE TABLE IF NOT EXISTS facilities (
    id            SERIAL PRIMARY KEY,
    name          TEXT NOT NULL,
    description   TEXT,
    max_capacity  INTEGER CHECK (max_capacity > 0),
    hourly_rate   INTEGER NOT NULL DEFAULT 0 CHECK (hourly_rate >= 0)
);

CREATE TABLE IF NOT EXISTS reservations (
    id          SERIAL PRIMARY KEY,
    name        TEXT NOT NULL,
    phone       TEXT NOT NULL,
    age         INTEGER,
    gender      TEXT,
    facility    TEXT NOT NULL,
    detail      TEXT NOT NULL DEFAULT '-',
    date        DATE NOT NULL,
    start_time  TIME NOT NULL,
    end_time    TIME NOT NULL,
    purpose     TEXT,
    created_at  TIMESTAMPTZ NOT NULL DEFAULT now(),
    CONSTRAINT reservations_time_order CHECK (start_time < end_time)
);

CREATE INDEX IF NOT EXISTS idx_reservations_date_start
    ON reservations (date, start_time);

DO $$
BEGIN
    IF NOT EXISTS (
        SELECT 1 FROM pg_constraint WHERE conname = 'no_slot_overlap'
    ) THEN
        ALTER TABLE reservations
            ADD CONSTRAINT no_slot_overlap
            EXCLUDE USING gist (
                facility WITH =,
                detail WITH =,
                tsrange(date + start_time, date + end_time, '[)') WITH &&
            );
    END IF;
END
$$;
"""


def apply_schema(cur: PgCursor) -> None:
    """Create tables, indexes and constraints if they do not exist."""
    cur.execute(SCHEMA_SQL)
