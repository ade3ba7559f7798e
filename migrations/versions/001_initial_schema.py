"""Facilities and reservations tables with the no_slot_overlap constraint.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op

from facilbook.infra.schema import SCHEMA_SQL

revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # raw execution for the DO $$ ... $$ block
    conn = op.get_bind()
    conn.exec_driver_sql(SCHEMA_SQL)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS reservations")
    op.execute("DROP TABLE IF EXISTS facilities")
