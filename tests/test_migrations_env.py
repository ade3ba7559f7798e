"""Tests for migrations/env_helpers.py DSN-to-URL conversion."""

from __future__ import annotations

import os
import sys

import pytest

# Make migrations importable without an alembic context
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from migrations.env_helpers import _get_database_url, _libpq_dsn_to_url  # noqa: E402


class TestLibpqDsnToUrl:
    def test_tcp_host(self):
        dsn = "dbname=facilbook user=admin password=pw host=localhost port=5432"
        assert _libpq_dsn_to_url(dsn) == "postgresql+psycopg2://admin:pw@localhost:5432/facilbook"

    def test_default_port(self):
        dsn = "dbname=db user=u password=p host=myhost"
        assert _libpq_dsn_to_url(dsn) == "postgresql+psycopg2://u:p@myhost:5432/db"

    def test_unix_socket(self):
        dsn = "dbname=db user=u password=p host=/var/run/postgresql"
        assert _libpq_dsn_to_url(dsn) == (
            "postgresql+psycopg2://u:p@/db?host=%2Fvar%2Frun%2Fpostgresql"
        )

    def test_special_chars_encoded(self):
        dsn = "dbname=db user=u@domain password=p@ss=word host=h port=5432"
        result = _libpq_dsn_to_url(dsn)
        assert "u%40domain" in result
        assert "p%40ss%3Dword" in result

    def test_quoted_password_with_spaces(self):
        dsn = "dbname=db user=u password='p@ss w0rd' host=h port=5432"
        assert "p%40ss+w0rd" in _libpq_dsn_to_url(dsn)

    def test_db_password_env_fallback(self, monkeypatch):
        monkeypatch.setenv("DB_PASSWORD", "from-env")
        result = _libpq_dsn_to_url("dbname=db user=u host=h port=5432")
        assert ":from-env@" in result


class TestGetDatabaseUrl:
    def test_missing(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(RuntimeError):
            _get_database_url()

    def test_postgres_scheme_rewritten(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgres://u:p@h:5432/db")
        assert _get_database_url() == "postgresql+psycopg2://u:p@h:5432/db"

    def test_postgresql_scheme_rewritten(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@h/db")
        assert _get_database_url() == "postgresql+psycopg2://u:p@h/db"

    def test_url_password_injected(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://u@h:5433/db")
        monkeypatch.setenv("DB_PASSWORD", "s3cret")
        assert _get_database_url() == "postgresql+psycopg2://u:s3cret@h:5433/db"

    def test_libpq_dsn(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "dbname=db user=u password=p host=h")
        assert _get_database_url() == "postgresql+psycopg2://u:p@h:5432/db"
