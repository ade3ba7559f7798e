"""Tests for the database layer. No real database needed."""

from unittest.mock import MagicMock, patch

import psycopg2
import pytest

from facilbook.domain.errors import StoreError
from facilbook.infra.db import Store, advisory_xact_lock, connect_kwargs, fetchall, fetchone
from helpers import make_store


class TestConnectKwargs:
    def test_password_injected_into_dsn_without_one(self, monkeypatch):
        monkeypatch.setenv("DB_PASSWORD", "from-env")
        assert connect_kwargs("dbname=db user=u host=h") == {"password": "from-env"}

    def test_dsn_password_wins(self, monkeypatch):
        monkeypatch.setenv("DB_PASSWORD", "from-env")
        assert connect_kwargs("dbname=db user=u password=p host=h") == {}

    def test_url_without_password(self, monkeypatch):
        monkeypatch.setenv("DB_PASSWORD", "from-env")
        assert connect_kwargs("postgres://u@h/db") == {"password": "from-env"}

    def test_url_with_password(self, monkeypatch):
        monkeypatch.setenv("DB_PASSWORD", "from-env")
        assert connect_kwargs("postgres://u:p@h/db") == {}

    def test_no_env(self):
        assert connect_kwargs("dbname=db") == {}


class TestStoreLifecycle:
    def test_open_requires_dsn(self):
        with pytest.raises(RuntimeError, match="DATABASE_URL"):
            Store("").open()

    def test_open_and_close(self):
        store = Store("dbname=db", minconn=2, maxconn=5)
        with patch("facilbook.infra.db.ThreadedConnectionPool") as pool_cls:
            store.open()
            assert store.is_open
            pool_cls.assert_called_once_with(2, 5, "dbname=db")

            store.close()

        pool_cls.return_value.closeall.assert_called_once()
        assert not store.is_open

    def test_open_twice_keeps_pool(self):
        store = Store("dbname=db")
        with patch("facilbook.infra.db.ThreadedConnectionPool") as pool_cls:
            store.open()
            store.open()
        assert pool_cls.call_count == 1

    def test_txn_on_closed_store(self):
        with pytest.raises(StoreError):
            with Store("dbname=db").txn():
                pass


class TestTxn:
    def test_commits_and_returns_connection(self):
        store, conn, cur = make_store()

        with store.txn() as c:
            c.execute("SELECT 1")

        conn.commit.assert_called_once()
        conn.rollback.assert_not_called()
        store._pool.putconn.assert_called_once_with(conn)

    def test_driver_error_becomes_store_error(self):
        store, conn, cur = make_store()
        cur.execute.side_effect = psycopg2.DatabaseError("boom")

        with pytest.raises(StoreError) as exc_info:
            with store.txn() as c:
                c.execute("SELECT 1")

        assert isinstance(exc_info.value.__cause__, psycopg2.DatabaseError)
        conn.rollback.assert_called_once()
        store._pool.putconn.assert_called_once_with(conn)

    def test_other_errors_propagate_unchanged(self):
        store, conn, _ = make_store()

        with pytest.raises(KeyError):
            with store.txn():
                raise KeyError("x")

        conn.rollback.assert_called_once()

    def test_pool_exhausted(self):
        store, _, _ = make_store()
        store._pool.getconn.side_effect = psycopg2.pool.PoolError("exhausted")

        with pytest.raises(StoreError):
            with store.txn():
                pass


class TestHelpers:
    def test_fetchone(self):
        cur = MagicMock()
        cur.fetchone.return_value = (1,)
        assert fetchone(cur, "SELECT %s", (1,)) == (1,)
        cur.execute.assert_called_once_with("SELECT %s", (1,))

    def test_fetchall(self):
        cur = MagicMock()
        cur.fetchall.return_value = [(1,), (2,)]
        assert fetchall(cur, "SELECT 1") == [(1,), (2,)]

    def test_advisory_lock(self):
        cur = MagicMock()
        advisory_xact_lock(cur, "k")
        cur.execute.assert_called_once_with("SELECT pg_advisory_xact_lock(hashtext(%s))", ("k",))
