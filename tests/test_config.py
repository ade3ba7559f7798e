"""Tests for Settings.from_env()."""

import pytest

from facilbook.config import Settings

_VARS = ("DATABASE_URL", "DB_POOL_MIN", "DB_POOL_MAX", "ALLOWED_ORIGINS", "SEED_FACILITIES")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings.from_env()

    assert settings.database_url == ""
    assert (settings.db_pool_min, settings.db_pool_max) == (1, 10)
    assert settings.allowed_origins == ("*",)
    assert settings.seed_facilities is True


def test_allowed_origins_split(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.example, http://b.example,")

    assert Settings.from_env().allowed_origins == ("http://a.example", "http://b.example")


def test_seed_flag(monkeypatch):
    monkeypatch.setenv("SEED_FACILITIES", "false")

    assert Settings.from_env().seed_facilities is False


def test_pool_bounds(monkeypatch):
    monkeypatch.setenv("DB_POOL_MIN", "2")
    monkeypatch.setenv("DB_POOL_MAX", "4")

    settings = Settings.from_env()

    assert (settings.db_pool_min, settings.db_pool_max) == (2, 4)


@pytest.mark.parametrize("pool_min,pool_max", [("0", "5"), ("5", "2"), ("x", "5")])
def test_invalid_pool_bounds(monkeypatch, pool_min, pool_max):
    monkeypatch.setenv("DB_POOL_MIN", pool_min)
    monkeypatch.setenv("DB_POOL_MAX", pool_max)

    with pytest.raises(RuntimeError):
        Settings.from_env()
