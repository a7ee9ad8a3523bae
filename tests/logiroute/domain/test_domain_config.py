"""Tests for the per-environment database configuration in domain.toml."""

from pathlib import Path

import pytest
from logiroute import domain as domain_module
from protean.domain import Domain

CONFIG_DIR = str(Path(domain_module.__file__).parent)


def _database(monkeypatch, env, database_url=None):
    monkeypatch.setenv("PROTEAN_ENV", env)
    if database_url:
        monkeypatch.setenv("DATABASE_URL", database_url)
    else:
        monkeypatch.delenv("DATABASE_URL", raising=False)
    return Domain(root_path=CONFIG_DIR, name=f"logiroute-{env}").config["databases"]["default"]


class TestDatabaseEnvironments:
    def test_tests_run_in_memory(self, monkeypatch):
        assert _database(monkeypatch, "test")["provider"] == "memory"

    def test_sqlite_environment(self, monkeypatch):
        database = _database(monkeypatch, "sqlite")
        assert database["provider"] == "sqlite"
        assert database["database_uri"] == "sqlite:///logiroute.db"

    def test_production_uses_postgresql(self, monkeypatch):
        database = _database(monkeypatch, "production")
        assert database["provider"] == "postgresql"
        assert database["database_uri"].startswith("postgresql://")

    @pytest.mark.parametrize(
        "env, url",
        [
            ("sqlite", "sqlite:////tmp/dispatch.db"),
            ("production", "postgresql://dispatch:secret@db:5432/logiroute"),
        ],
    )
    def test_database_url_overrides_the_default(self, monkeypatch, env, url):
        assert _database(monkeypatch, env, url)["database_uri"] == url

    def test_production_turns_debug_off(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        assert Domain(root_path=CONFIG_DIR, name="logiroute-production").config["debug"] is False
