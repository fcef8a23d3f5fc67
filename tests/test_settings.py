# tests/test_settings.py
from __future__ import annotations

from pathlib import Path

import pytest

from portfolio_backend.core.settings import Settings
from portfolio_backend.scripts.init_db import init_db


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ("DB_PATH", "LOG_DIR", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    settings = Settings(_env_file=None)

    assert settings.db_path == Path("data/database/contacts.sqlite")
    assert settings.log_dir == Path("data/logs")
    assert settings.contact_rate_limit_max == 5
    assert settings.contact_rate_limit_window_seconds == 3600
    assert settings.duplicate_window_seconds == 3600
    assert settings.access_log_skip_prefixes == ["/api/", "/_nuxt/"]
    assert settings.effective_database_url == f"sqlite:///{settings.resolved_db_path}"


def test_environment_overrides(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("DB_PATH", str(tmp_path / "store.sqlite"))
    clean_env.setenv("LOG_DIR", str(tmp_path / "logs"))
    clean_env.setenv("CONTACT_RATE_LIMIT_MAX", "10")
    clean_env.setenv("ANONYMIZE_IPS", "true")

    settings = Settings(_env_file=None)

    assert settings.resolved_db_path == tmp_path / "store.sqlite"
    assert settings.resolved_log_dir == tmp_path / "logs"
    assert settings.contact_rate_limit_max == 10
    assert settings.anonymize_ips is True


def test_database_url_takes_precedence(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("DATABASE_URL", "sqlite:///elsewhere.sqlite")
    assert Settings(_env_file=None).effective_database_url == "sqlite:///elsewhere.sqlite"


def test_init_db_creates_tables(tmp_path: Path) -> None:
    url = f"sqlite:///{tmp_path / 'init.sqlite'}"

    init_db(url).dispose()
    database = init_db(url, drop_tables=True)
    try:
        assert database.ping() is True
    finally:
        database.dispose()

    assert (tmp_path / "init.sqlite").exists()
