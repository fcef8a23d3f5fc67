# tests/conftest.py
from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Callable, Generator, Iterator
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Keep startup side effects (SQLite file, log directory) out of the working tree.
_RUNTIME_DIR = Path(tempfile.mkdtemp(prefix="portfolio-backend-tests-"))
os.environ.setdefault("DB_PATH", str(_RUNTIME_DIR / "database" / "contacts.sqlite"))
os.environ.setdefault("LOG_DIR", str(_RUNTIME_DIR / "logs"))

from portfolio_backend.db.session import Base  # noqa: E402
from portfolio_backend.db.session import get_db as app_get_session  # noqa: E402
from portfolio_backend.main import app as fastapi_app  # noqa: E402
from portfolio_backend.services.event_log import EventLogService  # noqa: E402

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def log_dir(tmp_path: Path) -> Path:
    return tmp_path / "logs"


@pytest.fixture()
def event_log(log_dir: Path) -> EventLogService:
    """Return an opened audit log service writing under the test's tmp_path."""
    service = EventLogService(log_dir)
    service.open()
    return service


@pytest.fixture()
def client(app: FastAPI, event_log: EventLogService) -> Iterator[TestClient]:
    """Start the app (fresh rate limiter per test) and point audit logs at tmp_path."""
    with TestClient(app, base_url="http://test") as test_client:
        app.state.event_log = event_log
        yield test_client


@pytest.fixture()
def read_log(log_dir: Path) -> Callable[[str], list[dict[str, Any]]]:
    """Return a helper that parses every JSON line of a category log file."""

    def _read(filename: str) -> list[dict[str, Any]]:
        path = log_dir / filename
        if not path.exists():
            return []
        return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]

    return _read


@pytest.fixture()
def valid_payload() -> dict[str, str]:
    """Return a contact payload that passes validation and spam checks."""
    return {
        "name": "Jane O'Brien",
        "email": "jane@example.com",
        "message": "Hello! I enjoyed your portfolio and would like to chat.",
    }
