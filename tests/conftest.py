"""Pytest configuration for test isolation.

``ledger_db.client`` keeps a process-wide engine bound to the first database
URL it sees, and ``ledger.logging_setup`` keeps a process-wide handler. Each
test gets its own file-backed SQLite database, so both are reset around every
test via autouse fixtures.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from ledger_db.client import dispose_engine, session_scope
from sqlalchemy.orm import Session

from ledger.logging_setup import reset_logging
from tests.helpers.db import bootstrap_sqlite_db


@pytest.fixture(autouse=True)
def _isolate_process_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for var in (
        "DATABASE_URL",
        "LEDGER_LOG_LEVEL",
        "LEDGER_SESSION_MAX_AGE_DAYS",
        "LEDGER_VERIFICATION_MAX_AGE_HOURS",
    ):
        monkeypatch.delenv(var, raising=False)
    dispose_engine()
    yield
    dispose_engine()
    reset_logging()


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return bootstrap_sqlite_db(tmp_path / "ledger.db")


@pytest.fixture
def session(db_url: str) -> Iterator[Session]:
    """A session inside one transactional scope, committed at teardown."""

    with session_scope(database_url=db_url) as s:
        yield s
