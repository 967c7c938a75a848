from __future__ import annotations

import io
import logging

from ledger.identity import create_session
from ledger.logging_setup import configure_logging, get_logger
from tests.helpers.db import make_user


def test_configure_logging_attaches_one_handler():
    buf = io.StringIO()
    logger = configure_logging("DEBUG", fmt="%(name)s|%(message)s", stream=buf)
    configure_logging("WARNING", stream=io.StringIO())
    assert len([h for h in logger.handlers if isinstance(h, logging.StreamHandler)]) == 1
    assert logger.level == logging.WARNING

    get_logger("ledger.test").warning("hello")
    assert buf.getvalue() == "ledger.test|hello\n"


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv("LEDGER_LOG_LEVEL", "error")
    logger = configure_logging(stream=io.StringIO())
    assert logger.level == logging.ERROR


def test_secret_extras_are_redacted():
    buf = io.StringIO()
    configure_logging("INFO", fmt="%(message)s %(session_token)s", stream=buf)
    get_logger("ledger.test").info("issued", extra={"session_token": "s3cr3t"})
    assert buf.getvalue() == "issued ***\n"


def test_session_tokens_never_reach_the_log(session):
    buf = io.StringIO()
    configure_logging("DEBUG", stream=buf)
    user = make_user(session)
    issued = create_session(session, user.id)
    output = buf.getvalue()
    assert f"user id={user.id}" in output
    assert issued.session_token not in output
