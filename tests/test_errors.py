from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from ledger.errors import (
    FieldError,
    LedgerError,
    ReferentialViolation,
    UniquenessViolation,
    ValidationFailure,
    translate_integrity_error,
)


class _Psycopg3Error(Exception):
    def __init__(self, message: str, sqlstate: str) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


class _Psycopg2Error(Exception):
    def __init__(self, message: str, pgcode: str) -> None:
        super().__init__(message)
        self.pgcode = pgcode


def _integrity(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO x VALUES (?)", {}, orig)


@pytest.mark.parametrize(
    "orig,expected",
    [
        (Exception("UNIQUE constraint failed: users.email"), UniquenessViolation),
        (Exception("FOREIGN KEY constraint failed"), ReferentialViolation),
        (_Psycopg3Error("dup", "23505"), UniquenessViolation),
        (_Psycopg2Error("fk", "23503"), ReferentialViolation),
        (Exception("NOT NULL constraint failed: users.email"), LedgerError),
    ],
)
def test_translate_integrity_error(orig: Exception, expected: type[LedgerError]):
    err = translate_integrity_error(_integrity(orig), context="user email 'a@example.com'")
    assert type(err) is expected
    assert "user email 'a@example.com'" in str(err)


def test_validation_failure_summarizes_messages():
    failure = ValidationFailure(
        [
            FieldError("email", "Invalid email"),
            FieldError("password", "Password is required"),
            FieldError("password", "Password must be more than 8 characters"),
        ]
    )
    assert isinstance(failure, LedgerError)
    assert str(failure).startswith("email: Invalid email; password:")
    assert failure.messages("password") == [
        "Password is required",
        "Password must be more than 8 characters",
    ]
    assert failure.by_field()["email"] == ["Invalid email"]
