"""Error types raised by the ledger core.

Store-level failures arrive from SQLAlchemy as ``IntegrityError`` and are
translated into :class:`UniquenessViolation` or :class:`ReferentialViolation`
by :func:`translate_integrity_error`. Validation failures never reach the
store.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

# PostgreSQL SQLSTATE codes (class 23: integrity constraint violation)
_PG_UNIQUE_VIOLATION = "23505"
_PG_FOREIGN_KEY_VIOLATION = "23503"


class LedgerError(Exception):
    """Base class for all ledger errors."""


class UniquenessViolation(LedgerError):
    """A unique column (email, session token, category name) already holds the value."""


class ReferentialViolation(LedgerError):
    """A row referenced a parent (user, external account) that does not exist."""


@dataclass(frozen=True, slots=True)
class FieldError:
    field: str
    message: str


class ValidationFailure(LedgerError):
    """Input rejected before reaching the store; carries one entry per violated rule."""

    def __init__(self, errors: list[FieldError] | tuple[FieldError, ...]) -> None:
        self.errors: tuple[FieldError, ...] = tuple(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(summary or "validation failed")

    def messages(self, field: str | None = None) -> list[str]:
        """Return messages in rule order, optionally only those for ``field``."""

        return [e.message for e in self.errors if field is None or e.field == field]

    def by_field(self) -> dict[str, list[str]]:
        out: dict[str, list[str]] = {}
        for e in self.errors:
            out.setdefault(e.field, []).append(e.message)
        return out


def _sqlstate(exc: IntegrityError) -> str | None:
    orig = exc.orig
    # psycopg 3 exposes ``sqlstate``; psycopg2 exposes ``pgcode``.
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return str(code) if code else None


def translate_integrity_error(exc: IntegrityError, *, context: str) -> LedgerError:
    """Map a store ``IntegrityError`` onto a ledger error.

    ``context`` is a short description of the attempted write used in the
    resulting message (e.g. ``"user email 'a@example.com'"``). Unrecognized
    integrity errors map to :class:`LedgerError`.
    """

    code = _sqlstate(exc)
    text = str(exc.orig).lower()
    if code == _PG_UNIQUE_VIOLATION or "unique constraint" in text or "duplicate key" in text:
        return UniquenessViolation(f"{context} already exists")
    if code == _PG_FOREIGN_KEY_VIOLATION or "foreign key constraint" in text:
        return ReferentialViolation(f"{context} references a missing parent row")
    return LedgerError(f"{context} violates a store constraint: {exc.orig}")


__all__ = [
    "FieldError",
    "LedgerError",
    "ReferentialViolation",
    "UniquenessViolation",
    "ValidationFailure",
    "translate_integrity_error",
]
