# ruff: noqa: I001
"""Write helpers shared by the ledger service modules.

Service functions take a caller-owned SQLAlchemy ``Session`` (typically from
``ledger_db.client.session_scope``), add rows and call :func:`flush_or_raise`
so constraint failures surface at the call site instead of at commit time.
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .errors import translate_integrity_error
from .logging_setup import get_logger

logger = get_logger("ledger.persistence")


def utcnow() -> datetime:
    return datetime.now(UTC)


def flush_or_raise(session: Session, *, context: str) -> None:
    """Flush pending writes; map integrity failures onto ledger errors.

    On failure the session is rolled back, which discards the caller's whole
    unit of work, and the translated error is raised.
    """

    try:
        session.flush()
    except IntegrityError as exc:
        session.rollback()
        err = translate_integrity_error(exc, context=context)
        logger.info("Rejected write (%s): %s", type(err).__name__, err)
        raise err from exc


def evict_cascaded(session: Session, **match: Any) -> int:
    """Expunge loaded objects whose columns equal ``match``.

    Bulk deletes leave the store to cascade into child tables, which the
    identity map never sees. Only loaded attribute values are compared, so no
    SQL is emitted for expired objects.
    """

    evicted = 0
    for obj in list(session.identity_map.values()):
        loaded = sa_inspect(obj).dict
        if all(key in loaded and loaded[key] == value for key, value in match.items()):
            session.expunge(obj)
            evicted += 1
    return evicted


def money_text(value: str | Decimal | int) -> str:
    """Return the stored text form of an amount or balance.

    Values are kept verbatim; no arithmetic or rounding happens here. Floats
    are refused because their text form may already be rounded.
    """

    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"amount must be str, Decimal or int, not {type(value).__name__}")
    if isinstance(value, (Decimal, int)):
        return str(value)
    if isinstance(value, str):
        s = value.strip()
        if not s:
            raise ValueError("amount must not be empty")
        return s
    raise TypeError(f"amount must be str, Decimal or int, not {type(value).__name__}")


__all__ = [
    "evict_cascaded",
    "flush_or_raise",
    "money_text",
    "utcnow",
]
