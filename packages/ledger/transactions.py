# ruff: noqa: I001
"""Transaction ledger.

Each transaction belongs to a user and optionally to one of that user's
external accounts. ``category`` and ``type`` are free text: nothing here checks
them against ``ledger.categories`` or :data:`TRANSACTION_TYPES`. Updates
overwrite the row in place; no history is kept.

``is_external`` is ``False`` for manually entered rows and ``True`` for rows
imported from a linked account feed (:func:`import_external_transactions`).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, date as date_type, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ledger_db.models import ExternalAccount, Transaction
from .errors import ReferentialViolation
from .logging_setup import get_logger
from .persistence import flush_or_raise, money_text

logger = get_logger("ledger.transactions")

# Reference labels only; the column accepts any text.
TRANSACTION_TYPES: tuple[str, ...] = ("income", "expense", "transfer")

_UPDATABLE_FIELDS = frozenset(
    {"amount", "description", "category", "type", "date", "account_id", "is_external"}
)


def to_datetime(raw: datetime | date_type | str) -> datetime:
    """Coerce a business date to an aware UTC ``datetime``.

    Accepts ``datetime`` (naive values are taken as UTC), ``date`` (midnight
    UTC) or an ISO-8601 string of either form.
    """

    if isinstance(raw, str):
        s = raw.strip()
        if not s:
            raise ValueError("transaction date must not be empty")
        raw = datetime.fromisoformat(s.replace("Z", "+00:00"))
    if isinstance(raw, datetime):
        return raw.replace(tzinfo=UTC) if raw.tzinfo is None else raw.astimezone(UTC)
    if isinstance(raw, date_type):
        return datetime(raw.year, raw.month, raw.day, tzinfo=UTC)
    raise TypeError(f"Unsupported transaction date: {type(raw).__name__}")


def create_transaction(
    session: Session,
    *,
    user_id: str,
    amount: str | Decimal | int,
    description: str,
    category: str,
    type: str,
    date: datetime | date_type | str,
    account_id: str | None = None,
    is_external: bool | None = None,
    id: str | None = None,
) -> Transaction:
    """Record one transaction.

    ``is_external`` left as ``None`` stores the default (``False``). A missing
    user or external account raises ``ReferentialViolation``.
    """

    row = Transaction(
        user_id=user_id,
        account_id=account_id,
        amount=money_text(amount),
        description=description,
        category=category,
        type=type,
        date=to_datetime(date),
    )
    if is_external is not None:
        row.is_external = is_external
    if id is not None:
        row.id = id
    session.add(row)
    flush_or_raise(session, context=f"transaction for user {user_id!r}")
    logger.debug("Recorded transaction id=%s for user id=%s", row.id, user_id)
    return row


def import_external_transactions(
    session: Session,
    *,
    user_id: str,
    account_id: str,
    rows: Iterable[Mapping[str, Any]],
) -> list[Transaction]:
    """Record a feed of transactions synced from one linked external account.

    Each row supplies ``amount``, ``description``, ``category``, ``type`` and
    ``date`` (and optionally ``id``). Every imported row is marked
    ``is_external=True``. The account must exist and belong to ``user_id``.
    """

    account = session.get(ExternalAccount, account_id)
    if account is None or account.user_id != user_id:
        raise ReferentialViolation(
            f"external account {account_id!r} does not exist for user {user_id!r}"
        )

    created: list[Transaction] = []
    for i, rec in enumerate(rows):
        missing = [k for k in ("amount", "description", "category", "type", "date") if k not in rec]
        if missing:
            raise ValueError(f"import row {i} is missing fields: {missing}")
        row = Transaction(
            user_id=user_id,
            account_id=account_id,
            amount=money_text(rec["amount"]),
            description=str(rec["description"]),
            category=str(rec["category"]),
            type=str(rec["type"]),
            date=to_datetime(rec["date"]),
            is_external=True,
        )
        if rec.get("id"):
            row.id = str(rec["id"])
        session.add(row)
        created.append(row)

    flush_or_raise(session, context=f"import into external account {account_id!r}")
    logger.info(
        "Imported %d transactions into external account id=%s", len(created), account_id
    )
    return created


def get_transaction(session: Session, transaction_id: str) -> Transaction | None:
    return session.get(Transaction, transaction_id)


def list_transactions(
    session: Session,
    user_id: str,
    *,
    start: datetime | date_type | str | None = None,
    end: datetime | date_type | str | None = None,
    limit: int | None = None,
) -> list[Transaction]:
    """Return a user's transactions, newest business date first.

    ``start`` is inclusive and ``end`` exclusive.
    """

    stmt = select(Transaction).where(Transaction.user_id == user_id)
    if start is not None:
        stmt = stmt.where(Transaction.date >= to_datetime(start))
    if end is not None:
        stmt = stmt.where(Transaction.date < to_datetime(end))
    stmt = stmt.order_by(Transaction.date.desc(), Transaction.created_at.desc(), Transaction.id)
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(session.execute(stmt).scalars().all())


def list_account_transactions(session: Session, account_id: str) -> list[Transaction]:
    stmt = (
        select(Transaction)
        .where(Transaction.account_id == account_id)
        .order_by(Transaction.date.desc(), Transaction.id)
    )
    return list(session.execute(stmt).scalars().all())


def update_transaction(session: Session, transaction_id: str, **fields: Any) -> Transaction | None:
    """Overwrite fields on a transaction; ``None`` when it does not exist."""

    unknown = set(fields) - _UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown transaction fields: {sorted(unknown)}")
    row = session.get(Transaction, transaction_id)
    if row is None:
        return None
    for key, value in fields.items():
        if key == "amount":
            value = money_text(value)
        elif key == "date":
            value = to_datetime(value)
        setattr(row, key, value)
    flush_or_raise(session, context=f"transaction {transaction_id!r}")
    return row


def delete_transaction(session: Session, transaction_id: str) -> bool:
    result = session.execute(delete(Transaction).where(Transaction.id == transaction_id))
    return bool(result.rowcount)


__all__ = [
    "TRANSACTION_TYPES",
    "create_transaction",
    "delete_transaction",
    "get_transaction",
    "import_external_transactions",
    "list_account_transactions",
    "list_transactions",
    "to_datetime",
    "update_transaction",
]
