# ruff: noqa: I001
"""External account registry: a user's linked credit, bank and investment accounts.

The ``(type, provider, name)`` combination is not checked against
``ledger.providers``; callers pick valid entries from that catalog. Balances
are text snapshots replaced in place (no history). Deleting an account makes
the store delete every transaction that references it.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ledger_db.models import ExternalAccount
from .logging_setup import get_logger
from .persistence import evict_cascaded, flush_or_raise, money_text

logger = get_logger("ledger.accounts")


def _last_four(raw: str | None) -> str | None:
    if raw is None:
        return None
    digits = raw.strip()
    if not digits:
        return None
    # Keep only the masked tail even if a full number was passed in.
    return digits[-4:]


def link_external_account(
    session: Session,
    *,
    user_id: str,
    account_type: str,
    provider: str,
    name: str,
    balance: str | Decimal | int,
    last_four: str | None = None,
    id: str | None = None,
) -> ExternalAccount:
    """Record a linked external account for ``user_id``.

    An unknown ``user_id`` raises ``ReferentialViolation``.
    """

    row = ExternalAccount(
        user_id=user_id,
        type=account_type,
        provider=provider,
        name=name,
        last_four=_last_four(last_four),
        balance=money_text(balance),
    )
    if id is not None:
        row.id = id
    session.add(row)
    flush_or_raise(session, context=f"{provider} {account_type} account for user {user_id!r}")
    logger.info(
        "Linked external account id=%s (%s/%s) for user id=%s",
        row.id,
        account_type,
        provider,
        user_id,
    )
    return row


def get_external_account(session: Session, account_id: str) -> ExternalAccount | None:
    return session.get(ExternalAccount, account_id)


def list_external_accounts(
    session: Session, user_id: str, *, account_type: str | None = None
) -> list[ExternalAccount]:
    stmt = select(ExternalAccount).where(ExternalAccount.user_id == user_id)
    if account_type is not None:
        stmt = stmt.where(ExternalAccount.type == account_type)
    stmt = stmt.order_by(ExternalAccount.created_at, ExternalAccount.name)
    return list(session.execute(stmt).scalars().all())


def update_balance(
    session: Session, account_id: str, balance: str | Decimal | int
) -> ExternalAccount | None:
    """Replace the balance snapshot; returns ``None`` for an unknown account."""

    row = session.get(ExternalAccount, account_id)
    if row is None:
        return None
    row.balance = money_text(balance)
    flush_or_raise(session, context=f"external account {account_id!r}")
    logger.debug("Updated balance for external account id=%s", account_id)
    return row


def delete_external_account(session: Session, account_id: str) -> bool:
    """Delete an account; the store removes the transactions that reference it."""

    result = session.execute(delete(ExternalAccount).where(ExternalAccount.id == account_id))
    deleted = bool(result.rowcount)
    if deleted:
        evict_cascaded(session, account_id=account_id)
        logger.info("Deleted external account id=%s", account_id)
    return deleted


__all__ = [
    "delete_external_account",
    "get_external_account",
    "link_external_account",
    "list_external_accounts",
    "update_balance",
]
