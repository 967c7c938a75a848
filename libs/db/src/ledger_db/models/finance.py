from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import expression as sa_expr

from .base import Base, new_id

# ---------------------------
# Linked external accounts: external_accounts
# ---------------------------


class ExternalAccount(Base):
    __tablename__ = "external_accounts"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        "userId",
        Text,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    # Provider id from ``ledger.providers`` (e.g. "amex"); not validated here.
    provider: Mapped[str] = mapped_column(String, nullable=False)
    # credit | bank | investment
    type: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    last_four: Mapped[str | None] = mapped_column(String, nullable=True)
    # Text snapshot; no numeric type so nothing is rounded on the way in or out.
    balance: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (Index("external_accounts_userId_idx", "userId"),)


# ---------------------------
# Core: transactions
# ---------------------------


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        "userId",
        Text,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    # Removing the external account removes the transactions synced from it.
    account_id: Mapped[str | None] = mapped_column(
        Text,
        ForeignKey("external_accounts.id", ondelete="CASCADE"),
        nullable=True,
    )
    amount: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    # Free text. Intentionally no FK to categories.name.
    category: Mapped[str] = mapped_column(Text, nullable=False)
    # income | expense | transfer (free text)
    type: Mapped[str] = mapped_column(String, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_external: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=sa_expr.false()
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("transactions_userId_idx", "userId"),
        Index("transactions_date_idx", "date"),
        Index("transactions_accountId_idx", "account_id"),
    )


# ---------------------------
# Reference: categories
# ---------------------------


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    # income | expense
    type: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (Index("categories_name_idx", "name"),)


__all__ = [
    "Category",
    "ExternalAccount",
    "Transaction",
]
