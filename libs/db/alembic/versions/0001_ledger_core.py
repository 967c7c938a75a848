# ruff: noqa: I001
"""Identity and finance core tables.

Revision ID: 0001_ledger_core
Revises: None
Create Date: 2026-10-18
"""

from __future__ import annotations  # ruff: noqa: I001

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0001_ledger_core"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
    )


def _user_fk(name: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(["userId"], ["users.id"], name=name, ondelete="CASCADE")


def upgrade() -> None:
    # users
    op.create_table(
        "users",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("email", sa.Text(), nullable=False, unique=True),
        sa.Column("emailVerified", sa.DateTime(timezone=True), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("password", sa.Text(), nullable=True),
        _created_at(),
    )
    op.create_index("email_idx", "users", ["email"], unique=False)

    # accounts (auth provider links)
    op.create_table(
        "accounts",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("userId", sa.Text(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("provider", sa.String(), nullable=False),
        sa.Column("providerAccountId", sa.Text(), nullable=False),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        sa.Column("access_token", sa.Text(), nullable=True),
        sa.Column("expires_at", sa.Integer(), nullable=True),
        sa.Column("token_type", sa.String(), nullable=True),
        sa.Column("scope", sa.Text(), nullable=True),
        sa.Column("id_token", sa.Text(), nullable=True),
        sa.Column("session_state", sa.Text(), nullable=True),
        _user_fk("fk_accounts_user"),
    )
    op.create_index("provider_idx", "accounts", ["provider"], unique=False)
    op.create_index("userId_idx", "accounts", ["userId"], unique=False)

    # sessions
    op.create_table(
        "sessions",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("userId", sa.Text(), nullable=False),
        sa.Column("sessionToken", sa.Text(), nullable=False, unique=True),
        sa.Column("expires", sa.DateTime(timezone=True), nullable=False),
        _user_fk("fk_sessions_user"),
    )
    op.create_index("sessions_userId_idx", "sessions", ["userId"], unique=False)

    # verificationToken
    op.create_table(
        "verificationToken",
        sa.Column("identifier", sa.Text(), primary_key=True),
        sa.Column("token", sa.Text(), primary_key=True),
        sa.Column("expires", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("token_idx", "verificationToken", ["token"], unique=False)

    # external_accounts
    op.create_table(
        "external_accounts",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("userId", sa.Text(), nullable=False),
        sa.Column("provider", sa.String(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("last_four", sa.String(), nullable=True),
        sa.Column("balance", sa.Text(), nullable=False),
        _created_at(),
        _user_fk("fk_external_accounts_user"),
    )
    op.create_index(
        "external_accounts_userId_idx", "external_accounts", ["userId"], unique=False
    )

    # transactions
    op.create_table(
        "transactions",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("userId", sa.Text(), nullable=False),
        sa.Column("account_id", sa.Text(), nullable=True),
        sa.Column("amount", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.Text(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "is_external",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        _created_at(),
        _user_fk("fk_transactions_user"),
        sa.ForeignKeyConstraint(
            ["account_id"],
            ["external_accounts.id"],
            name="fk_transactions_account",
            ondelete="CASCADE",
        ),
    )
    op.create_index("transactions_userId_idx", "transactions", ["userId"], unique=False)
    op.create_index("transactions_date_idx", "transactions", ["date"], unique=False)
    op.create_index("transactions_accountId_idx", "transactions", ["account_id"], unique=False)

    # categories
    op.create_table(
        "categories",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False, unique=True),
        sa.Column("type", sa.String(), nullable=False),
        _created_at(),
    )
    op.create_index("categories_name_idx", "categories", ["name"], unique=False)


def downgrade() -> None:
    op.drop_index("categories_name_idx", table_name="categories")
    op.drop_table("categories")
    op.drop_index("transactions_accountId_idx", table_name="transactions")
    op.drop_index("transactions_date_idx", table_name="transactions")
    op.drop_index("transactions_userId_idx", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("external_accounts_userId_idx", table_name="external_accounts")
    op.drop_table("external_accounts")
    op.drop_index("token_idx", table_name="verificationToken")
    op.drop_table("verificationToken")
    op.drop_index("sessions_userId_idx", table_name="sessions")
    op.drop_table("sessions")
    op.drop_index("userId_idx", table_name="accounts")
    op.drop_index("provider_idx", table_name="accounts")
    op.drop_table("accounts")
    op.drop_index("email_idx", table_name="users")
    op.drop_table("users")
