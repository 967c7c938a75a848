"""Shared SQLAlchemy models registry for the ledger database.

Identity tables (users, auth provider links, sessions, verification tokens)
live in ``identity``; the finance tables (external accounts, transactions,
categories) live in ``finance``.
"""

from .base import Base, new_id
from .finance import Category, ExternalAccount, Transaction
from .identity import AuthAccount, AuthSession, User, VerificationToken

__all__ = [
    "AuthAccount",
    "AuthSession",
    "Base",
    "Category",
    "ExternalAccount",
    "Transaction",
    "User",
    "VerificationToken",
    "new_id",
]
