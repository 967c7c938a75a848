"""ledger_db: shared database library (SQLAlchemy/Alembic).

Public exports
--------------
- ``Base`` and ``metadata`` for Alembic autogenerate/targeting
- ORM models in ``ledger_db.models`` (re-exported for convenience)
- Engine/session helpers in ``ledger_db.client``
"""

from __future__ import annotations

from .models import (
    AuthAccount,
    AuthSession,
    Base,
    Category,
    ExternalAccount,
    Transaction,
    User,
    VerificationToken,
)

# Re-export SQLAlchemy metadata for Alembic's env.py
metadata = Base.metadata

__all__ = [
    "AuthAccount",
    "AuthSession",
    "Base",
    "Category",
    "ExternalAccount",
    "Transaction",
    "User",
    "VerificationToken",
    "metadata",
]
