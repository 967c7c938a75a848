"""Create the ledger schema directly from ORM metadata.

Alembic owns schema changes for long-lived databases; this helper covers
fresh development databases (``ledger init-db``) and tests.
"""

from __future__ import annotations

from sqlalchemy.engine import Engine

from .models import Base


def create_schema(engine: Engine) -> list[str]:
    """Create every ledger table that does not exist yet; return table names."""

    Base.metadata.create_all(bind=engine)
    return sorted(Base.metadata.tables)


__all__ = [
    "create_schema",
]
