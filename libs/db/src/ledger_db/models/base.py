from __future__ import annotations

import uuid

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def new_id() -> str:
    """Return a fresh UUIDv4 string for rows inserted without an explicit id."""

    return str(uuid.uuid4())


__all__ = [
    "Base",
    "new_id",
]
