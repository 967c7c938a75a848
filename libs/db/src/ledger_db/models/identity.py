from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, new_id

# Column names mirror the auth adapter's on-disk layout (camelCase where the
# adapter expects it); attribute names stay snake_case.


# ---------------------------
# Root: users
# ---------------------------


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    email_verified: Mapped[datetime | None] = mapped_column(
        "emailVerified", DateTime(timezone=True), nullable=True
    )
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Already-hashed credential; hashing happens outside this library.
    password: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (Index("email_idx", "email"),)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"


# ---------------------------
# Auth provider links: accounts
# ---------------------------


class AuthAccount(Base):
    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        "userId",
        Text,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(String, nullable=False)
    provider: Mapped[str] = mapped_column(String, nullable=False)
    provider_account_id: Mapped[str] = mapped_column("providerAccountId", Text, nullable=False)
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)
    access_token: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Seconds since the epoch, as reported by the provider.
    expires_at: Mapped[int | None] = mapped_column(Integer, nullable=True)
    token_type: Mapped[str | None] = mapped_column(String, nullable=True)
    scope: Mapped[str | None] = mapped_column(Text, nullable=True)
    id_token: Mapped[str | None] = mapped_column(Text, nullable=True)
    session_state: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("provider_idx", "provider"),
        Index("userId_idx", "userId"),
    )


# ---------------------------
# Sessions
# ---------------------------


class AuthSession(Base):
    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        "userId",
        Text,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    session_token: Mapped[str] = mapped_column("sessionToken", Text, nullable=False, unique=True)
    expires: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("sessions_userId_idx", "userId"),)


# ---------------------------
# Verification tokens (not owned by a user row)
# ---------------------------


class VerificationToken(Base):
    __tablename__ = "verificationToken"

    identifier: Mapped[str] = mapped_column(Text, primary_key=True)
    token: Mapped[str] = mapped_column(Text, primary_key=True)
    expires: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("token_idx", "token"),)


__all__ = [
    "AuthAccount",
    "AuthSession",
    "User",
    "VerificationToken",
]
