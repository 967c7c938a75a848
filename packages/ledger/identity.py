# ruff: noqa: I001
"""Identity store: users, auth provider links, sessions and verification tokens.

Every function takes a caller-owned SQLAlchemy ``Session``; callers own the
transaction scope (``ledger_db.client.session_scope``). Lookups that find
nothing return ``None``. Writes that hit a unique or foreign-key constraint
raise :class:`~ledger.errors.UniquenessViolation` or
:class:`~ledger.errors.ReferentialViolation` after rolling the session back.

Session expiry is a query-time predicate: expired sessions are reported as
absent by :func:`validate_session` but are never deleted here. Verification
tokens are deleted only when consumed successfully.

Configuration
-------------
- ``LEDGER_SESSION_MAX_AGE_DAYS``: default session lifetime (30).
- ``LEDGER_VERIFICATION_MAX_AGE_HOURS``: default verification token lifetime (24).
"""

from __future__ import annotations

import os
import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ledger_db.models import AuthAccount, AuthSession, User, VerificationToken
from .logging_setup import get_logger
from .persistence import evict_cascaded, flush_or_raise, utcnow
from .validation import RegisterForm, SignInForm

logger = get_logger("ledger.identity")

DEFAULT_SESSION_MAX_AGE = timedelta(days=30)
DEFAULT_VERIFICATION_MAX_AGE = timedelta(hours=24)

_USER_FIELDS = frozenset({"name", "email", "image", "password", "email_verified"})
_AUTH_ACCOUNT_TOKEN_FIELDS = (
    "refresh_token",
    "access_token",
    "expires_at",
    "token_type",
    "scope",
    "id_token",
    "session_state",
)


def _env_max_age(var: str, default: timedelta, unit: str) -> timedelta:
    raw = os.getenv(var)
    if not raw:
        return default
    try:
        n = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", var, raw)
        return default
    if n <= 0:
        logger.warning("Ignoring non-positive %s=%r", var, raw)
        return default
    return timedelta(**{unit: n})


def session_max_age() -> timedelta:
    return _env_max_age("LEDGER_SESSION_MAX_AGE_DAYS", DEFAULT_SESSION_MAX_AGE, "days")


def verification_max_age() -> timedelta:
    return _env_max_age(
        "LEDGER_VERIFICATION_MAX_AGE_HOURS", DEFAULT_VERIFICATION_MAX_AGE, "hours"
    )


def _as_utc(dt: datetime) -> datetime:
    # Naive datetimes are taken to be UTC already.
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)


# ---------------------------
# Users
# ---------------------------


def create_user(
    session: Session,
    *,
    email: str,
    name: str | None = None,
    password: str | None = None,
    image: str | None = None,
    email_verified: datetime | None = None,
    id: str | None = None,
) -> User:
    """Insert a user; a duplicate ``email`` raises ``UniquenessViolation``.

    ``password`` is stored as given and must already be hashed by the caller.
    """

    user = User(
        email=email,
        name=name,
        password=password,
        image=image,
        email_verified=_as_utc(email_verified) if email_verified else None,
    )
    if id is not None:
        user.id = id
    session.add(user)
    flush_or_raise(session, context=f"user email {email!r}")
    logger.info("Created user id=%s", user.id)
    return user


def get_user(session: Session, user_id: str) -> User | None:
    return session.get(User, user_id)


def get_user_by_email(session: Session, email: str) -> User | None:
    return session.execute(select(User).where(User.email == email)).scalars().first()


def update_user(session: Session, user_id: str, **fields: Any) -> User | None:
    """Overwrite profile fields on an existing user.

    Accepted fields: ``name``, ``email``, ``image``, ``password``,
    ``email_verified``. Returns ``None`` when the user does not exist.
    """

    unknown = set(fields) - _USER_FIELDS
    if unknown:
        raise ValueError(f"Unknown user fields: {sorted(unknown)}")
    user = session.get(User, user_id)
    if user is None:
        return None
    for key, value in fields.items():
        if key == "email_verified" and value is not None:
            value = _as_utc(value)
        setattr(user, key, value)
    flush_or_raise(session, context=f"user {user_id!r}")
    return user


def mark_email_verified(
    session: Session, user_id: str, *, at: datetime | None = None
) -> User | None:
    return update_user(session, user_id, email_verified=at or utcnow())


def delete_user(session: Session, user_id: str) -> bool:
    """Delete a user; the store cascades to every row the user owns."""

    result = session.execute(delete(User).where(User.id == user_id))
    deleted = bool(result.rowcount)
    if deleted:
        evict_cascaded(session, user_id=user_id)
        logger.info("Deleted user id=%s", user_id)
    return deleted


# ---------------------------
# Auth provider links
# ---------------------------


def link_auth_account(
    session: Session,
    *,
    user_id: str,
    type: str,
    provider: str,
    provider_account_id: str,
    **tokens: Any,
) -> AuthAccount:
    """Link an external identity provider account to ``user_id``.

    ``tokens`` may carry the OAuth fields ``refresh_token``, ``access_token``,
    ``expires_at``, ``token_type``, ``scope``, ``id_token`` and
    ``session_state``.
    """

    unknown = set(tokens) - set(_AUTH_ACCOUNT_TOKEN_FIELDS)
    if unknown:
        raise ValueError(f"Unknown auth account fields: {sorted(unknown)}")
    row = AuthAccount(
        user_id=user_id,
        type=type,
        provider=provider,
        provider_account_id=provider_account_id,
        **tokens,
    )
    session.add(row)
    flush_or_raise(session, context=f"{provider} account for user {user_id!r}")
    logger.info("Linked %s account id=%s to user id=%s", provider, row.id, user_id)
    return row


def get_user_by_auth_account(
    session: Session, provider: str, provider_account_id: str
) -> User | None:
    stmt = (
        select(User)
        .join(AuthAccount, AuthAccount.user_id == User.id)
        .where(
            AuthAccount.provider == provider,
            AuthAccount.provider_account_id == provider_account_id,
        )
    )
    return session.execute(stmt).scalars().first()


def list_auth_accounts(session: Session, user_id: str) -> list[AuthAccount]:
    stmt = select(AuthAccount).where(AuthAccount.user_id == user_id).order_by(AuthAccount.provider)
    return list(session.execute(stmt).scalars().all())


def unlink_auth_account(session: Session, provider: str, provider_account_id: str) -> bool:
    result = session.execute(
        delete(AuthAccount).where(
            AuthAccount.provider == provider,
            AuthAccount.provider_account_id == provider_account_id,
        )
    )
    return bool(result.rowcount)


# ---------------------------
# Sessions
# ---------------------------


def new_session_token() -> str:
    return secrets.token_urlsafe(32)


def create_session(
    session: Session,
    user_id: str,
    *,
    expires: datetime | None = None,
    now: datetime | None = None,
) -> AuthSession:
    """Issue a session with a fresh token for an existing user.

    ``expires`` defaults to ``now + session_max_age()`` and must lie in the
    future. An unknown ``user_id`` raises ``ReferentialViolation``.
    """

    now = _as_utc(now or utcnow())
    expires_at = _as_utc(expires) if expires is not None else now + session_max_age()
    if expires_at <= now:
        raise ValueError("Session expiry must be in the future")
    row = AuthSession(user_id=user_id, session_token=new_session_token(), expires=expires_at)
    session.add(row)
    flush_or_raise(session, context=f"session for user {user_id!r}")
    logger.info("Issued session id=%s for user id=%s", row.id, user_id)
    return row


def validate_session(
    session: Session, session_token: str, *, now: datetime | None = None
) -> tuple[AuthSession, User] | None:
    """Return the live session and its user, or ``None`` if absent or expired."""

    now = _as_utc(now or utcnow())
    stmt = (
        select(AuthSession, User)
        .join(User, User.id == AuthSession.user_id)
        .where(AuthSession.session_token == session_token, AuthSession.expires > now)
    )
    row = session.execute(stmt).first()
    if row is None:
        logger.debug("Session lookup missed (absent or expired)")
        return None
    return row[0], row[1]


def extend_session(
    session: Session,
    session_token: str,
    *,
    expires: datetime | None = None,
    now: datetime | None = None,
) -> AuthSession | None:
    """Replace the expiry of a live session; expired or unknown tokens yield ``None``."""

    now = _as_utc(now or utcnow())
    found = validate_session(session, session_token, now=now)
    if found is None:
        return None
    auth_session = found[0]
    auth_session.expires = _as_utc(expires) if expires is not None else now + session_max_age()
    flush_or_raise(session, context=f"session {auth_session.id!r}")
    return auth_session


def delete_session(session: Session, session_token: str) -> bool:
    """Sign-out: remove the session carrying ``session_token``."""

    result = session.execute(delete(AuthSession).where(AuthSession.session_token == session_token))
    return bool(result.rowcount)


# ---------------------------
# Verification tokens
# ---------------------------


def create_verification_token(
    session: Session,
    identifier: str,
    *,
    token: str | None = None,
    expires: datetime | None = None,
    now: datetime | None = None,
) -> VerificationToken:
    now = _as_utc(now or utcnow())
    row = VerificationToken(
        identifier=identifier,
        token=token or secrets.token_urlsafe(32),
        expires=_as_utc(expires) if expires is not None else now + verification_max_age(),
    )
    session.add(row)
    flush_or_raise(session, context="verification token")
    return row


def use_verification_token(
    session: Session,
    identifier: str,
    token: str,
    *,
    now: datetime | None = None,
) -> VerificationToken | None:
    """Consume a verification token.

    Returns the token row and deletes it when it exists and has not expired.
    Unknown or expired tokens return ``None``; expired rows are left in place.
    """

    now = _as_utc(now or utcnow())
    row = session.execute(
        select(VerificationToken).where(
            VerificationToken.identifier == identifier,
            VerificationToken.token == token,
            VerificationToken.expires > now,
        )
    ).scalars().first()
    if row is None:
        return None
    session.delete(row)
    session.flush()
    logger.info("Consumed verification token")
    return row


# ---------------------------
# Form entry points
# ---------------------------


def register_user(
    session: Session, form: RegisterForm, *, hash_password: Callable[[str], str]
) -> User:
    """Create a password user from a validated registration form."""

    return create_user(
        session,
        email=form.email,
        name=form.name,
        password=hash_password(form.password),
    )


def authorize_credentials(
    session: Session,
    form: SignInForm,
    *,
    verify_password: Callable[[str, str], bool],
) -> User | None:
    """Return the user matching a validated sign-in form, or ``None``.

    ``verify_password(plain, stored)`` is supplied by the caller; users without
    a stored password (provider-only identities) never match.
    """

    user = get_user_by_email(session, form.email)
    if user is None or not user.password:
        return None
    if not verify_password(form.password, user.password):
        return None
    return user


__all__ = [
    "DEFAULT_SESSION_MAX_AGE",
    "DEFAULT_VERIFICATION_MAX_AGE",
    "authorize_credentials",
    "create_session",
    "create_user",
    "create_verification_token",
    "delete_session",
    "delete_user",
    "extend_session",
    "get_user",
    "get_user_by_auth_account",
    "get_user_by_email",
    "link_auth_account",
    "list_auth_accounts",
    "mark_email_verified",
    "new_session_token",
    "register_user",
    "session_max_age",
    "unlink_auth_account",
    "update_user",
    "use_verification_token",
    "validate_session",
    "verification_max_age",
]
