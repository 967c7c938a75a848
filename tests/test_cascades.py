"""Referential integrity: cascades from users and external accounts."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from ledger_db.models import AuthAccount, AuthSession, ExternalAccount, Transaction, User

from ledger import accounts, identity, transactions
from ledger.errors import ReferentialViolation
from tests.helpers.db import count_rows, make_external_account, make_user

NOW = datetime(2026, 10, 18, tzinfo=UTC)


def _tx(session, user_id: str, account_id: str | None = None, **kw):
    fields = {
        "amount": "-12.50",
        "description": "Coffee",
        "category": "Food",
        "type": "expense",
        "date": NOW,
    }
    fields.update(kw)
    return transactions.create_transaction(
        session, user_id=user_id, account_id=account_id, **fields
    )


def _populate(session, email: str):
    user = make_user(session, email=email)
    identity.link_auth_account(
        session, user_id=user.id, type="oauth", provider="google", provider_account_id=email
    )
    identity.create_session(session, user.id, now=NOW)
    account = make_external_account(session, user.id)
    _tx(session, user.id, account.id)
    _tx(session, user.id)
    return user, account


def test_deleting_user_removes_everything_it_owns(session):
    doomed, _ = _populate(session, "doomed@example.com")
    keeper, _ = _populate(session, "keeper@example.com")
    session.commit()

    assert identity.delete_user(session, doomed.id) is True
    session.commit()

    for model in (AuthAccount, AuthSession, ExternalAccount, Transaction):
        assert count_rows(session, model, user_id=doomed.id) == 0, model.__name__
    assert count_rows(session, User, id=doomed.id) == 0

    # The other user's rows are untouched.
    assert count_rows(session, AuthAccount, user_id=keeper.id) == 1
    assert count_rows(session, AuthSession, user_id=keeper.id) == 1
    assert count_rows(session, ExternalAccount, user_id=keeper.id) == 1
    assert count_rows(session, Transaction, user_id=keeper.id) == 2


def test_deleting_external_account_removes_only_its_transactions(session):
    user = make_user(session)
    card = make_external_account(session, user.id)
    checking = make_external_account(
        session, user.id, account_type="bank", provider="chase", name="Checking", last_four="0042"
    )
    on_card = [_tx(session, user.id, card.id, description=f"card {i}") for i in range(3)]
    on_checking = _tx(session, user.id, checking.id, description="rent")
    manual = _tx(session, user.id, None, description="cash")
    session.commit()

    assert accounts.delete_external_account(session, card.id) is True
    session.commit()

    assert count_rows(session, Transaction, account_id=card.id) == 0
    remaining = {t.id for t in transactions.list_transactions(session, user.id)}
    assert remaining == {on_checking.id, manual.id}
    assert not remaining & {t.id for t in on_card}
    assert count_rows(session, User, id=user.id) == 1


def test_transaction_for_missing_account_is_rejected(session):
    user = make_user(session)
    session.commit()
    with pytest.raises(ReferentialViolation):
        _tx(session, user.id, "no-such-account")


def test_transaction_for_missing_user_is_rejected(session):
    with pytest.raises(ReferentialViolation):
        _tx(session, "ghost")


def test_external_account_for_missing_user_is_rejected(session):
    with pytest.raises(ReferentialViolation):
        make_external_account(session, "ghost")


def test_cascaded_transactions_are_gone_from_lookups_in_same_session(session):
    user = make_user(session)
    card = make_external_account(session, user.id)
    tx = _tx(session, user.id, card.id)
    session.commit()

    assert transactions.get_transaction(session, tx.id) is tx
    assert accounts.delete_external_account(session, card.id) is True
    session.commit()

    assert accounts.get_external_account(session, card.id) is None
    assert transactions.get_transaction(session, tx.id) is None


def test_deleted_users_rows_are_gone_from_lookups_in_same_session(session):
    user, account = _populate(session, "doomed@example.com")
    tx = _tx(session, user.id, account.id)
    session.commit()

    assert identity.delete_user(session, user.id) is True

    assert identity.get_user(session, user.id) is None
    assert accounts.get_external_account(session, account.id) is None
    assert transactions.get_transaction(session, tx.id) is None
    assert identity.list_auth_accounts(session, user.id) == []


def test_import_into_deleted_account_is_rejected(session):
    user = make_user(session)
    card = make_external_account(session, user.id)
    session.commit()

    accounts.delete_external_account(session, card.id)
    with pytest.raises(ReferentialViolation):
        transactions.import_external_transactions(
            session,
            user_id=user.id,
            account_id=card.id,
            rows=[
                {
                    "amount": "-5.00",
                    "description": "Tea",
                    "category": "Food",
                    "type": "expense",
                    "date": NOW,
                }
            ],
        )
