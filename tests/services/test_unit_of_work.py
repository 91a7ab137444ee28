"""
Tests for the UnitOfWork atomic scope.
"""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from account_service.models.account import Account
from account_service.services.unit_of_work import UnitOfWork


def new_account(number="1000000001"):
    return Account(
        account_number=number,
        full_name="John Doe",
        id_number="1234567890123456",
        phone_number="081234567890",
    )


def stored_numbers(db_session):
    return list(db_session.execute(select(Account.account_number)).scalars())


def test_clean_exit_commits(db_session):
    with UnitOfWork(db_session):
        db_session.add(new_account())
        db_session.flush()

    db_session.rollback()
    assert stored_numbers(db_session) == ["1000000001"]


def test_exception_rolls_back_and_propagates(db_session):
    with pytest.raises(RuntimeError):
        with UnitOfWork(db_session):
            db_session.add(new_account())
            db_session.flush()
            raise RuntimeError("boom")

    assert stored_numbers(db_session) == []


def test_commit_failure_rolls_back_and_propagates(db_session, monkeypatch):
    def broken_commit():
        raise OperationalError("COMMIT", {}, Exception("connection lost"))

    monkeypatch.setattr(db_session, "commit", broken_commit)

    with pytest.raises(OperationalError):
        with UnitOfWork(db_session):
            db_session.add(new_account())
            db_session.flush()

    monkeypatch.undo()
    assert stored_numbers(db_session) == []
