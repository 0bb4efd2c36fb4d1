# tests/unit/uow/test_uow.py
from __future__ import annotations

import pytest

from fleetbook.models.user import Role, User
from fleetbook.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from fleetbook.uow import SQLAlchemyUnitOfWork as RWuow


def _user(email: str) -> User:
    return User(name="U", email=email, role=Role.CUSTOMER, password="pw123456")


class TestSQLAlchemyUnitOfWork:
    def test_commits_on_clean_exit(self, app):
        with RWuow() as uow:
            uow.users.add(_user("commit@example.com"))
        with ROuow() as uow:
            assert uow.users.get_by_email("commit@example.com") is not None

    def test_rolls_back_on_error(self, app):
        with pytest.raises(RuntimeError), RWuow() as uow:
            uow.users.add(_user("rollback@example.com"))
            raise RuntimeError("boom")
        with ROuow() as uow:
            assert uow.users.get_by_email("rollback@example.com") is None


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, app):
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(_user("ro@example.com"))
            uow.session.flush()

    def test_commit_is_refused(self, app):
        with ROuow() as uow, pytest.raises(RuntimeError):
            uow.commit()
