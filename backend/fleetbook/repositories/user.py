"""User repository for persistence and credential checks."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from fleetbook.models.user import Role, User
from fleetbook.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    This is the credential store: lookups by email, password verification
    and the role-scoped reads admin screens need. It never issues tokens.
    """

    model = User

    def _sortable_fields(self):
        return {
            "id": User.id,
            "name": User.name,
            "email": User.email,
            "created_at": User.created_at,
        }

    def _filterable_fields(self):
        return {"email": User.email, "role": User.role}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str, *, include_deleted: bool = False) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :param include_deleted: Also match soft-deleted users.
        :type include_deleted: bool
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        if not include_deleted:
            stmt = stmt.where(User.is_deleted.is_(False))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when any user, deleted or not, holds the email.

        Deleted accounts keep their row, so the unique constraint still
        applies to them.
        """
        stmt = select(User.id).where(User.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())

    def get_active_driver(self, user_id: int) -> User | None:
        """Return the user when it exists, is not deleted and has the driver role."""
        user = self.get_active(user_id)
        if user is None or user.role is not Role.DRIVER:
            return None
        return user

    # ---------------------------- Credentials ----------------------------

    def authenticate(self, email: str, password: str) -> User | None:
        """Return the non-deleted user matching email and password, else ``None``.

        :param email: Email address to authenticate.
        :type email: str
        :param password: Raw password to verify.
        :type password: str
        :rtype: User | None
        """
        user = self.get_by_email(email)
        if not user or not user.verify_password(password):
            return None
        return user
