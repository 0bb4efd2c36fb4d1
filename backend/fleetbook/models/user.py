"""User model: the authenticated identity behind every role."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any

from sqlalchemy import Enum, Index, String, UniqueConstraint, inspect
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from werkzeug.security import check_password_hash, generate_password_hash

from fleetbook.core.extensions import db

from .base import PKMixin, ReprMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from .vehicle import Vehicle


class Role(str, enum.Enum):
    """Closed set of roles. ``ADMIN`` cannot be self-assigned at registration."""

    CUSTOMER = "customer"
    DRIVER = "driver"
    OWNER = "owner"
    ADMIN = "admin"


SELF_ASSIGNABLE_ROLES = frozenset({Role.CUSTOMER, Role.DRIVER, Role.OWNER})

UserRole = Enum(
    Role,
    name="user_role",
    values_callable=lambda roles: [r.value for r in roles],
    validate_strings=True,
)


class User(PKMixin, ReprMixin, TimestampMixin, SoftDeleteMixin, db.Model):
    """
    Authentication identity.

    Fields
    ------
    name : str
        Display name, used in emails and the public vehicle listing.
    email : str
        Login email. Stored normalized (lowercase, trimmed).
    password_hash : str
        Hashed password (write-only setter via ``password``).
    role : Role
        Fixed at registration.
    is_deleted : bool
        Soft-delete flag; deleted users cannot log in or pass the auth gate.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    role: Mapped[Role] = mapped_column(UserRole, nullable=False)

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        Index("ix_users_role", "role"),
    )

    owned_vehicles: Mapped[list[Vehicle]] = relationship(
        "Vehicle", back_populates="owner", lazy="select"
    )

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password.

        :param raw: Plain text password to hash.
        :type raw: str
        """
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        """Trim the display name and reject blanks."""
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Name is required.")
        return value.strip()

    @validates("role")
    def _immutable_role(self, key: str, value: Role | str) -> Role:
        """Coerce to :class:`Role` and refuse to change it once set."""
        role = Role(value)
        current = self.__dict__.get("role")
        if current is None and inspect(self).persistent:
            # expired after commit; load the stored role
            current = self.role
        if current is not None and Role(current) is not role:
            raise ValueError("Role cannot be changed.")
        return role
