"""User ORM model for JWT authentication.

Accounts start inactive and unverified.  A user can log in only after the
email address is verified *and* an admin has approved the account; the
one-time verification and password-reset tokens live on the row itself.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, text
from sqlalchemy.orm import Mapped, mapped_column

from mycopath.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin, pg_enum
from mycopath.models.enums import UserRoleEnum


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Application user. Logs in with email or employee id plus password (JWT)."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(320), unique=True, nullable=False, index=True
    )
    hashed_password: Mapped[str] = mapped_column(String(128), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    role: Mapped[UserRoleEnum] = mapped_column(
        pg_enum(UserRoleEnum, "user_role"),
        nullable=False,
        default=UserRoleEnum.worker,
        server_default=UserRoleEnum.worker.value,
    )
    employee_id: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, index=True
    )
    is_active: Mapped[bool] = mapped_column(
        default=False,
        server_default=text("false"),
        nullable=False,
    )
    is_approved_by_admin: Mapped[bool] = mapped_column(
        default=False,
        server_default=text("false"),
        nullable=False,
    )
    is_email_verified: Mapped[bool] = mapped_column(
        default=False,
        server_default=text("false"),
        nullable=False,
    )
    email_verification_token: Mapped[str | None] = mapped_column(
        String(128), nullable=True, index=True
    )
    email_verification_expires: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    password_reset_token: Mapped[str | None] = mapped_column(
        String(128), nullable=True, index=True
    )
    password_reset_expires: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role}>"
