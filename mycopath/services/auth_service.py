"""Account registration, login and the e-mail token flows."""

from __future__ import annotations

import secrets
import uuid
from datetime import UTC, datetime, timedelta

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.auth.dependencies import hash_password, verify_password
from mycopath.auth.jwt import AuthError, create_access_token, create_refresh_token, decode_token
from mycopath.config import get_settings
from mycopath.models.enums import UserRoleEnum
from mycopath.models.user import User
from mycopath.schemas.auth import LoginRequest, RegisterRequest
from mycopath.services.notifier import Notifier

logger = structlog.get_logger("mycopath.auth")

RESET_REQUESTED_MESSAGE = "If an account with that email exists, you will receive password reset instructions."
VERIFICATION_RESENT_MESSAGE = "If an account with that email exists, a new verification email has been sent."


def generate_token() -> str:
	return secrets.token_hex(32)


def _is_expired(expires_at: datetime | None) -> bool:
	return expires_at is not None and datetime.now(UTC) > expires_at


class AuthService:
	def __init__(self, db: AsyncSession, notifier: Notifier | None = None):
		self.db = db
		self.notifier = notifier or Notifier()

	async def _one(self, stmt) -> User | None:
		row = await self.db.execute(stmt)
		return row.scalar_one_or_none()

	async def get_by_email(self, email: str) -> User | None:
		return await self._one(select(User).where(User.email == email.lower()))

	async def get_by_employee_id(self, employee_id: str) -> User | None:
		return await self._one(select(User).where(User.employee_id == employee_id))

	async def register(self, payload: RegisterRequest) -> User:
		"""Create an inactive, unverified account and send its verification link."""
		if payload.role == UserRoleEnum.admin:
			raise ValueError("The admin role cannot be requested at registration")
		email = payload.email.lower()
		if await self.get_by_email(email) is not None:
			raise ValueError("User with this email already exists")
		if await self.get_by_employee_id(payload.employee_id) is not None:
			raise ValueError("Employee ID is already registered. Please contact HR if this is an error.")

		settings = get_settings()
		user = User(
			employee_id=payload.employee_id,
			email=email,
			hashed_password=hash_password(payload.password),
			first_name=payload.first_name,
			last_name=payload.last_name,
			role=payload.role,
			is_active=False,
			is_approved_by_admin=False,
			is_email_verified=False,
			email_verification_token=generate_token(),
			email_verification_expires=datetime.now(UTC) + timedelta(hours=settings.verification_token_ttl_hours),
		)
		self.db.add(user)
		await self.db.flush()
		await self.db.refresh(user)
		self.notifier.send_verification(user.email, user.email_verification_token, user.first_name or user.employee_id)
		logger.info("user_registered", user_id=str(user.id), employee_id=user.employee_id)
		return user

	async def authenticate(self, payload: LoginRequest) -> User:
		identifier = payload.email_or_employee_id.strip()
		if "@" in identifier:
			user = await self.get_by_email(identifier)
		else:
			user = await self.get_by_employee_id(identifier)

		if user is None or not verify_password(payload.password, user.hashed_password):
			logger.info("login_failed", reason="bad_credentials")
			raise AuthError(code="invalid_credentials", detail="Invalid credentials")
		if not user.is_email_verified:
			raise AuthError(
				code="email_unverified",
				detail="Please verify your email before logging in",
			)
		if not user.is_active or not user.is_approved_by_admin:
			raise AuthError(
				code="account_pending",
				detail="Account inactive or not approved",
				status_code=403,
			)

		user.last_login_at = datetime.now(UTC)
		await self.db.flush()
		logger.info("login_succeeded", user_id=str(user.id))
		return user

	def issue_tokens(self, user: User) -> dict[str, object]:
		settings = get_settings()
		return {
			"access_token": create_access_token(str(user.id)),
			"refresh_token": create_refresh_token(str(user.id)),
			"token_type": "bearer",
			"expires_in": settings.jwt_access_token_expire_minutes * 60,
		}

	async def refresh(self, refresh_token: str) -> User:
		payload = decode_token(refresh_token, expected_type="refresh")
		try:
			user_id = uuid.UUID(payload["sub"])
		except ValueError as exc:
			raise AuthError(code="token_invalid", detail="Token subject is invalid") from exc
		user = await self._one(select(User).where(User.id == user_id))
		if user is None or not user.is_active:
			raise AuthError(code="user_invalid", detail="User is not active")
		return user

	async def verify_email(self, token: str) -> User:
		user = await self._one(select(User).where(User.email_verification_token == token))
		if user is None:
			raise ValueError("Invalid or expired verification token")
		if _is_expired(user.email_verification_expires):
			raise ValueError("Verification token has expired. Please request a new one.")

		user.is_email_verified = True
		user.email_verification_token = None
		user.email_verification_expires = None
		await self.db.flush()
		logger.info("email_verified", user_id=str(user.id))
		return user

	async def resend_verification(self, email: str) -> str:
		user = await self.get_by_email(email)
		if user is None:
			return VERIFICATION_RESENT_MESSAGE
		if user.is_email_verified:
			raise ValueError("This email is already verified. You can log in to your account.")

		settings = get_settings()
		user.email_verification_token = generate_token()
		user.email_verification_expires = datetime.now(UTC) + timedelta(hours=settings.verification_token_ttl_hours)
		await self.db.flush()
		self.notifier.send_verification(user.email, user.email_verification_token, user.first_name or user.employee_id)
		return VERIFICATION_RESENT_MESSAGE

	async def request_password_reset(self, email: str) -> str:
		"""Issue a reset token.  The reply is identical whether or not the address exists."""
		user = await self.get_by_email(email)
		if user is None:
			return RESET_REQUESTED_MESSAGE

		settings = get_settings()
		user.password_reset_token = generate_token()
		user.password_reset_expires = datetime.now(UTC) + timedelta(minutes=settings.password_reset_token_ttl_minutes)
		await self.db.flush()
		self.notifier.send_password_reset(user.email, user.password_reset_token, user.first_name or user.employee_id)
		return RESET_REQUESTED_MESSAGE

	async def reset_password(self, token: str, new_password: str) -> User:
		user = await self._one(select(User).where(User.password_reset_token == token))
		if user is None:
			raise ValueError("Invalid or expired reset token")
		if _is_expired(user.password_reset_expires):
			raise ValueError("Reset token has expired. Please request a new password reset.")

		user.hashed_password = hash_password(new_password)
		user.password_reset_token = None
		user.password_reset_expires = None
		await self.db.flush()
		self.notifier.send_password_changed(user.email, user.first_name or user.employee_id)
		logger.info("password_reset", user_id=str(user.id))
		return user
