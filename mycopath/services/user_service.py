"""Administrator account management: approval, activation, role changes."""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.models.enums import UserRoleEnum
from mycopath.models.user import User
from mycopath.services.notifier import Notifier

logger = structlog.get_logger("mycopath.users")


class UserService:
	def __init__(self, db: AsyncSession, notifier: Notifier | None = None):
		self.db = db
		self.notifier = notifier or Notifier()

	async def list_users(self, pending_only: bool = False) -> list[User]:
		stmt = select(User).order_by(User.created_at.desc())
		if pending_only:
			stmt = stmt.where(User.is_approved_by_admin.is_(False))
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())

	async def get_user(self, user_id: uuid.UUID) -> User:
		row = await self.db.execute(select(User).where(User.id == user_id))
		user = row.scalar_one_or_none()
		if user is None:
			raise LookupError(f"User {user_id} not found")
		return user

	async def approve(self, user_id: uuid.UUID, actor: User) -> User:
		user = await self.get_user(user_id)
		if not user.is_email_verified:
			raise ValueError("User must verify their email before approval")
		was_active = user.is_active
		user.is_approved_by_admin = True
		user.is_active = True
		await self.db.flush()
		if not was_active:
			self.notifier.send_welcome(user.email, user.first_name or user.employee_id)
		logger.info("user_approved", user_id=str(user.id), actor=str(actor.id))
		return user

	async def set_active(self, user_id: uuid.UUID, active: bool, actor: User) -> User:
		user = await self.get_user(user_id)
		if user.id == actor.id and not active:
			raise ValueError("You cannot deactivate your own account")
		if active and not user.is_approved_by_admin:
			raise ValueError("User must be approved before activation")
		user.is_active = active
		await self.db.flush()
		logger.info("user_activation_changed", user_id=str(user.id), active=active, actor=str(actor.id))
		return user

	async def change_role(self, user_id: uuid.UUID, role: UserRoleEnum, actor: User) -> User:
		if role == UserRoleEnum.admin and actor.role != UserRoleEnum.admin:
			raise PermissionError("Only an admin can grant the admin role")
		user = await self.get_user(user_id)
		user.role = role
		await self.db.flush()
		logger.info("user_role_changed", user_id=str(user.id), role=role.value, actor=str(actor.id))
		return user
