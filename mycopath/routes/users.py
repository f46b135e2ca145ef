"""User administration routes (admin and manager only)."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.auth.dependencies import require_manager
from mycopath.database import get_db
from mycopath.middleware.exceptions import map_service_error
from mycopath.models.user import User
from mycopath.schemas.auth import RoleUpdate, UserRead
from mycopath.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserRead])
async def list_users(
	pending: bool = False,
	db: AsyncSession = Depends(get_db),
	_admin: User = Depends(require_manager),
) -> list[UserRead]:
	try:
		users = await UserService(db).list_users(pending_only=pending)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return [UserRead.model_validate(user) for user in users]


@router.post("/{user_id}/approve", response_model=UserRead)
async def approve_user(
	user_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	admin: User = Depends(require_manager),
) -> UserRead:
	try:
		user = await UserService(db).approve(user_id, admin)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return UserRead.model_validate(user)


@router.post("/{user_id}/deactivate", response_model=UserRead)
async def deactivate_user(
	user_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	admin: User = Depends(require_manager),
) -> UserRead:
	try:
		user = await UserService(db).set_active(user_id, False, admin)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return UserRead.model_validate(user)


@router.post("/{user_id}/activate", response_model=UserRead)
async def activate_user(
	user_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	admin: User = Depends(require_manager),
) -> UserRead:
	try:
		user = await UserService(db).set_active(user_id, True, admin)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return UserRead.model_validate(user)


@router.patch("/{user_id}/role", response_model=UserRead)
async def change_role(
	user_id: uuid.UUID,
	payload: RoleUpdate,
	db: AsyncSession = Depends(get_db),
	admin: User = Depends(require_manager),
) -> UserRead:
	try:
		user = await UserService(db).change_role(user_id, payload.role, admin)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return UserRead.model_validate(user)
