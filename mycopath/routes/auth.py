"""Authentication routes: registration, login, e-mail tokens and refresh."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.auth.dependencies import get_current_user
from mycopath.database import get_db
from mycopath.middleware.exceptions import map_service_error
from mycopath.models.user import User
from mycopath.schemas.auth import (
	EmailRequest,
	LoginRequest,
	RefreshRequest,
	RegisterRequest,
	RegisterResponse,
	ResetPasswordRequest,
	TokenRequest,
	TokenResponse,
	UserRead,
)
from mycopath.schemas.common import MessageResponse
from mycopath.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(service: AuthService, user: User) -> TokenResponse:
	return TokenResponse(**service.issue_tokens(user), user=UserRead.model_validate(user))


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: AsyncSession = Depends(get_db)) -> RegisterResponse:
	service = AuthService(db)
	try:
		user = await service.register(payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return RegisterResponse(
		message=(
			"Registration successful. Please check your email to verify your account, "
			"then wait for admin approval."
		),
		user=UserRead.model_validate(user),
	)


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db)) -> TokenResponse:
	service = AuthService(db)
	try:
		user = await service.authenticate(payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return _token_response(service, user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(payload: RefreshRequest, db: AsyncSession = Depends(get_db)) -> TokenResponse:
	service = AuthService(db)
	try:
		user = await service.refresh(payload.refresh_token)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return _token_response(service, user)


@router.post("/verify-email", response_model=MessageResponse)
async def verify_email(payload: TokenRequest, db: AsyncSession = Depends(get_db)) -> MessageResponse:
	try:
		await AuthService(db).verify_email(payload.token)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return MessageResponse(message="Email verified successfully. Your account is pending admin approval.")


@router.post("/resend-verification", response_model=MessageResponse)
async def resend_verification(payload: EmailRequest, db: AsyncSession = Depends(get_db)) -> MessageResponse:
	try:
		message = await AuthService(db).resend_verification(payload.email)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return MessageResponse(message=message)


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(payload: EmailRequest, db: AsyncSession = Depends(get_db)) -> MessageResponse:
	try:
		message = await AuthService(db).request_password_reset(payload.email)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return MessageResponse(message=message)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(payload: ResetPasswordRequest, db: AsyncSession = Depends(get_db)) -> MessageResponse:
	try:
		await AuthService(db).reset_password(payload.token, payload.new_password)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return MessageResponse(message="Password has been reset successfully. You can now log in.")


@router.get("/user", response_model=UserRead)
async def current_user(user: User = Depends(get_current_user)) -> UserRead:
	return UserRead.model_validate(user)
