"""Pydantic schemas for registration, login, token and user administration."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from mycopath.models.enums import UserRoleEnum


class RegisterRequest(BaseModel):
	employee_id: str = Field(min_length=3, max_length=50)
	email: EmailStr
	password: str = Field(min_length=6, max_length=128)
	first_name: str = Field(default="", max_length=100)
	last_name: str = Field(default="", max_length=100)
	role: UserRoleEnum = UserRoleEnum.worker


class LoginRequest(BaseModel):
	email_or_employee_id: str = Field(min_length=1, max_length=320)
	password: str = Field(min_length=1, max_length=128)


class TokenRequest(BaseModel):
	token: str = Field(min_length=1)


class EmailRequest(BaseModel):
	email: EmailStr


class ResetPasswordRequest(BaseModel):
	token: str = Field(min_length=1)
	new_password: str = Field(min_length=6, max_length=128)


class RefreshRequest(BaseModel):
	refresh_token: str = Field(min_length=1)


class RoleUpdate(BaseModel):
	role: UserRoleEnum


class UserRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	employee_id: str
	email: str
	first_name: str
	last_name: str
	role: UserRoleEnum
	is_active: bool
	is_approved_by_admin: bool
	is_email_verified: bool
	last_login_at: datetime | None = None
	created_at: datetime


class TokenResponse(BaseModel):
	access_token: str
	refresh_token: str
	token_type: str = "bearer"
	expires_in: int
	user: UserRead


class RegisterResponse(BaseModel):
	message: str
	user: UserRead
