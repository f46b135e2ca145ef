"""Shared pytest fixtures: async test client, fake DB session, fake Redis, ORM factories."""

from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from mycopath.auth.dependencies import get_current_user
from mycopath.auth.jwt import create_access_token
from mycopath.database import get_db
from mycopath.main import app
from mycopath.models.enums import (
	BatchStatusEnum,
	ProductionStageEnum,
	QualityCheckStatusEnum,
	RiskLevelEnum,
	UserRoleEnum,
)
from mycopath.models.production import ProductionBatch
from mycopath.models.user import User


class FakeAsyncSession:
	def __init__(self) -> None:
		self.add = MagicMock()
		self.flush = AsyncMock()
		self.refresh = AsyncMock()
		self.delete = AsyncMock()
		self.commit = AsyncMock()
		self.rollback = AsyncMock()
		self.close = AsyncMock()
		self.execute = AsyncMock(return_value=result_of(None))


class FakeRedis:
	def __init__(self) -> None:
		self._counter: dict[str, int] = {}
		self.incr = AsyncMock(side_effect=self._incr)
		self.expire = AsyncMock(return_value=True)

	async def _incr(self, key: str) -> int:
		value = self._counter.get(key, 0) + 1
		self._counter[key] = value
		return value

	def reset_counters(self) -> None:
		self._counter.clear()


def result_of(value: Any) -> MagicMock:
	"""A stand-in for a SQLAlchemy ``Result`` holding ``value`` (a row or a list of rows)."""
	rows = value if isinstance(value, list) else ([] if value is None else [value])
	result = MagicMock()
	result.scalar_one_or_none.return_value = None if isinstance(value, list) else value
	result.scalars.return_value.all.return_value = rows
	result.scalars.return_value.first.return_value = rows[0] if rows else None
	result.all.return_value = rows
	return result


def make_user(role: UserRoleEnum = UserRoleEnum.admin, **overrides: Any) -> User:
	now = datetime.now(UTC)
	fields: dict[str, Any] = {
		"id": uuid.uuid4(),
		"email": f"{role.value}@mycopath.test",
		"hashed_password": "not-a-real-hash",
		"first_name": role.value.capitalize(),
		"last_name": "Tester",
		"role": role,
		"employee_id": f"EMP-{role.value.upper()}",
		"is_active": True,
		"is_approved_by_admin": True,
		"is_email_verified": True,
		"created_at": now,
		"updated_at": now,
	}
	fields.update(overrides)
	return User(**fields)


def make_batch(**overrides: Any) -> ProductionBatch:
	now = datetime.now(UTC)
	fields: dict[str, Any] = {
		"id": uuid.uuid4(),
		"batch_number": "B-2024-001",
		"product_type": "Oyster Mushroom",
		"substrate": "Straw",
		"start_date": date(2024, 3, 1),
		"status": BatchStatusEnum.growing,
		"current_stage": ProductionStageEnum.batch_creation,
		"risk_level": RiskLevelEnum.low,
		"requires_approval": False,
		"is_approved": False,
		"quality_check_status": QualityCheckStatusEnum.pending,
		"created_at": now,
		"updated_at": now,
	}
	fields.update(overrides)
	return ProductionBatch(**fields)


@pytest.fixture
def fake_db_session() -> FakeAsyncSession:
	"""A lightweight async-session stub for dependency overrides and service tests."""
	return FakeAsyncSession()


@pytest.fixture
def fake_redis() -> FakeRedis:
	return FakeRedis()


@pytest.fixture
def current_user() -> User:
	return make_user(UserRoleEnum.admin)


@asynccontextmanager
async def _test_client() -> AsyncGenerator[AsyncClient, None]:
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan
	transport = ASGITransport(app=app, raise_app_exceptions=False)
	try:
		async with AsyncClient(transport=transport, base_url="http://test") as test_client:
			yield test_client
	finally:
		app.router.lifespan_context = original_lifespan
		app.dependency_overrides.clear()
		if hasattr(app.state, "redis"):
			del app.state.redis


@pytest.fixture
async def client(fake_db_session: FakeAsyncSession, current_user: User) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and DB + current user mocked."""

	async def override_get_db() -> AsyncGenerator[Any, None]:
		yield fake_db_session

	async def override_current_user() -> User:
		return current_user

	app.dependency_overrides[get_db] = override_get_db
	app.dependency_overrides[get_current_user] = override_current_user
	async with _test_client() as test_client:
		yield test_client


@pytest.fixture
async def auth_client(fake_db_session: FakeAsyncSession) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with DB override only (real auth dependencies active)."""

	async def override_get_db() -> AsyncGenerator[Any, None]:
		yield fake_db_session

	app.dependency_overrides[get_db] = override_get_db
	async with _test_client() as test_client:
		yield test_client


def _act_as(user: User) -> None:
	async def _override() -> User:
		return user

	app.dependency_overrides[get_current_user] = _override


@pytest.fixture
def act_as():
	"""Swap the authenticated user for the remainder of a test."""
	return _act_as


@pytest.fixture
def user_factory():
	return make_user


@pytest.fixture
def batch_factory():
	return make_batch


@pytest.fixture
def db_result():
	return result_of


@pytest.fixture
def access_token(current_user: User) -> str:
	return create_access_token(str(current_user.id), expires_minutes=30)
