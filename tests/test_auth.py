from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID, uuid4

import pytest
from httpx import AsyncClient

from mycopath.auth.dependencies import hash_password, verify_password
from mycopath.auth.jwt import AuthError, create_access_token, create_refresh_token, decode_token
from mycopath.main import app
from mycopath.models.enums import UserRoleEnum
from mycopath.models.user import User
from mycopath.schemas.auth import LoginRequest, RegisterRequest
from mycopath.services.auth_service import RESET_REQUESTED_MESSAGE, AuthService


class RecordingNotifier:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def send_verification(self, email: str, token: str, name: str) -> bool:
        self.sent.append(("verification", email))
        return True

    def send_welcome(self, email: str, name: str) -> bool:
        self.sent.append(("welcome", email))
        return True

    def send_password_reset(self, email: str, token: str, name: str) -> bool:
        self.sent.append(("password_reset", email))
        return True

    def send_password_changed(self, email: str, name: str) -> bool:
        self.sent.append(("password_changed", email))
        return True


# ── Tokens ───────────────────────────────────────────────────────────────


def test_jwt_create_decode_roundtrip() -> None:
    subject = str(uuid4())
    token = create_access_token(subject, expires_minutes=5)
    payload = decode_token(token, expected_type="access")
    assert payload["sub"] == subject
    assert payload["typ"] == "access"
    assert "role" not in payload


def test_refresh_token_rejected_where_access_expected() -> None:
    token = create_refresh_token(str(uuid4()))
    with pytest.raises(AuthError) as exc_info:
        decode_token(token, expected_type="access")
    assert exc_info.value.code == "token_type_invalid"


def test_decode_invalid_token_raises_auth_error() -> None:
    with pytest.raises(AuthError):
        decode_token("invalid.token.payload", expected_type="access")


def test_password_hash_verifies() -> None:
    hashed = hash_password("mushroom42")
    assert verify_password("mushroom42", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("mushroom42", "not-a-bcrypt-hash")


# ── Protected endpoints ──────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_missing_jwt_rejected_on_protected_endpoint(auth_client: AsyncClient) -> None:
    response = await auth_client.get("/api/production-batches")
    assert response.status_code == 401
    assert response.json()["detail"]["error"] == "auth_required"


@pytest.mark.asyncio
async def test_valid_jwt_resolves_current_user(
    auth_client: AsyncClient,
    fake_db_session: Any,
    user_factory: Any,
    db_result: Any,
) -> None:
    user = user_factory(UserRoleEnum.production)
    fake_db_session.execute.return_value = db_result(user)
    token = create_access_token(str(user.id))

    response = await auth_client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["employee_id"] == "EMP-PRODUCTION"
    assert response.json()["role"] == "production"


@pytest.mark.asyncio
async def test_inactive_user_token_rejected(
    auth_client: AsyncClient,
    fake_db_session: Any,
    user_factory: Any,
    db_result: Any,
) -> None:
    user = user_factory(UserRoleEnum.worker, is_active=False)
    fake_db_session.execute.return_value = db_result(user)
    token = create_access_token(str(user.id))

    response = await auth_client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"]["error"] == "user_invalid"


# ── Login ────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_login_with_employee_id_issues_tokens(
    auth_client: AsyncClient,
    fake_db_session: Any,
    user_factory: Any,
    db_result: Any,
) -> None:
    user = user_factory(UserRoleEnum.worker, hashed_password=hash_password("secret123"))
    fake_db_session.execute.return_value = db_result(user)

    response = await auth_client.post(
        "/api/auth/login",
        json={"email_or_employee_id": "EMP-WORKER", "password": "secret123"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert decode_token(body["access_token"], expected_type="access")["sub"] == str(user.id)
    assert decode_token(body["refresh_token"], expected_type="refresh")["sub"] == str(user.id)
    assert body["user"]["email"] == user.email
    assert user.last_login_at is not None


@pytest.mark.asyncio
async def test_login_with_wrong_password_returns_401(
    auth_client: AsyncClient,
    fake_db_session: Any,
    user_factory: Any,
    db_result: Any,
) -> None:
    user = user_factory(UserRoleEnum.worker, hashed_password=hash_password("secret123"))
    fake_db_session.execute.return_value = db_result(user)

    response = await auth_client.post(
        "/api/auth/login",
        json={"email_or_employee_id": user.email, "password": "nope"},
    )
    assert response.status_code == 401
    assert response.json()["detail"]["error"] == "invalid_credentials"


@pytest.mark.asyncio
async def test_login_requires_verified_email(fake_db_session: Any, user_factory: Any, db_result: Any) -> None:
    user = user_factory(
        UserRoleEnum.worker,
        hashed_password=hash_password("secret123"),
        is_email_verified=False,
    )
    fake_db_session.execute.return_value = db_result(user)

    with pytest.raises(AuthError) as exc_info:
        await AuthService(fake_db_session).authenticate(
            LoginRequest(email_or_employee_id=user.email, password="secret123")
        )
    assert exc_info.value.code == "email_unverified"
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_login_requires_admin_approval(fake_db_session: Any, user_factory: Any, db_result: Any) -> None:
    user = user_factory(
        UserRoleEnum.worker,
        hashed_password=hash_password("secret123"),
        is_active=False,
        is_approved_by_admin=False,
    )
    fake_db_session.execute.return_value = db_result(user)

    with pytest.raises(AuthError) as exc_info:
        await AuthService(fake_db_session).authenticate(
            LoginRequest(email_or_employee_id="EMP-WORKER", password="secret123")
        )
    assert exc_info.value.code == "account_pending"
    assert exc_info.value.status_code == 403


@pytest.mark.asyncio
async def test_login_rate_limited_after_quota(
    fake_redis: Any,
    auth_client: AsyncClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    app.state.redis = fake_redis

    @dataclass
    class _SettingsStub:
        rate_limit_window_seconds: int = 900
        rate_limit_login_per_window: int = 1
        rate_limit_register_per_window: int = 1

    monkeypatch.setattr("mycopath.middleware.rate_limit.get_settings", lambda: _SettingsStub())
    credentials = {"email_or_employee_id": "EMP-404", "password": "whatever"}

    first = await auth_client.post("/api/auth/login", json=credentials)
    second = await auth_client.post("/api/auth/login", json=credentials)

    assert first.status_code == 401
    assert second.status_code == 429
    assert second.json()["detail"]["error"] == "rate_limited"
    fake_redis.expire.assert_awaited_once()


# ── Registration and token flows ─────────────────────────────────────────


@pytest.mark.asyncio
async def test_register_creates_unverified_inactive_user(fake_db_session: Any) -> None:
    notifier = RecordingNotifier()
    service = AuthService(fake_db_session, notifier=notifier)

    user = await service.register(
        RegisterRequest(
            employee_id="EMP-007",
            email="New.Hire@Example.com",
            password="secret123",
            first_name="New",
        )
    )

    assert user.email == "new.hire@example.com"
    assert user.role == UserRoleEnum.worker
    assert user.is_active is False
    assert user.is_email_verified is False
    assert user.is_approved_by_admin is False
    assert user.email_verification_token is not None
    assert len(user.email_verification_token) == 64
    assert verify_password("secret123", user.hashed_password)
    assert notifier.sent == [("verification", "new.hire@example.com")]


@pytest.mark.asyncio
async def test_register_rejects_admin_role(auth_client: AsyncClient) -> None:
    response = await auth_client.post(
        "/api/auth/register",
        json={
            "employee_id": "EMP-900",
            "email": "boss@example.com",
            "password": "secret123",
            "role": "admin",
        },
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_register_short_password_fails_validation(auth_client: AsyncClient) -> None:
    response = await auth_client.post(
        "/api/auth/register",
        json={"employee_id": "EMP-901", "email": "a@example.com", "password": "123"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


@pytest.mark.asyncio
async def test_register_duplicate_email_rejected(
    fake_db_session: Any,
    user_factory: Any,
    db_result: Any,
) -> None:
    fake_db_session.execute.return_value = db_result(user_factory(UserRoleEnum.worker))

    with pytest.raises(ValueError, match="already exists"):
        await AuthService(fake_db_session, notifier=RecordingNotifier()).register(
            RegisterRequest(employee_id="EMP-002", email="worker@mycopath.test", password="secret123")
        )


@pytest.mark.asyncio
async def test_verify_email_consumes_token(fake_db_session: Any, user_factory: Any, db_result: Any) -> None:
    user = user_factory(
        UserRoleEnum.worker,
        is_email_verified=False,
        email_verification_token="abc",
        email_verification_expires=datetime.now(UTC) + timedelta(hours=1),
    )
    fake_db_session.execute.return_value = db_result(user)

    notifier = RecordingNotifier()
    await AuthService(fake_db_session, notifier=notifier).verify_email("abc")

    assert user.is_email_verified is True
    assert user.email_verification_token is None
    assert notifier.sent == []


@pytest.mark.asyncio
async def test_verify_email_rejects_expired_token(fake_db_session: Any, user_factory: Any, db_result: Any) -> None:
    user = user_factory(
        UserRoleEnum.worker,
        is_email_verified=False,
        email_verification_token="abc",
        email_verification_expires=datetime.now(UTC) - timedelta(minutes=1),
    )
    fake_db_session.execute.return_value = db_result(user)

    with pytest.raises(ValueError, match="expired"):
        await AuthService(fake_db_session, notifier=RecordingNotifier()).verify_email("abc")
    assert user.is_email_verified is False


@pytest.mark.asyncio
async def test_forgot_password_does_not_reveal_unknown_email(auth_client: AsyncClient) -> None:
    response = await auth_client.post("/api/auth/forgot-password", json={"email": "ghost@example.com"})
    assert response.status_code == 200
    assert response.json()["message"] == RESET_REQUESTED_MESSAGE


@pytest.mark.asyncio
async def test_reset_password_replaces_hash(fake_db_session: Any, user_factory: Any, db_result: Any) -> None:
    user = user_factory(
        UserRoleEnum.worker,
        hashed_password=hash_password("old-pass"),
        password_reset_token="tok",
        password_reset_expires=datetime.now(UTC) + timedelta(minutes=30),
    )
    fake_db_session.execute.return_value = db_result(user)
    notifier = RecordingNotifier()

    await AuthService(fake_db_session, notifier=notifier).reset_password("tok", "new-pass-1")

    assert verify_password("new-pass-1", user.hashed_password)
    assert user.password_reset_token is None
    assert notifier.sent == [("password_changed", user.email)]


@pytest.mark.asyncio
async def test_refresh_with_non_uuid_subject_rejected(fake_db_session: Any) -> None:
    token = create_refresh_token("not-a-uuid")
    with pytest.raises(AuthError):
        await AuthService(fake_db_session).refresh(token)


@pytest.mark.asyncio
async def test_refresh_route_issues_new_pair(
    auth_client: AsyncClient,
    fake_db_session: Any,
    user_factory: Any,
    db_result: Any,
) -> None:
    user: User = user_factory(UserRoleEnum.finance)
    fake_db_session.execute.return_value = db_result(user)

    response = await auth_client.post(
        "/api/auth/refresh",
        json={"refresh_token": create_refresh_token(str(user.id))},
    )
    assert response.status_code == 200
    payload = decode_token(response.json()["access_token"], expected_type="access")
    assert UUID(payload["sub"]) == user.id
    assert response.json()["user"]["role"] == "finance"
