from __future__ import annotations

from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient

from mycopath.models.enums import UserRoleEnum
from mycopath.services.user_service import UserService


class WelcomeRecorder:
    def __init__(self) -> None:
        self.welcomed: list[str] = []

    def send_welcome(self, email: str, name: str) -> bool:
        self.welcomed.append(email)
        return True


@pytest.mark.asyncio
async def test_approve_activates_verified_user_and_sends_welcome(
    fake_db_session: Any,
    user_factory: Any,
    db_result: Any,
) -> None:
    pending = user_factory(UserRoleEnum.worker, is_active=False, is_approved_by_admin=False)
    fake_db_session.execute.return_value = db_result(pending)
    notifier = WelcomeRecorder()

    await UserService(fake_db_session, notifier=notifier).approve(pending.id, user_factory(UserRoleEnum.admin))

    assert pending.is_approved_by_admin is True
    assert pending.is_active is True
    assert notifier.welcomed == [pending.email]


@pytest.mark.asyncio
async def test_approve_requires_verified_email(fake_db_session: Any, user_factory: Any, db_result: Any) -> None:
    pending = user_factory(
        UserRoleEnum.worker,
        is_active=False,
        is_approved_by_admin=False,
        is_email_verified=False,
    )
    fake_db_session.execute.return_value = db_result(pending)

    with pytest.raises(ValueError, match="verify"):
        await UserService(fake_db_session, notifier=WelcomeRecorder()).approve(
            pending.id, user_factory(UserRoleEnum.admin)
        )
    assert pending.is_active is False


@pytest.mark.asyncio
async def test_cannot_deactivate_self(fake_db_session: Any, user_factory: Any, db_result: Any) -> None:
    admin = user_factory(UserRoleEnum.admin)
    fake_db_session.execute.return_value = db_result(admin)

    with pytest.raises(ValueError):
        await UserService(fake_db_session).set_active(admin.id, False, admin)


@pytest.mark.asyncio
async def test_manager_cannot_grant_admin_role(client: AsyncClient, act_as: Any, user_factory: Any) -> None:
    act_as(user_factory(UserRoleEnum.manager))

    response = await client.patch(f"/api/users/{uuid4()}/role", json={"role": "admin"})
    assert response.status_code == 403
    assert response.json()["detail"]["error"] == "forbidden"


@pytest.mark.asyncio
async def test_admin_changes_role(
    client: AsyncClient,
    fake_db_session: Any,
    user_factory: Any,
    db_result: Any,
) -> None:
    target = user_factory(UserRoleEnum.worker)
    fake_db_session.execute.return_value = db_result(target)

    response = await client.patch(f"/api/users/{target.id}/role", json={"role": "production"})
    assert response.status_code == 200
    assert response.json()["role"] == "production"


@pytest.mark.asyncio
async def test_worker_cannot_list_users(client: AsyncClient, act_as: Any, user_factory: Any) -> None:
    act_as(user_factory(UserRoleEnum.worker))

    response = await client.get("/api/users")
    assert response.status_code == 403
