from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient

from mycopath.models.enums import UserRoleEnum, WorkStatusEnum
from mycopath.models.operations import InventoryItem, Milestone
from mycopath.schemas.operations import InventoryItemUpdate, MilestoneUpdate
from mycopath.services.finance_service import TransactionService
from mycopath.services.planning_service import InventoryService, MilestoneService


def _inventory(current: float, minimum: float | None) -> InventoryItem:
    return InventoryItem(
        id=uuid4(),
        item_name="Straw bales",
        category="Substrate",
        current_stock=current,
        unit="bale",
        minimum_stock=minimum,
        created_at=datetime.now(UTC),
        updated_at=datetime.now(UTC),
    )


def _milestone(**overrides: Any) -> Milestone:
    fields: dict[str, Any] = {
        "id": uuid4(),
        "name": "First 100 kg month",
        "status": WorkStatusEnum.in_progress,
        "created_at": datetime.now(UTC),
        "updated_at": datetime.now(UTC),
    }
    fields.update(overrides)
    return Milestone(**fields)


@pytest.mark.parametrize(
    ("current", "minimum", "expected"),
    [(5.0, 10.0, True), (10.0, 10.0, True), (12.0, 10.0, False), (0.0, None, False)],
)
def test_low_stock_flag(current: float, minimum: float | None, expected: bool) -> None:
    assert _inventory(current, minimum).is_low_stock is expected


@pytest.mark.asyncio
async def test_summary_groups_income_and_expenses(fake_db_session: Any, db_result: Any) -> None:
    fake_db_session.execute.return_value = db_result([("income", 1500.0, 3), ("expense", 420.25, 2)])

    summary = await TransactionService(fake_db_session).summary(date(2024, 1, 1), date(2024, 12, 31))

    assert summary == {
        "total_income": 1500.0,
        "total_expenses": 420.25,
        "net": 1079.75,
        "transaction_count": 5,
    }


@pytest.mark.asyncio
async def test_summary_of_empty_ledger(fake_db_session: Any, db_result: Any) -> None:
    fake_db_session.execute.return_value = db_result([])

    summary = await TransactionService(fake_db_session).summary()
    assert summary == {"total_income": 0.0, "total_expenses": 0.0, "net": 0.0, "transaction_count": 0}


@pytest.mark.asyncio
async def test_completing_milestone_stamps_completed_date(fake_db_session: Any, db_result: Any) -> None:
    milestone = _milestone()
    fake_db_session.execute.return_value = db_result(milestone)

    await MilestoneService(fake_db_session).update(milestone.id, MilestoneUpdate(status=WorkStatusEnum.completed))

    assert milestone.status == WorkStatusEnum.completed
    assert milestone.completed_date == date.today()


@pytest.mark.asyncio
async def test_explicit_completed_date_is_kept(fake_db_session: Any, db_result: Any) -> None:
    milestone = _milestone()
    fake_db_session.execute.return_value = db_result(milestone)

    await MilestoneService(fake_db_session).update(
        milestone.id,
        MilestoneUpdate(status=WorkStatusEnum.completed, completed_date=date(2024, 2, 29)),
    )
    assert milestone.completed_date == date(2024, 2, 29)


@pytest.mark.asyncio
async def test_null_edit_does_not_clear_required_column(fake_db_session: Any, db_result: Any) -> None:
    item = _inventory(8.0, 10.0)
    fake_db_session.execute.return_value = db_result(item)

    await InventoryService(fake_db_session).update(
        item.id, InventoryItemUpdate(current_stock=None, supplier="Agro Supplies")
    )

    assert item.current_stock == 8.0
    assert item.supplier == "Agro Supplies"


@pytest.mark.asyncio
async def test_low_stock_listing(client: AsyncClient, fake_db_session: Any, db_result: Any) -> None:
    fake_db_session.execute.return_value = db_result([_inventory(2.0, 10.0), _inventory(50.0, 10.0)])

    response = await client.get("/api/inventory", params={"low_stock": "true"})
    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["is_low_stock"] is True


@pytest.mark.asyncio
async def test_missing_milestone_returns_404(client: AsyncClient) -> None:
    response = await client.patch(f"/api/milestones/{uuid4()}", json={"status": "completed"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_worker_cannot_read_finances(client: AsyncClient, act_as: Any, user_factory: Any) -> None:
    act_as(user_factory(UserRoleEnum.worker))

    response = await client.get("/api/financial-transactions/summary")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_transaction_amount_must_be_positive(client: AsyncClient) -> None:
    response = await client.post(
        "/api/financial-transactions",
        json={"type": "expense", "category": "Substrate", "amount": 0, "description": "Straw"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


@pytest.mark.asyncio
async def test_activity_feed_limit_is_bounded(client: AsyncClient) -> None:
    response = await client.get("/api/activities", params={"limit": 0})
    assert response.status_code == 400
