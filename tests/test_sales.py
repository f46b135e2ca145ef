from __future__ import annotations

import re
from datetime import UTC, date, datetime
from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient

from mycopath.models.enums import (
    CustomerTypeEnum,
    OrderStatusEnum,
    OrderTypeEnum,
    PaymentStatusEnum,
)
from mycopath.models.sales import Customer, Order
from mycopath.schemas.sales import OnlineOrderCreate, OrderCreate, OrderItemCreate, OrderUpdate
from mycopath.services.sales_service import OrderService, build_items, generate_order_number


def _order(**overrides: Any) -> Order:
    now = datetime.now(UTC)
    fields: dict[str, Any] = {
        "id": uuid4(),
        "order_number": "ORD-20240301120000-ABCD",
        "order_type": OrderTypeEnum.inhouse,
        "status": OrderStatusEnum.pending,
        "total_amount": 100.0,
        "paid_amount": 0.0,
        "payment_status": PaymentStatusEnum.pending,
        "order_date": date(2024, 3, 1),
        "items": [],
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return Order(**fields)


def test_order_number_format() -> None:
    number = generate_order_number(datetime(2024, 3, 1, 12, 30, 5, tzinfo=UTC))
    assert re.fullmatch(r"ORD-20240301123005-[0-9A-F]{4}", number)


def test_item_total_is_quantity_times_unit_price() -> None:
    items = build_items(
        [
            OrderItemCreate(product_id=uuid4(), quantity=2.5, unit_price=120.0),
            OrderItemCreate(product_id=uuid4(), quantity=3, unit_price=19.99),
        ]
    )
    assert [item.total_price for item in items] == [300.0, 59.97]


@pytest.mark.asyncio
async def test_order_total_defaults_to_item_sum(fake_db_session: Any) -> None:
    payload = OrderCreate(
        order_type=OrderTypeEnum.inhouse,
        order_date=date(2024, 3, 1),
        items=[
            OrderItemCreate(product_id=uuid4(), quantity=2, unit_price=150.0),
            OrderItemCreate(product_id=uuid4(), quantity=1, unit_price=80.5),
        ],
    )

    order = await OrderService(fake_db_session).create_order(payload)

    assert order.total_amount == 380.5
    assert len(order.items) == 2
    assert order.order_number.startswith("ORD-")


@pytest.mark.asyncio
async def test_explicit_total_is_kept(fake_db_session: Any) -> None:
    payload = OrderCreate(
        order_type=OrderTypeEnum.wholesale,
        order_date=date(2024, 3, 1),
        total_amount=250.0,
        items=[OrderItemCreate(product_id=uuid4(), quantity=2, unit_price=150.0)],
    )

    order = await OrderService(fake_db_session).create_order(payload)
    assert order.total_amount == 250.0


@pytest.mark.asyncio
async def test_online_order_creates_customer_when_email_unknown(fake_db_session: Any) -> None:
    payload = OnlineOrderCreate.model_validate(
        {
            "customer": {"name": "Ram", "email": "ram@example.com", "address": "Kathmandu"},
            "items": [{"product_id": str(uuid4()), "quantity": 1, "unit_price": 500}],
        }
    )

    order = await OrderService(fake_db_session).create_online_order(payload)

    added = [call.args[0] for call in fake_db_session.add.call_args_list]
    customers = [obj for obj in added if isinstance(obj, Customer)]
    assert len(customers) == 1
    assert customers[0].customer_type == CustomerTypeEnum.individual
    assert customers[0].source == "online"
    assert order.order_type == OrderTypeEnum.online
    assert order.status == OrderStatusEnum.pending
    assert order.shipping_address == "Kathmandu"
    assert order.total_amount == 500.0


@pytest.mark.asyncio
async def test_online_order_reuses_existing_customer(fake_db_session: Any, db_result: Any) -> None:
    existing = Customer(id=uuid4(), name="Ram", email="ram@example.com", customer_type=CustomerTypeEnum.individual)
    fake_db_session.execute.side_effect = [db_result(existing), db_result(existing)]
    payload = OnlineOrderCreate.model_validate(
        {
            "customer": {"name": "Ram", "email": "ram@example.com"},
            "items": [{"product_id": str(uuid4()), "quantity": 2, "unit_price": 100}],
        }
    )

    order = await OrderService(fake_db_session).create_online_order(payload)

    added = [call.args[0] for call in fake_db_session.add.call_args_list]
    assert not any(isinstance(obj, Customer) for obj in added)
    assert order.customer_id == existing.id


@pytest.mark.asyncio
async def test_delivered_order_gets_delivery_date(fake_db_session: Any, db_result: Any) -> None:
    order = _order(status=OrderStatusEnum.shipped)
    fake_db_session.execute.return_value = db_result(order)

    await OrderService(fake_db_session).update_order(order.id, OrderUpdate(status=OrderStatusEnum.delivered))

    assert order.status == OrderStatusEnum.delivered
    assert order.actual_delivery == date.today()


@pytest.mark.asyncio
async def test_online_order_endpoint_is_public(auth_client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
    order = _order(order_type=OrderTypeEnum.online)

    async def fake_create(self: OrderService, payload: Any) -> Order:
        return order

    monkeypatch.setattr(OrderService, "create_online_order", fake_create)

    response = await auth_client.post(
        "/api/orders/online",
        json={
            "customer": {"name": "Ram", "email": "ram@example.com"},
            "items": [{"product_id": str(uuid4()), "quantity": 1, "unit_price": 500}],
        },
    )
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["order_number"] == order.order_number


@pytest.mark.asyncio
async def test_online_order_without_items_fails_validation(auth_client: AsyncClient) -> None:
    response = await auth_client.post(
        "/api/orders/online",
        json={"customer": {"name": "Ram", "email": "ram@example.com"}, "items": []},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_orders_filters_by_status(
    client: AsyncClient,
    fake_db_session: Any,
    db_result: Any,
) -> None:
    fake_db_session.execute.return_value = db_result([_order(status=OrderStatusEnum.confirmed)])

    response = await client.get("/api/orders", params={"status": "confirmed"})
    assert response.status_code == 200
    assert [order["status"] for order in response.json()] == ["confirmed"]
    statement = fake_db_session.execute.await_args.args[0]
    assert "orders.status" in str(statement)
