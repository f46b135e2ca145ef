"""Sales routes: customers, products, orders and the public online-order intake."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.auth.dependencies import get_current_user
from mycopath.database import get_db
from mycopath.middleware.exceptions import map_service_error
from mycopath.models.enums import OrderStatusEnum
from mycopath.models.user import User
from mycopath.schemas.common import MessageResponse
from mycopath.schemas.sales import (
	CustomerCreate,
	CustomerRead,
	CustomerUpdate,
	OnlineOrderCreate,
	OnlineOrderReceipt,
	OrderCreate,
	OrderItemRead,
	OrderRead,
	OrderUpdate,
	ProductCreate,
	ProductRead,
	ProductUpdate,
)
from mycopath.services.sales_service import CustomerService, OrderService, ProductService

router = APIRouter(tags=["sales"])


# ── Customers ────────────────────────────────────────────────────────────


@router.get("/customers", response_model=list[CustomerRead])
async def list_customers(
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> list[CustomerRead]:
	try:
		customers = await CustomerService(db).list_all()
	except Exception as exc:
		raise map_service_error(exc) from exc
	return [CustomerRead.model_validate(customer) for customer in customers]


@router.get("/customers/{customer_id}", response_model=CustomerRead)
async def get_customer(
	customer_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> CustomerRead:
	try:
		customer = await CustomerService(db).get(customer_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return CustomerRead.model_validate(customer)


@router.post("/customers", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
async def create_customer(
	payload: CustomerCreate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> CustomerRead:
	try:
		customer = await CustomerService(db).create(payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return CustomerRead.model_validate(customer)


@router.patch("/customers/{customer_id}", response_model=CustomerRead)
async def update_customer(
	customer_id: uuid.UUID,
	payload: CustomerUpdate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> CustomerRead:
	try:
		customer = await CustomerService(db).update(customer_id, payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return CustomerRead.model_validate(customer)


@router.delete("/customers/{customer_id}", response_model=MessageResponse)
async def delete_customer(
	customer_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> MessageResponse:
	try:
		await CustomerService(db).delete(customer_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return MessageResponse(message="Customer deleted successfully")


# ── Products ─────────────────────────────────────────────────────────────


@router.get("/products", response_model=list[ProductRead])
async def list_products(
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> list[ProductRead]:
	try:
		products = await ProductService(db).list_all()
	except Exception as exc:
		raise map_service_error(exc) from exc
	return [ProductRead.model_validate(product) for product in products]


@router.get("/products/{product_id}", response_model=ProductRead)
async def get_product(
	product_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> ProductRead:
	try:
		product = await ProductService(db).get(product_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return ProductRead.model_validate(product)


@router.post("/products", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
	payload: ProductCreate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> ProductRead:
	try:
		product = await ProductService(db).create(payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return ProductRead.model_validate(product)


@router.patch("/products/{product_id}", response_model=ProductRead)
async def update_product(
	product_id: uuid.UUID,
	payload: ProductUpdate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> ProductRead:
	try:
		product = await ProductService(db).update(product_id, payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return ProductRead.model_validate(product)


@router.delete("/products/{product_id}", response_model=MessageResponse)
async def delete_product(
	product_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> MessageResponse:
	try:
		await ProductService(db).delete(product_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return MessageResponse(message="Product deleted successfully")


# ── Orders ───────────────────────────────────────────────────────────────


@router.post("/orders/online", response_model=OnlineOrderReceipt, status_code=status.HTTP_201_CREATED)
async def create_online_order(payload: OnlineOrderCreate, db: AsyncSession = Depends(get_db)) -> OnlineOrderReceipt:
	"""Public storefront intake; no bearer token required."""
	try:
		order = await OrderService(db).create_online_order(payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return OnlineOrderReceipt(
		order_id=order.id,
		order_number=order.order_number,
		order=OrderRead.model_validate(order),
	)


@router.get("/orders", response_model=list[OrderRead])
async def list_orders(
	status_filter: OrderStatusEnum | None = Query(default=None, alias="status"),
	source: str | None = None,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> list[OrderRead]:
	try:
		orders = await OrderService(db).list_all(status=status_filter, source=source)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return [OrderRead.model_validate(order) for order in orders]


@router.get("/orders/{order_id}", response_model=OrderRead)
async def get_order(
	order_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> OrderRead:
	try:
		order = await OrderService(db).get(order_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return OrderRead.model_validate(order)


@router.get("/orders/{order_id}/items", response_model=list[OrderItemRead])
async def list_order_items(
	order_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> list[OrderItemRead]:
	try:
		items = await OrderService(db).list_items(order_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return [OrderItemRead.model_validate(item) for item in items]


@router.post("/orders", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
async def create_order(
	payload: OrderCreate,
	db: AsyncSession = Depends(get_db),
	user: User = Depends(get_current_user),
) -> OrderRead:
	try:
		order = await OrderService(db).create_order(payload, created_by=user.id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return OrderRead.model_validate(order)


@router.patch("/orders/{order_id}", response_model=OrderRead)
async def update_order(
	order_id: uuid.UUID,
	payload: OrderUpdate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> OrderRead:
	try:
		order = await OrderService(db).update_order(order_id, payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return OrderRead.model_validate(order)


@router.delete("/orders/{order_id}", response_model=MessageResponse)
async def delete_order(
	order_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> MessageResponse:
	try:
		await OrderService(db).delete(order_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return MessageResponse(message="Order deleted successfully")
