"""Customers, products and orders, including the public online-order intake."""

from __future__ import annotations

import secrets
import uuid
from datetime import UTC, date, datetime

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.models.enums import (
	CustomerTypeEnum,
	OrderStatusEnum,
	OrderTypeEnum,
	PaymentStatusEnum,
)
from mycopath.models.sales import Customer, Order, OrderItem, Product
from mycopath.schemas.sales import OnlineOrderCreate, OrderCreate, OrderItemCreate, OrderUpdate
from mycopath.services.activity_service import ActivityService
from mycopath.services.crud import CrudService

logger = structlog.get_logger("mycopath.sales")


def generate_order_number(now: datetime | None = None) -> str:
	"""``ORD-<yyyymmddHHMMSS>-<4 hex>``."""
	now = now or datetime.now(UTC)
	return f"ORD-{now:%Y%m%d%H%M%S}-{secrets.token_hex(2).upper()}"


def build_items(items: list[OrderItemCreate]) -> list[OrderItem]:
	return [
		OrderItem(
			product_id=item.product_id,
			quantity=item.quantity,
			unit_price=item.unit_price,
			total_price=round(item.quantity * item.unit_price, 2),
			batch_id=item.batch_id,
		)
		for item in items
	]


class CustomerService(CrudService[Customer]):
	model = Customer
	label = "Customer"
	required_fields = frozenset({"name", "customer_type", "is_active"})

	async def find_by_email(self, email: str) -> Customer | None:
		row = await self.db.execute(select(Customer).where(Customer.email == email))
		return row.scalars().first()


class ProductService(CrudService[Product]):
	model = Product
	label = "Product"
	required_fields = frozenset({"name", "category", "selling_price", "unit", "current_stock", "is_active"})


class OrderService(CrudService[Order]):
	model = Order
	label = "Order"

	def __init__(self, db: AsyncSession):
		super().__init__(db)
		self.customers = CustomerService(db)
		self.activities = ActivityService(db)

	async def create_order(self, payload: OrderCreate, created_by: uuid.UUID | None = None) -> Order:
		if payload.customer_id is not None:
			await self.customers.get(payload.customer_id)
		items = build_items(payload.items)
		total = payload.total_amount
		if total is None:
			total = round(sum(item.total_price for item in items), 2)

		order = Order(
			**payload.model_dump(exclude={"items", "total_amount"}),
			order_number=generate_order_number(),
			total_amount=total,
			created_by=created_by,
			items=items,
		)
		self.db.add(order)
		await self.db.flush()
		await self.db.refresh(order)
		await self.activities.record(
			"order_created",
			f"Order {order.order_number} created ({order.order_type.value}, {order.total_amount:.2f})",
			entity_id=order.id,
			entity_type="order",
		)
		logger.info("order_created", order_id=str(order.id), order_number=order.order_number, total=order.total_amount)
		return order

	async def create_online_order(self, payload: OnlineOrderCreate) -> Order:
		"""Find or create the customer by e-mail, then file a pending online order."""
		customer_id = payload.customer.id
		if customer_id is None and payload.customer.email:
			customer = await self.customers.find_by_email(payload.customer.email)
			if customer is None:
				customer = Customer(
					name=payload.customer.name,
					email=payload.customer.email,
					phone=payload.customer.phone,
					address=payload.customer.address,
					customer_type=CustomerTypeEnum.individual,
					source="online",
					is_active=True,
				)
				self.db.add(customer)
				await self.db.flush()
			customer_id = customer.id

		order = OrderCreate(
			customer_id=customer_id,
			order_type=OrderTypeEnum.online,
			source=payload.source,
			status=OrderStatusEnum.pending,
			payment_status=PaymentStatusEnum.pending,
			payment_method=payload.payment_method,
			shipping_address=payload.shipping_address or payload.customer.address,
			order_date=date.today(),
			notes=payload.notes,
			items=payload.items,
		)
		return await self.create_order(order)

	async def list_items(self, order_id: uuid.UUID) -> list[OrderItem]:
		order = await self.get(order_id)
		return list(order.items)

	async def update_order(self, order_id: uuid.UUID, payload: OrderUpdate) -> Order:
		order = await self.get(order_id)
		changes = payload.model_dump(exclude_unset=True)
		for field in ("status", "payment_status", "paid_amount"):
			if changes.get(field, 0) is None:
				changes.pop(field)
		previous_status = order.status
		for field, value in changes.items():
			setattr(order, field, value)
		if order.status == OrderStatusEnum.delivered and order.actual_delivery is None:
			order.actual_delivery = date.today()
		await self.db.flush()
		await self.db.refresh(order)
		if order.status != previous_status:
			await self.activities.record(
				"order_status_changed",
				f"Order {order.order_number} is now {order.status.value}",
				entity_id=order.id,
				entity_type="order",
			)
		return order
