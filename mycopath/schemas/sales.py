"""Pydantic schemas for customers, products and orders."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from mycopath.models.enums import (
	CustomerTypeEnum,
	OrderStatusEnum,
	OrderTypeEnum,
	PaymentStatusEnum,
)
from mycopath.schemas.common import FormDate, FormFloat, FormText


class CustomerCreate(BaseModel):
	name: str = Field(min_length=1, max_length=100)
	email: EmailStr | None = None
	phone: FormText = None
	address: FormText = None
	customer_type: CustomerTypeEnum = CustomerTypeEnum.individual
	source: FormText = None
	preferred_payment: FormText = None
	notes: FormText = None
	is_active: bool = True


class CustomerUpdate(BaseModel):
	name: str | None = Field(default=None, min_length=1, max_length=100)
	email: EmailStr | None = None
	phone: FormText = None
	address: FormText = None
	customer_type: CustomerTypeEnum | None = None
	source: FormText = None
	preferred_payment: FormText = None
	notes: FormText = None
	is_active: bool | None = None


class CustomerRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	name: str
	email: str | None = None
	phone: str | None = None
	address: str | None = None
	customer_type: CustomerTypeEnum
	source: str | None = None
	preferred_payment: str | None = None
	notes: str | None = None
	is_active: bool
	created_at: datetime


class ProductCreate(BaseModel):
	name: str = Field(min_length=1, max_length=100)
	category: str = Field(min_length=1, max_length=50)
	description: FormText = None
	selling_price: float = Field(ge=0)
	cost_price: FormFloat = Field(default=None, ge=0)
	unit: str = Field(min_length=1, max_length=20)
	current_stock: float = Field(default=0.0, ge=0)
	minimum_stock: FormFloat = Field(default=None, ge=0)
	is_active: bool = True


class ProductUpdate(BaseModel):
	name: str | None = Field(default=None, min_length=1, max_length=100)
	category: str | None = Field(default=None, min_length=1, max_length=50)
	description: FormText = None
	selling_price: FormFloat = Field(default=None, ge=0)
	cost_price: FormFloat = Field(default=None, ge=0)
	unit: str | None = Field(default=None, min_length=1, max_length=20)
	current_stock: FormFloat = Field(default=None, ge=0)
	minimum_stock: FormFloat = Field(default=None, ge=0)
	is_active: bool | None = None


class ProductRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	name: str
	category: str
	description: str | None = None
	selling_price: float
	cost_price: float | None = None
	unit: str
	current_stock: float
	minimum_stock: float | None = None
	is_active: bool
	created_at: datetime


class OrderItemCreate(BaseModel):
	product_id: uuid.UUID | None = None
	quantity: float = Field(gt=0)
	unit_price: float = Field(ge=0)
	batch_id: uuid.UUID | None = None


class OrderItemRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	order_id: uuid.UUID
	product_id: uuid.UUID | None = None
	quantity: float
	unit_price: float
	total_price: float
	batch_id: uuid.UUID | None = None


class OrderCreate(BaseModel):
	customer_id: uuid.UUID | None = None
	order_type: OrderTypeEnum = OrderTypeEnum.inhouse
	source: FormText = None
	status: OrderStatusEnum = OrderStatusEnum.pending
	total_amount: FormFloat = Field(default=None, ge=0)
	paid_amount: float = Field(default=0.0, ge=0)
	payment_status: PaymentStatusEnum = PaymentStatusEnum.pending
	payment_method: FormText = None
	shipping_address: FormText = None
	order_date: date = Field(default_factory=date.today)
	expected_delivery: FormDate = None
	notes: FormText = None
	items: list[OrderItemCreate] = Field(default_factory=list)


class OrderUpdate(BaseModel):
	customer_id: uuid.UUID | None = None
	source: FormText = None
	status: OrderStatusEnum | None = None
	paid_amount: FormFloat = Field(default=None, ge=0)
	payment_status: PaymentStatusEnum | None = None
	payment_method: FormText = None
	shipping_address: FormText = None
	expected_delivery: FormDate = None
	actual_delivery: FormDate = None
	notes: FormText = None


class OnlineCustomer(BaseModel):
	id: uuid.UUID | None = None
	name: str = Field(default="Online customer", min_length=1, max_length=100)
	email: EmailStr | None = None
	phone: FormText = None
	address: FormText = None


class OnlineOrderCreate(BaseModel):
	customer: OnlineCustomer
	items: list[OrderItemCreate] = Field(min_length=1)
	source: str = "online"
	payment_method: FormText = None
	shipping_address: FormText = None
	notes: FormText = None


class OrderRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	order_number: str
	customer_id: uuid.UUID | None = None
	order_type: OrderTypeEnum
	source: str | None = None
	status: OrderStatusEnum
	total_amount: float
	paid_amount: float
	payment_status: PaymentStatusEnum
	payment_method: str | None = None
	shipping_address: str | None = None
	order_date: date
	expected_delivery: date | None = None
	actual_delivery: date | None = None
	notes: str | None = None
	created_by: uuid.UUID | None = None
	items: list[OrderItemRead] = Field(default_factory=list)
	created_at: datetime


class OnlineOrderReceipt(BaseModel):
	success: bool = True
	order_id: uuid.UUID
	order_number: str
	message: str = "Order received successfully"
	order: OrderRead
