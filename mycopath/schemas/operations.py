"""Pydantic schemas for milestones, tasks, transactions, inventory and the activity feed."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from mycopath.models.enums import PriorityEnum, TransactionTypeEnum, WorkStatusEnum
from mycopath.schemas.common import FormDate, FormFloat, FormText

# ── Milestones ──────────────────────────────────────────────────────────────


class MilestoneCreate(BaseModel):
	name: str = Field(min_length=1, max_length=100)
	description: FormText = None
	target_value: FormText = None
	current_value: FormText = None
	bonus_amount: FormFloat = Field(default=None, ge=0)
	responsible: FormText = None
	target_date: FormDate = None
	completed_date: FormDate = None
	status: WorkStatusEnum = WorkStatusEnum.pending


class MilestoneUpdate(BaseModel):
	name: str | None = Field(default=None, min_length=1, max_length=100)
	description: FormText = None
	target_value: FormText = None
	current_value: FormText = None
	bonus_amount: FormFloat = Field(default=None, ge=0)
	responsible: FormText = None
	target_date: FormDate = None
	completed_date: FormDate = None
	status: WorkStatusEnum | None = None


class MilestoneRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	name: str
	description: str | None = None
	target_value: str | None = None
	current_value: str | None = None
	bonus_amount: float | None = None
	responsible: str | None = None
	target_date: date | None = None
	completed_date: date | None = None
	status: WorkStatusEnum
	created_at: datetime


# ── Tasks ───────────────────────────────────────────────────────────────────


class TaskCreate(BaseModel):
	title: str = Field(min_length=1, max_length=200)
	description: FormText = None
	priority: PriorityEnum = PriorityEnum.medium
	status: WorkStatusEnum = WorkStatusEnum.pending
	assigned_to: FormText = None
	due_date: FormDate = None
	completed_date: FormDate = None
	batch_id: uuid.UUID | None = None


class TaskUpdate(BaseModel):
	title: str | None = Field(default=None, min_length=1, max_length=200)
	description: FormText = None
	priority: PriorityEnum | None = None
	status: WorkStatusEnum | None = None
	assigned_to: FormText = None
	due_date: FormDate = None
	completed_date: FormDate = None
	batch_id: uuid.UUID | None = None


class TaskRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	title: str
	description: str | None = None
	priority: PriorityEnum
	status: WorkStatusEnum
	assigned_to: str | None = None
	due_date: date | None = None
	completed_date: date | None = None
	batch_id: uuid.UUID | None = None
	created_at: datetime


# ── Financial transactions ──────────────────────────────────────────────────


class TransactionCreate(BaseModel):
	type: TransactionTypeEnum
	category: str = Field(min_length=1, max_length=50)
	amount: float = Field(gt=0)
	description: str = Field(min_length=1)
	transaction_date: date = Field(default_factory=date.today)
	batch_id: uuid.UUID | None = None


class TransactionUpdate(BaseModel):
	type: TransactionTypeEnum | None = None
	category: str | None = Field(default=None, min_length=1, max_length=50)
	amount: FormFloat = Field(default=None, gt=0)
	description: str | None = Field(default=None, min_length=1)
	transaction_date: FormDate = None
	batch_id: uuid.UUID | None = None


class TransactionRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	type: TransactionTypeEnum
	category: str
	amount: float
	description: str
	transaction_date: date
	batch_id: uuid.UUID | None = None
	created_at: datetime


class FinanceSummary(BaseModel):
	total_income: float
	total_expenses: float
	net: float
	transaction_count: int


# ── Inventory ───────────────────────────────────────────────────────────────


class InventoryItemCreate(BaseModel):
	item_name: str = Field(min_length=1, max_length=100)
	category: str = Field(min_length=1, max_length=50)
	current_stock: float = Field(ge=0)
	unit: str = Field(min_length=1, max_length=20)
	minimum_stock: FormFloat = Field(default=None, ge=0)
	cost_per_unit: FormFloat = Field(default=None, ge=0)
	supplier: FormText = None


class InventoryItemUpdate(BaseModel):
	item_name: str | None = Field(default=None, min_length=1, max_length=100)
	category: str | None = Field(default=None, min_length=1, max_length=50)
	current_stock: FormFloat = Field(default=None, ge=0)
	unit: str | None = Field(default=None, min_length=1, max_length=20)
	minimum_stock: FormFloat = Field(default=None, ge=0)
	cost_per_unit: FormFloat = Field(default=None, ge=0)
	supplier: FormText = None


class InventoryItemRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	item_name: str
	category: str
	current_stock: float
	unit: str
	minimum_stock: float | None = None
	cost_per_unit: float | None = None
	supplier: str | None = None
	is_low_stock: bool
	created_at: datetime


# ── Activity feed ───────────────────────────────────────────────────────────


class ActivityRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	type: str
	description: str
	entity_id: uuid.UUID | None = None
	entity_type: str | None = None
	created_at: datetime
