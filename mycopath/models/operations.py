"""Planning, finance, inventory and activity-feed ORM models.

These are independent CRUD tables; the only coupling to production is the
optional ``batch_id`` foreign key on tasks and transactions.
"""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import Date, Float, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from mycopath.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin, pg_enum
from mycopath.models.enums import PriorityEnum, TransactionTypeEnum, WorkStatusEnum


class Milestone(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A business milestone, optionally tied to a bonus payout."""

    __tablename__ = "milestones"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    target_value: Mapped[str | None] = mapped_column(String(50), nullable=True)
    current_value: Mapped[str | None] = mapped_column(String(50), nullable=True)
    bonus_amount: Mapped[float | None] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=True
    )
    responsible: Mapped[str | None] = mapped_column(String(100), nullable=True)
    target_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    completed_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[WorkStatusEnum] = mapped_column(
        pg_enum(WorkStatusEnum, "work_status"),
        nullable=False,
        default=WorkStatusEnum.pending,
    )

    def __repr__(self) -> str:
        return f"<Milestone id={self.id} name={self.name!r} status={self.status}>"


class Task(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[PriorityEnum] = mapped_column(
        pg_enum(PriorityEnum, "task_priority"),
        nullable=False,
        default=PriorityEnum.medium,
    )
    status: Mapped[WorkStatusEnum] = mapped_column(
        pg_enum(WorkStatusEnum, "work_status"),
        nullable=False,
        default=WorkStatusEnum.pending,
    )
    assigned_to: Mapped[str | None] = mapped_column(String(100), nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    completed_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    batch_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("production_batches.id", ondelete="SET NULL"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Task id={self.id} title={self.title!r} status={self.status}>"


class FinancialTransaction(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "financial_transactions"
    __table_args__ = (Index("ix_financial_transactions_type_date", "type", "transaction_date"),)

    type: Mapped[TransactionTypeEnum] = mapped_column(
        pg_enum(TransactionTypeEnum, "transaction_type"),
        nullable=False,
    )
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)
    batch_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("production_batches.id", ondelete="SET NULL"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<FinancialTransaction id={self.id} type={self.type} amount={self.amount}>"


class InventoryItem(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Consumable stock: substrate, spawn, tools, packaging."""

    __tablename__ = "inventory_items"

    item_name: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    current_stock: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(20), nullable=False)
    minimum_stock: Mapped[float | None] = mapped_column(Float, nullable=True)
    cost_per_unit: Mapped[float | None] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=True
    )
    supplier: Mapped[str | None] = mapped_column(String(100), nullable=True)

    @property
    def is_low_stock(self) -> bool:
        if self.minimum_stock is None:
            return False
        return self.current_stock <= self.minimum_stock

    def __repr__(self) -> str:
        return f"<InventoryItem id={self.id} name={self.item_name!r}>"


class Activity(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Append-only activity feed entry."""

    __tablename__ = "activities"
    __table_args__ = (Index("ix_activities_created_at", "created_at"),)

    type: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    entity_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), nullable=True)
    entity_type: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<Activity id={self.id} type={self.type!r}>"
