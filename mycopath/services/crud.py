"""Shared list/get/create/update/delete plumbing for the flat CRUD tables."""

from __future__ import annotations

import uuid
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class CrudService(Generic[ModelT]):
	"""Subclasses set ``model`` (and optionally ``label`` and ``ordering``)."""

	model: ClassVar[type[Base]]
	label: ClassVar[str] = "Record"
	# Columns that a partial edit may not set to NULL.
	required_fields: ClassVar[frozenset[str]] = frozenset()

	def __init__(self, db: AsyncSession):
		self.db = db

	def ordering(self) -> Any:
		return self.model.created_at.desc()

	async def list_all(self, **filters: Any) -> list[ModelT]:
		stmt = select(self.model).order_by(self.ordering())
		for column, value in filters.items():
			if value is not None:
				stmt = stmt.where(getattr(self.model, column) == value)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())

	async def get(self, record_id: uuid.UUID) -> ModelT:
		row = await self.db.execute(select(self.model).where(self.model.id == record_id))
		record = row.scalar_one_or_none()
		if record is None:
			raise LookupError(f"{self.label} {record_id} not found")
		return record

	async def create(self, payload: BaseModel, **extra: Any) -> ModelT:
		record = self.model(**payload.model_dump(), **extra)
		self.db.add(record)
		await self.db.flush()
		await self.db.refresh(record)
		return record

	async def update(self, record_id: uuid.UUID, payload: BaseModel) -> ModelT:
		record = await self.get(record_id)
		for field, value in payload.model_dump(exclude_unset=True).items():
			if value is None and field in self.required_fields:
				continue
			setattr(record, field, value)
		await self.db.flush()
		await self.db.refresh(record)
		return record

	async def delete(self, record_id: uuid.UUID) -> None:
		record = await self.get(record_id)
		await self.db.delete(record)
		await self.db.flush()
