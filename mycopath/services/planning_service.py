"""Milestones, tasks and inventory items."""

from __future__ import annotations

import uuid
from datetime import date

from pydantic import BaseModel

from mycopath.models.enums import WorkStatusEnum
from mycopath.models.operations import InventoryItem, Milestone, Task
from mycopath.services.crud import CrudService


class _CompletionDatedService(CrudService):
	"""Stamps ``completed_date`` when a record is moved to completed without one."""

	async def update(self, record_id: uuid.UUID, payload: BaseModel):
		record = await super().update(record_id, payload)
		if record.status == WorkStatusEnum.completed and record.completed_date is None:
			record.completed_date = date.today()
			await self.db.flush()
			await self.db.refresh(record)
		return record


class MilestoneService(_CompletionDatedService):
	model = Milestone
	label = "Milestone"
	required_fields = frozenset({"name", "status"})

	def ordering(self):
		return Milestone.target_date.asc().nulls_last()


class TaskService(_CompletionDatedService):
	model = Task
	label = "Task"
	required_fields = frozenset({"title", "priority", "status"})

	def ordering(self):
		return Task.due_date.asc().nulls_last()


class InventoryService(CrudService[InventoryItem]):
	model = InventoryItem
	label = "Inventory item"
	required_fields = frozenset({"item_name", "category", "current_stock", "unit"})

	def ordering(self):
		return InventoryItem.item_name.asc()

	async def low_stock(self) -> list[InventoryItem]:
		return [item for item in await self.list_all() if item.is_low_stock]
