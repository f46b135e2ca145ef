"""Milestone, task and inventory routes."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.auth.dependencies import get_current_user
from mycopath.database import get_db
from mycopath.middleware.exceptions import map_service_error
from mycopath.models.enums import WorkStatusEnum
from mycopath.models.user import User
from mycopath.schemas.common import MessageResponse
from mycopath.schemas.operations import (
	InventoryItemCreate,
	InventoryItemRead,
	InventoryItemUpdate,
	MilestoneCreate,
	MilestoneRead,
	MilestoneUpdate,
	TaskCreate,
	TaskRead,
	TaskUpdate,
)
from mycopath.services.planning_service import InventoryService, MilestoneService, TaskService

router = APIRouter(tags=["planning"])


# ── Milestones ───────────────────────────────────────────────────────────


@router.get("/milestones", response_model=list[MilestoneRead])
async def list_milestones(
	status_filter: WorkStatusEnum | None = Query(default=None, alias="status"),
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> list[MilestoneRead]:
	try:
		milestones = await MilestoneService(db).list_all(status=status_filter)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return [MilestoneRead.model_validate(milestone) for milestone in milestones]


@router.post("/milestones", response_model=MilestoneRead, status_code=status.HTTP_201_CREATED)
async def create_milestone(
	payload: MilestoneCreate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> MilestoneRead:
	try:
		milestone = await MilestoneService(db).create(payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return MilestoneRead.model_validate(milestone)


@router.patch("/milestones/{milestone_id}", response_model=MilestoneRead)
async def update_milestone(
	milestone_id: uuid.UUID,
	payload: MilestoneUpdate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> MilestoneRead:
	try:
		milestone = await MilestoneService(db).update(milestone_id, payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return MilestoneRead.model_validate(milestone)


@router.delete("/milestones/{milestone_id}", response_model=MessageResponse)
async def delete_milestone(
	milestone_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> MessageResponse:
	try:
		await MilestoneService(db).delete(milestone_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return MessageResponse(message="Milestone deleted successfully")


# ── Tasks ────────────────────────────────────────────────────────────────


@router.get("/tasks", response_model=list[TaskRead])
async def list_tasks(
	status_filter: WorkStatusEnum | None = Query(default=None, alias="status"),
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> list[TaskRead]:
	try:
		tasks = await TaskService(db).list_all(status=status_filter)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return [TaskRead.model_validate(task) for task in tasks]


@router.post("/tasks", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(
	payload: TaskCreate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> TaskRead:
	try:
		task = await TaskService(db).create(payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return TaskRead.model_validate(task)


@router.patch("/tasks/{task_id}", response_model=TaskRead)
async def update_task(
	task_id: uuid.UUID,
	payload: TaskUpdate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> TaskRead:
	try:
		task = await TaskService(db).update(task_id, payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return TaskRead.model_validate(task)


@router.delete("/tasks/{task_id}", response_model=MessageResponse)
async def delete_task(
	task_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> MessageResponse:
	try:
		await TaskService(db).delete(task_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return MessageResponse(message="Task deleted successfully")


# ── Inventory ────────────────────────────────────────────────────────────


@router.get("/inventory", response_model=list[InventoryItemRead])
async def list_inventory(
	low_stock: bool = False,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> list[InventoryItemRead]:
	service = InventoryService(db)
	try:
		items = await service.low_stock() if low_stock else await service.list_all()
	except Exception as exc:
		raise map_service_error(exc) from exc
	return [InventoryItemRead.model_validate(item) for item in items]


@router.post("/inventory", response_model=InventoryItemRead, status_code=status.HTTP_201_CREATED)
async def create_inventory_item(
	payload: InventoryItemCreate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> InventoryItemRead:
	try:
		item = await InventoryService(db).create(payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return InventoryItemRead.model_validate(item)


@router.patch("/inventory/{item_id}", response_model=InventoryItemRead)
async def update_inventory_item(
	item_id: uuid.UUID,
	payload: InventoryItemUpdate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> InventoryItemRead:
	try:
		item = await InventoryService(db).update(item_id, payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return InventoryItemRead.model_validate(item)


@router.delete("/inventory/{item_id}", response_model=MessageResponse)
async def delete_inventory_item(
	item_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> MessageResponse:
	try:
		await InventoryService(db).delete(item_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return MessageResponse(message="Inventory item deleted successfully")
