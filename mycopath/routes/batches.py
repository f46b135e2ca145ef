"""Production batch routes: CRUD, stage submissions, supply chain and approvals."""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.auth.dependencies import get_current_user, require_manager
from mycopath.database import get_db
from mycopath.middleware.exceptions import map_service_error
from mycopath.models.enums import BatchStatusEnum, ProductionStageEnum
from mycopath.models.production import ProductionBatch
from mycopath.models.user import User
from mycopath.schemas.common import MessageResponse
from mycopath.schemas.production import (
	STAGE_PAYLOADS,
	ApprovalDecision,
	ApprovalQueueRead,
	BatchCreate,
	BatchRead,
	BatchUpdate,
	SupplyChainAdvance,
)
from mycopath.services.batch_service import BatchService

router = APIRouter(prefix="/production-batches", tags=["production"])


async def _to_batch_reads(service: BatchService, batches: list[ProductionBatch]) -> list[BatchRead]:
	flagged = await service.contaminated_batch_ids([batch.id for batch in batches])
	return [
		BatchRead.model_validate(batch).model_copy(update={"contamination_reported": batch.id in flagged})
		for batch in batches
	]


async def _to_batch_read(service: BatchService, batch: ProductionBatch) -> BatchRead:
	return (await _to_batch_reads(service, [batch]))[0]


@router.get("", response_model=list[BatchRead])
async def list_batches(
	status_filter: BatchStatusEnum | None = Query(default=None, alias="status"),
	stage: ProductionStageEnum | None = None,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> list[BatchRead]:
	service = BatchService(db)
	try:
		batches = await service.list_batches(status=status_filter, stage=stage)
		return await _to_batch_reads(service, batches)
	except Exception as exc:
		raise map_service_error(exc) from exc


@router.get("/approvals", response_model=ApprovalQueueRead)
async def approval_queue(
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_manager),
) -> ApprovalQueueRead:
	service = BatchService(db)
	try:
		queue = await service.approval_queue()
		return ApprovalQueueRead(
			pending=await _to_batch_reads(service, queue["pending"]),
			approved=await _to_batch_reads(service, queue["approved"]),
			high_risk=await _to_batch_reads(service, queue["high_risk"]),
		)
	except Exception as exc:
		raise map_service_error(exc) from exc


@router.get("/{batch_id}", response_model=BatchRead)
async def get_batch(
	batch_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> BatchRead:
	service = BatchService(db)
	try:
		batch = await service.get_batch(batch_id)
		return await _to_batch_read(service, batch)
	except Exception as exc:
		raise map_service_error(exc) from exc


@router.post("", response_model=BatchRead, status_code=status.HTTP_201_CREATED)
async def create_batch(
	payload: BatchCreate,
	db: AsyncSession = Depends(get_db),
	user: User = Depends(get_current_user),
) -> BatchRead:
	service = BatchService(db)
	try:
		batch = await service.create_batch(payload, user)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return BatchRead.model_validate(batch)


@router.patch("/{batch_id}", response_model=BatchRead)
async def update_batch(
	batch_id: uuid.UUID,
	payload: BatchUpdate,
	db: AsyncSession = Depends(get_db),
	user: User = Depends(get_current_user),
) -> BatchRead:
	service = BatchService(db)
	try:
		batch = await service.update_batch(batch_id, payload, user)
		return await _to_batch_read(service, batch)
	except Exception as exc:
		raise map_service_error(exc) from exc


@router.delete("/{batch_id}", response_model=MessageResponse)
async def delete_batch(
	batch_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_manager),
) -> MessageResponse:
	service = BatchService(db)
	try:
		await service.delete_batch(batch_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return MessageResponse(message="Production batch deleted successfully")


@router.post("/{batch_id}/stages/{stage}", response_model=BatchRead)
async def submit_stage(
	batch_id: uuid.UUID,
	stage: ProductionStageEnum,
	payload: dict[str, Any] = Body(...),
	db: AsyncSession = Depends(get_db),
	user: User = Depends(get_current_user),
) -> BatchRead:
	"""Complete ``stage`` for the batch and move it to the stage the payload declares."""
	schema = STAGE_PAYLOADS.get(stage)
	if schema is None:
		raise map_service_error(ValueError(f"Stage {stage.value} does not accept submissions"))
	try:
		stage_payload = schema.model_validate(payload)
	except ValidationError as exc:
		raise RequestValidationError(exc.errors(include_url=False), body=payload) from exc

	service = BatchService(db)
	try:
		batch = await service.submit_stage(batch_id, stage, stage_payload, user)
		return await _to_batch_read(service, batch)
	except Exception as exc:
		raise map_service_error(exc) from exc


@router.post("/{batch_id}/advance-stage", response_model=BatchRead)
async def advance_supply_chain(
	batch_id: uuid.UUID,
	payload: SupplyChainAdvance,
	db: AsyncSession = Depends(get_db),
	user: User = Depends(get_current_user),
) -> BatchRead:
	service = BatchService(db)
	try:
		batch = await service.advance_supply_chain(batch_id, payload.target_stage, user)
		return await _to_batch_read(service, batch)
	except Exception as exc:
		raise map_service_error(exc) from exc


@router.post("/{batch_id}/approve", response_model=BatchRead)
async def approve_batch(
	batch_id: uuid.UUID,
	payload: ApprovalDecision | None = None,
	db: AsyncSession = Depends(get_db),
	user: User = Depends(require_manager),
) -> BatchRead:
	service = BatchService(db)
	try:
		batch = await service.approve_batch(batch_id, user, payload.notes if payload else None)
		return await _to_batch_read(service, batch)
	except Exception as exc:
		raise map_service_error(exc) from exc


@router.post("/{batch_id}/reject", response_model=BatchRead)
async def reject_batch(
	batch_id: uuid.UUID,
	payload: ApprovalDecision | None = None,
	db: AsyncSession = Depends(get_db),
	user: User = Depends(require_manager),
) -> BatchRead:
	service = BatchService(db)
	try:
		batch = await service.reject_batch(batch_id, user, payload.notes if payload else None)
		return await _to_batch_read(service, batch)
	except Exception as exc:
		raise map_service_error(exc) from exc
