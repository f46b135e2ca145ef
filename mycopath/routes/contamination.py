"""Contamination incident routes."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.auth.dependencies import get_current_user, require_manager
from mycopath.database import get_db
from mycopath.middleware.exceptions import map_service_error
from mycopath.models.user import User
from mycopath.schemas.production import ContaminationLogCreate, ContaminationLogRead
from mycopath.services.contamination_service import ContaminationService

router = APIRouter(prefix="/contamination-logs", tags=["production"])


@router.get("", response_model=list[ContaminationLogRead])
async def list_contamination_logs(
	batch_id: uuid.UUID | None = None,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> list[ContaminationLogRead]:
	service = ContaminationService(db)
	try:
		logs = await service.list_logs(batch_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return [ContaminationLogRead.model_validate(log) for log in logs]


@router.post("", response_model=ContaminationLogRead, status_code=status.HTTP_201_CREATED)
async def report_contamination(
	payload: ContaminationLogCreate,
	db: AsyncSession = Depends(get_db),
	user: User = Depends(get_current_user),
) -> ContaminationLogRead:
	service = ContaminationService(db)
	try:
		log = await service.report(payload, user)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return ContaminationLogRead.model_validate(log)


@router.post("/{log_id}/verify", response_model=ContaminationLogRead)
async def verify_contamination(
	log_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	user: User = Depends(require_manager),
) -> ContaminationLogRead:
	service = ContaminationService(db)
	try:
		log = await service.verify(log_id, user)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return ContaminationLogRead.model_validate(log)
