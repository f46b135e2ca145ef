"""Financial transaction routes and the income/expense summary."""

from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.auth.dependencies import MANAGER_ROLES, require_role
from mycopath.database import get_db
from mycopath.middleware.exceptions import map_service_error
from mycopath.models.enums import TransactionTypeEnum, UserRoleEnum
from mycopath.models.user import User
from mycopath.schemas.common import MessageResponse
from mycopath.schemas.operations import FinanceSummary, TransactionCreate, TransactionRead, TransactionUpdate
from mycopath.services.finance_service import TransactionService

router = APIRouter(prefix="/financial-transactions", tags=["finance"])

require_finance = require_role(*MANAGER_ROLES, UserRoleEnum.finance)


@router.get("", response_model=list[TransactionRead])
async def list_transactions(
	type: TransactionTypeEnum | None = None,
	batch_id: uuid.UUID | None = None,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_finance),
) -> list[TransactionRead]:
	try:
		transactions = await TransactionService(db).list_all(type=type, batch_id=batch_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return [TransactionRead.model_validate(tx) for tx in transactions]


@router.get("/summary", response_model=FinanceSummary)
async def transaction_summary(
	start: date | None = None,
	end: date | None = None,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_finance),
) -> FinanceSummary:
	try:
		summary = await TransactionService(db).summary(start, end)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return FinanceSummary(**summary)


@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
async def create_transaction(
	payload: TransactionCreate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_finance),
) -> TransactionRead:
	try:
		tx = await TransactionService(db).create(payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return TransactionRead.model_validate(tx)


@router.patch("/{transaction_id}", response_model=TransactionRead)
async def update_transaction(
	transaction_id: uuid.UUID,
	payload: TransactionUpdate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_finance),
) -> TransactionRead:
	try:
		tx = await TransactionService(db).update(transaction_id, payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return TransactionRead.model_validate(tx)


@router.delete("/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(
	transaction_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_finance),
) -> MessageResponse:
	try:
		await TransactionService(db).delete(transaction_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return MessageResponse(message="Transaction deleted successfully")
