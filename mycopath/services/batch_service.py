"""Production batch CRUD, stage transitions and the manager approval gate."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.models.enums import (
	BatchStatusEnum,
	ProductionStageEnum,
	QualityCheckStatusEnum,
	RiskLevelEnum,
	SupplyChainStageEnum,
)
from mycopath.models.production import ContaminationLog, ProductionBatch
from mycopath.models.user import User
from mycopath.schemas.production import BatchCreate, BatchUpdate
from mycopath.services import workflow
from mycopath.services.activity_service import ActivityService

logger = structlog.get_logger("mycopath.batches")

# Columns that cannot be cleared through a partial edit.
_NON_NULLABLE_EDITS = frozenset({"batch_number", "product_type", "substrate", "start_date", "status"})


def actor_name(user: User) -> str:
	return user.full_name or user.email


class BatchService:
	"""Service for batch CRUD, stage submissions and approval decisions."""

	def __init__(self, db: AsyncSession):
		self.db = db
		self.activities = ActivityService(db)

	# ── Reads ───────────────────────────────────────────────────────────────

	async def list_batches(
		self,
		status: BatchStatusEnum | None = None,
		stage: ProductionStageEnum | None = None,
	) -> list[ProductionBatch]:
		stmt = select(ProductionBatch).order_by(ProductionBatch.created_at.desc())
		if status is not None:
			stmt = stmt.where(ProductionBatch.status == status)
		if stage is not None:
			stmt = stmt.where(ProductionBatch.current_stage == stage)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())

	async def get_batch(self, batch_id: uuid.UUID) -> ProductionBatch:
		row = await self.db.execute(select(ProductionBatch).where(ProductionBatch.id == batch_id))
		batch = row.scalar_one_or_none()
		if batch is None:
			raise LookupError(f"Production batch {batch_id} not found")
		return batch

	async def contaminated_batch_ids(self, batch_ids: list[uuid.UUID]) -> set[uuid.UUID]:
		"""Subset of ``batch_ids`` with at least one contamination log."""
		if not batch_ids:
			return set()
		stmt = (
			select(ContaminationLog.batch_id)
			.where(ContaminationLog.batch_id.in_(batch_ids))
			.distinct()
		)
		rows = await self.db.execute(stmt)
		return set(rows.scalars().all())

	async def approval_queue(self) -> dict[str, list[ProductionBatch]]:
		batches = await self.list_batches()
		return {
			"pending": [b for b in batches if b.requires_approval and not b.is_approved],
			"approved": [b for b in batches if b.is_approved],
			"high_risk": [b for b in batches if b.risk_level == RiskLevelEnum.high],
		}

	# ── Writes ──────────────────────────────────────────────────────────────

	async def create_batch(self, payload: BatchCreate, actor: User) -> ProductionBatch:
		batch = ProductionBatch(
			**payload.model_dump(),
			current_stage=ProductionStageEnum.batch_creation,
			risk_level=RiskLevelEnum.low,
			requires_approval=False,
			is_approved=False,
			quality_check_status=QualityCheckStatusEnum.pending,
		)
		self.db.add(batch)
		await self.db.flush()
		await self.db.refresh(batch)
		await self.activities.record(
			"batch_created",
			f"Production batch {batch.batch_number} created",
			entity_id=batch.id,
			entity_type="production_batch",
		)
		logger.info("batch_created", batch_id=str(batch.id), batch_number=batch.batch_number, actor=str(actor.id))
		return batch

	async def update_batch(self, batch_id: uuid.UUID, payload: BatchUpdate, actor: User) -> ProductionBatch:
		batch = await self.get_batch(batch_id)
		changes = payload.model_dump(exclude_unset=True)
		changes = {
			field: value
			for field, value in changes.items()
			if value is not None or field not in _NON_NULLABLE_EDITS
		}
		await self._apply_changes(batch, changes, actor)
		await self.db.flush()
		await self.db.refresh(batch)
		return batch

	async def submit_stage(
		self,
		batch_id: uuid.UUID,
		stage: ProductionStageEnum,
		payload: BaseModel,
		actor: User,
	) -> ProductionBatch:
		"""Merge one stage's completion data into the batch.

		A completed batch ignores submissions entirely so that replays are
		harmless.
		"""
		batch = await self.get_batch(batch_id)
		if workflow.is_terminal(batch.current_stage):
			logger.info("batch_stage_ignored", batch_id=str(batch.id), submitted_stage=stage.value)
			return batch

		changes = payload.model_dump()
		if stage == ProductionStageEnum.harvesting and batch.actual_harvest_date is None:
			changes.setdefault("actual_harvest_date", changes.get("harvest_date"))
		await self._apply_changes(batch, changes, actor)
		await self.db.flush()
		await self.db.refresh(batch)
		return batch

	async def advance_supply_chain(
		self,
		batch_id: uuid.UUID,
		target: SupplyChainStageEnum,
		actor: User,
	) -> ProductionBatch:
		batch = await self.get_batch(batch_id)
		current = batch.supply_chain_stage or SupplyChainStageEnum.farmer_delivery
		resolved = workflow.resolve_stage(current, target, workflow.SUPPLY_CHAIN_STAGES)
		if resolved != batch.supply_chain_stage:
			batch.supply_chain_stage = SupplyChainStageEnum(resolved)
			await self.activities.record(
				"supply_chain_advanced",
				f"Batch {batch.batch_number} moved to {resolved} in the supply chain",
				entity_id=batch.id,
				entity_type="production_batch",
			)
			logger.info(
				"batch_supply_chain_advanced",
				batch_id=str(batch.id),
				supply_chain_stage=str(resolved),
				actor=str(actor.id),
			)
		await self.db.flush()
		await self.db.refresh(batch)
		return batch

	async def approve_batch(self, batch_id: uuid.UUID, actor: User, notes: str | None = None) -> ProductionBatch:
		batch = await self.get_batch(batch_id)
		batch.is_approved = True
		batch.requires_approval = False
		batch.quality_check_status = QualityCheckStatusEnum.passed
		batch.approved_by = actor_name(actor)
		batch.approved_at = datetime.now(UTC)
		description = f"Batch {batch.batch_number} approved by {batch.approved_by}"
		await self.activities.record(
			"batch_approved",
			f"{description}: {notes}" if notes else description,
			entity_id=batch.id,
			entity_type="production_batch",
		)
		logger.info("batch_approved", batch_id=str(batch.id), actor=str(actor.id))
		await self.db.flush()
		await self.db.refresh(batch)
		return batch

	async def reject_batch(self, batch_id: uuid.UUID, actor: User, notes: str | None = None) -> ProductionBatch:
		batch = await self.get_batch(batch_id)
		batch.status = BatchStatusEnum.contaminated
		batch.is_approved = False
		batch.requires_approval = False
		batch.quality_check_status = QualityCheckStatusEnum.failed
		description = f"Batch {batch.batch_number} rejected by {actor_name(actor)}"
		await self.activities.record(
			"batch_rejected",
			f"{description}: {notes}" if notes else description,
			entity_id=batch.id,
			entity_type="production_batch",
		)
		logger.info("batch_rejected", batch_id=str(batch.id), actor=str(actor.id))
		await self.db.flush()
		await self.db.refresh(batch)
		return batch

	async def delete_batch(self, batch_id: uuid.UUID) -> None:
		batch = await self.get_batch(batch_id)
		await self.db.delete(batch)
		await self.db.flush()
		logger.info("batch_deleted", batch_id=str(batch_id))

	# ── Internals ───────────────────────────────────────────────────────────

	async def _apply_changes(self, batch: ProductionBatch, changes: dict[str, Any], actor: User) -> None:
		"""Merge ``changes`` into ``batch`` under the stage and approval rules."""
		needs_review = workflow.requires_manager_review(actor.role, changes, batch.status)
		previous_stage = batch.current_stage
		previous_status = batch.status

		declared_stage = changes.pop("current_stage", None)
		for field, value in changes.items():
			setattr(batch, field, value)

		resolved = workflow.resolve_stage(previous_stage, declared_stage)
		if resolved != previous_stage:
			batch.current_stage = ProductionStageEnum(resolved)
			await self.activities.record(
				"batch_stage_advanced",
				f"Batch {batch.batch_number} moved to {workflow.STAGE_TITLES[batch.current_stage]}",
				entity_id=batch.id,
				entity_type="production_batch",
			)
			logger.info(
				"batch_stage_advanced",
				batch_id=str(batch.id),
				from_stage=str(previous_stage),
				to_stage=str(resolved),
				actor=str(actor.id),
			)
		elif declared_stage is not None:
			logger.info(
				"batch_stage_not_advanced",
				batch_id=str(batch.id),
				current_stage=str(previous_stage),
				declared_stage=str(declared_stage),
			)

		if "contamination_rate" in changes:
			batch.risk_level = workflow.risk_level_for(batch.contamination_rate)

		if "status" in changes and changes["status"] is not None and changes["status"] != previous_status:
			await self.activities.record(
				"batch_status_changed",
				f"Batch {batch.batch_number} status changed to {changes['status']}",
				entity_id=batch.id,
				entity_type="production_batch",
			)

		if needs_review:
			batch.requires_approval = True
			batch.is_approved = False
			batch.quality_check_status = QualityCheckStatusEnum.pending
			logger.info("batch_held_for_review", batch_id=str(batch.id), actor=str(actor.id))
