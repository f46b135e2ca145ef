"""Contamination incident reporting and manager verification."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.models.production import ContaminationLog, ProductionBatch
from mycopath.models.user import User
from mycopath.schemas.production import ContaminationLogCreate
from mycopath.services.activity_service import ActivityService
from mycopath.services.batch_service import actor_name

logger = structlog.get_logger("mycopath.contamination")


class ContaminationService:
	"""Logs are append-only; reporting never mutates the batch itself."""

	def __init__(self, db: AsyncSession):
		self.db = db
		self.activities = ActivityService(db)

	async def list_logs(self, batch_id: uuid.UUID | None = None) -> list[ContaminationLog]:
		stmt = select(ContaminationLog).order_by(ContaminationLog.created_at.desc())
		if batch_id is not None:
			stmt = stmt.where(ContaminationLog.batch_id == batch_id)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())

	async def get_log(self, log_id: uuid.UUID) -> ContaminationLog:
		row = await self.db.execute(select(ContaminationLog).where(ContaminationLog.id == log_id))
		log = row.scalar_one_or_none()
		if log is None:
			raise LookupError(f"Contamination log {log_id} not found")
		return log

	async def report(self, payload: ContaminationLogCreate, actor: User) -> ContaminationLog:
		row = await self.db.execute(select(ProductionBatch).where(ProductionBatch.id == payload.batch_id))
		batch = row.scalar_one_or_none()
		if batch is None:
			raise LookupError(f"Production batch {payload.batch_id} not found")

		data = payload.model_dump()
		data["reported_by"] = data.get("reported_by") or actor_name(actor)
		log = ContaminationLog(**data, is_verified=False)
		self.db.add(log)
		await self.db.flush()
		await self.db.refresh(log)

		await self.activities.record(
			"contamination_reported",
			(
				f"{log.contamination_severity.value.capitalize()} {log.contamination_type} contamination "
				f"reported on batch {batch.batch_number} ({log.contaminated_bags_count} bags)"
			),
			entity_id=batch.id,
			entity_type="production_batch",
		)
		logger.warning(
			"contamination_reported",
			batch_id=str(batch.id),
			log_id=str(log.id),
			severity=log.contamination_severity.value,
			bags=log.contaminated_bags_count,
		)
		return log

	async def verify(self, log_id: uuid.UUID, actor: User) -> ContaminationLog:
		log = await self.get_log(log_id)
		if log.is_verified:
			return log
		log.is_verified = True
		log.verified_by = actor_name(actor)
		log.verified_at = datetime.now(UTC)
		await self.db.flush()
		await self.db.refresh(log)
		logger.info("contamination_verified", log_id=str(log.id), actor=str(actor.id))
		return log
