"""Append-only activity feed."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.models.operations import Activity

DEFAULT_FEED_LIMIT = 50
MAX_FEED_LIMIT = 500


class ActivityService:
	def __init__(self, db: AsyncSession):
		self.db = db

	async def record(
		self,
		activity_type: str,
		description: str,
		entity_id: uuid.UUID | None = None,
		entity_type: str | None = None,
	) -> Activity:
		activity = Activity(
			type=activity_type,
			description=description,
			entity_id=entity_id,
			entity_type=entity_type,
		)
		self.db.add(activity)
		await self.db.flush()
		return activity

	async def list_recent(self, limit: int = DEFAULT_FEED_LIMIT) -> list[Activity]:
		limit = max(1, min(limit, MAX_FEED_LIMIT))
		stmt = select(Activity).order_by(Activity.created_at.desc()).limit(limit)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())
