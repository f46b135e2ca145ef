"""Recent activity feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.auth.dependencies import get_current_user
from mycopath.database import get_db
from mycopath.middleware.exceptions import map_service_error
from mycopath.models.user import User
from mycopath.schemas.operations import ActivityRead
from mycopath.services.activity_service import DEFAULT_FEED_LIMIT, MAX_FEED_LIMIT, ActivityService

router = APIRouter(prefix="/activities", tags=["activities"])


@router.get("", response_model=list[ActivityRead])
async def list_activities(
	limit: int = Query(default=DEFAULT_FEED_LIMIT, ge=1, le=MAX_FEED_LIMIT),
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> list[ActivityRead]:
	try:
		activities = await ActivityService(db).list_recent(limit)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return [ActivityRead.model_validate(activity) for activity in activities]
