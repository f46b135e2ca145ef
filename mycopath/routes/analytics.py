"""Dashboard and production analytics."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.auth.dependencies import get_current_user
from mycopath.database import get_db
from mycopath.middleware.exceptions import map_service_error
from mycopath.models.user import User
from mycopath.schemas.analytics import DashboardAnalytics, ProductionAnalytics
from mycopath.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/dashboard", response_model=DashboardAnalytics)
async def dashboard(
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> DashboardAnalytics:
	try:
		kpis = await AnalyticsService(db).dashboard()
	except Exception as exc:
		raise map_service_error(exc) from exc
	return DashboardAnalytics(**kpis)


@router.get("/production", response_model=ProductionAnalytics)
async def production(
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(get_current_user),
) -> ProductionAnalytics:
	try:
		months = await AnalyticsService(db).production()
	except Exception as exc:
		raise map_service_error(exc) from exc
	return ProductionAnalytics.model_validate(months)
