"""Pydantic schemas for analytics endpoints."""

from __future__ import annotations

from pydantic import BaseModel, RootModel


class DashboardAnalytics(BaseModel):
	break_even_progress: int
	total_yield_this_month: float
	contamination_rate: float
	revenue_this_month: float
	expenses_this_month: float
	profit_this_month: float
	active_batches_count: int
	completed_milestones_count: int
	total_bonus_earned: float


class ProductionMonth(BaseModel):
	mushrooms: float = 0.0
	mycelium: float = 0.0


class ProductionAnalytics(RootModel[dict[str, ProductionMonth]]):
	"""Month abbreviation (``"Jan"``) to that month's production figures."""
