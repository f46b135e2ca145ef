"""Dashboard KPIs and monthly production figures, computed on read."""

from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.models.enums import BatchStatusEnum, TransactionTypeEnum, WorkStatusEnum
from mycopath.models.operations import FinancialTransaction, Milestone
from mycopath.models.production import ProductionBatch

_ACTIVE_STATUSES = (BatchStatusEnum.inoculation, BatchStatusEnum.growing)


def _same_month(value: date | None, today: date) -> bool:
	return value is not None and value.year == today.year and value.month == today.month


def break_even_progress(total_revenue: float, total_expenses: float) -> int:
	"""Revenue as a share of revenue plus the remaining gap, capped at 100."""
	if total_revenue <= 0:
		return 0
	progress = total_revenue / (total_revenue + abs(total_revenue - total_expenses)) * 100
	return round(min(progress, 100.0))


def dashboard_kpis(
	batches: list[ProductionBatch],
	transactions: list[FinancialTransaction],
	milestones: list[Milestone],
	today: date,
) -> dict[str, float | int]:
	yield_this_month = sum(
		b.harvested_weight_kg or 0.0
		for b in batches
		if b.harvested_weight_kg and _same_month(b.actual_harvest_date, today)
	)

	income = [t for t in transactions if t.type == TransactionTypeEnum.income]
	expenses = [t for t in transactions if t.type == TransactionTypeEnum.expense]
	revenue_this_month = sum(t.amount for t in income if _same_month(t.transaction_date, today))
	expenses_this_month = sum(t.amount for t in expenses if _same_month(t.transaction_date, today))

	rated = [b.contamination_rate for b in batches if b.contamination_rate]
	avg_contamination = sum(rated) / len(rated) if rated else 0.0

	completed = [m for m in milestones if m.status == WorkStatusEnum.completed]

	return {
		"break_even_progress": break_even_progress(
			sum(t.amount for t in income), sum(t.amount for t in expenses)
		),
		"total_yield_this_month": round(yield_this_month, 2),
		"contamination_rate": round(avg_contamination, 2),
		"revenue_this_month": round(revenue_this_month, 2),
		"expenses_this_month": round(expenses_this_month, 2),
		"profit_this_month": round(revenue_this_month - expenses_this_month, 2),
		"active_batches_count": sum(1 for b in batches if b.status in _ACTIVE_STATUSES),
		"completed_milestones_count": len(completed),
		"total_bonus_earned": round(sum(m.bonus_amount or 0.0 for m in completed), 2),
	}


def monthly_production(batches: list[ProductionBatch]) -> dict[str, dict[str, float]]:
	"""Harvested kg of mushroom products and batch counts of everything else, by month."""
	months: dict[str, dict[str, float]] = {}
	harvested = sorted(
		(b for b in batches if b.harvested_weight_kg and b.actual_harvest_date),
		key=lambda b: b.actual_harvest_date,
	)
	for batch in harvested:
		bucket = months.setdefault(
			batch.actual_harvest_date.strftime("%b"), {"mushrooms": 0.0, "mycelium": 0.0}
		)
		if "mushroom" in batch.product_type.lower():
			bucket["mushrooms"] += batch.harvested_weight_kg
		else:
			bucket["mycelium"] += 1
	return months


class AnalyticsService:
	def __init__(self, db: AsyncSession):
		self.db = db

	async def _all(self, model):
		rows = await self.db.execute(select(model))
		return list(rows.scalars().all())

	async def dashboard(self, today: date | None = None) -> dict[str, float | int]:
		return dashboard_kpis(
			await self._all(ProductionBatch),
			await self._all(FinancialTransaction),
			await self._all(Milestone),
			today or date.today(),
		)

	async def production(self) -> dict[str, dict[str, float]]:
		return monthly_production(await self._all(ProductionBatch))
