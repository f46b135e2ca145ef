"""Financial transactions and the income/expense summary."""

from __future__ import annotations

from datetime import date

from sqlalchemy import func, select

from mycopath.models.enums import TransactionTypeEnum
from mycopath.models.operations import FinancialTransaction
from mycopath.services.crud import CrudService


class TransactionService(CrudService[FinancialTransaction]):
	model = FinancialTransaction
	label = "Financial transaction"
	required_fields = frozenset({"type", "category", "amount", "description", "transaction_date"})

	def ordering(self):
		return FinancialTransaction.transaction_date.desc()

	async def summary(self, start: date | None = None, end: date | None = None) -> dict[str, float | int]:
		stmt = select(
			FinancialTransaction.type,
			func.coalesce(func.sum(FinancialTransaction.amount), 0),
			func.count(FinancialTransaction.id),
		).group_by(FinancialTransaction.type)
		if start is not None:
			stmt = stmt.where(FinancialTransaction.transaction_date >= start)
		if end is not None:
			stmt = stmt.where(FinancialTransaction.transaction_date <= end)
		rows = await self.db.execute(stmt)

		totals = {TransactionTypeEnum.income: 0.0, TransactionTypeEnum.expense: 0.0}
		count = 0
		for tx_type, amount, tx_count in rows.all():
			totals[TransactionTypeEnum(tx_type)] = float(amount)
			count += int(tx_count)
		income = totals[TransactionTypeEnum.income]
		expenses = totals[TransactionTypeEnum.expense]
		return {
			"total_income": round(income, 2),
			"total_expenses": round(expenses, 2),
			"net": round(income - expenses, 2),
			"transaction_count": count,
		}
