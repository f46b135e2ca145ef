"""Employees, attendance (including self check-in/out) and payroll."""

from __future__ import annotations

import uuid
from datetime import UTC, date, datetime

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.models.enums import AttendanceStatusEnum
from mycopath.models.hr import Attendance, Employee, Payroll
from mycopath.models.user import User
from mycopath.schemas.hr import AttendanceCreate, PayrollCreate
from mycopath.services.activity_service import ActivityService
from mycopath.services.crud import CrudService

logger = structlog.get_logger("mycopath.hr")


class EmployeeService(CrudService[Employee]):
	model = Employee
	label = "Employee"
	required_fields = frozenset({"employee_code", "name", "position", "department", "hire_date", "status"})

	def ordering(self):
		return Employee.name.asc()

	async def for_user(self, user: User) -> Employee:
		row = await self.db.execute(select(Employee).where(Employee.user_id == user.id))
		employee = row.scalar_one_or_none()
		if employee is None:
			raise LookupError("Employee record not found")
		return employee


class AttendanceService:
	def __init__(self, db: AsyncSession):
		self.db = db
		self.employees = EmployeeService(db)
		self.activities = ActivityService(db)

	async def list_attendance(
		self,
		employee_id: uuid.UUID | None = None,
		work_date: date | None = None,
	) -> list[Attendance]:
		stmt = select(Attendance).order_by(Attendance.work_date.desc(), Attendance.created_at.desc())
		if employee_id is not None:
			stmt = stmt.where(Attendance.employee_id == employee_id)
		if work_date is not None:
			stmt = stmt.where(Attendance.work_date == work_date)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())

	async def create(self, payload: AttendanceCreate) -> Attendance:
		await self.employees.get(payload.employee_id)
		record = Attendance(**payload.model_dump())
		if record.hours_worked is None and record.check_in and record.check_out:
			record.hours_worked = _hours_between(record.check_in, record.check_out)
		self.db.add(record)
		await self.db.flush()
		await self.db.refresh(record)
		return record

	async def today(self, user: User) -> Attendance | None:
		employee = await self.employees.for_user(user)
		return await self._today_record(employee.id)

	async def check_in(self, user: User) -> Attendance:
		employee = await self.employees.for_user(user)
		now = datetime.now(UTC)
		record = await self._today_record(employee.id)
		if record is not None and record.check_in is not None:
			raise ValueError("Already checked in today")

		if record is None:
			record = Attendance(employee_id=employee.id, work_date=now.date())
			self.db.add(record)
		record.check_in = now
		record.status = AttendanceStatusEnum.present
		await self.db.flush()
		await self.db.refresh(record)

		await self.activities.record(
			"attendance_check_in",
			f"{employee.name} checked in at {now:%H:%M}",
			entity_id=record.id,
			entity_type="attendance",
		)
		logger.info("attendance_check_in", employee_id=str(employee.id))
		return record

	async def check_out(self, user: User) -> Attendance:
		employee = await self.employees.for_user(user)
		record = await self._today_record(employee.id)
		if record is None or record.check_in is None:
			raise ValueError("Must check in first before checking out")
		if record.check_out is not None:
			raise ValueError("Already checked out today")

		now = datetime.now(UTC)
		record.check_out = now
		record.hours_worked = _hours_between(record.check_in, now)
		await self.db.flush()
		await self.db.refresh(record)

		await self.activities.record(
			"attendance_check_out",
			f"{employee.name} checked out at {now:%H:%M} ({record.hours_worked:.2f} hours)",
			entity_id=record.id,
			entity_type="attendance",
		)
		logger.info("attendance_check_out", employee_id=str(employee.id), hours=record.hours_worked)
		return record

	async def _today_record(self, employee_id: uuid.UUID) -> Attendance | None:
		stmt = select(Attendance).where(
			Attendance.employee_id == employee_id,
			Attendance.work_date == datetime.now(UTC).date(),
		)
		row = await self.db.execute(stmt)
		return row.scalars().first()


def _hours_between(start: datetime, end: datetime) -> float:
	return round((end - start).total_seconds() / 3600, 2)


def net_pay_for(basic_salary: float, allowances: float, deductions: float) -> float:
	return round(basic_salary + allowances - deductions, 2)


class PayrollService:
	def __init__(self, db: AsyncSession):
		self.db = db
		self.employees = EmployeeService(db)

	async def list_payroll(self, employee_id: uuid.UUID | None = None) -> list[Payroll]:
		stmt = select(Payroll).order_by(Payroll.period.desc(), Payroll.created_at.desc())
		if employee_id is not None:
			stmt = stmt.where(Payroll.employee_id == employee_id)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())

	async def create(self, payload: PayrollCreate) -> Payroll:
		await self.employees.get(payload.employee_id)
		data = payload.model_dump()
		if data["net_pay"] is None:
			data["net_pay"] = net_pay_for(data["basic_salary"], data["allowances"], data["deductions"])
		record = Payroll(**data)
		self.db.add(record)
		await self.db.flush()
		await self.db.refresh(record)
		logger.info("payroll_created", employee_id=str(record.employee_id), period=record.period)
		return record
