"""HR routes: employees, attendance (with self check-in/out) and payroll."""

from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from mycopath.auth.dependencies import MANAGER_ROLES, get_current_user, require_manager, require_role
from mycopath.database import get_db
from mycopath.middleware.exceptions import map_service_error
from mycopath.models.enums import UserRoleEnum
from mycopath.models.user import User
from mycopath.schemas.common import MessageResponse
from mycopath.schemas.hr import (
	AttendanceCreate,
	AttendanceRead,
	EmployeeCreate,
	EmployeeRead,
	EmployeeUpdate,
	PayrollCreate,
	PayrollRead,
	TodayAttendanceRead,
)
from mycopath.services.hr_service import AttendanceService, EmployeeService, PayrollService

router = APIRouter(tags=["hr"])

require_payroll_access = require_role(*MANAGER_ROLES, UserRoleEnum.finance)


# ── Employees ────────────────────────────────────────────────────────────


@router.get("/employees", response_model=list[EmployeeRead])
async def list_employees(
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_manager),
) -> list[EmployeeRead]:
	try:
		employees = await EmployeeService(db).list_all()
	except Exception as exc:
		raise map_service_error(exc) from exc
	return [EmployeeRead.model_validate(employee) for employee in employees]


@router.get("/employees/{employee_id}", response_model=EmployeeRead)
async def get_employee(
	employee_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_manager),
) -> EmployeeRead:
	try:
		employee = await EmployeeService(db).get(employee_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return EmployeeRead.model_validate(employee)


@router.post("/employees", response_model=EmployeeRead, status_code=status.HTTP_201_CREATED)
async def create_employee(
	payload: EmployeeCreate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_manager),
) -> EmployeeRead:
	try:
		employee = await EmployeeService(db).create(payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return EmployeeRead.model_validate(employee)


@router.patch("/employees/{employee_id}", response_model=EmployeeRead)
async def update_employee(
	employee_id: uuid.UUID,
	payload: EmployeeUpdate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_manager),
) -> EmployeeRead:
	try:
		employee = await EmployeeService(db).update(employee_id, payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return EmployeeRead.model_validate(employee)


@router.delete("/employees/{employee_id}", response_model=MessageResponse)
async def delete_employee(
	employee_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_manager),
) -> MessageResponse:
	try:
		await EmployeeService(db).delete(employee_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return MessageResponse(message="Employee deleted successfully")


# ── Attendance ───────────────────────────────────────────────────────────


@router.get("/attendance", response_model=list[AttendanceRead])
async def list_attendance(
	employee_id: uuid.UUID | None = None,
	work_date: date | None = Query(default=None, alias="date"),
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_manager),
) -> list[AttendanceRead]:
	try:
		records = await AttendanceService(db).list_attendance(employee_id, work_date)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return [AttendanceRead.model_validate(record) for record in records]


@router.post("/attendance", response_model=AttendanceRead, status_code=status.HTTP_201_CREATED)
async def create_attendance(
	payload: AttendanceCreate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_manager),
) -> AttendanceRead:
	try:
		record = await AttendanceService(db).create(payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return AttendanceRead.model_validate(record)


@router.get("/attendance/today", response_model=TodayAttendanceRead)
async def today_attendance(
	db: AsyncSession = Depends(get_db),
	user: User = Depends(get_current_user),
) -> TodayAttendanceRead:
	try:
		record = await AttendanceService(db).today(user)
	except Exception as exc:
		raise map_service_error(exc) from exc
	if record is None or record.check_in is None:
		return TodayAttendanceRead(status="not_started")
	return TodayAttendanceRead(
		status="checked_out" if record.check_out else "checked_in",
		attendance=AttendanceRead.model_validate(record),
	)


@router.post("/attendance/check-in", response_model=AttendanceRead)
async def check_in(
	db: AsyncSession = Depends(get_db),
	user: User = Depends(get_current_user),
) -> AttendanceRead:
	try:
		record = await AttendanceService(db).check_in(user)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return AttendanceRead.model_validate(record)


@router.post("/attendance/check-out", response_model=AttendanceRead)
async def check_out(
	db: AsyncSession = Depends(get_db),
	user: User = Depends(get_current_user),
) -> AttendanceRead:
	try:
		record = await AttendanceService(db).check_out(user)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return AttendanceRead.model_validate(record)


# ── Payroll ──────────────────────────────────────────────────────────────


@router.get("/payroll", response_model=list[PayrollRead])
async def list_payroll(
	employee_id: uuid.UUID | None = None,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_payroll_access),
) -> list[PayrollRead]:
	try:
		records = await PayrollService(db).list_payroll(employee_id)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return [PayrollRead.model_validate(record) for record in records]


@router.post("/payroll", response_model=PayrollRead, status_code=status.HTTP_201_CREATED)
async def create_payroll(
	payload: PayrollCreate,
	db: AsyncSession = Depends(get_db),
	_user: User = Depends(require_payroll_access),
) -> PayrollRead:
	try:
		record = await PayrollService(db).create(payload)
	except Exception as exc:
		raise map_service_error(exc) from exc
	return PayrollRead.model_validate(record)
