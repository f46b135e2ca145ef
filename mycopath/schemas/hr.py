"""Pydantic schemas for employees, attendance and payroll."""

from __future__ import annotations

import re
import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from mycopath.models.enums import AttendanceStatusEnum, EmployeeStatusEnum, PayrollStatusEnum
from mycopath.schemas.common import FormDate, FormFloat, FormText

_PERIOD_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class EmployeeCreate(BaseModel):
	employee_code: str = Field(min_length=1, max_length=50)
	name: str = Field(min_length=1, max_length=100)
	email: EmailStr | None = None
	phone: FormText = None
	position: str = Field(min_length=1, max_length=100)
	department: str = Field(min_length=1, max_length=100)
	salary: FormFloat = Field(default=None, ge=0)
	hire_date: date
	status: EmployeeStatusEnum = EmployeeStatusEnum.active
	skills: FormText = None
	notes: FormText = None
	user_id: uuid.UUID | None = None


class EmployeeUpdate(BaseModel):
	employee_code: str | None = Field(default=None, min_length=1, max_length=50)
	name: str | None = Field(default=None, min_length=1, max_length=100)
	email: EmailStr | None = None
	phone: FormText = None
	position: str | None = Field(default=None, min_length=1, max_length=100)
	department: str | None = Field(default=None, min_length=1, max_length=100)
	salary: FormFloat = Field(default=None, ge=0)
	hire_date: FormDate = None
	status: EmployeeStatusEnum | None = None
	skills: FormText = None
	notes: FormText = None
	user_id: uuid.UUID | None = None


class EmployeeRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	employee_code: str
	name: str
	email: str | None = None
	phone: str | None = None
	position: str
	department: str
	salary: float | None = None
	hire_date: date
	status: EmployeeStatusEnum
	skills: str | None = None
	notes: str | None = None
	user_id: uuid.UUID | None = None
	created_at: datetime
	updated_at: datetime


class AttendanceCreate(BaseModel):
	employee_id: uuid.UUID
	work_date: date
	check_in: datetime | None = None
	check_out: datetime | None = None
	hours_worked: FormFloat = Field(default=None, ge=0, le=24)
	status: AttendanceStatusEnum = AttendanceStatusEnum.present
	notes: FormText = None


class AttendanceRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	employee_id: uuid.UUID
	work_date: date
	check_in: datetime | None = None
	check_out: datetime | None = None
	hours_worked: float | None = None
	status: AttendanceStatusEnum
	notes: str | None = None
	created_at: datetime


class TodayAttendanceRead(BaseModel):
	"""Today's record for the caller, or ``status="not_started"`` with no record."""

	status: str
	attendance: AttendanceRead | None = None


class PayrollCreate(BaseModel):
	employee_id: uuid.UUID
	period: str
	basic_salary: float = Field(ge=0)
	allowances: float = Field(default=0.0, ge=0)
	deductions: float = Field(default=0.0, ge=0)
	net_pay: FormFloat = None
	status: PayrollStatusEnum = PayrollStatusEnum.pending
	pay_date: FormDate = None
	notes: FormText = None

	@field_validator("period")
	@classmethod
	def _validate_period(cls, value: str) -> str:
		if not _PERIOD_RE.match(value):
			raise ValueError("period must be formatted as YYYY-MM")
		return value


class PayrollRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	employee_id: uuid.UUID
	period: str
	basic_salary: float
	allowances: float
	deductions: float
	net_pay: float
	status: PayrollStatusEnum
	pay_date: date | None = None
	notes: str | None = None
	created_at: datetime
