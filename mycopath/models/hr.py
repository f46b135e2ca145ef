"""Employee, Attendance and Payroll ORM models."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mycopath.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin, pg_enum
from mycopath.models.enums import (
    AttendanceStatusEnum,
    EmployeeStatusEnum,
    PayrollStatusEnum,
)


class Employee(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """HR record for a staff member.

    ``user_id`` links the record to a login account so that attendance
    check-in/out can resolve "the current employee" from a JWT subject.
    """

    __tablename__ = "employees"

    employee_code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    position: Mapped[str] = mapped_column(String(100), nullable=False)
    department: Mapped[str] = mapped_column(String(100), nullable=False)
    salary: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True
    )
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[EmployeeStatusEnum] = mapped_column(
        pg_enum(EmployeeStatusEnum, "employee_status"),
        nullable=False,
        default=EmployeeStatusEnum.active,
    )
    skills: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    )

    # ── Relationships ────────────────────────────────────────────────────
    attendance: Mapped[list[Attendance]] = relationship(
        back_populates="employee",
        cascade="all, delete-orphan",
        lazy="raise",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Employee id={self.id} code={self.employee_code!r}>"


class Attendance(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "attendance"
    __table_args__ = (Index("ix_attendance_employee_day", "employee_id", "work_date"),)

    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    work_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_in: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    check_out: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    hours_worked: Mapped[float | None] = mapped_column(Float, nullable=True)
    status: Mapped[AttendanceStatusEnum] = mapped_column(
        pg_enum(AttendanceStatusEnum, "attendance_status"),
        nullable=False,
        default=AttendanceStatusEnum.present,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # ── Relationships ────────────────────────────────────────────────────
    employee: Mapped[Employee] = relationship(back_populates="attendance")

    def __repr__(self) -> str:
        return f"<Attendance id={self.id} employee={self.employee_id} day={self.work_date}>"


class Payroll(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """One pay-period salary record (``period`` is ``YYYY-MM``)."""

    __tablename__ = "payroll"
    __table_args__ = (Index("ix_payroll_employee_period", "employee_id", "period"),)

    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    period: Mapped[str] = mapped_column(String(7), nullable=False)
    basic_salary: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    allowances: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=False, default=0.0
    )
    deductions: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=False, default=0.0
    )
    net_pay: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    status: Mapped[PayrollStatusEnum] = mapped_column(
        pg_enum(PayrollStatusEnum, "payroll_status"),
        nullable=False,
        default=PayrollStatusEnum.pending,
    )
    pay_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Payroll id={self.id} employee={self.employee_id} period={self.period!r}>"
