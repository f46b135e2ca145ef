from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient
from pydantic import ValidationError

from mycopath.models.enums import AttendanceStatusEnum, EmployeeStatusEnum, UserRoleEnum
from mycopath.models.hr import Attendance, Employee
from mycopath.schemas.hr import PayrollCreate
from mycopath.services.hr_service import AttendanceService, PayrollService, net_pay_for


def _employee(user_id: object | None = None) -> Employee:
    now = datetime.now(UTC)
    return Employee(
        id=uuid4(),
        employee_code="E-001",
        name="Sita Gurung",
        position="Grower",
        department="Production",
        hire_date=date(2023, 1, 15),
        status=EmployeeStatusEnum.active,
        user_id=user_id,
        created_at=now,
        updated_at=now,
    )


def _attendance(employee: Employee, **overrides: Any) -> Attendance:
    fields: dict[str, Any] = {
        "id": uuid4(),
        "employee_id": employee.id,
        "work_date": datetime.now(UTC).date(),
        "status": AttendanceStatusEnum.present,
        "created_at": datetime.now(UTC),
    }
    fields.update(overrides)
    return Attendance(**fields)


def test_employee_attendance_is_never_lazy_loaded() -> None:
    relationship = Employee.attendance.property
    assert relationship.lazy == "raise"
    assert relationship.passive_deletes is True


def test_net_pay_is_basic_plus_allowances_minus_deductions() -> None:
    assert net_pay_for(30000.0, 2500.0, 1200.5) == 31299.5


def test_payroll_period_must_be_year_month() -> None:
    with pytest.raises(ValidationError):
        PayrollCreate(employee_id=uuid4(), period="2024-13", basic_salary=1000)
    assert PayrollCreate(employee_id=uuid4(), period="2024-07", basic_salary=1000).period == "2024-07"


@pytest.mark.asyncio
async def test_payroll_defaults_net_pay(fake_db_session: Any, db_result: Any) -> None:
    employee = _employee()
    fake_db_session.execute.return_value = db_result(employee)

    record = await PayrollService(fake_db_session).create(
        PayrollCreate(
            employee_id=employee.id,
            period="2024-07",
            basic_salary=25000,
            allowances=3000,
            deductions=500,
        )
    )
    assert record.net_pay == 27500.0


@pytest.mark.asyncio
async def test_check_in_creates_todays_record(
    fake_db_session: Any,
    user_factory: Any,
    db_result: Any,
) -> None:
    user = user_factory(UserRoleEnum.worker)
    employee = _employee(user.id)
    fake_db_session.execute.side_effect = [db_result(employee), db_result(None)]

    record = await AttendanceService(fake_db_session).check_in(user)

    assert record.employee_id == employee.id
    assert record.check_in is not None
    assert record.status == AttendanceStatusEnum.present
    assert record.work_date == datetime.now(UTC).date()


@pytest.mark.asyncio
async def test_double_check_in_rejected(fake_db_session: Any, user_factory: Any, db_result: Any) -> None:
    user = user_factory(UserRoleEnum.worker)
    employee = _employee(user.id)
    existing = _attendance(employee, check_in=datetime.now(UTC))
    fake_db_session.execute.side_effect = [db_result(employee), db_result(existing)]

    with pytest.raises(ValueError, match="Already checked in"):
        await AttendanceService(fake_db_session).check_in(user)


@pytest.mark.asyncio
async def test_check_out_before_check_in_rejected(fake_db_session: Any, user_factory: Any, db_result: Any) -> None:
    user = user_factory(UserRoleEnum.worker)
    fake_db_session.execute.side_effect = [db_result(_employee(user.id)), db_result(None)]

    with pytest.raises(ValueError, match="Must check in first"):
        await AttendanceService(fake_db_session).check_out(user)


@pytest.mark.asyncio
async def test_check_out_records_hours(fake_db_session: Any, user_factory: Any, db_result: Any) -> None:
    user = user_factory(UserRoleEnum.worker)
    employee = _employee(user.id)
    existing = _attendance(employee, check_in=datetime.now(UTC) - timedelta(hours=8, minutes=15))
    fake_db_session.execute.side_effect = [db_result(employee), db_result(existing)]

    record = await AttendanceService(fake_db_session).check_out(user)

    assert record.check_out is not None
    assert record.hours_worked == pytest.approx(8.25, abs=0.01)


@pytest.mark.asyncio
async def test_check_in_without_employee_record_returns_404(client: AsyncClient) -> None:
    response = await client.post("/api/attendance/check-in")
    assert response.status_code == 404
    assert response.json()["detail"] == "Employee record not found"


@pytest.mark.asyncio
async def test_today_reports_not_started(
    client: AsyncClient,
    fake_db_session: Any,
    current_user: Any,
    db_result: Any,
) -> None:
    fake_db_session.execute.side_effect = [db_result(_employee(current_user.id)), db_result(None)]

    response = await client.get("/api/attendance/today")
    assert response.status_code == 200
    assert response.json() == {"status": "not_started", "attendance": None}


@pytest.mark.asyncio
async def test_worker_cannot_list_employees(client: AsyncClient, act_as: Any, user_factory: Any) -> None:
    act_as(user_factory(UserRoleEnum.worker))

    response = await client.get("/api/employees")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_finance_can_read_payroll(
    client: AsyncClient,
    act_as: Any,
    user_factory: Any,
    fake_db_session: Any,
    db_result: Any,
) -> None:
    act_as(user_factory(UserRoleEnum.finance))
    fake_db_session.execute.return_value = db_result([])

    response = await client.get("/api/payroll")
    assert response.status_code == 200
    assert response.json() == []
