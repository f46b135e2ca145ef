from __future__ import annotations

from datetime import date
from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient

from mycopath.models.enums import SeverityEnum, UserRoleEnum
from mycopath.models.operations import Activity
from mycopath.models.production import ContaminationLog, ProductionBatch
from mycopath.schemas.production import ContaminationLogCreate
from mycopath.services.contamination_service import ContaminationService


def test_batch_logs_are_never_lazy_loaded() -> None:
    relationship = ProductionBatch.contamination_logs.property
    assert relationship.lazy == "raise"
    assert relationship.passive_deletes is True


def _log_payload(batch_id: object, **overrides: Any) -> ContaminationLogCreate:
    fields: dict[str, Any] = {
        "batch_id": batch_id,
        "contamination_type": "Trichoderma",
        "contaminated_bags_count": 4,
        "contamination_severity": "medium",
        "corrective_action_taken": "Bags removed and room sanitised",
    }
    fields.update(overrides)
    return ContaminationLogCreate.model_validate(fields)


@pytest.mark.asyncio
async def test_report_creates_unverified_log_with_reporter(
    fake_db_session: Any,
    batch_factory: Any,
    user_factory: Any,
    db_result: Any,
) -> None:
    batch = batch_factory()
    fake_db_session.execute.return_value = db_result(batch)
    worker = user_factory(UserRoleEnum.worker, first_name="Sita", last_name="Gurung")

    log = await ContaminationService(fake_db_session).report(_log_payload(batch.id), worker)

    assert isinstance(log, ContaminationLog)
    assert log.batch_id == batch.id
    assert log.is_verified is False
    assert log.reported_by == "Sita Gurung"
    assert log.contamination_severity == SeverityEnum.medium
    assert log.contamination_reported_date == date.today()
    added = [call.args[0] for call in fake_db_session.add.call_args_list]
    assert any(isinstance(obj, Activity) and obj.type == "contamination_reported" for obj in added)


@pytest.mark.asyncio
async def test_report_keeps_explicit_reporter(
    fake_db_session: Any,
    batch_factory: Any,
    user_factory: Any,
    db_result: Any,
) -> None:
    batch = batch_factory()
    fake_db_session.execute.return_value = db_result(batch)

    log = await ContaminationService(fake_db_session).report(
        _log_payload(batch.id, reported_by="Night shift"), user_factory(UserRoleEnum.worker)
    )
    assert log.reported_by == "Night shift"


@pytest.mark.asyncio
async def test_report_for_missing_batch_returns_404(client: AsyncClient) -> None:
    response = await client.post(
        "/api/contamination-logs",
        json=_log_payload(uuid4()).model_dump(mode="json"),
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_report_with_unknown_severity_fails_validation(client: AsyncClient) -> None:
    payload = _log_payload(uuid4()).model_dump(mode="json")
    payload["contamination_severity"] = "catastrophic"

    response = await client.post("/api/contamination-logs", json=payload)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_verify_marks_log_verified_once(
    fake_db_session: Any,
    user_factory: Any,
    db_result: Any,
) -> None:
    log = ContaminationLog(
        id=uuid4(),
        batch_id=uuid4(),
        contamination_reported_date=date.today(),
        contamination_type="Bacterial blotch",
        contaminated_bags_count=1,
        contamination_severity=SeverityEnum.low,
        corrective_action_taken="Isolated",
        reported_by="Worker A",
        is_verified=False,
    )
    fake_db_session.execute.return_value = db_result(log)
    manager = user_factory(UserRoleEnum.manager, first_name="Mina", last_name="Rai")
    service = ContaminationService(fake_db_session)

    await service.verify(log.id, manager)
    first_verified_at = log.verified_at
    await service.verify(log.id, user_factory(UserRoleEnum.admin))

    assert log.is_verified is True
    assert log.verified_by == "Mina Rai"
    assert log.verified_at == first_verified_at


@pytest.mark.asyncio
async def test_worker_cannot_verify_log(client: AsyncClient, act_as: Any, user_factory: Any) -> None:
    act_as(user_factory(UserRoleEnum.worker))

    response = await client.post(f"/api/contamination-logs/{uuid4()}/verify")
    assert response.status_code == 403
