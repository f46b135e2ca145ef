from __future__ import annotations

import pytest

from mycopath.models.enums import (
    BatchStatusEnum,
    ProductionStageEnum,
    RiskLevelEnum,
    SupplyChainStageEnum,
    UserRoleEnum,
)
from mycopath.services import workflow


def test_progress_is_position_over_stage_count() -> None:
    assert workflow.stage_progress(ProductionStageEnum.batch_creation) == pytest.approx(100 / 7)
    assert workflow.stage_progress(ProductionStageEnum.post_harvest) == pytest.approx(600 / 7)
    assert workflow.stage_progress(ProductionStageEnum.completed) == 100.0


def test_progress_for_unknown_or_missing_stage_is_zero() -> None:
    assert workflow.stage_progress("drying") == 0.0
    assert workflow.stage_progress(None) == 0.0


def test_supply_chain_progress_uses_its_own_order() -> None:
    order = workflow.SUPPLY_CHAIN_STAGES
    assert workflow.stage_progress(SupplyChainStageEnum.farmer_delivery, order) == pytest.approx(100 / 9)
    assert workflow.stage_progress(SupplyChainStageEnum.completed, order) == 100.0


def test_next_stage_walks_the_workflow() -> None:
    assert workflow.next_stage(ProductionStageEnum.batch_creation) == ProductionStageEnum.inoculation
    assert workflow.next_stage(ProductionStageEnum.post_harvest) == ProductionStageEnum.completed
    assert workflow.next_stage(ProductionStageEnum.completed) == ProductionStageEnum.completed
    assert workflow.next_stage("unknown") == ProductionStageEnum.completed


def test_resolve_stage_only_moves_forward() -> None:
    current = ProductionStageEnum.fruiting
    assert workflow.resolve_stage(current, "harvesting") == "harvesting"
    assert workflow.resolve_stage(current, ProductionStageEnum.inoculation) == current
    assert workflow.resolve_stage(current, current) == current
    assert workflow.resolve_stage(current, None) == current
    assert workflow.resolve_stage(current, "not-a-stage") == current


def test_is_terminal() -> None:
    assert workflow.is_terminal(ProductionStageEnum.completed)
    assert not workflow.is_terminal(ProductionStageEnum.post_harvest)


@pytest.mark.parametrize(
    ("rate", "expected"),
    [
        (None, RiskLevelEnum.low),
        (0.0, RiskLevelEnum.low),
        (5.0, RiskLevelEnum.low),
        (5.1, RiskLevelEnum.medium),
        (10.0, RiskLevelEnum.medium),
        (10.5, RiskLevelEnum.high),
    ],
)
def test_risk_level_thresholds(rate: float | None, expected: RiskLevelEnum) -> None:
    assert workflow.risk_level_for(rate) == expected


def test_worker_status_change_requires_review() -> None:
    changes = {"status": BatchStatusEnum.harvested}
    assert workflow.requires_manager_review(UserRoleEnum.worker, changes, BatchStatusEnum.growing)


def test_worker_resubmitting_same_status_is_not_gated() -> None:
    changes = {"status": BatchStatusEnum.growing, "notes": "watered"}
    assert not workflow.requires_manager_review(UserRoleEnum.worker, changes, BatchStatusEnum.growing)


def test_worker_nonzero_measurement_requires_review() -> None:
    assert workflow.requires_manager_review(UserRoleEnum.worker, {"harvested_weight_kg": 12.5}, None)
    assert workflow.requires_manager_review(UserRoleEnum.worker, {"contamination_rate": 3.0}, None)
    assert not workflow.requires_manager_review(UserRoleEnum.worker, {"contamination_rate": 0}, None)


@pytest.mark.parametrize(
    "role",
    [UserRoleEnum.admin, UserRoleEnum.manager, UserRoleEnum.production],
)
def test_non_worker_edits_are_never_gated(role: UserRoleEnum) -> None:
    changes = {"status": BatchStatusEnum.harvested, "harvested_weight_kg": 40.0}
    assert not workflow.requires_manager_review(role, changes, BatchStatusEnum.growing)
