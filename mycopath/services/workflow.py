"""Stage ordering, progress and approval-gate rules for production batches.

Everything here is pure: no database access, no I/O.  ``BatchService``
applies these rules to ORM rows; tests exercise them directly.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from mycopath.models.enums import (
	BatchStatusEnum,
	ProductionStageEnum,
	RiskLevelEnum,
	SupplyChainStageEnum,
	UserRoleEnum,
)

PRODUCTION_STAGES: tuple[ProductionStageEnum, ...] = tuple(ProductionStageEnum)
SUPPLY_CHAIN_STAGES: tuple[SupplyChainStageEnum, ...] = tuple(SupplyChainStageEnum)

# Stage being completed -> stage the batch moves into.
_NEXT_STAGE: dict[ProductionStageEnum, ProductionStageEnum] = {
	ProductionStageEnum.batch_creation: ProductionStageEnum.inoculation,
	ProductionStageEnum.inoculation: ProductionStageEnum.incubation,
	ProductionStageEnum.incubation: ProductionStageEnum.fruiting,
	ProductionStageEnum.fruiting: ProductionStageEnum.harvesting,
	ProductionStageEnum.harvesting: ProductionStageEnum.post_harvest,
	ProductionStageEnum.post_harvest: ProductionStageEnum.completed,
}

STAGE_TITLES: dict[ProductionStageEnum, str] = {
	ProductionStageEnum.batch_creation: "Batch Creation",
	ProductionStageEnum.inoculation: "Inoculation",
	ProductionStageEnum.incubation: "Incubation",
	ProductionStageEnum.fruiting: "Fruiting",
	ProductionStageEnum.harvesting: "Harvesting",
	ProductionStageEnum.post_harvest: "Post-Harvest",
	ProductionStageEnum.completed: "Completed",
}

HIGH_RISK_THRESHOLD = 10.0
MEDIUM_RISK_THRESHOLD = 5.0

# Fields whose nonzero value, entered by a worker, needs manager review.
_GATED_MEASUREMENTS = ("harvested_weight_kg", "contamination_rate")


def stage_progress(stage: str | None, order: Sequence[str] = PRODUCTION_STAGES) -> float:
	"""Percent complete for ``stage`` within ``order``; 0.0 for an unknown stage."""
	if stage is None or stage not in order:
		return 0.0
	return (list(order).index(stage) + 1) / len(order) * 100


def stage_index(stage: str | None, order: Sequence[str] = PRODUCTION_STAGES) -> int:
	if stage is None or stage not in order:
		return -1
	return list(order).index(stage)


def next_stage(stage: str | None) -> ProductionStageEnum:
	"""The stage after ``stage``.  Terminal and unknown stages map to completed."""
	try:
		return _NEXT_STAGE.get(ProductionStageEnum(stage), ProductionStageEnum.completed)
	except ValueError:
		return ProductionStageEnum.completed


def is_forward(current: str | None, target: str, order: Sequence[str] = PRODUCTION_STAGES) -> bool:
	"""True when ``target`` lies strictly after ``current`` in ``order``."""
	target_index = stage_index(target, order)
	if target_index < 0:
		return False
	return target_index > stage_index(current, order)


def resolve_stage(
	current: str | None,
	declared: str | None,
	order: Sequence[str] = PRODUCTION_STAGES,
) -> str | None:
	"""Stage pointer after a submission declaring ``declared``.

	The pointer only moves forward; a declared stage at or behind the current
	one leaves it where it is.
	"""
	if declared is None:
		return current
	return declared if is_forward(current, declared, order) else current


def is_terminal(stage: str | None) -> bool:
	return stage == ProductionStageEnum.completed


def risk_level_for(contamination_rate: float | None) -> RiskLevelEnum:
	if contamination_rate is None:
		return RiskLevelEnum.low
	if contamination_rate > HIGH_RISK_THRESHOLD:
		return RiskLevelEnum.high
	if contamination_rate > MEDIUM_RISK_THRESHOLD:
		return RiskLevelEnum.medium
	return RiskLevelEnum.low


def requires_manager_review(
	role: UserRoleEnum | str,
	changes: Mapping[str, Any],
	current_status: BatchStatusEnum | str | None,
) -> bool:
	"""Whether an edit by ``role`` must be held for manager approval.

	Only worker edits are gated.  A worker edit is held when it changes the
	batch status or records a nonzero harvest weight or contamination rate.
	"""
	if role != UserRoleEnum.worker:
		return False
	status = changes.get("status")
	if status is not None and status != current_status:
		return True
	return any(changes.get(field) for field in _GATED_MEASUREMENTS)
