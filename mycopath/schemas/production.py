"""Pydantic schemas for production batches, stage submissions and contamination logs."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from mycopath.models.enums import (
	BatchStatusEnum,
	ProductionStageEnum,
	QualityCheckStatusEnum,
	RiskLevelEnum,
	SeverityEnum,
	SupplyChainStageEnum,
)
from mycopath.schemas.common import FormDate, FormFloat, FormInt, FormNumber, FormText
from mycopath.services.workflow import (
	STAGE_TITLES,
	SUPPLY_CHAIN_STAGES,
	stage_progress,
)

# ═══════════════════════════════════════════════════════════════════════════
# Batch create / update
# ═══════════════════════════════════════════════════════════════════════════


class BatchCreate(BaseModel):
	batch_number: str = Field(min_length=1, max_length=50)
	product_type: str = Field(min_length=1, max_length=100)
	substrate: str = Field(min_length=1, max_length=100)
	start_date: date
	expected_harvest_date: FormDate = None
	location: FormText = None
	status: BatchStatusEnum = BatchStatusEnum.inoculation
	initial_weight_kg: FormFloat = None
	notes: FormText = None
	supply_chain_stage: SupplyChainStageEnum | None = None
	farmer_name: FormText = None
	farmer_contact: FormText = None
	delivery_date: FormDate = None
	farmer_payment_amount: FormFloat = None


class BatchUpdate(BaseModel):
	"""Partial edit.  Only fields present in the request body are applied."""

	batch_number: str | None = Field(default=None, min_length=1, max_length=50)
	product_type: str | None = Field(default=None, min_length=1, max_length=100)
	substrate: str | None = Field(default=None, min_length=1, max_length=100)
	location: FormText = None
	start_date: FormDate = None
	expected_harvest_date: FormDate = None
	actual_harvest_date: FormDate = None
	status: BatchStatusEnum | None = None
	initial_weight_kg: FormFloat = None
	notes: FormText = None
	current_stage: ProductionStageEnum | None = None

	inoculation_date: FormDate = None
	spawn_added_by: FormText = None
	spawn_quantity_grams: FormFloat = None
	spawn_supplier: FormText = None
	inoculation_notes: FormText = None
	incubation_start_date: FormDate = None
	incubation_room_temp: FormFloat = None
	incubation_room_humidity: FormFloat = None
	incubation_notes: FormText = None
	fruiting_start_date: FormDate = None
	fruiting_room_temp: FormFloat = None
	fruiting_room_humidity: FormFloat = None
	light_exposure: FormText = None
	fruiting_notes: FormText = None
	harvest_date: FormDate = None
	harvested_weight_kg: FormFloat = Field(default=None, ge=0)
	damaged_weight_kg: FormFloat = Field(default=None, ge=0)
	harvested_by: FormText = None
	harvest_notes: FormText = None
	post_harvest_date: FormDate = None
	substrate_collected_kg: FormFloat = None
	substrate_condition: FormText = None
	mycelium_reuse_status: bool | None = None
	post_harvest_notes: FormText = None

	farmer_name: FormText = None
	farmer_contact: FormText = None
	delivery_date: FormDate = None
	farmer_payment_amount: FormFloat = None
	sales_price: FormFloat = None
	mycelium_units_produced: FormInt = None
	mycelium_sales_price: FormFloat = None

	contamination_rate: FormFloat = Field(default=None, ge=0, le=100)


# ═══════════════════════════════════════════════════════════════════════════
# Stage submissions: one payload per stage being completed.  Each declares
# ``current_stage`` as the stage the batch moves into.
# ═══════════════════════════════════════════════════════════════════════════


class InoculationStage(BaseModel):
	inoculation_date: date
	spawn_added_by: str = Field(min_length=1, max_length=100)
	spawn_quantity_grams: FormNumber = Field(ge=0)
	spawn_supplier: str = Field(min_length=1, max_length=100)
	inoculation_notes: FormText = None
	current_stage: Literal["incubation"] = "incubation"


class IncubationStage(BaseModel):
	incubation_start_date: date
	incubation_room_temp: FormNumber
	incubation_room_humidity: FormNumber = Field(ge=0, le=100)
	incubation_notes: FormText = None
	current_stage: Literal["fruiting"] = "fruiting"


class FruitingStage(BaseModel):
	fruiting_start_date: date
	fruiting_room_temp: FormNumber
	fruiting_room_humidity: FormNumber = Field(ge=0, le=100)
	light_exposure: str = Field(min_length=1, max_length=100)
	fruiting_notes: FormText = None
	current_stage: Literal["harvesting"] = "harvesting"


class HarvestingStage(BaseModel):
	harvest_date: date
	harvested_weight_kg: FormNumber = Field(ge=0)
	damaged_weight_kg: FormFloat = Field(default=None, ge=0)
	harvested_by: str = Field(min_length=1, max_length=100)
	harvest_notes: FormText = None
	current_stage: Literal["post_harvest"] = "post_harvest"


class PostHarvestStage(BaseModel):
	post_harvest_date: date
	substrate_collected_kg: FormNumber = Field(ge=0)
	substrate_condition: str = Field(min_length=1, max_length=50)
	mycelium_reuse_status: bool
	post_harvest_notes: FormText = None
	current_stage: Literal["completed"] = "completed"


STAGE_PAYLOADS: dict[ProductionStageEnum, type[BaseModel]] = {
	ProductionStageEnum.inoculation: InoculationStage,
	ProductionStageEnum.incubation: IncubationStage,
	ProductionStageEnum.fruiting: FruitingStage,
	ProductionStageEnum.harvesting: HarvestingStage,
	ProductionStageEnum.post_harvest: PostHarvestStage,
}


class SupplyChainAdvance(BaseModel):
	target_stage: SupplyChainStageEnum


class ApprovalDecision(BaseModel):
	notes: FormText = None


# ═══════════════════════════════════════════════════════════════════════════
# Batch read
# ═══════════════════════════════════════════════════════════════════════════


class BatchRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	batch_number: str
	product_type: str
	substrate: str
	location: str | None = None
	start_date: date
	expected_harvest_date: date | None = None
	actual_harvest_date: date | None = None
	status: BatchStatusEnum
	initial_weight_kg: float | None = None
	notes: str | None = None
	current_stage: ProductionStageEnum
	supply_chain_stage: SupplyChainStageEnum | None = None

	inoculation_date: date | None = None
	spawn_added_by: str | None = None
	spawn_quantity_grams: float | None = None
	spawn_supplier: str | None = None
	inoculation_notes: str | None = None
	incubation_start_date: date | None = None
	incubation_room_temp: float | None = None
	incubation_room_humidity: float | None = None
	incubation_notes: str | None = None
	fruiting_start_date: date | None = None
	fruiting_room_temp: float | None = None
	fruiting_room_humidity: float | None = None
	light_exposure: str | None = None
	fruiting_notes: str | None = None
	harvest_date: date | None = None
	harvested_weight_kg: float | None = None
	damaged_weight_kg: float | None = None
	harvested_by: str | None = None
	harvest_notes: str | None = None
	post_harvest_date: date | None = None
	substrate_collected_kg: float | None = None
	substrate_condition: str | None = None
	mycelium_reuse_status: bool | None = None
	post_harvest_notes: str | None = None

	farmer_name: str | None = None
	farmer_contact: str | None = None
	delivery_date: date | None = None
	farmer_payment_amount: float | None = None
	sales_price: float | None = None
	mycelium_units_produced: int | None = None
	mycelium_sales_price: float | None = None

	contamination_rate: float | None = None
	risk_level: RiskLevelEnum
	requires_approval: bool
	is_approved: bool
	quality_check_status: QualityCheckStatusEnum
	approved_by: str | None = None
	approved_at: datetime | None = None
	contamination_reported: bool = False
	created_at: datetime
	updated_at: datetime

	@computed_field  # type: ignore[prop-decorator]
	@property
	def progress_percent(self) -> float:
		return round(stage_progress(self.current_stage), 1)

	@computed_field  # type: ignore[prop-decorator]
	@property
	def stage_title(self) -> str:
		return STAGE_TITLES[self.current_stage]

	@computed_field  # type: ignore[prop-decorator]
	@property
	def supply_chain_progress_percent(self) -> float:
		return round(stage_progress(self.supply_chain_stage, SUPPLY_CHAIN_STAGES), 1)


class ApprovalQueueRead(BaseModel):
	pending: list[BatchRead] = Field(default_factory=list)
	approved: list[BatchRead] = Field(default_factory=list)
	high_risk: list[BatchRead] = Field(default_factory=list)


# ═══════════════════════════════════════════════════════════════════════════
# Contamination logs
# ═══════════════════════════════════════════════════════════════════════════


class ContaminationLogCreate(BaseModel):
	batch_id: uuid.UUID
	contamination_reported_date: date = Field(default_factory=date.today)
	contamination_type: str = Field(min_length=1, max_length=100)
	contaminated_bags_count: int = Field(ge=0)
	contamination_severity: SeverityEnum
	corrective_action_taken: str = Field(min_length=1)
	worker_notes: FormText = None
	reported_by: FormText = None


class ContaminationLogRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	batch_id: uuid.UUID
	contamination_reported_date: date
	contamination_type: str
	contaminated_bags_count: int
	contamination_severity: SeverityEnum
	corrective_action_taken: str
	worker_notes: str | None = None
	reported_by: str
	is_verified: bool
	verified_by: str | None = None
	verified_at: datetime | None = None
	created_at: datetime
