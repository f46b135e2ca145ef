"""ProductionBatch and ContaminationLog ORM models.

A batch row carries two independent stage pointers, ``current_stage``
(cultivation workflow) and ``supply_chain_stage`` (farmer-to-sale chain),
plus one group of nullable columns per cultivation stage.  A stage's columns
stay NULL until that stage is completed.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mycopath.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin, pg_enum
from mycopath.models.enums import (
    BatchStatusEnum,
    ProductionStageEnum,
    QualityCheckStatusEnum,
    RiskLevelEnum,
    SeverityEnum,
    SupplyChainStageEnum,
)

# ═══════════════════════════════════════════════════════════════════════════
# ProductionBatch
# ═══════════════════════════════════════════════════════════════════════════


class ProductionBatch(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """One physical cultivation batch."""

    __tablename__ = "production_batches"
    __table_args__ = (
        Index("ix_production_batches_current_stage", "current_stage"),
        Index("ix_production_batches_requires_approval", "requires_approval"),
    )

    batch_number: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False
    )
    product_type: Mapped[str] = mapped_column(String(100), nullable=False)
    substrate: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    expected_harvest_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    actual_harvest_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[BatchStatusEnum] = mapped_column(
        pg_enum(BatchStatusEnum, "batch_status"),
        nullable=False,
        default=BatchStatusEnum.inoculation,
        server_default=BatchStatusEnum.inoculation.value,
    )
    initial_weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # ── Stage pointers ───────────────────────────────────────────────────
    current_stage: Mapped[ProductionStageEnum] = mapped_column(
        pg_enum(ProductionStageEnum, "production_stage"),
        nullable=False,
        default=ProductionStageEnum.batch_creation,
        server_default=ProductionStageEnum.batch_creation.value,
    )
    supply_chain_stage: Mapped[SupplyChainStageEnum | None] = mapped_column(
        pg_enum(SupplyChainStageEnum, "supply_chain_stage"),
        nullable=True,
    )

    # ── Inoculation ──────────────────────────────────────────────────────
    inoculation_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    spawn_added_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    spawn_quantity_grams: Mapped[float | None] = mapped_column(Float, nullable=True)
    spawn_supplier: Mapped[str | None] = mapped_column(String(100), nullable=True)
    inoculation_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # ── Incubation ───────────────────────────────────────────────────────
    incubation_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    incubation_room_temp: Mapped[float | None] = mapped_column(Float, nullable=True)
    incubation_room_humidity: Mapped[float | None] = mapped_column(Float, nullable=True)
    incubation_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # ── Fruiting ─────────────────────────────────────────────────────────
    fruiting_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    fruiting_room_temp: Mapped[float | None] = mapped_column(Float, nullable=True)
    fruiting_room_humidity: Mapped[float | None] = mapped_column(Float, nullable=True)
    light_exposure: Mapped[str | None] = mapped_column(String(100), nullable=True)
    fruiting_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # ── Harvesting ───────────────────────────────────────────────────────
    harvest_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    harvested_weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    damaged_weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    harvested_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    harvest_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # ── Post-harvest ─────────────────────────────────────────────────────
    post_harvest_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    substrate_collected_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    substrate_condition: Mapped[str | None] = mapped_column(String(50), nullable=True)
    mycelium_reuse_status: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    post_harvest_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # ── Supply chain ─────────────────────────────────────────────────────
    farmer_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    farmer_contact: Mapped[str | None] = mapped_column(String(50), nullable=True)
    delivery_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    farmer_payment_amount: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True
    )
    sales_price: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True
    )
    mycelium_units_produced: Mapped[int | None] = mapped_column(Integer, nullable=True)
    mycelium_sales_price: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True
    )

    # ── Quality / approval gating ────────────────────────────────────────
    contamination_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    risk_level: Mapped[RiskLevelEnum] = mapped_column(
        pg_enum(RiskLevelEnum, "risk_level"),
        nullable=False,
        default=RiskLevelEnum.low,
        server_default=RiskLevelEnum.low.value,
    )
    requires_approval: Mapped[bool] = mapped_column(
        default=False, server_default=text("false"), nullable=False
    )
    is_approved: Mapped[bool] = mapped_column(
        default=False, server_default=text("false"), nullable=False
    )
    quality_check_status: Mapped[QualityCheckStatusEnum] = mapped_column(
        pg_enum(QualityCheckStatusEnum, "quality_check_status"),
        nullable=False,
        default=QualityCheckStatusEnum.pending,
        server_default=QualityCheckStatusEnum.pending.value,
    )
    approved_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # ── Relationships ────────────────────────────────────────────────────
    contamination_logs: Mapped[list[ContaminationLog]] = relationship(
        back_populates="batch",
        cascade="all, delete-orphan",
        lazy="raise",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return (
            f"<ProductionBatch id={self.id} number={self.batch_number!r} "
            f"stage={self.current_stage}>"
        )


# ═══════════════════════════════════════════════════════════════════════════
# ContaminationLog
# ═══════════════════════════════════════════════════════════════════════════


class ContaminationLog(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Append-only record of one contamination incident on a batch."""

    __tablename__ = "contamination_logs"
    __table_args__ = (Index("ix_contamination_logs_batch_id", "batch_id"),)

    batch_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("production_batches.id", ondelete="CASCADE"),
        nullable=False,
    )
    contamination_reported_date: Mapped[date] = mapped_column(Date, nullable=False)
    contamination_type: Mapped[str] = mapped_column(String(100), nullable=False)
    contaminated_bags_count: Mapped[int] = mapped_column(Integer, nullable=False)
    contamination_severity: Mapped[SeverityEnum] = mapped_column(
        pg_enum(SeverityEnum, "contamination_severity"),
        nullable=False,
    )
    corrective_action_taken: Mapped[str] = mapped_column(Text, nullable=False)
    worker_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    reported_by: Mapped[str] = mapped_column(String(100), nullable=False)
    is_verified: Mapped[bool] = mapped_column(
        default=False, server_default=text("false"), nullable=False
    )
    verified_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # ── Relationships ────────────────────────────────────────────────────
    batch: Mapped[ProductionBatch] = relationship(back_populates="contamination_logs")

    def __repr__(self) -> str:
        return (
            f"<ContaminationLog id={self.id} batch={self.batch_id} "
            f"severity={self.contamination_severity}>"
        )
