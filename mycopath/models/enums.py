"""PostgreSQL-backed enum types for all ORM models.

Each StrEnum maps 1:1 to a PostgreSQL CREATE TYPE ... AS ENUM.
Declaration order matters for the two stage enums: it IS the workflow
order used by ``mycopath.services.workflow``.
"""

from enum import StrEnum

# ── Production enums ────────────────────────────────────────────────────────


class ProductionStageEnum(StrEnum):
    """Cultivation workflow stages, in order."""

    batch_creation = "batch_creation"
    inoculation = "inoculation"
    incubation = "incubation"
    fruiting = "fruiting"
    harvesting = "harvesting"
    post_harvest = "post_harvest"
    completed = "completed"


class SupplyChainStageEnum(StrEnum):
    """Farmer-to-sale supply-chain stages, in order."""

    farmer_delivery = "farmer_delivery"
    hub_processing = "hub_processing"
    harvesting = "harvesting"
    packaging = "packaging"
    substrate_collection = "substrate_collection"
    mycelium_production = "mycelium_production"
    product_manufacturing = "product_manufacturing"
    sales = "sales"
    completed = "completed"


class BatchStatusEnum(StrEnum):
    """Coarse batch status shown in list views."""

    inoculation = "inoculation"
    growing = "growing"
    ready = "ready"
    harvested = "harvested"
    contaminated = "contaminated"


class RiskLevelEnum(StrEnum):
    """Risk classification derived from contamination rate."""

    low = "low"
    medium = "medium"
    high = "high"


class QualityCheckStatusEnum(StrEnum):
    """Outcome of the manager quality review."""

    pending = "pending"
    passed = "passed"
    failed = "failed"


class SeverityEnum(StrEnum):
    """Contamination incident severity."""

    low = "low"
    medium = "medium"
    high = "high"


# ── Planning enums ──────────────────────────────────────────────────────────


class WorkStatusEnum(StrEnum):
    """Shared status for milestones and tasks."""

    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class PriorityEnum(StrEnum):
    low = "low"
    medium = "medium"
    high = "high"


class TransactionTypeEnum(StrEnum):
    income = "income"
    expense = "expense"


# ── HR enums ────────────────────────────────────────────────────────────────


class EmployeeStatusEnum(StrEnum):
    active = "active"
    on_leave = "on_leave"
    terminated = "terminated"


class AttendanceStatusEnum(StrEnum):
    present = "present"
    absent = "absent"
    late = "late"
    half_day = "half_day"
    leave = "leave"


class PayrollStatusEnum(StrEnum):
    pending = "pending"
    paid = "paid"


# ── Sales enums ─────────────────────────────────────────────────────────────


class CustomerTypeEnum(StrEnum):
    individual = "individual"
    restaurant = "restaurant"
    retailer = "retailer"
    distributor = "distributor"


class OrderTypeEnum(StrEnum):
    online = "online"
    inhouse = "inhouse"
    wholesale = "wholesale"


class OrderStatusEnum(StrEnum):
    pending = "pending"
    confirmed = "confirmed"
    processing = "processing"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"


class PaymentStatusEnum(StrEnum):
    pending = "pending"
    partial = "partial"
    paid = "paid"
    refunded = "refunded"


# ── Auth enums ──────────────────────────────────────────────────────────────


class UserRoleEnum(StrEnum):
    """User authorization roles for RBAC."""

    admin = "admin"
    manager = "manager"
    production = "production"
    finance = "finance"
    sales = "sales"
    worker = "worker"
