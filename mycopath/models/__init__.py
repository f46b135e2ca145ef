"""ORM model registry. Importing this module registers every table on Base.metadata.

Alembic ``env.py`` imports ``Base`` from here (not from ``base.py``) so that
autogenerate sees all tables.  Application code can also do::

    from mycopath.models import ProductionBatch, ContaminationLog, ...
"""

# ── Auth models ─────────────────────────────────────────────────────────────
from mycopath.models.user import User

# ── Base & Mixins ───────────────────────────────────────────────────────────
from mycopath.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

# ── Enums ───────────────────────────────────────────────────────────────────
from mycopath.models.enums import (
    AttendanceStatusEnum,
    BatchStatusEnum,
    CustomerTypeEnum,
    EmployeeStatusEnum,
    OrderStatusEnum,
    OrderTypeEnum,
    PaymentStatusEnum,
    PayrollStatusEnum,
    PriorityEnum,
    ProductionStageEnum,
    QualityCheckStatusEnum,
    RiskLevelEnum,
    SeverityEnum,
    SupplyChainStageEnum,
    TransactionTypeEnum,
    UserRoleEnum,
    WorkStatusEnum,
)

# ── HR ──────────────────────────────────────────────────────────────────────
from mycopath.models.hr import Attendance, Employee, Payroll

# ── Planning, finance, inventory, activity feed ─────────────────────────────
from mycopath.models.operations import (
    Activity,
    FinancialTransaction,
    InventoryItem,
    Milestone,
    Task,
)

# ── Production ──────────────────────────────────────────────────────────────
from mycopath.models.production import ContaminationLog, ProductionBatch

# ── Sales ───────────────────────────────────────────────────────────────────
from mycopath.models.sales import Customer, Order, OrderItem, Product

__all__ = [
    "Activity",
    "Attendance",
    "AttendanceStatusEnum",
    # Base & mixins
    "Base",
    "BatchStatusEnum",
    "ContaminationLog",
    "Customer",
    "CustomerTypeEnum",
    "Employee",
    "EmployeeStatusEnum",
    "FinancialTransaction",
    "InventoryItem",
    "Milestone",
    "Order",
    "OrderItem",
    "OrderStatusEnum",
    "OrderTypeEnum",
    "PaymentStatusEnum",
    "Payroll",
    "PayrollStatusEnum",
    "PriorityEnum",
    "Product",
    # Production
    "ProductionBatch",
    "ProductionStageEnum",
    "QualityCheckStatusEnum",
    "RiskLevelEnum",
    "SeverityEnum",
    "SupplyChainStageEnum",
    "Task",
    "TimestampMixin",
    "TransactionTypeEnum",
    "UUIDPrimaryKeyMixin",
    # Auth
    "User",
    "UserRoleEnum",
    "WorkStatusEnum",
]
