"""initial_schema

Revision ID: 3f1c9a7e2b40
Revises:
Create Date: 2026-10-16 00:00:00.000000

Creates the uuid-ossp extension, every PostgreSQL enum type and all tables
for the MycoPath schema (auth, production, planning, finance, inventory,
HR and sales).
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7e2b40"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# ── Enum type names (PostgreSQL CREATE TYPE) ────────────────────────────────
ENUM_USER_ROLE = postgresql.ENUM(
    "admin", "manager", "production", "finance", "sales", "worker",
    name="user_role",
    create_type=False,
)
ENUM_PRODUCTION_STAGE = postgresql.ENUM(
    "batch_creation",
    "inoculation",
    "incubation",
    "fruiting",
    "harvesting",
    "post_harvest",
    "completed",
    name="production_stage",
    create_type=False,
)
ENUM_SUPPLY_CHAIN_STAGE = postgresql.ENUM(
    "farmer_delivery",
    "hub_processing",
    "harvesting",
    "packaging",
    "substrate_collection",
    "mycelium_production",
    "product_manufacturing",
    "sales",
    "completed",
    name="supply_chain_stage",
    create_type=False,
)
ENUM_BATCH_STATUS = postgresql.ENUM(
    "inoculation", "growing", "ready", "harvested", "contaminated",
    name="batch_status",
    create_type=False,
)
ENUM_RISK_LEVEL = postgresql.ENUM(
    "low", "medium", "high", name="risk_level", create_type=False
)
ENUM_QUALITY_CHECK_STATUS = postgresql.ENUM(
    "pending", "passed", "failed", name="quality_check_status", create_type=False
)
ENUM_CONTAMINATION_SEVERITY = postgresql.ENUM(
    "low", "medium", "high", name="contamination_severity", create_type=False
)
ENUM_WORK_STATUS = postgresql.ENUM(
    "pending", "in_progress", "completed", name="work_status", create_type=False
)
ENUM_TASK_PRIORITY = postgresql.ENUM(
    "low", "medium", "high", name="task_priority", create_type=False
)
ENUM_TRANSACTION_TYPE = postgresql.ENUM(
    "income", "expense", name="transaction_type", create_type=False
)
ENUM_EMPLOYEE_STATUS = postgresql.ENUM(
    "active", "on_leave", "terminated", name="employee_status", create_type=False
)
ENUM_ATTENDANCE_STATUS = postgresql.ENUM(
    "present", "absent", "late", "half_day", "leave",
    name="attendance_status",
    create_type=False,
)
ENUM_PAYROLL_STATUS = postgresql.ENUM(
    "pending", "paid", name="payroll_status", create_type=False
)
ENUM_CUSTOMER_TYPE = postgresql.ENUM(
    "individual", "restaurant", "retailer", "distributor",
    name="customer_type",
    create_type=False,
)
ENUM_ORDER_TYPE = postgresql.ENUM(
    "online", "inhouse", "wholesale", name="order_type", create_type=False
)
ENUM_ORDER_STATUS = postgresql.ENUM(
    "pending", "confirmed", "processing", "shipped", "delivered", "cancelled",
    name="order_status",
    create_type=False,
)
ENUM_PAYMENT_STATUS = postgresql.ENUM(
    "pending", "partial", "paid", "refunded", name="payment_status", create_type=False
)

ALL_ENUMS = (
    ENUM_USER_ROLE,
    ENUM_PRODUCTION_STAGE,
    ENUM_SUPPLY_CHAIN_STAGE,
    ENUM_BATCH_STATUS,
    ENUM_RISK_LEVEL,
    ENUM_QUALITY_CHECK_STATUS,
    ENUM_CONTAMINATION_SEVERITY,
    ENUM_WORK_STATUS,
    ENUM_TASK_PRIORITY,
    ENUM_TRANSACTION_TYPE,
    ENUM_EMPLOYEE_STATUS,
    ENUM_ATTENDANCE_STATUS,
    ENUM_PAYROLL_STATUS,
    ENUM_CUSTOMER_TYPE,
    ENUM_ORDER_TYPE,
    ENUM_ORDER_STATUS,
    ENUM_PAYMENT_STATUS,
)


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _money(precision: int = 12) -> sa.Numeric:
    return sa.Numeric(precision, 2)


def upgrade() -> None:
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ── 1. Create enum types ────────────────────────────────────────────
    for enum_type in ALL_ENUMS:
        enum_type.create(op.get_bind(), checkfirst=True)

    # ── 2. Auth ─────────────────────────────────────────────────────────
    op.create_table(
        "users",
        _id_column(),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("hashed_password", sa.String(128), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column(
            "role",
            ENUM_USER_ROLE,
            server_default=sa.text("'worker'"),
            nullable=False,
        ),
        sa.Column("employee_id", sa.String(50), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column(
            "is_approved_by_admin", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column(
            "is_email_verified", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column("email_verification_token", sa.String(128), nullable=True),
        sa.Column("email_verification_expires", sa.DateTime(timezone=True), nullable=True),
        sa.Column("password_reset_token", sa.String(128), nullable=True),
        sa.Column("password_reset_expires", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_employee_id", "users", ["employee_id"], unique=True)
    op.create_index(
        "ix_users_email_verification_token", "users", ["email_verification_token"]
    )
    op.create_index("ix_users_password_reset_token", "users", ["password_reset_token"])

    # ── 3. Production ───────────────────────────────────────────────────
    op.create_table(
        "production_batches",
        _id_column(),
        sa.Column("batch_number", sa.String(50), nullable=False),
        sa.Column("product_type", sa.String(100), nullable=False),
        sa.Column("substrate", sa.String(100), nullable=False),
        sa.Column("location", sa.String(100), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("expected_harvest_date", sa.Date(), nullable=True),
        sa.Column("actual_harvest_date", sa.Date(), nullable=True),
        sa.Column(
            "status",
            ENUM_BATCH_STATUS,
            server_default=sa.text("'inoculation'"),
            nullable=False,
        ),
        sa.Column("initial_weight_kg", sa.Float(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "current_stage",
            ENUM_PRODUCTION_STAGE,
            server_default=sa.text("'batch_creation'"),
            nullable=False,
        ),
        sa.Column("supply_chain_stage", ENUM_SUPPLY_CHAIN_STAGE, nullable=True),
        # inoculation
        sa.Column("inoculation_date", sa.Date(), nullable=True),
        sa.Column("spawn_added_by", sa.String(100), nullable=True),
        sa.Column("spawn_quantity_grams", sa.Float(), nullable=True),
        sa.Column("spawn_supplier", sa.String(100), nullable=True),
        sa.Column("inoculation_notes", sa.Text(), nullable=True),
        # incubation
        sa.Column("incubation_start_date", sa.Date(), nullable=True),
        sa.Column("incubation_room_temp", sa.Float(), nullable=True),
        sa.Column("incubation_room_humidity", sa.Float(), nullable=True),
        sa.Column("incubation_notes", sa.Text(), nullable=True),
        # fruiting
        sa.Column("fruiting_start_date", sa.Date(), nullable=True),
        sa.Column("fruiting_room_temp", sa.Float(), nullable=True),
        sa.Column("fruiting_room_humidity", sa.Float(), nullable=True),
        sa.Column("light_exposure", sa.String(100), nullable=True),
        sa.Column("fruiting_notes", sa.Text(), nullable=True),
        # harvesting
        sa.Column("harvest_date", sa.Date(), nullable=True),
        sa.Column("harvested_weight_kg", sa.Float(), nullable=True),
        sa.Column("damaged_weight_kg", sa.Float(), nullable=True),
        sa.Column("harvested_by", sa.String(100), nullable=True),
        sa.Column("harvest_notes", sa.Text(), nullable=True),
        # post-harvest
        sa.Column("post_harvest_date", sa.Date(), nullable=True),
        sa.Column("substrate_collected_kg", sa.Float(), nullable=True),
        sa.Column("substrate_condition", sa.String(50), nullable=True),
        sa.Column("mycelium_reuse_status", sa.Boolean(), nullable=True),
        sa.Column("post_harvest_notes", sa.Text(), nullable=True),
        # supply chain
        sa.Column("farmer_name", sa.String(100), nullable=True),
        sa.Column("farmer_contact", sa.String(50), nullable=True),
        sa.Column("delivery_date", sa.Date(), nullable=True),
        sa.Column("farmer_payment_amount", _money(), nullable=True),
        sa.Column("sales_price", _money(), nullable=True),
        sa.Column("mycelium_units_produced", sa.Integer(), nullable=True),
        sa.Column("mycelium_sales_price", _money(), nullable=True),
        # quality / approval
        sa.Column("contamination_rate", sa.Float(), nullable=True),
        sa.Column(
            "risk_level",
            ENUM_RISK_LEVEL,
            server_default=sa.text("'low'"),
            nullable=False,
        ),
        sa.Column(
            "requires_approval", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column("is_approved", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column(
            "quality_check_status",
            ENUM_QUALITY_CHECK_STATUS,
            server_default=sa.text("'pending'"),
            nullable=False,
        ),
        sa.Column("approved_by", sa.String(100), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("batch_number"),
    )
    op.create_index(
        "ix_production_batches_current_stage", "production_batches", ["current_stage"]
    )
    op.create_index(
        "ix_production_batches_requires_approval",
        "production_batches",
        ["requires_approval"],
    )

    op.create_table(
        "contamination_logs",
        _id_column(),
        sa.Column("batch_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("contamination_reported_date", sa.Date(), nullable=False),
        sa.Column("contamination_type", sa.String(100), nullable=False),
        sa.Column("contaminated_bags_count", sa.Integer(), nullable=False),
        sa.Column("contamination_severity", ENUM_CONTAMINATION_SEVERITY, nullable=False),
        sa.Column("corrective_action_taken", sa.Text(), nullable=False),
        sa.Column("worker_notes", sa.Text(), nullable=True),
        sa.Column("reported_by", sa.String(100), nullable=False),
        sa.Column("is_verified", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("verified_by", sa.String(100), nullable=True),
        sa.Column("verified_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(
            ["batch_id"], ["production_batches.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_contamination_logs_batch_id", "contamination_logs", ["batch_id"])

    # ── 4. Planning, finance, inventory, activity feed ──────────────────
    op.create_table(
        "milestones",
        _id_column(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("target_value", sa.String(50), nullable=True),
        sa.Column("current_value", sa.String(50), nullable=True),
        sa.Column("bonus_amount", _money(10), nullable=True),
        sa.Column("responsible", sa.String(100), nullable=True),
        sa.Column("target_date", sa.Date(), nullable=True),
        sa.Column("completed_date", sa.Date(), nullable=True),
        sa.Column("status", ENUM_WORK_STATUS, nullable=False),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "tasks",
        _id_column(),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("priority", ENUM_TASK_PRIORITY, nullable=False),
        sa.Column("status", ENUM_WORK_STATUS, nullable=False),
        sa.Column("assigned_to", sa.String(100), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("completed_date", sa.Date(), nullable=True),
        sa.Column("batch_id", postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(
            ["batch_id"], ["production_batches.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "financial_transactions",
        _id_column(),
        sa.Column("type", ENUM_TRANSACTION_TYPE, nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("amount", _money(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("transaction_date", sa.Date(), nullable=False),
        sa.Column("batch_id", postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(
            ["batch_id"], ["production_batches.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_financial_transactions_type_date",
        "financial_transactions",
        ["type", "transaction_date"],
    )

    op.create_table(
        "inventory_items",
        _id_column(),
        sa.Column("item_name", sa.String(100), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("current_stock", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(20), nullable=False),
        sa.Column("minimum_stock", sa.Float(), nullable=True),
        sa.Column("cost_per_unit", _money(10), nullable=True),
        sa.Column("supplier", sa.String(100), nullable=True),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "activities",
        _id_column(),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("entity_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("entity_type", sa.String(50), nullable=True),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activities_created_at", "activities", ["created_at"])

    # ── 5. HR ───────────────────────────────────────────────────────────
    op.create_table(
        "employees",
        _id_column(),
        sa.Column("employee_code", sa.String(50), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("position", sa.String(100), nullable=False),
        sa.Column("department", sa.String(100), nullable=False),
        sa.Column("salary", _money(), nullable=True),
        sa.Column("hire_date", sa.Date(), nullable=False),
        sa.Column("status", ENUM_EMPLOYEE_STATUS, nullable=False),
        sa.Column("skills", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("employee_code"),
        sa.UniqueConstraint("user_id"),
    )

    op.create_table(
        "attendance",
        _id_column(),
        sa.Column("employee_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("work_date", sa.Date(), nullable=False),
        sa.Column("check_in", sa.DateTime(timezone=True), nullable=True),
        sa.Column("check_out", sa.DateTime(timezone=True), nullable=True),
        sa.Column("hours_worked", sa.Float(), nullable=True),
        sa.Column("status", ENUM_ATTENDANCE_STATUS, nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_attendance_employee_day", "attendance", ["employee_id", "work_date"]
    )

    op.create_table(
        "payroll",
        _id_column(),
        sa.Column("employee_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("period", sa.String(7), nullable=False),
        sa.Column("basic_salary", _money(), nullable=False),
        sa.Column("allowances", _money(), nullable=False),
        sa.Column("deductions", _money(), nullable=False),
        sa.Column("net_pay", _money(), nullable=False),
        sa.Column("status", ENUM_PAYROLL_STATUS, nullable=False),
        sa.Column("pay_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_payroll_employee_period", "payroll", ["employee_id", "period"])

    # ── 6. Sales ────────────────────────────────────────────────────────
    op.create_table(
        "customers",
        _id_column(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("customer_type", ENUM_CUSTOMER_TYPE, nullable=False),
        sa.Column("source", sa.String(30), nullable=True),
        sa.Column("preferred_payment", sa.String(50), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_customers_email", "customers", ["email"])

    op.create_table(
        "products",
        _id_column(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("selling_price", _money(10), nullable=False),
        sa.Column("cost_price", _money(10), nullable=True),
        sa.Column("unit", sa.String(20), nullable=False),
        sa.Column("current_stock", sa.Float(), server_default=sa.text("0"), nullable=False),
        sa.Column("minimum_stock", sa.Float(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "orders",
        _id_column(),
        sa.Column("order_number", sa.String(50), nullable=False),
        sa.Column("customer_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("order_type", ENUM_ORDER_TYPE, nullable=False),
        sa.Column("source", sa.String(30), nullable=True),
        sa.Column("status", ENUM_ORDER_STATUS, nullable=False),
        sa.Column("total_amount", _money(), nullable=False),
        sa.Column("paid_amount", _money(), nullable=False),
        sa.Column("payment_status", ENUM_PAYMENT_STATUS, nullable=False),
        sa.Column("payment_method", sa.String(50), nullable=True),
        sa.Column("shipping_address", sa.Text(), nullable=True),
        sa.Column("order_date", sa.Date(), nullable=False),
        sa.Column("expected_delivery", sa.Date(), nullable=True),
        sa.Column("actual_delivery", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("order_number"),
    )
    op.create_index("ix_orders_status", "orders", ["status"])

    op.create_table(
        "order_items",
        _id_column(),
        sa.Column("order_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("product_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("unit_price", _money(10), nullable=False),
        sa.Column("total_price", _money(), nullable=False),
        sa.Column("batch_id", postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(
            ["batch_id"], ["production_batches.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])


def downgrade() -> None:
    for table in (
        "order_items",
        "orders",
        "products",
        "customers",
        "payroll",
        "attendance",
        "employees",
        "activities",
        "inventory_items",
        "financial_transactions",
        "tasks",
        "milestones",
        "contamination_logs",
        "production_batches",
        "users",
    ):
        op.drop_table(table)

    for enum_type in reversed(ALL_ENUMS):
        enum_type.drop(op.get_bind(), checkfirst=True)
