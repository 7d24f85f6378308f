# inventory_admin/db/schema.py

from dataclasses import dataclass

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    Uuid,
    true,
)

metadata = MetaData()


def _audit_columns():
    # fresh Column objects per table; a Column can only belong to one Table
    return (
        Column("is_active", Boolean, nullable=False, server_default=true()),
        Column("created_at", DateTime(timezone=True), nullable=False),
        Column("updated_at", DateTime(timezone=True), nullable=False),
    )


categories = Table(
    "categories",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("name", String(100), nullable=False),
    Column("description", Text),
    *_audit_columns(),
)

stores = Table(
    "stores",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("code", String(50), nullable=False),
    Column("name", String(100), nullable=False),
    Column("address", Text),
    Column("phone", String(30)),
    Column("email", String(255)),
    *_audit_columns(),
)

items = Table(
    "items",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("code", String(50), nullable=False),
    Column("barcode", String(100)),
    Column("name", String(100), nullable=False),
    Column("description", Text),
    Column("category_id", Uuid, ForeignKey("categories.id"), nullable=False),
    Column("unit", String(20), nullable=False),
    Column("reorder_level", Numeric(18, 3), nullable=False),
    Column("allow_negative_stock", Boolean, nullable=False),
    *_audit_columns(),
    CheckConstraint("reorder_level >= 0", name="ck_items_reorder_level_nonneg"),
)

customers = Table(
    "customers",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("code", String(50), nullable=False),
    Column("name", String(100), nullable=False),
    Column("phone", String(30)),
    Column("email", String(255)),
    Column("address", Text),
    Column("city", String(100)),
    Column("credit_limit", Numeric(18, 2), nullable=False),
    Column("customer_type", String(20), nullable=False),
    Column("opening_balance", Numeric(18, 2), nullable=False),
    Column("opening_balance_type", String(20)),
    *_audit_columns(),
    CheckConstraint("credit_limit >= 0", name="ck_customers_credit_limit_nonneg"),
    CheckConstraint("opening_balance >= 0", name="ck_customers_opening_balance_nonneg"),
    CheckConstraint(
        "customer_type IN ('retail', 'wholesale', 'distribution')",
        name="ck_customers_customer_type",
    ),
)

suppliers = Table(
    "suppliers",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("code", String(50), nullable=False),
    Column("name", String(100), nullable=False),
    Column("contact_person", String(100)),
    Column("phone", String(30)),
    Column("email", String(255)),
    Column("address", Text),
    Column("city", String(100)),
    Column("payment_terms", Integer),
    Column("opening_balance", Numeric(18, 2), nullable=False),
    Column("opening_balance_type", String(20)),
    *_audit_columns(),
    CheckConstraint("payment_terms > 0", name="ck_suppliers_payment_terms_pos"),
    CheckConstraint("opening_balance >= 0", name="ck_suppliers_opening_balance_nonneg"),
)

employees = Table(
    "employees",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=False),
    Column("phone", String(30)),
    Column("role", String(50), nullable=False),
    *_audit_columns(),
)


# ---- Unique rules ----

@dataclass(frozen=True)
class UniqueRule:
    """
    A column whose value must be unique.

    With ``reuse_deleted`` (the default) only active rows count, so the code
    of a soft-deleted record can be given to a new one; the backing index is
    partial over active rows. Without it every row counts, deleted or not.
    """

    table: str
    column: str
    reuse_deleted: bool = True


def unique_rule(table: Table, column: str, reuse_deleted: bool = True) -> UniqueRule:
    if reuse_deleted:
        Index(
            f"uq_{table.name}_{column}_active",
            table.c[column],
            unique=True,
            sqlite_where=table.c.is_active == true(),
            postgresql_where=table.c.is_active == true(),
        )
    else:
        Index(f"uq_{table.name}_{column}", table.c[column], unique=True)
    return UniqueRule(table.name, column, reuse_deleted)


UNIQUE_RULES = {
    "categories": (unique_rule(categories, "name"),),
    "stores": (unique_rule(stores, "code"),),
    "items": (unique_rule(items, "code"),),
    "customers": (unique_rule(customers, "code"), unique_rule(customers, "email")),
    "suppliers": (unique_rule(suppliers, "code"), unique_rule(suppliers, "email")),
    "employees": (unique_rule(employees, "email"),),
}
