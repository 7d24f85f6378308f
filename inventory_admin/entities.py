# inventory_admin/entities.py
"""
One descriptor per master entity. The repository and the router factory are
generic; everything entity-specific lives here.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Type, Union

from inventory_admin.db.schema import UNIQUE_RULES, UniqueRule
from inventory_admin.models import (
    CategoryCreate,
    CategoryRecord,
    CategoryUpdate,
    CustomerCreate,
    CustomerRecord,
    CustomerUpdate,
    EmployeeCreate,
    EmployeeRecord,
    EmployeeUpdate,
    InputModel,
    ItemCreate,
    ItemRecord,
    ItemUpdate,
    RecordModel,
    StoreCreate,
    StoreRecord,
    StoreUpdate,
    SupplierCreate,
    SupplierRecord,
    SupplierUpdate,
)
from inventory_admin.validation import humanize, lower_first


@dataclass(frozen=True)
class EntityKind:
    table: str
    label: str
    plural: str
    create_model: Type[InputModel]
    update_model: Type[InputModel]
    record_model: Type[RecordModel]
    # (column, referenced table) pairs that must point at an active row
    references: Tuple[Tuple[str, str], ...] = ()
    filterable: Tuple[str, ...] = ()
    default_order: str = "name"

    @property
    def unique(self) -> Tuple[UniqueRule, ...]:
        return UNIQUE_RULES.get(self.table, ())

    def unique_rule(self, column: str) -> Optional[UniqueRule]:
        for rule in self.unique:
            if rule.column == column:
                return rule
        return None

    def duplicate_message(self, column: str) -> str:
        return f"{self.label} {lower_first(humanize(column))} already exists"


CATEGORIES = EntityKind(
    table="categories",
    label="Category",
    plural="Categories",
    create_model=CategoryCreate,
    update_model=CategoryUpdate,
    record_model=CategoryRecord,
)

STORES = EntityKind(
    table="stores",
    label="Store",
    plural="Stores",
    create_model=StoreCreate,
    update_model=StoreUpdate,
    record_model=StoreRecord,
)

ITEMS = EntityKind(
    table="items",
    label="Item",
    plural="Items",
    create_model=ItemCreate,
    update_model=ItemUpdate,
    record_model=ItemRecord,
    references=(("category_id", "categories"),),
    filterable=("category_id", "unit"),
)

CUSTOMERS = EntityKind(
    table="customers",
    label="Customer",
    plural="Customers",
    create_model=CustomerCreate,
    update_model=CustomerUpdate,
    record_model=CustomerRecord,
    filterable=("customer_type", "city"),
)

SUPPLIERS = EntityKind(
    table="suppliers",
    label="Supplier",
    plural="Suppliers",
    create_model=SupplierCreate,
    update_model=SupplierUpdate,
    record_model=SupplierRecord,
    filterable=("city",),
)

EMPLOYEES = EntityKind(
    table="employees",
    label="Employee",
    plural="Employees",
    create_model=EmployeeCreate,
    update_model=EmployeeUpdate,
    record_model=EmployeeRecord,
    filterable=("role",),
)

ENTITIES: Dict[str, EntityKind] = {
    kind.table: kind
    for kind in (CATEGORIES, STORES, ITEMS, CUSTOMERS, SUPPLIERS, EMPLOYEES)
}


def get_kind(kind: Union[str, EntityKind]) -> EntityKind:
    if isinstance(kind, EntityKind):
        return kind
    try:
        return ENTITIES[kind]
    except KeyError:
        raise ValueError(f"Unknown entity kind {kind!r}") from None
