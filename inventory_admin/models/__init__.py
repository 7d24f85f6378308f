# inventory_admin/models/__init__.py
"""Input schemas and typed records for every entity kind."""

from inventory_admin.models.auth import LoginIn
from inventory_admin.models.categories import CategoryCreate, CategoryRecord, CategoryUpdate
from inventory_admin.models.common import (
    BalanceType,
    CustomerType,
    InputModel,
    PaymentMethod,
    RecordModel,
    TaxType,
)
from inventory_admin.models.customers import CustomerCreate, CustomerRecord, CustomerUpdate
from inventory_admin.models.employees import EmployeeCreate, EmployeeRecord, EmployeeUpdate
from inventory_admin.models.items import ItemCreate, ItemRecord, ItemUpdate
from inventory_admin.models.payments import PaymentAllocation, PaymentCreate
from inventory_admin.models.sales import (
    SalesInvoiceCreate,
    SalesLineItem,
    SalesRetailCreate,
    SalesWholesaleCreate,
)
from inventory_admin.models.stock import StockAdjustmentCreate, StockAdjustmentItem
from inventory_admin.models.stores import StoreCreate, StoreRecord, StoreUpdate
from inventory_admin.models.suppliers import SupplierCreate, SupplierRecord, SupplierUpdate

__all__ = [
    "BalanceType",
    "CategoryCreate",
    "CategoryRecord",
    "CategoryUpdate",
    "CustomerCreate",
    "CustomerRecord",
    "CustomerType",
    "CustomerUpdate",
    "EmployeeCreate",
    "EmployeeRecord",
    "EmployeeUpdate",
    "InputModel",
    "ItemCreate",
    "ItemRecord",
    "ItemUpdate",
    "LoginIn",
    "PaymentAllocation",
    "PaymentCreate",
    "PaymentMethod",
    "RecordModel",
    "SalesInvoiceCreate",
    "SalesLineItem",
    "SalesRetailCreate",
    "SalesWholesaleCreate",
    "StockAdjustmentCreate",
    "StockAdjustmentItem",
    "StoreCreate",
    "StoreRecord",
    "StoreUpdate",
    "SupplierCreate",
    "SupplierRecord",
    "SupplierUpdate",
    "TaxType",
]
