# inventory_admin/models/suppliers.py

from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, Field

from inventory_admin.models.common import (
    BalanceType,
    Code,
    Days,
    InputModel,
    Label,
    Money,
    Name,
    Phone,
    RecordModel,
    not_null,
)


class SupplierCreate(InputModel):
    code: Code
    name: Name
    contact_person: Optional[Label] = None
    phone: Optional[Phone] = Field(default=None, title="Phone number")
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    city: Optional[Label] = None
    payment_terms: Optional[Days] = None
    opening_balance: Money = Decimal("0")
    opening_balance_type: Optional[BalanceType] = None


class SupplierUpdate(InputModel):
    code: Optional[Code] = None
    name: Optional[Name] = None
    contact_person: Optional[Label] = None
    phone: Optional[Phone] = Field(default=None, title="Phone number")
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    city: Optional[Label] = None
    payment_terms: Optional[Days] = None
    opening_balance: Optional[Money] = None
    opening_balance_type: Optional[BalanceType] = None

    reject_nulls = not_null("code", "name", "opening_balance")


class SupplierRecord(RecordModel):
    code: str
    name: str
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    payment_terms: Optional[int] = None
    opening_balance: Decimal
    opening_balance_type: Optional[BalanceType] = None
