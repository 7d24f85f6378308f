# inventory_admin/models/customers.py

from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, Field

from inventory_admin.models.common import (
    BalanceType,
    Code,
    CustomerType,
    InputModel,
    Label,
    Money,
    Name,
    Phone,
    RecordModel,
    not_null,
)


class CustomerCreate(InputModel):
    code: Code
    name: Name
    phone: Optional[Phone] = Field(default=None, title="Phone number")
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    city: Optional[Label] = None
    credit_limit: Money = Decimal("0")
    customer_type: CustomerType = CustomerType.RETAIL
    opening_balance: Money = Decimal("0")
    opening_balance_type: Optional[BalanceType] = None


class CustomerUpdate(InputModel):
    code: Optional[Code] = None
    name: Optional[Name] = None
    phone: Optional[Phone] = Field(default=None, title="Phone number")
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    city: Optional[Label] = None
    credit_limit: Optional[Money] = None
    customer_type: Optional[CustomerType] = None
    opening_balance: Optional[Money] = None
    opening_balance_type: Optional[BalanceType] = None

    reject_nulls = not_null("code", "name", "credit_limit", "customer_type", "opening_balance")


class CustomerRecord(RecordModel):
    code: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    credit_limit: Decimal
    customer_type: CustomerType
    opening_balance: Decimal
    opening_balance_type: Optional[BalanceType] = None
