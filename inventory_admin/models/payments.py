# inventory_admin/models/payments.py

from datetime import date
from typing import Optional
from uuid import UUID

from inventory_admin.models.common import InputModel, PaymentMethod, PositiveAmount


class PaymentCreate(InputModel):
    payment_date: date
    payment_method: PaymentMethod
    amount: PositiveAmount
    remarks: Optional[str] = None


class PaymentAllocation(InputModel):
    invoice_id: UUID
    allocation_amount: PositiveAmount
