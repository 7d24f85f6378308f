# inventory_admin/models/sales.py
"""
Sales invoice shapes. Nothing persists these yet; they are validated so the
invoice screens can share error formatting with the master screens.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from inventory_admin.models.common import InputModel, NonNegativeAmount, PositiveAmount, TaxType


class SalesLineItem(InputModel):
    item_id: UUID
    quantity: PositiveAmount
    unit_price: PositiveAmount
    discount: Optional[NonNegativeAmount] = None


class SalesInvoiceCreate(InputModel):
    customer_id: UUID
    store_id: UUID
    invoice_date: Optional[date] = None
    items: List[SalesLineItem] = Field(min_length=1)
    tax_type: TaxType = TaxType.EXCLUSIVE
    discount_amount: Optional[NonNegativeAmount] = None
    remarks: Optional[str] = None


class SalesRetailCreate(SalesInvoiceCreate):
    pass


class SalesWholesaleCreate(SalesInvoiceCreate):
    pass
