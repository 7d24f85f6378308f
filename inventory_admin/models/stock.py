# inventory_admin/models/stock.py

from datetime import date
from typing import Annotated, List, Optional
from uuid import UUID

from pydantic import AfterValidator, Field
from pydantic_core import PydanticCustomError

from inventory_admin.models.common import InputModel


def _non_zero(value: float) -> float:
    if value == 0:
        raise PydanticCustomError("non_zero", "Adjustment quantity cannot be zero")
    return value


AdjustmentQty = Annotated[float, Field(strict=True, allow_inf_nan=False), AfterValidator(_non_zero)]


class StockAdjustmentItem(InputModel):
    item_id: UUID
    adjustment_qty: AdjustmentQty
    adjustment_reason: Optional[str] = None


class StockAdjustmentCreate(InputModel):
    adjustment_date: date
    store_id: UUID
    items: List[StockAdjustmentItem] = Field(min_length=1)
    description: Optional[str] = None
    reason: Optional[str] = None
