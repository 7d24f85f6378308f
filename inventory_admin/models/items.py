# inventory_admin/models/items.py

from decimal import Decimal
from typing import Annotated, Optional
from uuid import UUID

from pydantic import Field, StrictBool, StringConstraints

from inventory_admin.config import settings
from inventory_admin.models.common import Code, InputModel, Level, Name, RecordModel, not_null

Barcode = Annotated[str, StringConstraints(max_length=100)]
Unit = Annotated[str, StringConstraints(min_length=1, max_length=20)]


class ItemCreate(InputModel):
    code: Code
    barcode: Optional[Barcode] = None
    name: Name
    description: Optional[str] = None
    category_id: UUID
    unit: Unit
    reorder_level: Level = Decimal("0")
    allow_negative_stock: StrictBool = Field(
        default_factory=lambda: settings.ALLOW_NEGATIVE_STOCK
    )


class ItemUpdate(InputModel):
    code: Optional[Code] = None
    barcode: Optional[Barcode] = None
    name: Optional[Name] = None
    description: Optional[str] = None
    category_id: Optional[UUID] = None
    unit: Optional[Unit] = None
    reorder_level: Optional[Level] = None
    allow_negative_stock: Optional[StrictBool] = None

    reject_nulls = not_null(
        "code", "name", "category_id", "unit", "reorder_level", "allow_negative_stock"
    )


class ItemRecord(RecordModel):
    code: str
    barcode: Optional[str] = None
    name: str
    description: Optional[str] = None
    category_id: UUID
    unit: str
    reorder_level: Decimal
    allow_negative_stock: bool
