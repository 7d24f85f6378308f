# inventory_admin/models/common.py

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, StringConstraints, field_validator, model_validator
from pydantic_core import PydanticCustomError


# ---- Enums ----

class BalanceType(str, Enum):
    PAYABLE = "payable"
    RECEIVABLE = "receivable"
    ADVANCE = "advance"


class CustomerType(str, Enum):
    RETAIL = "retail"
    WHOLESALE = "wholesale"
    DISTRIBUTION = "distribution"


class TaxType(str, Enum):
    EXCLUSIVE = "exclusive"
    INCLUSIVE = "inclusive"
    NONE = "none"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CHEQUE = "cheque"
    BANK_TRANSFER = "bank_transfer"
    CREDIT = "credit"


# ---- Field types ----

Code = Annotated[str, StringConstraints(min_length=1, max_length=50)]
Name = Annotated[str, StringConstraints(min_length=2, max_length=100)]
Label = Annotated[str, StringConstraints(max_length=100)]
Phone = Annotated[str, StringConstraints(pattern=r"^[0-9\s()+-]*$")]

# "Parse as number" fields: form inputs arrive as strings, so these accept
# numeric strings. Everything else below is strict.
Money = Annotated[Decimal, Field(ge=0, max_digits=18, decimal_places=2, allow_inf_nan=False)]
Level = Annotated[Decimal, Field(ge=0, max_digits=18, decimal_places=3, allow_inf_nan=False)]
Days = Annotated[int, Field(gt=0)]

PositiveAmount = Annotated[float, Field(strict=True, gt=0, allow_inf_nan=False)]
NonNegativeAmount = Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False)]


def _reject_null(cls, value):
    if value is None:
        raise PydanticCustomError("null_not_allowed", "Field cannot be null")
    return value


def not_null(*fields: str):
    """Validator for update schemas: the field may be omitted but not cleared."""
    return field_validator(*fields)(_reject_null)


# ---- Base models ----

class InputModel(BaseModel):
    """
    Base for every input schema.

    Strings are trimmed, unknown keys are ignored, and blank strings are
    treated as if the key had not been sent at all, so an optional field
    falls back to its default and a required one is reported as missing.
    """

    @model_validator(mode="before")
    @classmethod
    def _blank_as_absent(cls, data):
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if not (isinstance(value, str) and not value.strip())
            }
        return data

    class Config:
        str_strip_whitespace = True
        extra = "ignore"
        use_enum_values = True


class RecordModel(BaseModel):
    """Columns shared by every stored master record."""

    id: UUID
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
