# inventory_admin/models/stores.py

from typing import Optional

from pydantic import EmailStr

from inventory_admin.models.common import Code, InputModel, Name, RecordModel, not_null


class StoreCreate(InputModel):
    code: Code
    name: Name
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None


class StoreUpdate(InputModel):
    code: Optional[Code] = None
    name: Optional[Name] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None

    reject_nulls = not_null("code", "name")


class StoreRecord(RecordModel):
    code: str
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
