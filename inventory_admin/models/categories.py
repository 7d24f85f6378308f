# inventory_admin/models/categories.py

from typing import Optional

from inventory_admin.models.common import InputModel, Name, RecordModel, not_null


class CategoryCreate(InputModel):
    name: Name
    description: Optional[str] = None


class CategoryUpdate(InputModel):
    name: Optional[Name] = None
    description: Optional[str] = None

    reject_nulls = not_null("name")


class CategoryRecord(RecordModel):
    name: str
    description: Optional[str] = None
