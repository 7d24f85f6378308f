# inventory_admin/models/employees.py

from typing import Annotated, Optional

from pydantic import EmailStr, StringConstraints

from inventory_admin.models.common import InputModel, Name, RecordModel, not_null

Role = Annotated[str, StringConstraints(min_length=1, max_length=50)]


class EmployeeCreate(InputModel):
    name: Name
    email: EmailStr
    phone: Optional[str] = None
    role: Role


class EmployeeUpdate(InputModel):
    name: Optional[Name] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    role: Optional[Role] = None

    reject_nulls = not_null("name", "email", "role")


class EmployeeRecord(RecordModel):
    name: str
    email: str
    phone: Optional[str] = None
    role: str
