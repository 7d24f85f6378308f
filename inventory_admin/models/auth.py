# inventory_admin/models/auth.py

from typing import Annotated

from pydantic import EmailStr, StringConstraints

from inventory_admin.models.common import InputModel


class LoginIn(InputModel):
    """Credentials handed to the identity provider; validated before the call."""

    email: EmailStr
    password: Annotated[str, StringConstraints(min_length=6)]
