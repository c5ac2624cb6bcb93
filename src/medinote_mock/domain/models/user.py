from __future__ import annotations

from pydantic import BaseModel, EmailStr


class User(BaseModel):
    """A clinician account that owns patients, templates and sessions."""

    id: str
    email: EmailStr
    name: str
