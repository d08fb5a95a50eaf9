"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr

from app.domain.entities import UserRole


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: EmailStr
    role: UserRole
    is_active: bool
    created_at: datetime | None
    last_login: datetime | None = None


__all__ = ["UserRead"]
