"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

from .role import UserRole


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    password: str
    role: UserRole
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None
    last_login: datetime | None = None

    def has_role(self, role: UserRole) -> bool:
        """Return ``True`` when the user holds ``role``."""

        return self.role is role

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(UserRole.ADMIN)

    @property
    def display_name(self) -> str:
        """Name shown to other users, falling back to the email local part."""

        name = (self.name or "").strip()
        return name or self.email.split("@", 1)[0]


__all__ = ["User"]
