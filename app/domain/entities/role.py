"""Roles a user can hold."""

from enum import Enum


class UserRole(str, Enum):
    """Closed set of roles; administrators may act on any user's data."""

    USER = "user"
    ADMIN = "admin"


__all__ = ["UserRole"]
