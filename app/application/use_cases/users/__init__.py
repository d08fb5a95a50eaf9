"""Use cases for managing users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .record_login import record_login
from .register_user import register_user

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "record_login",
    "register_user",
]
