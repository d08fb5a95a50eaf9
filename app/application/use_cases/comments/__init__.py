"""Use cases for activity comments."""

from .create_comment import create_comment
from .delete_comment import delete_comment
from .list_comments import list_comments
from .ownership import can_mutate, ensure_can_mutate
from .update_comment import update_comment

__all__ = [
    "can_mutate",
    "create_comment",
    "delete_comment",
    "ensure_can_mutate",
    "list_comments",
    "update_comment",
]
