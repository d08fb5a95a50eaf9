"""Domain entity representing a comment attached to an activity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Comment:
    """Comment text plus a snapshot of its author taken at posting time."""

    id: int | None
    activity_id: int
    content: str
    user_id: int
    user_name: str
    user_email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["Comment"]
