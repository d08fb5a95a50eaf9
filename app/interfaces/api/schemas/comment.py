"""Schemas for activity comment endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentWrite(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(..., min_length=1, max_length=5000)


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    activity_id: int
    content: str
    user_id: int
    user_name: str
    user_email: str
    created_at: datetime | None
    updated_at: datetime | None


__all__ = ["CommentRead", "CommentWrite"]
