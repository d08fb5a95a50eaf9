"""Schemas for activity endpoints."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ActivityStatus = Literal["pending", "in_progress", "completed"]


class ActivityCreate(BaseModel):
    """Payload required to create an activity (5W2H fields)."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    title: str = Field(..., min_length=1, max_length=255, description="O quê?")
    description: str | None = Field(default=None, max_length=5000, description="Por quê?")
    area: str = Field(..., min_length=1, max_length=100)
    priority: int = Field(default=1, ge=0, le=2, description="0 Alta, 1 Média, 2 Baixa")
    status: ActivityStatus = "pending"
    responsible: str | None = Field(default=None, max_length=100, description="Quem?")
    deadline: str | None = Field(default=None, max_length=50, description="Quando?")
    location: str | None = Field(default=None, max_length=200, description="Onde?")
    how: str | None = Field(default=None, max_length=5000, description="Como?")
    cost: str | None = Field(default=None, max_length=50, description="Quanto?")


class ActivityUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    area: str | None = Field(default=None, min_length=1, max_length=100)
    priority: int | None = Field(default=None, ge=0, le=2)
    status: ActivityStatus | None = None
    responsible: str | None = Field(default=None, max_length=100)
    deadline: str | None = Field(default=None, max_length=50)
    location: str | None = Field(default=None, max_length=200)
    how: str | None = Field(default=None, max_length=5000)
    cost: str | None = Field(default=None, max_length=50)


class ActivityRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    description: str | None
    area: str
    priority: int
    status: str
    responsible: str | None
    deadline: str | None
    location: str | None
    how: str | None
    cost: str | None
    created_at: datetime | None
    updated_at: datetime | None
    deleted_at: datetime | None = None


class ActivitySummaryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    by_status: dict[str, int]
    by_priority: dict[int, int]
    by_area: dict[str, int]


class SpreadsheetRow(BaseModel):
    """Activity row read from an uploaded spreadsheet, not yet validated."""

    title: str
    description: str | None = None
    area: str | None = None
    priority: int
    status: str
    responsible: str | None = None
    deadline: str | None = None
    location: str | None = None
    how: str | None = None
    cost: str | None = None


class SpreadsheetUploadResponse(BaseModel):
    activities: list[SpreadsheetRow]
    count: int
    message: str


class ActivityImportRequest(BaseModel):
    activities: list[ActivityCreate] = Field(..., min_length=1, max_length=1000)


class ImportSkippedRow(BaseModel):
    title: str
    area: str
    reason: str


class ActivityImportResponse(BaseModel):
    first_use: bool
    imported: int
    replaced: int
    skipped: list[ImportSkippedRow] = Field(default_factory=list)
    message: str


def activity_fields(payload: BaseModel) -> dict[str, Any]:
    """Return only the fields the client actually sent."""

    return payload.model_dump(exclude_unset=True)


__all__ = [
    "ActivityCreate",
    "ActivityImportRequest",
    "ActivityImportResponse",
    "ActivityRead",
    "ActivityStatus",
    "ActivitySummaryRead",
    "ActivityUpdate",
    "ImportSkippedRow",
    "SpreadsheetRow",
    "SpreadsheetUploadResponse",
    "activity_fields",
]
