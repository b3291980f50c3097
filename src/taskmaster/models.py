from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_ESTIMATED_MINUTES = 5
MAX_ESTIMATED_MINUTES = 480
DEFAULT_ESTIMATED_MINUTES = 60
MAX_TIPS = 3
MAX_SUBTASKS = 5
MIN_TITLE_LENGTH = 3


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskAnalysis(BaseModel):
    """Normalized suggestion for a single task.

    Produced either by a provider (after parsing) or by the heuristic
    classifier. Instances are frozen and every field is always within its
    domain, so downstream code never has to re-check them.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    priority: Priority = Priority.MEDIUM
    estimated_time_minutes: int = Field(
        DEFAULT_ESTIMATED_MINUTES,
        ge=MIN_ESTIMATED_MINUTES,
        le=MAX_ESTIMATED_MINUTES,
        alias="estimatedTimeMinutes",
    )
    tips: Tuple[str, ...] = Field(default_factory=tuple, max_length=MAX_TIPS)
    subtasks: Tuple[str, ...] = Field(default_factory=tuple, max_length=MAX_SUBTASKS)

    def to_public(self) -> dict:
        """JSON-friendly dict with camelCase keys (API responses)."""
        return self.model_dump(mode="json", by_alias=True)


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str = ""

    @field_validator("title")
    @classmethod
    def title_has_content(cls, v: str) -> str:
        v2 = v.strip()
        if len(v2) < MIN_TITLE_LENGTH:
            raise ValueError(f"title must have at least {MIN_TITLE_LENGTH} characters")
        return v2

    @field_validator("description", mode="before")
    @classmethod
    def description_or_empty(cls, v: Optional[str]) -> str:
        if v is None:
            return ""
        return str(v).strip()


class TaskSnapshot(BaseModel):
    """Minimal view of a stored task, as handed in by the caller."""

    id: Optional[str] = None
    title: str = ""
    description: str = ""
    priority: Optional[Priority] = None
    status: TaskStatus = TaskStatus.PENDING

    @field_validator("description", mode="before")
    @classmethod
    def description_or_empty(cls, v: Optional[str]) -> str:
        return "" if v is None else v
