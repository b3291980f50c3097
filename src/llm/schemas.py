from __future__ import annotations

import math
from typing import Any, List

from pydantic import BaseModel, Field, field_validator, model_validator

from taskmaster.models import (
    DEFAULT_ESTIMATED_MINUTES,
    MAX_ESTIMATED_MINUTES,
    MAX_SUBTASKS,
    MAX_TIPS,
    MIN_ESTIMATED_MINUTES,
    Priority,
    TaskAnalysis,
)

# Values stored by older versions of the task app.
PRIORITY_ALIASES = {
    "baja": Priority.LOW,
    "media": Priority.MEDIUM,
    "alta": Priority.HIGH,
    "urgente": Priority.URGENT,
}

TIME_KEYS = ("estimatedTimeMinutes", "estimatedTime", "estimated_time_minutes")


def coerce_priority(value: Any) -> Priority:
    if not isinstance(value, str):
        return Priority.MEDIUM
    key = value.strip().lower()
    if key in PRIORITY_ALIASES:
        return PRIORITY_ALIASES[key]
    try:
        return Priority(key)
    except ValueError:
        return Priority.MEDIUM


def coerce_minutes(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return DEFAULT_ESTIMATED_MINUTES
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return DEFAULT_ESTIMATED_MINUTES
    if not isinstance(value, (int, float)) or (isinstance(value, float) and not math.isfinite(value)):
        return DEFAULT_ESTIMATED_MINUTES
    return max(MIN_ESTIMATED_MINUTES, min(MAX_ESTIMATED_MINUTES, int(round(value))))


def coerce_text_list(value: Any, limit: int) -> List[str]:
    if not isinstance(value, list):
        return []
    out: List[str] = []
    for item in value:
        if isinstance(item, dict):
            item = item.get("title")
        if not isinstance(item, str):
            continue
        item = item.strip()
        if item:
            out.append(item)
        if len(out) == limit:
            break
    return out


class AnalysisPayload(BaseModel):
    """Provider output after decoding. Never trusts field types or presence."""

    priority: Priority = Priority.MEDIUM
    estimated_time_minutes: int = DEFAULT_ESTIMATED_MINUTES
    tips: List[str] = Field(default_factory=list)
    subtasks: List[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def pick_time_key(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in TIME_KEYS:
            if key in data:
                data["estimated_time_minutes"] = data[key]
                break
        return data

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, v: Any) -> Priority:
        return coerce_priority(v)

    @field_validator("estimated_time_minutes", mode="before")
    @classmethod
    def _minutes(cls, v: Any) -> int:
        return coerce_minutes(v)

    @field_validator("tips", mode="before")
    @classmethod
    def _tips(cls, v: Any) -> List[str]:
        return coerce_text_list(v, MAX_TIPS)

    @field_validator("subtasks", mode="before")
    @classmethod
    def _subtasks(cls, v: Any) -> List[str]:
        return coerce_text_list(v, MAX_SUBTASKS)

    def to_analysis(self) -> TaskAnalysis:
        return TaskAnalysis(
            priority=self.priority,
            estimated_time_minutes=self.estimated_time_minutes,
            tips=tuple(self.tips),
            subtasks=tuple(self.subtasks),
        )
