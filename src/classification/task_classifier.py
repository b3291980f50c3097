from __future__ import annotations

from typing import Optional, Tuple

from taskmaster.config import HeuristicSettings
from taskmaster.models import (
    MAX_ESTIMATED_MINUTES,
    MIN_ESTIMATED_MINUTES,
    MIN_TITLE_LENGTH,
    Priority,
    TaskAnalysis,
)

# Checked in this order; the first matching set wins.
URGENT_KEYWORDS = ("urgent", "urgente", "emergency", "asap", "!")
HIGH_KEYWORDS = ("important", "importante", "critical")
LOW_KEYWORDS = ("low", "baja", "optional")

# (upper bound on word count, minutes)
WORD_COUNT_MINUTES = ((10, 15), (25, 30), (50, 60))
LONG_TEXT_MINUTES = 90

LONG_DESCRIPTION_CHARS = 200
SHORT_DESCRIPTION_CHARS = 30
LONG_SCALE, LONG_CAP = 1.5, 240
SHORT_SCALE, SHORT_FLOOR = 0.7, 15

MEETING_KEYWORDS = ("meeting", "reunión", "reunion")
WRITING_KEYWORDS = ("report", "reporte", "document")

MEETING_TIPS = (
    "Prepare an agenda before the meeting",
    "Take notes during the discussion",
)
WRITING_TIPS = (
    "Split the document into sections",
    "Proofread before finalizing",
)
GENERIC_TIPS = (
    "Break the task into smaller steps",
    "Set a time limit to finish it",
)
MAX_HEURISTIC_TIPS = 2

GENERIC_SUBTASKS = (
    "Research relevant information",
    "Prepare the necessary materials",
    "Execute the main task",
    "Review and verify the results",
)


class HeuristicClassifier:
    """Keyword based task analysis used when no provider answers.

    Pure and deterministic: the same (title, description) always gives the
    same TaskAnalysis and nothing here touches the network.
    """

    def __init__(self, max_subtasks: int = 2, scale_by_description: bool = False):
        self.max_subtasks = max(0, min(len(GENERIC_SUBTASKS), max_subtasks))
        self.scale_by_description = scale_by_description

    @classmethod
    def from_settings(cls, settings: HeuristicSettings) -> "HeuristicClassifier":
        return cls(
            max_subtasks=settings.max_subtasks,
            scale_by_description=settings.scale_by_description,
        )

    def classify(self, title: str, description: Optional[str] = "") -> TaskAnalysis:
        if len((title or "").strip()) < MIN_TITLE_LENGTH:
            # not a usable task; low-information default
            return TaskAnalysis()

        description = description or ""
        text = f"{title or ''} {description}".lower()

        minutes = self.base_minutes(text)
        if self.scale_by_description:
            minutes = self.scale_minutes(minutes, description)

        return TaskAnalysis(
            priority=self.priority(text),
            estimated_time_minutes=max(MIN_ESTIMATED_MINUTES, min(MAX_ESTIMATED_MINUTES, minutes)),
            tips=self.tips(text),
            subtasks=GENERIC_SUBTASKS[: self.max_subtasks],
        )

    @staticmethod
    def priority(text: str) -> Priority:
        if any(k in text for k in URGENT_KEYWORDS):
            return Priority.URGENT
        if any(k in text for k in HIGH_KEYWORDS):
            return Priority.HIGH
        if any(k in text for k in LOW_KEYWORDS):
            return Priority.LOW
        return Priority.MEDIUM

    @staticmethod
    def base_minutes(text: str) -> int:
        words = len(text.split())
        for limit, minutes in WORD_COUNT_MINUTES:
            if words < limit:
                return minutes
        return LONG_TEXT_MINUTES

    @staticmethod
    def scale_minutes(minutes: int, description: str) -> int:
        length = len(description.strip())
        if length > LONG_DESCRIPTION_CHARS:
            return min(int(round(minutes * LONG_SCALE)), LONG_CAP)
        if length < SHORT_DESCRIPTION_CHARS:
            return max(int(round(minutes * SHORT_SCALE)), SHORT_FLOOR)
        return minutes

    @staticmethod
    def tips(text: str) -> Tuple[str, ...]:
        if any(k in text for k in MEETING_KEYWORDS):
            tips = MEETING_TIPS
        elif any(k in text for k in WRITING_KEYWORDS):
            tips = WRITING_TIPS
        else:
            tips = GENERIC_TIPS
        return tips[:MAX_HEURISTIC_TIPS]
