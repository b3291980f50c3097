from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from taskmaster.models import TaskSnapshot, TaskStatus

# No time tracking yet, so this is a fixed figure.
AVERAGE_TASK_MINUTES = 45

EXCELLENT_RATE = 80
ON_TRACK_RATE = 50


@dataclass(frozen=True)
class ProductivityInsights:
    recommendation: str
    completion_rate: int
    average_task_time: int
    total_tasks: int
    completed_tasks: int

    def to_public(self) -> dict:
        return {
            "recommendation": self.recommendation,
            "completionRate": self.completion_rate,
            "averageTaskTime": self.average_task_time,
            "totalTasks": self.total_tasks,
            "completedTasks": self.completed_tasks,
        }


def generate_insights(tasks: Iterable[TaskSnapshot]) -> ProductivityInsights:
    tasks = list(tasks)
    total = len(tasks)
    completed = sum(1 for t in tasks if t.status is TaskStatus.COMPLETED)
    rate = round(completed * 100 / total) if total else 0

    if total == 0:
        recommendation = "Start by creating your first task!"
    elif rate >= EXCELLENT_RATE:
        recommendation = "Excellent work! Your productivity is impressive."
    elif rate >= ON_TRACK_RATE:
        recommendation = "You're on the right track. Focus on finishing your pending tasks."
    else:
        recommendation = "Try setting clear priorities and realistic time estimates."

    return ProductivityInsights(
        recommendation=recommendation,
        completion_rate=rate,
        average_task_time=AVERAGE_TASK_MINUTES,
        total_tasks=total,
        completed_tasks=completed,
    )
