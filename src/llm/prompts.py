from __future__ import annotations

from typing import Tuple

from taskmaster.models import (
    AnalysisRequest,
    MAX_ESTIMATED_MINUTES,
    MAX_SUBTASKS,
    MAX_TIPS,
    MIN_ESTIMATED_MINUTES,
)

SYSTEM_PROMPT = (
    "You are a productivity assistant that helps people plan personal to-do items. "
    "Answer with a single JSON object and nothing else."
)

ANALYSIS_INSTRUCTIONS = f"""Analyze this task and suggest how to handle it.

Return JSON with exactly these fields:
- "priority": one of "low", "medium", "high", "urgent"
- "estimatedTimeMinutes": integer between {MIN_ESTIMATED_MINUTES} and {MAX_ESTIMATED_MINUTES}
- "tips": list of at most {MAX_TIPS} short practical tips
- "subtasks": list of at most {MAX_SUBTASKS} short subtask titles
"""


def build_analysis_prompt(request: AnalysisRequest) -> Tuple[str, str]:
    """Return the (system, user) message pair for a task analysis."""
    user = ANALYSIS_INSTRUCTIONS + f"\nTitle: {request.title}\n"
    if request.description:
        user += f"Description: {request.description}\n"
    return SYSTEM_PROMPT, user
