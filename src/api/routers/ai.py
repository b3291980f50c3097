import asyncio
import logging
import time
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, ValidationError

from analysis.analyzer import AnalysisOutcome, TaskAnalyzer
from analysis.insights import generate_insights
from api.dependencies import get_analyzer, get_provider_config
from api.metrics import (
    ANALYSIS_FALLBACK_TOTAL,
    ANALYSIS_TOTAL,
    REQUEST_LATENCY_SECONDS,
    REQUESTS_TOTAL,
)
from taskmaster.config import ProviderConfig
from taskmaster.models import AnalysisRequest, MIN_TITLE_LENGTH, Priority, TaskSnapshot

router = APIRouter()
logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 10


class AnalyzeTaskIn(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = ""


class BatchAnalyzeIn(BaseModel):
    tasks: List[AnalyzeTaskIn] = Field(default_factory=list)


class PriorityTaskIn(BaseModel):
    id: str
    title: Optional[str] = None
    description: Optional[str] = ""
    priority: Optional[Priority] = None


class SuggestPriorityIn(BaseModel):
    tasks: List[PriorityTaskIn] = Field(default_factory=list)


class InsightsIn(BaseModel):
    tasks: List[TaskSnapshot] = Field(default_factory=list)


def _record(endpoint: str, status: str, start: float) -> None:
    REQUESTS_TOTAL.labels(endpoint=endpoint, status=status).inc()
    REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(time.time() - start)


def _count(outcome: AnalysisOutcome) -> None:
    ANALYSIS_TOTAL.labels(source=outcome.source.value).inc()
    if outcome.fallback_reason is not None:
        ANALYSIS_FALLBACK_TOTAL.labels(reason=outcome.fallback_reason.value).inc()


def _to_request(title: Optional[str], description: Optional[str]) -> Optional[AnalysisRequest]:
    try:
        return AnalysisRequest(title=title, description=description)
    except ValidationError:
        return None


async def _analyze(analyzer: TaskAnalyzer, request: AnalysisRequest) -> AnalysisOutcome:
    outcome = await analyzer.analyze_detailed(request)
    _count(outcome)
    return outcome


@router.post("/analyze-task")
async def analyze_task(
    payload: AnalyzeTaskIn,
    analyzer: TaskAnalyzer = Depends(get_analyzer),
) -> dict:
    """Analyze one task and return priority/time/tips/subtask suggestions."""
    start = time.time()
    request = _to_request(payload.title, payload.description)
    if request is None:
        _record("/ai/analyze-task", "rejected", start)
        raise HTTPException(
            status_code=400,
            detail=f"Task title is required (at least {MIN_TITLE_LENGTH} characters)",
        )

    logger.info(f"Analysis requested for: {request.title[:50]}")
    outcome = await _analyze(analyzer, request)
    _record("/ai/analyze-task", "ok", start)

    return {
        "success": True,
        "message": "Analysis completed",
        "data": {
            "analysis": outcome.analysis.to_public(),
            "source": outcome.source.value,
        },
    }


@router.post("/batch-analyze")
async def batch_analyze(
    payload: BatchAnalyzeIn,
    analyzer: TaskAnalyzer = Depends(get_analyzer),
) -> dict:
    start = time.time()
    if not payload.tasks:
        _record("/ai/batch-analyze", "rejected", start)
        raise HTTPException(status_code=400, detail="A non-empty list of tasks is required")
    if len(payload.tasks) > MAX_BATCH_SIZE:
        _record("/ai/batch-analyze", "rejected", start)
        raise HTTPException(
            status_code=400, detail=f"At most {MAX_BATCH_SIZE} tasks per batch"
        )

    async def one(item: AnalyzeTaskIn) -> dict:
        request = _to_request(item.title, item.description)
        if request is None:
            return {"title": item.title, "error": "Invalid task title"}
        outcome = await _analyze(analyzer, request)
        return {"title": request.title, **outcome.analysis.to_public()}

    analyses = await asyncio.gather(*(one(t) for t in payload.tasks))
    _record("/ai/batch-analyze", "ok", start)
    return {"success": True, "data": {"analyses": list(analyses)}}


@router.post("/suggest-priority")
async def suggest_priority(
    payload: SuggestPriorityIn,
    analyzer: TaskAnalyzer = Depends(get_analyzer),
) -> dict:
    """Suggest priorities for tasks the caller already stores."""
    start = time.time()
    if not payload.tasks:
        _record("/ai/suggest-priority", "rejected", start)
        raise HTTPException(status_code=400, detail="A non-empty list of tasks is required")

    async def one(task: PriorityTaskIn) -> dict:
        request = _to_request(task.title, task.description)
        if request is None:
            return {"taskId": task.id, "title": task.title, "error": "Could not analyze task"}
        outcome = await _analyze(analyzer, request)
        return {
            "taskId": task.id,
            "title": task.title,
            "currentPriority": task.priority.value if task.priority else None,
            "suggestedPriority": outcome.analysis.priority.value,
            "estimatedTime": outcome.analysis.estimated_time_minutes,
        }

    suggestions = await asyncio.gather(*(one(t) for t in payload.tasks))
    _record("/ai/suggest-priority", "ok", start)
    return {"success": True, "data": {"suggestions": list(suggestions)}}


@router.post("/insights")
async def insights(payload: InsightsIn) -> dict:
    start = time.time()
    result = generate_insights(payload.tasks)
    _record("/ai/insights", "ok", start)
    return {"success": True, "data": {"insights": result.to_public()}}


@router.get("/health")
async def ai_health(config: ProviderConfig = Depends(get_provider_config)) -> dict:
    configured = config.is_configured
    return {
        "success": True,
        "data": {
            "provider": config.provider.value,
            "configured": configured,
            "status": "operational" if configured else "fallback mode",
            "message": (
                f"AI service running with {config.provider.value}"
                if configured
                else "No API key configured, using heuristic analysis"
            ),
        },
    }
