from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from classification.task_classifier import HeuristicClassifier
from llm.errors import ParseError, TransportError
from llm.prompts import build_analysis_prompt
from llm.providers.base import LLMProvider
from llm.providers.registry import build_provider
from llm.response_parser import parse_analysis
from taskmaster.config import ProviderConfig
from taskmaster.models import AnalysisRequest, TaskAnalysis

logger = logging.getLogger(__name__)


class AnalysisState(str, Enum):
    START = "start"
    CALL_PROVIDER = "call_provider"
    PARSE_RESPONSE = "parse_response"
    FALLBACK = "fallback"
    DONE = "done"


class FallbackReason(str, Enum):
    NOT_CONFIGURED = "not_configured"
    TRANSPORT_ERROR = "transport_error"
    PARSE_ERROR = "parse_error"


class AnalysisSource(str, Enum):
    PROVIDER = "provider"
    HEURISTIC = "heuristic"


@dataclass(frozen=True)
class AnalysisOutcome:
    analysis: TaskAnalysis
    source: AnalysisSource
    fallback_reason: Optional[FallbackReason] = None
    states: List[AnalysisState] = field(default_factory=list)


class TaskAnalyzer:
    """Turns an AnalysisRequest into exactly one TaskAnalysis.

    One provider attempt per call, bounded by the configured timeout, and
    the heuristic classifier for every way that attempt can go wrong:

        START -> CALL_PROVIDER -> PARSE_RESPONSE -> DONE
          |            |                |
          +------------+----------------+--> FALLBACK -> DONE
    """

    def __init__(
        self,
        config: ProviderConfig,
        classifier: Optional[HeuristicClassifier] = None,
        provider: Optional[LLMProvider] = None,
    ):
        self.config = config
        self.classifier = classifier or HeuristicClassifier()
        self.provider = provider if provider is not None else build_provider(config.provider)

    async def analyze(self, request: AnalysisRequest) -> TaskAnalysis:
        outcome = await self.analyze_detailed(request)
        return outcome.analysis

    async def analyze_detailed(self, request: AnalysisRequest) -> AnalysisOutcome:
        states = [AnalysisState.START]

        if self.provider is None or not self.config.is_configured:
            return self._fallback(request, FallbackReason.NOT_CONFIGURED, states)

        states.append(AnalysisState.CALL_PROVIDER)
        try:
            raw = await self._call_provider(request)
        except TransportError as e:
            logger.warning(f"Provider {self.provider.name} unavailable: {e}")
            return self._fallback(request, FallbackReason.TRANSPORT_ERROR, states)

        states.append(AnalysisState.PARSE_RESPONSE)
        try:
            analysis = parse_analysis(raw)
        except ParseError as e:
            logger.warning(f"Provider {self.provider.name} answered without usable JSON: {e}")
            return self._fallback(request, FallbackReason.PARSE_ERROR, states)

        states.append(AnalysisState.DONE)
        return AnalysisOutcome(analysis=analysis, source=AnalysisSource.PROVIDER, states=states)

    async def _call_provider(self, request: AnalysisRequest) -> str:
        system, user = build_analysis_prompt(request)
        timeout = self.config.timeout_s
        try:
            return await asyncio.wait_for(
                self.provider.complete(
                    system=system,
                    user=user,
                    credential=self.config.credential or "",
                    timeout=timeout,
                ),
                timeout=timeout,
            )
        except TransportError:
            raise
        except asyncio.TimeoutError as e:
            raise TransportError(f"no answer within {timeout}s") from e
        except Exception as e:
            # adapter bug or unexpected library error; still must not reach the caller
            logger.exception(f"Provider {self.provider.name} failed unexpectedly")
            raise TransportError(str(e)) from e

    def _fallback(
        self,
        request: AnalysisRequest,
        reason: FallbackReason,
        states: List[AnalysisState],
    ) -> AnalysisOutcome:
        states.extend([AnalysisState.FALLBACK, AnalysisState.DONE])
        analysis = self.classifier.classify(request.title, request.description)
        logger.info(f"Heuristic analysis used ({reason.value}) for: {request.title[:50]}")
        return AnalysisOutcome(
            analysis=analysis,
            source=AnalysisSource.HEURISTIC,
            fallback_reason=reason,
            states=states,
        )


async def analyze(
    request: AnalysisRequest,
    config: ProviderConfig,
    classifier: Optional[HeuristicClassifier] = None,
) -> TaskAnalysis:
    return await TaskAnalyzer(config, classifier=classifier).analyze(request)


def analyze_sync(
    request: AnalysisRequest,
    config: ProviderConfig,
    classifier: Optional[HeuristicClassifier] = None,
) -> TaskAnalysis:
    """Blocking entry point for callers without a running event loop."""
    return asyncio.run(analyze(request, config, classifier=classifier))
