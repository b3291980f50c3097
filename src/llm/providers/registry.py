from __future__ import annotations

from typing import Dict, Optional, Type

import httpx

from taskmaster.config import ProviderKind
from .base import LLMProvider
from .cohere_provider import CohereProvider
from .gemini_provider import GeminiProvider
from .openai_provider import OpenAIProvider

PROVIDERS: Dict[ProviderKind, Type[LLMProvider]] = {
    ProviderKind.OPENAI: OpenAIProvider,
    ProviderKind.COHERE: CohereProvider,
    ProviderKind.GEMINI: GeminiProvider,
}


def build_provider(
    kind: ProviderKind, transport: Optional[httpx.AsyncBaseTransport] = None
) -> Optional[LLMProvider]:
    """Adapter for the configured provider, or None for heuristic-only mode."""
    if kind is ProviderKind.NONE:
        return None
    return PROVIDERS[kind](transport=transport)
