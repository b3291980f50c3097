from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0
DEFAULT_MAX_SUBTASKS = 2


class ProviderKind(str, Enum):
    NONE = "none"
    OPENAI = "openai"
    COHERE = "cohere"
    GEMINI = "gemini"


# Vendor specific credential variables, checked after AI_API_KEY.
CREDENTIAL_ENV = {
    ProviderKind.OPENAI: "OPENAI_API_KEY",
    ProviderKind.COHERE: "COHERE_API_KEY",
    ProviderKind.GEMINI: "GEMINI_API_KEY",
}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring malformed {name}={raw!r}")
        return default
    return value if value > 0 else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring malformed {name}={raw!r}")
        return default


def parse_provider_kind(raw: Optional[str]) -> ProviderKind:
    value = (raw or "").strip().lower()
    if not value or value == "fallback":
        return ProviderKind.NONE
    try:
        return ProviderKind(value)
    except ValueError:
        logger.warning(f"Unknown AI provider {value!r}, using heuristic analysis")
        return ProviderKind.NONE


@dataclass(frozen=True)
class ProviderConfig:
    """Which completion service to call, with what credential and timeout.

    Loaded once at startup and shared read-only between requests.
    """

    provider: ProviderKind = ProviderKind.NONE
    credential: Optional[str] = None
    timeout_s: float = DEFAULT_TIMEOUT_S

    @property
    def is_configured(self) -> bool:
        return self.provider is not ProviderKind.NONE and bool(self.credential)

    @classmethod
    def from_env(cls) -> "ProviderConfig":
        provider = parse_provider_kind(os.getenv("AI_PROVIDER"))

        credential = os.getenv("AI_API_KEY", "").strip()
        if not credential and provider in CREDENTIAL_ENV:
            credential = os.getenv(CREDENTIAL_ENV[provider], "").strip()

        return cls(
            provider=provider,
            credential=credential or None,
            timeout_s=_env_float("AI_TIMEOUT_S", DEFAULT_TIMEOUT_S),
        )

    def __repr__(self) -> str:
        # keep the credential out of logs
        return (
            f"ProviderConfig(provider={self.provider.value!r}, "
            f"credential={'***' if self.credential else None}, timeout_s={self.timeout_s})"
        )


@dataclass(frozen=True)
class HeuristicSettings:
    max_subtasks: int = DEFAULT_MAX_SUBTASKS
    scale_by_description: bool = False

    @classmethod
    def from_env(cls) -> "HeuristicSettings":
        return cls(
            max_subtasks=_env_int("AI_MAX_SUBTASKS", DEFAULT_MAX_SUBTASKS),
            scale_by_description=_env_bool("AI_SCALE_BY_DESCRIPTION", False),
        )
