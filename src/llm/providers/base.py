from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

import httpx

from llm.errors import TransportError

logger = logging.getLogger(__name__)


def chat_messages(system: str, user: str) -> List[Dict[str, str]]:
    """Role-tagged message list shared by the chat-style vendors."""
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]


def bearer_headers(credential: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {credential}",
        "Content-Type": "application/json",
    }


class LLMProvider(ABC):
    """One external completion service behind a single contract.

    Subclasses only describe the vendor request/response shape; the POST,
    timeout and error mapping live here so every adapter fails the same way.
    """

    name: str = "provider"

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport

    @abstractmethod
    def build_request(
        self, *, system: str, user: str, credential: str
    ) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        """Return (url, headers, json payload) for one completion call."""
        raise NotImplementedError

    @abstractmethod
    def extract_text(self, data: Any) -> str:
        """Pull the completion text out of the vendor response body."""
        raise NotImplementedError

    async def complete(self, *, system: str, user: str, credential: str, timeout: float) -> str:
        """
        Must return the model output as TEXT (JSON is parsed/validated by the response parser).
        Raises TransportError for anything that prevents getting that text.
        """
        url, headers, payload = self.build_request(system=system, user=user, credential=credential)

        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                r = await client.post(url, headers=headers, json=payload)
                r.raise_for_status()
                data = r.json()
        except httpx.TimeoutException as e:
            raise TransportError(f"{self.name} timed out after {timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise TransportError(f"{self.name} returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"{self.name} request failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"{self.name} returned a non-JSON body") from e

        logger.debug(f"{self.name} responded with HTTP {r.status_code}")

        try:
            text = self.extract_text(data)
        except (KeyError, IndexError, TypeError) as e:
            raise TransportError(f"{self.name} response envelope has no completion text") from e

        if not isinstance(text, str):
            raise TransportError(f"{self.name} completion text is not a string")
        return text
