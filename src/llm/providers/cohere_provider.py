from __future__ import annotations
import os
from typing import Any, Dict, Optional, Tuple

import httpx
from .base import LLMProvider, bearer_headers, chat_messages

class CohereProvider(LLMProvider):
    name = "cohere"

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(transport)
        self.model = os.getenv("COHERE_MODEL", "command-r").strip()
        self.base_url = os.getenv("COHERE_BASE_URL", "https://api.cohere.com/v2").strip()

    def build_request(
        self, *, system: str, user: str, credential: str
    ) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        url = f"{self.base_url}/chat"
        headers = bearer_headers(credential)
        payload = {
            "model": self.model,
            "messages": chat_messages(system, user),
            "temperature": 0.2,
        }
        return url, headers, payload

    def extract_text(self, data: Any) -> str:
        # v2 chat returns a list of content blocks
        return data["message"]["content"][0]["text"]
