from __future__ import annotations
import os
from typing import Any, Dict, Optional, Tuple

import httpx
from .base import LLMProvider, bearer_headers, chat_messages

class OpenAIProvider(LLMProvider):
    name = "openai"

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(transport)
        self.model = os.getenv("OPENAI_MODEL", "gpt-4o-mini").strip()
        self.base_url = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").strip()

    def build_request(
        self, *, system: str, user: str, credential: str
    ) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        url = f"{self.base_url}/chat/completions"
        headers = bearer_headers(credential)
        payload = {
            "model": self.model,
            "messages": chat_messages(system, user),
            "temperature": 0.2,
        }
        return url, headers, payload

    def extract_text(self, data: Any) -> str:
        return data["choices"][0]["message"]["content"]
