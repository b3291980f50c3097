from __future__ import annotations
import os
from typing import Any, Dict, Optional, Tuple

import httpx
from .base import LLMProvider

class GeminiProvider(LLMProvider):
    name = "gemini"

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(transport)
        self.model = os.getenv("GEMINI_MODEL", "gemini-1.5-flash").strip()
        self.base_url = os.getenv(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        ).strip()

    def build_request(
        self, *, system: str, user: str, credential: str
    ) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        url = f"{self.base_url}/models/{self.model}:generateContent"
        headers = {
            "x-goog-api-key": credential,
            "Content-Type": "application/json",
        }
        payload = {
            "systemInstruction": {"parts": [{"text": system}]},
            "contents": [{"role": "user", "parts": [{"text": user}]}],
            "generationConfig": {"temperature": 0.2},
        }
        return url, headers, payload

    def extract_text(self, data: Any) -> str:
        return data["candidates"][0]["content"]["parts"][0]["text"]
