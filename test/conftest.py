import asyncio

import pytest

from llm.errors import TransportError


class FakeProvider:
    name = "fake"

    def __init__(self, response_text: str = "", error: Exception = None, delay_s: float = 0.0):
        self._response_text = response_text
        self._error = error
        self._delay_s = delay_s
        self.calls = []

    async def complete(self, *, system: str, user: str, credential: str, timeout: float) -> str:
        self.calls.append({"system": system, "user": user, "credential": credential, "timeout": timeout})
        if self._delay_s:
            await asyncio.sleep(self._delay_s)
        if self._error is not None:
            raise self._error
        return self._response_text


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str = "", **kwargs):
        return FakeProvider(response_text, **kwargs)
    return _make


@pytest.fixture
def transport_error():
    return TransportError("connection refused")
