import asyncio
import json

import httpx
import pytest

from llm.errors import TransportError
from llm.providers.base import bearer_headers, chat_messages
from llm.providers.cohere_provider import CohereProvider
from llm.providers.gemini_provider import GeminiProvider
from llm.providers.openai_provider import OpenAIProvider
from llm.providers.registry import build_provider
from taskmaster.config import ProviderKind


def _transport(seen, status=200, body=None, raw=None):
    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = dict(request.headers)
        seen["json"] = json.loads(request.content)
        if raw is not None:
            return httpx.Response(status, content=raw)
        return httpx.Response(status, json=body)
    return httpx.MockTransport(handler)


def _complete(provider, credential="secret"):
    return asyncio.run(provider.complete(system="sys", user="usr", credential=credential, timeout=5.0))


def test_openai_request_and_text(monkeypatch):
    monkeypatch.setenv("OPENAI_MODEL", "gpt-test")
    seen = {}
    body = {"choices": [{"message": {"content": '{"priority":"high"}'}}]}
    provider = OpenAIProvider(transport=_transport(seen, body=body))

    assert _complete(provider) == '{"priority":"high"}'
    assert seen["url"] == "https://api.openai.com/v1/chat/completions"
    assert seen["headers"]["authorization"] == "Bearer secret"
    assert seen["json"]["model"] == "gpt-test"
    assert seen["json"]["messages"][0] == {"role": "system", "content": "sys"}


def test_cohere_request_and_text():
    seen = {}
    body = {"message": {"role": "assistant", "content": [{"type": "text", "text": "hello"}]}}
    provider = CohereProvider(transport=_transport(seen, body=body))

    assert _complete(provider) == "hello"
    assert seen["url"].endswith("/v2/chat")
    assert seen["headers"]["authorization"] == "Bearer secret"


def test_gemini_request_and_text(monkeypatch):
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
    seen = {}
    body = {"candidates": [{"content": {"parts": [{"text": "hi"}]}}]}
    provider = GeminiProvider(transport=_transport(seen, body=body))

    assert _complete(provider) == "hi"
    assert seen["url"].endswith("/models/gemini-test:generateContent")
    assert seen["headers"]["x-goog-api-key"] == "secret"
    assert "authorization" not in seen["headers"]
    assert seen["json"]["contents"][0]["parts"][0]["text"] == "usr"


@pytest.mark.parametrize("cls", [OpenAIProvider, CohereProvider, GeminiProvider])
def test_http_error_is_transport_error(cls):
    provider = cls(transport=_transport({}, status=401, body={"error": "bad key"}))
    with pytest.raises(TransportError):
        _complete(provider)


@pytest.mark.parametrize("cls", [OpenAIProvider, CohereProvider, GeminiProvider])
def test_unexpected_envelope_is_transport_error(cls):
    provider = cls(transport=_transport({}, body={"unexpected": True}))
    with pytest.raises(TransportError):
        _complete(provider)


def test_non_json_body_is_transport_error():
    provider = OpenAIProvider(transport=_transport({}, raw=b"<html>oops</html>"))
    with pytest.raises(TransportError):
        _complete(provider)


def test_network_failure_is_transport_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    provider = OpenAIProvider(transport=httpx.MockTransport(handler))
    with pytest.raises(TransportError):
        _complete(provider)


def test_timeout_is_transport_error():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    provider = CohereProvider(transport=httpx.MockTransport(handler))
    with pytest.raises(TransportError, match="timed out"):
        _complete(provider)


def test_build_provider():
    assert build_provider(ProviderKind.NONE) is None
    assert isinstance(build_provider(ProviderKind.OPENAI), OpenAIProvider)
    assert isinstance(build_provider(ProviderKind.COHERE), CohereProvider)
    assert isinstance(build_provider(ProviderKind.GEMINI), GeminiProvider)


def test_chat_vendors_share_message_shape():
    seen_openai, seen_cohere = {}, {}
    _complete(OpenAIProvider(transport=_transport(seen_openai, body={"choices": [{"message": {"content": "a"}}]})))
    _complete(CohereProvider(transport=_transport(seen_cohere, body={"message": {"content": [{"text": "b"}]}})))

    expected = chat_messages("sys", "usr")
    assert seen_openai["json"]["messages"] == expected
    assert seen_cohere["json"]["messages"] == expected
    assert bearer_headers("secret")["Authorization"] == "Bearer secret"
