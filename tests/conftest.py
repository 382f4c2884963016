"""Pytest configuration and shared fixtures."""
import json
import os
from typing import Any

import httpx
import pytest

from sentient_chat.conversation import CompletionClient, CompletionSettings
from sentient_chat.llm import ChatMessage, LLMProvider, LLMResponse

SYSTEM_PROMPT = (
    "You are an expert AI DeFi Assistant. Provide helpful, accurate information about "
    "decentralized finance, staking, yield farming, liquidity provision, and crypto strategies."
)


class FakeProvider(LLMProvider):
    """In-memory provider that records requests.

    Returns `content` for every call, or raises `error` when set.
    """

    def __init__(self, content: str | None = "Yield farming is...", error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append({
            "messages": list(messages),
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            **kwargs,
        })
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, model=model or self.model)

    async def close(self) -> None:
        self.closed = True


def completion_body(content: str | None = "Yield farming is...", choices: list | None = None) -> dict:
    """Build an OpenAI-style chat completion response body."""
    if choices is None:
        choices = [{
            "index": 0,
            "message": {"role": "assistant", "content": content},
            "finish_reason": "stop",
        }]
    return {
        "id": "cmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "accounts/sentientfoundation-serverless/models/dobby-mini-unhinged-plus-llama-3-1-8b",
        "choices": choices,
        "usage": {"prompt_tokens": 12, "completion_tokens": 5, "total_tokens": 17},
    }


class RecordingTransport:
    """httpx.MockTransport handler that records requests and replays a response."""

    def __init__(self, status_code: int = 200, body: dict | None = None, error: Exception | None = None):
        self.status_code = status_code
        self.body = body if body is not None else completion_body()
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "fireworks": os.getenv("FIREWORKS_API_KEY"),
    }


@pytest.fixture
def fake_provider():
    """Provider that answers 'Yield farming is...'."""
    return FakeProvider()


@pytest.fixture
def completion_settings():
    """Default completion settings."""
    return CompletionSettings()


@pytest.fixture
def client(fake_provider, completion_settings):
    """Completion client over the fake provider with the packaged system prompt."""
    return CompletionClient(fake_provider, completion_settings)
