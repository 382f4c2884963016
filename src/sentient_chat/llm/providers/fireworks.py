from typing import Any

import openai
from openai import AsyncOpenAI

from ..base import LLMProvider
from ..errors import LLMConnectionError, LLMStatusError
from ..models import ChatMessage, LLMResponse

DEFAULT_BASE_URL = "https://api.fireworks.ai/inference/v1"
DEFAULT_MODEL = "accounts/sentientfoundation-serverless/models/dobby-mini-unhinged-plus-llama-3-1-8b"


class FireworksProvider(LLMProvider):
    """Fireworks AI provider implementation using the OpenAI-compatible API.

    Hidden design decisions:
    - Fireworks API client initialization (via OpenAI SDK)
    - Message format conversion
    - Bearer-token authentication
    - Mapping SDK exceptions to `LLMStatusError` / `LLMConnectionError`

    A request is attempted exactly once: the SDK's automatic retries are
    turned off unless the caller passes `max_retries` explicitly.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        **client_kwargs: Any
    ):
        """Initialize Fireworks provider.

        Args:
            api_key: Fireworks API key, sent as a bearer token
            model: Default model to use
            base_url: Fireworks inference base URL
            **client_kwargs: Additional kwargs for AsyncOpenAI client
                (e.g. `http_client` to inject a custom transport)
        """
        client_kwargs.setdefault("max_retries", 0)
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using Fireworks.

        Args:
            messages: Conversation history, system message first
            model: Model to use (overrides default)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Additional request fields (top_p, frequency_penalty, ...)

        Returns:
            LLMResponse whose content is None when the service sent no choices
            or an empty message

        Raises:
            LLMStatusError: Non-2xx response
            LLMConnectionError: Network failure or timeout
        """
        fireworks_messages = [
            {"role": msg.role, "content": msg.content}
            for msg in messages
        ]

        request_params: dict[str, Any] = {
            "model": model or self._model,
            "messages": fireworks_messages,
            "temperature": temperature,
            **kwargs
        }
        if max_tokens is not None:
            request_params["max_tokens"] = max_tokens

        try:
            completion = await self._client.chat.completions.create(**request_params)
        except openai.APIStatusError as e:
            raise LLMStatusError(e.status_code, e.message) from e
        except openai.APIConnectionError as e:
            raise LLMConnectionError(str(e)) from e

        # Usage is informational; counts the service left out are dropped
        usage: dict[str, int] = {}
        if getattr(completion, "usage", None):
            for key in ("prompt_tokens", "completion_tokens", "total_tokens"):
                value = getattr(completion.usage, key, None)
                if isinstance(value, int):
                    usage[key] = value

        # The SDK builds responses without validation, so a body with
        # `choices: []` or no `choices` key still gets here.
        choices = getattr(completion, "choices", None) or []
        content = None
        if choices and getattr(choices[0], "message", None) is not None:
            content = choices[0].message.content

        return LLMResponse(
            content=content,
            model=getattr(completion, "model", None) or request_params["model"],
            usage=usage or None
        )

    async def close(self) -> None:
        """Close the Fireworks client.

        Note: Uses the OpenAI SDK's async context manager for proper cleanup.
        See: https://github.com/openai/openai-python#async-usage
        """
        await self._client.close()
