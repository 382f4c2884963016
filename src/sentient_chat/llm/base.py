from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, LLMResponse


class LLMProvider(ABC):
    """Transport for one chat-completion round trip.

    `CompletionClient` only talks to this interface, so the inference
    service (Fireworks today, a fake in tests) can be swapped freely. A
    provider sends exactly what it is given: the caller has already put the
    system instruction first and chosen the decoding parameters.

    Failures surface as `LLMStatusError` (the service answered with a
    non-2xx status) or `LLMConnectionError` (no answer at all). A 2xx
    answer without a usable choice is not an error; it comes back as an
    `LLMResponse` whose `content` is None.

    Providers own an HTTP client and close it on `close()` or when used
    as an async context manager:
        async with provider:
            response = await provider.chat_completion(messages)
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Model identifier used when a call does not name one."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Send the messages and return the first choice.

        Args:
            messages: Outbound `messages` array, system instruction first
            model: Model identifier (None uses `self.model`)
            temperature: Sampling temperature
            max_tokens: Output length cap, omitted from the request if None
            **kwargs: Extra request fields such as top_p or the penalties

        Returns:
            LLMResponse with the first choice's content and token usage

        Raises:
            LLMStatusError: Non-2xx response
            LLMConnectionError: Request could not be delivered
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying HTTP client."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Close the provider on context exit.

        A "Event loop is closed" RuntimeError from the HTTP client is
        ignored; it happens when the TUI's loop shuts down first.
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
