"""Completion client: conversation snapshot in, `Reply` out.

Hides request construction (system instruction, history mapping, fixed
decoding parameters) and the translation of provider failures into
`Reply` values. Nothing raised by the provider escapes `complete`.
"""

import time
from collections.abc import Sequence
from typing import Any

from ..llm import ChatMessage, FireworksProvider, LLMConnectionError, LLMProvider, LLMStatusError
from ..prompts import get_system_prompt
from .config import EMPTY_REPLY_FALLBACK, CompletionSettings
from .models import FailureReason, Message, Reply


def build_request_messages(history: Sequence[Message], system_prompt: str) -> list[ChatMessage]:
    """Map a transcript to the outbound `messages` array.

    The system instruction comes first, followed by every history entry
    in order. No truncation is applied.
    """
    messages = [ChatMessage(role="system", content=system_prompt)]
    messages.extend(
        ChatMessage(role=msg.role.value, content=msg.content)
        for msg in history
    )
    return messages


class CompletionClient:
    """Sends one completion request per call and normalizes the outcome.

    The provider is the injected transport. A client built without one
    (no credential configured) answers every call with a
    `credential missing` failure instead of raising.
    """

    def __init__(
        self,
        provider: LLMProvider | None,
        settings: CompletionSettings | None = None,
        system_prompt: str | None = None,
    ) -> None:
        self._provider = provider
        self._settings = settings or CompletionSettings()
        self._system_prompt = system_prompt or get_system_prompt()
        self._debug_callback: Any | None = None

    @classmethod
    def from_api_key(
        cls,
        api_key: str | None,
        settings: CompletionSettings | None = None,
        **client_kwargs: Any
    ) -> "CompletionClient":
        """Build a client backed by Fireworks, or a credential-less one.

        Args:
            api_key: Fireworks API key, None/empty if not configured
            settings: Decoding parameters and endpoint
            **client_kwargs: Passed through to the provider's SDK client
        """
        settings = settings or CompletionSettings()
        provider = None
        if api_key:
            provider = FireworksProvider(
                api_key=api_key,
                model=settings.model,
                base_url=settings.base_url,
                **client_kwargs
            )
        return cls(provider, settings)

    @property
    def settings(self) -> CompletionSettings:
        return self._settings

    @property
    def has_credential(self) -> bool:
        return self._provider is not None

    @property
    def model(self) -> str:
        return self._settings.model

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for request logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    async def complete(self, history: Sequence[Message]) -> Reply:
        """Request a completion for the given transcript.

        Args:
            history: Full conversation so far, newest user message last

        Returns:
            Reply.success with the reply text (or the empty-reply fallback),
            or Reply.failure with the failure class
        """
        if self._provider is None:
            self._debug("error", "LLM", "No API key configured (set FIREWORKS_API_KEY)")
            return Reply.failure(FailureReason.CREDENTIAL_MISSING)

        messages = build_request_messages(history, self._system_prompt)
        self._debug("info", "LLM", f"Sending {len(messages)} message(s) to {self._settings.model}")

        start = time.time()
        try:
            response = await self._provider.chat_completion(
                messages,
                model=self._settings.model,
                temperature=self._settings.temperature,
                max_tokens=self._settings.max_tokens,
                **self._settings.request_options()
            )
        except LLMStatusError as e:
            self._debug("error", "LLM", f"Service error {e.status_code}: {e}")
            return Reply.failure(FailureReason.SERVICE_ERROR, code=e.status_code)
        except LLMConnectionError as e:
            self._debug("error", "LLM", f"Network error: {e}")
            return Reply.failure(FailureReason.NETWORK_ERROR)
        except Exception as e:
            self._debug("error", "LLM", f"Unexpected {type(e).__name__}: {e}")
            return Reply.failure(FailureReason.NETWORK_ERROR)

        elapsed = time.time() - start
        if not response.content:
            self._debug("warning", "LLM", f"Empty completion after {elapsed:.2f}s, using fallback text")
            return Reply.success(EMPTY_REPLY_FALLBACK)

        self._debug("info", "LLM", f"Response received ({len(response.content)} chars, {elapsed:.2f}s)")
        if response.usage:
            self._debug("debug", "LLM", f"Usage: {response.usage}")
        return Reply.success(response.content)

    async def close(self) -> None:
        """Close the underlying provider, if any."""
        if self._provider is not None:
            await self._provider.close()

    async def __aenter__(self) -> "CompletionClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._provider is not None:
            await self._provider.__aexit__(exc_type, exc_val, exc_tb)
