"""Submission flow: store and client wired together."""

from typing import Any

from .client import CompletionClient
from .models import Message, Reply
from .store import ConversationStore


class ChatSession:
    """Runs the submit -> complete -> resolve cycle.

    `send` does the whole cycle for callers that simply await it (console
    chat, one-shot questions). A UI that must return from its input
    handler immediately calls `store.submit` itself and awaits `settle`
    later from a worker.
    """

    def __init__(self, store: ConversationStore, client: CompletionClient) -> None:
        self.store = store
        self.client = client
        self._debug_callback: Any | None = None
        self.last_reply: Reply | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for this session and its client.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback
        self.client.set_debug_callback(callback)

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    async def send(self, text: str | None = None) -> Message | None:
        """Submit text and wait for the assistant message.

        Returns:
            The appended assistant message, or None if the submission was
            rejected (blank text or a request already pending)
        """
        snapshot = self.store.submit(text)
        if snapshot is None:
            self._debug("debug", "Store", "Submission rejected (blank or pending)")
            return None
        return await self.settle(snapshot)

    async def settle(self, snapshot: tuple[Message, ...]) -> Message | None:
        """Complete an accepted submission and resolve it in the store."""
        self._debug("debug", "Store", f"Pending with {len(snapshot)} message(s) in history")
        reply = await self.client.complete(snapshot)
        self.last_reply = reply
        if not reply.ok:
            self._debug("warning", "Store", f"Reply failed: {reply.reason.value if reply.reason else 'unknown'}")
        return self.store.resolve(reply)
