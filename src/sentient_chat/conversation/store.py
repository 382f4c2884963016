"""Conversation state and the single-flight submission rule.

This module hides how the transcript, the draft and the pending flag are
held. All mutations go through `submit`, `resolve` and `edit_draft`;
observers are told after each one.
"""

from collections.abc import Callable

from ..prompts import get_greeting
from .config import EMPTY_REPLY_FALLBACK, ERROR_REPLY_FALLBACK
from .models import Message, Reply, Role

StoreListener = Callable[["ConversationStore"], None]


class ConversationStore:
    """Owns the transcript and the at-most-one-request-in-flight guard.

    The transcript is append-only. `submit` checks and sets `pending` in
    one synchronous step, so two submissions can never both pass the
    guard on a single event loop.

    Example:
        store = ConversationStore()
        snapshot = store.submit("What is yield farming?")
        if snapshot is not None:
            reply = await client.complete(snapshot)
            store.resolve(reply)
    """

    def __init__(self, greeting: str | None = None, *, seed_greeting: bool = True) -> None:
        """Create a session store.

        Args:
            greeting: Assistant greeting text (defaults to the packaged greeting)
            seed_greeting: Insert the greeting as the first message
        """
        self._history: list[Message] = []
        self._pending = False
        self._draft = ""
        self._listeners: list[StoreListener] = []

        if seed_greeting:
            self._history.append(
                Message(role=Role.ASSISTANT, content=greeting or get_greeting())
            )

    @property
    def history(self) -> tuple[Message, ...]:
        """Snapshot of the transcript in chronological order."""
        return tuple(self._history)

    @property
    def pending(self) -> bool:
        """True while a completion request is outstanding."""
        return self._pending

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def last_response(self) -> str | None:
        """Content of the most recent assistant message."""
        for msg in reversed(self._history):
            if msg.role == Role.ASSISTANT:
                return msg.content
        return None

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def edit_draft(self, text: str) -> None:
        """Replace the draft. Allowed while a request is pending."""
        if text == self._draft:
            return
        self._draft = text
        self._notify()

    def submit(self, text: str | None = None) -> tuple[Message, ...] | None:
        """Accept a user message and enter the pending state.

        Args:
            text: Message text (defaults to the current draft)

        Returns:
            History snapshot including the new user message, to be passed
            to the completion client. None if the text is blank or a
            request is already pending; state is left untouched then.
        """
        if text is None:
            text = self._draft
        if self._pending or not text.strip():
            return None

        self._history.append(Message(role=Role.USER, content=text))
        self._draft = ""
        self._pending = True
        self._notify()
        return self.history

    def resolve(self, reply: Reply) -> Message | None:
        """Append the assistant answer for the outstanding request.

        Failed replies are shown as the error apology, successful ones
        without text as the empty-reply apology. `pending` is cleared on
        every path.

        Returns:
            The appended message, or None when nothing was pending
        """
        if not self._pending:
            return None

        if not reply.ok:
            content = ERROR_REPLY_FALLBACK
        else:
            content = reply.text or EMPTY_REPLY_FALLBACK

        message = Message(role=Role.ASSISTANT, content=content)
        self._history.append(message)
        self._pending = False
        self._notify()
        return message
