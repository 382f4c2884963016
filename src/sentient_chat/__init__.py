"""
Sentient Chat: a terminal chat client for the Sentient DeFi assistant.

Keeps an append-only conversation transcript, allows one completion
request in flight at a time, and talks to an OpenAI-compatible
inference endpoint (Fireworks AI).
"""

__version__ = "0.1.0"

from .conversation import (
    ChatSession,
    CompletionClient,
    CompletionSettings,
    ConversationStore,
    FailureReason,
    Message,
    Reply,
    Role,
)

__all__ = [
    "ChatSession",
    "CompletionClient",
    "CompletionSettings",
    "ConversationStore",
    "FailureReason",
    "Message",
    "Reply",
    "Role",
]
