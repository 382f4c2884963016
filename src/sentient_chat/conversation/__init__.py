"""Conversation core.

Module structure (each module hides a design decision):
- models.py: Transcript message and completion outcome representation
- config.py: Fixed request parameters and fallback texts
- store.py: Transcript state and the single-flight submission rule
- client.py: Request construction and failure normalization
- session.py: The submit -> complete -> resolve cycle
"""

from .client import CompletionClient, build_request_messages
from .config import EMPTY_REPLY_FALLBACK, ERROR_REPLY_FALLBACK, CompletionSettings
from .models import FailureReason, Message, Reply, Role
from .session import ChatSession
from .store import ConversationStore

__all__ = [
    "ChatSession",
    "CompletionClient",
    "CompletionSettings",
    "ConversationStore",
    "EMPTY_REPLY_FALLBACK",
    "ERROR_REPLY_FALLBACK",
    "FailureReason",
    "Message",
    "Reply",
    "Role",
    "build_request_messages",
]
