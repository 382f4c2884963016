"""Terminal UI module for sentient-chat.

Provides a Textual-based TUI over the conversation store.

Module structure (each module hides a design decision):
- config.py: Log levels and display constants
- formatting.py: Message headers and reply classification
- widgets.py: Custom widgets (transcript, typing indicator, input, log)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- app.py: Application orchestration (user interaction flow)
"""

from .app import SentientChatApp, run_textual_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, TypingIndicator

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "SentientChatApp",
    "TypingIndicator",
    "run_textual_tui",
]
