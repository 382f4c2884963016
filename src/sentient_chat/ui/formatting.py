"""Text formatting utilities for the TUI.

Hides how transcript messages are labelled and how reply text is
classified for rendering.
"""

from ..conversation import Message, Role
from .config import MESSAGE_TIME_FORMAT

_MARKDOWN_MARKERS = ("```", "**", "__", "# ", "- ", "* ", "1. ", "|")


def format_message_time(message: Message) -> str:
    """Hour and minute the message was created, e.g. '14:05'."""
    return message.timestamp.strftime(MESSAGE_TIME_FORMAT)


def format_message_header(message: Message) -> str:
    """Header line shown above a chat bubble."""
    if message.role == Role.USER:
        return f"> You [{format_message_time(message)}]"
    return f"< Assistant [{format_message_time(message)}]"


def looks_like_markdown(text: str) -> bool:
    """Check whether reply text carries markdown worth rendering.

    Plain prose is shown as-is so that line breaks survive; anything with
    fences, emphasis, headings, lists or tables goes through Markdown.
    """
    for line in text.splitlines():
        stripped = line.lstrip()
        if any(stripped.startswith(marker) for marker in _MARKDOWN_MARKERS):
            return True
        if "**" in stripped or "`" in stripped:
            return True
    return False
