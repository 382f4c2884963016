"""Session factory functions for CLI.

Centralizes creation of the completion client and chat session from
environment variables. Hides configuration details from command
implementations.
"""

import os
from collections.abc import Callable

from rich.console import Console
from rich.markup import escape

from ..conversation import ChatSession, CompletionClient, CompletionSettings, ConversationStore
from ..conversation.config import API_KEY_ENV_VARS
from ..llm.providers import DEFAULT_BASE_URL, DEFAULT_MODEL
from ..ui.config import LogLevel

# Default console for output
_console = Console()

_LEVEL_STYLES = {
    "debug": "dim",
    "info": "cyan",
    "warning": "yellow",
    "error": "red",
}


def get_api_key() -> str | None:
    """Read the Fireworks API key.

    Environment variables (first non-empty wins):
        FIREWORKS_API_KEY
        VITE_FIREWORKS_API_KEY
    """
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name)
        if value:
            return value
    return None


def get_settings() -> CompletionSettings:
    """Build completion settings from environment variables.

    Environment variables:
        FIREWORKS_BASE_URL: Inference API base URL (default: Fireworks)
        FIREWORKS_MODEL: Model identifier (default: Sentient Dobby 8B)
    """
    return CompletionSettings(
        base_url=os.getenv("FIREWORKS_BASE_URL", DEFAULT_BASE_URL),
        model=os.getenv("FIREWORKS_MODEL", DEFAULT_MODEL),
    )


def get_session(console: Console | None = None) -> ChatSession:
    """Create a chat session seeded with the greeting.

    A missing API key is not fatal: the session is still created and every
    request reports `credential missing`.

    Args:
        console: Optional Rich console for output
    """
    con = console or _console
    api_key = get_api_key()
    if not api_key:
        con.print("[yellow]Warning: FIREWORKS_API_KEY not set, replies will fail[/yellow]")

    client = CompletionClient.from_api_key(api_key, get_settings())
    return ChatSession(ConversationStore(), client)


def console_debug_callback(
    console: Console,
    log_level: str
) -> Callable[[str, str, str], None]:
    """Build a debug callback that prints to a Rich console.

    Args:
        console: Console to print to
        log_level: Minimum level to show (debug/info/warning/error)
    """
    threshold = LogLevel.from_string(log_level)

    def callback(level: str, component: str, message: str) -> None:
        if not LogLevel.passes(level, threshold):
            return
        style = _LEVEL_STYLES.get(level, "white")
        console.print(f"[{style}]\\[{level}] \\[{component}][/] {escape(message)}", highlight=False)

    return callback
