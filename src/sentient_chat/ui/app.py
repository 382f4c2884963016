"""Main Textual TUI application.

Renders the conversation store and feeds user input back into it. The
store is observed through `subscribe`; the app never edits the
transcript itself.
"""

import asyncio
import contextlib

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header

from ..conversation import ChatSession, ConversationStore, Message
from .config import APP_TAGLINE, APP_TITLE, LogLevel
from .styles import APP_CSS
from .themes import SENTIENT_DARK
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, TypingIndicator


class SentientChatApp(App):
    """Textual TUI for the Sentient DeFi assistant."""

    CSS = APP_CSS
    TITLE = APP_TITLE

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+r", "copy_last_response", "Copy Response", priority=True),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(self, session: ChatSession, log_level: str | None = None) -> None:
        super().__init__()
        self._session = session
        self._log_level = log_level
        self._unsubscribe = None

    @property
    def store(self) -> ConversationStore:
        return self._session.store

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield TypingIndicator(id="typing-indicator")
        yield DebugPanel(id="debug-panel")
        with Vertical(id="bottom-bar"):
            yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(SENTIENT_DARK)
        self.theme = "sentient-dark"
        self.sub_title = f"{APP_TAGLINE} | {self._session.client.model.rsplit('/', 1)[-1]}"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._session.set_debug_callback(self._route_debug)
        self._unsubscribe = self.store.subscribe(self._on_store_changed)
        self._on_store_changed(self.store)

        if not self._session.client.has_credential:
            log_panel.warning("TUI", "FIREWORKS_API_KEY is not set; replies will fail")
            self.notify("No API key configured", severity="warning", timeout=5)

        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route debug channel messages to the log panel."""
        self.query_one("#debug-panel", DebugPanel).add_entry(
            component, message, LogLevel.from_string(level)
        )

    def _on_store_changed(self, store: ConversationStore) -> None:
        """Re-render from the store after every mutation."""
        self.query_one("#chat-history", ChatHistoryWidget).sync(store.history)
        self.query_one("#typing-indicator", TypingIndicator).set_active(store.pending)

        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        input_bar.set_text(store.draft)
        input_bar.set_can_send(bool(store.draft.strip()) and not store.pending)

    def on_chat_input_bar_draft_changed(self, event: ChatInputBar.DraftChanged) -> None:
        self.store.edit_draft(event.value)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission.

        The store accepts or rejects synchronously; only an accepted
        submission starts a completion worker.
        """
        self.store.edit_draft(event.value)
        snapshot = self.store.submit()
        if snapshot is None:
            return
        self._complete(snapshot)

    @work(group="completion")
    async def _complete(self, snapshot: tuple[Message, ...]) -> None:
        """Await the completion for an accepted submission."""
        await self._session.settle(snapshot)

        reply = self._session.last_reply
        if reply is not None and not reply.ok:
            detail = reply.reason.value if reply.reason else "unknown"
            if reply.code is not None:
                detail = f"{detail} ({reply.code})"
            self.notify(f"Request failed: {detail}", severity="error", timeout=5)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        response = self.store.last_response
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(session: ChatSession, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        session: Chat session (store + completion client)
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = SentientChatApp(session, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        with contextlib.suppress(RuntimeError):
            await session.client.close()
