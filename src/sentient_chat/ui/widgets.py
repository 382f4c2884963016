"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Chat message rendering and scrolling
- Draft entry and the Send affordance
- Typing indicator animation
- Log rendering with level filtering
"""

from collections.abc import Sequence
from datetime import datetime

from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, Markdown, RichLog, Static, TextArea

from ..conversation import Message, Role
from .config import (
    INPUT_PLACEHOLDER,
    LOG_TIMESTAMP_FORMAT,
    TYPING_FRAME_INTERVAL,
    TYPING_MAX_DOTS,
    LogLevel,
)
from .formatting import format_message_header, looks_like_markdown


class ClickableMessage(Vertical):
    """A chat message container that copies its content when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self._content)
        self.app.notify("Copied to clipboard", timeout=2)


class ChatHistoryWidget(VerticalScroll):
    """Scrollable transcript view.

    The transcript is append-only, so `sync` only mounts the messages it
    has not rendered yet.
    """

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._rendered = 0

    @property
    def rendered_count(self) -> int:
        """Number of transcript messages mounted so far."""
        return self._rendered

    def sync(self, history: Sequence[Message]) -> None:
        """Render any messages appended since the last call."""
        new_messages = history[self._rendered:]
        if not new_messages:
            return
        for msg in new_messages:
            self._render_message(msg)
        self._rendered = len(history)
        self.border_subtitle = f"{self._rendered} messages"
        self.scroll_end(animate=False)

    def _render_message(self, msg: Message) -> None:
        border_class = "user-message" if msg.role == Role.USER else "assistant-message"

        container = ClickableMessage(content=msg.content, classes=f"chat-message {border_class}")
        container.compose_add_child(Static(format_message_header(msg), classes="message-header"))

        if msg.role == Role.ASSISTANT and looks_like_markdown(msg.content):
            container.compose_add_child(Markdown(msg.content, classes="message-content"))
        else:
            # markup=False: user text may contain square brackets
            container.compose_add_child(Static(msg.content, markup=False, classes="message-content"))

        self.mount(container)


class TypingIndicator(Static):
    """Animated 'assistant is typing' line, visible while a request is pending."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__("", *args, **kwargs)
        self._frame = 0
        self._timer = None
        self.display = False

    def on_mount(self) -> None:
        self._timer = self.set_interval(TYPING_FRAME_INTERVAL, self._advance, pause=True)

    def _advance(self) -> None:
        self._frame = (self._frame % TYPING_MAX_DOTS) + 1
        self.update(f"Assistant is typing{'.' * self._frame}")

    def set_active(self, active: bool) -> None:
        """Show and animate, or hide and stop."""
        if active == self.display:
            return
        self.display = active
        if active:
            self._frame = 0
            self._advance()
            if self._timer is not None:
                self._timer.resume()
        elif self._timer is not None:
            self._timer.pause()


class ChatInputBar(Horizontal):
    """Draft entry with a Send button.

    Posts `DraftChanged` on every edit and `Submitted` on Ctrl+J or Send.
    Whether a submission is accepted is decided by the conversation store,
    not here.
    """

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class DraftChanged(TextualMessage):
        """Message sent when the draft text changes."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False, placeholder=INPUT_PLACEHOLDER)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success", disabled=True).with_tooltip(
            "Submit message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False

    @property
    def text(self) -> str:
        return self.query_one("#chat-input", TextArea).text

    def set_text(self, value: str) -> None:
        """Replace the text area content if it differs."""
        text_area = self.query_one("#chat-input", TextArea)
        if text_area.text != value:
            text_area.text = value

    def set_can_send(self, can_send: bool) -> None:
        self.query_one("#send-btn", Button).disabled = not can_send

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        event.stop()
        self.post_message(self.DraftChanged(event.text_area.text))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()

    def _submit(self) -> None:
        self.post_message(self.Submitted(self.text))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class DebugPanel(RichLog):
    """Log panel for request tracing with level filtering.

    Shows timestamped log messages from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    _LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    _COMPONENT_COLORS = {
        "TUI": "cyan",
        "LLM": "magenta",
        "Store": "bright_green",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level
        self._entries = 0
        # Hidden until --log-level or Ctrl+D
        self.display = False

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    @property
    def entry_count(self) -> int:
        """Number of entries that passed the level filter."""
        return self._entries

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def add_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, LLM, Store)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self._LEVEL_COLORS.get(level, "white")
        comp_color = self._COMPONENT_COLORS.get(component, "white")
        # Escape the opening bracket so message text is never parsed as markup
        safe_message = message.replace("[", r"\[")

        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(level):<5}[/] "
            f"[{comp_color}]\\[{component}][/] {safe_message}"
        )
        self._entries += 1

    def debug(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.ERROR)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
