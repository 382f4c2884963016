"""Tests for the Typer CLI and its environment-driven factories."""
import pytest
from conftest import FakeProvider
from rich.console import Console
from typer.testing import CliRunner

from sentient_chat.cli import providers
from sentient_chat.cli.app import app
from sentient_chat.conversation import (
    ERROR_REPLY_FALLBACK,
    CompletionClient,
    CompletionSettings,
    FailureReason,
    Message,
    Reply,
    Role,
)
from sentient_chat.llm import LLMConnectionError
from sentient_chat.llm.providers import DEFAULT_BASE_URL, DEFAULT_MODEL

runner = CliRunner()


@pytest.fixture
def no_api_key(monkeypatch):
    """Remove every credential variable."""
    for name in ("FIREWORKS_API_KEY", "VITE_FIREWORKS_API_KEY"):
        monkeypatch.delenv(name, raising=False)


class TestProviders:
    """Tests for environment-driven configuration."""

    def test_api_key_lookup_order(self, monkeypatch, no_api_key):
        """Test that FIREWORKS_API_KEY wins over the legacy name."""
        monkeypatch.setenv("VITE_FIREWORKS_API_KEY", "fw-legacy")
        assert providers.get_api_key() == "fw-legacy"

        monkeypatch.setenv("FIREWORKS_API_KEY", "fw-primary")
        assert providers.get_api_key() == "fw-primary"

    def test_missing_api_key(self, no_api_key):
        """Test that no key yields None."""
        assert providers.get_api_key() is None

    def test_settings_defaults(self, monkeypatch):
        """Test default endpoint and model."""
        monkeypatch.delenv("FIREWORKS_BASE_URL", raising=False)
        monkeypatch.delenv("FIREWORKS_MODEL", raising=False)

        settings = providers.get_settings()

        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.model == DEFAULT_MODEL
        assert settings.max_tokens == CompletionSettings().max_tokens

    def test_settings_overrides(self, monkeypatch):
        """Test endpoint and model overrides."""
        monkeypatch.setenv("FIREWORKS_BASE_URL", "http://localhost:8000/v1")
        monkeypatch.setenv("FIREWORKS_MODEL", "local-model")

        settings = providers.get_settings()

        assert settings.base_url == "http://localhost:8000/v1"
        assert settings.model == "local-model"

    def test_session_without_key_is_usable(self, no_api_key):
        """Test that a missing key warns instead of exiting."""
        console = Console(record=True, width=120)

        session = providers.get_session(console)

        assert session.client.has_credential is False
        assert len(session.store.history) == 1
        assert "FIREWORKS_API_KEY not set" in console.export_text()

    def test_console_debug_callback_filters(self):
        """Test level filtering of console logging."""
        console = Console(record=True, width=120)
        callback = providers.console_debug_callback(console, "warning")

        callback("info", "LLM", "hidden")
        callback("error", "LLM", "Service error 500")

        output = console.export_text()
        assert "hidden" not in output
        assert "[error] [LLM] Service error 500" in output

    def test_console_debug_callback_prints_brackets_literally(self):
        """Test that bracketed message text is not parsed as markup."""
        console = Console(record=True, width=120)
        callback = providers.console_debug_callback(console, "debug")

        callback("error", "LLM", "Network error: bad [/x] thing [bold]")

        assert "Network error: bad [/x] thing [bold]" in console.export_text()

    @pytest.mark.asyncio
    async def test_client_failure_with_brackets_returns_reply(self):
        """Test that logging a bracketed error keeps complete() from raising."""
        console = Console(record=True, width=120)
        client = CompletionClient(FakeProvider(error=LLMConnectionError("bad [/x] thing")))
        client.set_debug_callback(providers.console_debug_callback(console, "debug"))

        reply = await client.complete((Message(role=Role.USER, content="hi"),))

        assert reply == Reply.failure(FailureReason.NETWORK_ERROR)
        assert "bad [/x] thing" in console.export_text()


class TestCommands:
    """Tests for CLI commands."""

    def test_ask_without_key_fails_gracefully(self, no_api_key):
        """Test that `ask` prints the apology and exits with 1."""
        result = runner.invoke(app, ["ask", "hello"])

        assert result.exit_code == 1
        assert "Sorry, there was an error" in result.output
        assert ERROR_REPLY_FALLBACK.split(".")[0] in result.output

    def test_ask_blank_question(self, no_api_key):
        """Test that a blank question is rejected."""
        result = runner.invoke(app, ["ask", "   "])

        assert result.exit_code == 1
        assert "question is empty" in result.output

    def test_chat_exit(self, no_api_key):
        """Test that the console chat greets and leaves on 'exit'."""
        result = runner.invoke(app, ["chat"], input="exit\n")

        assert result.exit_code == 0
        assert "Sentient AI Assistant" in result.output
        assert "Goodbye!" in result.output

    def test_chat_round_with_log(self, no_api_key):
        """Test one failed round in the console chat with logging on."""
        result = runner.invoke(app, ["chat", "--log-level", "error"], input="hello\nq\n")

        assert result.exit_code == 0
        assert "[error] [LLM] No API key configured" in result.output
        assert "[warning]" not in result.output
        assert "Sorry, there was an error" in result.output

    def test_help(self):
        """Test that all commands are registered."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("tui", "chat", "ask"):
            assert command in result.output
