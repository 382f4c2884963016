"""Tests for the completion client: request construction and reply normalization."""
import asyncio

import pytest
from conftest import SYSTEM_PROMPT, FakeProvider
from hypothesis import given, settings
from hypothesis import strategies as st

from sentient_chat.conversation import (
    EMPTY_REPLY_FALLBACK,
    CompletionClient,
    CompletionSettings,
    ConversationStore,
    FailureReason,
    Message,
    Reply,
    Role,
    build_request_messages,
)
from sentient_chat.llm import LLMConnectionError, LLMStatusError

messages_strategy = st.lists(
    st.builds(Message, role=st.sampled_from(list(Role)), content=st.text(min_size=1)),
    max_size=15,
)


class TestBuildRequestMessages:
    """Tests for history to wire mapping."""

    def test_system_message_first(self):
        """Test that the system instruction opens the request."""
        history = [Message(role=Role.USER, content="What is yield farming?")]

        messages = build_request_messages(history, SYSTEM_PROMPT)

        assert [(m.role, m.content) for m in messages] == [
            ("system", SYSTEM_PROMPT),
            ("user", "What is yield farming?"),
        ]

    def test_greeting_is_forwarded(self):
        """Test that the seeded greeting travels as an assistant message."""
        store = ConversationStore(greeting="gm")
        snapshot = store.submit("hi")

        messages = build_request_messages(snapshot, "sys")

        assert [m.role for m in messages] == ["system", "assistant", "user"]

    @given(messages_strategy)
    def test_every_message_in_order(self, history):
        """Property test: N history entries produce N entries after the system message."""
        messages = build_request_messages(history, "sys")

        assert len(messages) == len(history) + 1
        assert messages[0].role == "system"
        assert [(m.role, m.content) for m in messages[1:]] == [
            (h.role.value, h.content) for h in history
        ]


class TestCompletionClient:
    """Tests for CompletionClient.complete."""

    @pytest.mark.asyncio
    async def test_success(self, client, fake_provider):
        """Test a successful round trip."""
        history = (Message(role=Role.USER, content="What is yield farming?"),)

        reply = await client.complete(history)

        assert reply == Reply.success("Yield farming is...")
        assert len(fake_provider.calls) == 1

    @pytest.mark.asyncio
    async def test_fixed_decoding_parameters(self, client, fake_provider):
        """Test that every request carries the configured parameters."""
        await client.complete((Message(role=Role.USER, content="hi"),))

        call = fake_provider.calls[0]
        assert call["model"] == CompletionSettings().model
        assert call["max_tokens"] == 1024
        assert call["temperature"] == 0.7
        assert call["top_p"] == 0.9
        assert call["frequency_penalty"] == 0.0
        assert call["presence_penalty"] == 0.0

    @pytest.mark.asyncio
    async def test_uses_packaged_system_prompt(self, client, fake_provider):
        """Test the default system instruction."""
        await client.complete((Message(role=Role.USER, content="hi"),))

        first = fake_provider.calls[0]["messages"][0]
        assert first.role == "system"
        assert first.content == SYSTEM_PROMPT

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [None, ""])
    async def test_empty_content_is_success_with_fallback(self, content):
        """Test that a reply with no content is not treated as an error."""
        client = CompletionClient(FakeProvider(content=content))

        reply = await client.complete((Message(role=Role.USER, content="hi"),))

        assert reply.ok is True
        assert reply.text == EMPTY_REPLY_FALLBACK

    @pytest.mark.asyncio
    async def test_missing_credential(self):
        """Test that no provider means a credential failure, not an exception."""
        client = CompletionClient(None)

        reply = await client.complete((Message(role=Role.USER, content="hello"),))

        assert reply == Reply.failure(FailureReason.CREDENTIAL_MISSING)
        assert client.has_credential is False

    @pytest.mark.asyncio
    async def test_from_api_key_without_key(self):
        """Test that an empty key builds a credential-less client."""
        client = CompletionClient.from_api_key("")

        reply = await client.complete((Message(role=Role.USER, content="hello"),))

        assert reply.reason == FailureReason.CREDENTIAL_MISSING
        await client.close()

    @pytest.mark.asyncio
    async def test_status_error(self):
        """Test that non-2xx responses carry the status code."""
        client = CompletionClient(FakeProvider(error=LLMStatusError(500)))

        reply = await client.complete((Message(role=Role.USER, content="hi"),))

        assert reply == Reply.failure(FailureReason.SERVICE_ERROR, code=500)

    @pytest.mark.asyncio
    async def test_connection_error(self):
        """Test that network failures are reported, not raised."""
        client = CompletionClient(FakeProvider(error=LLMConnectionError("connection refused")))

        reply = await client.complete((Message(role=Role.USER, content="hi"),))

        assert reply == Reply.failure(FailureReason.NETWORK_ERROR)

    @pytest.mark.asyncio
    async def test_unexpected_error_is_contained(self):
        """Test that arbitrary provider exceptions do not escape."""
        client = CompletionClient(FakeProvider(error=KeyError("choices")))

        reply = await client.complete((Message(role=Role.USER, content="hi"),))

        assert reply.ok is False
        assert reply.reason == FailureReason.NETWORK_ERROR

    @pytest.mark.asyncio
    async def test_failures_are_logged(self):
        """Test that failure details go to the debug channel."""
        client = CompletionClient(FakeProvider(error=LLMStatusError(503, "unavailable")))
        entries: list[tuple[str, str, str]] = []
        client.set_debug_callback(lambda level, component, message: entries.append((level, component, message)))

        await client.complete((Message(role=Role.USER, content="hi"),))

        errors = [e for e in entries if e[0] == "error"]
        assert len(errors) == 1
        assert errors[0][1] == "LLM"
        assert "503" in errors[0][2]

    @pytest.mark.asyncio
    async def test_close_closes_provider(self, client, fake_provider):
        """Test resource cleanup."""
        async with client:
            pass
        assert fake_provider.closed is True

    @given(st.lists(st.text(min_size=1).filter(str.strip), max_size=8))
    @settings(max_examples=25, deadline=None)
    def test_request_grows_with_history(self, texts):
        """Property test: the request holds the system message plus the whole transcript."""
        provider = FakeProvider(content="ok")
        client = CompletionClient(provider)
        store = ConversationStore(seed_greeting=False)

        async def run() -> None:
            for text in texts:
                snapshot = store.submit(text)
                store.resolve(await client.complete(snapshot))

        asyncio.run(run())

        for index, call in enumerate(provider.calls):
            # Request n carries n-1 earlier exchanges plus the new user message
            assert len(call["messages"]) == 1 + 2 * index + 1
            assert call["messages"][-1].content == texts[index]
