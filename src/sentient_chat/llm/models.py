from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """A single entry of the outbound `messages` array."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Role of the message sender: 'user', 'assistant', or 'system'")
    content: str = Field(description="Content of the message")


class LLMResponse(BaseModel):
    """Response from an LLM provider."""

    model_config = ConfigDict(frozen=True)

    content: str | None = Field(
        default=None,
        description="Content of the first completion choice, None when the service returned none"
    )
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
