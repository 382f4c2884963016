"""Conversation configuration constants.

Centralizes the fixed request parameters and fallback texts.
"""

from pydantic import BaseModel, ConfigDict, Field

from ..llm.providers import DEFAULT_BASE_URL, DEFAULT_MODEL

# Shown when the service answered but sent no usable content
EMPTY_REPLY_FALLBACK = "Sorry, I could not process your request."

# Shown when the completion attempt failed outright
ERROR_REPLY_FALLBACK = (
    "Sorry, there was an error processing your message. "
    "Please check your API key and try again."
)

# Environment variables holding the credential, in lookup order
API_KEY_ENV_VARS = ("FIREWORKS_API_KEY", "VITE_FIREWORKS_API_KEY")


class CompletionSettings(BaseModel):
    """Fixed decoding parameters sent with every request."""

    model_config = ConfigDict(frozen=True)

    model: str = Field(default=DEFAULT_MODEL, description="Model identifier")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Inference API base URL")
    max_tokens: int = Field(default=1024, ge=1, description="Bounded output length")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_p: float = Field(default=0.9, gt=0.0, le=1.0, description="Nucleus-sampling threshold")
    frequency_penalty: float = Field(default=0.0, ge=-2.0, le=2.0)
    presence_penalty: float = Field(default=0.0, ge=-2.0, le=2.0)

    def request_options(self) -> dict[str, float]:
        """Decoding fields other than model/temperature/max_tokens."""
        return {
            "top_p": self.top_p,
            "frequency_penalty": self.frequency_penalty,
            "presence_penalty": self.presence_penalty,
        }
