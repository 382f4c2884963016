"""Data models for the conversation core.

Hides the representation of transcript messages and completion outcomes
from the store, the client and the UI.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Author of a transcript message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single transcript entry. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who authored the content")
    content: str = Field(description="Message text")
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="Creation time, assigned once"
    )


class FailureReason(str, Enum):
    """Class of a failed completion attempt."""

    CREDENTIAL_MISSING = "credential missing"
    SERVICE_ERROR = "service error"      # Non-2xx HTTP status
    NETWORK_ERROR = "network error"      # No HTTP response at all


class Reply(BaseModel):
    """Normalized outcome of one completion attempt.

    Either successful with text, or failed with a reason (and, for
    service errors, the HTTP status code). Never a raw exception.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    text: str | None = None
    reason: FailureReason | None = None
    code: int | None = Field(default=None, description="HTTP status for service errors")

    @classmethod
    def success(cls, text: str) -> "Reply":
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, reason: FailureReason, code: int | None = None) -> "Reply":
        return cls(ok=False, reason=reason, code=code)
