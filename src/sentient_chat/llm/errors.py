"""Provider-neutral error types.

Providers translate SDK or transport exceptions into these so callers
never depend on a particular client library.
"""


class LLMError(Exception):
    """Base class for failures raised by an LLM provider."""


class LLMStatusError(LLMError):
    """The service answered with a non-2xx HTTP status."""

    def __init__(self, status_code: int, message: str = "") -> None:
        super().__init__(message or f"API error: {status_code}")
        self.status_code = status_code


class LLMConnectionError(LLMError):
    """The request never produced an HTTP response (network, DNS, TLS, timeout)."""
