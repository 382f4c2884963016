from .base import LLMProvider
from .errors import LLMConnectionError, LLMError, LLMStatusError
from .factory import create_llm_provider
from .models import ChatMessage, LLMResponse
from .providers import FireworksProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "ChatMessage",
    "LLMResponse",
    "LLMError",
    "LLMStatusError",
    "LLMConnectionError",
    "FireworksProvider",
]
