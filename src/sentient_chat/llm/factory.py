from typing import Any

from .base import LLMProvider
from .providers import FireworksProvider


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider instance.

    This factory function hides the instantiation logic for providers.

    Args:
        provider: Provider type (currently only 'fireworks')
        **config: Provider-specific configuration
            For Fireworks:
                - api_key: str (required)
                - model: str (default: the Sentient Dobby model)
                - base_url: str (default: 'https://api.fireworks.ai/inference/v1')

    Returns:
        Initialized LLM provider instance

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> provider = create_llm_provider(
        ...     "fireworks",
        ...     api_key="fw-...",
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "fireworks":
        if not config.get("api_key"):
            raise TypeError("Fireworks provider requires 'api_key' in config")
        return FireworksProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'fireworks'"
    )
