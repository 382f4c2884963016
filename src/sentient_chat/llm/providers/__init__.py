from .fireworks import DEFAULT_BASE_URL, DEFAULT_MODEL, FireworksProvider

__all__ = ["DEFAULT_BASE_URL", "DEFAULT_MODEL", "FireworksProvider"]
