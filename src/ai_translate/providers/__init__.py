from __future__ import annotations

from typing import Callable, Dict, List, Optional

from ..config import DEFAULT_PROVIDER, Settings
from ..errors import ConfigError
from ..models import ProviderConfig
from .base import TranslationProvider
from .gemini_provider import GeminiProvider
from .openai_provider import OpenAIProvider

ProviderFactory = Callable[..., TranslationProvider]

PROVIDERS: Dict[str, ProviderFactory] = {
    "gemini": GeminiProvider,
    "openai": OpenAIProvider,
}


def provider_names() -> List[str]:
    return sorted(PROVIDERS)


def create_provider(
        name: Optional[str],
        settings: Settings,
        config: Optional[ProviderConfig] = None,
) -> TranslationProvider:
    """Build the named provider up front; a missing API key fails here, before any locale runs."""
    key = (name or DEFAULT_PROVIDER).strip().lower()
    factory = PROVIDERS.get(key)
    if factory is None:
        raise ConfigError(f"Unknown provider {name!r} (available: {', '.join(provider_names())})")
    return factory(api_key=settings.api_key_for(key), config=config or ProviderConfig())


__all__ = [
    "PROVIDERS",
    "TranslationProvider",
    "GeminiProvider",
    "OpenAIProvider",
    "create_provider",
    "provider_names",
]
