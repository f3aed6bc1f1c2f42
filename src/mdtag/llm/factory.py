"""Tag provider factory for instantiating the right backend."""

from ..core.config import Config
from ..core.exceptions import ProviderUnavailableError
from ..core.types import ProviderKind
from .base import TagProvider
from .claude import ClaudeProvider
from .openai import OpenAIProvider


def create_tag_provider(kind: ProviderKind, config: Config) -> TagProvider:
    """Create a provider of the given kind.

    Args:
        kind: Which backend to create.
        config: Application configuration.

    Returns:
        Configured TagProvider instance.

    Raises:
        ProviderUnavailableError: If the kind has no API key configured.
    """
    if not config.has_credentials(kind):
        raise ProviderUnavailableError(kind.value, "no API key configured")

    if kind is ProviderKind.CLAUDE:
        return ClaudeProvider(config.claude)
    elif kind is ProviderKind.OPENAI:
        return OpenAIProvider(config.openai)
    else:
        raise ValueError(f"Unknown LLM provider: {kind}")


def get_provider_name(kind: ProviderKind) -> str:
    """Get human-readable provider name."""
    return kind.display_name
