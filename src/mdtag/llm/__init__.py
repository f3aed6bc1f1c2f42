"""LLM tag providers and the provider pool."""

from .base import TagProvider
from .claude import ClaudeProvider
from .factory import create_tag_provider, get_provider_name
from .openai import OpenAIProvider
from .pool import ProviderHandle, ProviderPool
from .prompts import SYSTEM_PROMPT, build_user_prompt, parse_tag_response

__all__ = [
    "TagProvider",
    "ClaudeProvider",
    "OpenAIProvider",
    "create_tag_provider",
    "get_provider_name",
    "ProviderHandle",
    "ProviderPool",
    "SYSTEM_PROMPT",
    "build_user_prompt",
    "parse_tag_response",
]
