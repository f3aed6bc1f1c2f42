"""Core configuration, errors and types for mdtag."""

from .config import BatchConfig, ClaudeConfig, Config, OpenAIConfig, PoolConfig
from .exceptions import (
    ConfigurationError,
    DocumentError,
    DocumentNotFoundError,
    EmptyResponseError,
    MalformedDocumentError,
    MdtagError,
    ProviderError,
    ProviderUnavailableError,
    WriteFailureError,
)
from .types import (
    FALLBACK_PROVIDERS,
    BatchProgress,
    DocumentOutcome,
    MetadataShape,
    ProviderKind,
)

__all__ = [
    "Config",
    "ClaudeConfig",
    "OpenAIConfig",
    "PoolConfig",
    "BatchConfig",
    "MdtagError",
    "ConfigurationError",
    "ProviderUnavailableError",
    "ProviderError",
    "EmptyResponseError",
    "DocumentError",
    "DocumentNotFoundError",
    "MalformedDocumentError",
    "WriteFailureError",
    "ProviderKind",
    "FALLBACK_PROVIDERS",
    "MetadataShape",
    "DocumentOutcome",
    "BatchProgress",
]
