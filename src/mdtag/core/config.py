"""Configuration management for mdtag."""

import os
from dataclasses import dataclass, field

from .types import ProviderKind


@dataclass
class ClaudeConfig:
    """Anthropic Messages API configuration."""

    api_key: str = ""
    model: str = "claude-3-7-sonnet-20250219"
    base_url: str = "https://api.anthropic.com/v1"
    api_version: str = "2023-06-01"
    timeout: float = 60.0
    # Minimum seconds between two requests from the same client
    min_request_interval: float = 0.5


@dataclass
class OpenAIConfig:
    """OpenAI Chat Completions API configuration."""

    api_key: str = ""
    model: str = "gpt-4o"
    base_url: str = "https://api.openai.com/v1"
    timeout: float = 60.0
    min_request_interval: float = 0.5


@dataclass
class PoolConfig:
    """Provider pool limits and timers (seconds)."""

    max_active: int = 2
    max_idle: float = 5 * 60.0
    cooldown: float = 60.0
    sweep_interval: float = 60.0
    request_timeout: float = 60.0


@dataclass
class BatchConfig:
    """Batch run pacing."""

    batch_size: int = 5
    batch_delay: float = 2.0
    notice_every: int = 5


@dataclass
class Config:
    """Main application configuration."""

    provider: ProviderKind = ProviderKind.CLAUDE
    tag_prefix: str = ""
    claude: ClaudeConfig = field(default_factory=ClaudeConfig)
    openai: OpenAIConfig = field(default_factory=OpenAIConfig)
    pool: PoolConfig = field(default_factory=PoolConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)

    def __post_init__(self) -> None:
        self.provider = ProviderKind.parse(self.provider)

    def api_key_for(self, kind: ProviderKind) -> str:
        """Get the configured API key for a provider kind."""
        if kind is ProviderKind.CLAUDE:
            return self.claude.api_key
        return self.openai.api_key

    def model_for(self, kind: ProviderKind) -> str:
        """Get the configured model identifier for a provider kind."""
        if kind is ProviderKind.CLAUDE:
            return self.claude.model
        return self.openai.model

    def has_credentials(self, kind: ProviderKind) -> bool:
        """Check whether a provider kind has a non-blank API key."""
        return bool(self.api_key_for(kind).strip())

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()

        if provider := os.environ.get("MDTAG_PROVIDER"):
            config.provider = ProviderKind.parse(provider)

        if prefix := os.environ.get("MDTAG_TAG_PREFIX"):
            config.tag_prefix = prefix

        # Claude configuration
        if api_key := os.environ.get("ANTHROPIC_API_KEY"):
            config.claude.api_key = api_key
        if model := os.environ.get("MDTAG_CLAUDE_MODEL"):
            config.claude.model = model

        # OpenAI configuration
        if api_key := os.environ.get("OPENAI_API_KEY"):
            config.openai.api_key = api_key
        if model := os.environ.get("MDTAG_OPENAI_MODEL"):
            config.openai.model = model

        # Batch pacing
        if batch_size := os.environ.get("MDTAG_BATCH_SIZE"):
            config.batch.batch_size = int(batch_size)
        if batch_delay := os.environ.get("MDTAG_BATCH_DELAY"):
            config.batch.batch_delay = float(batch_delay)

        return config
