"""Type definitions for mdtag."""

from dataclasses import dataclass, field
from enum import Enum


class ProviderKind(Enum):
    """Supported LLM backends."""

    CLAUDE = "claude"
    OPENAI = "openai"

    @classmethod
    def parse(cls, value: "str | ProviderKind") -> "ProviderKind":
        """Parse a provider kind, tolerating case and surrounding whitespace.

        Raises:
            ValueError: If the value names no supported provider.
        """
        if isinstance(value, ProviderKind):
            return value
        normalized = value.lower().strip()
        for kind in cls:
            if kind.value == normalized:
                return kind
        supported = ", ".join(k.value for k in cls)
        raise ValueError(f"Unknown LLM provider: {value}. Supported providers: {supported}")

    @property
    def display_name(self) -> str:
        """Human-readable provider name."""
        return {
            ProviderKind.CLAUDE: "Claude (Anthropic)",
            ProviderKind.OPENAI: "OpenAI",
        }[self]


# Each provider falls back to the other.
FALLBACK_PROVIDERS: dict[ProviderKind, ProviderKind] = {
    ProviderKind.CLAUDE: ProviderKind.OPENAI,
    ProviderKind.OPENAI: ProviderKind.CLAUDE,
}


class MetadataShape(Enum):
    """How a document's frontmatter relates to its tags field."""

    NO_METADATA = "no-metadata"
    METADATA_NO_TAGS = "metadata-no-tags"
    METADATA_WITH_TAGS = "metadata-with-tags"


@dataclass
class DocumentOutcome:
    """Result of running one document through the tagging pipeline."""

    document_id: str
    success: bool
    shape: MetadataShape | None = None
    tags: list[str] = field(default_factory=list)
    provider: ProviderKind | None = None
    used_fallback: bool = False
    error: str | None = None


@dataclass
class BatchProgress:
    """Progress counters for one batch run."""

    total: int = 0
    """Number of documents in the run."""

    processed: int = 0
    """Number of documents tagged successfully."""

    errors: int = 0
    """Number of documents that failed."""

    failed: list[tuple[str, str]] = field(default_factory=list)
    """List of (document_id, error_message) for failed documents."""

    summary: str = ""
    """Terminal summary shown to the user."""

    @property
    def attempted(self) -> int:
        """Documents attempted so far (succeeded or failed)."""
        return self.processed + self.errors
