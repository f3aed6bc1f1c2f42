"""Custom exceptions for mdtag."""


class MdtagError(Exception):
    """Base exception for all mdtag errors."""

    pass


class ConfigurationError(MdtagError):
    """Engine cannot start because no provider is usable."""

    pass


class ProviderUnavailableError(MdtagError):
    """No provider handle could be obtained.

    Raised when a provider kind has no credentials configured, or when it
    is cooling down after a reported failure.
    """

    def __init__(self, kind: str, reason: str, cooling_down: bool = False):
        """Initialize exception with provider kind and reason.

        Args:
            kind: Provider kind value (e.g. "claude").
            reason: Human-readable reason the provider is unavailable.
            cooling_down: True when the refusal is due to an active cooldown.
        """
        self.kind = kind
        self.reason = reason
        self.cooling_down = cooling_down
        super().__init__(f"Provider {kind} unavailable: {reason}")


class ProviderError(MdtagError):
    """Backend call failed (transport, auth, parsing or timeout)."""

    pass


class EmptyResponseError(ProviderError):
    """Backend returned no usable tags."""

    pass


class DocumentError(MdtagError):
    """Document operation failed."""

    pass


class DocumentNotFoundError(DocumentError):
    """Document does not exist."""

    def __init__(self, path: str):
        """Initialize exception with path.

        Args:
            path: Identifier of the document that was not found.
        """
        self.path = path
        super().__init__(f"Document not found: {path}")


class MalformedDocumentError(DocumentError):
    """Frontmatter is present but cannot be classified."""

    pass


class WriteFailureError(DocumentError):
    """Storage rejected the rewritten document."""

    def __init__(self, path: str, reason: str = "write rejected"):
        self.path = path
        super().__init__(f"Failed to write {path}: {reason}")
