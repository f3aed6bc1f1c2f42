"""Storage protocol for document collections.

The engine only ever reads whole documents and replaces whole documents;
it never edits byte ranges at this boundary. Stores don't need to inherit
from anything, just implement the methods below.
"""

from __future__ import annotations

from typing import Iterator, Protocol, runtime_checkable

from mdtag.core.exceptions import MdtagError


class SourceError(MdtagError):
    """Base exception for storage operations."""

    pass


class SourceListError(SourceError):
    """Failed to enumerate documents."""

    def __init__(self, source_uri: str, reason: str):
        self.source_uri = source_uri
        self.reason = reason
        super().__init__(f"Failed to list documents from {source_uri}: {reason}")


@runtime_checkable
class DocumentStore(Protocol):
    """Protocol for the storage collaborator.

    Document identifiers are forward-slash relative paths. Containers are
    directory-like groupings used to scope a batch run to a subtree; the
    root container is the empty string.
    """

    def read_document(self, document_id: str) -> str:
        """Read a document's full text.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """
        ...

    def list_documents(self, container: str | None = None) -> Iterator[tuple[str, str]]:
        """Yield ``(document_id, text)`` pairs, optionally under a container."""
        ...

    def write_document(self, document_id: str, text: str) -> bool:
        """Replace a document's full text. Returns False if rejected."""
        ...

    def list_containers(self) -> list[str]:
        """List container identifiers (the root container first)."""
        ...
