"""Filesystem document store.

Reads and rewrites markdown files under a vault directory. Document ids
are POSIX-style paths relative to the vault root; containers are the
vault's directories.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from loguru import logger

from mdtag.core.exceptions import DocumentError, DocumentNotFoundError

from .base import SourceListError
from .glob_matcher import DEFAULT_PATTERNS, MultiGlobMatcher


@dataclass
class FileSystemConfig:
    """Configuration for the filesystem store.

    Attributes:
        base_path: Vault root directory.
        glob_patterns: Include patterns, plus ``!``-prefixed excludes.
        encoding: File encoding.
    """

    base_path: Path
    glob_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_PATTERNS))
    encoding: str = "utf-8"


class FileSystemStore:
    """Document store backed by a local directory.

    Example:
        store = FileSystemStore(FileSystemConfig(base_path=Path("~/vault").expanduser()))
        for document_id, text in store.list_documents("projects"):
            print(document_id, len(text))
    """

    def __init__(self, config: FileSystemConfig) -> None:
        self._config = config
        self._base_path = config.base_path.resolve()
        self._matcher = MultiGlobMatcher(config.glob_patterns)

    @property
    def base_path(self) -> Path:
        """Get the resolved vault root."""
        return self._base_path

    def _resolve(self, document_id: str) -> Path:
        path = (self._base_path / document_id).resolve()
        if not path.is_relative_to(self._base_path):
            raise DocumentNotFoundError(document_id)
        return path

    def read_document(self, document_id: str) -> str:
        """Read a document's text.

        Raises:
            DocumentNotFoundError: If the file does not exist.
            DocumentError: If the file cannot be read or decoded.
        """
        path = self._resolve(document_id)
        if not path.is_file():
            raise DocumentNotFoundError(document_id)
        try:
            return path.read_text(encoding=self._config.encoding)
        except (UnicodeDecodeError, OSError) as e:
            raise DocumentError(f"Failed to read {document_id}: {e}") from e

    def list_documents(self, container: str | None = None) -> Iterator[tuple[str, str]]:
        """Yield ``(document_id, text)`` for matching files, sorted by path.

        Unreadable files are logged and skipped.

        Raises:
            SourceListError: If the vault or container is not a directory.
        """
        root = self._base_path
        if container:
            root = self._resolve(container)
        if not root.is_dir():
            raise SourceListError(str(root), "Path is not a directory")

        for file_path in self._matcher.list_matching_files(self._base_path):
            if not file_path.is_relative_to(root):
                continue
            document_id = file_path.relative_to(self._base_path).as_posix()
            try:
                text = file_path.read_text(encoding=self._config.encoding)
            except (UnicodeDecodeError, OSError) as e:
                logger.warning(f"Failed to read file: {document_id}: {e}")
                continue
            yield document_id, text

    def write_document(self, document_id: str, text: str) -> bool:
        """Replace a document's text. Returns False if the write failed."""
        try:
            path = self._resolve(document_id)
            path.write_text(text, encoding=self._config.encoding)
        except (DocumentNotFoundError, OSError) as e:
            logger.error(f"Failed to write file: {document_id}: {e}")
            return False
        return True

    def list_containers(self) -> list[str]:
        """List vault directories, root (``""``) first, hidden ones skipped."""
        containers = [""]
        for path in sorted(self._base_path.rglob("*")):
            if not path.is_dir():
                continue
            relative = path.relative_to(self._base_path)
            if any(part.startswith(".") for part in relative.parts):
                continue
            containers.append(relative.as_posix())
        return containers
