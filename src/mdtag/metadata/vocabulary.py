"""Corpus-wide tag vocabulary."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Iterable, Iterator

from loguru import logger

from .frontmatter import TAGS_KEY, parse_frontmatter
from .tags import (
    extract_inline_tags,
    extract_tags_from_field,
    normalize_tag,
    strip_prefix,
)

if TYPE_CHECKING:
    from ..sources.base import DocumentStore


class Vocabulary:
    """Known normalized tags in first-seen order.

    Supports ``in``, ``len`` and iteration; :meth:`add` folds in tags
    written during the current run.
    """

    def __init__(self, tags: Iterable[str] = ()):
        self.tags: list[str] = []
        self._index: set[str] = set()
        self.update(tags)

    def add(self, tag: str) -> bool:
        """Add a tag (normalized first). Returns True if it was new."""
        normalized = normalize_tag(tag)
        if not normalized or normalized in self._index:
            return False
        self._index.add(normalized)
        self.tags.append(normalized)
        return True

    def update(self, tags: Iterable[str]) -> None:
        for tag in tags:
            self.add(tag)

    def __contains__(self, tag: object) -> bool:
        return tag in self._index

    def __len__(self) -> int:
        return len(self.tags)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tags)

    def __repr__(self) -> str:
        return f"Vocabulary({self.tags!r})"


def document_tags(text: str) -> list[str]:
    """Collect raw tags from a document's ``tags`` field and inline #tags.

    Documents whose frontmatter cannot be decoded contribute only their
    inline tags.
    """
    block = parse_frontmatter(text)
    tags: list[str] = []
    if block.present and not block.error and TAGS_KEY in block.data:
        tags.extend(extract_tags_from_field(block.data[TAGS_KEY]))
    tags.extend(extract_inline_tags(block.body))
    return tags


class VocabularyIndex:
    """Builds the vocabulary snapshot from a document store.

    Tags carrying ``prefix`` (as written by earlier runs) are stored
    without it, so reconciled candidates can be prefixed exactly once.
    """

    def __init__(self, store: "DocumentStore", prefix: str = ""):
        self._store = store
        self._prefix = prefix

    def snapshot(self) -> Vocabulary:
        """Scan every document and return the deduplicated tag set."""
        start_time = time.perf_counter()
        vocabulary = Vocabulary()
        documents = 0
        for _, text in self._store.list_documents():
            documents += 1
            for tag in document_tags(text):
                vocabulary.add(strip_prefix(normalize_tag(tag), self._prefix))

        elapsed = (time.perf_counter() - start_time) * 1000
        logger.debug(
            f"Vocabulary snapshot: tags={len(vocabulary)}, documents={documents}, {elapsed:.1f}ms"
        )
        return vocabulary
