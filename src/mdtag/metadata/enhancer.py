"""Reconcile freshly generated tags against the corpus vocabulary."""

from __future__ import annotations

from typing import Iterable

from loguru import logger

from .similarity import DEFAULT_THRESHOLD, find_similar
from .tags import normalize_tag
from .vocabulary import Vocabulary


class TagConsistencyEnhancer:
    """Map near-duplicate tags onto existing vocabulary entries.

    For each candidate (normalized first):
    - an exact vocabulary entry is kept as is;
    - otherwise the closest entry within ``threshold`` edits replaces it;
    - otherwise the candidate is kept as a new tag.

    Example:
        >>> enhancer = TagConsistencyEnhancer(Vocabulary(["machine-learning"]))
        >>> enhancer.reconcile(["Machine-Learnin", "rust"])
        ['machine-learning', 'rust']
    """

    def __init__(self, vocabulary: Vocabulary, threshold: int = DEFAULT_THRESHOLD):
        self.vocabulary = vocabulary
        self.threshold = threshold

    def resolve(self, candidate: str) -> str:
        """Resolve one normalized candidate to the tag that should be written."""
        if candidate in self.vocabulary:
            return candidate

        similar = find_similar(candidate, self.vocabulary.tags, self.threshold)
        if similar:
            logger.debug(f"Reconciled tag {candidate!r} -> {similar[0]!r}")
            return similar[0]
        return candidate

    def reconcile(self, candidates: Iterable[str]) -> list[str]:
        """Reconcile candidates; result is deduplicated in first-seen order."""
        seen: set[str] = set()
        result: list[str] = []
        for raw in candidates:
            candidate = normalize_tag(raw)
            if not candidate:
                continue
            tag = self.resolve(candidate)
            if tag not in seen:
                seen.add(tag)
                result.append(tag)
        return result
