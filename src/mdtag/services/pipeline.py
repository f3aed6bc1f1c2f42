"""Per-document tag generation pipeline."""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

from loguru import logger

from ..core.config import Config
from ..core.exceptions import (
    EmptyResponseError,
    MdtagError,
    ProviderError,
    ProviderUnavailableError,
    WriteFailureError,
)
from ..core.types import DocumentOutcome, ProviderKind
from ..llm.pool import ProviderHandle, ProviderPool
from ..metadata.enhancer import TagConsistencyEnhancer
from ..metadata.frontmatter import detect_shape, parse_frontmatter, update_content_tags
from ..metadata.tags import format_tags
from ..metadata.vocabulary import Vocabulary

if TYPE_CHECKING:
    from ..sources.base import DocumentStore


class TagGenerationPipeline:
    """Generates tags for one document and writes them back.

    Each call to :meth:`process`:

    1. Reads the document and classifies its frontmatter.
    2. Asks the configured provider for tags, falling back once to the
       other provider if the first one is unavailable or fails.
    3. Maps the tags onto the vocabulary, formats them, and rewrites the
       document with a single store write.

    Example:

        pipeline = TagGenerationPipeline(store, pool, config, vocabulary)
        outcome = await pipeline.process("notes/python.md")
        if outcome.success:
            print(outcome.tags)
    """

    def __init__(
        self,
        store: "DocumentStore",
        pool: ProviderPool,
        config: Config,
        vocabulary: Vocabulary,
        enhancer: TagConsistencyEnhancer | None = None,
    ):
        self.store = store
        self.pool = pool
        self.config = config
        self.vocabulary = vocabulary
        self.enhancer = enhancer or TagConsistencyEnhancer(vocabulary)

    async def process(self, document_id: str) -> DocumentOutcome:
        """Tag one document.

        Args:
            document_id: Store-relative identifier of the document.

        Returns:
            DocumentOutcome. Engine errors are reported in the outcome,
            never raised.
        """
        start_time = time.perf_counter()
        outcome = DocumentOutcome(document_id=document_id, success=False)

        try:
            text = self.store.read_document(document_id)
            block = parse_frontmatter(text)
            outcome.shape = detect_shape(block)
            body = block.body

            raw_tags, outcome.provider, outcome.used_fallback = await self._request_tags(body)

            reconciled = self.enhancer.reconcile(raw_tags)
            tags = format_tags(reconciled, self.config.tag_prefix)
            if not tags:
                raise EmptyResponseError("No usable tags after reconciliation")

            updated = update_content_tags(text, tags)
            if not self.store.write_document(document_id, updated):
                raise WriteFailureError(document_id)
        except MdtagError as e:
            outcome.error = str(e)
            logger.error(f"Failed to tag {document_id}: {e}")
            return outcome

        # Unprefixed, so later candidates match them exactly
        self.vocabulary.update(reconciled)
        outcome.tags = tags
        outcome.success = True

        elapsed = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"Tagged {document_id}: tags={tags}, provider={outcome.provider.value}, "
            f"fallback={outcome.used_fallback}, {elapsed:.1f}ms"
        )
        return outcome

    async def _request_tags(self, body: str) -> tuple[list[str], ProviderKind, bool]:
        """Request tags from the primary provider, then once from its fallback.

        Returns:
            Tuple of (raw tags, provider kind used, whether fallback was used).

        Raises:
            ProviderUnavailableError: If the fallback cannot be acquired.
            ProviderError: If both providers fail.
        """
        primary = self.config.provider
        try:
            handle = await self.pool.acquire(primary, self.config)
            return await self._generate(handle, body), primary, False
        except ProviderUnavailableError as e:
            # Refusing during cooldown must not push the expiry further out
            if not e.cooling_down:
                self.pool.report_failure(primary)
            primary_error: MdtagError = e
        except ProviderError as e:
            self.pool.report_failure(primary)
            primary_error = e

        logger.warning(f"Primary provider {primary.value} failed: {primary_error}")

        handle = await self.pool.select_fallback(primary, self.config)
        try:
            return await self._generate(handle, body), handle.kind, True
        except ProviderError as e:
            self.pool.report_failure(handle.kind)
            raise ProviderError(
                f"{primary.value} failed ({primary_error}); "
                f"fallback {handle.kind.value} failed ({e})"
            ) from e

    async def _generate(self, handle: ProviderHandle, body: str) -> list[str]:
        """Call the handle's provider under the request timeout, then release it."""
        try:
            tags = await asyncio.wait_for(
                handle.provider.generate_tags(body, list(self.vocabulary)),
                timeout=self.pool.config.request_timeout,
            )
        except asyncio.TimeoutError as e:
            raise ProviderError(
                f"{handle.kind.value} request timed out after "
                f"{self.pool.config.request_timeout:.0f}s"
            ) from e
        finally:
            self.pool.release(handle)

        self.pool.report_success(handle.kind)
        return tags
