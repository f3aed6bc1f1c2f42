"""Batch tagging over many documents."""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Awaitable, Callable, Sequence

from loguru import logger

from ..core.config import BatchConfig
from ..core.exceptions import DocumentNotFoundError
from ..core.types import BatchProgress

if TYPE_CHECKING:
    from ..sources.base import DocumentStore
    from .pipeline import TagGenerationPipeline

ProgressCallback = Callable[[int, int], object]
NotifyCallback = Callable[[str], object]

NO_DOCUMENTS = "No markdown files found"


class BatchController:
    """Runs the pipeline over a list of documents in paced batches.

    Documents are processed one at a time in groups of ``batch_size``,
    with ``batch_delay`` seconds between groups. A failing document is
    counted and the run continues.

    Example:

        controller = BatchController(store, config.batch, progress=print)
        result = await controller.run_all(pipeline)
        print(result.summary)
    """

    def __init__(
        self,
        store: "DocumentStore",
        config: BatchConfig,
        progress: ProgressCallback | None = None,
        notify: NotifyCallback | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize BatchController.

        Args:
            store: Store used to enumerate documents.
            config: Batch size, delay and notice interval.
            progress: Called with (attempted, total) after every document.
            notify: Called with a short user-facing message.
            sleep: Awaitable used for the inter-batch delay.
        """
        self.store = store
        self.config = config
        self._progress = progress
        self._notify = notify
        self._sleep = sleep

    async def run(
        self, document_ids: Sequence[str], pipeline: "TagGenerationPipeline"
    ) -> BatchProgress:
        """Tag the given documents.

        Args:
            document_ids: Documents to process, in order.
            pipeline: Pipeline that tags a single document.

        Returns:
            BatchProgress with counts, failures and the summary line.
        """
        ids = list(document_ids)
        result = BatchProgress(total=len(ids))
        if not ids:
            result.summary = NO_DOCUMENTS
            self._emit(result.summary)
            return result

        logger.info(
            f"Tagging {result.total} documents: batch_size={self.config.batch_size}, "
            f"delay={self.config.batch_delay}s"
        )
        start_time = time.perf_counter()
        size = max(1, self.config.batch_size)

        for offset in range(0, len(ids), size):
            for document_id in ids[offset:offset + size]:
                try:
                    outcome = await pipeline.process(document_id)
                except Exception as e:
                    logger.error(f"Failed to tag {document_id}: {e}")
                    result.errors += 1
                    result.failed.append((document_id, str(e)))
                else:
                    if outcome.success:
                        result.processed += 1
                    else:
                        result.errors += 1
                        result.failed.append((document_id, outcome.error or "unknown error"))

                if self._progress:
                    self._progress(result.attempted, result.total)
                if (
                    self.config.notice_every > 0
                    and result.attempted % self.config.notice_every == 0
                    and result.attempted < result.total
                ):
                    self._emit(f"Processed {result.attempted}/{result.total} files...")

            if offset + size < len(ids):
                await self._sleep(self.config.batch_delay)

        result.summary = f"Completed. Processed {result.processed}/{result.total} files."
        if result.errors:
            result.summary += f" Errors: {result.errors}"

        elapsed = (time.perf_counter() - start_time) * 1000
        logger.info(f"{result.summary} ({elapsed:.1f}ms)")
        self._emit(result.summary)
        return result

    async def run_container(
        self, container_id: str, pipeline: "TagGenerationPipeline"
    ) -> BatchProgress:
        """Tag every document under one container (directory).

        Raises:
            DocumentNotFoundError: If the store has no such container.
        """
        container_id = container_id.strip("/")
        if container_id not in self.store.list_containers():
            raise DocumentNotFoundError(container_id)
        ids = [document_id for document_id, _ in self.store.list_documents(container_id)]
        return await self.run(ids, pipeline)

    async def run_all(self, pipeline: "TagGenerationPipeline") -> BatchProgress:
        """Tag every document in the store."""
        ids = [document_id for document_id, _ in self.store.list_documents()]
        return await self.run(ids, pipeline)

    def _emit(self, message: str) -> None:
        if self._notify:
            self._notify(message)
