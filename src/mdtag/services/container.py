"""Engine container for lifecycle management of the tagging components."""

from __future__ import annotations

import asyncio
import contextlib
from typing import TYPE_CHECKING

from loguru import logger

from ..core.config import Config
from ..core.exceptions import ConfigurationError
from ..core.types import BatchProgress, DocumentOutcome, ProviderKind
from ..llm.pool import ProviderPool
from ..metadata.vocabulary import Vocabulary, VocabularyIndex
from .batch import BatchController, NotifyCallback, ProgressCallback
from .pipeline import TagGenerationPipeline

if TYPE_CHECKING:
    from ..sources.base import DocumentStore


class TaggingContainer:
    """Owns the provider pool, idle sweeper and per-run components.

    The pool is created by :meth:`start` and closed by :meth:`close`;
    the idle sweeper runs as a background task in between. Every tag_* call
    takes a fresh vocabulary snapshot; the pipeline and batch controller
    are created lazily on first access.

    Usage as context manager (recommended):

        store = FileSystemStore(FileSystemConfig(base_path=vault))
        async with TaggingContainer(config, store) as engine:
            outcome = await engine.tag_document("inbox/idea.md")
            progress = await engine.tag_all()

    Usage with manual lifecycle:

        engine = TaggingContainer(config, store)
        engine.start()
        try:
            # use engine
        finally:
            await engine.close()
    """

    def __init__(
        self,
        config: Config,
        store: "DocumentStore",
        pool: ProviderPool | None = None,
        progress: ProgressCallback | None = None,
        notify: NotifyCallback | None = None,
    ):
        """Initialize container.

        Args:
            config: Application configuration.
            store: Document store to read from and write to.
            pool: Optional pre-built pool (created on start otherwise).
            progress: Progress callback passed to the batch controller.
            notify: Notice callback passed to the batch controller.
        """
        self.config = config
        self.store = store
        self._pool = pool
        self._progress = progress
        self._notify = notify
        self._sweeper: asyncio.Task | None = None
        self._started = False

        # Lazy-initialized per-run components
        self._vocabulary: Vocabulary | None = None
        self._pipeline: TagGenerationPipeline | None = None
        self._batch: BatchController | None = None

    def start(self) -> None:
        """Validate credentials, create the pool and schedule the sweeper.

        Must be called from a running event loop.

        Raises:
            ConfigurationError: If no provider has an API key.
        """
        if self._started:
            return

        usable = [kind for kind in ProviderKind if self.config.has_credentials(kind)]
        if not usable:
            raise ConfigurationError(
                "No LLM provider configured: set ANTHROPIC_API_KEY or OPENAI_API_KEY"
            )
        if self.config.provider not in usable:
            logger.warning(
                f"{self.config.provider.display_name} has no API key, "
                f"every document will use the fallback provider"
            )

        if self._pool is None:
            self._pool = ProviderPool(self.config.pool)
        self._sweeper = asyncio.create_task(
            self._pool.run_sweeper(self.config.pool.sweep_interval)
        )
        self._started = True
        logger.debug(
            f"TaggingContainer started: provider={self.config.provider.value}, "
            f"usable={[kind.value for kind in usable]}"
        )

    async def close(self) -> None:
        """Stop the sweeper and close every pooled provider."""
        if self._sweeper is not None:
            self._sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._sweeper
            self._sweeper = None

        if self._pool is not None:
            await self._pool.close()
            logger.debug("Provider pool closed")

        self._pipeline = None
        self._batch = None
        self._started = False

    async def __aenter__(self) -> "TaggingContainer":
        """Async context manager entry."""
        self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    # --- Component accessors ---

    @property
    def pool(self) -> ProviderPool:
        """Get the provider pool.

        Raises:
            RuntimeError: If the container has not been started.
        """
        if not self._started or self._pool is None:
            raise RuntimeError("TaggingContainer is not started")
        return self._pool

    @property
    def vocabulary(self) -> Vocabulary:
        """Get or build the vocabulary snapshot."""
        if self._vocabulary is None:
            self._vocabulary = VocabularyIndex(self.store, self.config.tag_prefix).snapshot()
        return self._vocabulary

    def refresh_vocabulary(self) -> Vocabulary:
        """Rebuild the vocabulary snapshot; called at the start of every run."""
        self._vocabulary = None
        self._pipeline = None
        return self.vocabulary

    @property
    def pipeline(self) -> TagGenerationPipeline:
        """Get or create TagGenerationPipeline."""
        if self._pipeline is None:
            self._pipeline = TagGenerationPipeline(
                self.store, self.pool, self.config, self.vocabulary
            )
        return self._pipeline

    @property
    def batch(self) -> BatchController:
        """Get or create BatchController."""
        if self._batch is None:
            self._batch = BatchController(
                self.store,
                self.config.batch,
                progress=self._progress,
                notify=self._notify,
            )
        return self._batch

    # --- Entry points ---
    # Each call is a new run with a fresh vocabulary snapshot

    async def tag_document(self, document_id: str) -> DocumentOutcome:
        self.refresh_vocabulary()
        return await self.pipeline.process(document_id)

    async def tag_container(self, container_id: str) -> BatchProgress:
        self.refresh_vocabulary()
        return await self.batch.run_container(container_id, self.pipeline)

    async def tag_all(self) -> BatchProgress:
        self.refresh_vocabulary()
        return await self.batch.run_all(self.pipeline)
