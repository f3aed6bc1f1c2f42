"""Pytest configuration and fixtures for service layer tests."""

import pytest

from mdtag.core.config import PoolConfig
from mdtag.llm.pool import ProviderPool
from mdtag.metadata.vocabulary import Vocabulary
from mdtag.services.pipeline import TagGenerationPipeline


@pytest.fixture
def make_pipeline(memory_store, config, provider_factory, clock):
    """Provide a builder for pipelines over the in-memory store.

    Usage:
        pipeline = make_pipeline(vocabulary=Vocabulary(["python"]))
    """

    def _make(
        store=None,
        factory=None,
        vocabulary: Vocabulary | None = None,
        pool_config: PoolConfig | None = None,
        pipeline_config=None,
    ) -> TagGenerationPipeline:
        pool = ProviderPool(
            pool_config or PoolConfig(),
            factory=factory or provider_factory,
            clock=clock,
        )
        return TagGenerationPipeline(
            store if store is not None else memory_store,
            pool,
            pipeline_config or config,
            vocabulary if vocabulary is not None else Vocabulary(),
        )

    return _make
