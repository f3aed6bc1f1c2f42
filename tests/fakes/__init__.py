"""Test fakes for testing without real backends.

This module provides in-memory implementations of:
- The document store protocol (for testing pipeline and batch runs)
- Tag providers and a provider factory (for testing the pool)
- A controllable clock (for cooldown and idle timing)

Example:
    from tests.fakes import FakeProviderFactory, InMemoryDocumentStore

    store = InMemoryDocumentStore({"note.md": "Body"})
    pool = ProviderPool(PoolConfig(), factory=FakeProviderFactory())
"""

from .providers import FakeClock, FakeProviderFactory, FakeTagProvider
from .store import InMemoryDocumentStore

__all__ = [
    "InMemoryDocumentStore",
    "FakeTagProvider",
    "FakeProviderFactory",
    "FakeClock",
]
