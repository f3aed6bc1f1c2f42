"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path

from mdtag.core.config import ClaudeConfig, Config, OpenAIConfig
from mdtag.sources import FileSystemConfig, FileSystemStore

from tests.fakes import FakeClock, FakeProviderFactory, InMemoryDocumentStore


@pytest.fixture
def config() -> Config:
    """Provide a Config with credentials for both providers."""
    return Config(
        claude=ClaudeConfig(api_key="sk-ant-test", min_request_interval=0.0),
        openai=OpenAIConfig(api_key="sk-openai-test", min_request_interval=0.0),
    )


@pytest.fixture
def clock() -> FakeClock:
    """Provide a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def provider_factory() -> FakeProviderFactory:
    """Provide a factory of well-behaved fake providers."""
    return FakeProviderFactory()


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    """Provide an empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    """Provide a small vault directory with notes."""
    root = tmp_path / "vault"
    (root / "projects").mkdir(parents=True)
    (root / ".obsidian").mkdir()
    (root / "plain.md").write_text("Notes about #python and asyncio.\n")
    (root / "projects" / "alpha.md").write_text(
        "---\ntitle: Alpha\ntags:\n  - machine-learning\n---\n\nAlpha project.\n"
    )
    (root / ".obsidian" / "workspace.md").write_text("ignored")
    return root


@pytest.fixture
def fs_store(vault: Path) -> FileSystemStore:
    """Provide a filesystem store over the sample vault."""
    return FileSystemStore(FileSystemConfig(base_path=vault))
