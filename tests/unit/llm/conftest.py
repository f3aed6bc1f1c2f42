"""Shared fixtures for LLM tests."""

import pytest

from mdtag.core.config import ClaudeConfig, OpenAIConfig


@pytest.fixture
def claude_config() -> ClaudeConfig:
    """Provide a Claude config without request pacing."""
    return ClaudeConfig(api_key="sk-ant-test", min_request_interval=0.0)


@pytest.fixture
def openai_config() -> OpenAIConfig:
    """Provide an OpenAI config without request pacing."""
    return OpenAIConfig(api_key="sk-openai-test", min_request_interval=0.0)
