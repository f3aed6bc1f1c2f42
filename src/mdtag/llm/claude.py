"""Anthropic Claude tag provider."""

import httpx

from ..core.config import ClaudeConfig
from ..core.exceptions import ProviderError
from ..core.types import ProviderKind
from .base import TagProvider

MAX_TOKENS = 300
TEMPERATURE = 0.3


class ClaudeProvider(TagProvider):
    """Tag provider backed by the Anthropic Messages API."""

    kind = ProviderKind.CLAUDE

    def __init__(self, config: ClaudeConfig):
        """Initialize Claude provider.

        Args:
            config: ClaudeConfig with API credentials.

        Raises:
            ValueError: If API key is not configured.
        """
        if not config.api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        super().__init__(config.model, config.min_request_interval)
        self.config = config
        self._client = httpx.AsyncClient(
            timeout=config.timeout,
            headers={
                "x-api-key": config.api_key,
                "anthropic-version": config.api_version,
                "content-type": "application/json",
            },
        )

    async def complete(self, system: str, prompt: str) -> str:
        response = await self._client.post(
            f"{self.config.base_url}/messages",
            json={
                "model": self.model,
                "max_tokens": MAX_TOKENS,
                "temperature": TEMPERATURE,
                "system": system,
                "messages": [{"role": "user", "content": prompt}],
            },
        )

        if response.status_code != 200:
            raise ProviderError(
                f"Claude API returned HTTP {response.status_code}: {response.text[:200]}"
            )

        try:
            blocks = response.json()["content"]
        except (ValueError, KeyError, TypeError) as e:
            raise ProviderError(f"Unexpected Claude API payload: {e}") from e

        # Text blocks only; tool or thinking blocks carry no tags
        return "".join(
            block.get("text", "")
            for block in blocks or []
            if isinstance(block, dict) and block.get("type") == "text"
        )

    async def close(self) -> None:
        await self._client.aclose()
