"""OpenAI tag provider."""

import httpx

from ..core.config import OpenAIConfig
from ..core.exceptions import ProviderError
from ..core.types import ProviderKind
from .base import TagProvider

MAX_TOKENS = 300
TEMPERATURE = 0.3


class OpenAIProvider(TagProvider):
    """Tag provider backed by the OpenAI Chat Completions API."""

    kind = ProviderKind.OPENAI

    def __init__(self, config: OpenAIConfig):
        """Initialize OpenAI provider.

        Args:
            config: OpenAIConfig with API credentials.

        Raises:
            ValueError: If API key is not configured.
        """
        if not config.api_key:
            raise ValueError("OPENAI_API_KEY environment variable not set")

        super().__init__(config.model, config.min_request_interval)
        self.config = config
        self._client = httpx.AsyncClient(
            timeout=config.timeout,
            headers={"Authorization": f"Bearer {config.api_key}"},
        )

    async def complete(self, system: str, prompt: str) -> str:
        response = await self._client.post(
            f"{self.config.base_url}/chat/completions",
            json={
                "model": self.model,
                "messages": [
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                "max_tokens": MAX_TOKENS,
                "temperature": TEMPERATURE,
            },
        )

        if response.status_code != 200:
            raise ProviderError(
                f"OpenAI API returned HTTP {response.status_code}: {response.text[:200]}"
            )

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderError(f"Unexpected OpenAI API payload: {e}") from e

        return content or ""

    async def close(self) -> None:
        await self._client.aclose()
