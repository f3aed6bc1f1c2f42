"""Abstract base class for tag-generation providers."""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Sequence

import httpx
from loguru import logger

from ..core.exceptions import EmptyResponseError, ProviderError
from ..core.types import ProviderKind
from .prompts import SYSTEM_PROMPT, build_user_prompt, parse_tag_response


class TagProvider(ABC):
    """Abstract base class for LLM backends that generate tags.

    Subclasses implement :meth:`complete` for one vendor API; this class
    handles request pacing, prompting and response parsing.
    """

    kind: ProviderKind

    def __init__(self, model: str, min_request_interval: float = 0.5):
        """Initialize provider.

        Args:
            model: Model identifier sent to the backend.
            min_request_interval: Minimum seconds between two requests.
        """
        self.model = model
        self.min_request_interval = min_request_interval
        self._last_request_time: float | None = None

    async def generate_tags(self, body: str, vocabulary: Sequence[str] = ()) -> list[str]:
        """Generate raw tags for a document body.

        Args:
            body: Document text without frontmatter.
            vocabulary: Existing vault tags passed as context.

        Returns:
            Raw tag strings as returned by the model.

        Raises:
            ProviderError: If the backend call fails.
            EmptyResponseError: If the backend returns nothing usable.
        """
        await self._enforce_rate_limit()

        start_time = time.perf_counter()
        try:
            text = await self.complete(SYSTEM_PROMPT, build_user_prompt(body, vocabulary))
        except httpx.HTTPError as e:
            raise ProviderError(f"{self.kind.value} request failed: {e}") from e

        elapsed = (time.perf_counter() - start_time) * 1000
        tags = parse_tag_response(text or "")
        logger.debug(
            f"{self.kind.value} returned {len(tags)} tags (model={self.model}, {elapsed:.1f}ms)"
        )
        if not tags:
            raise EmptyResponseError(f"Empty response from {self.kind.value} API")
        return tags

    async def _enforce_rate_limit(self) -> None:
        """Wait until ``min_request_interval`` has passed since the last request."""
        now = time.monotonic()
        if self._last_request_time is not None:
            wait = self.min_request_interval - (now - self._last_request_time)
            if wait > 0:
                await asyncio.sleep(wait)
        self._last_request_time = time.monotonic()

    @abstractmethod
    async def complete(self, system: str, prompt: str) -> str:
        """Send one chat request and return the answer text.

        Raises:
            ProviderError: On a non-success status or unexpected payload.
            httpx.HTTPError: On transport failure.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the provider and release its HTTP client."""
        pass
