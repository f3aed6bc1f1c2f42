"""Bounded pool of reusable provider handles with per-kind cooldowns."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable

from loguru import logger

from ..core.config import Config, PoolConfig
from ..core.exceptions import ProviderUnavailableError
from ..core.types import FALLBACK_PROVIDERS, ProviderKind
from .base import TagProvider
from .factory import create_tag_provider

ProviderFactory = Callable[[ProviderKind, Config], TagProvider]


@dataclass
class ProviderHandle:
    """A pooled provider instance borrowed by the pipeline."""

    kind: ProviderKind
    model: str
    provider: TagProvider
    last_used: float
    in_use: bool = False

    @property
    def key(self) -> tuple[ProviderKind, str]:
        return (self.kind, self.model)


class ProviderPool:
    """Caches provider handles and tracks failing backends.

    At most ``max_active`` handles are kept. When the bound is reached a
    request for a new ``(kind, model)`` reuses a handle of the same kind if
    one exists, otherwise the least recently used idle handle is closed to
    make room. A kind reported as failing is refused for ``cooldown``
    seconds.

    Usage:

        pool = ProviderPool(config.pool)
        handle = await pool.acquire(ProviderKind.CLAUDE, config)
        try:
            tags = await handle.provider.generate_tags(body)
        finally:
            pool.release(handle)
    """

    def __init__(
        self,
        config: PoolConfig,
        factory: ProviderFactory = create_tag_provider,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config
        self._factory = factory
        self._clock = clock
        self._handles: dict[tuple[ProviderKind, str], ProviderHandle] = {}
        self._cooldowns: dict[ProviderKind, float] = {}

    @property
    def handles(self) -> list[ProviderHandle]:
        return list(self._handles.values())

    def __len__(self) -> int:
        return len(self._handles)

    def is_cooling_down(self, kind: ProviderKind) -> bool:
        """Check cooldown for a kind, clearing it once expired."""
        expiry = self._cooldowns.get(kind)
        if expiry is None:
            return False
        if self._clock() >= expiry:
            del self._cooldowns[kind]
            logger.debug(f"Cooldown expired for {kind.value}")
            return False
        return True

    async def acquire(self, kind: ProviderKind, config: Config) -> ProviderHandle:
        """Borrow a handle for a provider kind.

        Args:
            kind: Provider kind to use.
            config: Application configuration (credentials and model).

        Returns:
            Handle marked in use. Pass it to :meth:`release` when done.

        Raises:
            ProviderUnavailableError: If the kind has no credentials, is
                cooling down, or the pool is full of busy handles.
        """
        if not config.has_credentials(kind):
            raise ProviderUnavailableError(kind.value, "no API key configured")
        if self.is_cooling_down(kind):
            remaining = self._cooldowns[kind] - self._clock()
            raise ProviderUnavailableError(
                kind.value, f"cooling down ({remaining:.0f}s left)", cooling_down=True
            )

        model = config.model_for(kind)
        handle = self._handles.get((kind, model))

        if handle is None and len(self._handles) >= self.config.max_active:
            handle = self._same_kind(kind)
            if handle is not None:
                logger.debug(
                    f"Pool full, reusing {kind.value} handle for model {handle.model} "
                    f"instead of {model}"
                )
            else:
                await self._evict_lru(kind)

        if handle is None:
            provider = self._factory(kind, config)
            handle = ProviderHandle(
                kind=kind, model=model, provider=provider, last_used=self._clock()
            )
            self._handles[handle.key] = handle
            logger.debug(f"Created {kind.value} handle (model={model}, active={len(self)})")

        handle.in_use = True
        handle.last_used = self._clock()
        return handle

    def release(self, handle: ProviderHandle) -> None:
        """Return a handle to the pool. The handle stays cached."""
        handle.in_use = False
        handle.last_used = self._clock()

    async def select_fallback(self, primary: ProviderKind, config: Config) -> ProviderHandle:
        """Acquire a handle for the fallback of ``primary``.

        Raises:
            ProviderUnavailableError: If the fallback cannot be used.
        """
        fallback = FALLBACK_PROVIDERS[primary]
        logger.info(f"Falling back from {primary.value} to {fallback.value}")
        return await self.acquire(fallback, config)

    def report_failure(self, kind: ProviderKind) -> None:
        self._cooldowns[kind] = self._clock() + self.config.cooldown
        logger.warning(
            f"{kind.value} marked as failing, cooling down for {self.config.cooldown:.0f}s"
        )

    def report_success(self, kind: ProviderKind) -> None:
        if self._cooldowns.pop(kind, None) is not None:
            logger.debug(f"Cleared cooldown for {kind.value}")

    def reset(self, kind: ProviderKind | None = None) -> None:
        """Clear the cooldown for one kind, or for all kinds."""
        if kind is None:
            self._cooldowns.clear()
        else:
            self._cooldowns.pop(kind, None)

    async def sweep_idle(self) -> int:
        """Close handles idle for longer than ``max_idle``.

        Returns:
            Number of handles evicted.
        """
        now = self._clock()
        stale = [
            handle
            for handle in self._handles.values()
            if not handle.in_use and now - handle.last_used > self.config.max_idle
        ]
        for handle in stale:
            await self._evict(handle)
        if stale:
            logger.debug(f"Evicted {len(stale)} idle handles (active={len(self)})")
        return len(stale)

    async def run_sweeper(self, interval: float | None = None) -> None:
        """Call :meth:`sweep_idle` every ``interval`` seconds until cancelled."""
        interval = interval if interval is not None else self.config.sweep_interval
        while True:
            await asyncio.sleep(interval)
            await self.sweep_idle()

    async def close(self) -> None:
        """Close every handle and forget all cooldowns."""
        for handle in list(self._handles.values()):
            await self._evict(handle)
        self._cooldowns.clear()

    def _same_kind(self, kind: ProviderKind) -> ProviderHandle | None:
        for handle in self._handles.values():
            if handle.kind is kind:
                return handle
        return None

    async def _evict_lru(self, kind: ProviderKind) -> None:
        idle = [handle for handle in self._handles.values() if not handle.in_use]
        if not idle:
            raise ProviderUnavailableError(kind.value, "provider pool is full")
        victim = min(idle, key=lambda handle: handle.last_used)
        logger.debug(f"Pool full, evicting {victim.kind.value} handle (model={victim.model})")
        await self._evict(victim)

    async def _evict(self, handle: ProviderHandle) -> None:
        self._handles.pop(handle.key, None)
        await handle.provider.close()
