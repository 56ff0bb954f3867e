"""
Network provider chain - resolves public IP / ISP / country.

Cache hit (fresh and populated) returns immediately with no I/O. Otherwise the
providers are tried one at a time in declared order, each attempt bounded by
its own timeout. The first provider that yields an IP wins and is committed to
the cache. If all of them fail the cached facts are returned unchanged.

Providers are never raced: a parallel fan-out would send several identity
lookups for one answer and make precedence depend on latency.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Set

import httpx

from config.settings_loader import get_network_timeout_ms
from infodetect.errors import (
    ChainExhausted,
    ProviderError,
    ProviderMalformed,
    ProviderTimeout,
    ProviderUnreachable,
)
from infodetect.normalizer import ProviderEntry, build_providers
from infodetect.schemas.record_schemas import NetworkFacts
from infodetect.store import NetworkCache

logger = logging.getLogger("network_chain")


class NetworkResolver:
    """
    Sequential multi-provider lookup in front of a NetworkCache.

    Usage:
        resolver = NetworkResolver(cache)
        facts = await resolver.resolve()
        resolver.refresh_in_background()   # fire-and-forget
        await resolver.aclose()
    """

    def __init__(
        self,
        cache: NetworkCache,
        providers: Optional[List[ProviderEntry]] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout_ms: Optional[int] = None,
    ):
        self.cache = cache
        self.providers = providers if providers is not None else build_providers()
        self.timeout_ms = timeout_ms if timeout_ms is not None else get_network_timeout_ms()

        self._client = client
        self._owns_client = client is None
        # Strong references so pending refreshes are not garbage collected
        self._background: Set[asyncio.Task] = set()

    # =========================================================================
    # HTTP
    # =========================================================================

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout_ms / 1000,
                follow_redirects=True,
                headers={"Accept": "application/json"},
            )
            self._owns_client = True
        return self._client

    async def _fetch_json(self, provider: ProviderEntry) -> Dict[str, Any]:
        """One attempt against one provider. Raises a ProviderError subclass."""
        timeout_s = self.timeout_ms / 1000
        client = self._get_http_client()

        try:
            response = await asyncio.wait_for(
                client.get(provider.url, timeout=timeout_s),
                timeout=timeout_s,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise ProviderTimeout(provider.name, f"no answer within {self.timeout_ms} ms") from e
        except httpx.HTTPError as e:
            raise ProviderUnreachable(provider.name, str(e)) from e

        if not response.is_success:
            raise ProviderMalformed(provider.name, f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderMalformed(provider.name, "response is not JSON") from e

        if not isinstance(data, dict):
            raise ProviderMalformed(provider.name, f"expected a JSON object, got {type(data).__name__}")
        return data

    # =========================================================================
    # RESOLUTION
    # =========================================================================

    async def resolve(self, force_refresh: bool = False) -> NetworkFacts:
        """Return network facts, walking the provider chain when needed."""
        if not force_refresh and self.cache.is_usable():
            return self.cache.snapshot()

        for provider in self.providers:
            try:
                data = await self._fetch_json(provider)
            except ProviderError as e:
                logger.debug("Provider attempt failed: %s", e)
                continue

            result = provider.normalize(data)
            if not result.ip:
                logger.debug("[%s] answered without an IP, trying next provider", provider.name)
                continue

            facts = self.cache.commit(result)
            logger.info("Network facts resolved via %s (ip=%s)", provider.name, facts.ip)
            return facts

        logger.warning("%s; serving cached facts", ChainExhausted(len(self.providers)))
        return self.cache.snapshot()

    async def get_network_info(self, force_refresh: bool = False) -> NetworkFacts:
        return await self.resolve(force_refresh)

    async def get_ip(self, force_refresh: bool = False) -> str:
        return (await self.resolve(force_refresh)).ip

    async def get_isp(self, force_refresh: bool = False) -> str:
        return (await self.resolve(force_refresh)).isp

    async def get_country(self, force_refresh: bool = False) -> str:
        return (await self.resolve(force_refresh)).country

    # =========================================================================
    # BACKGROUND REFRESH
    # =========================================================================

    def refresh_in_background(self, force_refresh: bool = False) -> asyncio.Task:
        """
        Start a refresh without waiting for it. Must be called from a running
        event loop. Overlapping refreshes are allowed; the last commit wins.
        """
        task = asyncio.create_task(self.resolve(force_refresh))
        self._background.add(task)
        task.add_done_callback(self._on_refresh_done)
        return task

    def _on_refresh_done(self, task: asyncio.Task):
        self._background.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Background network refresh failed: %s", exc)

    async def drain(self):
        """Wait for every pending background refresh to finish."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    @property
    def pending_refreshes(self) -> int:
        return len(self._background)

    async def aclose(self):
        """Cancel pending refreshes and close the HTTP client if we own it."""
        for task in list(self._background):
            task.cancel()
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()
