"""
NetworkCache - the single owner of cached network identity.

One instance per process (see shared/state.py). Created empty, written only by
successful provider responses, never cleared: the TTL decides staleness, not
deletion. There is no lock; the provider chain is the only writer.
"""

import logging
import time
from typing import Callable, Optional

from infodetect.schemas.record_schemas import NetworkFacts, ProviderResult

logger = logging.getLogger("network_cache")

DEFAULT_TTL_MS = 3_600_000


def _now_ms() -> int:
    return int(time.time() * 1000)


class NetworkCache:
    """
    Usage:
        cache = NetworkCache()
        if not cache.is_fresh():
            cache.commit(ProviderResult(ip="1.2.3.4"))
        facts = cache.snapshot()
    """

    def __init__(self, ttl_ms: int = DEFAULT_TTL_MS, clock: Optional[Callable[[], int]] = None):
        self.ttl_ms = ttl_ms
        self.clock = clock or _now_ms

        self.ip = ""
        self.isp = ""
        self.country = ""
        self.last_updated = 0

    def age_ms(self) -> int:
        return self.clock() - self.last_updated

    def is_fresh(self) -> bool:
        return self.age_ms() < self.ttl_ms

    def is_usable(self) -> bool:
        """Fresh and actually populated; the only case that skips the chain."""
        return bool(self.ip) and self.is_fresh()

    def commit(self, result: ProviderResult) -> NetworkFacts:
        """
        Store a successful provider response.

        IP is always replaced. ISP and country are replaced only when the
        provider supplied them, so an IP-only provider keeps earlier values.
        """
        self.ip = result.ip
        if result.isp:
            self.isp = result.isp
        if result.country:
            self.country = result.country
        self.last_updated = self.clock()
        logger.debug("Cached network facts ip=%s isp=%s country=%s", self.ip, self.isp, self.country)
        return self.snapshot()

    def snapshot(self) -> NetworkFacts:
        return NetworkFacts(
            ip=self.ip,
            isp=self.isp,
            country=self.country,
            last_updated=self.last_updated,
        )
