"""
InfoDetector - builds the canonical record and exposes the accessors.

build_record() fans the probes out concurrently, reconciles the results and
returns without waiting on the network: network facts are read through the
cache, and a stale cache only schedules a background refresh.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from config.settings_loader import get_network_ttl_ms
from infodetect.engines.network_chain import NetworkResolver
from infodetect.engines.reconcile import (
    ChipInfo,
    UNKNOWN_BROWSER,
    detect_browser,
    detect_mobile,
    detect_os,
    parse_chip_info,
    preferred_languages,
    resolve_architecture,
)
from infodetect.probes.adapters import default_value, probe, probe_sync
from infodetect.probes.base import Capability
from infodetect.probes.environment import HostEnvironment
from infodetect.probes.ua_parser import ParsedUA, parse_user_agent
from infodetect.schemas.record_schemas import (
    BatteryInfo,
    CanonicalRecord,
    ConnectionInfo,
    GeolocationData,
    NetworkFacts,
    OSInfo,
    ScreenInfo,
)
from infodetect.store import NetworkCache

logger = logging.getLogger("detector")

RECORD_CAPABILITIES = [
    Capability.HIGH_ENTROPY,
    Capability.USER_AGENT,
    Capability.GPU,
    Capability.BATTERY,
    Capability.LANGUAGES,
    Capability.CPU_CORES,
    Capability.DEVICE_MEMORY,
]


def _resolve_group(name: str, resolve: Callable[[], Any], default: Any) -> Any:
    """Run one field group; a failure yields the group's default only."""
    try:
        return resolve()
    except Exception as e:
        logger.warning("Could not resolve %s, using default: %s", name, e)
        return default


class InfoDetector:
    """
    Usage:
        detector = InfoDetector(ClientReportEnvironment(report, headers))
        record = await detector.build_record()
        record.network()            # live view of the cache
        ip = await detector.get_ip()
    """

    def __init__(
        self,
        env: HostEnvironment,
        resolver: Optional[NetworkResolver] = None,
        cache: Optional[NetworkCache] = None,
    ):
        if resolver is None:
            resolver = NetworkResolver(cache or NetworkCache(ttl_ms=get_network_ttl_ms()))
        self.env = env
        self.resolver = resolver
        self.cache = resolver.cache

    # =========================================================================
    # CANONICAL RECORD
    # =========================================================================

    async def build_record(self, force_network_refresh: bool = False) -> CanonicalRecord:
        results = await asyncio.gather(*(probe(self.env, cap) for cap in RECORD_CAPABILITIES))
        values = {r.capability: r.value if r.is_present else default_value(r.capability) for r in results}

        hev = values[Capability.HIGH_ENTROPY]
        user_agent = values[Capability.USER_AGENT]
        gpu = values[Capability.GPU]

        parsed: ParsedUA = _resolve_group("user agent", lambda: parse_user_agent(user_agent), ParsedUA())
        os_info = _resolve_group("os", lambda: detect_os(hev, parsed.os), OSInfo())
        browser = _resolve_group("browser", lambda: detect_browser(hev, parsed), UNKNOWN_BROWSER)
        chip = _resolve_group("hardware", lambda: parse_chip_info(gpu), ChipInfo("Unknown", gpu, ""))
        arch = _resolve_group("architecture", lambda: resolve_architecture(hev, chip), "")
        is_mobile = _resolve_group("mobility", lambda: detect_mobile(hev, user_agent), False)
        languages = _resolve_group(
            "languages", lambda: preferred_languages(values[Capability.LANGUAGES]), []
        )

        if force_network_refresh or not self.cache.is_usable():
            self.resolver.refresh_in_background(force_network_refresh)

        record = CanonicalRecord(
            browser=browser,
            product=parsed.product,
            manufacturer=parsed.manufacturer,
            is_mobile=is_mobile,
            languages=languages,
            cpu=chip.type,
            cpu_cores=values[Capability.CPU_CORES],
            arch=arch,
            ram=values[Capability.DEVICE_MEMORY],
            gpu=gpu,
            battery=values[Capability.BATTERY],
            os=os_info,
        )
        return record.bind_network(self.cache)

    # =========================================================================
    # NETWORK ACCESSORS
    # =========================================================================

    async def get_network_info(self, force_refresh: bool = False) -> NetworkFacts:
        return await self.resolver.get_network_info(force_refresh)

    async def get_ip(self, force_refresh: bool = False) -> str:
        return await self.resolver.get_ip(force_refresh)

    async def get_isp(self, force_refresh: bool = False) -> str:
        return await self.resolver.get_isp(force_refresh)

    async def get_country(self, force_refresh: bool = False) -> str:
        return await self.resolver.get_country(force_refresh)

    # =========================================================================
    # OTHER CAPABILITIES
    # =========================================================================

    async def get_location(self) -> Optional[GeolocationData]:
        """Geolocation, or None when unavailable or denied."""
        return (await probe(self.env, Capability.GEOLOCATION)).value_or(None)

    async def get_battery(self) -> BatteryInfo:
        result = await probe(self.env, Capability.BATTERY)
        return result.value if result.is_present else default_value(Capability.BATTERY)

    def get_connection(self) -> Optional[ConnectionInfo]:
        """Connection quality read straight from the host; None if not exposed."""
        return probe_sync(self.env, Capability.CONNECTION).value_or(None)

    def get_screen(self) -> ScreenInfo:
        result = probe_sync(self.env, Capability.SCREEN)
        return result.value if result.is_present else default_value(Capability.SCREEN)
