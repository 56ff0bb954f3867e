"""
Probe adapters - one uniform, capability-gated call per host facility.

probe(env, capability) returns a ProbeResult holding the normalized value
(pydantic models, plain strings and numbers). It never raises. DEFAULTS maps
each capability to a factory for the value substituted when a probe is absent;
default_value() builds a new one per call.
"""

import math
from typing import Any, Callable, Dict, List, Optional

from config.settings_loader import (
    get_geolocation_options,
    get_high_entropy_hints,
    get_probe_timeout_ms,
)
from infodetect.probes.base import Capability, ProbeResult, run_probe, run_probe_sync
from infodetect.probes.environment import HostEnvironment
from infodetect.schemas.record_schemas import (
    BatteryInfo,
    ConnectionInfo,
    GeolocationData,
    HighEntropyValues,
    ScreenInfo,
)


DEFAULTS: Dict[Capability, Callable[[], Any]] = {
    Capability.HIGH_ENTROPY: HighEntropyValues,
    Capability.USER_AGENT: str,
    Capability.GPU: str,
    Capability.BATTERY: BatteryInfo,
    Capability.GEOLOCATION: lambda: None,
    Capability.CONNECTION: lambda: None,
    Capability.SCREEN: ScreenInfo,
    Capability.LANGUAGES: list,
    Capability.CPU_CORES: int,
    Capability.DEVICE_MEMORY: int,
}

ASYNC_CAPABILITIES = {Capability.HIGH_ENTROPY, Capability.BATTERY, Capability.GEOLOCATION}


# =============================================================================
# Normalizers for raw platform shapes
# =============================================================================

def _seconds(value: Any) -> float:
    # JSON has no Infinity; browsers serialize it as null
    if value is None:
        return math.inf
    return float(value)


def normalize_battery(raw: Dict[str, Any]) -> BatteryInfo:
    level = float(raw.get("level") or 0)
    return BatteryInfo(
        is_charging=bool(raw.get("charging", False)),
        level=round(level * 100),
        charging_time=_seconds(raw.get("chargingTime")),
        discharging_time=_seconds(raw.get("dischargingTime")),
    )


def normalize_screen(raw: Dict[str, Any]) -> ScreenInfo:
    orientation = raw.get("orientation")
    if isinstance(orientation, dict):
        orientation = orientation.get("type")
    if not orientation:
        inner_w = raw.get("innerWidth") or raw.get("width") or 0
        inner_h = raw.get("innerHeight") or raw.get("height") or 0
        orientation = "landscape-primary" if inner_w > inner_h else "portrait-primary"
    return ScreenInfo(
        width=raw.get("width") or 0,
        height=raw.get("height") or 0,
        avail_width=raw.get("availWidth") or 0,
        avail_height=raw.get("availHeight") or 0,
        color_depth=raw.get("colorDepth") or 0,
        pixel_ratio=raw.get("devicePixelRatio") or raw.get("pixelRatio") or 1,
        orientation=orientation,
    )


def normalize_connection(raw: Dict[str, Any]) -> ConnectionInfo:
    return ConnectionInfo(
        type=raw.get("type") or "unknown",
        effective_type=raw.get("effectiveType") or "unknown",
        downlink=raw.get("downlink") or 0,
        rtt=raw.get("rtt") or 0,
        save_data=bool(raw.get("saveData", False)),
    )


def normalize_geolocation(raw: Dict[str, Any]) -> GeolocationData:
    coords = raw.get("coords") or raw
    return GeolocationData(
        latitude=coords["latitude"],
        longitude=coords["longitude"],
        accuracy=coords.get("accuracy") or 0,
        timestamp=int(raw.get("timestamp") or 0),
    )


# =============================================================================
# Capability calls
# =============================================================================

async def _high_entropy(env: HostEnvironment, hints: List[str]) -> HighEntropyValues:
    return await env.high_entropy_values(hints)


async def _battery(env: HostEnvironment) -> BatteryInfo:
    return normalize_battery(await env.battery())


async def _geolocation(env: HostEnvironment, timeout_ms: int, high_accuracy: bool) -> GeolocationData:
    return normalize_geolocation(await env.geolocation(timeout_ms=timeout_ms, high_accuracy=high_accuracy))


_SYNC_CALLS = {
    Capability.USER_AGENT: lambda env: env.user_agent(),
    Capability.GPU: lambda env: env.gpu_renderer(),
    Capability.CONNECTION: lambda env: normalize_connection(env.connection()),
    Capability.SCREEN: lambda env: normalize_screen(env.screen()),
    Capability.LANGUAGES: lambda env: list(env.languages()),
    Capability.CPU_CORES: lambda env: int(env.hardware_concurrency()),
    Capability.DEVICE_MEMORY: lambda env: float(env.device_memory()),
}


def probe_sync(env: HostEnvironment, capability: Capability) -> ProbeResult:
    """Synchronous read of a non-suspending capability (no caching)."""
    if capability in ASYNC_CAPABILITIES:
        raise ValueError(f"{capability.value} is asynchronous; use probe()")
    return run_probe_sync(capability, lambda: _SYNC_CALLS[capability](env))


async def probe(env: HostEnvironment, capability: Capability, timeout_ms: Optional[int] = None) -> ProbeResult:
    """
    Query one capability. Asynchronous capabilities are bounded by
    ``timeout_ms`` (probes.timeout_ms by default; geolocation uses its own
    configured timeout).
    """
    if capability not in ASYNC_CAPABILITIES:
        return probe_sync(env, capability)

    if timeout_ms is None:
        timeout_ms = get_probe_timeout_ms()

    if capability is Capability.HIGH_ENTROPY:
        hints = get_high_entropy_hints()
        return await run_probe(capability, lambda: _high_entropy(env, hints), timeout_ms)

    if capability is Capability.BATTERY:
        return await run_probe(capability, lambda: _battery(env), timeout_ms)

    options = get_geolocation_options()
    geo_timeout = options.get("timeout_ms", timeout_ms)
    return await run_probe(
        capability,
        lambda: _geolocation(env, geo_timeout, bool(options.get("high_accuracy", False))),
        geo_timeout,
    )


def default_value(capability: Capability) -> Any:
    """A new default for an absent capability."""
    return DEFAULTS[capability]()
