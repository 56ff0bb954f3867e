"""
Probe primitives - capability ids, ProbeResult, and the never-raise wrapper.

A probe either fully succeeds (present) or is absent with a reason. Absence
is normal: callers substitute the capability's default.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from infodetect.errors import CapabilityUnavailable

logger = logging.getLogger("probes")


class Capability(str, Enum):
    HIGH_ENTROPY = "high_entropy"
    USER_AGENT = "user_agent"
    GPU = "gpu"
    BATTERY = "battery"
    GEOLOCATION = "geolocation"
    CONNECTION = "connection"
    SCREEN = "screen"
    LANGUAGES = "languages"
    CPU_CORES = "cpu_cores"
    DEVICE_MEMORY = "device_memory"


# Failure reasons carried by absent results
UNAVAILABLE = "unavailable"
DENIED = "denied"
TIMEOUT = "timeout"
FAILED = "failed"


@dataclass(frozen=True)
class ProbeResult:
    capability: Capability
    is_present: bool
    value: Any = None
    reason: str = ""

    @classmethod
    def present(cls, capability: Capability, value: Any) -> "ProbeResult":
        return cls(capability=capability, is_present=True, value=value)

    @classmethod
    def absent(cls, capability: Capability, reason: str) -> "ProbeResult":
        return cls(capability=capability, is_present=False, reason=reason)

    def value_or(self, default: Any) -> Any:
        return self.value if self.is_present else default


def _collapse(capability: Capability, exc: BaseException) -> ProbeResult:
    if isinstance(exc, CapabilityUnavailable):
        logger.debug("%s %s: %s", capability.value, exc.reason, exc)
        return ProbeResult.absent(capability, exc.reason)
    if isinstance(exc, asyncio.TimeoutError):
        logger.debug("%s probe timed out", capability.value)
        return ProbeResult.absent(capability, TIMEOUT)
    logger.warning("%s probe failed: %s", capability.value, exc)
    return ProbeResult.absent(capability, FAILED)


def run_probe_sync(capability: Capability, call: Callable[[], Any]) -> ProbeResult:
    """Run a synchronous capability read; never raises."""
    try:
        return ProbeResult.present(capability, call())
    except Exception as e:
        return _collapse(capability, e)


async def run_probe(capability: Capability, call: Callable[[], Any], timeout_ms: int) -> ProbeResult:
    """
    Run a capability call, awaiting it under ``timeout_ms`` if it is
    asynchronous. Every failure becomes an absent result.
    """
    try:
        value = call()
        if inspect.isawaitable(value):
            value = await asyncio.wait_for(value, timeout=timeout_ms / 1000)
        return ProbeResult.present(capability, value)
    except Exception as e:
        return _collapse(capability, e)
