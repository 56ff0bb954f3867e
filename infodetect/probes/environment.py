"""
Host environments - where capability values come from.

HostEnvironment is the seam the probes call through. Every method raises
CapabilityUnavailable by default, so an implementation only overrides what
its host actually exposes.
"""

from abc import ABC
from typing import Any, Dict, List, Mapping, Optional

from infodetect.errors import CapabilityDenied, CapabilityUnavailable
from infodetect.probes.client_hints import has_client_hints, high_entropy_from_headers
from infodetect.schemas.record_schemas import ClientReport, HighEntropyValues


class HostEnvironment(ABC):
    """Raw platform facilities. Values are returned as the platform shapes them."""

    async def high_entropy_values(self, hints: List[str]) -> HighEntropyValues:
        raise CapabilityUnavailable("high-entropy hints not supported")

    def user_agent(self) -> str:
        raise CapabilityUnavailable("no user agent")

    def gpu_renderer(self) -> str:
        raise CapabilityUnavailable("no WebGL support")

    async def battery(self) -> Dict[str, Any]:
        raise CapabilityUnavailable("battery API not supported")

    async def geolocation(self, timeout_ms: int, high_accuracy: bool) -> Dict[str, Any]:
        raise CapabilityUnavailable("geolocation not supported")

    def connection(self) -> Dict[str, Any]:
        raise CapabilityUnavailable("network information API not supported")

    def screen(self) -> Dict[str, Any]:
        raise CapabilityUnavailable("no screen")

    def languages(self) -> List[str]:
        raise CapabilityUnavailable("no language preferences")

    def hardware_concurrency(self) -> int:
        raise CapabilityUnavailable("core count not exposed")

    def device_memory(self) -> float:
        raise CapabilityUnavailable("device memory not exposed")


class ClientReportEnvironment(HostEnvironment):
    """
    A browser client as seen by the service: its request headers plus the
    optional ClientReport it posted.

    High-entropy values come from the report when present, else from
    Sec-CH-UA-* headers. The User-Agent falls back to the request header.
    """

    def __init__(self, report: Optional[ClientReport] = None, headers: Optional[Mapping[str, str]] = None):
        self.report = report or ClientReport()
        self.headers = {k.lower(): v for k, v in (headers or {}).items()}

    def _require(self, capability: str, value: Any, missing: str) -> Any:
        if capability in self.report.denied:
            raise CapabilityDenied(f"{capability} permission denied")
        if value is None:
            raise CapabilityUnavailable(missing)
        return value

    async def high_entropy_values(self, hints: List[str]) -> HighEntropyValues:
        if "high_entropy" in self.report.denied:
            raise CapabilityDenied("high-entropy hints refused")
        if self.report.high_entropy is not None:
            values = self.report.high_entropy
        elif has_client_hints(self.headers):
            values = high_entropy_from_headers(self.headers)
        else:
            raise CapabilityUnavailable("no client hints sent")
        # Only the declared hint keys are answered
        requested = {k: v for k, v in values.model_dump(by_alias=True).items() if k in hints}
        return HighEntropyValues.model_validate(requested)

    def user_agent(self) -> str:
        ua = self.report.user_agent or self.headers.get("user-agent")
        return self._require("user_agent", ua, "no user agent")

    def gpu_renderer(self) -> str:
        renderer = self._require("gpu", self.report.gpu_renderer, "no WebGL support")
        if not renderer:
            raise CapabilityUnavailable("GPU info restricted")
        return renderer

    async def battery(self) -> Dict[str, Any]:
        return self._require("battery", self.report.battery, "battery API not supported")

    async def geolocation(self, timeout_ms: int, high_accuracy: bool) -> Dict[str, Any]:
        return self._require("geolocation", self.report.geolocation, "geolocation not supported")

    def connection(self) -> Dict[str, Any]:
        return self._require("connection", self.report.connection, "network information API not supported")

    def screen(self) -> Dict[str, Any]:
        return self._require("screen", self.report.screen, "no screen reported")

    def languages(self) -> List[str]:
        langs = self.report.languages
        if not langs and self.headers.get("accept-language"):
            langs = [part.split(";")[0].strip() for part in self.headers["accept-language"].split(",")]
            langs = [lang for lang in langs if lang and lang != "*"]
        return self._require("languages", langs or None, "no language preferences")

    def hardware_concurrency(self) -> int:
        return self._require("cpu_cores", self.report.hardware_concurrency, "core count not exposed")

    def device_memory(self) -> float:
        return self._require("device_memory", self.report.device_memory, "device memory not exposed")
