"""
Pydantic Schemas for detection results

Defines the data models for:
- Probe payloads (battery, screen, connection, geolocation, high-entropy hints)
- NetworkFacts (cached public network identity)
- CanonicalRecord (the reconciled output)
- ClientReport (what a browser client posts to the service)
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic.alias_generators import to_camel


# =============================================================================
# Common Types
# =============================================================================

class CamelModel(BaseModel):
    """Accepts the camelCase keys browsers use, dumps snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BrandVersion(BaseModel):
    """One entry of a Client Hints brand list."""
    brand: str = ""
    version: str = ""


# =============================================================================
# Probe payloads
# =============================================================================

class HighEntropyValues(CamelModel):
    """Client Hints high-entropy values (navigator.userAgentData)."""
    platform: str = ""
    platform_version: str = ""
    architecture: str = ""
    model: str = ""
    mobile: Optional[bool] = None
    bitness: str = ""
    brands: List[BrandVersion] = Field(default_factory=list)
    full_version_list: List[BrandVersion] = Field(default_factory=list)


class BatteryInfo(BaseModel):
    """Battery status. Level is a percentage; times are seconds, inf = n/a."""
    is_charging: bool = False
    level: int = 0
    charging_time: float = float("inf")
    discharging_time: float = float("inf")


class ScreenInfo(BaseModel):
    width: int = 0
    height: int = 0
    avail_width: int = 0
    avail_height: int = 0
    color_depth: int = 0
    pixel_ratio: float = 1.0
    orientation: str = ""


class ConnectionInfo(BaseModel):
    type: str = "unknown"
    effective_type: str = "unknown"
    downlink: float = 0
    rtt: int = 0
    save_data: bool = False


class GeolocationData(BaseModel):
    latitude: float
    longitude: float
    accuracy: float
    timestamp: int


class OSInfo(BaseModel):
    """Short name (win, mac, linux, android, ios, chromeos), version, display string."""
    name: str = ""
    version: Union[int, float, str] = ""
    string: str = "Unknown OS"


# =============================================================================
# Network facts
# =============================================================================

class NetworkFacts(BaseModel):
    ip: str = ""
    isp: str = ""
    country: str = ""
    last_updated: int = 0  # ms since epoch, 0 = never


class ProviderResult(BaseModel):
    """Normalized output of one provider; empty strings mean 'not supplied'."""
    ip: str = ""
    isp: str = ""
    country: str = ""


# =============================================================================
# Canonical record
# =============================================================================

class CanonicalRecord(BaseModel):
    """
    The reconciled snapshot returned to callers.

    Network facts are not copied into the record. ``network()`` reads through
    to the cache store it was built against, so a background refresh that
    completes later is visible to every record already handed out.
    """
    browser: str = "Unknown Browser"
    product: str = ""
    manufacturer: str = ""
    is_mobile: bool = False
    languages: List[str] = Field(default_factory=list)

    cpu: str = ""
    cpu_cores: int = 0
    arch: str = ""
    ram: float = 0
    gpu: str = ""

    battery: BatteryInfo = Field(default_factory=BatteryInfo)
    os: OSInfo = Field(default_factory=OSInfo)

    _network_store: Any = PrivateAttr(default=None)

    def bind_network(self, store) -> "CanonicalRecord":
        self._network_store = store
        return self

    def network(self) -> NetworkFacts:
        """Current network facts from the cache store (empty if unbound)."""
        if self._network_store is None:
            return NetworkFacts()
        return self._network_store.snapshot()

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict including a network snapshot taken now."""
        data = self.model_dump(mode="json")
        data["network"] = self.network().model_dump(mode="json")
        return data


# =============================================================================
# Client report (HTTP surface)
# =============================================================================

class ClientReport(CamelModel):
    """
    Facts gathered in the browser and posted to the service.

    Battery, screen, connection and geolocation are passed through as the raw
    objects the browser APIs return; the probe adapters normalize them. A
    missing field means the capability is not available in that client.
    Capabilities the user refused are listed in ``denied``.
    """
    user_agent: Optional[str] = None
    high_entropy: Optional[HighEntropyValues] = None
    gpu_renderer: Optional[str] = None
    battery: Optional[Dict[str, Any]] = None
    screen: Optional[Dict[str, Any]] = None
    connection: Optional[Dict[str, Any]] = None
    geolocation: Optional[Dict[str, Any]] = None
    languages: Optional[List[str]] = None
    hardware_concurrency: Optional[int] = None
    device_memory: Optional[float] = None
    denied: List[str] = Field(default_factory=list)
