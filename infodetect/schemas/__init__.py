"""
Detection schemas - pydantic models shared by probes, engines and the API.
"""

from infodetect.schemas.record_schemas import (
    BatteryInfo,
    BrandVersion,
    CanonicalRecord,
    ClientReport,
    ConnectionInfo,
    GeolocationData,
    HighEntropyValues,
    NetworkFacts,
    OSInfo,
    ProviderResult,
    ScreenInfo,
)

__all__ = [
    "BatteryInfo",
    "BrandVersion",
    "CanonicalRecord",
    "ClientReport",
    "ConnectionInfo",
    "GeolocationData",
    "HighEntropyValues",
    "NetworkFacts",
    "OSInfo",
    "ProviderResult",
    "ScreenInfo",
]
