"""
infodetect - device, browser and network identity in one record.

Independent, unreliable capability probes are reconciled by a fixed priority
order into a CanonicalRecord. Public network identity (IP, ISP, country) is
resolved through an ordered chain of lookup providers and kept in a TTL cache
that every record reads through.

Usage:
    from infodetect import InfoDetector, ClientReportEnvironment

    detector = InfoDetector(ClientReportEnvironment(report, headers))
    record = await detector.build_record()
    print(record.browser, record.os.string, record.network().ip)
"""

# Core
from infodetect.detector import InfoDetector
from infodetect.store import NetworkCache

# Engines
from infodetect.engines import NetworkResolver

# Probes
from infodetect.probes import (
    Capability,
    ClientReportEnvironment,
    HostEnvironment,
    ProbeResult,
)

# Providers
from infodetect.normalizer import ProviderEntry, build_providers

# Schemas
from infodetect.schemas import CanonicalRecord, ClientReport, NetworkFacts

__all__ = [
    # Core
    "InfoDetector",
    "NetworkCache",
    # Engines
    "NetworkResolver",
    # Probes
    "Capability",
    "ClientReportEnvironment",
    "HostEnvironment",
    "ProbeResult",
    # Providers
    "ProviderEntry",
    "build_providers",
    # Schemas
    "CanonicalRecord",
    "ClientReport",
    "NetworkFacts",
]
