"""
Probes - capability-gated access to host facilities.
"""

from infodetect.probes.adapters import DEFAULTS, default_value, probe, probe_sync
from infodetect.probes.base import Capability, ProbeResult
from infodetect.probes.environment import ClientReportEnvironment, HostEnvironment

__all__ = [
    "DEFAULTS",
    "default_value",
    "probe",
    "probe_sync",
    "Capability",
    "ProbeResult",
    "ClientReportEnvironment",
    "HostEnvironment",
]
