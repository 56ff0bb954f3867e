"""
Engines - network provider chain and reconciliation rules.
"""

from infodetect.engines.network_chain import NetworkResolver
from infodetect.engines.reconcile import (
    ChipInfo,
    detect_browser,
    detect_mobile,
    detect_os,
    parse_chip_info,
    preferred_languages,
    resolve_architecture,
)

__all__ = [
    "NetworkResolver",
    "ChipInfo",
    "detect_browser",
    "detect_mobile",
    "detect_os",
    "parse_chip_info",
    "preferred_languages",
    "resolve_architecture",
]
