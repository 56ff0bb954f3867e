"""
Provider normalizers - map each lookup service's JSON to one shape.

Every provider answers with its own schema:
- ipinfo:  {ip, org, country}
- ipwhois: {ip, isp | connection.isp, country_code}
- ipify:   {ip}

The chain only ever sees ProviderResult, so nothing downstream depends on
which provider answered.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from config.settings_loader import get_provider_configs
from infodetect.schemas.record_schemas import ProviderResult


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def normalize_ipinfo(data: Dict[str, Any]) -> ProviderResult:
    return ProviderResult(
        ip=_text(data.get("ip")),
        isp=_text(data.get("org")),
        country=_text(data.get("country")),
    )


def normalize_ipwhois(data: Dict[str, Any]) -> ProviderResult:
    isp = data.get("isp")
    if not isp and isinstance(data.get("connection"), dict):
        isp = data["connection"].get("isp")
    return ProviderResult(
        ip=_text(data.get("ip")),
        isp=_text(isp),
        country=_text(data.get("country_code")),
    )


def normalize_ipify(data: Dict[str, Any]) -> ProviderResult:
    return ProviderResult(ip=_text(data.get("ip")))


NORMALIZERS: Dict[str, Callable[[Dict[str, Any]], ProviderResult]] = {
    "ipinfo": normalize_ipinfo,
    "ipwhois": normalize_ipwhois,
    "ipify": normalize_ipify,
}


@dataclass(frozen=True)
class ProviderEntry:
    """One lookup service. Position in the chain is its priority."""
    name: str
    url: str
    normalize: Callable[[Dict[str, Any]], ProviderResult]


def build_providers(configs: Optional[List[Dict[str, str]]] = None) -> List[ProviderEntry]:
    """
    Build the ordered chain from settings.

    Args:
        configs: list of {name, url, normalizer}; defaults to the
                 network.providers section of the settings file.
    """
    if configs is None:
        configs = get_provider_configs()

    providers = []
    for cfg in configs:
        key = cfg.get("normalizer", cfg["name"])
        if key not in NORMALIZERS:
            raise ValueError(f"Unknown normalizer '{key}' for provider {cfg['name']}")
        providers.append(ProviderEntry(name=cfg["name"], url=cfg["url"], normalize=NORMALIZERS[key]))
    return providers
