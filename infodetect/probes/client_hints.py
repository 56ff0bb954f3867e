"""
Client Hints request headers -> HighEntropyValues.

Browsers only send the high-entropy Sec-CH-UA-* headers after the server has
asked for them (see ACCEPT_CH_HEADERS, applied by the API middleware).
"""

import re
from typing import List, Mapping, Optional

from infodetect.schemas.record_schemas import BrandVersion, HighEntropyValues

CLIENT_HINT_HEADERS = [
    "Sec-CH-UA",
    "Sec-CH-UA-Mobile",
    "Sec-CH-UA-Platform",
    "Sec-CH-UA-Platform-Version",
    "Sec-CH-UA-Arch",
    "Sec-CH-UA-Bitness",
    "Sec-CH-UA-Model",
    "Sec-CH-UA-Full-Version-List",
]

ACCEPT_CH_HEADERS = {
    "Accept-CH": ", ".join(CLIENT_HINT_HEADERS),
    "Critical-CH": "Sec-CH-UA-Platform, Sec-CH-UA-Platform-Version, Sec-CH-UA-Arch",
    "Permissions-Policy": "ch-ua-platform-version=*, ch-ua-arch=*, ch-ua-model=*, ch-ua-bitness=*",
}

_BRAND_ENTRY = re.compile(r'"([^"]*)"\s*;\s*v\s*=\s*"([^"]*)"')


def parse_brand_list(value: str) -> List[BrandVersion]:
    """Parse a structured brand list: '"Chromium";v="120", "Not_A Brand";v="8"'."""
    return [BrandVersion(brand=b, version=v) for b, v in _BRAND_ENTRY.findall(value or "")]


def _sf_string(value: Optional[str]) -> str:
    """Unquote a structured-field string ('"Windows"' -> 'Windows')."""
    if value is None:
        return ""
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def _sf_boolean(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    value = value.strip()
    if value == "?1":
        return True
    if value == "?0":
        return False
    return None


def has_client_hints(headers: Mapping[str, str]) -> bool:
    lowered = {k.lower() for k in headers.keys()}
    return any(h.lower() in lowered for h in CLIENT_HINT_HEADERS)


def high_entropy_from_headers(headers: Mapping[str, str]) -> HighEntropyValues:
    """Build HighEntropyValues from Sec-CH-UA-* headers (case-insensitive)."""
    h = {k.lower(): v for k, v in headers.items()}
    return HighEntropyValues(
        platform=_sf_string(h.get("sec-ch-ua-platform")),
        platform_version=_sf_string(h.get("sec-ch-ua-platform-version")),
        architecture=_sf_string(h.get("sec-ch-ua-arch")),
        model=_sf_string(h.get("sec-ch-ua-model")),
        mobile=_sf_boolean(h.get("sec-ch-ua-mobile")),
        bitness=_sf_string(h.get("sec-ch-ua-bitness")),
        brands=parse_brand_list(h.get("sec-ch-ua", "")),
        full_version_list=parse_brand_list(h.get("sec-ch-ua-full-version-list", "")),
    )
