"""
Legacy User-Agent parsing.

Ordered (pattern, extractor) tables evaluated first-match-wins. More specific
browsers come first: Edge and Opera carry "Chrome/" too, Chrome carries
"Safari/".
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Tuple


@dataclass
class ParsedOS:
    family: str
    version: str
    architecture: int


@dataclass
class ParsedUA:
    name: str = ""
    version: str = ""
    product: str = ""
    manufacturer: str = ""
    os: Optional[ParsedOS] = None
    layout: str = ""


@dataclass(frozen=True)
class BrowserPattern:
    name: str
    test: Pattern
    version: Pattern
    exclude: Optional[Pattern] = None


BROWSER_PATTERNS: List[BrowserPattern] = [
    BrowserPattern("Edge", re.compile(r"Edg(?:e)?/"), re.compile(r"Edg(?:e)?/([\d.]+)")),
    BrowserPattern("Opera", re.compile(r"OPR/|Opera/"), re.compile(r"(?:OPR|Opera)/([\d.]+)")),
    BrowserPattern("Firefox", re.compile(r"Firefox/"), re.compile(r"Firefox/([\d.]+)"), re.compile(r"Seamonkey")),
    BrowserPattern("Chrome", re.compile(r"Chrome/"), re.compile(r"Chrome/([\d.]+)"), re.compile(r"Edge|Edg|OPR|Opera")),
    BrowserPattern("Safari", re.compile(r"Safari/"), re.compile(r"Version/([\d.]+)"), re.compile(r"Chrome|Edge|Edg|OPR|Opera")),
    BrowserPattern("IE", re.compile(r"MSIE|Trident"), re.compile(r"(?:MSIE |rv:)([\d.]+)")),
]

WINDOWS_NT_VERSIONS = {
    "10.0": "10",
    "6.3": "8.1",
    "6.2": "8",
    "6.1": "7",
    "6.0": "Vista",
    "5.1": "XP",
}

ANDROID_MANUFACTURERS = re.compile(
    r"^(Samsung|LG|Motorola|HTC|Huawei|Xiaomi|OnePlus|Google|Sony|OPPO|Vivo|Realme)",
    re.IGNORECASE,
)


def _group(pattern: str, ua: str) -> str:
    match = re.search(pattern, ua)
    return match.group(1) if match else ""


def _parse_windows(ua: str) -> ParsedOS:
    nt_version = _group(r"Windows NT ([\d.]+)", ua)
    version = WINDOWS_NT_VERSIONS.get(nt_version, nt_version)
    arch = 64 if re.search(r"WOW64|Win64|x64", ua) else 32
    return ParsedOS(family=f"Windows {version}", version=version, architecture=arch)


def _parse_mac(ua: str) -> ParsedOS:
    version = _group(r"Mac OS X ([\d_.]+)", ua).replace("_", ".")
    return ParsedOS(family=f"macOS {version}", version=version, architecture=64)


def _parse_android(ua: str) -> ParsedOS:
    version = _group(r"Android ([\d.]+)", ua)
    return ParsedOS(family=f"Android {version}", version=version, architecture=64)


def _parse_ios(ua: str) -> ParsedOS:
    version = _group(r"OS ([\d_]+)", ua).replace("_", ".")
    return ParsedOS(family=f"iOS {version}", version=version, architecture=64)


def _parse_linux(ua: str) -> ParsedOS:
    arch = 64 if re.search(r"x86_64|amd64", ua) else 32
    return ParsedOS(family="Linux", version="", architecture=arch)


OS_PATTERNS: List[Tuple[Pattern, Callable[[str], ParsedOS]]] = [
    (re.compile(r"Windows"), _parse_windows),
    # iOS before Mac: iOS agents contain "like Mac OS X"
    (re.compile(r"iPhone|iPad|iPod"), _parse_ios),
    (re.compile(r"Mac OS X"), _parse_mac),
    (re.compile(r"Android"), _parse_android),
    (re.compile(r"Linux"), _parse_linux),
]

LAYOUT_PATTERNS: List[Tuple[Pattern, str]] = [
    (re.compile(r"AppleWebKit"), "WebKit"),
    (re.compile(r"Gecko/"), "Gecko"),
    (re.compile(r"Trident"), "Trident"),
]


def _detect_device(ua: str) -> Tuple[str, str]:
    if "iPhone" in ua:
        return "iPhone", "Apple"
    if "iPad" in ua:
        return "iPad", "Apple"
    if "Android" in ua:
        match = re.search(r"Android[^;]+;\s*([^;)]+)", ua)
        if match:
            product = match.group(1).strip()
            mfr = ANDROID_MANUFACTURERS.match(product)
            return product, mfr.group(1) if mfr else ""
    return "", ""


def parse_user_agent(ua: str) -> ParsedUA:
    """Parse a User-Agent string into browser, OS, device and engine."""
    parsed = ParsedUA()
    ua = ua or ""

    for pattern in BROWSER_PATTERNS:
        if pattern.test.search(ua) and not (pattern.exclude and pattern.exclude.search(ua)):
            parsed.name = pattern.name
            match = pattern.version.search(ua)
            parsed.version = match.group(1) if match else ""
            break

    for test, parse in OS_PATTERNS:
        if test.search(ua):
            parsed.os = parse(ua)
            break

    parsed.product, parsed.manufacturer = _detect_device(ua)

    for test, layout in LAYOUT_PATTERNS:
        if test.search(ua):
            parsed.layout = layout
            break

    return parsed
