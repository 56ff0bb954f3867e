"""
Reconciliation rules - merge probe outputs into canonical fields.

Each field group has its own priority chain, and the groups are independent:
- OS:        high-entropy hints > legacy UA parse > "Unknown OS"
- Browser:   hint brand list (placeholders skipped, known brands preferred)
             > legacy UA parse > "Unknown Browser"
- Hardware:  chip family from the GPU renderer string
- Arch:      hint architecture as reported > chip family > platform default
- Mobility:  hint mobile flag > keyword heuristic over the UA string
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Union

from infodetect.probes.ua_parser import ParsedOS, ParsedUA
from infodetect.schemas.record_schemas import HighEntropyValues, OSInfo

UNKNOWN_BROWSER = "Unknown Browser"

# Brands that are greasing placeholders or the shared engine name
PLACEHOLDER_BRAND = re.compile(r"Not.?A.?Brand|Chromium", re.IGNORECASE)

KNOWN_BROWSERS = ["Chrome", "Firefox", "Safari", "Edge", "Opera", "Brave", "Vivaldi", "Arc"]

MOBILE_KEYWORDS = re.compile(r"Mobile|Android|iPhone|iPad|iPod", re.IGNORECASE)


# =============================================================================
# OS
# =============================================================================

def _leading_number(value: str) -> Union[int, float]:
    """Leading numeric prefix of a version string; 0 when there is none."""
    match = re.match(r"\s*(\d+(?:\.\d+)?)", value or "")
    if not match:
        return 0
    number = float(match.group(1))
    return int(number) if number.is_integer() else number


def _windows_from_platform_version(platform_version: str) -> int:
    # Windows 11 reports platformVersion >= 13.0
    try:
        major = int(platform_version.split(".")[0])
    except ValueError:
        return 10
    return 11 if major >= 13 else 10


def detect_os(hev: HighEntropyValues, parsed_os: Optional[ParsedOS]) -> OSInfo:
    if hev.platform:
        platform = hev.platform
        version = hev.platform_version or ""

        if platform == "Windows":
            win = _windows_from_platform_version(version)
            return OSInfo(name="win", version=win, string=f"Windows {win}")
        if platform == "macOS":
            return OSInfo(name="mac", version=version, string=f"macOS {version}")
        if platform == "Android":
            return OSInfo(name="android", version=version, string=f"Android {version}")
        if platform == "iOS":
            return OSInfo(name="ios", version=version, string=f"iOS {version}")
        if platform == "Linux":
            return OSInfo(name="linux", version="", string="Linux")
        if platform == "Chrome OS":
            return OSInfo(name="chromeos", version=version, string=f"Chrome OS {version}")
        return OSInfo(name=platform.lower(), version=version, string=f"{platform} {version}".strip())

    if parsed_os is not None:
        family = parsed_os.family or ""

        if "Windows" in family:
            return OSInfo(name="win", version=_leading_number(parsed_os.version), string=family)
        if "macOS" in family or "Mac OS X" in family:
            return OSInfo(name="mac", version=parsed_os.version, string=family)
        if "Android" in family:
            return OSInfo(name="android", version=parsed_os.version, string=family)
        if "iOS" in family:
            return OSInfo(name="ios", version=parsed_os.version, string=family)
        if "Linux" in family:
            return OSInfo(name="linux", version="", string="Linux")
        return OSInfo(name=family.lower(), version=parsed_os.version or "", string=family)

    return OSInfo(name="", version="", string="Unknown OS")


# =============================================================================
# Browser
# =============================================================================

def _major(version: str) -> str:
    return (version or "").split(".")[0]


def detect_browser(hev: HighEntropyValues, parsed_ua: ParsedUA) -> str:
    brands = hev.full_version_list or hev.brands
    real = [b for b in brands if not PLACEHOLDER_BRAND.search(b.brand)]

    for entry in real:
        if any(known in entry.brand for known in KNOWN_BROWSERS):
            return f"{entry.brand} {_major(entry.version)}"
    if real:
        return f"{real[0].brand} {_major(real[0].version)}"

    if parsed_ua.name:
        return f"{parsed_ua.name} {_major(parsed_ua.version)}".strip()

    return UNKNOWN_BROWSER


# =============================================================================
# Hardware
# =============================================================================

@dataclass(frozen=True)
class ChipInfo:
    type: str
    chip: str
    architecture: str


def parse_chip_info(gpu: str) -> ChipInfo:
    """Infer the chip family from a GPU renderer string."""
    gpu = gpu or ""
    lowered = gpu.lower()

    # Apple Silicon: M1, M2, ... with optional Pro/Max/Ultra
    apple = re.search(r"Apple\s+M(\d+)(?:\s+(Pro|Max|Ultra))?", gpu, re.IGNORECASE)
    if apple:
        chip = f"M{apple.group(1)}"
        if apple.group(2):
            chip = f"{chip} {apple.group(2)}"
        return ChipInfo(type="Apple Silicon", chip=chip, architecture="arm64")

    if "apple" in lowered:
        return ChipInfo(type="Apple Silicon", chip="Apple GPU", architecture="arm64")

    nvidia = (
        re.search(r"NVIDIA\s+(.+?)(?=\s*/|$)", gpu, re.IGNORECASE)
        or re.search(r"(GeForce|Quadro|RTX|GTX)\s+[\w\s]+", gpu, re.IGNORECASE)
    )
    if nvidia:
        return ChipInfo(type="NVIDIA", chip=nvidia.group(0).strip(), architecture="x86_64")

    amd = re.search(r"(Radeon|AMD)\s+[\w\s]+", gpu, re.IGNORECASE)
    if amd:
        return ChipInfo(type="AMD", chip=amd.group(0).strip(), architecture="x86_64")

    intel = re.search(r"Intel.*?(UHD|Iris|HD)\s*(?:Graphics)?\s*(\d*)", gpu, re.IGNORECASE)
    if intel or "intel" in lowered:
        return ChipInfo(type="Intel", chip=intel.group(0) if intel else "Intel Graphics", architecture="x86_64")

    return ChipInfo(type="Unknown", chip=gpu, architecture="")


def resolve_architecture(hev: HighEntropyValues, chip: ChipInfo) -> str:
    if hev.architecture:
        return hev.architecture
    if chip.architecture:
        return chip.architecture
    return "arm64" if hev.platform == "macOS" else "x86_64"


# =============================================================================
# Mobility & languages
# =============================================================================

def detect_mobile(hev: HighEntropyValues, user_agent: str) -> bool:
    if hev.mobile is not None:
        return hev.mobile
    return bool(MOBILE_KEYWORDS.search(user_agent or ""))


def preferred_languages(languages: List[str], limit: int = 3) -> List[str]:
    """Top preferences as two-letter lowercase codes, order kept."""
    return [lang[:2].lower() for lang in languages if lang][:limit]
