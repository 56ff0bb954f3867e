"""Unit tests for the per-field reconciliation rules."""

import pytest

from conftest import IPHONE_SAFARI_UA, MAC_CHROME_UA, SAMSUNG_UA, WINDOWS_7_CHROME_UA
from infodetect.engines.reconcile import (
    UNKNOWN_BROWSER,
    ChipInfo,
    detect_browser,
    detect_mobile,
    detect_os,
    parse_chip_info,
    preferred_languages,
    resolve_architecture,
)
from infodetect.probes.ua_parser import ParsedOS, ParsedUA, parse_user_agent
from infodetect.schemas.record_schemas import BrandVersion, HighEntropyValues


def _brands(*pairs):
    return [BrandVersion(brand=b, version=v) for b, v in pairs]


class TestDetectOS:

    def test_hints_override_user_agent(self):
        hev = HighEntropyValues(platform="Windows", platform_version="15.0.0")
        parsed = parse_user_agent(WINDOWS_7_CHROME_UA)

        os_info = detect_os(hev, parsed.os)

        assert (os_info.name, os_info.version, os_info.string) == ("win", 11, "Windows 11")

    @pytest.mark.parametrize("platform_version,expected", [
        ("13.0.0", 11),
        ("10.0.0", 10),
        ("0.3.0", 10),
        ("", 10),
    ])
    def test_windows_platform_version_threshold(self, platform_version, expected):
        hev = HighEntropyValues(platform="Windows", platform_version=platform_version)

        assert detect_os(hev, None).version == expected

    def test_mac_from_user_agent(self):
        os_info = detect_os(HighEntropyValues(), parse_user_agent(MAC_CHROME_UA).os)

        assert (os_info.name, os_info.version) == ("mac", "10.15.7")

    def test_windows_from_user_agent_is_numeric(self):
        os_info = detect_os(HighEntropyValues(), parse_user_agent(WINDOWS_7_CHROME_UA).os)

        assert os_info.name == "win"
        assert os_info.version == 7
        assert os_info.string == "Windows 7"

    def test_windows_without_numeric_version(self):
        parsed = ParsedOS(family="Windows XP", version="XP", architecture=32)

        assert detect_os(HighEntropyValues(), parsed).version == 0

    def test_linux_has_empty_version(self):
        os_info = detect_os(HighEntropyValues(platform="Linux", platform_version="6.5"), None)

        assert (os_info.name, os_info.version, os_info.string) == ("linux", "", "Linux")

    def test_ios_from_user_agent(self):
        os_info = detect_os(HighEntropyValues(), parse_user_agent(IPHONE_SAFARI_UA).os)

        assert (os_info.name, os_info.version) == ("ios", "17.0")

    def test_unknown_platform_hint_is_lowercased(self):
        os_info = detect_os(HighEntropyValues(platform="Fuchsia", platform_version="1"), None)

        assert os_info.name == "fuchsia"

    def test_nothing_known(self):
        os_info = detect_os(HighEntropyValues(), None)

        assert (os_info.name, os_info.version, os_info.string) == ("", "", "Unknown OS")


class TestDetectBrowser:

    def test_placeholders_skipped_known_brand_preferred(self):
        hev = HighEntropyValues(brands=_brands(("Not;A.Brand", "99"), ("Chromium", "120"), ("Brave", "1.60")))

        assert detect_browser(hev, ParsedUA()) == "Brave 1"

    def test_full_version_list_preferred_over_brands(self):
        hev = HighEntropyValues(
            brands=_brands(("Google Chrome", "119")),
            full_version_list=_brands(("Not_A Brand", "8.0.0.0"), ("Google Chrome", "120.0.6099.130")),
        )

        assert detect_browser(hev, ParsedUA()) == "Google Chrome 120"

    def test_first_real_brand_when_none_known(self):
        hev = HighEntropyValues(brands=_brands(("Chromium", "120"), ("YaBrowser", "24.1")))

        assert detect_browser(hev, ParsedUA()) == "YaBrowser 24"

    def test_only_placeholders_falls_back_to_user_agent(self):
        hev = HighEntropyValues(brands=_brands(("Not_A Brand", "8"), ("Chromium", "120")))

        assert detect_browser(hev, parse_user_agent(MAC_CHROME_UA)) == "Chrome 120"

    def test_unknown(self):
        assert detect_browser(HighEntropyValues(), ParsedUA()) == UNKNOWN_BROWSER


class TestChipInfo:

    @pytest.mark.parametrize("gpu,expected", [
        ("Apple M1", ChipInfo("Apple Silicon", "M1", "arm64")),
        ("Apple M2 Pro", ChipInfo("Apple Silicon", "M2 Pro", "arm64")),
        ("Apple GPU", ChipInfo("Apple Silicon", "Apple GPU", "arm64")),
        ("NVIDIA GeForce GTX 1080/PCIe/SSE2", ChipInfo("NVIDIA", "NVIDIA GeForce GTX 1080", "x86_64")),
        ("Intel(R) UHD Graphics 630", ChipInfo("Intel", "Intel(R) UHD Graphics 630", "x86_64")),
        ("Mali-G78", ChipInfo("Unknown", "Mali-G78", "")),
    ])
    def test_families(self, gpu, expected):
        assert parse_chip_info(gpu) == expected

    def test_amd(self):
        chip = parse_chip_info("AMD Radeon Pro 5500M OpenGL Engine")

        assert chip.type == "AMD"
        assert chip.chip.startswith("AMD Radeon Pro 5500M")

    def test_empty_renderer(self):
        assert parse_chip_info("") == ChipInfo("Unknown", "", "")


class TestArchitecture:

    @pytest.mark.parametrize("architecture,bitness", [
        ("x86", "64"),
        ("arm", "64"),
        ("x86", ""),
    ])
    def test_hint_returned_as_reported(self, architecture, bitness):
        hev = HighEntropyValues(architecture=architecture, bitness=bitness)

        assert resolve_architecture(hev, parse_chip_info("Apple M1")) == architecture

    def test_chip_family_next(self):
        assert resolve_architecture(HighEntropyValues(), parse_chip_info("Apple M3")) == "arm64"

    def test_platform_default(self):
        unknown = parse_chip_info("")

        assert resolve_architecture(HighEntropyValues(platform="macOS"), unknown) == "arm64"
        assert resolve_architecture(HighEntropyValues(), unknown) == "x86_64"


class TestMobility:

    def test_hint_wins(self):
        assert detect_mobile(HighEntropyValues(mobile=False), IPHONE_SAFARI_UA) is False

    @pytest.mark.parametrize("ua,expected", [
        (IPHONE_SAFARI_UA, True),
        (SAMSUNG_UA, True),
        (MAC_CHROME_UA, False),
        ("", False),
    ])
    def test_user_agent_keywords(self, ua, expected):
        assert detect_mobile(HighEntropyValues(), ua) is expected


def test_preferred_languages():
    assert preferred_languages(["en-US", "fr-FR", "DE", "es"]) == ["en", "fr", "de"]
    assert preferred_languages([]) == []
    assert preferred_languages(["", "en", "fr", "de"]) == ["en", "fr", "de"]
