"""
Centralized Settings Loader

Single point of access for runtime configuration of the detector, the
network provider chain and the HTTP surface.

Usage:
    from config.settings_loader import load_settings, get_network_timeout_ms

    # Access settings
    ttl = load_settings()["network"]["ttl_ms"]

    # Pick up edits to settings.json
    reload_settings()

A user-level ``settings.json`` next to this file takes precedence over
``settings.defaults.json``. A handful of timing values can also be overridden
through environment variables (INFODETECT_*), which win over both files.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List

# Paths
CONFIG_DIR = Path(__file__).parent
SETTINGS_FILE = CONFIG_DIR / "settings.json"
DEFAULTS_FILE = CONFIG_DIR / "settings.defaults.json"

# --- Settings Cache ---
_settings_cache = None


def _config_int(name: str, default: int) -> int:
    val = os.environ.get(name)
    if val is None or not str(val).strip():
        return default
    try:
        return int(val)
    except ValueError:
        return default


def load_settings() -> dict:
    """Load settings from file. Uses cache if already loaded."""
    global _settings_cache
    if _settings_cache is None:
        if SETTINGS_FILE.exists():
            _settings_cache = json.loads(SETTINGS_FILE.read_text())
        elif DEFAULTS_FILE.exists():
            _settings_cache = json.loads(DEFAULTS_FILE.read_text())
        else:
            raise FileNotFoundError(f"No settings files found in {CONFIG_DIR}")
    return _settings_cache


def reload_settings() -> dict:
    """Force reload settings from disk (useful after external changes)."""
    global _settings_cache
    _settings_cache = None
    return load_settings()


# --- Convenience Accessors ---

def get_network_ttl_ms() -> int:
    """Cache time-to-live for network facts, in milliseconds."""
    return _config_int("INFODETECT_NETWORK_TTL_MS", load_settings()["network"]["ttl_ms"])


def get_network_timeout_ms() -> int:
    """Per-provider request timeout, in milliseconds."""
    return _config_int("INFODETECT_NETWORK_TIMEOUT_MS", load_settings()["network"]["timeout_ms"])


def get_provider_configs() -> List[Dict[str, str]]:
    """Ordered provider definitions ({name, url, normalizer})."""
    return list(load_settings()["network"]["providers"])


def get_probe_timeout_ms() -> int:
    """Upper bound for a single asynchronous capability probe."""
    return _config_int("INFODETECT_PROBE_TIMEOUT_MS", load_settings()["probes"]["timeout_ms"])


def get_high_entropy_hints() -> List[str]:
    """Exact set of hint keys requested from the high-entropy query."""
    return list(load_settings()["probes"]["high_entropy_hints"])


def get_geolocation_options() -> Dict[str, Any]:
    return dict(load_settings()["probes"]["geolocation"])


def get_server_settings() -> Dict[str, Any]:
    return dict(load_settings()["server"])
