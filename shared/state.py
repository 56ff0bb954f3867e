# Shared State Module
# Process-wide network cache and resolver shared across routers

from config.settings_loader import get_network_ttl_ms

# === Lazy-loaded dependencies ===
# Created on first access; the resolver is closed in api.py lifespan

_network_cache = None
_network_resolver = None


def get_network_cache():
    """Get the NetworkCache instance, creating it if needed."""
    global _network_cache
    if _network_cache is None:
        from infodetect.store import NetworkCache
        _network_cache = NetworkCache(ttl_ms=get_network_ttl_ms())
    return _network_cache


def get_network_resolver():
    """Get the NetworkResolver instance, creating it if needed."""
    global _network_resolver
    if _network_resolver is None:
        from infodetect.engines.network_chain import NetworkResolver
        _network_resolver = NetworkResolver(get_network_cache())
    return _network_resolver


async def close_network_resolver():
    """Close the shared resolver; the cache itself lives for the process."""
    global _network_resolver
    if _network_resolver is not None:
        await _network_resolver.aclose()
        _network_resolver = None
