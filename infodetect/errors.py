"""
Failure taxonomy for probes and network providers.

None of these reach the caller of the public detector API: probe failures
collapse to absent ProbeResults and provider failures advance the chain.
"""


class CapabilityUnavailable(Exception):
    """The host does not expose the requested capability."""

    reason = "unavailable"


class CapabilityDenied(CapabilityUnavailable):
    """The capability exists but permission was refused (e.g. geolocation)."""

    reason = "denied"


class ProviderError(Exception):
    """A single network provider attempt failed."""

    def __init__(self, provider: str, message: str = ""):
        self.provider = provider
        super().__init__(f"[{provider}] {message}" if message else f"[{provider}] failed")


class ProviderTimeout(ProviderError):
    """The attempt exceeded its timeout."""


class ProviderMalformed(ProviderError):
    """Non-2xx status or a payload that is not a JSON object."""


class ProviderUnreachable(ProviderError):
    """Transport-level failure (DNS, refused connection, TLS)."""


class ChainExhausted(Exception):
    """Every provider in the chain failed."""

    def __init__(self, attempted: int):
        self.attempted = attempted
        super().__init__(f"All {attempted} network providers failed")
