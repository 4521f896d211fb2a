"""Error types raised by the forecast pipeline."""

from typing import Optional


class SurfConditionsError(Exception):
    """Base class for pipeline errors."""
    pass


class InvalidInput(SurfConditionsError):
    """Caller supplied a request that cannot be processed."""
    pass


class LocationNotFound(SurfConditionsError):
    """Location name could not be resolved to coordinates."""
    pass


class ProviderError(SurfConditionsError):
    """
    A single marine data provider failed.

    Always recoverable: the selector moves on to the next provider.
    """

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class MarineDataUnavailable(SurfConditionsError):
    """Every provider in the selection failed."""

    def __init__(self, errors: Optional[list[ProviderError]] = None):
        self.errors = errors or []
        detail = "; ".join(str(e) for e in self.errors) or "no providers selected"
        super().__init__(f"Marine data unavailable ({detail})")


class NarrativeGenerationFailed(SurfConditionsError):
    """Text generation service failed or returned nothing usable."""
    pass
