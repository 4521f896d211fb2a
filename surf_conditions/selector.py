"""Choose which marine data providers to query, and query them in order."""

import logging
from typing import NamedTuple, Optional

from surf_conditions.adapters import BaseAdapter, get_adapter, has_credential
from surf_conditions.config import Credentials
from surf_conditions.errors import MarineDataUnavailable, ProviderError
from surf_conditions.models import DataSource, MarineConditions

logger = logging.getLogger(__name__)


class CoverageBox(NamedTuple):
    """Inclusive lat/lon rectangle."""
    name: str
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    def contains(self, lat: float, lon: float) -> bool:
        return self.lat_min <= lat <= self.lat_max and self.lon_min <= lon <= self.lon_max


# Areas served by the government (NWS) source
GOVERNMENT_COVERAGE: tuple[CoverageBox, ...] = (
    CoverageBox("Continental US", 24, 50, -125, -66),
    CoverageBox("Alaska", 54, 72, -180, -129),
    CoverageBox("Hawaii", 18, 23, -161, -154),
    CoverageBox("Puerto Rico", 17, 19, -68, -65),
    CoverageBox("Pacific Territories", -15, 25, 140, 180),
)

# Paid global providers, most preferred first
GLOBAL_PROVIDERS: tuple[DataSource, ...] = (
    DataSource.STORMGLASS,
    DataSource.WORLD_WEATHER,
)

FALLBACK_PROVIDER = DataSource.OPENWEATHER

PAID_PROVIDERS = frozenset(GLOBAL_PROVIDERS)


def coverage_area(lat: float, lon: float) -> Optional[str]:
    """Name of the government coverage box containing the point, if any."""
    for box in GOVERNMENT_COVERAGE:
        if box.contains(lat, lon):
            return box.name
    return None


def in_government_coverage(lat: float, lon: float) -> bool:
    return coverage_area(lat, lon) is not None


def select_sources(lat: float, lon: float, credentials: Credentials) -> list[BaseAdapter]:
    """
    Build the ordered list of adapters to try for a point.

    Government coverage comes first regardless of keys, then each keyed
    global provider, and the weather-only fallback always last.
    """
    sources: list[DataSource] = []

    area = coverage_area(lat, lon)
    if area:
        logger.debug(f"{lat},{lon} inside {area} coverage")
        sources.append(DataSource.NWS)

    for source in GLOBAL_PROVIDERS:
        if has_credential(source, credentials):
            sources.append(source)

    sources.append(FALLBACK_PROVIDER)

    logger.info(f"Data sources for {lat},{lon}: {', '.join(s.value for s in sources)}")
    return [get_adapter(source, credentials) for source in sources]


def fallback_sources(credentials: Credentials) -> list[BaseAdapter]:
    """Only the weather-only estimator."""
    return [get_adapter(FALLBACK_PROVIDER, credentials)]


def fetch_marine_conditions(
    adapters: list[BaseAdapter],
    lat: float,
    lon: float,
    location_name: str,
) -> MarineConditions:
    """
    Try adapters in order until one answers.

    Raises:
        MarineDataUnavailable: If every adapter raised ProviderError
    """
    errors: list[ProviderError] = []

    for adapter in adapters:
        try:
            return adapter.fetch(lat, lon, location_name)
        except ProviderError as e:
            logger.warning(f"  {adapter.source.value} failed, trying next source: {e.message}")
            errors.append(e)

    raise MarineDataUnavailable(errors)
