"""Base adapter interface for marine data providers."""

import logging
import re
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import ValidationError

from surf_conditions.errors import ProviderError
from surf_conditions.http import FetchError
from surf_conditions.models import DataSource, MarineConditions

logger = logging.getLogger(__name__)

# Substituted for any field a provider omits
DEFAULT_SIGNIFICANT_HEIGHT = 1.0  # m
DEFAULT_SWELL_HEIGHT = 0.8  # m
DEFAULT_SWELL_PERIOD = 8.0  # s
DEFAULT_SWELL_DIRECTION = 225.0  # degrees
DEFAULT_WIND_WAVE_HEIGHT = 0.3  # m
DEFAULT_WIND_WAVE_PERIOD = 4.0  # s
DEFAULT_WIND_WAVE_DIRECTION = 270.0  # degrees
DEFAULT_WIND_SPEED = 5.0  # m/s
DEFAULT_WIND_DIRECTION = 270.0  # degrees
DEFAULT_TEMPERATURE = 20.0  # °C
DEFAULT_PRESSURE = 1013.0  # hPa
DEFAULT_HUMIDITY = 70.0  # %
DEFAULT_VISIBILITY = 10000.0  # m

MPH_TO_MS = 0.44704
KMH_TO_MS = 1 / 3.6

COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]


class BaseAdapter(ABC):
    """
    Base class for marine data adapters.

    Subclasses implement `_fetch`; `fetch` wraps it so that every failure
    (network, HTTP status, bad payload, missing key) surfaces as ProviderError.
    """

    source: DataSource
    requires_credential: bool = False

    def __init__(self, api_key: str = ""):
        self.api_key = api_key

    def fetch(self, lat: float, lon: float, location_name: str) -> MarineConditions:
        """
        Fetch and normalize conditions for a point.

        Raises:
            ProviderError: On any provider failure
        """
        if self.requires_credential and not self.api_key:
            raise ProviderError(self.source.value, "API key not configured")

        try:
            return self._fetch(lat, lon, location_name)
        except FetchError as e:
            raise ProviderError(self.source.value, str(e)) from e
        except ValidationError as e:
            raise ProviderError(self.source.value, f"Malformed response: {e}") from e
        except (LookupError, TypeError, ValueError) as e:
            raise ProviderError(self.source.value, f"Unexpected response shape: {e}") from e

    @abstractmethod
    def _fetch(self, lat: float, lon: float, location_name: str) -> MarineConditions:
        """
        Issue provider requests and map the response.

        Args:
            lat: Latitude
            lon: Longitude
            location_name: Display name carried into the result

        Returns:
            MarineConditions with every numeric field populated
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(source={self.source.value!r})"

    # ========== Utility Methods ==========

    @staticmethod
    def first_value(*values: Optional[float], default: float) -> float:
        """Return the first value that is not None, else the default."""
        for value in values:
            if value is not None:
                return float(value)
        return default

    @staticmethod
    def positive(value: Optional[float], default: float) -> float:
        """Return value if it is a positive number, else the default."""
        if value is None or value <= 0:
            return default
        return float(value)

    @staticmethod
    def to_float(text) -> Optional[float]:
        """Parse a numeric provider field that may arrive as a string."""
        if text is None:
            return None
        if isinstance(text, (int, float)):
            return float(text)

        match = re.search(r"-?\d+(?:\.\d+)?", str(text))
        if match:
            return float(match.group(0))
        return None

    @staticmethod
    def normalize_direction(degrees: float) -> float:
        return degrees % 360

    @staticmethod
    def compass_to_degrees(point: Optional[str]) -> Optional[float]:
        """Convert a 16-point compass label like 'WSW' to degrees."""
        if not point:
            return None
        point = point.strip().upper()
        if point not in COMPASS_POINTS:
            return None
        return COMPASS_POINTS.index(point) * 22.5

    @staticmethod
    def parse_wind_mph(wind_str: Optional[str]) -> tuple[Optional[float], Optional[float]]:
        """
        Parse wind string like "10 mph" or "10 to 20 mph" or "10 mph gusting to 25 mph".

        Returns:
            Tuple of (wind_mph, wind_gust_mph)
        """
        if not wind_str:
            return None, None

        wind_mph = None
        wind_gust_mph = None

        # Match patterns like "10 mph" or "10 to 20 mph"
        speed_match = re.search(r"(\d+)\s*(?:to\s*(\d+))?\s*mph", wind_str, re.IGNORECASE)
        if speed_match:
            wind_mph = float(speed_match.group(1))
            if speed_match.group(2):
                # "10 to 20 mph" - use higher value as base
                wind_mph = float(speed_match.group(2))

        # Match gust pattern
        gust_match = re.search(r"gust(?:ing|s)?\s*(?:to\s*)?(\d+)\s*mph", wind_str, re.IGNORECASE)
        if gust_match:
            wind_gust_mph = float(gust_match.group(1))

        return wind_mph, wind_gust_mph
