"""Resolve location names to coordinates."""

import logging
from typing import Iterable, Optional

from pydantic import BaseModel, TypeAdapter, ValidationError

from surf_conditions.config import OPENWEATHER_BASE_URL
from surf_conditions.errors import LocationNotFound
from surf_conditions.http import fetch_json, FetchError
from surf_conditions.models import Coordinates, SpotConfiguration
from surf_conditions.registry import default_spots, has_coordinates
from surf_conditions.resolver import find_spot

logger = logging.getLogger(__name__)

GEOCODING_URL = OPENWEATHER_BASE_URL + "/geo/1.0/direct"


class GeocodingResult(BaseModel):
    name: str
    lat: float
    lon: float
    country: Optional[str] = None
    state: Optional[str] = None


_results_adapter = TypeAdapter(list[GeocodingResult])


class Geocoder:
    """
    Known surf spots first, then OpenWeather's direct geocoding API.

    Registry spots carry coordinates, so famous breaks resolve without a key.
    """

    def __init__(
        self,
        api_key: str = "",
        spots: Optional[Iterable[SpotConfiguration]] = None,
    ):
        self.api_key = api_key
        self.spots = tuple(default_spots() if spots is None else spots)

    def resolve_coordinates(self, location_name: str) -> Coordinates:
        """
        Look up coordinates for a location.

        Raises:
            LocationNotFound: If neither the registry nor the API knows it
        """
        spot = find_spot(location_name, (s for s in self.spots if has_coordinates(s)))
        if spot:
            logger.debug(f"Geocoded '{location_name}' from registry spot {spot.name}")
            return Coordinates(
                name=spot.name,
                lat=spot.lat,
                lon=spot.lon,
                country_code=spot.country_code,
            )

        if not self.api_key:
            raise LocationNotFound(
                f"Location '{location_name}' is not a known spot and geocoding is not configured"
            )

        params = {"q": location_name, "limit": 1, "appid": self.api_key}
        try:
            results = _results_adapter.validate_python(fetch_json(GEOCODING_URL, params=params))
        except FetchError as e:
            raise LocationNotFound(f"Geocoding failed for '{location_name}': {e}") from e
        except ValidationError as e:
            raise LocationNotFound(f"Unexpected geocoding response for '{location_name}'") from e

        if not results:
            raise LocationNotFound(f"Location not found: {location_name}")

        best = results[0]
        logger.info(f"Geocoded '{location_name}' to {best.lat:.4f},{best.lon:.4f} ({best.country})")
        return Coordinates(
            name=best.name,
            lat=best.lat,
            lon=best.lon,
            country_code=best.country,
        )
