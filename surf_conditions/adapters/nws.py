"""NWS (National Weather Service) marine and weather adapter."""

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from surf_conditions.adapters.base import (
    BaseAdapter,
    MPH_TO_MS,
    DEFAULT_HUMIDITY,
    DEFAULT_PRESSURE,
    DEFAULT_TEMPERATURE,
    DEFAULT_VISIBILITY,
    DEFAULT_WIND_DIRECTION,
    DEFAULT_WIND_SPEED,
    DEFAULT_WIND_WAVE_DIRECTION,
    DEFAULT_WIND_WAVE_PERIOD,
)
from surf_conditions.config import NWS_BASE_URL
from surf_conditions.http import fetch_json, FetchError
from surf_conditions.models import (
    DataSource,
    MarineConditions,
    MarineLocation,
    Waves,
    Weather,
    Wind,
)

logger = logging.getLogger(__name__)

NWS_POINTS_URL = NWS_BASE_URL + "/points/{lat:.4f},{lon:.4f}"

# Used when the grid has no marine layers for the point
NWS_SIGNIFICANT_HEIGHT = 1.5
NWS_SWELL_HEIGHT = 1.2
NWS_SWELL_PERIOD = 8.0
NWS_SWELL_DIRECTION = 225.0
NWS_WIND_WAVE_HEIGHT = 0.5


class _NwsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PointProperties(_NwsModel):
    forecast: Optional[str] = None
    forecast_grid_data: Optional[str] = None


class PointsResponse(_NwsModel):
    properties: PointProperties


class ForecastPeriod(_NwsModel):
    name: Optional[str] = None
    temperature: Optional[float] = None
    temperature_unit: str = "F"
    wind_speed: Optional[str] = None
    wind_direction: Optional[str] = None
    short_forecast: Optional[str] = None


class ForecastProperties(_NwsModel):
    periods: list[ForecastPeriod] = Field(min_length=1)


class ForecastResponse(_NwsModel):
    properties: ForecastProperties


class GridValue(_NwsModel):
    valid_time: str
    value: Optional[float] = None


class GridLayer(_NwsModel):
    uom: Optional[str] = None
    values: list[GridValue] = Field(default_factory=list)

    def current(self) -> Optional[float]:
        """First non-null value in the layer (values are time ordered)."""
        for item in self.values:
            if item.value is not None:
                return item.value
        return None


class GridResponse(BaseModel):
    properties: dict[str, Any]

    def layer_value(self, name: str) -> Optional[float]:
        raw = self.properties.get(name)
        if not isinstance(raw, dict):
            return None
        try:
            return GridLayer.model_validate(raw).current()
        except ValidationError:
            logger.debug(f"Skipping malformed NWS grid layer {name}")
            return None


class NwsAdapter(BaseAdapter):
    """
    Government weather service for US waters.

    Two calls: the points endpoint yields the forecast and grid URLs;
    the forecast supplies wind and weather, the grid supplies wave layers.
    """

    source = DataSource.NWS
    requires_credential = False

    def _fetch(self, lat: float, lon: float, location_name: str) -> MarineConditions:
        # Step 1: resolve forecast URLs for the point
        points_url = NWS_POINTS_URL.format(lat=lat, lon=lon)
        points = PointsResponse.model_validate(fetch_json(points_url))

        forecast_url = points.properties.forecast
        if not forecast_url:
            raise FetchError(f"No forecast URL in NWS points response for {lat},{lon}")

        # Step 2: current forecast period
        forecast = ForecastResponse.model_validate(fetch_json(forecast_url))
        current = forecast.properties.periods[0]

        # Step 3: marine grid layers (optional)
        grid = self._fetch_grid(points.properties.forecast_grid_data)

        wind_mph, gust_mph = self.parse_wind_mph(current.wind_speed)
        wind_speed = wind_mph * MPH_TO_MS if wind_mph is not None else DEFAULT_WIND_SPEED
        gusts = gust_mph * MPH_TO_MS if gust_mph is not None else None
        wind_direction = self.first_value(
            self.compass_to_degrees(current.wind_direction),
            default=DEFAULT_WIND_DIRECTION,
        )

        temperature = current.temperature
        if temperature is not None and current.temperature_unit.upper() == "F":
            temperature = (temperature - 32) * 5 / 9

        def layer(name: str) -> Optional[float]:
            return grid.layer_value(name) if grid else None

        significant = self.first_value(layer("waveHeight"), default=NWS_SIGNIFICANT_HEIGHT)
        conditions = MarineConditions(
            location=MarineLocation(name=location_name, lat=lat, lon=lon, country="US"),
            waves=Waves(
                significant_height=significant,
                primary_swell_height=self.first_value(
                    layer("primarySwellHeight"), default=NWS_SWELL_HEIGHT
                ),
                primary_swell_period=self.positive(layer("wavePeriod"), NWS_SWELL_PERIOD),
                primary_swell_direction=self.normalize_direction(
                    self.first_value(layer("primarySwellDirection"), default=NWS_SWELL_DIRECTION)
                ),
                secondary_swell_height=layer("secondarySwellHeight"),
                secondary_swell_period=layer("wavePeriod2"),
                secondary_swell_direction=layer("secondarySwellDirection"),
                wind_wave_height=self.first_value(
                    layer("windWaveHeight"), default=NWS_WIND_WAVE_HEIGHT
                ),
                wind_wave_period=DEFAULT_WIND_WAVE_PERIOD,
                wind_wave_direction=self.first_value(
                    self.compass_to_degrees(current.wind_direction),
                    default=DEFAULT_WIND_WAVE_DIRECTION,
                ),
            ),
            wind=Wind(speed=wind_speed, direction=wind_direction, gusts=gusts),
            weather=Weather(
                temperature=self.first_value(temperature, default=DEFAULT_TEMPERATURE),
                pressure=DEFAULT_PRESSURE,
                humidity=self.first_value(layer("relativeHumidity"), default=DEFAULT_HUMIDITY),
                visibility=self.first_value(layer("visibility"), default=DEFAULT_VISIBILITY),
                description=current.short_forecast or "Marine conditions",
            ),
            data_source=self.source,
        )

        logger.info(
            f"NWS conditions for {location_name}: "
            f"{conditions.waves.significant_height:.1f}m, wind {wind_speed:.1f} m/s"
        )
        return conditions

    def _fetch_grid(self, grid_url: Optional[str]) -> Optional[GridResponse]:
        """Fetch raw grid layers; a failure here only costs the wave layers."""
        if not grid_url:
            return None

        try:
            data = fetch_json(grid_url)
            return GridResponse.model_validate(data)
        except FetchError as e:
            logger.warning(f"NWS grid data unavailable, using default wave block: {e}")
        except ValueError as e:
            logger.warning(f"NWS grid data malformed, using default wave block: {e}")
        return None
