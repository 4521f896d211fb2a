"""
Weather-only fallback adapter (OpenWeather).

Never calls a marine API. Wave conditions are estimated from local wind with
deliberately crude heuristics: the swell is assumed to arrive from the
reciprocal of the local wind, which is not a prediction of real swell origin.
"""

import logging
from typing import Optional

from pydantic import BaseModel, Field

from surf_conditions.adapters.base import (
    BaseAdapter,
    DEFAULT_HUMIDITY,
    DEFAULT_PRESSURE,
    DEFAULT_TEMPERATURE,
    DEFAULT_VISIBILITY,
    DEFAULT_WIND_DIRECTION,
    DEFAULT_WIND_SPEED,
)
from surf_conditions.config import OPENWEATHER_BASE_URL
from surf_conditions.http import fetch_json
from surf_conditions.models import (
    DataSource,
    MarineConditions,
    MarineLocation,
    Waves,
    Weather,
    Wind,
)

logger = logging.getLogger(__name__)

CURRENT_WEATHER_URL = OPENWEATHER_BASE_URL + "/data/2.5/weather"


class OwmWind(BaseModel):
    speed: Optional[float] = None  # m/s with units=metric
    deg: Optional[float] = None
    gust: Optional[float] = None


class OwmMain(BaseModel):
    temp: Optional[float] = None
    pressure: Optional[float] = None
    humidity: Optional[float] = None


class OwmCondition(BaseModel):
    description: str = ""


class OwmSys(BaseModel):
    country: Optional[str] = None


class CurrentWeatherResponse(BaseModel):
    wind: OwmWind = Field(default_factory=OwmWind)
    main: OwmMain = Field(default_factory=OwmMain)
    weather: list[OwmCondition] = Field(default_factory=list)
    visibility: Optional[float] = None  # meters
    sys: OwmSys = Field(default_factory=OwmSys)


def estimate_waves(wind_speed: float, wind_direction: float) -> Waves:
    """
    Estimate a wave block from local wind alone.

    Args:
        wind_speed: m/s
        wind_direction: degrees the wind blows from

    Returns:
        Waves with height max(0.3, 0.15*speed) and period clamped to 4-12s
    """
    height = max(0.3, wind_speed * 0.15)
    period = min(12.0, max(4.0, wind_speed * 0.4 + 4))
    return Waves(
        significant_height=height,
        primary_swell_height=height * 0.7,
        primary_swell_period=period,
        primary_swell_direction=(wind_direction + 180) % 360,
        wind_wave_height=height * 0.3,
        wind_wave_period=max(3.0, period * 0.5),
        wind_wave_direction=wind_direction,
    )


class OpenWeatherAdapter(BaseAdapter):
    """Final fallback: current weather plus estimated waves."""

    source = DataSource.OPENWEATHER
    requires_credential = True

    def _fetch(self, lat: float, lon: float, location_name: str) -> MarineConditions:
        params = {"lat": lat, "lon": lon, "appid": self.api_key, "units": "metric"}
        data = CurrentWeatherResponse.model_validate(
            fetch_json(CURRENT_WEATHER_URL, params=params)
        )

        wind_speed = self.first_value(data.wind.speed, default=DEFAULT_WIND_SPEED)
        wind_direction = self.normalize_direction(
            self.first_value(data.wind.deg, default=DEFAULT_WIND_DIRECTION)
        )
        description = data.weather[0].description if data.weather else ""

        conditions = MarineConditions(
            location=MarineLocation(
                name=location_name, lat=lat, lon=lon, country=data.sys.country
            ),
            waves=estimate_waves(wind_speed, wind_direction),
            wind=Wind(speed=wind_speed, direction=wind_direction, gusts=data.wind.gust),
            weather=Weather(
                temperature=self.first_value(data.main.temp, default=DEFAULT_TEMPERATURE),
                pressure=self.first_value(data.main.pressure, default=DEFAULT_PRESSURE),
                humidity=self.first_value(data.main.humidity, default=DEFAULT_HUMIDITY),
                visibility=self.first_value(data.visibility, default=DEFAULT_VISIBILITY),
                description=description or "Clear conditions",
            ),
            data_source=self.source,
        )

        logger.info(
            f"OpenWeather estimate for {location_name}: "
            f"{conditions.waves.significant_height:.1f}m from wind {wind_speed:.1f} m/s"
        )
        return conditions
