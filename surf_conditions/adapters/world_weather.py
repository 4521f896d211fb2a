"""Adapter for the World Weather Online marine API."""

import logging
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from surf_conditions.adapters.base import (
    BaseAdapter,
    KMH_TO_MS,
    DEFAULT_HUMIDITY,
    DEFAULT_PRESSURE,
    DEFAULT_SIGNIFICANT_HEIGHT,
    DEFAULT_SWELL_DIRECTION,
    DEFAULT_SWELL_HEIGHT,
    DEFAULT_SWELL_PERIOD,
    DEFAULT_TEMPERATURE,
    DEFAULT_VISIBILITY,
    DEFAULT_WIND_DIRECTION,
    DEFAULT_WIND_SPEED,
    DEFAULT_WIND_WAVE_HEIGHT,
    DEFAULT_WIND_WAVE_PERIOD,
)
from surf_conditions.config import WORLD_WEATHER_BASE_URL
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

MARINE_URL = WORLD_WEATHER_BASE_URL + "/marine.ashx"

# Wind-wave height is not reported; estimated as a share of significant height
WIND_WAVE_SHARE = 0.3

# The API reports every number as a string
Numeric = Optional[Union[float, str]]


class WeatherDesc(BaseModel):
    value: str = ""


class MarineHour(BaseModel):
    """One hourly marine record."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sig_height_m: Numeric = Field(default=None, alias="sigHeight_m")
    swell_height_m: Numeric = Field(default=None, alias="swellHeight_m")
    swell_period_secs: Numeric = Field(default=None, alias="swellPeriod_secs")
    swell_dir: Numeric = Field(default=None, alias="swellDir")
    windspeed_kmph: Numeric = Field(default=None, alias="windspeedKmph")
    winddir_degree: Numeric = Field(default=None, alias="winddirDegree")
    temp_c: Numeric = Field(default=None, alias="tempC")
    pressure: Numeric = None  # mb == hPa
    humidity: Numeric = None
    visibility: Numeric = None  # km
    weather_desc: list[WeatherDesc] = Field(default_factory=list, alias="weatherDesc")


class MarineDay(BaseModel):
    hourly: list[MarineHour] = Field(min_length=1)


class MarineData(BaseModel):
    weather: list[MarineDay] = Field(min_length=1)


class MarineResponse(BaseModel):
    data: MarineData


class WorldWeatherAdapter(BaseAdapter):
    """Global marine data from World Weather Online."""

    source = DataSource.WORLD_WEATHER
    requires_credential = True

    def _fetch(self, lat: float, lon: float, location_name: str) -> MarineConditions:
        params = {
            "key": self.api_key,
            "q": f"{lat},{lon}",
            "format": "json",
            "tp": 1,
        }
        response = MarineResponse.model_validate(fetch_json(MARINE_URL, params=params))
        marine = response.data.weather[0].hourly[0]

        significant = self.first_value(
            self.to_float(marine.sig_height_m), default=DEFAULT_SIGNIFICANT_HEIGHT
        )
        wind_kmh = self.to_float(marine.windspeed_kmph)
        visibility_km = self.to_float(marine.visibility)
        wind_direction = self.first_value(
            self.to_float(marine.winddir_degree), default=DEFAULT_WIND_DIRECTION
        )
        description = marine.weather_desc[0].value if marine.weather_desc else ""

        conditions = MarineConditions(
            location=MarineLocation(name=location_name, lat=lat, lon=lon),
            waves=Waves(
                significant_height=significant,
                primary_swell_height=self.first_value(
                    self.to_float(marine.swell_height_m), default=DEFAULT_SWELL_HEIGHT
                ),
                primary_swell_period=self.positive(
                    self.to_float(marine.swell_period_secs), DEFAULT_SWELL_PERIOD
                ),
                primary_swell_direction=self.normalize_direction(self.first_value(
                    self.to_float(marine.swell_dir), default=DEFAULT_SWELL_DIRECTION
                )),
                wind_wave_height=(
                    significant * WIND_WAVE_SHARE if significant else DEFAULT_WIND_WAVE_HEIGHT
                ),
                wind_wave_period=DEFAULT_WIND_WAVE_PERIOD,
                wind_wave_direction=wind_direction,
            ),
            wind=Wind(
                speed=wind_kmh * KMH_TO_MS if wind_kmh is not None else DEFAULT_WIND_SPEED,
                direction=wind_direction,
            ),
            weather=Weather(
                temperature=self.first_value(
                    self.to_float(marine.temp_c), default=DEFAULT_TEMPERATURE
                ),
                pressure=self.first_value(
                    self.to_float(marine.pressure), default=DEFAULT_PRESSURE
                ),
                humidity=self.first_value(
                    self.to_float(marine.humidity), default=DEFAULT_HUMIDITY
                ),
                visibility=(
                    visibility_km * 1000 if visibility_km is not None else DEFAULT_VISIBILITY
                ),
                description=description or "Marine conditions",
            ),
            data_source=self.source,
        )

        logger.info(
            f"World Weather Online conditions for {location_name}: "
            f"{conditions.waves.significant_height:.1f}m @ {conditions.waves.primary_swell_period:.0f}s"
        )
        return conditions
