"""Adapter for the Stormglass global marine API."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from surf_conditions.adapters.base import (
    BaseAdapter,
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
    DEFAULT_WIND_WAVE_DIRECTION,
    DEFAULT_WIND_WAVE_HEIGHT,
    DEFAULT_WIND_WAVE_PERIOD,
)
from surf_conditions.config import STORMGLASS_BASE_URL
from surf_conditions.http import fetch_json, FetchError
from surf_conditions.models import (
    DataSource,
    MarineConditions,
    MarineLocation,
    TideEvent,
    Tides,
    Waves,
    Weather,
    Wind,
)

logger = logging.getLogger(__name__)

WEATHER_POINT_URL = STORMGLASS_BASE_URL + "/weather/point"
TIDE_SEA_LEVEL_URL = STORMGLASS_BASE_URL + "/tide/sea-level/point"
TIDE_EXTREMES_URL = STORMGLASS_BASE_URL + "/tide/extremes/point"

# Per-parameter values come from several models; prefer NOAA's, then Stormglass's own
SOURCE_PRIORITY = ("noaa", "sg")

PARAMS = [
    "waveHeight",
    "swellHeight",
    "swellPeriod",
    "swellDirection",
    "secondarySwellHeight",
    "secondarySwellPeriod",
    "secondarySwellDirection",
    "windWaveHeight",
    "windWavePeriod",
    "windWaveDirection",
    "windSpeed",
    "windDirection",
    "gust",
    "airTemperature",
    "pressure",
    "humidity",
    "visibility",
]

SourceValues = Optional[dict[str, Optional[float]]]


class StormglassHour(BaseModel):
    """One hourly entry; each parameter maps model name to value."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    time: datetime
    wave_height: SourceValues = None
    swell_height: SourceValues = None
    swell_period: SourceValues = None
    swell_direction: SourceValues = None
    secondary_swell_height: SourceValues = None
    secondary_swell_period: SourceValues = None
    secondary_swell_direction: SourceValues = None
    wind_wave_height: SourceValues = None
    wind_wave_period: SourceValues = None
    wind_wave_direction: SourceValues = None
    wind_speed: SourceValues = None
    wind_direction: SourceValues = None
    gust: SourceValues = None
    air_temperature: SourceValues = None
    pressure: SourceValues = None
    humidity: SourceValues = None
    visibility: SourceValues = None  # km

    def value(self, param: str) -> Optional[float]:
        """Value of a parameter from the highest-priority model that reports it."""
        values = getattr(self, param) or {}
        for source in SOURCE_PRIORITY:
            if values.get(source) is not None:
                return values[source]
        return None


class StormglassWeatherResponse(BaseModel):
    hours: list[StormglassHour] = Field(min_length=1)


class SeaLevelPoint(BaseModel):
    time: datetime
    sg: float


class SeaLevelResponse(BaseModel):
    data: list[SeaLevelPoint] = Field(min_length=1)


class TideExtreme(BaseModel):
    time: datetime
    height: float
    type: str


class TideExtremesResponse(BaseModel):
    data: list[TideExtreme] = Field(default_factory=list)


class StormglassAdapter(BaseAdapter):
    """Global marine data from Stormglass, with tides when available."""

    source = DataSource.STORMGLASS
    requires_credential = True

    def __init__(self, api_key: str = "", include_tides: bool = True):
        super().__init__(api_key)
        self.include_tides = include_tides

    @property
    def _headers(self) -> dict:
        return {"Authorization": self.api_key}

    def _fetch(self, lat: float, lon: float, location_name: str) -> MarineConditions:
        now = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)
        params = {
            "lat": lat,
            "lng": lon,
            "params": ",".join(PARAMS),
            "start": int(now.timestamp()),
            "end": int(now.timestamp()),
        }
        data = fetch_json(WEATHER_POINT_URL, params=params, headers=self._headers)
        current = StormglassWeatherResponse.model_validate(data).hours[0]

        visibility_km = current.value("visibility")
        conditions = MarineConditions(
            location=MarineLocation(name=location_name, lat=lat, lon=lon),
            waves=Waves(
                significant_height=self.first_value(
                    current.value("wave_height"), default=DEFAULT_SIGNIFICANT_HEIGHT
                ),
                primary_swell_height=self.first_value(
                    current.value("swell_height"), default=DEFAULT_SWELL_HEIGHT
                ),
                primary_swell_period=self.positive(
                    current.value("swell_period"), DEFAULT_SWELL_PERIOD
                ),
                primary_swell_direction=self.normalize_direction(self.first_value(
                    current.value("swell_direction"), default=DEFAULT_SWELL_DIRECTION
                )),
                secondary_swell_height=current.value("secondary_swell_height"),
                secondary_swell_period=current.value("secondary_swell_period"),
                secondary_swell_direction=current.value("secondary_swell_direction"),
                wind_wave_height=self.first_value(
                    current.value("wind_wave_height"), default=DEFAULT_WIND_WAVE_HEIGHT
                ),
                wind_wave_period=self.positive(
                    current.value("wind_wave_period"), DEFAULT_WIND_WAVE_PERIOD
                ),
                wind_wave_direction=self.first_value(
                    current.value("wind_wave_direction"), default=DEFAULT_WIND_WAVE_DIRECTION
                ),
            ),
            wind=Wind(
                speed=self.first_value(current.value("wind_speed"), default=DEFAULT_WIND_SPEED),
                direction=self.first_value(
                    current.value("wind_direction"), default=DEFAULT_WIND_DIRECTION
                ),
                gusts=current.value("gust"),
            ),
            weather=Weather(
                temperature=self.first_value(
                    current.value("air_temperature"), default=DEFAULT_TEMPERATURE
                ),
                pressure=self.first_value(current.value("pressure"), default=DEFAULT_PRESSURE),
                humidity=self.first_value(current.value("humidity"), default=DEFAULT_HUMIDITY),
                visibility=(
                    visibility_km * 1000 if visibility_km is not None else DEFAULT_VISIBILITY
                ),
                description="Marine conditions",
            ),
            tides=self._fetch_tides(lat, lon, now) if self.include_tides else None,
            data_source=self.source,
        )

        logger.info(
            f"Stormglass conditions for {location_name}: "
            f"{conditions.waves.significant_height:.1f}m @ {conditions.waves.primary_swell_period:.0f}s"
        )
        return conditions

    def _fetch_tides(self, lat: float, lon: float, now: datetime) -> Optional[Tides]:
        """Current sea level plus the next high/low. Failures leave tides empty."""
        params = {"lat": lat, "lng": lon, "start": int(now.timestamp())}
        try:
            sea_level = SeaLevelResponse.model_validate(
                fetch_json(TIDE_SEA_LEVEL_URL, params=params, headers=self._headers)
            )
            extremes = TideExtremesResponse.model_validate(
                fetch_json(
                    TIDE_EXTREMES_URL,
                    params={**params, "end": int((now + timedelta(days=1)).timestamp())},
                    headers=self._headers,
                )
            )
        except (FetchError, ValidationError) as e:
            logger.warning(f"Stormglass tide data unavailable: {e}")
            return None

        return Tides(
            current_height=sea_level.data[0].sg,
            next_high=self._next_extreme(extremes, "high", now),
            next_low=self._next_extreme(extremes, "low", now),
        )

    @staticmethod
    def _next_extreme(
        extremes: TideExtremesResponse, kind: str, now: datetime
    ) -> Optional[TideEvent]:
        upcoming = [e for e in extremes.data if e.type == kind and e.time >= now]
        if not upcoming:
            return None
        first = min(upcoming, key=lambda e: e.time)
        return TideEvent(time=first.time, height=first.height)
