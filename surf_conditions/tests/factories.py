"""Builders for test credentials and marine conditions."""

from datetime import datetime, timezone

from surf_conditions.config import Credentials
from surf_conditions.models import (
    DataSource,
    MarineConditions,
    MarineLocation,
    Waves,
    Weather,
    Wind,
)


def make_credentials(
    openweather: str = "",
    stormglass: str = "",
    world_weather: str = "",
    gemini: str = "",
) -> Credentials:
    """Credentials independent of the test runner's environment."""
    return Credentials(
        _env_file=None,
        openweather_api_key=openweather,
        stormglass_api_key=stormglass,
        world_weather_api_key=world_weather,
        gemini_api_key=gemini,
    )


def make_marine(
    significant_height: float = 1.8,
    period: float = 10,
    swell_direction: float = 230,
    wind_speed: float = 2,
    wind_direction: float = 45,
    source: DataSource = DataSource.STORMGLASS,
    name: str = "Malibu",
) -> MarineConditions:
    return MarineConditions(
        location=MarineLocation(name=name, lat=34.0259, lon=-118.7798),
        waves=Waves(
            significant_height=significant_height,
            primary_swell_height=significant_height * 0.8,
            primary_swell_period=period,
            primary_swell_direction=swell_direction,
            wind_wave_height=0.3,
            wind_wave_period=4,
            wind_wave_direction=270,
        ),
        wind=Wind(speed=wind_speed, direction=wind_direction),
        weather=Weather(
            temperature=21,
            pressure=1015,
            humidity=65,
            visibility=10000,
            description="Sunny",
        ),
        data_source=source,
        timestamp=datetime(2024, 6, 1, 12, tzinfo=timezone.utc),
    )
