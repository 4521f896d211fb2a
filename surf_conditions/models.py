"""Pydantic models for the surf conditions data contract."""

from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BreakType(str, Enum):
    BEACH_BREAK = "beach_break"
    POINT_BREAK = "point_break"
    REEF_BREAK = "reef_break"
    RIVER_MOUTH = "river_mouth"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class DataSource(str, Enum):
    """Identifier of the provider that produced a MarineConditions record."""
    NWS = "nws"
    STORMGLASS = "stormglass"
    WORLD_WEATHER = "worldweatheronline"
    OPENWEATHER = "openweather"
    UNAVAILABLE = "unavailable"


class ForecastType(str, Enum):
    AUTO = "auto"
    BASIC = "basic"
    ENHANCED = "enhanced"
    MARINE = "marine"


TideDirection = Literal["rising", "falling", "high", "low"]


# ========== Marine data (adapter output) ==========

class MarineLocation(BaseModel):
    """Where the marine data was requested for."""
    name: str
    lat: float
    lon: float
    country: Optional[str] = None


class Waves(BaseModel):
    """Wave and swell measurements, heights in meters, periods in seconds."""
    significant_height: float
    primary_swell_height: float
    primary_swell_period: float
    primary_swell_direction: float
    secondary_swell_height: Optional[float] = None
    secondary_swell_period: Optional[float] = None
    secondary_swell_direction: Optional[float] = None
    wind_wave_height: float
    wind_wave_period: float
    wind_wave_direction: float


class Wind(BaseModel):
    """Wind speed in m/s, direction in degrees (where it blows from)."""
    speed: float
    direction: float
    gusts: Optional[float] = None


class Weather(BaseModel):
    """Surface weather: °C, hPa, percent, meters."""
    temperature: float
    pressure: float
    humidity: float
    visibility: float
    description: str


class TideEvent(BaseModel):
    time: datetime
    height: float


class Tides(BaseModel):
    current_height: float
    next_high: Optional[TideEvent] = None
    next_low: Optional[TideEvent] = None


class MarineConditions(BaseModel):
    """Normalized provider output. Every numeric field is always populated."""
    location: MarineLocation
    waves: Waves
    wind: Wind
    weather: Weather
    tides: Optional[Tides] = None
    data_source: DataSource
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# ========== Scoring inputs and outputs ==========

class SurfConditions(BaseModel):
    """Scoring input projected from MarineConditions."""
    wave_height: float = Field(ge=0)
    wave_period: float = Field(gt=0)
    swell_direction: float
    wind_speed: float = Field(ge=0)
    wind_direction: float
    tide_height: Optional[float] = None
    tide_direction: Optional[TideDirection] = None
    location: str


class SpotConfiguration(BaseModel):
    """Surf spot characteristics used for scoring. Never mutated."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: BreakType
    aspect: float  # compass direction the coast faces
    optimal_wave_height: tuple[float, float]
    optimal_swell_direction: tuple[float, float]  # may wrap, e.g. (350, 30)
    optimal_tide_range: Optional[tuple[float, float]] = None
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    # Registry-only fields
    key: Optional[str] = None
    aliases: tuple[str, ...] = ()
    lat: Optional[float] = None
    lon: Optional[float] = None
    country_code: Optional[str] = None

    @property
    def offshore_direction(self) -> float:
        return (self.aspect + 180) % 360

    def describe_optimal(self) -> str:
        low_h, high_h = self.optimal_wave_height
        low_d, high_d = self.optimal_swell_direction
        return f"{low_h:g}-{high_h:g}m waves from {low_d:g}-{high_d:g}°"


class ScoreBreakdown(BaseModel):
    """Per-factor sub-scores, each in [0, 1]."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    wave_height: float
    wave_period: float
    wind: float
    swell_direction: float


class SurfQuality(BaseModel):
    """Calculator result."""
    overall_score: int = Field(ge=1, le=10)
    rating: str
    breakdown: ScoreBreakdown
    description: str


class Coordinates(BaseModel):
    """Geocoding result."""
    name: str
    lat: float
    lon: float
    country_code: Optional[str] = None


# ========== Request / response ==========

class ForecastRequest(BaseModel):
    location: str
    preferred_forecast_type: ForecastType = ForecastType.AUTO


class ResponseModel(BaseModel):
    """Base for response blocks serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SurfQualityBlock(ResponseModel):
    overall_score: int
    rating: str
    breakdown: ScoreBreakdown
    description: str


class MarineDataBlock(ResponseModel):
    wave_height: float
    primary_swell_height: float
    primary_swell_period: float
    primary_swell_direction: float
    wind_speed: float
    wind_direction: float
    data_source: str


class SpotInfo(ResponseModel):
    name: str
    type: str
    difficulty: str
    optimal_conditions: str


class ForecastResponse(ResponseModel):
    """Unified forecast returned to callers."""
    location: str
    conditions: str
    recommendation: str
    wind_conditions: str
    weather_summary: str
    surfability_score: int = Field(ge=1, le=10)
    surf_quality: Optional[SurfQualityBlock] = None
    marine_data: Optional[MarineDataBlock] = None
    spot_info: Optional[SpotInfo] = None
    forecast_type: str
    data_quality: str
    api_costs_used: bool = False
    degraded: bool = False

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
