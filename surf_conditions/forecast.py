"""
Forecast orchestration.

One request flows through: coordinates -> spot configuration -> marine
data -> normalized conditions -> score -> narrative. Every stage after
geocoding degrades to a documented default instead of failing, and the
response records how degraded it is.
"""

import logging
from typing import NamedTuple, Optional

from pydantic import ValidationError

from surf_conditions.config import Credentials
from surf_conditions.errors import (
    InvalidInput,
    MarineDataUnavailable,
    NarrativeGenerationFailed,
)
from surf_conditions.geocoding import Geocoder
from surf_conditions.models import (
    Coordinates,
    DataSource,
    ForecastRequest,
    ForecastResponse,
    ForecastType,
    MarineConditions,
    MarineDataBlock,
    MarineLocation,
    SpotConfiguration,
    SpotInfo,
    SurfConditions,
    SurfQuality,
    SurfQualityBlock,
    Waves,
    Weather,
    Wind,
)
from surf_conditions.narrative import GeminiNarrator, NarrativeGenerator, build_prompt
from surf_conditions.quality import calculate_overall_score
from surf_conditions.resolver import resolve_spot
from surf_conditions.selector import (
    PAID_PROVIDERS,
    fallback_sources,
    fetch_marine_conditions,
    in_government_coverage,
    select_sources,
)
from surf_conditions.summarize import generate_summary, weather_summary, wind_conditions

logger = logging.getLogger(__name__)

MIN_LOCATION_LENGTH = 2


class ForecastPlan(NamedTuple):
    """Which forecaster runs and the quality it can deliver."""
    forecast_type: ForecastType
    reason: str
    quality: str


def plan_forecast(
    preference: ForecastType,
    credentials: Credentials,
    government_coverage: bool = False,
) -> ForecastPlan:
    """
    Pick the forecaster for a request.

    Explicit preferences are honored when the baseline weather key exists.
    Auto mode uses marine data whenever a marine source can answer: a paid
    global provider, or government coverage for the point.
    """
    has_weather = credentials.has_weather
    has_marine = credentials.has_marine

    if preference == ForecastType.MARINE and (has_weather or government_coverage):
        if has_marine:
            return ForecastPlan(ForecastType.MARINE, "Marine data requested with premium APIs", "Premium")
        return ForecastPlan(ForecastType.MARINE, "Marine data requested without premium APIs", "Standard")

    if preference == ForecastType.ENHANCED and has_weather:
        return ForecastPlan(ForecastType.ENHANCED, "Enhanced forecast requested", "Good")

    if preference == ForecastType.BASIC and has_weather:
        return ForecastPlan(ForecastType.BASIC, "Basic forecast requested", "Basic")

    if preference == ForecastType.AUTO:
        if has_marine:
            return ForecastPlan(ForecastType.MARINE, "Marine APIs available", "Premium")
        if government_coverage:
            return ForecastPlan(ForecastType.MARINE, "Inside government marine coverage", "Standard")
        if has_weather:
            return ForecastPlan(ForecastType.ENHANCED, "Weather API available, waves estimated", "Good")

    return ForecastPlan(ForecastType.BASIC, "Limited API access", "Basic")


def default_marine_conditions(location: MarineLocation) -> MarineConditions:
    """Conservative conditions used when every provider failed."""
    return MarineConditions(
        location=location,
        waves=Waves(
            significant_height=1.0,
            primary_swell_height=0.8,
            primary_swell_period=8,
            primary_swell_direction=180,
            wind_wave_height=0.3,
            wind_wave_period=4,
            wind_wave_direction=270,
        ),
        wind=Wind(speed=5, direction=270),
        weather=Weather(
            temperature=20,
            pressure=1013,
            humidity=70,
            visibility=10000,
            description="Weather data unavailable",
        ),
        data_source=DataSource.UNAVAILABLE,
    )


def to_surf_conditions(marine: MarineConditions) -> SurfConditions:
    """Project marine data onto the scoring input."""
    tide_height = None
    tide_direction = None
    tides = marine.tides
    if tides is not None:
        tide_height = tides.current_height
        if tides.next_high and tides.next_low:
            tide_direction = "rising" if tides.next_high.time < tides.next_low.time else "falling"
        elif tides.next_high:
            tide_direction = "rising"
        elif tides.next_low:
            tide_direction = "falling"

    return SurfConditions(
        wave_height=marine.waves.significant_height,
        wave_period=marine.waves.primary_swell_period,
        swell_direction=marine.waves.primary_swell_direction,
        wind_speed=marine.wind.speed,
        wind_direction=marine.wind.direction,
        tide_height=tide_height,
        tide_direction=tide_direction,
        location=marine.location.name,
    )


def parse_request(
    location: str, preferred_forecast_type: str | ForecastType = ForecastType.AUTO
) -> ForecastRequest:
    """
    Validate raw caller input.

    Raises:
        InvalidInput: Location shorter than two characters or unknown forecast type
    """
    location = (location or "").strip()
    if len(location) < MIN_LOCATION_LENGTH:
        raise InvalidInput(f"Location must be at least {MIN_LOCATION_LENGTH} characters.")

    try:
        return ForecastRequest(location=location, preferred_forecast_type=preferred_forecast_type)
    except ValidationError as e:
        raise InvalidInput(f"Invalid forecast request: {e}") from e


class ForecastService:
    """Runs forecast requests. Holds only read-only collaborators."""

    def __init__(
        self,
        credentials: Credentials,
        geocoder: Optional[Geocoder] = None,
        narrator: Optional[NarrativeGenerator] = None,
        spots: Optional[tuple[SpotConfiguration, ...]] = None,
    ):
        self.credentials = credentials
        self.spots = spots
        self.geocoder = geocoder or Geocoder(credentials.openweather_api_key, spots=spots)
        if narrator is None and credentials.gemini_api_key:
            narrator = GeminiNarrator(credentials.gemini_api_key, credentials.gemini_model)
        self.narrator = narrator

    def forecast(self, request: ForecastRequest | str) -> ForecastResponse:
        """
        Produce a forecast.

        Raises:
            InvalidInput: Bad request
            LocationNotFound: Location could not be geocoded
        """
        if isinstance(request, str):
            request = parse_request(request)
        else:
            request = parse_request(request.location, request.preferred_forecast_type)

        location = request.location
        logger.info(f"Forecast requested for '{location}' ({request.preferred_forecast_type.value})")

        coords = self.geocoder.resolve_coordinates(location)
        spot = resolve_spot(location, coords.country_code, spots=self.spots)

        plan = plan_forecast(
            request.preferred_forecast_type,
            self.credentials,
            government_coverage=in_government_coverage(coords.lat, coords.lon),
        )
        logger.info(f"Using {plan.forecast_type.value} forecaster: {plan.reason}")

        marine = self._marine_conditions(plan, coords, location)
        quality = calculate_overall_score(to_surf_conditions(marine), spot)
        logger.info(f"{location}: {quality.overall_score}/10 {quality.rating} ({marine.data_source.value})")

        conditions_text, narrative_ok = self._narrative(location, marine, spot, quality)

        data_quality = plan.quality
        degraded = not narrative_ok
        if marine.data_source == DataSource.UNAVAILABLE:
            data_quality = "Unavailable"
            degraded = True
        elif plan.forecast_type == ForecastType.MARINE and marine.data_source == DataSource.OPENWEATHER:
            data_quality = "Estimated"
            degraded = True

        response = ForecastResponse(
            location=location,
            conditions=conditions_text,
            recommendation=quality.description,
            wind_conditions=wind_conditions(marine, quality),
            weather_summary=weather_summary(marine),
            surfability_score=quality.overall_score,
            forecast_type=plan.forecast_type.value,
            data_quality=data_quality,
            api_costs_used=marine.data_source in PAID_PROVIDERS,
            degraded=degraded,
        )

        if plan.forecast_type != ForecastType.BASIC:
            response.surf_quality = SurfQualityBlock(
                overall_score=quality.overall_score,
                rating=quality.rating,
                breakdown=quality.breakdown,
                description=quality.description,
            )
            response.marine_data = MarineDataBlock(
                wave_height=marine.waves.significant_height,
                primary_swell_height=marine.waves.primary_swell_height,
                primary_swell_period=marine.waves.primary_swell_period,
                primary_swell_direction=marine.waves.primary_swell_direction,
                wind_speed=marine.wind.speed,
                wind_direction=marine.wind.direction,
                data_source=marine.data_source.value,
            )
            response.spot_info = SpotInfo(
                name=spot.name,
                type=spot.type.value,
                difficulty=spot.difficulty.value,
                optimal_conditions=spot.describe_optimal(),
            )

        return response

    def _marine_conditions(
        self, plan: ForecastPlan, coords: Coordinates, location: str
    ) -> MarineConditions:
        if plan.forecast_type == ForecastType.MARINE:
            adapters = select_sources(coords.lat, coords.lon, self.credentials)
        else:
            adapters = fallback_sources(self.credentials)

        try:
            return fetch_marine_conditions(adapters, coords.lat, coords.lon, location)
        except MarineDataUnavailable as e:
            logger.warning(f"Using default marine conditions for {location}: {e}")
            return default_marine_conditions(
                MarineLocation(
                    name=location,
                    lat=coords.lat,
                    lon=coords.lon,
                    country=coords.country_code,
                )
            )

    def _narrative(
        self,
        location: str,
        marine: MarineConditions,
        spot: SpotConfiguration,
        quality: SurfQuality,
    ) -> tuple[str, bool]:
        """
        Narrative text and whether it came from the generator.

        Falls back to the templated summary on any generation failure.
        """
        if self.narrator is not None:
            prompt = build_prompt(location, marine, spot, quality)
            try:
                return self.narrator.generate(prompt), True
            except NarrativeGenerationFailed as e:
                logger.warning(f"Narrative generation failed, using templated summary: {e}")
            except Exception as e:
                logger.warning(
                    f"Unexpected narrative generator error, using templated summary: "
                    f"{type(e).__name__}: {e}"
                )
        else:
            logger.info("No text generator configured, using templated summary")

        return generate_summary(location, marine, spot, quality), False
