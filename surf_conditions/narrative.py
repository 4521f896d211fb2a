"""Prompt construction and the text-generation client."""

import logging
from typing import Protocol

from pydantic import BaseModel, Field, ValidationError

from surf_conditions.config import GEMINI_BASE_URL, DEFAULT_GEMINI_MODEL
from surf_conditions.errors import NarrativeGenerationFailed
from surf_conditions.http import post_json, FetchError
from surf_conditions.models import MarineConditions, SpotConfiguration, SurfQuality

logger = logging.getLogger(__name__)


class NarrativeGenerator(Protocol):
    """Anything that turns a prompt into prose."""

    def generate(self, prompt: str) -> str:
        """Raises NarrativeGenerationFailed when no text can be produced."""
        ...


def build_prompt(
    location: str,
    marine: MarineConditions,
    spot: SpotConfiguration,
    quality: SurfQuality,
) -> str:
    """Structured prompt embedding every numeric finding."""
    waves = marine.waves
    wind = marine.wind
    weather = marine.weather
    breakdown = quality.breakdown
    low_h, high_h = spot.optimal_wave_height
    low_d, high_d = spot.optimal_swell_direction

    lines = [
        f"Analyze the surf conditions for {location} using real marine data:",
        "",
        f"MARINE CONDITIONS (from {marine.data_source.value.upper()}):",
        f"- Significant Wave Height: {waves.significant_height:.1f}m",
        f"- Primary Swell: {waves.primary_swell_height:.1f}m @ "
        f"{waves.primary_swell_period:g}s from {waves.primary_swell_direction:g}°",
    ]
    if waves.secondary_swell_height is not None:
        lines.append(
            f"- Secondary Swell: {waves.secondary_swell_height:.1f}m @ "
            f"{waves.secondary_swell_period or 0:g}s from {waves.secondary_swell_direction or 0:g}°"
        )
    lines += [
        f"- Wind Waves: {waves.wind_wave_height:.1f}m @ {waves.wind_wave_period:g}s",
        f"- Wind: {wind.speed:.1f} m/s from {wind.direction:g}°",
        f"- Weather: {weather.description}, {weather.temperature:.0f}°C",
    ]
    if marine.tides is not None:
        lines.append(f"- Tide: {marine.tides.current_height:.1f}m")
    lines += [
        "",
        "SURF SPOT ANALYSIS:",
        f"- Spot Type: {spot.type.value}",
        f"- Difficulty: {spot.difficulty.value}",
        f"- Optimal Wave Size: {low_h:g}-{high_h:g}m",
        f"- Optimal Swell Direction: {low_d:g}-{high_d:g}°",
        "",
        "SURF QUALITY BREAKDOWN:",
        f"- Overall Score: {quality.overall_score}/10 ({quality.rating})",
        f"- Wave Height Score: {breakdown.wave_height * 10:.1f}/10",
        f"- Wave Period Score: {breakdown.wave_period * 10:.1f}/10",
        f"- Wind Score: {breakdown.wind * 10:.1f}/10",
        f"- Swell Direction Score: {breakdown.swell_direction * 10:.1f}/10",
        "",
        f"Provide a comprehensive surf forecast including specific advice for surfers "
        f"at this {spot.type.value}. Mention the data source quality and any limitations. "
        f"Give recommendations for different skill levels.",
    ]
    return "\n".join(lines)


# ========== Gemini response schema ==========

class _Part(BaseModel):
    text: str = ""


class _Content(BaseModel):
    parts: list[_Part] = Field(default_factory=list)


class _Candidate(BaseModel):
    content: _Content = Field(default_factory=_Content)


class GenerateContentResponse(BaseModel):
    candidates: list[_Candidate] = Field(default_factory=list)

    def text(self) -> str:
        if not self.candidates:
            return ""
        return "".join(part.text for part in self.candidates[0].content.parts).strip()


class GeminiNarrator:
    """Text generation through the Generative Language REST API."""

    def __init__(self, api_key: str, model: str = DEFAULT_GEMINI_MODEL):
        self.api_key = api_key
        self.model = model

    @property
    def url(self) -> str:
        return f"{GEMINI_BASE_URL}/models/{self.model}:generateContent"

    def generate(self, prompt: str) -> str:
        """
        Generate narrative text for a prompt.

        Raises:
            NarrativeGenerationFailed: On HTTP failure or an empty answer
        """
        if not self.api_key:
            raise NarrativeGenerationFailed("Text generation API key not configured")

        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            data = post_json(self.url, payload, headers={"x-goog-api-key": self.api_key})
            text = GenerateContentResponse.model_validate(data).text()
        except FetchError as e:
            raise NarrativeGenerationFailed(f"{self.model} request failed: {e}") from e
        except ValidationError as e:
            raise NarrativeGenerationFailed(f"{self.model} returned an unexpected payload") from e

        if not text:
            raise NarrativeGenerationFailed(f"{self.model} returned no text")

        logger.info(f"Generated {len(text)} characters of narrative with {self.model}")
        return text
