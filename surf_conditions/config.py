"""Configuration settings for the forecast pipeline."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Contact info for User-Agent (required by NWS API)
CONTACT_EMAIL = "surf-conditions-bot@example.com"  # Replace with real email

# User-Agent header
USER_AGENT = f"SurfConditionsBot/0.1 ({CONTACT_EMAIL})"

# HTTP settings
REQUEST_TIMEOUT = 15  # seconds
MAX_RETRIES = 3
RETRY_BACKOFF_BASE = 2  # exponential backoff multiplier

# Provider endpoints
NWS_BASE_URL = "https://api.weather.gov"
STORMGLASS_BASE_URL = "https://api.stormglass.io/v2"
WORLD_WEATHER_BASE_URL = "https://api.worldweatheronline.com/premium/v1"
OPENWEATHER_BASE_URL = "https://api.openweathermap.org"
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"

# Registry
SPOTS_YAML = Path(__file__).resolve().parent / "spots.yaml"


class Credentials(BaseSettings):
    """
    API keys available to the pipeline.

    Read once at process start from the environment (or a .env file) and
    passed explicitly to the source selector and forecast service.
    An empty string means the key is absent.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Baseline weather key (geocoding + weather-only fallback)
    openweather_api_key: str = ""
    # Global marine providers, in priority order
    stormglass_api_key: str = ""
    world_weather_api_key: str = ""
    # Text generation
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_GEMINI_MODEL

    @property
    def has_weather(self) -> bool:
        return bool(self.openweather_api_key)

    @property
    def has_marine(self) -> bool:
        """True when any paid global marine provider is configured."""
        return bool(self.stormglass_api_key or self.world_weather_api_key)


def load_credentials() -> Credentials:
    """Build the process-wide credentials object from the environment."""
    return Credentials()
