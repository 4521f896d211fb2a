"""Surf quality forecasts from marine and weather data."""

__version__ = "0.1.0"
