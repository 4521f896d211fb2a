"""Adapter registry - maps data source tags to implementations."""

import logging
from typing import Optional, Type

from surf_conditions.adapters.base import BaseAdapter
from surf_conditions.adapters.nws import NwsAdapter
from surf_conditions.adapters.openweather import OpenWeatherAdapter
from surf_conditions.adapters.stormglass import StormglassAdapter
from surf_conditions.adapters.world_weather import WorldWeatherAdapter
from surf_conditions.config import Credentials
from surf_conditions.models import DataSource

logger = logging.getLogger(__name__)

# Map data source tags to adapter classes
ADAPTER_REGISTRY: dict[DataSource, Type[BaseAdapter]] = {
    DataSource.NWS: NwsAdapter,
    DataSource.STORMGLASS: StormglassAdapter,
    DataSource.WORLD_WEATHER: WorldWeatherAdapter,
    DataSource.OPENWEATHER: OpenWeatherAdapter,
}

# Credential field each keyed adapter reads
CREDENTIAL_FIELDS: dict[DataSource, str] = {
    DataSource.STORMGLASS: "stormglass_api_key",
    DataSource.WORLD_WEATHER: "world_weather_api_key",
    DataSource.OPENWEATHER: "openweather_api_key",
}


def credential_for(source: DataSource, credentials: Credentials) -> Optional[str]:
    """API key for a source, or None when the source needs no key."""
    field = CREDENTIAL_FIELDS.get(source)
    if field is None:
        return None
    return getattr(credentials, field)


def has_credential(source: DataSource, credentials: Credentials) -> bool:
    """Check whether a source can be called with the given credentials."""
    if source not in CREDENTIAL_FIELDS:
        return True
    return bool(credential_for(source, credentials))


def get_adapter(source: DataSource | str, credentials: Credentials) -> BaseAdapter:
    """
    Get an adapter instance by data source tag.

    Args:
        source: DataSource or its string value
        credentials: Keys used to construct keyed adapters

    Returns:
        Adapter instance

    Raises:
        KeyError: If no adapter is registered for the source
    """
    source = DataSource(source)
    adapter_class = ADAPTER_REGISTRY.get(source)

    if adapter_class is None:
        raise KeyError(f"No adapter registered for '{source.value}'")

    api_key = credential_for(source, credentials)
    if api_key is None:
        return adapter_class()
    return adapter_class(api_key=api_key)
