"""Tests for marine data source selection and fallback."""

import pytest

from surf_conditions.adapters.base import BaseAdapter
from surf_conditions.errors import MarineDataUnavailable, ProviderError
from surf_conditions.models import DataSource
from surf_conditions.selector import (
    coverage_area,
    fallback_sources,
    fetch_marine_conditions,
    in_government_coverage,
    select_sources,
)
from surf_conditions.tests.factories import make_credentials, make_marine


class StubAdapter(BaseAdapter):
    """Adapter answering from memory."""

    requires_credential = False

    def __init__(self, source: DataSource, result=None, error: Exception = None):
        super().__init__()
        self.source = source
        self.result = result
        self.error = error
        self.calls = 0

    def _fetch(self, lat, lon, location_name):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


def sources(adapters):
    return [adapter.source for adapter in adapters]


class TestCoverage:
    """Test government coverage boxes."""

    def test_areas(self):
        assert coverage_area(34.0, -118.5) == "Continental US"
        assert coverage_area(21.3, -157.8) == "Hawaii"
        assert coverage_area(61.2, -149.9) == "Alaska"
        assert coverage_area(18.4, -66.1) == "Puerto Rico"
        assert coverage_area(13.4, 144.8) == "Pacific Territories"

    def test_outside(self):
        assert not in_government_coverage(-33.9, 151.3)
        assert not in_government_coverage(43.5, -1.5)

    def test_bounds_inclusive(self):
        assert in_government_coverage(24, -125)
        assert in_government_coverage(0, 180)


class TestSelectSources:
    """Test provider ordering."""

    def test_all_keys_inside_coverage(self):
        credentials = make_credentials(openweather="o", stormglass="s", world_weather="w")

        assert sources(select_sources(34.0, -118.5, credentials)) == [
            DataSource.NWS,
            DataSource.STORMGLASS,
            DataSource.WORLD_WEATHER,
            DataSource.OPENWEATHER,
        ]

    def test_outside_coverage_without_keys(self):
        assert sources(select_sources(-33.9, 151.3, make_credentials())) == [DataSource.OPENWEATHER]

    def test_only_world_weather_key(self):
        credentials = make_credentials(world_weather="w")

        assert sources(select_sources(-33.9, 151.3, credentials)) == [
            DataSource.WORLD_WEATHER,
            DataSource.OPENWEATHER,
        ]

    def test_government_first_without_keys(self):
        assert sources(select_sources(21.3, -157.8, make_credentials())) == [
            DataSource.NWS,
            DataSource.OPENWEATHER,
        ]

    def test_fallback_sources(self):
        assert sources(fallback_sources(make_credentials(stormglass="s"))) == [DataSource.OPENWEATHER]


class TestFetchMarineConditions:
    """Test walking the provider list."""

    def test_first_success_wins(self):
        marine = make_marine(source=DataSource.STORMGLASS)
        first = StubAdapter(DataSource.STORMGLASS, result=marine)
        second = StubAdapter(DataSource.OPENWEATHER, result=make_marine(source=DataSource.OPENWEATHER))

        assert fetch_marine_conditions([first, second], 34.0, -118.5, "Malibu") is marine
        assert second.calls == 0

    def test_falls_through_failures(self):
        marine = make_marine(source=DataSource.OPENWEATHER)
        adapters = [
            StubAdapter(DataSource.NWS, error=ProviderError("nws", "HTTP 500")),
            StubAdapter(DataSource.STORMGLASS, error=ValueError("bad shape")),
            StubAdapter(DataSource.OPENWEATHER, result=marine),
        ]

        result = fetch_marine_conditions(adapters, 34.0, -118.5, "Malibu")

        assert result.data_source == DataSource.OPENWEATHER
        assert all(adapter.calls == 1 for adapter in adapters)

    def test_missing_key_skipped(self):
        """A keyless paid adapter fails without a request and the next one answers."""
        credentials = make_credentials(world_weather="w")
        adapters = select_sources(-33.9, 151.3, credentials)
        adapters[0] = StubAdapter(DataSource.WORLD_WEATHER, error=ProviderError("worldweatheronline", "down"))

        with pytest.raises(MarineDataUnavailable) as exc_info:
            fetch_marine_conditions(adapters, -33.9, 151.3, "Bondi")

        assert [e.source for e in exc_info.value.errors] == ["worldweatheronline", "openweather"]

    def test_all_fail(self):
        adapters = [
            StubAdapter(DataSource.NWS, error=ProviderError("nws", "down")),
            StubAdapter(DataSource.OPENWEATHER, error=ProviderError("openweather", "down")),
        ]

        with pytest.raises(MarineDataUnavailable) as exc_info:
            fetch_marine_conditions(adapters, 34.0, -118.5, "Malibu")

        assert len(exc_info.value.errors) == 2

    def test_empty_list(self):
        with pytest.raises(MarineDataUnavailable):
            fetch_marine_conditions([], 34.0, -118.5, "Malibu")
