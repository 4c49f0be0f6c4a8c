"""Tests for the forecast lookup service."""

from datetime import datetime

import httpx
import pytest

from weather_now.derivation import description_for
from weather_now.services.errors import (
    CITY_NOT_FOUND_MESSAGE,
    GENERIC_FAILURE_MESSAGE,
    NetworkError,
    NotFoundError,
    ProviderError,
)
from weather_now.services.forecast_service import ForecastService

GEOCODING_HOST = "geocoding-api.open-meteo.com"
FORECAST_HOST = "api.open-meteo.com"


@pytest.fixture
def service(open_meteo):
    return ForecastService(transport=open_meteo.transport)


@pytest.fixture
def paris(open_meteo, paris_geocoding, paris_forecast):
    """Stub answering with Paris for both stages."""
    open_meteo.geocoding = paris_geocoding
    open_meteo.forecast = paris_forecast
    return open_meteo


class TestLookupSuccess:
    """Tests for a successful two-stage lookup."""

    async def test_paris_end_to_end(self, service, paris):
        """Test the merged forecast for Paris."""
        forecast = await service.lookup("Paris")

        assert forecast.location.name == "Paris"
        assert forecast.location.country == "FR"
        assert forecast.location.latitude == 48.8566
        assert forecast.location.longitude == 2.3522
        assert forecast.current.temperature == 18
        assert description_for(forecast.current.weather_code) == "Partly cloudy"

    async def test_current_conditions_mapping(self, service, paris):
        forecast = await service.lookup("Paris")

        current = forecast.current
        assert current.apparent_temperature == 17.2
        assert current.humidity_percent == 64
        assert current.precipitation_mm == 0.0
        assert current.wind_speed_kph == 12.4
        assert current.wind_direction_deg == 225
        assert current.time == datetime(2026, 10, 19, 14, 0)
        assert forecast.timezone == "Europe/Paris"

    async def test_hourly_series(self, service, paris):
        """Test hourly timestamps and probabilities stay aligned."""
        forecast = await service.lookup("Paris")

        assert len(forecast.hourly) == 24
        assert forecast.hourly.timestamps[3] == datetime(2026, 10, 19, 3)
        assert forecast.hourly.precipitation_probability_percent[3] == 6

    async def test_geocode_request(self, service, paris):
        """Test the geocoder is asked for exactly one match."""
        await service.lookup("Paris")

        request = paris.requests_to(GEOCODING_HOST)[0]
        assert request.url.params["name"] == "Paris"
        assert request.url.params["count"] == "1"
        assert request.url.params["language"] == "en"
        assert request.url.params["format"] == "json"

    async def test_forecast_request(self, service, paris):
        """Test the forecast is requested for the matched coordinates."""
        await service.lookup("Paris")

        request = paris.requests_to(FORECAST_HOST)[0]
        params = request.url.params
        assert float(params["latitude"]) == 48.8566
        assert float(params["longitude"]) == 2.3522
        assert params["current"] == (
            "temperature_2m,relative_humidity_2m,apparent_temperature,precipitation,"
            "weather_code,wind_speed_10m,wind_direction_10m"
        )
        assert params["hourly"] == "precipitation_probability"
        assert params["timezone"] == "auto"

    async def test_uses_first_match_only(self, service, paris, paris_geocoding):
        paris_geocoding["results"].append(
            {"name": "Paris", "country": "US", "latitude": 33.66, "longitude": -95.55}
        )
        paris.geocoding = paris_geocoding

        forecast = await service.lookup("Paris")

        assert forecast.location.country == "FR"
        assert len(paris.requests_to(FORECAST_HOST)) == 1

    async def test_misaligned_hourly_truncated(self, service, paris, paris_forecast):
        """Test extra hourly entries without a partner are dropped."""
        paris_forecast["hourly"]["precipitation_probability"] = [10, 20]
        paris.forecast = paris_forecast

        forecast = await service.lookup("Paris")

        assert len(forecast.hourly.timestamps) == 2
        assert forecast.hourly.precipitation_probability_percent == (10, 20)

    async def test_missing_hourly_block(self, service, paris, paris_forecast):
        del paris_forecast["hourly"]
        paris.forecast = paris_forecast

        forecast = await service.lookup("Paris")

        assert len(forecast.hourly) == 0


class TestLookupFailures:
    """Tests for the failure taxonomy."""

    async def test_not_found(self, service, open_meteo):
        """Test zero geocoding matches raise NotFoundError and skip the forecast."""
        open_meteo.geocoding = {"generationtime_ms": 0.3}

        with pytest.raises(NotFoundError) as exc_info:
            await service.lookup("Zzxyqq")

        assert str(exc_info.value) == CITY_NOT_FOUND_MESSAGE
        assert open_meteo.requests_to(FORECAST_HOST) == []

    async def test_provider_error_with_reason(self, service, paris):
        """Test the provider's reason is surfaced."""
        paris.forecast = httpx.Response(
            400, json={"error": True, "reason": "Latitude must be in range of -90 to 90°."}
        )

        with pytest.raises(ProviderError) as exc_info:
            await service.lookup("Paris")

        assert str(exc_info.value) == "Latitude must be in range of -90 to 90°."

    async def test_provider_error_without_reason(self, service, paris):
        paris.forecast = {"error": True}

        with pytest.raises(ProviderError) as exc_info:
            await service.lookup("Paris")

        assert str(exc_info.value) == GENERIC_FAILURE_MESSAGE

    async def test_forecast_connect_error(self, service, paris):
        """Test transport failures surface as a generic NetworkError."""
        paris.forecast = httpx.ConnectError("connection refused")

        with pytest.raises(NetworkError) as exc_info:
            await service.lookup("Paris")

        assert isinstance(exc_info.value, ProviderError)
        assert str(exc_info.value) == GENERIC_FAILURE_MESSAGE

    async def test_geocoding_failure_is_network_error(self, service, open_meteo):
        open_meteo.geocoding = httpx.Response(502)

        with pytest.raises(NetworkError):
            await service.lookup("Paris")

    async def test_forecast_status_without_body(self, service, paris):
        paris.forecast = httpx.Response(503, content=b"Service Unavailable")

        with pytest.raises(NetworkError) as exc_info:
            await service.lookup("Paris")

        assert exc_info.value.detail == "HTTP 503"

    async def test_malformed_current_block(self, service, paris, paris_forecast):
        """Test a response missing current fields fails with the generic message."""
        del paris_forecast["current"]["weather_code"]
        paris.forecast = paris_forecast

        with pytest.raises(ProviderError) as exc_info:
            await service.lookup("Paris")

        assert str(exc_info.value) == GENERIC_FAILURE_MESSAGE

    @pytest.mark.parametrize("city", ["", "   ", "\t\n"])
    async def test_blank_city_rejected_before_network(self, service, open_meteo, city):
        with pytest.raises(ValueError):
            await service.lookup(city)

        assert open_meteo.requests == []
