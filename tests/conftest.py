"""Pytest configuration and fixtures."""

import asyncio
import json
import tempfile
from pathlib import Path

import httpx
import pytest

from weather_now.models.forecast import (
    CurrentConditions,
    Forecast,
    HourlyPrecipitation,
    Location,
    PlaceCandidate,
)

GEOCODING_HOST = "geocoding-api.open-meteo.com"
FORECAST_HOST = "api.open-meteo.com"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "providers": {
            "geocoding_url": "https://geocoding.example.com/v1/search",
            "forecast_url": "https://forecast.example.com/v1/forecast",
            "language": "de",
            "timeout_seconds": 5,
        },
        "search": {
            "debounce_ms": 150,
            "min_query_length": 3,
            "suggestion_limit": 8,
            "recent_limit": 10,
        },
        "settings": {"log_level": "DEBUG"},
    }


@pytest.fixture
def sample_config_file(temp_dir, sample_config_data):
    """Create a sample config file for testing."""
    config_path = temp_dir / "config.json"
    with open(config_path, "w") as f:
        json.dump(sample_config_data, f)
    return config_path


@pytest.fixture
def paris_geocoding():
    """Geocoding response with a single Paris match."""
    return {
        "results": [
            {
                "id": 2988507,
                "name": "Paris",
                "latitude": 48.8566,
                "longitude": 2.3522,
                "country": "FR",
                "admin1": "Île-de-France",
            }
        ],
        "generationtime_ms": 0.7,
    }


@pytest.fixture
def paris_forecast():
    """Forecast response for Paris with a full day of hourly data."""
    return {
        "latitude": 48.86,
        "longitude": 2.3599997,
        "timezone": "Europe/Paris",
        "current": {
            "time": "2026-10-19T14:00",
            "interval": 900,
            "temperature_2m": 18,
            "relative_humidity_2m": 64,
            "apparent_temperature": 17.2,
            "precipitation": 0.0,
            "weather_code": 2,
            "wind_speed_10m": 12.4,
            "wind_direction_10m": 225,
        },
        "hourly": {
            "time": [f"2026-10-19T{hour:02d}:00" for hour in range(24)],
            "precipitation_probability": [hour * 2 for hour in range(24)],
        },
    }


class OpenMeteoStub:
    """Routes requests to canned geocoding and forecast responses.

    Each response may be a dict (served as JSON), an ``httpx.Response``,
    or an exception to raise from the transport.
    """

    def __init__(self, geocoding=None, forecast=None):
        self.geocoding = geocoding if geocoding is not None else {}
        self.forecast = forecast if forecast is not None else {}
        self.requests: list[httpx.Request] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.geocoding if request.url.host == GEOCODING_HOST else self.forecast
        if isinstance(response, Exception):
            raise response
        if isinstance(response, httpx.Response):
            return response
        return httpx.Response(200, json=response)


@pytest.fixture
def open_meteo():
    """Empty Open-Meteo stub; tests fill in the responses."""
    return OpenMeteoStub()


def make_candidate(name: str, country: str = "GB", admin1: str | None = None) -> PlaceCandidate:
    return PlaceCandidate(name=name, country=country, admin1=admin1, latitude=51.5, longitude=-0.12)


def make_forecast(
    name: str = "Paris",
    country: str = "FR",
    weather_code: int = 2,
    temperature: float = 18,
) -> Forecast:
    return Forecast(
        location=Location(name=name, country=country, latitude=48.8566, longitude=2.3522),
        current=CurrentConditions(
            temperature=temperature,
            apparent_temperature=temperature - 1,
            humidity_percent=64,
            precipitation_mm=0.0,
            weather_code=weather_code,
            wind_speed_kph=12.4,
            wind_direction_deg=225,
        ),
        hourly=HourlyPrecipitation(),
    )


class FakeSuggestionService:
    """Suggestion service double whose responses can be held back per query."""

    def __init__(self, results: dict[str, list[PlaceCandidate]] | None = None):
        self.results = results or {}
        self.calls: list[str] = []
        self._gates: dict[str, asyncio.Event] = {}

    def hold(self, query: str) -> asyncio.Event:
        """Block responses for ``query`` until the returned event is set."""
        gate = asyncio.Event()
        self._gates[query] = gate
        return gate

    async def suggest(self, query: str) -> list[PlaceCandidate]:
        self.calls.append(query)
        gate = self._gates.get(query)
        if gate is not None:
            await gate.wait()
        return list(self.results.get(query, []))


class FakeForecastService:
    """Forecast service double returning or raising per city."""

    def __init__(self, results: dict | None = None, default=None):
        self.results = results or {}
        self.default = default
        self.calls: list[str] = []
        self._gates: dict[str, asyncio.Event] = {}

    def hold(self, city: str) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[city] = gate
        return gate

    async def lookup(self, city: str) -> Forecast:
        self.calls.append(city)
        gate = self._gates.get(city)
        if gate is not None:
            await gate.wait()
        result = self.results.get(city, self.default)
        if isinstance(result, Exception):
            raise result
        if result is None:
            raise AssertionError(f"No canned forecast for {city!r}")
        return result


async def wait_until(predicate, timeout: float = 1.0) -> None:
    """Poll ``predicate`` until it is true or fail after ``timeout`` seconds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("Condition not met before timeout")
        await asyncio.sleep(0.005)


@pytest.fixture
def candidate_factory():
    return make_candidate


@pytest.fixture
def forecast_factory():
    return make_forecast


@pytest.fixture
def suggestion_service():
    return FakeSuggestionService()


@pytest.fixture
def forecast_service():
    return FakeForecastService(default=make_forecast())


@pytest.fixture
def wait_for():
    """Poll helper for conditions reached by background tasks."""
    return wait_until
