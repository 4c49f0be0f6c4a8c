"""Forecast lookup service using the Open-Meteo geocoding and forecast APIs."""

import logging
from datetime import datetime

import httpx
from pydantic import ValidationError

from ..models.config import ProviderConfig
from ..models.forecast import (
    CurrentConditions,
    Forecast,
    HourlyPrecipitation,
    Location,
    PlaceCandidate,
)
from .errors import NetworkError, NotFoundError, ProviderError
from .geocoding import GeocodingClient

logger = logging.getLogger(__name__)

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation",
    "weather_code",
    "wind_speed_10m",
    "wind_direction_10m",
)
HOURLY_FIELDS = ("precipitation_probability",)


class ForecastService:
    """Resolve a city name and fetch its current and hourly forecast."""

    def __init__(
        self,
        config: ProviderConfig | None = None,
        geocoder: GeocodingClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or ProviderConfig()
        self._transport = transport
        self.geocoder = geocoder or GeocodingClient(self.config, transport=transport)

    async def lookup(self, city_name: str) -> Forecast:
        """Geocode ``city_name`` and fetch the forecast for the first match.

        Raises:
            ValueError: ``city_name`` is blank.
            NotFoundError: the geocoder has no match.
            ProviderError: the forecast provider failed (``NetworkError`` for
                transport failures).
        """
        if not city_name.strip():
            raise ValueError("city_name must not be blank")

        place = await self._resolve(city_name)
        logger.debug(f"Resolved '{city_name}' to {place.name}, {place.country}")
        data = await self._fetch(place)
        return self._parse_response(data, place)

    async def _resolve(self, city_name: str) -> PlaceCandidate:
        try:
            matches = await self.geocoder.search(city_name, 1)
        except httpx.HTTPError as e:
            logger.error(f"Geocoding request for '{city_name}' failed: {e!r}")
            raise NetworkError(str(e)) from e
        except ValueError as e:
            logger.error(f"Geocoding response for '{city_name}' was not JSON: {e}")
            raise NetworkError(str(e)) from e

        if not matches:
            raise NotFoundError()
        return matches[0]

    async def _fetch(self, place: PlaceCandidate) -> dict:
        params = {
            "latitude": place.latitude,
            "longitude": place.longitude,
            "current": ",".join(CURRENT_FIELDS),
            "hourly": ",".join(HOURLY_FIELDS),
            "timezone": "auto",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_seconds, transport=self._transport
            ) as client:
                response = await client.get(self.config.forecast_url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Forecast request for {place.name} failed: {e!r}")
            raise NetworkError(str(e)) from e

        # Open-Meteo reports bad requests as a JSON body with an error flag
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Forecast response for {place.name} was not JSON (HTTP {response.status_code})")
            raise NetworkError(f"HTTP {response.status_code}") from e

        if isinstance(data, dict) and data.get("error"):
            reason = data.get("reason")
            logger.error(f"Forecast provider error for {place.name}: {reason}")
            raise ProviderError(reason)

        if response.is_error or not isinstance(data, dict):
            logger.error(f"HTTP error fetching forecast: {response.status_code}")
            raise NetworkError(f"HTTP {response.status_code}")

        return data

    def _parse_response(self, data: dict, place: PlaceCandidate) -> Forecast:
        """Merge the matched place with the current and hourly blocks."""
        try:
            current_data = data.get("current") or {}
            time_str = current_data.get("time")
            current = CurrentConditions(
                temperature=current_data["temperature_2m"],
                apparent_temperature=current_data["apparent_temperature"],
                humidity_percent=current_data["relative_humidity_2m"],
                precipitation_mm=current_data.get("precipitation") or 0.0,
                weather_code=current_data["weather_code"],
                wind_speed_kph=current_data["wind_speed_10m"],
                wind_direction_deg=current_data["wind_direction_10m"],
                time=datetime.fromisoformat(time_str) if time_str else None,
            )

            hourly_data = data.get("hourly") or {}
            times = hourly_data.get("time") or []
            probabilities = hourly_data.get("precipitation_probability") or []
            count = min(len(times), len(probabilities))
            hourly = HourlyPrecipitation(
                timestamps=tuple(datetime.fromisoformat(t) for t in times[:count]),
                precipitation_probability_percent=tuple(probabilities[:count]),
            )

            return Forecast(
                location=Location(
                    name=place.name,
                    country=place.country,
                    latitude=place.latitude,
                    longitude=place.longitude,
                ),
                current=current,
                hourly=hourly,
                timezone=data.get("timezone", "GMT"),
            )

        except (KeyError, TypeError, ValueError, ValidationError) as e:
            logger.error(f"Error parsing forecast response: {e}")
            raise ProviderError() from e
