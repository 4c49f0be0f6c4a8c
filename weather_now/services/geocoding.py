"""Geocoding client and autocomplete suggestions using Open-Meteo."""

import logging

import httpx
from pydantic import ValidationError

from ..models.config import ProviderConfig
from ..models.forecast import PlaceCandidate

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
SUGGESTION_LIMIT = 5


class GeocodingClient:
    """Thin client for the Open-Meteo geocoding search endpoint."""

    def __init__(
        self,
        config: ProviderConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or ProviderConfig()
        self._transport = transport

    async def search(self, name: str, count: int) -> list[PlaceCandidate]:
        """Return up to ``count`` matches in provider relevance order.

        Transport and HTTP status errors propagate as ``httpx.HTTPError``.
        """
        params = {
            "name": name,
            "count": count,
            "language": self.config.language,
            "format": "json",
        }

        async with httpx.AsyncClient(
            timeout=self.config.timeout_seconds, transport=self._transport
        ) as client:
            response = await client.get(self.config.geocoding_url, params=params)
            response.raise_for_status()
            data = response.json()

        return self._parse_results(data)[:count]

    def _parse_results(self, data: dict) -> list[PlaceCandidate]:
        """Parse geocoding results, skipping malformed entries."""
        candidates = []
        for result in data.get("results") or []:
            try:
                candidates.append(
                    PlaceCandidate(
                        name=result["name"],
                        country=result.get("country", ""),
                        admin1=result.get("admin1") or None,
                        latitude=result["latitude"],
                        longitude=result["longitude"],
                    )
                )
            except (KeyError, TypeError, ValidationError) as e:
                logger.debug(f"Skipping malformed geocoding result {result!r}: {e}")
        return candidates


class SuggestionService:
    """Best-effort autocomplete candidates. Never raises on provider failure."""

    def __init__(
        self,
        geocoder: GeocodingClient | None = None,
        limit: int = SUGGESTION_LIMIT,
        min_query_length: int = MIN_QUERY_LENGTH,
    ):
        self.geocoder = geocoder or GeocodingClient()
        self.limit = limit
        self.min_query_length = min_query_length

    async def suggest(self, query: str) -> list[PlaceCandidate]:
        """Return up to ``limit`` candidates for ``query``."""
        if len(query) < self.min_query_length:
            return []

        try:
            return await self.geocoder.search(query, self.limit)
        except httpx.HTTPStatusError as e:
            logger.warning(f"Suggestion lookup for '{query}' failed: HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.warning(f"Suggestion lookup for '{query}' failed: {e!r}")
        except Exception as e:
            logger.warning(f"Suggestion lookup for '{query}' failed: {e}")
        return []
