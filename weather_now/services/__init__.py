"""Services for geocoding, forecasts and search history."""

from .errors import NetworkError, NotFoundError, ProviderError, WeatherLookupError
from .forecast_service import ForecastService
from .geocoding import GeocodingClient, SuggestionService
from .recent import RecentSearches

__all__ = [
    "ForecastService",
    "GeocodingClient",
    "NetworkError",
    "NotFoundError",
    "ProviderError",
    "RecentSearches",
    "SuggestionService",
    "WeatherLookupError",
]
