"""Data models for the weather search app."""

from .config import Config, ProviderConfig, SearchConfig, Settings
from .forecast import CurrentConditions, Forecast, HourlyPrecipitation, Location, PlaceCandidate
from .state import ForecastState, RequestState, SearchState, SuggestionState

__all__ = [
    "Config",
    "CurrentConditions",
    "Forecast",
    "ForecastState",
    "HourlyPrecipitation",
    "Location",
    "PlaceCandidate",
    "ProviderConfig",
    "RequestState",
    "SearchConfig",
    "SearchState",
    "Settings",
    "SuggestionState",
]
