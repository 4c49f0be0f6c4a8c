"""Search controller state models."""

from enum import Enum

from pydantic import BaseModel, Field

from .forecast import Forecast, PlaceCandidate


class RequestState(str, Enum):
    """Coarse request status shown by the presentation layer."""

    IDLE = "idle"
    LOADING_SUGGESTIONS = "loading_suggestions"
    LOADING_FORECAST = "loading_forecast"
    ERROR = "error"


class SuggestionState(BaseModel):
    """Autocomplete dropdown state."""

    items: list[PlaceCandidate] = Field(default_factory=list)
    visible: bool = False
    loading: bool = False


class ForecastState(BaseModel):
    """Forecast lookup state.

    ``data`` and ``error_message`` are never both set.
    """

    loading: bool = False
    data: Forecast | None = None
    error_message: str | None = None


class SearchState(BaseModel):
    """Everything the presentation layer observes."""

    query: str = ""
    suggestions: SuggestionState = Field(default_factory=SuggestionState)
    forecast: ForecastState = Field(default_factory=ForecastState)
    recent_searches: list[str] = Field(default_factory=list)

    @property
    def request_state(self) -> RequestState:
        """Collapse the independent flags into one status, forecast first."""
        if self.forecast.loading:
            return RequestState.LOADING_FORECAST
        if self.suggestions.loading:
            return RequestState.LOADING_SUGGESTIONS
        if self.forecast.error_message:
            return RequestState.ERROR
        return RequestState.IDLE
