"""Errors raised by the forecast lookup path."""

CITY_NOT_FOUND_MESSAGE = "City not found. Please check the spelling and try again."
GENERIC_FAILURE_MESSAGE = "Failed to fetch weather data"


class WeatherLookupError(Exception):
    """Base class for lookup failures. ``str(error)`` is user-facing."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(WeatherLookupError):
    """The geocoder returned no match for the city name."""

    def __init__(self, message: str = CITY_NOT_FOUND_MESSAGE) -> None:
        super().__init__(message)


class ProviderError(WeatherLookupError):
    """The forecast provider reported a failure."""

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason or GENERIC_FAILURE_MESSAGE)


class NetworkError(ProviderError):
    """Transport failure, surfaced like a provider error without a reason."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(None)
        self.detail = detail
