"""Display derivations for weather codes, temperatures and wind.

Every function here is pure and total: unknown weather codes and out of range
values map to a documented fallback instead of raising.

Threshold ladders are ``(lower_bound, result)`` pairs ordered from the highest
bound down. The first bound the value reaches wins, so order matters at the
boundaries.
"""

import math
from datetime import datetime

from pydantic import BaseModel

from .models.forecast import HourlyPrecipitation

DEFAULT_ICON = "🌤️"
UNKNOWN_DESCRIPTION = "Unknown"

# WMO weather interpretation codes as used by Open-Meteo
WEATHER_CODES: dict[int, tuple[str, str]] = {
    0: ("☀️", "Clear sky"),
    1: ("🌤️", "Mainly clear"),
    2: ("⛅", "Partly cloudy"),
    3: ("☁️", "Overcast"),
    45: ("🌫️", "Foggy"),
    48: ("🌫️", "Depositing rime fog"),
    51: ("🌦️", "Light drizzle"),
    53: ("🌦️", "Moderate drizzle"),
    55: ("🌦️", "Dense drizzle"),
    61: ("🌧️", "Slight rain"),
    63: ("🌧️", "Moderate rain"),
    65: ("🌧️", "Heavy rain"),
    71: ("❄️", "Slight snow"),
    73: ("❄️", "Moderate snow"),
    75: ("❄️", "Heavy snow"),
    77: ("❄️", "Snow grains"),
    80: ("🌦️", "Slight rain showers"),
    81: ("🌦️", "Moderate rain showers"),
    82: ("🌦️", "Violent rain showers"),
    85: ("🌨️", "Slight snow showers"),
    86: ("🌨️", "Heavy snow showers"),
    95: ("⛈️", "Thunderstorm"),
    96: ("⛈️", "Thunderstorm with slight hail"),
    99: ("⛈️", "Thunderstorm with heavy hail"),
}

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)  # fmt: skip

GRADIENT_LADDER: tuple[tuple[float, str], ...] = (
    (95, "from-purple-600 via-purple-700 to-indigo-800"),  # thunderstorm
    (80, "from-blue-500 via-blue-600 to-blue-700"),  # showers
    (60, "from-gray-500 via-gray-600 to-gray-700"),  # rain, snow
    (50, "from-slate-500 via-slate-600 to-slate-700"),  # drizzle
    (40, "from-gray-400 via-gray-500 to-gray-600"),  # fog
    (20, "from-blue-300 via-blue-400 to-blue-500"),
)
DEFAULT_GRADIENT = "from-yellow-400 via-orange-500 to-red-500"

BACKGROUND_LADDER: tuple[tuple[float, tuple[str, str, str]], ...] = (
    (95, ("#8b5cf6", "#7c3aed", "#6d28d9")),
    (80, ("#0ea5e9", "#0284c7", "#0369a1")),
    (60, ("#64748b", "#475569", "#334155")),
    (50, ("#94a3b8", "#64748b", "#475569")),
    (40, ("#cbd5e1", "#94a3b8", "#64748b")),
    (20, ("#60a5fa", "#3b82f6", "#2563eb")),
)
DEFAULT_BACKGROUND = ("#fbbf24", "#f59e0b", "#d97706")
BASE_BACKGROUND = ("#0f172a", "#1e293b", "#334155")

ACCENT_LADDER: tuple[tuple[float, str], ...] = (
    (35, "rgba(255, 69, 0, 0.1)"),
    (30, "rgba(255, 140, 0, 0.1)"),
    (25, "rgba(255, 215, 0, 0.1)"),
    (20, "rgba(152, 251, 152, 0.1)"),
    (15, "rgba(135, 206, 235, 0.1)"),
    (10, "rgba(65, 105, 225, 0.1)"),
    (5, "rgba(30, 144, 255, 0.1)"),
    (0, "rgba(0, 191, 255, 0.1)"),
)
DEFAULT_ACCENT = "rgba(25, 25, 112, 0.1)"

TEMPERATURE_COLOR_LADDER: tuple[tuple[float, str], ...] = (
    (30, "#f87171"),  # red
    (20, "#fb923c"),  # orange
    (10, "#facc15"),  # yellow
    (0, "#60a5fa"),  # blue
)
DEFAULT_TEMPERATURE_COLOR = "#22d3ee"  # cyan

TEMPERATURE_BAND_LADDER: tuple[tuple[float, tuple[str, str]], ...] = (
    (30, ("Hot Weather", "#ff8c00")),
    (20, ("Warm Weather", "#ffd700")),
    (10, ("Cool Weather", "#87ceeb")),
)
DEFAULT_TEMPERATURE_BAND = ("Cold Weather", "#4169e1")


class RainChance(BaseModel):
    """Precipitation probability for the next available hour."""

    probability_percent: int | None
    label: str


def _ladder(value: float, ladder, default):
    for lower_bound, result in ladder:
        if value >= lower_bound:
            return result
    return default


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def icon_for(code: int) -> str:
    """Return the pictogram for a weather code."""
    entry = WEATHER_CODES.get(code)
    return entry[0] if entry else DEFAULT_ICON


def description_for(code: int) -> str:
    """Return the human label for a weather code."""
    entry = WEATHER_CODES.get(code)
    return entry[1] if entry else UNKNOWN_DESCRIPTION


def compass_label_for(degrees: float) -> str:
    """Return one of 16 compass points, starting at North, clockwise."""
    return COMPASS_POINTS[_round_half_up(degrees / 22.5) % 16]


def gradient_for(code: int) -> str:
    """Return the background gradient token for a weather code."""
    return _ladder(code, GRADIENT_LADDER, DEFAULT_GRADIENT)


def background_colors_for(code: int) -> tuple[str, str, str]:
    """Return a three-stop hex palette for a weather code."""
    return _ladder(code, BACKGROUND_LADDER, DEFAULT_BACKGROUND)


def base_background() -> tuple[str, str, str]:
    return BASE_BACKGROUND


def accent_color_for(temperature: float) -> str:
    """Return the subtle accent overlay color for a temperature in °C."""
    return _ladder(temperature, ACCENT_LADDER, DEFAULT_ACCENT)


def temperature_color_for(temperature: float) -> str:
    return _ladder(temperature, TEMPERATURE_COLOR_LADDER, DEFAULT_TEMPERATURE_COLOR)


def temperature_band_for(temperature: float) -> tuple[str, str]:
    """Return (label, indicator color) such as ("Warm Weather", "#ffd700")."""
    return _ladder(temperature, TEMPERATURE_BAND_LADDER, DEFAULT_TEMPERATURE_BAND)


def format_temperature(value: float) -> str:
    return f"{_round_half_up(value)}°C"


def format_hour(moment: datetime) -> str:
    """Format an hour as "3 PM"."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour} {suffix}"


def next_hour_rain_chance(
    hourly: HourlyPrecipitation | None, now: datetime | None = None
) -> RainChance | None:
    """Return the rain chance for the first hour after ``now``'s hour.

    Hours are compared by hour of day only. When no later hour exists the
    first entry is used instead. Returns None only without hourly data.
    """
    if hourly is None or len(hourly) == 0:
        return None

    current_hour = (now or datetime.now()).hour
    index = next(
        (i for i, moment in enumerate(hourly.timestamps) if moment.hour > current_hour),
        0,
    )
    return RainChance(
        probability_percent=hourly.precipitation_probability_percent[index],
        label=format_hour(hourly.timestamps[index]),
    )
