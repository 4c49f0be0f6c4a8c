"""Forecast panel component for displaying the current conditions."""

from datetime import datetime

from textual.app import ComposeResult
from textual.color import Color
from textual.widgets import Label, Static

from ..derivation import (
    accent_color_for,
    background_colors_for,
    base_background,
    compass_label_for,
    description_for,
    format_temperature,
    icon_for,
    next_hour_rain_chance,
    temperature_band_for,
    temperature_color_for,
)
from ..models.forecast import Forecast
from .search_panel import escape_markup


class ForecastPanel(Static):
    """Panel displaying the forecast for the last searched city."""

    DEFAULT_CSS = """
    ForecastPanel {
        height: auto;
        border: round $primary;
        padding: 0 1;
    }

    ForecastPanel #forecast-error {
        color: $error;
        display: none;
    }

    ForecastPanel #forecast-error.visible {
        display: block;
    }

    ForecastPanel #forecast-empty {
        color: $text-muted;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._loading = False
        self._forecast: Forecast | None = None

    def compose(self) -> ComposeResult:
        yield Static("[bold]Weather Now[/bold]", id="forecast-header")
        yield Label("", id="forecast-error")
        yield Label("[dim]Search for any city worldwide[/dim]", id="forecast-empty")
        yield Static("", id="forecast-details")

    def on_mount(self) -> None:
        self.styles.background = base_background()[0]

    def set_loading(self, loading: bool) -> None:
        """Set loading state."""
        self._loading = loading
        if loading:
            self.query_one("#forecast-header", Static).update("[dim]Loading...[/dim]")
            self.query_one("#forecast-error", Label).remove_class("visible")

    def set_error(self, error: str) -> None:
        """Display an error message."""
        self._loading = False
        self._forecast = None
        self.query_one("#forecast-header", Static).update("[bold]Weather Now[/bold]")
        error_label = self.query_one("#forecast-error", Label)
        error_label.update(f"[red]{escape_markup(error)}[/red]")
        error_label.add_class("visible")
        self.query_one("#forecast-empty", Label).display = False
        self.query_one("#forecast-details", Static).update("")
        self.styles.border = ("round", "red")
        self.styles.background = base_background()[0]

    def update_forecast(self, forecast: Forecast, now: datetime | None = None) -> None:
        """Update panel with forecast data."""
        self._forecast = forecast
        self._loading = False

        current = forecast.current
        code = current.weather_code
        tc = temperature_color_for(current.temperature)
        band, band_color = temperature_band_for(current.temperature)

        self.query_one("#forecast-error", Label).remove_class("visible")
        self.query_one("#forecast-empty", Label).display = False
        self.query_one("#forecast-header", Static).update(
            f"[bold]{escape_markup(forecast.display_location)}[/bold]  "
            f"{icon_for(code)} {description_for(code)}"
        )

        # "18°C  Feels like 17°C  ● Warm Weather"
        lines = [
            f"[{tc}]{format_temperature(current.temperature)}[/{tc}]  "
            f"Feels like {format_temperature(current.apparent_temperature)}  "
            f"[{band_color}]●[/{band_color}] {band}",
            f"Humidity {current.humidity_percent}%   "
            f"Precipitation {current.precipitation_mm}mm",
            f"Wind {current.wind_speed_kph:.0f} km/h "
            f"{compass_label_for(current.wind_direction_deg)}",
        ]

        rain = next_hour_rain_chance(forecast.hourly, now)
        if rain is not None:
            probability = "--" if rain.probability_percent is None else rain.probability_percent
            lines.append(f"💧 {probability}% next hour ({rain.label})")

        self.query_one("#forecast-details", Static).update("\n".join(lines))
        self.styles.border = ("round", background_colors_for(code)[0])
        # Translucent accent tinted over the dark base
        self.styles.background = Color.parse(base_background()[0]) + Color.parse(
            accent_color_for(current.temperature)
        )

    def clear(self) -> None:
        """Clear all data."""
        self._forecast = None
        self.query_one("#forecast-header", Static).update("[bold]Weather Now[/bold]")
        self.query_one("#forecast-error", Label).remove_class("visible")
        self.query_one("#forecast-empty", Label).display = True
        self.query_one("#forecast-details", Static).update("")
        self.styles.background = base_background()[0]
