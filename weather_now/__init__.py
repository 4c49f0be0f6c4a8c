"""Weather Now - city search with live Open-Meteo forecasts."""

__version__ = "0.1.0"
