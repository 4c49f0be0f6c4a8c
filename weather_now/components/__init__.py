"""UI components for the weather search app."""

from .forecast_panel import ForecastPanel
from .recent_panel import RecentPanel
from .search_panel import SearchPanel
from .status_bar import StatusBar

__all__ = ["ForecastPanel", "RecentPanel", "SearchPanel", "StatusBar"]
