"""Textual application observing the search controller."""

import logging
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Header, Input

from .components import ForecastPanel, RecentPanel, SearchPanel, StatusBar
from .components.recent_panel import RecentList
from .components.search_panel import SuggestionList
from .controller import SearchController
from .models.config import Config
from .models.state import SearchState

logger = logging.getLogger(__name__)


class WeatherNowApp(App):
    """Search a city and show its current weather."""

    TITLE = "Weather Now"
    SUB_TITLE = "Your outdoor adventure companion"

    CSS = """
    #main {
        height: 1fr;
        padding: 1 2;
    }

    #main > * {
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("slash", "focus_search", "Search", show=False),
        Binding("escape", "hide_suggestions", "Close suggestions", show=False),
    ]

    def __init__(
        self,
        config_path: Path | str = "config.json",
        initial_city: str | None = None,
        controller: SearchController | None = None,
    ) -> None:
        super().__init__()
        self.config = Config.load_or_default(config_path)
        self.controller = controller or SearchController.from_config(self.config)
        self._initial_city = initial_city
        self._unsubscribe = None
        self._shown_fetch = None
        self._rendered_query = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="main"):
            yield SearchPanel()
            yield ForecastPanel()
            yield RecentPanel()
        yield StatusBar()

    def on_mount(self) -> None:
        self._unsubscribe = self.controller.subscribe(self._render_state)
        self._render_state(self.controller.state)
        self.query_one("#search-input", Input).focus()

        if self._initial_city:
            self.controller.on_text_changed(self._initial_city)
            self.run_worker(self.controller.submit(), group="forecast")

    async def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        await self.controller.aclose()

    def _render_state(self, state: SearchState) -> None:
        """Push a controller snapshot into the widgets."""
        search = self.query_one(SearchPanel)
        # Only write back queries the controller set itself; the Input may
        # already hold keystrokes whose Changed message is still queued
        if state.query != self._rendered_query:
            self._rendered_query = state.query
            search.set_query(state.query)
        search.set_suggestions(state.suggestions.items, state.suggestions.visible)
        search.set_searching(state.suggestions.loading)

        panel = self.query_one(ForecastPanel)
        forecast = state.forecast
        if forecast.loading:
            panel.set_loading(True)
        elif forecast.error_message:
            panel.set_error(forecast.error_message)
        elif forecast.data is not None:
            panel.update_forecast(forecast.data)
            if forecast.data.fetched_at != self._shown_fetch:
                self._shown_fetch = forecast.data.fetched_at
                self.query_one(StatusBar).set_last_update(forecast.data.fetched_at)
        else:
            panel.clear()

        self.query_one(RecentPanel).update_recent(state.recent_searches)
        self.query_one(StatusBar).set_request_state(state.request_state)

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            self._rendered_query = event.value
            self.controller.on_text_changed(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search-input":
            self.run_worker(self.controller.submit(), group="forecast")

    def on_suggestion_list_candidate_selected(self, event: SuggestionList.CandidateSelected) -> None:
        logger.debug(f"Suggestion picked: {event.candidate.display_name}")
        self.run_worker(self.controller.select_suggestion(event.candidate), group="forecast")
        self.query_one("#search-input", Input).focus()

    def on_suggestion_list_dismissed(self, event: SuggestionList.Dismissed) -> None:
        self.action_hide_suggestions()

    def on_recent_list_recent_selected(self, event: RecentList.RecentSelected) -> None:
        self.run_worker(self.controller.select_recent(event.city), group="forecast")

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()
        self.controller.show_suggestions()

    def action_hide_suggestions(self) -> None:
        self.controller.hide_suggestions()
        self.query_one("#search-input", Input).focus()
