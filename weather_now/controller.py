"""Search controller: debounced autocomplete and race-safe forecast lookups."""

import asyncio
import logging
from collections.abc import Callable

import httpx

from .models.config import Config
from .models.forecast import PlaceCandidate
from .models.state import ForecastState, SearchState, SuggestionState
from .services.errors import GENERIC_FAILURE_MESSAGE, WeatherLookupError
from .services.forecast_service import ForecastService
from .services.geocoding import GeocodingClient, SuggestionService
from .services.recent import RecentSearches

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.3
MIN_QUERY_LENGTH = 2

StateListener = Callable[[SearchState], None]


class SearchController:
    """Owns the search state and sequences calls to the lookup services.

    State only changes through the transition methods below. Observers
    registered with ``subscribe`` receive a snapshot after every change.

    Each suggestion and forecast request is tagged with a sequence number.
    A response is applied only if no newer request of the same kind has been
    issued since, so the last query always wins regardless of arrival order.
    """

    def __init__(
        self,
        suggestion_service: SuggestionService,
        forecast_service: ForecastService,
        recent: RecentSearches | None = None,
        debounce_seconds: float = DEBOUNCE_SECONDS,
        min_query_length: int = MIN_QUERY_LENGTH,
    ):
        self.suggestion_service = suggestion_service
        self.forecast_service = forecast_service
        self.recent = recent or RecentSearches()
        self.debounce_seconds = debounce_seconds
        self.min_query_length = min_query_length

        self._state = SearchState(recent_searches=self.recent.items())
        self._listeners: list[StateListener] = []
        self._debounce_task: asyncio.Task | None = None
        self._inflight: set[asyncio.Task] = set()
        self._suggestion_seq = 0
        self._forecast_seq = 0

    @classmethod
    def from_config(
        cls, config: Config, transport: httpx.AsyncBaseTransport | None = None
    ) -> "SearchController":
        """Build a controller wired to Open-Meteo using ``config``."""
        geocoder = GeocodingClient(config.providers, transport=transport)
        return cls(
            suggestion_service=SuggestionService(
                geocoder,
                limit=config.search.suggestion_limit,
                min_query_length=config.search.min_query_length,
            ),
            forecast_service=ForecastService(config.providers, geocoder, transport=transport),
            recent=RecentSearches(config.search.recent_limit),
            debounce_seconds=config.search.debounce_seconds,
            min_query_length=config.search.min_query_length,
        )

    @property
    def state(self) -> SearchState:
        """Snapshot of the current state."""
        return self._state.model_copy(deep=True)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        if not self._listeners:
            return
        snapshot = self.state
        for listener in list(self._listeners):
            listener(snapshot)

    # Suggestions

    def on_text_changed(self, text: str) -> None:
        """Record a keystroke and restart the debounce timer.

        Must be called from a running event loop.
        """
        if text == self._state.query:
            return

        self._state.query = text
        self._cancel_debounce()

        if len(text) < self.min_query_length:
            self._invalidate_suggestions()
            self._state.suggestions = SuggestionState()
        else:
            task = asyncio.get_running_loop().create_task(self._debounced_suggest(text))
            self._debounce_task = task
            self._track(task)

        self._publish()

    async def _debounced_suggest(self, query: str) -> None:
        await asyncio.sleep(self.debounce_seconds)
        # Past the quiet period: later keystrokes no longer cancel this fetch
        if self._debounce_task is asyncio.current_task():
            self._debounce_task = None
        await self._fetch_suggestions(query)

    async def _fetch_suggestions(self, query: str) -> None:
        self._suggestion_seq += 1
        seq = self._suggestion_seq
        logger.debug(f"Requesting suggestions #{seq} for '{query}'")

        self._state.suggestions.loading = True
        self._publish()

        try:
            items = await self.suggestion_service.suggest(query)
        except Exception as e:
            logger.warning(f"Suggestion service raised for '{query}': {e}")
            items = []

        if seq != self._suggestion_seq:
            logger.debug(f"Discarding stale suggestions #{seq} for '{query}'")
            return

        if query != self._state.query:
            logger.debug(f"Discarding suggestions for '{query}', query is now '{self._state.query}'")
            self._state.suggestions.loading = False
            self._publish()
            return

        self._state.suggestions = SuggestionState(items=items, visible=bool(items))
        self._publish()

    def hide_suggestions(self) -> None:
        """Hide the dropdown without discarding its items."""
        if self._state.suggestions.visible:
            self._state.suggestions.visible = False
            self._publish()

    def show_suggestions(self) -> None:
        """Re-open the dropdown if there is anything to show."""
        if self._state.suggestions.items and not self._state.suggestions.visible:
            self._state.suggestions.visible = True
            self._publish()

    # Forecast

    async def submit(self) -> None:
        """Look up the forecast for the current query."""
        await self._lookup(self._state.query)

    async def select_suggestion(self, candidate: PlaceCandidate) -> None:
        """Fill the query from a suggestion and look it up."""
        self._state.query = candidate.query_text
        self._state.suggestions.visible = False
        await self._lookup(self._state.query)

    async def select_recent(self, city: str) -> None:
        """Re-run a recent search."""
        self._state.query = city
        await self._lookup(city)

    async def _lookup(self, city: str) -> None:
        if not city.strip():
            return

        self._cancel_debounce()
        self._invalidate_suggestions()
        self._forecast_seq += 1
        seq = self._forecast_seq
        logger.info(f"Looking up forecast for '{city}'")

        self._state.suggestions.visible = False
        self._state.suggestions.loading = False
        self._state.forecast.loading = True
        self._state.forecast.error_message = None
        self._publish()

        try:
            forecast = await self.forecast_service.lookup(city)
        except WeatherLookupError as e:
            if seq != self._forecast_seq:
                logger.debug(f"Discarding stale forecast error for '{city}'")
                return
            logger.warning(f"Forecast lookup for '{city}' failed: {e}")
            self._state.forecast = ForecastState(error_message=str(e))
        except Exception:
            if seq != self._forecast_seq:
                return
            logger.exception(f"Unexpected error looking up '{city}'")
            self._state.forecast = ForecastState(error_message=GENERIC_FAILURE_MESSAGE)
        else:
            if seq != self._forecast_seq:
                logger.debug(f"Discarding stale forecast for '{city}'")
                return
            self._state.forecast = ForecastState(data=forecast)
            self.recent.push(city)
            self._state.recent_searches = self.recent.items()

        self._publish()

    # Housekeeping

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None:
            self._debounce_task.cancel()
            self._debounce_task = None

    def _invalidate_suggestions(self) -> None:
        self._suggestion_seq += 1

    def _track(self, task: asyncio.Task) -> None:
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def drain(self) -> None:
        """Wait for the pending debounce timer and suggestion fetches to settle."""
        while self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel outstanding background work."""
        self._cancel_debounce()
        for task in list(self._inflight):
            task.cancel()
        await self.drain()
        self._listeners.clear()
