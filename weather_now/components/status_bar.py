"""Status bar component showing activity, last update and keyboard hints."""

from datetime import datetime

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Static

from ..models.state import RequestState

ACTIVITY_TEXT = {
    RequestState.LOADING_FORECAST: "Fetching forecast...",
    RequestState.LOADING_SUGGESTIONS: "Searching...",
}


class StatusBar(Horizontal):
    """Bottom status bar with time, update info, and keyboard hints."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        background: $surface-darken-1;
        color: $text-muted;
        padding: 0 1;
        width: 100%;
    }

    StatusBar #status-time {
        width: auto;
    }

    StatusBar #status-updated {
        width: auto;
        padding-left: 2;
    }

    StatusBar #status-activity {
        width: auto;
        padding-left: 2;
        color: $warning;
    }

    StatusBar #status-spacer {
        width: 1fr;
    }

    StatusBar #status-hints {
        width: auto;
        text-align: right;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._last_update: datetime | None = None

    def compose(self) -> ComposeResult:
        yield Static("", id="status-time")
        yield Static("", id="status-updated")
        yield Static("", id="status-activity")
        yield Static("", id="status-spacer")
        yield Static(
            "[dim]enter[/dim] Search  [dim]/[/dim] Focus search  [dim]q[/dim] Quit",
            id="status-hints",
        )

    def on_mount(self) -> None:
        """Start clock update timer."""
        self.set_interval(1, self._update_time)

    def _update_time(self) -> None:
        """Update the current time display."""
        now = datetime.now()
        self.query_one("#status-time", Static).update(f"[bold]{now.strftime('%H:%M:%S')}[/bold]")

        if self._last_update:
            minutes = int((now - self._last_update).total_seconds() // 60)
            if minutes == 0:
                text = "Updated just now"
            elif minutes == 1:
                text = "Updated 1 min ago"
            else:
                text = f"Updated {minutes} mins ago"
            self.query_one("#status-updated", Static).update(f"[dim]{text}[/dim]")

    def set_last_update(self, time: datetime | None = None) -> None:
        """Record when the displayed forecast was fetched."""
        self._last_update = time or datetime.now()
        self._update_time()

    def set_request_state(self, state: RequestState) -> None:
        """Show what the controller is busy with."""
        activity = ACTIVITY_TEXT.get(state, "")
        self.query_one("#status-activity", Static).update(
            f"[yellow]{activity}[/yellow]" if activity else ""
        )
