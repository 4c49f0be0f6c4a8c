"""Recent searches panel."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Label, ListItem, ListView, Static

from .search_panel import escape_markup


class RecentListItem(ListItem):
    """A single recent search."""

    def __init__(self, city: str) -> None:
        super().__init__()
        self.city = city

    def compose(self) -> ComposeResult:
        yield Static(escape_markup(self.city))


class RecentList(ListView):
    """List view for recent searches with keyboard navigation."""

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("enter", "select_cursor", "Search again", show=True),
    ]

    class RecentSelected(Message):
        """Message sent when a recent search is picked."""

        def __init__(self, city: str) -> None:
            super().__init__()
            self.city = city

    def update_items(self, cities: list[str]) -> None:
        """Update the list with new entries."""
        self.clear()
        for city in cities:
            self.append(RecentListItem(city))

    def action_select_cursor(self) -> None:
        """Handle item selection."""
        if self.highlighted_child and isinstance(self.highlighted_child, RecentListItem):
            self.post_message(self.RecentSelected(self.highlighted_child.city))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        if isinstance(event.item, RecentListItem):
            self.post_message(self.RecentSelected(event.item.city))


class RecentPanel(Static):
    """Panel listing the most recent successful searches."""

    DEFAULT_CSS = """
    RecentPanel {
        height: auto;
        border: round $primary-darken-2;
        padding: 0 1;
    }

    RecentPanel RecentList {
        height: auto;
    }

    RecentPanel #recent-empty {
        color: $text-muted;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._cities: list[str] = []

    def compose(self) -> ComposeResult:
        yield Static("[bold]Recent Searches[/bold]")
        yield Label("[dim]No searches yet[/dim]", id="recent-empty")
        yield RecentList(id="recent-list")

    def update_recent(self, cities: list[str]) -> None:
        """Refresh the list if it changed."""
        if cities == self._cities:
            return
        self._cities = list(cities)
        self.query_one(RecentList).update_items(cities)
        self.query_one("#recent-empty", Label).display = not cities
