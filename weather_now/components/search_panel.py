"""Search input with an autocomplete suggestion list."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Input, ListItem, ListView, Static

from ..models.forecast import PlaceCandidate


def escape_markup(text: str) -> str:
    """Escape Rich markup characters in user content."""
    return text.replace("[", r"\[").replace("]", r"\]")


class SuggestionListItem(ListItem):
    """A single place candidate in the dropdown."""

    def __init__(self, candidate: PlaceCandidate) -> None:
        super().__init__()
        self.candidate = candidate

    def compose(self) -> ComposeResult:
        yield Static(escape_markup(self.candidate.display_name))


class SuggestionList(ListView):
    """Autocomplete candidates with keyboard navigation."""

    BINDINGS = [
        Binding("enter", "select_cursor", "Select", show=True),
        Binding("escape", "dismiss", "Close", show=False),
    ]

    class CandidateSelected(Message):
        """Message sent when a candidate is picked."""

        def __init__(self, candidate: PlaceCandidate) -> None:
            super().__init__()
            self.candidate = candidate

    class Dismissed(Message):
        """Message sent when the dropdown is closed without a pick."""

    def update_items(self, items: list[PlaceCandidate]) -> None:
        """Replace the listed candidates."""
        self.clear()
        for item in items:
            self.append(SuggestionListItem(item))

    def action_select_cursor(self) -> None:
        """Handle candidate selection."""
        if self.highlighted_child and isinstance(self.highlighted_child, SuggestionListItem):
            self.post_message(self.CandidateSelected(self.highlighted_child.candidate))

    def action_dismiss(self) -> None:
        self.post_message(self.Dismissed())

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Mouse clicks select too."""
        event.stop()
        if isinstance(event.item, SuggestionListItem):
            self.post_message(self.CandidateSelected(event.item.candidate))


class SearchPanel(Static):
    """City search box with its suggestion dropdown."""

    DEFAULT_CSS = """
    SearchPanel {
        height: auto;
        padding: 0 1;
    }

    SearchPanel #search-status {
        height: 1;
        color: $text-muted;
    }

    SearchPanel SuggestionList {
        height: auto;
        max-height: 7;
        border: round $primary-darken-2;
        display: none;
    }

    SearchPanel SuggestionList.visible {
        display: block;
    }

    SearchPanel ListItem.-highlight {
        background: $primary-darken-2;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._items: list[PlaceCandidate] = []

    def compose(self) -> ComposeResult:
        yield Input(placeholder="Search for any city worldwide...", id="search-input")
        yield SuggestionList(id="suggestion-list")
        yield Static("", id="search-status")

    def set_query(self, query: str) -> None:
        """Sync the input with the controller without moving the cursor needlessly."""
        search_input = self.query_one("#search-input", Input)
        if search_input.value != query:
            search_input.value = query
            search_input.cursor_position = len(query)

    def set_suggestions(self, items: list[PlaceCandidate], visible: bool) -> None:
        """Show or hide the dropdown."""
        suggestion_list = self.query_one(SuggestionList)
        if items != self._items:
            self._items = list(items)
            suggestion_list.update_items(items)
        suggestion_list.set_class(visible and bool(items), "visible")

    def set_searching(self, searching: bool) -> None:
        self.query_one("#search-status", Static).update(
            "[dim]Searching...[/dim]" if searching else ""
        )
