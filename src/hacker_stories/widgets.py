from __future__ import annotations

from typing import Iterable

from rich.text import Text
from textual.containers import Horizontal
from textual.reactive import reactive
from textual.widgets import Button, Static

from .config import LOADING_MESSAGE
from .session import ViewState
from .sorting import SortDirection


# --- UI Widgets ---
class RecentTermButton(Button):
    def __init__(self, term: str):
        super().__init__(term, classes="recent-term")
        self.term = term


class LastSearches(Horizontal):
    """Shortcut buttons for the recently searched terms."""

    def set_terms(self, terms: Iterable[str]) -> None:
        self.remove_children()
        buttons = [RecentTermButton(term) for term in terms]
        if buttons:
            self.mount_all(buttons)


class StatusBar(Static):
    """One-line summary of the search: loading state, sort order and story count."""

    search_status = reactive("")
    keybinding_hint = reactive("")

    def on_mount(self) -> None:
        self.update_display()

    def set_keybindings(self, hint: str) -> None:
        self.keybinding_hint = hint

    def show_view(self, view: ViewState) -> None:
        parts = []
        if view.is_loading:
            parts.append(LOADING_MESSAGE)
        if view.sort.column:
            arrow = "▲" if view.sort.direction is SortDirection.ASC else "▼"
            parts.append(f"Sorted by {view.sort.column} {arrow}")
        parts.append(f"{len(view.stories)} stories")
        self.search_status = " ".join(parts)

    def update_display(self) -> None:
        self.update(" · ".join(p for p in (self.search_status, self.keybinding_hint) if p))

    def watch_search_status(self, search_status: str) -> None:
        self.update_display()

    def watch_keybinding_hint(self, keybinding_hint: str) -> None:
        self.update_display()

class ErrorMessage(Static):
    def __init__(self, message: str, **kwargs):
        super().__init__(Text(message, style="bold red"), **kwargs)
