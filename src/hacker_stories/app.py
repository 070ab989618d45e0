from __future__ import annotations

import logging
import webbrowser
from functools import partial
from typing import Any, Dict, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    LoadingIndicator,
)
from textual.worker import Worker, WorkerState

from .config import (
    API_BASE_URL,
    DEFAULT_TERM,
    ERROR_MESSAGE,
    HTTP_TIMEOUT,
    RECENT_SEARCHES_LIMIT,
)
from .session import FetchRequest, SessionController, SessionStatus, ViewState
from .sources.base import QueryClient
from .sources.hn_search import HNSearchClient
from .storage import LocalStorage
from .widgets import ErrorMessage, LastSearches, RecentTermButton, StatusBar

logger = logging.getLogger("hacker_stories")

COLUMNS = (
    ("Title", "title"),
    ("Author", "author"),
    ("Comments", "num_comments"),
    ("Points", "points"),
)


class HackerStoriesApp(App):
    TITLE = "Hacker Stories"

    CSS = """
    #search-bar {
        height: auto;
    }
    #search {
        width: 1fr;
    }
    #last-searches {
        height: auto;
    }
    #stories {
        height: 1fr;
    }
    #loading {
        height: 3;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("d", "dismiss_story", "Dismiss"),
        Binding("m", "load_more", "More"),
        Binding("o", "open_in_browser", "Open"),
        Binding("/", "focus_search", "Search"),
    ]

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        client: Optional[QueryClient] = None,
        storage: Optional[LocalStorage] = None,
        term: Optional[str] = None,
        theme: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.config = config or {}
        self._initial_term = term
        self._theme_name = theme or self.config.get("theme")
        self.client = client or HNSearchClient(
            base_url=self.config.get("api_base_url", API_BASE_URL),
            timeout=self.config.get("timeout", HTTP_TIMEOUT),
        )
        self.controller = SessionController(
            schedule=self._schedule_fetch,
            storage=storage if storage is not None else LocalStorage(),
            recent_limit=self.config.get("recent_searches", RECENT_SEARCHES_LIMIT),
        )
        self._pending: Dict[Worker, FetchRequest] = {}
        self._shown_term: Optional[str] = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main"):
            with Horizontal(id="search-bar"):
                yield Input(placeholder="Search stories...", id="search")
                yield Button("Submit", id="submit")
            yield LastSearches(id="last-searches")
            yield DataTable(id="stories", cursor_type="row")
            yield LoadingIndicator(id="loading")
            yield ErrorMessage(ERROR_MESSAGE, id="error")
            yield Button("More", id="more")
        yield StatusBar()
        yield Footer()

    def on_mount(self) -> None:
        if self._theme_name:
            if self._theme_name in self.available_themes:
                self.theme = self._theme_name
            else:
                logger.warning("Theme '%s' not found, keeping default.", self._theme_name)

        table = self.query_one("#stories", DataTable)
        for label, key in COLUMNS:
            table.add_column(label, key=key)

        self.query_one(StatusBar).set_keybindings(
            "[b]d[/] dismiss, [b]m[/] more, [b]o[/] open, click a header to sort"
        )
        self.controller.subscribe(self._show_view)
        if self._initial_term:
            self.controller.submit_search(self._initial_term)
        else:
            self.controller.start(self.config.get("default_term", DEFAULT_TERM))

    # --- Fetching ---
    def _schedule_fetch(self, request: FetchRequest) -> None:
        worker = self.run_worker(
            partial(self.client.fetch, request.term, request.page),
            name="stories_loader",
            group="fetch",
            thread=True,
            exit_on_error=False,
        )
        self._pending[worker] = request

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        request = self._pending.get(event.worker)
        if request is None:
            return
        if event.state is WorkerState.SUCCESS:
            del self._pending[event.worker]
            stories = getattr(event.worker, "result", None) or []
            self.controller.fetch_succeeded(request.term, request.page, stories)
        elif event.state is WorkerState.ERROR:
            del self._pending[event.worker]
            error = getattr(event.worker, "error", None) or RuntimeError("fetch failed")
            self.controller.fetch_failed(request.term, request.page, error)
        elif event.state is WorkerState.CANCELLED:
            del self._pending[event.worker]

    # --- Rendering ---
    def _show_view(self, view: ViewState) -> None:
        table = self.query_one("#stories", DataTable)
        table.clear()
        for story in view.stories:
            table.add_row(
                story.title, story.author, str(story.num_comments), str(story.points)
            )

        self.query_one("#loading", LoadingIndicator).display = view.is_loading
        self.query_one("#error", ErrorMessage).display = view.has_error
        self.query_one("#more", Button).disabled = view.status not in (
            SessionStatus.READY,
            SessionStatus.ERROR,
        )
        self.query_one(LastSearches).set_terms(view.recent_terms)

        if view.active_term != self._shown_term:
            self._shown_term = view.active_term
            self.query_one("#search", Input).value = view.active_term or ""
            self.sub_title = view.active_term or ""

        self.query_one(StatusBar).show_view(view)

    def _highlighted_story(self):
        table = self.query_one("#stories", DataTable)
        stories = self.controller.view.stories
        if not table.is_valid_row_index(table.cursor_row):
            return None
        if table.cursor_row >= len(stories):
            return None
        return stories[table.cursor_row]

    # --- Input ---
    def _submit_from_input(self) -> None:
        term = self.query_one("#search", Input).value
        if not term.strip():
            return
        self.controller.submit_search(term)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search":
            self._submit_from_input()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if isinstance(event.button, RecentTermButton):
            self.controller.select_recent_term(event.button.term)
        elif event.button.id == "submit":
            self._submit_from_input()
        elif event.button.id == "more":
            self.controller.load_more()

    def on_data_table_header_selected(self, event: DataTable.HeaderSelected) -> None:
        self.controller.change_sort(str(event.column_key.value))

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self.action_open_in_browser()

    def action_dismiss_story(self) -> None:
        story = self._highlighted_story()
        if story is not None:
            self.controller.dismiss(story.object_id)

    def action_load_more(self) -> None:
        self.controller.load_more()

    def action_open_in_browser(self) -> None:
        story = self._highlighted_story()
        if story is None:
            return
        if not story.url:
            self.notify("This story has no link.", severity="warning")
            return
        webbrowser.open(story.url)

    def action_focus_search(self) -> None:
        self.query_one("#search", Input).focus()
