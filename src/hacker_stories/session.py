from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from .cache import ResultCache
from .config import RECENT_SEARCHES_LIMIT, SEARCH_STORAGE_KEY
from .datamodels import Story
from .recency import RecencyList
from .sorting import SortState, sort_stories

logger = logging.getLogger("hacker_stories")


class SessionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class FetchRequest:
    term: str
    page: int


@dataclass(frozen=True)
class ViewState:
    active_term: Optional[str] = None
    stories: Tuple[Story, ...] = ()
    status: SessionStatus = SessionStatus.IDLE
    sort: SortState = field(default_factory=SortState)
    recent_terms: Tuple[str, ...] = ()

    @property
    def is_loading(self) -> bool:
        return self.status is SessionStatus.LOADING

    @property
    def has_error(self) -> bool:
        return self.status is SessionStatus.ERROR


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


Scheduler = Callable[[FetchRequest], None]
Listener = Callable[[ViewState], None]


class SessionController:
    """State machine behind one search session.

    The controller never touches the network. When it needs a page it hands a
    ``FetchRequest`` to ``schedule``; whoever runs the request reports back via
    ``fetch_succeeded`` or ``fetch_failed``. Responses are checked against the
    active term when they arrive, so a late answer for an abandoned search is
    dropped instead of overwriting the current view.
    """

    def __init__(
        self,
        schedule: Scheduler,
        storage: Optional[KeyValueStore] = None,
        recent_limit: int = RECENT_SEARCHES_LIMIT,
    ):
        self._schedule = schedule
        self._storage = storage
        self.cache = ResultCache()
        # One extra slot for the active term, which is never offered as its own shortcut.
        self.recent = RecencyList(capacity=recent_limit + 1)
        self.recent_limit = recent_limit
        self.status = SessionStatus.IDLE
        self.active_term: Optional[str] = None
        self.sort = SortState()
        self._listeners: List[Listener] = []
        self._view = ViewState()

    @property
    def view(self) -> ViewState:
        return self._view

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def start(self, default_term: str) -> None:
        """Seed the session with the persisted term, falling back to ``default_term``."""
        term = self._storage.get(SEARCH_STORAGE_KEY) if self._storage else None
        self.submit_search(term or default_term)

    # --- User events ---
    def submit_search(self, term: str) -> bool:
        if not term:
            raise ValueError("search term must not be empty")
        if term == self.active_term and self.status is not SessionStatus.ERROR:
            logger.debug("Ignoring resubmission of active term %r", term)
            return False

        self.active_term = term
        self.recent.touch(term)
        if self._storage is not None:
            self._storage.set(SEARCH_STORAGE_KEY, term)

        if self.cache.has_page(term, 0):
            logger.debug("Cache hit for %r", term)
            self.status = SessionStatus.READY
            self._emit()
        else:
            self._request(FetchRequest(term, 0))
        return True

    def select_recent_term(self, term: str) -> bool:
        return self.submit_search(term)

    def load_more(self) -> bool:
        if self.active_term is None or self.status not in (
            SessionStatus.READY,
            SessionStatus.ERROR,
        ):
            logger.debug("Ignoring load_more while %s", self.status.value)
            return False
        self._request(FetchRequest(self.active_term, self.cache.next_page(self.active_term)))
        return True

    def dismiss(self, story_id: str) -> bool:
        if self.status is not SessionStatus.READY or self.active_term is None:
            logger.debug("Ignoring dismiss of %s while %s", story_id, self.status.value)
            return False
        removed = self.cache.remove_story(self.active_term, story_id)
        if removed:
            self._emit()
        return removed

    def change_sort(self, column: str) -> bool:
        if self.status not in (SessionStatus.READY, SessionStatus.ERROR):
            logger.debug("Ignoring sort by %s while %s", column, self.status.value)
            return False
        self.sort = self.sort.toggled(column)
        logger.debug("Sorting by %s %s", self.sort.column, self.sort.direction.value)
        self._emit()
        return True

    # --- Fetch completion ---
    def fetch_succeeded(self, term: str, page: int, stories: Sequence[Story]) -> bool:
        if term != self.active_term:
            logger.debug("Discarding stale response for %r page %d", term, page)
            return False
        if page != self.cache.next_page(term):
            logger.debug("Discarding duplicate response for %r page %d", term, page)
            return False
        self.cache.append_page(term, page, stories)
        self.status = SessionStatus.READY
        self._emit()
        return True

    def fetch_failed(self, term: str, page: int, error: Exception) -> bool:
        if term != self.active_term:
            logger.debug("Discarding stale failure for %r page %d: %s", term, page, error)
            return False
        if page < self.cache.next_page(term):
            logger.debug("Discarding duplicate failure for %r page %d", term, page)
            return False
        logger.error("Fetch failed for %r (%s): %s", term, type(error).__name__, error)
        self.status = SessionStatus.ERROR
        self._emit()
        return True

    # --- Internals ---
    def _request(self, request: FetchRequest) -> None:
        self.status = SessionStatus.LOADING
        self._emit()
        logger.debug("Requesting %r page %d", request.term, request.page)
        self._schedule(request)

    def _build_view(self) -> ViewState:
        entry = self.cache.get(self.active_term) if self.active_term else None
        stories = sort_stories(
            entry.stories if entry else [], self.sort.column, self.sort.direction
        )
        recent = tuple(t for t in self.recent.terms if t != self.active_term)
        return ViewState(
            active_term=self.active_term,
            stories=tuple(stories),
            status=self.status,
            sort=self.sort,
            recent_terms=recent[: self.recent_limit],
        )

    def _emit(self) -> None:
        self._view = self._build_view()
        for listener in list(self._listeners):
            listener(self._view)
