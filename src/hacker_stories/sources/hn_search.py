from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

import requests

from ..config import API_BASE_URL, HTTP_TIMEOUT, REQUEST_HEADERS
from ..datamodels import Story
from .base import NetworkError, QueryClient, ServerError

logger = logging.getLogger("hacker_stories")


class HNSearchClient(QueryClient):
    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout: float = HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update(REQUEST_HEADERS)
        return s

    def fetch(self, term: str, page: int) -> List[Story]:
        if not term:
            raise ValueError("search term must not be empty")
        if page < 0:
            raise ValueError(f"page must be >= 0, got {page}")

        url = f"{self.base_url}/search"
        logger.debug("Fetching %s query=%r page=%d", url, term, page)
        try:
            resp = self.session.get(
                url, params={"query": term, "page": page}, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning("Network error fetching %r page %d: %s", term, page, e)
            raise NetworkError(str(e)) from e

        if not resp.ok:
            logger.warning(
                "Server error fetching %r page %d: HTTP %s", term, page, resp.status_code
            )
            raise ServerError(f"HTTP {resp.status_code}", status_code=resp.status_code)

        try:
            payload = resp.json()
        except ValueError as e:
            raise ServerError(f"Invalid JSON in response: {e}", resp.status_code) from e

        hits = payload.get("hits") if isinstance(payload, dict) else None
        if not isinstance(hits, list):
            raise ServerError("Response has no 'hits' list", resp.status_code)

        stories = _parse_hits(hits)
        logger.debug("Fetched %d stories for %r page %d", len(stories), term, page)
        return stories


def _parse_hits(hits: Iterable[Any]) -> List[Story]:
    stories: List[Story] = []
    dropped = 0
    for hit in hits:
        story = _story_from_hit(hit)
        if story is None:
            dropped += 1
        else:
            stories.append(story)
    if dropped:
        logger.debug("Dropped %d malformed hits", dropped)
    return stories


def _story_from_hit(hit: Any) -> Optional[Story]:
    if not isinstance(hit, dict):
        return None
    object_id = hit.get("objectID")
    if object_id is None or object_id == "":
        return None
    return Story(
        object_id=str(object_id),
        title=_text(hit.get("title")) or _text(hit.get("story_title")),
        url=_text(hit.get("url")) or _text(hit.get("story_url")),
        author=_text(hit.get("author")),
        num_comments=_count(hit.get("num_comments")),
        points=_count(hit.get("points")),
    )


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _count(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0

