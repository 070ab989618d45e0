from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .datamodels import Story

logger = logging.getLogger("hacker_stories")


@dataclass
class CacheEntry:
    """Pages fetched so far for one search term, in page order from 0."""

    term: str
    pages: List[List[Story]] = field(default_factory=list)

    @property
    def highest_page(self) -> int:
        return len(self.pages) - 1

    @property
    def stories(self) -> List[Story]:
        return [story for page in self.pages for story in page]


class ResultCache:
    def __init__(self) -> None:
        self._entries: Dict[str, CacheEntry] = {}

    def __contains__(self, term: object) -> bool:
        return term in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, term: str) -> Optional[CacheEntry]:
        return self._entries.get(term)

    def has_page(self, term: str, page: int) -> bool:
        entry = self._entries.get(term)
        return entry is not None and 0 <= page <= entry.highest_page

    def next_page(self, term: str) -> int:
        entry = self._entries.get(term)
        return entry.highest_page + 1 if entry else 0

    def append_page(self, term: str, page: int, stories: Sequence[Story]) -> CacheEntry:
        expected = self.next_page(term)
        if page != expected:
            raise ValueError(
                f"Cannot cache page {page} for {term!r}: next page is {expected}"
            )
        entry = self._entries.setdefault(term, CacheEntry(term))
        entry.pages.append(list(stories))
        logger.debug("Cache set for %r page %d (%d stories)", term, page, len(stories))
        return entry

    def remove_story(self, term: str, story_id: str) -> bool:
        entry = self._entries.get(term)
        if entry is None:
            return False
        for page in entry.pages:
            for i, story in enumerate(page):
                if story.object_id == story_id:
                    del page[i]
                    logger.debug("Removed story %s from %r", story_id, term)
                    return True
        return False
