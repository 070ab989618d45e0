from __future__ import annotations

from typing import List, Tuple

from .config import RECENT_SEARCHES_LIMIT


class RecencyList:
    """Most-recently-used distinct search terms, newest first."""

    def __init__(self, capacity: int = RECENT_SEARCHES_LIMIT):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._terms: List[str] = []

    def __len__(self) -> int:
        return len(self._terms)

    def __contains__(self, term: object) -> bool:
        return term in self._terms

    @property
    def terms(self) -> Tuple[str, ...]:
        return tuple(self._terms)

    def touch(self, term: str) -> None:
        if term in self._terms:
            self._terms.remove(term)
        self._terms.insert(0, term)
        del self._terms[self.capacity :]
