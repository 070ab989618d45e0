from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from .datamodels import Story


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


SORT_KEYS: Dict[str, Callable[[Story], Any]] = {
    "title": lambda s: s.title,
    "author": lambda s: s.author,
    "num_comments": lambda s: s.num_comments,
    "points": lambda s: s.points,
}


@dataclass(frozen=True)
class SortState:
    column: Optional[str] = None
    direction: SortDirection = SortDirection.ASC

    def toggled(self, column: str) -> SortState:
        """Selecting the active column flips direction; a new column starts ascending."""
        if column not in SORT_KEYS:
            raise ValueError(f"Unknown sort column: {column}")
        if column == self.column and self.direction is SortDirection.ASC:
            return SortState(column, SortDirection.DESC)
        return SortState(column, SortDirection.ASC)


def sort_stories(
    stories: Iterable[Story],
    column: Optional[str],
    direction: SortDirection = SortDirection.ASC,
) -> List[Story]:
    if column is None:
        return list(stories)
    try:
        key = SORT_KEYS[column]
    except KeyError:
        raise ValueError(f"Unknown sort column: {column}") from None
    return sorted(stories, key=key, reverse=direction is SortDirection.DESC)
