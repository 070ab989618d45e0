from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..datamodels import Story


class FetchError(Exception):
    """A search request that did not produce a page of stories."""


class ServerError(FetchError):
    """The request reached the API but it did not answer with a usable page."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(FetchError):
    """The request never completed (connection refused, timeout, ...)."""


class QueryClient(ABC):
    """Abstract base class for a paginated story search backend."""

    @abstractmethod
    def fetch(self, term: str, page: int) -> List[Story]:
        """Return the stories on ``page`` of the results for ``term``.

        Raises ``ServerError`` or ``NetworkError``; never retries.
        """
        pass
