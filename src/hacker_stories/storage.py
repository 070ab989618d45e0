from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from .config import STORAGE_PATH

logger = logging.getLogger("hacker_stories")


class LocalStorage:
    """A small durable key/value store kept as a single JSON object on disk."""

    def __init__(self, path: str = STORAGE_PATH):
        self.path = path

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (IOError, json.JSONDecodeError) as e:
            logger.warning("Failed to read storage file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: expected a JSON object", self.path)
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(data, f)
            logger.debug("Stored %s=%r", key, value)
        except IOError as e:
            logger.warning("Failed to write storage file %s: %s", self.path, e)
