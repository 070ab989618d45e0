from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

# --- Configuration ---
API_BASE_URL = "https://hn.algolia.com/api/v1"
HTTP_TIMEOUT = 15
DEFAULT_TERM = "React"
RECENT_SEARCHES_LIMIT = 5
SEARCH_STORAGE_KEY = "search"
ERROR_MESSAGE = "Something went wrong ..."
LOADING_MESSAGE = "Loading ..."

CONFIG_PATH = os.path.expanduser("~/.config/hacker-stories/config.json")
STORAGE_PATH = os.path.expanduser("~/.config/hacker-stories/storage.json")

REQUEST_HEADERS = {
    "User-Agent": "hacker-stories-tui/0.1 (+https://hn.algolia.com/api)",
    "Accept": "application/json",
}

DEFAULT_CONFIG: Dict[str, Any] = {
    "api_base_url": API_BASE_URL,
    "timeout": HTTP_TIMEOUT,
    "recent_searches": RECENT_SEARCHES_LIMIT,
    "default_term": DEFAULT_TERM,
    "theme": "textual-dark",
}

# --- Logging ---
logger = logging.getLogger("hacker_stories")


def setup_logging(debug: bool = False) -> Optional[str]:
    """Silence logging unless ``debug`` is set, then trace every search to a /tmp file.

    Returns the log file path in debug mode so the CLI can print it.
    """
    if not debug:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        return None

    stamp = f"{datetime.now():%Y%m%dT%H%M%S}_{os.getpid()}"
    debug_path = os.path.join("/tmp", f"hacker_stories_debug_{stamp}.log")
    logging.basicConfig(
        level=logging.DEBUG,
        filename=debug_path,
        filemode="a",
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    # Connection-pool chatter from requests would drown the per-page fetch lines.
    logging.getLogger("urllib3").setLevel(logging.INFO)

    logger.debug("Debug logging enabled to %s", debug_path)
    return debug_path


def ensure_config_file_exists(path: str = CONFIG_PATH) -> None:
    """Write the default config file if the user's config file is not found."""
    if not os.path.exists(path):
        logger.info("Config file not found at %s, creating default.", path)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "w") as f:
                json.dump(DEFAULT_CONFIG, f, indent=2)
        except OSError as e:
            logger.error("Failed to create default config file: %s", e)


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    """Load the main configuration file, filling unset keys from the defaults."""
    ensure_config_file_exists(path)
    try:
        with open(path, "r") as f:
            config = json.load(f)
        logger.info("Loaded config from %s", path)
    except (IOError, json.JSONDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        return dict(DEFAULT_CONFIG)
    if not isinstance(config, dict):
        logger.error("Ignoring config at %s: expected a JSON object", path)
        return dict(DEFAULT_CONFIG)
    return {**DEFAULT_CONFIG, **config}

