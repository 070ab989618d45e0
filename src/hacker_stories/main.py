#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .app import HackerStoriesApp
from .config import load_config, setup_logging

logger = logging.getLogger("hacker_stories")


# --- Entrypoint ---
def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Hacker Stories search client")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--term", type=str, help="Search for this term on start")
    parser.add_argument("--theme", type=str, help="Set theme for this run")
    args = parser.parse_args(argv)

    debug_path = setup_logging(args.debug)
    if debug_path:
        print(f"Debug logging enabled: {debug_path}", file=sys.stderr)

    config = load_config()
    theme_name = args.theme or config.get("theme")
    logger.info("Using theme: %s", theme_name)

    try:
        app = HackerStoriesApp(config=config, term=args.term, theme=theme_name)
        app.run()
    except Exception as e:
        logger.exception("Application crashed: %s", e)
        print(f"Application crashed: {e}", file=sys.stderr)


if __name__ == "__main__":
    main()
