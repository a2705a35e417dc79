"""Global configuration and constants for the season data pipeline."""

from __future__ import annotations

import os
from typing import Final

DEFAULT_USER_AGENT: Final = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/115.0 Safari/537.36"
)
DEFAULT_TIMEOUT: Final = 15  # seconds
# Fetch failures surface to the caller; retries are opt-in per fetcher.
DEFAULT_FETCH_RETRIES: Final = 0
DEFAULT_BACKOFF_FACTOR: Final = 0.6
DATA_DIR: Final = os.environ.get("TTLEAGUE_DATA_DIR", "data")
CACHE_DB_PATH: Final = os.environ.get(
    "TTLEAGUE_CACHE_DB", os.path.join(DATA_DIR, "swr_cache.sqlite3")
)
CONFIG_PATH: Final = os.environ.get("TTLEAGUE_CONFIG", os.path.join("config", "local.env.json"))

# Alternate access path returning the same content as the league website.
CORS_PROXY_URL_TEMPLATE: Final = os.environ.get(
    "TTLEAGUE_CORS_PROXY", "https://api.allorigins.win/raw?url={url}"
)

HOUR_MS: Final = 60 * 60 * 1000
FIXTURES_FRESH_DURATION_MS: Final = 72 * HOUR_MS
FIXTURES_STALE_DURATION_MS: Final = 2 * FIXTURES_FRESH_DURATION_MS

CACHE_KEY_PREFIX: Final = "cache_"
