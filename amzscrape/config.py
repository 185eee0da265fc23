"""Settings module: constants and optional environment overrides."""

import os
from pathlib import Path
from urllib.parse import quote

from dotenv import load_dotenv

# .env lives in the project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# --- Amazon search ---
BASE_URL = "https://www.amazon.com"
SEARCH_URL_TEMPLATE = BASE_URL + "/s?k={keyword}"

SEARCH_KEYWORD = "laptop"
SEARCH_URL = SEARCH_URL_TEMPLATE.format(keyword=quote(SEARCH_KEYWORD, safe=""))

# --- User-Agent ---
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)
ACCEPT_LANGUAGE = "en-US,en;q=0.9"

# --- Request settings ---
# None keeps the requests default (no timeout)
_timeout = os.getenv("SCRAPER_REQUEST_TIMEOUT")
REQUEST_TIMEOUT: float | None = float(_timeout) if _timeout else None

# --- Report ---
# fixed cap; not configurable
MAX_RESULTS = 10
NOT_AVAILABLE = "N/A"
DEBUG_HTML_PATH = Path(os.getenv("SCRAPER_DEBUG_FILE", "amazon_debug.html"))

# --- Logs ---
LOG_DIR = Path(os.getenv("SCRAPER_LOG_DIR", str(_PROJECT_ROOT / "logs")))
