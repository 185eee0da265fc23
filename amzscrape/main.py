"""Amazon search scraper: main entry point.

Flow:
  1. Fetch the search-results page
  2. Dump the raw body to the debug file
  3. Walk the result cards, skipping cards without a title
  4. Fetch the detail page (rating, review count) for each shown card
  5. Stop once MAX_RESULTS cards have been shown
"""

from __future__ import annotations

import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import TextIO

import requests

from amzscrape.config import DEBUG_HTML_PATH, LOG_DIR, MAX_RESULTS, NOT_AVAILABLE, SEARCH_URL
from amzscrape.models import SearchResult
from amzscrape.scraper import (
    FetchError,
    build_session,
    extract_link,
    extract_price,
    extract_title,
    fetch_detail,
    fetch_search_page,
    parse_search_cards,
    save_debug_html,
)

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Initial logging setup."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / f"scraper_{datetime.now().strftime('%Y%m%d')}.log"
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            # stdout carries the report
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )


def run(
    session: requests.Session,
    *,
    url: str = SEARCH_URL,
    debug_path: Path = DEBUG_HTML_PATH,
    max_results: int = MAX_RESULTS,
    out: TextIO | None = None,
) -> list[SearchResult]:
    """Scrape one search page and print the numbered report.

    Raises:
        FetchError: the search page itself could not be fetched.
    """
    if out is None:
        out = sys.stdout

    def emit(line: str = "") -> None:
        print(line, file=out)

    start_time = time.time()

    resp = fetch_search_page(session, url)
    emit(f"Status: {resp.status_code} {resp.reason}")
    emit(f"Final URL: {resp.url}")

    html = resp.text
    save_debug_html(html, debug_path)

    cards = parse_search_cards(html)
    logger.info("Found %d result cards", len(cards))

    emit("\n📦 Amazon Search Results (skip cards without title):\n")

    results: list[SearchResult] = []
    detail_errors = 0
    for position, card in enumerate(cards, start=1):
        title = extract_title(card)
        if title is None:
            logger.debug("Skipping card %d: no title", position)
            continue

        price = extract_price(card)
        link = extract_link(card) or NOT_AVAILABLE

        result = SearchResult(rank=len(results) + 1, title=title, price=price, link=link)
        results.append(result)
        emit(f"{result.rank:02d}. {title} — {price}")
        emit(f"    {link}")

        # the card at the cap is printed without its detail page
        if result.rank >= max_results:
            break

        try:
            result.detail = fetch_detail(session, link)
        except FetchError as e:
            detail_errors += 1
            result.detail_error = str(e)
            logger.warning("Detail fetch failed: %s", e)
            emit(f"    detail fetch failed: {e}")
            continue

        emit(f"    rating: {result.detail.rating_text}")
        emit(f"    reviews: {result.detail.review_count}")

    if not results:
        emit(
            f"No titled cards found. Open {debug_path} and inspect a result card "
            "to update selectors."
        )

    elapsed = time.time() - start_time
    logger.info(
        "Shown: %d, detail errors: %d, elapsed: %.1f s",
        len(results), detail_errors, elapsed,
    )
    return results


def main() -> None:
    """Command-line entry point."""
    setup_logging()
    with build_session() as session:
        try:
            run(session)
        except FetchError as e:
            logger.error("Search page fetch failed: %s", e)
            sys.exit(1)


if __name__ == "__main__":
    main()
