"""Amazon search-results scraping module.

Extraction strategy:
  Each field is tried against an ordered chain of CSS selectors and the
  first usable match wins. Titles fall back to the product image's alt
  text; relative links are resolved against the Amazon origin.
"""

from __future__ import annotations

import logging
from pathlib import Path

import requests
from bs4 import BeautifulSoup, Tag

from amzscrape.config import (
    ACCEPT_LANGUAGE,
    BASE_URL,
    DEBUG_HTML_PATH,
    NOT_AVAILABLE,
    REQUEST_TIMEOUT,
    SEARCH_URL,
    USER_AGENT,
)
from amzscrape.models import ProductDetail

logger = logging.getLogger(__name__)

# One search result card
CARD_SELECTOR = 'div[data-component-type="s-search-result"]'

TITLE_SELECTORS = (
    "h2 a span",
    "a.a-link-normal.s-line-clamp-2 span",
    "span.a-size-base-plus.a-color-base.a-text-normal",
    "span.a-size-medium.a-color-base.a-text-normal",
)
IMAGE_ALT_SELECTOR = "img.s-image"

LINK_SELECTORS = (
    "h2 a",
    "a.a-link-normal.s-no-outline",
    'a.a-link-normal[href*="/dp/"]',
)

# Full price string such as "$563.68"
PRICE_SELECTOR = "span.a-price span.a-offscreen"

RATING_SELECTOR = "span.a-icon-alt"
REVIEW_COUNT_SELECTOR = "#acrCustomerReviewText"


class FetchError(Exception):
    """A page could not be fetched."""

    def __init__(self, url: str, cause: Exception):
        super().__init__(f"request failed: {url} ({cause})")
        self.url = url
        self.cause = cause


def clean_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return " ".join(text.split())


def _select_text(root: Tag, selector: str) -> str | None:
    el = root.select_one(selector)
    if el is None:
        return None
    return clean_text(el.get_text())


def build_session(user_agent: str = USER_AGENT) -> requests.Session:
    """HTTP session shared by the listing and detail requests."""
    session = requests.Session()
    session.headers["User-Agent"] = user_agent
    return session


def fetch_search_page(session: requests.Session, url: str = SEARCH_URL) -> requests.Response:
    """Fetch the search-results page.

    The status code is not checked; Amazon often answers with a degraded
    page, which still has to be dumped for inspection.

    Raises:
        FetchError: the request failed.
    """
    logger.info("Fetching search page: %s", url)
    try:
        resp = session.get(
            url,
            headers={"Accept-Language": ACCEPT_LANGUAGE},
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        raise FetchError(url, e) from e
    return resp


def save_debug_html(html: str, path: Path = DEBUG_HTML_PATH) -> bool:
    """Write the raw listing page to disk. Failures are ignored."""
    try:
        Path(path).write_text(html, encoding="utf-8")
    except OSError as e:
        logger.debug("Could not write debug file %s: %s", path, e)
        return False
    logger.debug("Saved raw listing page to %s", path)
    return True


def parse_search_cards(html: str) -> list[Tag]:
    """Return every search result card in document order."""
    soup = BeautifulSoup(html, "html.parser")
    return soup.select(CARD_SELECTOR)


def extract_title(
    card: Tag,
    title_selectors: tuple[str, ...] = TITLE_SELECTORS,
    image_selector: str = IMAGE_ALT_SELECTOR,
) -> str | None:
    """Extract the product title from a card.

    The selector chain is tried first; the image alt text is used only when
    none of them yields text.

    Returns:
        The title, or None when the card has no usable title.
    """
    for selector in title_selectors:
        text = _select_text(card, selector)
        if text:
            return text

    img = card.select_one(image_selector)
    if img is not None:
        alt = img.get("alt")
        if alt is not None:
            text = clean_text(alt)
            if text:
                return text
    return None


def extract_link(card: Tag, link_selectors: tuple[str, ...] = LINK_SELECTORS) -> str | None:
    """Extract the product link from a card.

    The first selector whose first match carries an href wins. Relative
    hrefs are prefixed with the Amazon origin.
    """
    for selector in link_selectors:
        a = card.select_one(selector)
        if a is None:
            continue
        href = a.get("href")
        if href is None:
            continue
        if href.startswith("http"):
            return href
        return BASE_URL + href
    return None


def extract_price(card: Tag, price_selector: str = PRICE_SELECTOR) -> str:
    text = _select_text(card, price_selector)
    return NOT_AVAILABLE if text is None else text


def parse_detail(html: str) -> ProductDetail:
    """Pull rating and review-count text out of a product detail page."""
    soup = BeautifulSoup(html, "html.parser")
    rating_text = _select_text(soup, RATING_SELECTOR)
    review_count = _select_text(soup, REVIEW_COUNT_SELECTOR)
    return ProductDetail(
        rating_text=NOT_AVAILABLE if rating_text is None else rating_text,
        review_count=NOT_AVAILABLE if review_count is None else review_count,
    )


def fetch_detail(session: requests.Session, url: str) -> ProductDetail:
    """Fetch a product detail page and parse it.

    Args:
        session: shared HTTP session
        url: product URL (the "N/A" sentinel fails as an invalid URL)

    Raises:
        FetchError: the request failed.
    """
    try:
        resp = session.get(
            url,
            headers={"Accept-Language": ACCEPT_LANGUAGE},
            timeout=REQUEST_TIMEOUT,
        )
        body = resp.text
    except requests.RequestException as e:
        raise FetchError(url, e) from e
    return parse_detail(body)
