"""Data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProductDetail:
    """Fields taken from a product detail page."""

    rating_text: str  # e.g. "4.6 out of 5 stars"
    review_count: str  # e.g. "12,345 ratings"


@dataclass
class SearchResult:
    """One printed line of the report."""

    rank: int  # 1-based, capped at MAX_RESULTS
    title: str
    price: str
    link: str
    detail: ProductDetail | None = None  # None = not fetched or failed
    detail_error: str | None = None
