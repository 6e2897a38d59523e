"""
Feed fetcher — downloads the published price sheet and parses it.

fetch_feed_text() raises FeedRetrievalError when the sheet cannot be
downloaded.  load_catalog() is the entry point used by the UI: it never
raises for retrieval problems, it returns an empty catalog plus the error
text so the UI decides whether to keep showing the previous catalog.

Public API:
    fetch_feed_text(url, timeout) → str
    load_catalog(url, layout, timeout) → CatalogLoadResult
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime

import requests

from config.feed_layout import SEGMENT_LAYOUT, FeedLayout
from config.feed_source import (
    CACHE_BUSTER_PARAM,
    FEED_ENCODING,
    FEED_TIMEOUT_SECONDS,
    FEED_URL,
)
from processing.catalog_parser import parse_feed
from processing.record_assembler import Item

logger = logging.getLogger(__name__)


class FeedRetrievalError(Exception):
    """The price feed could not be downloaded."""


# ═══════════════════════════════════════════════════════════════════════════
# Data classes
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class CatalogLoadResult:
    """Output of load_catalog()."""

    items: list[Item] = field(default_factory=list)
    loaded_at: datetime | None = None
    skipped_rows: list[dict] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def fetch_feed_text(
    url: str = FEED_URL,
    timeout: float = FEED_TIMEOUT_SECONDS,
) -> str:
    """
    Download the feed as text, bypassing caches.

    Args:
        url: Published CSV URL.
        timeout: Request timeout in seconds.

    Returns:
        The response body decoded as UTF-8.

    Raises:
        FeedRetrievalError: On connection problems, timeouts or non-2xx status.
    """
    params = {CACHE_BUSTER_PARAM: str(int(time.time() * 1000))}

    try:
        response = requests.get(url, params=params, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise FeedRetrievalError(f"Could not download price feed: {exc}") from exc

    response.encoding = FEED_ENCODING
    logger.info(f"Downloaded price feed ({len(response.text)} characters)")
    return response.text


def load_catalog(
    url: str = FEED_URL,
    layout: FeedLayout = SEGMENT_LAYOUT,
    timeout: float = FEED_TIMEOUT_SECONDS,
) -> CatalogLoadResult:
    """
    Download and parse the feed in one step.

    Returns:
        CatalogLoadResult.  On retrieval failure the items list is empty and
        error holds the reason; loaded_at is set either way.
    """
    result = CatalogLoadResult()

    try:
        feed_text = fetch_feed_text(url, timeout=timeout)
    except FeedRetrievalError as exc:
        logger.error(str(exc))
        result.error = str(exc)
        result.loaded_at = datetime.now()
        return result

    parsed = parse_feed(feed_text, layout)
    result.items = parsed.items
    result.skipped_rows = parsed.skipped_rows
    result.loaded_at = datetime.now()
    return result
