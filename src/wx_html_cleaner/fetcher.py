"""Fetch article HTML from a URL with retry logic."""

from __future__ import annotations

import logging

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from wx_html_cleaner.config import Settings

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when HTML fetching fails after all retries."""


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=2, min=4, max=30),
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.HTTPStatusError)),
    reraise=True,
)
def _get(url: str, settings: Settings) -> str:
    with httpx.Client(timeout=settings.fetch_timeout, follow_redirects=True) as client:
        response = client.get(url, headers={"User-Agent": settings.user_agent})
        response.raise_for_status()
        logger.info("Fetched %d bytes from %s", len(response.text), url)
        return response.text


def fetch_html(url: str, settings: Settings) -> str:
    """Download the page at ``url``. Timeouts and HTTP errors are retried."""
    try:
        return _get(url, settings)
    except Exception as exc:
        logger.error("Fetch failed for %s: %s", url, exc)
        raise FetchError(f"Failed to fetch {url}: {exc}") from exc
