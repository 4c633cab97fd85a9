"""
Website Source

Fetches a public page with a browser-like User-Agent and reduces it to
plain text for the extraction prompt.
"""

import logging
from typing import Optional
from urllib.parse import urlparse

import requests

from ..common.text_utils import strip_html
from ..exceptions import InputValidationError, UpstreamConnectError

logger = logging.getLogger(__name__)

MAX_TEXT_CHARS = 10_000

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


def validate_url(url: str) -> str:
    """
    Validate a website URL.

    Returns:
        The stripped URL

    Raises:
        InputValidationError: Missing URL, non-http(s) scheme or no host
    """
    url = (url or "").strip()
    if not url:
        raise InputValidationError("Website URL is required", field="url")

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InputValidationError("Invalid URL format", field="url")

    return url


class WebPageSource:
    """
    Scrapes page text.

    Usage:
        with WebPageSource() as source:
            text = source.fetch_text("https://acme.example")
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: int = 30):
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})
        self.timeout = timeout

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def fetch_text(self, url: str, max_chars: int = MAX_TEXT_CHARS) -> str:
        """
        Fetch a page and return its visible text, truncated to max_chars.

        Raises:
            InputValidationError: Malformed URL
            UpstreamConnectError: Network failure or non-2xx response
        """
        url = validate_url(url)

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Website scraping error: %s", e)
            raise UpstreamConnectError(f"Failed to fetch website: {e}") from e

        if not response.ok:
            logger.error("Website returned HTTP %d: %s", response.status_code, url)
            raise UpstreamConnectError(
                f"Failed to fetch website: {response.status_code}",
                status_code=response.status_code,
            )

        text = strip_html(response.text)
        logger.info("Scraped %d characters from %s", len(text), url)

        return text[:max_chars]
