"""
Shopify API Client

Client for the Shopify Admin REST API and the Storefront GraphQL API used
to read a vendor catalog: shop info, paginated products, locations and
inventory levels, and Storefront brand assets.
"""

import logging
import threading
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urljoin

import requests

logger = logging.getLogger(__name__)


def _retry_after_seconds(value: Optional[str], attempt: int) -> int:
    """
    Seconds to wait before retrying a throttled request.

    Retry-After may be a number of seconds or an HTTP date. Missing or
    unparseable values fall back to exponential backoff.
    """
    fallback = 2 ** attempt
    if not value:
        return fallback
    try:
        return max(0, int(float(value)))
    except (ValueError, OverflowError):
        pass
    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return fallback
    if retry_at is None:
        return fallback
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)
    return max(0, int((retry_at - datetime.now(timezone.utc)).total_seconds()))


class ShopifyAPIClient:
    """
    Read client for a vendor's Shopify store.

    Handles:
    - Authentication (Admin token, Storefront token for brand queries)
    - Rate limiting (2 requests/second, shared across worker threads)
    - HTTP 429 throttling via Retry-After (other failures are not retried)
    - REST pagination through the Link header

    Usage:
        client = ShopifyAPIClient(shop="my-store", access_token="shpat_xxx")

        # REST request
        result = client.rest_request("GET", "shop.json")

        # Paginated REST request
        page, link = client.rest_get_page("products.json", {"limit": 50})

        # Storefront GraphQL request
        data = client.storefront_request(query, storefront_token)
    """

    API_VERSION = "2025-01"
    STOREFRONT_API_VERSION = "2024-04"
    MAX_THROTTLE_RETRIES = 5

    def __init__(self, shop: str, access_token: str):
        """
        Initialize the API client.

        Args:
            shop: Shop name (without .myshopify.com) or full domain/URL
            access_token: Shopify Admin API access token
        """
        self.shop = self.normalize_shop(shop)
        self.access_token = access_token
        self.shop_url = f"https://{self.shop}.myshopify.com"
        self.base_url = f"{self.shop_url}/admin/api/{self.API_VERSION}"
        self.storefront_url = f"{self.shop_url}/api/{self.STOREFRONT_API_VERSION}/graphql.json"

        self.session = requests.Session()
        self.session.headers.update({
            "X-Shopify-Access-Token": access_token,
            "Content-Type": "application/json",
        })

        # Rate limiting
        self.last_request_time = 0.0
        self.min_request_interval = 0.5  # 2 req/sec
        self._rate_lock = threading.Lock()

        # Status of the most recent failed call, for error reporting
        self.last_status_code: Optional[int] = None
        self.last_error = ""

    @staticmethod
    def normalize_shop(shop: str) -> str:
        """
        Reduce a store URL or domain to the bare shop name.

        Example:
            >>> ShopifyAPIClient.normalize_shop("https://acme.myshopify.com/admin")
            'acme'
        """
        shop = (shop or "").strip().replace("https://", "").replace("http://", "")
        if ".myshopify.com" in shop:
            return shop.split(".myshopify.com")[0]
        return shop.strip("/")

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _rate_limit(self):
        """Implement rate limiting (2 requests/second max)."""
        with self._rate_lock:
            now = time.time()
            elapsed = now - self.last_request_time

            if elapsed < self.min_request_interval:
                time.sleep(self.min_request_interval - elapsed)

            self.last_request_time = time.time()

    def _send(
        self,
        method: str,
        url: str,
        data: Optional[Dict] = None,
        params: Optional[Dict] = None,
        headers: Optional[Dict] = None,
        timeout: int = 30,
    ) -> Optional[requests.Response]:
        """
        Send one request, waiting out HTTP 429 throttling.

        Returns:
            The final response (any status) or None on network failure
        """
        for attempt in range(self.MAX_THROTTLE_RETRIES):
            self._rate_limit()

            try:
                if method == "GET":
                    response = self.session.get(url, params=params, headers=headers, timeout=timeout)
                elif method == "POST":
                    response = self.session.post(url, json=data, headers=headers, timeout=timeout)
                else:
                    raise ValueError(f"Unsupported method: {method}")
            except requests.exceptions.Timeout:
                logger.error("Request timeout: %s", url)
                self.last_status_code, self.last_error = None, "timeout"
                return None
            except requests.exceptions.RequestException as e:
                logger.error("Request failed: %s", e)
                self.last_status_code, self.last_error = None, str(e)
                return None

            if response.status_code == 429:
                retry_after = _retry_after_seconds(response.headers.get("Retry-After"), attempt)
                logger.warning("HTTP 429 on %s, retry %d/%d in %ds...",
                               url, attempt + 1, self.MAX_THROTTLE_RETRIES, retry_after)
                time.sleep(retry_after)
                continue

            if response.status_code >= 400:
                self.last_status_code = response.status_code
                self.last_error = response.text[:200]
                logger.error("API Error %d: %s", response.status_code, self.last_error)

            return response

        logger.error("Throttled %d times on %s %s, giving up", self.MAX_THROTTLE_RETRIES, method, url)
        self.last_status_code, self.last_error = 429, "throttled"
        return None

    def _decode_json(self, response: requests.Response) -> Optional[Any]:
        """Parse a 2xx body; a non-JSON body (e.g. a maintenance page) counts as a failed call."""
        try:
            return response.json()
        except ValueError as e:
            logger.warning("Invalid JSON from %s: %s", response.url, e)
            self.last_error = "invalid JSON response"
            return None

    def rest_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict] = None,
        params: Optional[Dict] = None,
        timeout: int = 30
    ) -> Optional[Dict]:
        """
        Make Admin REST API request with rate limiting and error handling.

        Args:
            method: HTTP method (GET, POST)
            endpoint: API endpoint (e.g., "products.json")
            data: Request body for POST
            params: Query string parameters
            timeout: Request timeout in seconds

        Returns:
            Response JSON or None on error
        """
        url = urljoin(self.base_url + "/", endpoint)
        response = self._send(method, url, data=data, params=params, timeout=timeout)
        if response is None or response.status_code >= 400:
            return None
        return self._decode_json(response)

    def rest_get_page(
        self,
        endpoint: str,
        params: Optional[Dict] = None,
        timeout: int = 30
    ) -> Tuple[Optional[Dict], str]:
        """
        GET one page of a cursor-paginated REST resource.

        Args:
            endpoint: API endpoint (e.g., "products.json")
            params: Query string parameters (limit, page_info)
            timeout: Request timeout in seconds

        Returns:
            (response JSON or None on error, raw Link header or "")
        """
        url = urljoin(self.base_url + "/", endpoint)
        response = self._send("GET", url, params=params, timeout=timeout)
        if response is None or response.status_code >= 400:
            return None, ""
        result = self._decode_json(response)
        if result is None:
            return None, ""
        return result, response.headers.get("Link", "") or ""

    def storefront_request(
        self,
        query: str,
        storefront_token: str,
        variables: Optional[Dict] = None,
        timeout: int = 30
    ) -> Optional[Dict]:
        """
        Make Storefront GraphQL API request with a storefront access token.

        The Admin token header is replaced, not sent alongside.

        Returns:
            Response data (without 'data' wrapper) or None on error
        """
        headers = {
            "X-Shopify-Access-Token": None,
            "X-Shopify-Storefront-Access-Token": storefront_token,
        }
        return self._graphql(self.storefront_url, query, variables, headers, timeout)

    def _graphql(
        self,
        url: str,
        query: str,
        variables: Optional[Dict],
        headers: Optional[Dict],
        timeout: int,
    ) -> Optional[Dict]:
        payload = {"query": query, "variables": variables or {}}

        response = self._send("POST", url, data=payload, headers=headers, timeout=timeout)
        if response is None or response.status_code >= 400:
            return None

        result = self._decode_json(response)
        if not isinstance(result, dict):
            return None

        # Check for GraphQL errors
        if result.get("errors"):
            logger.error("GraphQL Errors: %s", result['errors'])
            return None

        return result.get("data")

    def get_shop(self) -> Optional[Dict]:
        """
        Fetch shop info (also serves as the connectivity check).

        Returns:
            The 'shop' object or None if the store is unreachable or the
            token is rejected
        """
        result = self.rest_request("GET", "shop.json")
        if result and "shop" in result:
            logger.info("Connected to: %s", result["shop"].get("name", "Unknown"))
            return result["shop"]
        return None

